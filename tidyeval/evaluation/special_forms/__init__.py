"""Registry of special forms for the tidyeval evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table to dispatch special forms before looking the
head up as a function. Handlers take (args, ctx, evaluate_fn).
"""

from tidyeval.types.symbol import Symbol
from tidyeval.evaluation.special_forms.assign_form import assign_form
from tidyeval.evaluation.special_forms.capture_forms import enquo_form, enquos_form
from tidyeval.evaluation.special_forms.function_form import function_form
from tidyeval.evaluation.special_forms.if_form import if_form
from tidyeval.evaluation.special_forms.progn_form import progn_form
from tidyeval.evaluation.special_forms.quote_forms import quo_form, quote_form
from tidyeval.evaluation.special_forms.subset_forms import dollar_form, subset_form, subset2_form

SPECIAL_FORMS = {
    Symbol("<-"): assign_form,
    Symbol("{"): progn_form,
    Symbol("function"): function_form,
    Symbol("if"): if_form,
    Symbol("quote"): quote_form,
    Symbol("quo"): quo_form,
    Symbol("enquo"): enquo_form,
    Symbol("enquos"): enquos_form,
    Symbol("$"): dollar_form,
    Symbol("["): subset_form,
    Symbol("[["): subset2_form,
}
