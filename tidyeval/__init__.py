# Core type aliases for tidyeval's data model.
# Expressions are trees of Literal / Symbol / Call nodes (tidyeval.types.expression);
# runtime values are plain Python objects, numpy arrays for data columns, plus the
# first-class Quosure and Pronoun values.
#
# Naming guidance:
# - Value: use in evaluator/runtime code to denote evaluated values.
# - EvaluatorFn: the evaluator function threaded through special forms and apply.

from typing import Any, Callable

# Runtime value alias
Value = Any

# Evaluator function type: (expression_or_quosure, EvalContext) -> Value
EvaluatorFn = Callable[..., Value]

# Public API (imported after the aliases above, which submodules depend on)
from tidyeval.errors import (  # noqa: E402
    TidyError,
    TidyInvalidSymbol,
    TidyLookupError,
    DataPronounError,
    EnvPronounError,
    NoMaskError,
    MaskShapeError,
    TidyArityError,
    TidyTypeError,
    TidyRecursionError,
)
from tidyeval.types.symbol import Symbol  # noqa: E402
from tidyeval.types.expression import Arg, Call, Literal, as_expression, call, embed  # noqa: E402
from tidyeval.types.environment import Environment, LookupMode  # noqa: E402
from tidyeval.types.quosure import (  # noqa: E402
    Quosure,
    new_quosure,
    get_expr,
    get_env,
    quo_set_expr,
    quo_is_symbol,
    quo_is_call,
)
from tidyeval.types.pronoun import Pronoun, PronounKind, pronoun_get, as_data_pronoun  # noqa: E402
from tidyeval.types.dots import DotsEntry, DotsList  # noqa: E402
from tidyeval.data_mask import DataMask, MaskFrame, build_data_mask  # noqa: E402
from tidyeval.evaluation.evaluator import eval_bare  # noqa: E402
from tidyeval.evaluation.tidy import eval_tidy  # noqa: E402
from tidyeval.capture import (  # noqa: E402
    quoting_function,
    capture_dots,
    capture_current_arg,
    quos,
    as_label,
    quos_auto_name,
)
from tidyeval.runtime_context import get_global_env, set_global_env, new_base_env  # noqa: E402
from tidyeval.verbs import filter_rows, mutate, summarise  # noqa: E402
