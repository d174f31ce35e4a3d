from tidyeval import EvaluatorFn
from tidyeval import Value
from tidyeval.capture import capture_current_arg, capture_dots
from tidyeval.errors import TidyArityError, TidyInvalidSymbol
from tidyeval.types.expression import Arg
from tidyeval.types.symbol import DOTS, Symbol


def enquo_form(tail: tuple[Arg, ...], ctx, evaluate_fn: EvaluatorFn) -> Value:
    """enquo(arg): the quosure supplied for a quoted formal of the current function."""
    if len(tail) != 1 or tail[0].name is not None:
        raise TidyArityError("enquo expects exactly 1 argument")
    name = tail[0].expr
    if not isinstance(name, Symbol):
        raise TidyInvalidSymbol(f"enquo expects an argument name, got {name}")
    return capture_current_arg(ctx.frame, name.id)


def enquos_form(tail: tuple[Arg, ...], ctx, evaluate_fn: EvaluatorFn) -> Value:
    """enquos(...): the current function's variadic arguments as quosures."""
    if tail and (len(tail) != 1 or tail[0].expr != DOTS):
        raise TidyArityError("enquos only accepts `...`")
    return capture_dots(ctx.frame)
