from tidyeval import EvaluatorFn
from tidyeval import Value
from tidyeval.errors import TidyArityError, TidyInvalidSymbol
from tidyeval.types.expression import Arg, Literal
from tidyeval.types.symbol import Symbol


def assign_form(tail: tuple[Arg, ...], ctx, evaluate_fn: EvaluatorFn) -> Value:
    """
    name <- value
    Binds in the current frame. Under a data mask the binding lands in the
    environment beneath the mask; the mask frame itself is never written.
    """
    if len(tail) != 2:
        raise TidyArityError("<- requires exactly 2 arguments")
    target, val_expr = tail[0].expr, tail[1].expr
    if isinstance(target, Literal) and isinstance(target.value, str):
        target = Symbol(target.value)
    if not isinstance(target, Symbol):
        raise TidyInvalidSymbol(f"Invalid assignment target {target}")
    value = evaluate_fn(val_expr, ctx)
    ctx.assign_env.define(target, value)
    return value
