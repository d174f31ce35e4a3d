from tidyeval import EvaluatorFn
from tidyeval import Value
from tidyeval.errors import TidyArityError
from tidyeval.types.expression import Arg
from tidyeval.types.quosure import Quosure


def _single_operand(tail: tuple[Arg, ...], form: str):
    if len(tail) != 1 or tail[0].name is not None:
        raise TidyArityError(f"{form} expects exactly 1 unnamed argument")
    return tail[0].expr


def quote_form(tail: tuple[Arg, ...], ctx, evaluate_fn: EvaluatorFn) -> Value:
    return _single_operand(tail, "quote")


def quo_form(tail: tuple[Arg, ...], ctx, evaluate_fn: EvaluatorFn) -> Value:
    """quo(expr): capture `expr` together with the current environment."""
    return Quosure(_single_operand(tail, "quo"), ctx.env)
