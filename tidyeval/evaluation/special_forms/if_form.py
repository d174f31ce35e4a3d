import numpy as np

from tidyeval import EvaluatorFn
from tidyeval import Value
from tidyeval.errors import TidyArityError, TidyTypeError
from tidyeval.types.expression import Arg


def as_flag(value: Value) -> bool:
    """Coerce a condition to one boolean; vectors must have exactly one element."""
    if value is None:
        raise TidyTypeError("Condition has length zero")
    if isinstance(value, (np.ndarray, list, tuple)):
        arr = np.asarray(value)
        if arr.size != 1:
            raise TidyTypeError(f"Condition has length {arr.size}, expected 1")
        value = arr.reshape(-1)[0]
    return bool(value)


def if_form(tail: tuple[Arg, ...], ctx, evaluate_fn: EvaluatorFn) -> Value:
    """if(cond, then, else?)"""
    if len(tail) not in (2, 3):
        raise TidyArityError("if requires a condition, a consequent and an optional alternative")
    if as_flag(evaluate_fn(tail[0].expr, ctx)):
        return evaluate_fn(tail[1].expr, ctx)
    if len(tail) == 3:
        return evaluate_fn(tail[2].expr, ctx)
    return None
