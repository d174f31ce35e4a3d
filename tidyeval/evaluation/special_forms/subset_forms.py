from collections.abc import Mapping

from tidyeval import EvaluatorFn
from tidyeval import Value
from tidyeval.errors import TidyArityError, TidyLookupError, TidyTypeError
from tidyeval.types.expression import Arg, Literal
from tidyeval.types.pronoun import Pronoun, pronoun_get
from tidyeval.types.symbol import Symbol


def _operands(tail: tuple[Arg, ...], form: str) -> tuple:
    if len(tail) != 2 or any(a.name is not None for a in tail):
        raise TidyArityError(f"{form} expects an object and a key")
    return tail[0].expr, tail[1].expr


def dollar_form(tail: tuple[Arg, ...], ctx, evaluate_fn: EvaluatorFn) -> Value:
    """obj$key: the key is taken by name and never evaluated."""
    obj_expr, key_expr = _operands(tail, "$")
    if isinstance(key_expr, Symbol):
        key = key_expr.id
    elif isinstance(key_expr, Literal) and isinstance(key_expr.value, str):
        key = key_expr.value
    else:
        raise TidyTypeError(f"Invalid key for `$`: {key_expr}")
    obj = evaluate_fn(obj_expr, ctx)
    if isinstance(obj, Pronoun):
        return pronoun_get(obj, key)
    if isinstance(obj, Mapping):
        if key not in obj:
            raise TidyLookupError(f"Key `{key}` not found", key)
        return obj[key]
    try:
        return getattr(obj, key)
    except AttributeError as exc:
        raise TidyLookupError(f"{type(obj).__name__} has no attribute `{key}`", key) from exc


def _subset(tail: tuple[Arg, ...], ctx, evaluate_fn: EvaluatorFn, form: str) -> Value:
    obj_expr, key_expr = _operands(tail, form)
    obj = evaluate_fn(obj_expr, ctx)
    key = evaluate_fn(key_expr, ctx)
    if isinstance(obj, Pronoun):
        return pronoun_get(obj, key)
    try:
        return obj[key]
    except (KeyError, IndexError) as exc:
        raise TidyLookupError(f"Subscript `{key}` out of bounds", str(key)) from exc
    except TypeError as exc:
        raise TidyTypeError(f"Cannot subset {type(obj).__name__} with {key!r}") from exc


def subset_form(tail: tuple[Arg, ...], ctx, evaluate_fn: EvaluatorFn) -> Value:
    """obj[key]: the key is evaluated first; a pronoun takes one string key."""
    return _subset(tail, ctx, evaluate_fn, "[")


def subset2_form(tail: tuple[Arg, ...], ctx, evaluate_fn: EvaluatorFn) -> Value:
    """obj[[key]]: the key is evaluated first."""
    return _subset(tail, ctx, evaluate_fn, "[[")
