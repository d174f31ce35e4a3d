"""Built-in functions for the tidyeval base environment.

This module defines arithmetic, comparison, logical and vector helpers
exposed to expressions, plus the registration utility that installs them.
Operators work element-wise on numpy columns and on scalars alike.
"""
from __future__ import annotations

import operator
from functools import reduce

import numpy as np

from tidyeval import Value
from tidyeval.errors import TidyArityError, TidyTypeError
from tidyeval.evaluation.tidy import eval_tidy
from tidyeval.types.environment import Environment
from tidyeval.types.symbol import Symbol
from tidyeval.verbs import filter_verb, mutate_verb, summarise_verb


def _fold(name: str, op, args: tuple) -> Value:
    try:
        return reduce(op, args)
    except TypeError as exc:
        raise TidyTypeError(f"Non-numeric argument to `{name}`") from exc


# -------------------------------
# Arithmetic
# -------------------------------
def add(*args: Value) -> Value:
    """Return the sum of all arguments; unary + returns its argument."""
    if not args:
        raise TidyArityError("+ requires at least 1 argument")
    return _fold("+", operator.add, args)


def sub(*args: Value) -> Value:
    """Subtract all subsequent values from the first; unary negation for one arg."""
    if not args:
        raise TidyArityError("- requires at least 1 argument")
    if len(args) == 1:
        try:
            return -args[0]
        except TypeError as exc:
            raise TidyTypeError("Non-numeric argument to `-`") from exc
    return _fold("-", operator.sub, args)


def mul(*args: Value) -> Value:
    """Return the product of all arguments."""
    if not args:
        raise TidyArityError("* requires at least 1 argument")
    return _fold("*", operator.mul, args)


def div(a: Value, b: Value) -> Value:
    """True division; division by zero follows numpy (inf / nan) for columns."""
    try:
        if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
            with np.errstate(divide="ignore", invalid="ignore"):
                return np.true_divide(a, b)
        return a / b
    except TypeError as exc:
        raise TidyTypeError("Non-numeric argument to `/`") from exc


def power(a: Value, b: Value) -> Value:
    return _fold("^", operator.pow, (a, b))


def mod(a: Value, b: Value) -> Value:
    return _fold("%%", operator.mod, (a, b))


# -------------------------------
# Comparison and logic
# -------------------------------
def _compare(name: str, op):
    def compare(a: Value, b: Value) -> Value:
        try:
            return op(a, b)
        except TypeError as exc:
            raise TidyTypeError(f"Cannot compare with `{name}`") from exc
    compare.__name__ = name
    return compare


def logical_and(a: Value, b: Value) -> Value:
    return np.logical_and(a, b)


def logical_or(a: Value, b: Value) -> Value:
    return np.logical_or(a, b)


def logical_not(a: Value) -> Value:
    return np.logical_not(a)


# -------------------------------
# Vectors
# -------------------------------
def combine(*args: Value) -> np.ndarray:
    """c(...): concatenate scalars and vectors into one numpy vector."""
    if not args:
        return np.array([])
    return np.concatenate([np.atleast_1d(np.asarray(a)) for a in args])


def length(x: Value) -> int:
    if x is None:
        return 0
    if isinstance(x, (str, bytes)):
        return 1
    try:
        return len(x)
    except TypeError:
        return 1


def _reducer(name: str, fn):
    def reduce_vector(x: Value, na_rm: bool = False) -> Value:
        arr = np.asarray(x)
        if arr.dtype.kind not in "biuf":
            raise TidyTypeError(f"`{name}` needs a numeric or logical vector")
        if na_rm and arr.dtype.kind == "f":
            arr = arr[~np.isnan(arr)]
        return fn(arr).item()
    reduce_vector.__name__ = name
    return reduce_vector


def paste(*args: Value, sep: str = " ") -> Value:
    """Element-wise string concatenation with recycling of length-1 arguments."""
    if not args:
        return ""
    parts = [np.atleast_1d(np.asarray(a, dtype=object)) for a in args]
    n = max(len(p) for p in parts)
    if any(len(p) not in (1, n) for p in parts):
        raise TidyTypeError("paste arguments must have length 1 or a common length")
    joined = [
        sep.join(str(p[i if len(p) > 1 else 0]) for p in parts) for i in range(n)
    ]
    if all(np.ndim(a) == 0 for a in args):
        return joined[0]
    return np.array(joined)


def list_builtin(*args: Value, **named: Value) -> Value:
    """list(...): a Python list, or a dict when any element is named."""
    if named:
        if args:
            raise TidyArityError("list() cannot mix named and unnamed elements")
        return dict(named)
    return list(args)


def identity(x: Value) -> Value:
    return x


def register(env: Environment) -> None:
    """Register all builtin functions and constants into the given environment."""
    env.update(
        {
            Symbol("+"): add,
            Symbol("-"): sub,
            Symbol("*"): mul,
            Symbol("/"): div,
            Symbol("^"): power,
            Symbol("%%"): mod,
            Symbol("=="): _compare("==", operator.eq),
            Symbol("!="): _compare("!=", operator.ne),
            Symbol("<"): _compare("<", operator.lt),
            Symbol("<="): _compare("<=", operator.le),
            Symbol(">"): _compare(">", operator.gt),
            Symbol(">="): _compare(">=", operator.ge),
            Symbol("&"): logical_and,
            Symbol("|"): logical_or,
            Symbol("!"): logical_not,
            Symbol("c"): combine,
            Symbol("length"): length,
            Symbol("sum"): _reducer("sum", np.sum),
            Symbol("mean"): _reducer("mean", np.mean),
            Symbol("min"): _reducer("min", np.min),
            Symbol("max"): _reducer("max", np.max),
            Symbol("paste"): paste,
            Symbol("list"): list_builtin,
            Symbol("identity"): identity,
            Symbol("eval_tidy"): eval_tidy,
            Symbol("filter"): filter_verb,
            Symbol("mutate"): mutate_verb,
            Symbol("summarise"): summarise_verb,
        }
    )
    env.define(Symbol("TRUE"), True)
    env.define(Symbol("FALSE"), False)
    env.define(Symbol("NULL"), None)
