"""Tabular verbs built on eval_tidy.

Each verb takes a DataMask (or a plain column mapping) and quosures or
expressions, evaluates them with the columns masked in front of each
quosure's own environment, and returns a new DataMask.

The `*_verb` variants are quoting functions registered in the base
environment, so expressions can call `filter(df, x > 1)` and wrappers can
forward their own `...` into them.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import numpy as np

from tidyeval.capture import (
    as_label,
    as_quosure,
    capture_dots,
    quos_auto_name,
    quoting_function,
)
from tidyeval.data_mask import DataMask, as_data_mask
from tidyeval.errors import MaskShapeError, TidyArityError, TidyTypeError
from tidyeval.evaluation.tidy import eval_tidy
from tidyeval.types.environment import Environment
from tidyeval.types.dots import DotsList
from tidyeval.types.frame import CallFrame
from tidyeval.types.quosure import Quosure

logger = logging.getLogger(__name__)


def _recycle(name: str, value: Any, nrow: int) -> np.ndarray:
    arr = np.atleast_1d(np.asarray(value))
    if arr.ndim != 1:
        raise MaskShapeError(f"`{name}` must be a vector, got shape {arr.shape}")
    if len(arr) == nrow:
        return arr
    if len(arr) == 1:
        return np.repeat(arr, nrow)
    raise MaskShapeError(f"`{name}` must be size {nrow} or 1, not {len(arr)}")


def filter_rows(
    data: Mapping[str, Any] | DataMask, *conditions: Any, env: Environment | None = None
) -> DataMask:
    """Keep the rows where every condition is true.

    Each condition must evaluate to a logical vector of length N or 1.
    """
    mask = as_data_mask(data)
    keep = np.ones(mask.nrow, dtype=bool)
    for cond in conditions:
        q = as_quosure(cond, env)
        result = np.atleast_1d(np.asarray(eval_tidy(q, mask)))
        if result.dtype != np.bool_:
            raise TidyTypeError(
                f"Filter condition `{as_label(q)}` must be a logical vector, not {result.dtype}"
            )
        keep &= _recycle(as_label(q), result, mask.nrow)
    logger.debug("filter kept %d of %d row(s)", int(keep.sum()), mask.nrow)
    return DataMask({name: col[keep] for name, col in mask.items()})


def mutate(
    data: Mapping[str, Any] | DataMask, /, env: Environment | None = None, **exprs: Any
) -> DataMask:
    """Add or replace columns; each new column is visible to the next expression."""
    return _mutate(as_data_mask(data), exprs, env)


def _mutate(mask: DataMask, exprs: Mapping[str, Any], env: Environment | None) -> DataMask:
    columns = dict(mask.columns)
    for name, expr in exprs.items():
        value = eval_tidy(as_quosure(expr, env), DataMask(columns))
        columns[name] = _recycle(name, value, mask.nrow)
    return DataMask(columns)


def summarise(
    data: Mapping[str, Any] | DataMask, /, env: Environment | None = None, **exprs: Any
) -> DataMask:
    """Reduce the data to one row; every expression must yield a single value."""
    return _summarise(as_data_mask(data), exprs, env)


def _summarise(mask: DataMask, exprs: Mapping[str, Any], env: Environment | None) -> DataMask:
    columns: dict[str, np.ndarray] = {}
    for name, expr in exprs.items():
        value = np.atleast_1d(np.asarray(eval_tidy(as_quosure(expr, env), mask)))
        if value.shape != (1,):
            raise MaskShapeError(f"`{name}` must be size 1, not {value.size}")
        columns[name] = value
    return DataMask(columns)


def _split_data(frame: CallFrame, verb: str):
    dots = capture_dots(frame)
    if not dots or dots[0].name not in (None, "data"):
        raise TidyArityError(f"{verb}() needs the data as its first argument")
    data = eval_tidy(dots[0].quosure)
    if not isinstance(data, (DataMask, Mapping)):
        raise TidyTypeError(f"{verb}() needs a data mask, got {type(data).__name__}")
    return data, dots[1:]


def _named_quosures(dots: DotsList) -> dict[str, Quosure]:
    return {e.name: e.quosure for e in quos_auto_name(dots)}


@quoting_function
def filter_verb(frame: CallFrame) -> DataMask:
    """filter(data, cond, ...)"""
    data, conditions = _split_data(frame, "filter")
    named = [e.name for e in conditions if e.name]
    if named:
        raise TidyArityError(f"filter() conditions must not be named, got {named}")
    return filter_rows(data, *conditions.quosures())


@quoting_function
def mutate_verb(frame: CallFrame) -> DataMask:
    """mutate(data, name = expr, ...); unnamed expressions are named by their label."""
    data, exprs = _split_data(frame, "mutate")
    return _mutate(as_data_mask(data), _named_quosures(exprs), None)


@quoting_function
def summarise_verb(frame: CallFrame) -> DataMask:
    """summarise(data, name = expr, ...)"""
    data, exprs = _split_data(frame, "summarise")
    return _summarise(as_data_mask(data), _named_quosures(exprs), None)
