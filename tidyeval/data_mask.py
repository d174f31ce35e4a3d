"""Data masks: tabular columns layered in front of an environment chain."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterator, NamedTuple

import numpy as np

from tidyeval.errors import MaskShapeError, TidyTypeError
from tidyeval.types.environment import Environment
from tidyeval.types.pronoun import Pronoun, PronounKind
from tidyeval.types.symbol import DATA_PRONOUN, ENV_PRONOUN

logger = logging.getLogger(__name__)


def _as_column(name: str, values: Any) -> np.ndarray:
    if isinstance(values, (str, bytes)):
        raise MaskShapeError(f"Column `{name}` must be a sequence, got a string")
    col = np.array(values)
    if col.ndim != 1:
        raise MaskShapeError(
            f"Column `{name}` must be one-dimensional, got shape {col.shape}"
        )
    col.flags.writeable = False
    return col


class DataMask(Mapping):
    """An ordered, read-only set of equal-length columns.

    Column values are stored as read-only numpy arrays so that operators
    applied to them inside an expression work element-wise.
    """

    def __init__(self, columns: Mapping[str, Any]):
        cols: dict[str, np.ndarray] = {}
        for name, values in columns.items():
            if not isinstance(name, str):
                raise TidyTypeError(f"Column names must be strings, got {name!r}")
            cols[name] = _as_column(name, values)
        lengths = {name: len(col) for name, col in cols.items()}
        if len(set(lengths.values())) > 1:
            raise MaskShapeError(
                "Columns must share one length, got "
                + ", ".join(f"`{k}`={v}" for k, v in lengths.items())
            )
        self._columns = MappingProxyType(cols)
        self._nrow = next(iter(lengths.values()), 0)

    @property
    def columns(self) -> Mapping[str, np.ndarray]:
        return self._columns

    @property
    def nrow(self) -> int:
        return self._nrow

    def __getitem__(self, name: str) -> np.ndarray:
        return self._columns[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __repr__(self) -> str:
        return f"<DataMask {self._nrow} x {len(self._columns)}: {', '.join(self._columns)}>"


def as_data_mask(data: Mapping[str, Any] | DataMask) -> DataMask:
    return data if isinstance(data, DataMask) else DataMask(data)


class MaskFrame(NamedTuple):
    mask_env: Environment
    data_pronoun: Pronoun
    env_pronoun: Pronoun

    @property
    def bottom_env(self) -> Environment:
        return self.mask_env.outer


def build_data_mask(
    columns: Mapping[str, Any] | DataMask, bottom_env: Environment
) -> MaskFrame:
    """Layer `columns` in front of `bottom_env`.

    The returned mask environment binds each column plus the two pronouns, and
    its parent is `bottom_env`, so ordinary lookups see columns first and then
    the lexical chain. The frame is read-only.
    """
    mask = as_data_mask(columns)
    data_pronoun = Pronoun(PronounKind.DATA, mask.columns)
    env_pronoun = Pronoun(PronounKind.ENV, bottom_env)
    bindings: dict[Any, Any] = dict(mask.columns)
    bindings[DATA_PRONOUN] = data_pronoun
    bindings[ENV_PRONOUN] = env_pronoun
    mask_env = Environment(outer=bottom_env, bindings=bindings, frozen=True)
    logger.debug(
        "Built data mask over %d column(s) x %d row(s) above %r",
        len(mask), mask.nrow, bottom_env,
    )
    return MaskFrame(mask_env, data_pronoun, env_pronoun)


def mask_frame_of(env: Environment) -> MaskFrame | None:
    """Recover the MaskFrame whose mask environment is `env`, if it is one."""
    if not env.frozen:
        return None
    data_pronoun = env.vars.get(DATA_PRONOUN)
    env_pronoun = env.vars.get(ENV_PRONOUN)
    if not isinstance(data_pronoun, Pronoun) or not isinstance(env_pronoun, Pronoun):
        return None
    return MaskFrame(env, data_pronoun, env_pronoun)
