"""The `.data` and `.env` pronouns.

A pronoun is a value that resolves names against exactly one layer of a
tidy evaluation: the mask columns or the environment chain beneath the mask.
A miss is always an error; a pronoun never falls back to the other layer.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from tidyeval import Value
from tidyeval.errors import DataPronounError, EnvPronounError, TidyTypeError
from tidyeval.types.environment import Environment
from tidyeval.types.symbol import Symbol


class PronounKind(Enum):
    DATA = ".data"
    ENV = ".env"


class Pronoun:
    __slots__ = ("kind", "source")

    def __init__(self, kind: PronounKind, source: Mapping[str, Any] | Environment):
        if kind is PronounKind.ENV and not isinstance(source, Environment):
            raise TidyTypeError("An `.env` pronoun needs an Environment source")
        if kind is PronounKind.DATA and isinstance(source, Environment):
            raise TidyTypeError("A `.data` pronoun needs a column mapping source")
        self.kind = kind
        self.source = source

    def __getitem__(self, key: str) -> Value:
        return pronoun_get(self, key)

    def __contains__(self, key: str) -> bool:
        if self.kind is PronounKind.DATA:
            return key in self.source
        return self.source.has(key)

    def names(self) -> list[str]:
        if self.kind is PronounKind.DATA:
            return list(self.source)
        return self.source.names()

    def __repr__(self) -> str:
        return f"<pronoun {self.kind.value}>"


def pronoun_get(pronoun: Pronoun, key: str | Symbol) -> Value:
    """Resolve `key` strictly within the pronoun's own layer."""
    if isinstance(key, Symbol):
        key = key.id
    if not isinstance(key, str):
        raise TidyTypeError(
            f"`{pronoun.kind.value}` must be subset with a string, got {type(key).__name__}"
        )
    if pronoun.kind is PronounKind.DATA:
        if key not in pronoun.source:
            raise DataPronounError(key)
        return pronoun.source[key]
    env = pronoun.source.find(Symbol(key))
    if env is None:
        raise EnvPronounError(key)
    return env.vars[Symbol(key)]


def as_data_pronoun(columns: Mapping[str, Any]) -> Pronoun:
    """Wrap a column mapping in a `.data` pronoun for use outside evaluation."""
    from tidyeval.data_mask import DataMask

    mask = columns if isinstance(columns, DataMask) else DataMask(columns)
    return Pronoun(PronounKind.DATA, mask.columns)
