"""Captured variadic arguments."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable, NamedTuple

from tidyeval.types.quosure import Quosure


class DotsEntry(NamedTuple):
    name: str | None
    quosure: Quosure


class DotsList(Sequence):
    """An immutable ordered sequence of (name, quosure) entries.

    Entries keep their own quosures, so two entries with identical expressions
    but different origins stay distinct.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[DotsEntry | tuple] = ()):
        self._entries = tuple(
            e if isinstance(e, DotsEntry) else DotsEntry(*e) for e in entries
        )

    def __getitem__(self, index):
        if isinstance(index, slice):
            return DotsList(self._entries[index])
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other) -> bool:
        return isinstance(other, DotsList) and self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def names(self) -> list[str | None]:
        return [e.name for e in self._entries]

    def quosures(self) -> list[Quosure]:
        return [e.quosure for e in self._entries]

    def __repr__(self) -> str:
        body = ", ".join(
            f"{e.name} = {e.quosure}" if e.name else str(e.quosure)
            for e in self._entries
        )
        return f"<dots [{body}]>"
