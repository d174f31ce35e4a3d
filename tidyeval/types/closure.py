"""Closure representation for functions defined inside expressions."""

from __future__ import annotations

from io import StringIO
from typing import NamedTuple

from tidyeval.errors import TidyTypeError
from tidyeval.types.environment import Environment
from tidyeval.types.expression import Expression
from tidyeval.types.symbol import DOTS, Symbol


class Formal(NamedTuple):
    name: Symbol
    default: Expression | None = None
    quoted: bool = False

    @property
    def is_dots(self) -> bool:
        return self.name == DOTS


class Closure:
    """A first-class function with formal parameters, body, and closure env."""

    __slots__ = ("formals", "body", "env")

    def __init__(self, formals: list[Formal], body: Expression, env: Environment):
        self.formals: list[Formal] = list(formals)
        self.body: Expression = body
        self.env: Environment = env

    @property
    def has_dots(self) -> bool:
        return any(f.is_dots for f in self.formals)

    def __call__(self, *args, **kwargs):
        raise TidyTypeError("Closures are applied by the evaluator, not called from Python")

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("function(")
            parts = []
            for f in self.formals:
                text = f"&quote {f.name}" if f.quoted else str(f.name)
                if f.default is not None:
                    text += f" = {f.default}"
                parts.append(text)
            buffer.write(", ".join(parts))
            buffer.write(") ")
            buffer.write(str(self.body))
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)
