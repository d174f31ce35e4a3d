"""Expression trees evaluated by tidyeval.

An expression is one of three node kinds:

- ``Literal(value)``: a constant. The value may be any Python object, including
  an embedded ``Quosure`` placed there by a quasiquoter.
- ``Symbol(name)``: a variable reference (see ``tidyeval.types.symbol``).
- ``Call(head, args)``: an application; ``args`` is an ordered tuple of
  ``Arg(name, expr)`` where ``name`` is ``None`` for positional arguments.

Nodes are immutable and may be shared freely between trees.
"""

from __future__ import annotations

from io import StringIO
from typing import Any, Iterable, NamedTuple, Union

import numpy as np

from tidyeval.errors import TidyArityError, TidyTypeError
from tidyeval.types.symbol import Symbol

INFIX_OPERATORS = frozenset(
    ["+", "-", "*", "/", "^", "%%", "==", "!=", "<", "<=", ">", ">=", "&", "|", "<-", "$"]
)


def same_value(a: Any, b: Any) -> bool:
    """Structural equality for literal payloads (arrays compare element-wise)."""
    if a is b:
        return True
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return (
            isinstance(a, np.ndarray)
            and isinstance(b, np.ndarray)
            and np.array_equal(a, b)
        )
    if type(a) != type(b):
        return False
    return a == b


class Literal:
    __slots__ = ("value",)

    def __init__(self, value: Any):
        object.__setattr__(self, "value", value)

    def __setattr__(self, key, value):
        raise AttributeError("Literal nodes are immutable")

    def __eq__(self, other) -> bool:
        return isinstance(other, Literal) and same_value(self.value, other.value)

    def __hash__(self) -> int:
        return hash(("Literal", self.value))

    def __repr__(self):
        return f"Literal({self.value!r})"

    def __str__(self):
        from tidyeval.types.quosure import Quosure

        if isinstance(self.value, Quosure):
            return f"^{self.value.expr}"
        if isinstance(self.value, str):
            return f'"{self.value}"'
        if self.value is None:
            return "NULL"
        if isinstance(self.value, bool):
            return "TRUE" if self.value else "FALSE"
        return str(self.value)


class Arg(NamedTuple):
    name: str | None
    expr: "Expression"


class Call:
    __slots__ = ("head", "args")

    def __init__(self, head: "Expression", args: Iterable = ()):
        if not is_expression(head):
            raise TidyTypeError(f"Call head must be an expression, got {head!r}")
        normalized = []
        for a in args:
            if isinstance(a, Arg):
                normalized.append(a)
            elif isinstance(a, tuple) and len(a) == 2:
                normalized.append(Arg(a[0], a[1]))
            else:
                normalized.append(Arg(None, a))
        for a in normalized:
            if not is_expression(a.expr):
                raise TidyTypeError(f"Call argument must be an expression, got {a.expr!r}")
        object.__setattr__(self, "head", head)
        object.__setattr__(self, "args", tuple(normalized))

    def __setattr__(self, key, value):
        raise AttributeError("Call nodes are immutable")

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Call)
            and self.head == other.head
            and len(self.args) == len(other.args)
            and all(
                a.name == b.name and a.expr == b.expr
                for a, b in zip(self.args, other.args)
            )
        )

    def __hash__(self) -> int:
        return hash(("Call", self.head, self.args))

    def __repr__(self):
        return f"Call({self.head!r}, {list(self.args)!r})"

    def __str__(self) -> str:
        with StringIO() as buffer:
            head = self.head
            if (
                isinstance(head, Symbol)
                and head.id in INFIX_OPERATORS
                and len(self.args) == 2
                and all(a.name is None for a in self.args)
            ):
                left, right = self.args
                sep = "" if head.id == "$" else " "
                buffer.write(f"{left.expr}{sep}{head.id}{sep}{right.expr}")
                return buffer.getvalue()
            if isinstance(head, Symbol) and head.id in ("[", "[[") and len(self.args) == 2:
                obj, key = self.args
                close = "]" * len(head.id)
                buffer.write(f"{obj.expr}{head.id}{key.expr}{close}")
                return buffer.getvalue()
            buffer.write(str(head))
            buffer.write("(")
            buffer.write(
                ", ".join(
                    str(a.expr) if a.name is None else f"{a.name} = {a.expr}"
                    for a in self.args
                )
            )
            buffer.write(")")
            return buffer.getvalue()


Expression = Union[Literal, Symbol, Call]


def is_expression(x: Any) -> bool:
    return isinstance(x, (Literal, Symbol, Call))


def call(head: str | Expression, *args: Any, **kwargs: Any) -> Call:
    """Build a Call; string heads become symbols, non-expression args become literals."""
    if isinstance(head, str):
        head = Symbol(head)
    positional = [Arg(None, as_expression(a)) for a in args]
    named = [Arg(k, as_expression(v)) for k, v in kwargs.items()]
    return Call(head, positional + named)


def embed(quosure) -> Literal:
    """Inline a quosure into an expression tree, as a quasiquoter would."""
    return Literal(quosure)


def as_expression(form: Any) -> Expression:
    """Convert a code-as-data form into an expression tree.

    Nested lists are calls: ``[Symbol("+"), Symbol("x"), 1]`` is ``x + 1``.
    A keyword symbol such as ``Symbol(":na")`` names the argument that follows
    it. Existing expression nodes are returned unchanged; any other value
    becomes a literal (quosures are embedded).
    """
    if is_expression(form):
        return form
    if isinstance(form, list):
        if not form:
            return Literal([])
        head, *rest = form
        args: list[Arg] = []
        while rest:
            item = rest.pop(0)
            if isinstance(item, Symbol) and item.id.startswith(":") and len(item.id) > 1:
                if not rest:
                    raise TidyArityError(f"Keyword {item} must be followed by a value")
                args.append(Arg(item.id[1:], as_expression(rest.pop(0))))
            else:
                args.append(Arg(None, as_expression(item)))
        return Call(as_expression(head), args)
    return Literal(form)
