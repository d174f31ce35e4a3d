"""Quosures: an expression bundled with the environment it was captured in."""

from __future__ import annotations

from tidyeval.errors import TidyTypeError
from tidyeval.types.environment import Environment
from tidyeval.types.expression import Call, Expression, is_expression
from tidyeval.types.symbol import Symbol


class Quosure:
    """An immutable (expression, environment) pair.

    The environment is held by reference. Two quosures are equal only when
    their expressions are equal and they share the same environment object.
    """

    __slots__ = ("_expr", "_env")

    def __init__(self, expr: Expression, env: Environment):
        if not is_expression(expr):
            raise TidyTypeError(f"Quosure expression must be an expression node, got {expr!r}")
        if not isinstance(env, Environment):
            raise TidyTypeError(f"Quosure environment must be an Environment, got {env!r}")
        object.__setattr__(self, "_expr", expr)
        object.__setattr__(self, "_env", env)

    def __setattr__(self, key, value):
        raise AttributeError("Quosures are immutable")

    def __delattr__(self, key):
        raise AttributeError("Quosures are immutable")

    @property
    def expr(self) -> Expression:
        return self._expr

    @property
    def env(self) -> Environment:
        return self._env

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Quosure)
            and self._env is other._env
            and self._expr == other._expr
        )

    def __hash__(self) -> int:
        return hash((self._expr, id(self._env)))

    def __repr__(self) -> str:
        return f"<quosure expr={self._expr} env={id(self._env):#x}>"

    def __str__(self) -> str:
        return f"^{self._expr}"


def new_quosure(expr: Expression, env: Environment) -> Quosure:
    return Quosure(expr, env)


def get_expr(q: Quosure) -> Expression:
    if not isinstance(q, Quosure):
        raise TidyTypeError(f"Expected a quosure, got {q!r}")
    return q.expr


def get_env(q: Quosure) -> Environment:
    if not isinstance(q, Quosure):
        raise TidyTypeError(f"Expected a quosure, got {q!r}")
    return q.env


def quo_set_expr(q: Quosure, expr: Expression) -> Quosure:
    """Return a new quosure with `expr` and the same environment as `q`."""
    return Quosure(expr, get_env(q))


def quo_is_symbol(q: Quosure) -> bool:
    return isinstance(get_expr(q), Symbol)


def quo_is_call(q: Quosure) -> bool:
    return isinstance(get_expr(q), Call)
