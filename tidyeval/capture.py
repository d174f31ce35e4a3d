"""Capture API for authors of quoting functions.

A Python function decorated with `@quoting_function` is applied without
evaluating its arguments; it receives the CallFrame instead and captures the
arguments as quosures:

    @quoting_function
    def my_verb(frame):
        data, *conds = capture_dots(frame)
        ...

Closures defined with `function(...)` reach the same operations through the
`enquo` and `enquos` forms.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from tidyeval.errors import TidyError, TidyLookupError, TidyTypeError
from tidyeval.runtime_context import get_global_env
from tidyeval.types.closure import Closure
from tidyeval.types.dots import DotsEntry, DotsList
from tidyeval.types.environment import Environment
from tidyeval.types.expression import Literal, as_expression, is_expression
from tidyeval.types.frame import CallFrame
from tidyeval.types.quosure import Quosure
from tidyeval.types.symbol import Symbol

logger = logging.getLogger(__name__)


def quoting_function(fn: Callable[[CallFrame], Any]) -> Callable[[CallFrame], Any]:
    """Mark `fn` to receive its call's CallFrame instead of evaluated arguments."""
    fn._tidy_quoting = True
    return fn


def _require_frame(frame: CallFrame | None, operation: str) -> CallFrame:
    if frame is None:
        raise TidyError(f"{operation} must be called from inside a function")
    return frame


def capture_dots(frame: CallFrame | None) -> DotsList:
    """The variadic arguments of `frame`, each with its originating environment."""
    frame = _require_frame(frame, "capture_dots()")
    if isinstance(frame.fn, Closure) and not frame.fn.has_dots:
        raise TidyLookupError("The current function has no `...` argument", "...")
    logger.debug("Captured %d dots argument(s) from %r", len(frame.dots), frame)
    return frame.dots


def capture_current_arg(frame: CallFrame | None, name: str) -> Quosure:
    """The quosure supplied for the quoted formal `name` of `frame`."""
    frame = _require_frame(frame, "capture_current_arg()")
    try:
        return frame.captured[name]
    except KeyError:
        raise TidyLookupError(
            f"`{name}` is not a quoted argument of the current function", name
        ) from None


def as_quosure(x: Any, env: Environment | None = None) -> Quosure:
    """Return `x` if it is a quosure, else wrap it with `env` (default: global env)."""
    if isinstance(x, Quosure):
        return x
    if isinstance(x, DotsEntry):
        return x.quosure
    return Quosure(as_expression(x), env if env is not None else get_global_env())


def quos(*exprs: Any, env: Environment | None = None, **named: Any) -> DotsList:
    """Build a DotsList from expressions that share one environment."""
    if env is None:
        env = get_global_env()
    entries = [DotsEntry(None, as_quosure(e, env)) for e in exprs]
    entries += [DotsEntry(k, as_quosure(v, env)) for k, v in named.items()]
    return DotsList(entries)


def as_label(x: Any) -> str:
    """A short name for an expression or quosure, used to name results."""
    if isinstance(x, DotsEntry):
        x = x.quosure
    if isinstance(x, Quosure):
        x = x.expr
    if isinstance(x, Symbol):
        return x.id
    if isinstance(x, Literal) and isinstance(x.value, Quosure):
        return as_label(x.value)
    if isinstance(x, Literal) and isinstance(x.value, str):
        return x.value
    if is_expression(x):
        return str(x)
    raise TidyTypeError(f"Cannot label {x!r}")


def quos_auto_name(dots: DotsList) -> DotsList:
    """Fill missing names with the label of each entry's expression."""
    return DotsList(
        DotsEntry(e.name if e.name else as_label(e.quosure), e.quosure) for e in dots
    )
