"""Application engine for tidyeval.

This module centralizes function application semantics for the evaluator:
- Closures: arguments are matched to formals by bind_arguments, which records
  a CallFrame; the body runs in a fresh frame with no data mask.
- Quoting functions (Python callables marked with @quoting_function): every
  argument is recorded as a quosure and the function receives the CallFrame.
- Other Python callables: arguments are evaluated eagerly, left to right, and
  passed positionally / by keyword.

A `...` argument forwards the current frame's variadic quosures. Forwarded
quosures keep the environment they were first captured in.
"""

from __future__ import annotations

import inspect
from typing import Iterable, NamedTuple

from tidyeval import EvaluatorFn, Value
from tidyeval.errors import TidyArityError, TidyLookupError, TidyTypeError
from tidyeval.types.bind import bind_arguments
from tidyeval.types.closure import Closure
from tidyeval.types.dots import DotsEntry, DotsList
from tidyeval.types.expression import Arg, Literal
from tidyeval.types.frame import CallFrame
from tidyeval.types.quosure import Quosure
from tidyeval.types.symbol import DOTS


class SuppliedArg(NamedTuple):
    name: str | None
    quosure: Quosure
    forwarded: bool


def current_dots(ctx) -> DotsList:
    if ctx.frame is None or not _frame_takes_dots(ctx.frame):
        raise TidyLookupError("`...` used in an incorrect context", DOTS.id)
    return ctx.frame.dots


def _frame_takes_dots(frame: CallFrame) -> bool:
    return not isinstance(frame.fn, Closure) or frame.fn.has_dots


def collect_args(args: Iterable[Arg], ctx) -> list[SuppliedArg]:
    """Turn call arguments into quosures without evaluating them.

    Plain arguments are captured in the current evaluation environment.
    `...` and, under tidy evaluation, inlined quosures pass through with their
    own environments.
    """
    supplied: list[SuppliedArg] = []
    for arg in args:
        if arg.expr == DOTS and arg.name is None:
            supplied.extend(
                SuppliedArg(e.name, e.quosure, True) for e in current_dots(ctx)
            )
        elif ctx.tidy and isinstance(arg.expr, Literal) and isinstance(arg.expr.value, Quosure):
            supplied.append(SuppliedArg(arg.name, arg.expr.value, True))
        else:
            supplied.append(SuppliedArg(arg.name, Quosure(arg.expr, ctx.env), False))
    return supplied


def force_arg(arg: SuppliedArg, ctx, evaluate_fn: EvaluatorFn) -> Value:
    """Evaluate a supplied argument in the scope it came from."""
    if arg.forwarded:
        return evaluate_fn(arg.quosure, ctx)
    return evaluate_fn(arg.quosure.expr, ctx)


def evaluate_args(
    args: Iterable[Arg], ctx, evaluate_fn: EvaluatorFn
) -> tuple[list[Value], dict[str, Value]]:
    positional: list[Value] = []
    named: dict[str, Value] = {}
    for arg in args:
        if arg.expr == DOTS and arg.name is None:
            pending = [(e.name, e.quosure) for e in current_dots(ctx)]
        else:
            pending = [(arg.name, arg.expr)]
        for name, expr in pending:
            value = evaluate_fn(expr, ctx)
            if name is None:
                positional.append(value)
            elif name in named:
                raise TidyArityError(f"Argument `{name}` supplied more than once")
            else:
                named[name] = value
    return positional, named


def call_python(fn, positional: list[Value], named: dict[str, Value]) -> Value:
    """Call a Python callable, reporting a signature mismatch as TidyArityError."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # Builtins and ufuncs without introspectable signatures
        signature = None
    if signature is not None:
        try:
            signature.bind(*positional, **named)
        except TypeError as exc:
            name = getattr(fn, "__name__", repr(fn))
            raise TidyArityError(f"{name}(): {exc}") from exc
    return fn(*positional, **named)


def apply_closure(
    fn: Closure, supplied: list[SuppliedArg], ctx, evaluate_fn: EvaluatorFn
) -> Value:
    frame = bind_arguments(fn, supplied, ctx, lambda a: force_arg(a, ctx, evaluate_fn), evaluate_fn)
    body_ctx = ctx.child(frame.env, mask=None, frame=frame)
    return evaluate_fn(fn.body, body_ctx)


def apply(head: Value, args: Iterable[Arg], ctx, evaluate_fn: EvaluatorFn) -> Value:
    """Apply `head` to unevaluated call arguments.

    Errors raised while evaluating arguments propagate before `head` is
    invoked; no partial application takes place.
    """
    if isinstance(head, Closure):
        return apply_closure(head, collect_args(args, ctx), ctx, evaluate_fn)
    if callable(head) and getattr(head, "_tidy_quoting", False):
        supplied = collect_args(args, ctx)
        frame = CallFrame(
            head,
            caller_env=ctx.env,
            dots=DotsList(DotsEntry(a.name, a.quosure) for a in supplied),
        )
        return head(frame)
    if callable(head):
        positional, named = evaluate_args(args, ctx, evaluate_fn)
        return call_python(head, positional, named)
    raise TidyTypeError(f"Cannot apply non-function {head!r}")
