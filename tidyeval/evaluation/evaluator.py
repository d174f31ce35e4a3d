"""Core evaluator for tidyeval.

Walks Literal / Symbol / Call trees under an explicit EvalContext. The same
walk serves bare evaluation and tidy evaluation; tidy mode adds pronoun
resolution and the embedded-quosure rule.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from tidyeval import Value
from tidyeval.data_mask import build_data_mask, mask_frame_of
from tidyeval.errors import (
    NoMaskError,
    TidyArityError,
    TidyLookupError,
    TidyRecursionError,
    TidyTypeError,
)
from tidyeval.evaluation.apply import apply
from tidyeval.evaluation.context import EvalContext
from tidyeval.evaluation.special_forms import SPECIAL_FORMS
from tidyeval.runtime_context import get_global_env
from tidyeval.types.environment import Environment, LookupMode
from tidyeval.types.expression import Call, Expression, Literal
from tidyeval.types.pronoun import Pronoun
from tidyeval.types.quosure import Quosure
from tidyeval.types.symbol import DATA_PRONOUN, DOTS, ENV_PRONOUN, Symbol

logger = logging.getLogger(__name__)


@contextmanager
def recursion_guard() -> Iterator[None]:
    """Report interpreter stack exhaustion as a TidyRecursionError."""
    try:
        yield
    except TidyRecursionError:
        raise
    except RecursionError as exc:
        raise TidyRecursionError("Evaluation exhausted the Python call stack") from exc


def evaluate(expr: Expression | Quosure, ctx: EvalContext) -> Value:
    """Evaluate one node (or a quosure) under `ctx`."""
    if isinstance(expr, Quosure):
        return evaluate_quosure(expr, ctx)

    match expr:
        case Literal():
            if ctx.tidy and isinstance(expr.value, Quosure):
                return evaluate_quosure(expr.value, ctx)
            return expr.value
        case Symbol():
            return resolve_symbol(expr, ctx)
        case Call():
            return evaluate_call(expr, ctx)

    raise TidyTypeError(f"Cannot evaluate {expr!r}: not an expression")


def resolve_symbol(sym: Symbol, ctx: EvalContext) -> Value:
    if ctx.tidy and (sym == DATA_PRONOUN or sym == ENV_PRONOUN):
        if ctx.mask is not None:
            return ctx.mask.data_pronoun if sym == DATA_PRONOUN else ctx.mask.env_pronoun
        # Closures created under a mask reach its pronouns through their scope
        env = ctx.env.find(sym)
        if env is not None and isinstance(env.vars[sym], Pronoun):
            return env.vars[sym]
        raise NoMaskError(sym.id)
    if sym == DOTS:
        raise TidyLookupError("`...` used in an incorrect context", DOTS.id)
    return ctx.env.lookup(sym, LookupMode.VALUE)


def evaluate_call(expr: Call, ctx: EvalContext) -> Value:
    head = expr.head

    # An inlined quosure in head position runs in its own scope.
    if ctx.tidy and isinstance(head, Literal) and isinstance(head.value, Quosure):
        if expr.args:
            raise TidyArityError("An embedded quosure cannot be called with arguments")
        return evaluate_quosure(head.value, ctx)

    if isinstance(head, Symbol):
        form = SPECIAL_FORMS.get(head)
        if form is not None:
            return form(expr.args, ctx, evaluate)
        fn = ctx.env.lookup(head, LookupMode.CALLABLE)
    else:
        fn = evaluate(head, ctx)
        if ctx.tidy and isinstance(fn, Quosure):
            if expr.args:
                raise TidyArityError("An embedded quosure cannot be called with arguments")
            return evaluate_quosure(fn, ctx)
        if not callable(fn):
            raise TidyTypeError(f"Attempt to apply non-function {fn!r}")

    return apply(fn, expr.args, ctx, evaluate)


def evaluate_quosure(q: Quosure, ctx: EvalContext) -> Value:
    """Evaluate `q` in the scope it was captured in.

    The enclosing mask is not applied unless the context asks embedded
    quosures to inherit it. A quosure captured inside a mask keeps that mask.
    """
    mask = mask_frame_of(q.env)
    if mask is None and ctx.nested_mask and ctx.mask is not None:
        mask = build_data_mask(ctx.mask.data_pronoun.source, q.env)
    env = mask.mask_env if mask is not None else q.env
    logger.debug("Entering quosure %s (masked=%s, depth=%d)", q, mask is not None, ctx.depth)
    return evaluate(q.expr, ctx.child(env, mask=mask, frame=None))


def eval_bare(expr: Expression, env: Environment | None = None) -> Value:
    """Evaluate `expr` against `env` with no data mask and no pronouns.

    Embedded quosures are plain values here; use eval_tidy for tidy semantics.
    Defaults to the process-global environment.
    """
    if env is None:
        env = get_global_env()
    ctx = EvalContext(env, tidy=False)
    with recursion_guard():
        return evaluate(expr, ctx)
