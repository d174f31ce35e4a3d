"""Tidy evaluation: quosures evaluated against an optional data mask."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from tidyeval import Value
from tidyeval.data_mask import DataMask, as_data_mask, build_data_mask, mask_frame_of
from tidyeval.errors import TidyTypeError
from tidyeval.evaluation.context import EvalContext
from tidyeval.evaluation.evaluator import evaluate, recursion_guard
from tidyeval.runtime_context import get_global_env
from tidyeval.types.environment import Environment
from tidyeval.types.expression import is_expression
from tidyeval.types.quosure import Quosure

logger = logging.getLogger(__name__)


def eval_tidy(
    quo_or_expr: Any,
    mask: Mapping[str, Any] | DataMask | None = None,
    env: Environment | None = None,
    nested_mask: bool | None = None,
) -> Value:
    """Evaluate a quosure or bare expression, with `mask` columns layered in front.

    - A quosure is evaluated in its own environment; `env` is ignored.
    - A bare expression is evaluated in `env` (default: the global environment).
    - Ordinary symbols resolve against the mask columns first, then the
      lexical chain. `.data` and `.env` resolve strictly in one layer.
    - Embedded quosures evaluate in their own environments. They do not see
      the mask unless `nested_mask` is true (default from
      TIDYEVAL_NESTED_MASK).

    The evaluation is all-or-nothing: the first error propagates.
    """
    if isinstance(quo_or_expr, Quosure):
        expr, bottom = quo_or_expr.expr, quo_or_expr.env
    elif is_expression(quo_or_expr):
        expr, bottom = quo_or_expr, env if env is not None else get_global_env()
    else:
        raise TidyTypeError(f"eval_tidy expects a quosure or an expression, got {quo_or_expr!r}")

    if mask is not None:
        frame = build_data_mask(as_data_mask(mask), bottom)
    else:
        # A quosure captured under a mask keeps that mask
        frame = mask_frame_of(bottom)

    ctx = EvalContext(
        frame.mask_env if frame is not None else bottom,
        mask=frame,
        tidy=True,
        nested_mask=nested_mask,
    )
    logger.debug("eval_tidy %s (masked=%s)", expr, frame is not None)
    with recursion_guard():
        return evaluate(expr, ctx)
