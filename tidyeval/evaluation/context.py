"""Explicit evaluation state threaded through every recursive step."""

from __future__ import annotations

from typing import Optional

from tidyeval import config
from tidyeval.data_mask import MaskFrame
from tidyeval.errors import TidyRecursionError
from tidyeval.types.environment import Environment
from tidyeval.types.frame import CallFrame

_UNSET = object()


class EvalContext:
    """Current environment, active mask, call frame and depth.

    `tidy` selects tidy semantics (pronouns, embedded quosures); bare
    evaluation leaves it off. Contexts are never mutated; `child` derives a
    new one for each closure call or embedded quosure.
    """

    __slots__ = ("env", "mask", "frame", "depth", "tidy", "nested_mask", "max_depth")

    def __init__(
        self,
        env: Environment,
        mask: Optional[MaskFrame] = None,
        frame: Optional[CallFrame] = None,
        depth: int = 0,
        tidy: bool = True,
        nested_mask: bool | None = None,
        max_depth: int | None = None,
    ):
        self.env = env
        self.mask = mask
        self.frame = frame
        self.depth = depth
        self.tidy = tidy
        self.nested_mask = (
            config.get_nested_mask_default() if nested_mask is None else nested_mask
        )
        self.max_depth = config.get_max_depth() if max_depth is None else max_depth

    @property
    def assign_env(self) -> Environment:
        """Frame that receives assignments; never the read-only mask frame."""
        return self.mask.bottom_env if self.mask is not None else self.env

    def child(self, env: Environment, mask=_UNSET, frame=_UNSET) -> EvalContext:
        depth = self.depth + 1
        if depth > self.max_depth:
            raise TidyRecursionError(
                f"Evaluation nested deeper than {self.max_depth} levels", depth
            )
        return EvalContext(
            env,
            mask=self.mask if mask is _UNSET else mask,
            frame=self.frame if frame is _UNSET else frame,
            depth=depth,
            tidy=self.tidy,
            nested_mask=self.nested_mask,
            max_depth=self.max_depth,
        )
