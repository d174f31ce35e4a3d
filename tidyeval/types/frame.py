from __future__ import annotations

from typing import Any

from tidyeval.types.dots import DotsList
from tidyeval.types.environment import Environment
from tidyeval.types.quosure import Quosure


class CallFrame:
    """Record of one function application.

    `dots` holds a quosure for every variadic argument, created where the
    argument was textually supplied (or passed through unchanged when the
    caller forwarded its own `...`). `captured` maps quoted formals to their
    quosures. `env` is the callee's local environment (None for Python
    quoting functions).
    """

    __slots__ = ("fn", "env", "caller_env", "dots", "captured")

    def __init__(
        self,
        fn: Any,
        caller_env: Environment,
        dots: DotsList | None = None,
        captured: dict[str, Quosure] | None = None,
        env: Environment | None = None,
    ):
        self.fn = fn
        self.env = env
        self.caller_env = caller_env
        self.dots = dots if dots is not None else DotsList()
        self.captured = captured if captured is not None else {}

    def __repr__(self) -> str:
        name = getattr(self.fn, "__name__", None) or type(self.fn).__name__
        return f"<CallFrame {name} dots={len(self.dots)} captured={list(self.captured)}>"
