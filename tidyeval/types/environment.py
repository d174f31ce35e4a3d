"""Runtime environment for tidyeval.

The Environment stores bindings of Symbols to values and supports nested
scopes via an `outer` link. Environments are compared by identity: two
frames with the same bindings are still different environments.

Lookups run in one of two modes over the same chain. Value lookups return the
nearest binding; callable lookups skip bindings that cannot be applied, so a
variable and a function of the same name can coexist.
"""

from __future__ import annotations

from enum import Enum
from io import StringIO
from typing import Iterator, Mapping, Optional

from tidyeval import Value
from tidyeval.errors import TidyError, TidyInvalidSymbol, TidyLookupError
from tidyeval.types.symbol import Symbol


class LookupMode(Enum):
    VALUE = "value"
    CALLABLE = "callable"


def as_symbol(name: Symbol | str) -> Symbol:
    if isinstance(name, Symbol):
        return name
    if isinstance(name, str):
        return Symbol(name)
    raise TidyInvalidSymbol(f"Cannot use {name!r} as a symbol")


class Environment:
    """Hierarchical mapping from Symbols to values."""

    __slots__ = ("vars", "outer", "frozen")

    def __init__(
        self,
        outer: Optional[Environment] = None,
        bindings: Mapping[Symbol | str, Value] | None = None,
        frozen: bool = False,
    ):
        self.vars: dict[Symbol, Value] = {}
        self.outer: Environment | None = outer
        self.frozen = False
        if bindings:
            self.update(bindings)
        # Read-only frames (data masks) refuse every later write.
        self.frozen = frozen

    def _check_writable(self, name: Symbol) -> None:
        if self.frozen:
            raise TidyError(f"Cannot bind {name} in a read-only frame")

    def define(self, name: Symbol | str, value: Value) -> None:
        """Bind `name` to `value` in this frame.

        Raises TidyInvalidSymbol if `name` is neither a Symbol nor a string.
        """
        name = as_symbol(name)
        self._check_writable(name)
        self.vars[name] = value

    def update(self, mapping: Mapping[Symbol | str, Value]) -> None:
        """Bulk-define a mapping of name -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def find(
        self, symbol: Symbol, mode: LookupMode = LookupMode.VALUE
    ) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `symbol` in `mode`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                if mode is LookupMode.VALUE or callable(env.vars[symbol]):
                    return env
            env = env.outer
        return None

    def lookup(
        self, name: Symbol | str, mode: LookupMode = LookupMode.VALUE
    ) -> Value:
        """Look up the value bound to `name`, walking outward to the root.

        Raises TidyLookupError if not found.
        """
        name = as_symbol(name)
        env = self.find(name, mode)
        if env is None:
            if mode is LookupMode.CALLABLE:
                raise TidyLookupError(f"Could not find function `{name}`", name.id)
            raise TidyLookupError(f"Object `{name}` not found", name.id)
        return env.vars[name]

    def has(self, name: Symbol | str, mode: LookupMode = LookupMode.VALUE) -> bool:
        return self.find(as_symbol(name), mode) is not None

    def names(self) -> list[str]:
        """Names bound in this frame only, in binding order."""
        return [k.id for k in self.vars]

    def chain(self) -> Iterator[Environment]:
        """Yield this frame and then each ancestor."""
        env: Optional[Environment] = self
        while env is not None:
            yield env
            env = env.outer

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Frame identity plus the names bound in each frame of the chain."""
        frames = ["[" + ", ".join(env.names()) + "]" for env in self.chain()]
        return f"<Environment {id(self):#x}: {' -> '.join(frames)}>"
