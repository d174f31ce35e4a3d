from __future__ import annotations
import os

# Defaults
_DEFAULT_MAX_DEPTH = 100
_DEFAULT_NESTED_MASK = False

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{var} must be positive, got {value}")
    return value


def bool_from_env(var: str, default: bool) -> bool:
    raw = os.environ.get(var)
    if not raw:
        return default
    flag = raw.strip().lower()
    if flag in _TRUE:
        return True
    if flag in _FALSE:
        return False
    raise ValueError(f"{var} must be a boolean flag, got {raw!r}")


def get_max_depth() -> int:
    """Maximum nesting of closure calls and embedded quosures per evaluation."""
    return int_from_env('TIDYEVAL_MAX_DEPTH', _DEFAULT_MAX_DEPTH)


def get_nested_mask_default() -> bool:
    """Whether embedded quosures inherit the active data mask by default."""
    return bool_from_env('TIDYEVAL_NESTED_MASK', _DEFAULT_NESTED_MASK)
