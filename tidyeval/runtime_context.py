from __future__ import annotations
from typing import Optional

from tidyeval.types.environment import Environment

# NOTE: For now this is process-global. If threading is introduced,
# consider switching to contextvars or threading.local.
_global_env: Optional[Environment] = None


def new_base_env() -> Environment:
    """A fresh root environment holding the builtin functions."""
    from tidyeval.builtin.env_builtin import register

    env = Environment()
    register(env)
    return env


def set_global_env(env: Optional[Environment]) -> None:
    global _global_env
    _global_env = env


def get_global_env() -> Environment:
    """Environment used when a bare expression is evaluated without one."""
    global _global_env
    if _global_env is None:
        _global_env = Environment(outer=new_base_env())
    return _global_env
