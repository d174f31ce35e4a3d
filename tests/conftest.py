import pytest

from tidyeval.runtime_context import new_base_env, set_global_env
from tidyeval.types.environment import Environment


@pytest.fixture(autouse=True)
def _fresh_global_env():
    # Every test starts from a new process-global environment.
    set_global_env(None)
    yield
    set_global_env(None)


@pytest.fixture
def base_env():
    return new_base_env()


@pytest.fixture
def env(base_env):
    """A user environment with the builtins as its parent."""
    return Environment(outer=base_env, bindings={"x": 1, "y": 10})
