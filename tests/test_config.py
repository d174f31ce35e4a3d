import pytest

from tidyeval import config
from tidyeval.evaluation.context import EvalContext
from tidyeval.types.environment import Environment


def test_defaults(monkeypatch):
    monkeypatch.delenv("TIDYEVAL_MAX_DEPTH", raising=False)
    monkeypatch.delenv("TIDYEVAL_NESTED_MASK", raising=False)
    assert config.get_max_depth() == 100
    assert config.get_nested_mask_default() is False


def test_max_depth_from_environment(monkeypatch):
    monkeypatch.setenv("TIDYEVAL_MAX_DEPTH", " 42 ")
    assert config.get_max_depth() == 42
    assert EvalContext(Environment()).max_depth == 42


@pytest.mark.parametrize("raw", ["deep", "0", "-3"])
def test_invalid_max_depth(monkeypatch, raw):
    monkeypatch.setenv("TIDYEVAL_MAX_DEPTH", raw)
    with pytest.raises(ValueError, match="TIDYEVAL_MAX_DEPTH"):
        config.get_max_depth()


@pytest.mark.parametrize("raw,expected", [("1", True), ("Yes", True), ("off", False), ("false", False)])
def test_nested_mask_flag(monkeypatch, raw, expected):
    monkeypatch.setenv("TIDYEVAL_NESTED_MASK", raw)
    assert config.get_nested_mask_default() is expected
    assert EvalContext(Environment()).nested_mask is expected


def test_invalid_flag(monkeypatch):
    monkeypatch.setenv("TIDYEVAL_NESTED_MASK", "maybe")
    with pytest.raises(ValueError):
        config.get_nested_mask_default()


def test_explicit_arguments_override_environment(monkeypatch):
    monkeypatch.setenv("TIDYEVAL_MAX_DEPTH", "7")
    monkeypatch.setenv("TIDYEVAL_NESTED_MASK", "1")
    ctx = EvalContext(Environment(), nested_mask=False, max_depth=3)
    assert ctx.max_depth == 3
    assert ctx.nested_mask is False
