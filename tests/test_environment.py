import pytest

from tidyeval.errors import TidyError, TidyInvalidSymbol, TidyLookupError
from tidyeval.types.environment import Environment, LookupMode
from tidyeval.types.symbol import Symbol


def test_lookup_walks_parent_chain():
    root = Environment(bindings={"x": 1})
    child = Environment(outer=root, bindings={"y": 2})
    assert child.lookup(Symbol("x")) == 1
    assert child.lookup("y") == 2


def test_nearest_binding_wins():
    root = Environment(bindings={"x": 1})
    child = Environment(outer=root, bindings={"x": 2})
    assert child.lookup("x") == 2
    assert root.lookup("x") == 1


def test_unbound_symbol_raises_lookup_error():
    with pytest.raises(TidyLookupError) as err:
        Environment(outer=Environment()).lookup("nope")
    assert err.value.name == "nope"
    assert isinstance(err.value, LookupError)


def test_callable_mode_skips_non_callable_bindings():
    root = Environment(bindings={"f": lambda: "fn"})
    child = Environment(outer=root, bindings={"f": 42})
    assert child.lookup("f") == 42
    assert child.lookup("f", LookupMode.CALLABLE)() == "fn"


def test_callable_mode_fails_when_only_values_are_bound():
    env = Environment(bindings={"f": 1})
    with pytest.raises(TidyLookupError, match="function"):
        env.lookup("f", LookupMode.CALLABLE)
    assert env.has("f")
    assert not env.has("f", LookupMode.CALLABLE)


def test_environments_compare_by_identity():
    a = Environment(bindings={"x": 1})
    b = Environment(bindings={"x": 1})
    assert a != b
    assert a == a


def test_frozen_frame_rejects_writes():
    env = Environment(bindings={"x": 1}, frozen=True)
    with pytest.raises(TidyError):
        env.define("y", 2)
    assert env.names() == ["x"]
    assert env.lookup("x") == 1


def test_invalid_symbol():
    with pytest.raises(TidyInvalidSymbol):
        Environment().define(3, "three")


def test_chain_and_str():
    root = Environment(bindings={"a": 1})
    child = Environment(outer=root, bindings={"b": 2})
    assert list(child.chain()) == [child, root]
    assert str(child) == "{b: 2} -> ..."
    assert str(root) == "{a: 1}"
    assert "[b] -> [a]" in repr(child)
