import numpy as np
import pytest

from tidyeval.errors import TidyArityError, TidyTypeError
from tidyeval.types.environment import Environment
from tidyeval.types.expression import Arg, Call, Literal, as_expression, call, embed
from tidyeval.types.quosure import new_quosure
from tidyeval.types.symbol import Symbol


def test_as_expression_builds_calls():
    expr = as_expression([Symbol("+"), Symbol("x"), 1])
    assert expr == Call(Symbol("+"), [Symbol("x"), Literal(1)])
    assert expr.args[0] == Arg(None, Symbol("x"))


def test_as_expression_keyword_names_next_argument():
    expr = as_expression([Symbol("mean"), Symbol("x"), Symbol(":na_rm"), True])
    assert expr.args[1] == Arg("na_rm", Literal(True))


def test_as_expression_dangling_keyword():
    with pytest.raises(TidyArityError):
        as_expression([Symbol("f"), Symbol(":a")])


def test_as_expression_embeds_quosures():
    q = new_quosure(Symbol("x"), Environment())
    assert as_expression(q) == embed(q)
    assert as_expression([]) == Literal([])


def test_call_helper_converts_strings_and_values():
    assert call("f", Symbol("a"), 2, k="s") == Call(
        Symbol("f"), [Arg(None, Symbol("a")), Arg(None, Literal(2)), Arg("k", Literal("s"))]
    )


def test_call_rejects_non_expressions():
    with pytest.raises(TidyTypeError):
        Call(Symbol("f"), [Arg(None, 3)])
    with pytest.raises(TidyTypeError):
        Call("f", [])


def test_nodes_are_immutable():
    node = call("f", 1)
    with pytest.raises(AttributeError):
        node.head = Symbol("g")
    with pytest.raises(AttributeError):
        Literal(1).value = 2


def test_literal_equality():
    assert Literal(1) == Literal(1)
    assert Literal(1) != Literal(True)
    assert Literal(np.array([1, 2])) == Literal(np.array([1, 2]))
    assert Literal(np.array([1, 2])) != Literal([1, 2])


@pytest.mark.parametrize(
    "expr, text",
    [
        (call("+", Symbol("x"), 1), "x + 1"),
        (call("f", Symbol("x"), na_rm=True), "f(x, na_rm = TRUE)"),
        (call("$", Symbol(".data"), Symbol("x")), ".data$x"),
        (call("[[", Symbol(".env"), "x"), '.env[["x"]]'),
        (call("[", Symbol(".data"), "x"), '.data["x"]'),
        (Literal(None), "NULL"),
    ],
)
def test_rendering(expr, text):
    assert str(expr) == text
