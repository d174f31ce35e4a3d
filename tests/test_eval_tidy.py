import numpy as np
import pytest

from tidyeval.errors import (
    DataPronounError,
    EnvPronounError,
    NoMaskError,
    TidyArityError,
    TidyLookupError,
    TidyRecursionError,
    TidyTypeError,
)
from tidyeval.evaluation.tidy import eval_tidy
from tidyeval.runtime_context import get_global_env
from tidyeval.types.environment import Environment
from tidyeval.types.expression import Call, as_expression, call, embed
from tidyeval.types.quosure import Quosure, get_env, new_quosure
from tidyeval.types.symbol import Symbol

x, y, z = Symbol("x"), Symbol("y"), Symbol("z")
DATA, ENV = Symbol(".data"), Symbol(".env")


def quo(form, env):
    return new_quosure(as_expression(form), env)


def test_mask_shadows_the_environment(env):
    result = eval_tidy(new_quosure(x, env), {"x": [100]})
    assert isinstance(result, np.ndarray)
    assert result.tolist() == [100]


def test_env_pronoun_skips_the_mask(env):
    assert eval_tidy(quo([Symbol("$"), ENV, x], env), {"x": [100]}) == 1


def test_data_pronoun_does_not_fall_back(env):
    env.define("z", 5)
    with pytest.raises(DataPronounError) as err:
        eval_tidy(quo([Symbol("$"), DATA, z], env), {"x": [100]})
    assert err.value.key == "z"
    assert isinstance(err.value, TidyLookupError)


def test_env_pronoun_miss(env):
    with pytest.raises(EnvPronounError):
        eval_tidy(quo([Symbol("$"), ENV, Symbol("nothing")], env), {"nothing": [1]})


def test_data_pronoun_with_computed_key(env):
    env.define("col", "x")
    q = quo([Symbol("[["), DATA, Symbol("col")], env)
    assert eval_tidy(q, {"x": [1, 2]}).tolist() == [1, 2]
    with pytest.raises(TidyTypeError):
        eval_tidy(quo([Symbol("[["), DATA, 1], env), {"x": [1, 2]})


def test_pronouns_need_a_mask(env):
    with pytest.raises(NoMaskError):
        eval_tidy(quo([Symbol("$"), DATA, x], env))
    with pytest.raises(NoMaskError):
        eval_tidy(new_quosure(ENV, env))


def test_columns_combine_with_lexical_values(env):
    result = eval_tidy(quo([Symbol("*"), x, y], env), {"x": [1, 2, 3]})
    assert result.tolist() == [10, 20, 30]


def test_function_lookup_skips_column_of_the_same_name(env):
    assert eval_tidy(quo([Symbol("sum"), Symbol("sum")], env), {"sum": [1, 2, 3]}) == 6


def test_embedded_quosure_keeps_its_own_environment(env):
    inner_env = Environment(outer=env, bindings={"x": 10})
    inner = new_quosure(x, inner_env)
    outer = new_quosure(call("+", x, embed(inner)), env)
    assert eval_tidy(outer) == 11
    assert eval_tidy(outer, {"x": [100]}).tolist() == [110]


def test_embedded_quosure_can_opt_into_the_mask(env, monkeypatch):
    inner = new_quosure(x, Environment(outer=env, bindings={"x": 10}))
    outer = new_quosure(call("+", x, embed(inner)), env)
    assert eval_tidy(outer, {"x": [100]}, nested_mask=True).tolist() == [200]
    monkeypatch.setenv("TIDYEVAL_NESTED_MASK", "1")
    assert eval_tidy(outer, {"x": [100]}).tolist() == [200]
    assert eval_tidy(outer, {"x": [100]}, nested_mask=False).tolist() == [110]


def test_quosure_in_head_position(env):
    inner = new_quosure(call("+", x, 1), Environment(outer=env, bindings={"x": 41}))
    assert eval_tidy(new_quosure(Call(embed(inner), []), env)) == 42
    with pytest.raises(TidyArityError):
        eval_tidy(new_quosure(Call(embed(inner), [1]), env))


def test_quosure_returned_by_a_call_is_evaluated_in_its_scope(env):
    inner = new_quosure(x, Environment(outer=env, bindings={"x": 7}))
    env.define("get_q", lambda: inner)
    assert eval_tidy(new_quosure(Call(call("get_q"), []), env)) == 7


def test_repeated_evaluation_gives_the_same_result(env):
    data = {"x": [1, 2, 3]}
    q = quo([Symbol("+"), x, y], env)
    first = eval_tidy(q, data)
    second = eval_tidy(q, data)
    assert first.tolist() == second.tolist() == [11, 12, 13]
    assert data == {"x": [1, 2, 3]}


def test_bare_expression_uses_env_or_global(env):
    expr = as_expression([Symbol("+"), x, 1])
    assert eval_tidy(expr, {"x": [1, 2]}, env=env).tolist() == [2, 3]
    get_global_env().define("w", 5)
    assert eval_tidy(Symbol("w")) == 5


def test_quosure_ignores_env_argument(env):
    other = Environment(bindings={"x": 99})
    assert eval_tidy(new_quosure(x, env), env=other) == 1


def test_assignment_under_a_mask_lands_below_it(env):
    body = [Symbol("{"), [Symbol("<-"), z, [Symbol("*"), x, 2]], z]
    result = eval_tidy(quo(body, env), {"x": [1, 2]})
    assert result.tolist() == [2, 4]
    assert env.lookup("z").tolist() == [2, 4]


def test_first_error_aborts(env):
    calls = []
    env.define("record", lambda v: calls.append(v))
    with pytest.raises(TidyLookupError):
        eval_tidy(quo([Symbol("record"), [Symbol("+"), x, Symbol("missing")]], env), {"x": [1]})
    assert calls == []


@pytest.mark.parametrize("bad", [42, "x + y", [Symbol("+"), 1, 2], None])
def test_rejects_non_expressions(bad):
    with pytest.raises(TidyTypeError):
        eval_tidy(bad)


def test_quosure_captured_under_a_mask_keeps_it(env):
    captured = eval_tidy(quo([Symbol("quo"), [Symbol("+"), x, y]], env), {"x": [5]})
    assert isinstance(captured, Quosure)
    assert get_env(captured).outer is env
    assert eval_tidy(captured).tolist() == [15]


def test_self_referencing_quosure_is_reported(env):
    q = quo([Symbol("eval_tidy"), Symbol("q")], env)
    env.define("q", q)
    with pytest.raises(TidyRecursionError):
        eval_tidy(q)


def test_closure_created_under_a_mask_keeps_its_pronouns(env):
    get_data = [[Symbol("function"), [Symbol("$"), DATA, x]]]
    get_y = [[Symbol("function"), [Symbol("$"), ENV, y]]]
    assert eval_tidy(quo(get_data, env), {"x": [5]}).tolist() == [5]
    assert eval_tidy(quo(get_y, env), {"x": [5]}) == 10


def test_closure_defined_outside_a_mask_has_no_pronouns(env):
    eval_tidy(quo([Symbol("<-"), Symbol("get_x"), [Symbol("function"), [Symbol("$"), DATA, x]]], env))
    with pytest.raises(NoMaskError):
        eval_tidy(quo([Symbol("get_x")], env), {"x": [5]})


def test_single_bracket_subsetting(env):
    data = {"x": [1, 2, 3]}
    assert eval_tidy(quo([Symbol("["), DATA, "x"], env), data).tolist() == [1, 2, 3]
    assert eval_tidy(quo([Symbol("["), x, [Symbol(">"), x, 1]], env), data).tolist() == [2, 3]
    with pytest.raises(DataPronounError):
        eval_tidy(quo([Symbol("["), DATA, "y"], env), data)
    with pytest.raises(TidyTypeError):
        eval_tidy(quo([Symbol("["), DATA, 1], env), data)
