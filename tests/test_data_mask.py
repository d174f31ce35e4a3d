import numpy as np
import pytest

from tidyeval.data_mask import DataMask, build_data_mask, mask_frame_of
from tidyeval.errors import DataPronounError, EnvPronounError, MaskShapeError, TidyError, TidyTypeError
from tidyeval.types.environment import Environment, LookupMode
from tidyeval.types.pronoun import Pronoun, PronounKind, as_data_pronoun, pronoun_get
from tidyeval.types.symbol import Symbol


def test_columns_must_share_one_length():
    with pytest.raises(MaskShapeError) as err:
        DataMask({"a": [1, 2, 3], "b": [1, 2]})
    assert isinstance(err.value, ValueError)
    assert "`a`=3" in str(err.value)


@pytest.mark.parametrize("bad", ["abc", 5, [[1, 2], [3, 4]]])
def test_columns_must_be_vectors(bad):
    with pytest.raises(MaskShapeError):
        DataMask({"a": bad})


def test_column_names_must_be_strings():
    with pytest.raises(TidyTypeError):
        DataMask({1: [1]})


def test_mask_columns_are_read_only():
    mask = DataMask({"x": [1, 2, 3]})
    assert mask.nrow == 3
    assert list(mask) == ["x"]
    with pytest.raises(ValueError):
        mask["x"][0] = 10
    with pytest.raises(TypeError):
        mask.columns["y"] = np.array([1, 2, 3])


def test_empty_mask():
    mask = DataMask({})
    assert mask.nrow == 0
    assert len(mask) == 0


def test_build_data_mask_layers_columns_over_bottom_env(env):
    frame = build_data_mask({"x": [100, 200]}, env)
    assert frame.mask_env.outer is env
    assert frame.bottom_env is env
    assert frame.mask_env.lookup("x").tolist() == [100, 200]
    assert frame.mask_env.lookup("y") == 10
    assert frame.data_pronoun.kind is PronounKind.DATA
    assert frame.env_pronoun.kind is PronounKind.ENV
    assert frame.env_pronoun.source is env
    assert frame.mask_env.lookup(".data") is frame.data_pronoun


def test_mask_frame_is_read_only(env):
    frame = build_data_mask({"x": [1]}, env)
    with pytest.raises(TidyError):
        frame.mask_env.define("z", 1)
    assert mask_frame_of(frame.mask_env) == frame
    assert mask_frame_of(env) is None


def test_function_lookups_skip_the_mask(env):
    frame = build_data_mask({"sum": [1, 2, 3]}, env)
    fn = frame.mask_env.lookup("sum", LookupMode.CALLABLE)
    assert callable(fn)
    assert isinstance(frame.mask_env.lookup("sum"), np.ndarray)


def test_pronoun_get_never_falls_through(env):
    frame = build_data_mask({"x": [100]}, env)
    assert pronoun_get(frame.data_pronoun, "x").tolist() == [100]
    assert pronoun_get(frame.env_pronoun, "x") == 1
    with pytest.raises(DataPronounError) as err:
        pronoun_get(frame.data_pronoun, "y")
    assert err.value.key == "y"
    with pytest.raises(EnvPronounError):
        pronoun_get(frame.env_pronoun, "nothing_here")
    with pytest.raises(TidyTypeError):
        pronoun_get(frame.data_pronoun, 1)


def test_pronoun_accepts_symbols_and_indexing(env):
    frame = build_data_mask({"x": [100]}, env)
    assert frame.env_pronoun[Symbol("y")] == 10
    assert "x" in frame.data_pronoun
    assert "y" not in frame.data_pronoun
    assert frame.data_pronoun.names() == ["x"]


def test_pronoun_sources_are_checked():
    with pytest.raises(TidyTypeError):
        Pronoun(PronounKind.ENV, {"x": 1})
    with pytest.raises(TidyTypeError):
        Pronoun(PronounKind.DATA, Environment())


def test_as_data_pronoun():
    p = as_data_pronoun({"a": [1, 2]})
    assert p.kind is PronounKind.DATA
    assert p["a"].tolist() == [1, 2]
    with pytest.raises(DataPronounError):
        p["b"]
