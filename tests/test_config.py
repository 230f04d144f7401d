import numpy as np
import pytest

from passindex.config import AUTO, Configuration, Param
from passindex.errors import InvalidArgument


def _config():
    pos_ts = np.arange(10, dtype=float)
    return Configuration(
        pos_ts,
        pos_ts[:, np.newaxis],
        np.array([2.5]),
        params={"binside": Param.auto(), "method": Param.literal("grid")},
        using_defaults={"binside", "method"},
    )


def test_param_from_user_classifies_values():
    assert Param.from_user(AUTO).kind == "auto"
    assert Param.from_user(np.mean).kind == "strategy"
    assert Param.from_user([6, 10]).kind == "literal"
    assert Param.from_user("arc_length").kind == "literal"


def test_param_rejects_unknown_kind():
    with pytest.raises(ValueError):
        Param("maybe", 1)


def test_attribute_access_returns_value():
    config = _config()
    assert config.binside == AUTO
    assert config.method == "grid"
    assert config.kind("binside") == "auto"
    assert config.ndim == 1
    assert not config.has_lfp


def test_set_removes_from_using_defaults():
    config = _config()
    config.set("binside", Param.literal(2.0))
    assert config.binside == 2.0
    assert "binside" not in config.using_defaults
    assert "method" in config.using_defaults


def test_frozen_configuration_rejects_changes():
    config = _config().freeze()
    assert config.frozen
    with pytest.raises(InvalidArgument):
        config.set("binside", Param.literal(2.0))
    with pytest.raises(InvalidArgument):
        config.pos_ts = np.zeros(3)


def test_unknown_param_lookup():
    config = _config()
    with pytest.raises(InvalidArgument):
        config.param("not_a_param")
    with pytest.raises(AttributeError):
        config.not_a_param
