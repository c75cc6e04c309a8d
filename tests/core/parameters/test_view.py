import numpy as np
import pytest

from slopes.core.parameters import (
    InvalidParameterName,
    ParamMeta,
    default_parameters,
    make_state,
    read_model,
    rows_from_state,
)
from slopes.core.parameters.view import animatable_parameters, coerce_value, normalize_input


def _state(**overrides):
    params = default_parameters(np.random.default_rng(0))
    params.update(overrides)
    return make_state(params)


def test_normalize_input_clamps_numbers():
    meta = ParamMeta(kind="float", ui_min=0.0, ui_max=100.0)

    assert normalize_input("42.5", meta) == (42.5, None)
    assert normalize_input(250, meta) == (100.0, "clamped")
    assert normalize_input(-1, meta) == (0.0, "clamped")
    assert normalize_input("bad", meta) == (None, "invalid_float")
    assert normalize_input(float("nan"), meta) == (None, "invalid_float")


def test_normalize_input_int_and_bool():
    int_meta = ParamMeta(kind="int", ui_min=0, ui_max=10)
    bool_meta = ParamMeta(kind="bool")

    assert normalize_input("7", int_meta) == (7, None)
    assert normalize_input(12, int_meta) == (10, "clamped")
    assert normalize_input("x", int_meta) == (None, "invalid_int")
    assert normalize_input("on", bool_meta) == (True, None)
    assert normalize_input("no", bool_meta) == (False, None)
    assert normalize_input(0, bool_meta) == (False, None)
    assert normalize_input("maybe", bool_meta) == (None, "invalid_bool")


def test_normalize_input_curve():
    meta = ParamMeta(kind="curve")

    assert normalize_input([[0.1, 0.2], [2.0, -1.0]], meta) == (
        ((0.1, 0.2), (1.0, 0.0)),
        None,
    )
    assert normalize_input([{"x": 0.3, "y": 0.4}, {"x": 0.5, "y": 0.6}], meta) == (
        ((0.3, 0.4), (0.5, 0.6)),
        None,
    )
    assert normalize_input([[0.1, 0.2]], meta) == (None, "invalid_curve")
    assert normalize_input("curve", meta) == (None, "invalid_curve")


def test_coerce_value_errors():
    with pytest.raises(InvalidParameterName):
        coerce_value("nope", 1)
    with pytest.raises(ValueError):
        coerce_value("omega", "fast")


def test_read_model_recomputes_disabled_set():
    view = read_model(_state(amplitudeAmount=0.0))

    assert "wavelength" in view.disabled_parameters
    # 無効扱いでも値は保持される。
    assert view.parameters["wavelength"] == 25.0
    assert view.animate_transitions is True
    assert view.is_powered_on is True


def test_read_model_parameters_are_read_only():
    view = read_model(_state())

    with pytest.raises(TypeError):
        view.parameters["omega"] = 10.0  # type: ignore[index]


def test_animatable_parameters_exclude_seed_and_non_numeric():
    params = _state().parameters

    animatable = animatable_parameters(params)

    assert "seed" not in animatable
    assert "enableDarkMode" not in animatable
    assert "peaksCurve" not in animatable
    assert animatable["lineAmount"] == 45.0
    assert len(animatable) == 14


def test_rows_from_state_orders_and_hides_secret_flag():
    state = _state(amplitudeAmount=0.0)

    rows = rows_from_state(state)
    names = [row.name for row in rows]

    assert names[0] == "seed"
    assert "enableMirrored" not in names
    by_name = {row.name: row for row in rows}
    assert by_name["wavelength"].disabled is True
    assert by_name["amplitudeAmount"].disabled is False
    assert by_name["amplitudeAmount"].ui_max == 100.0

    all_rows = rows_from_state(state, include_hidden=True)
    assert all_rows[-1].name == "enableMirrored"
