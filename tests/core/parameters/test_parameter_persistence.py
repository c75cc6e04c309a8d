import json
from pathlib import Path

import numpy as np
import pytest

from slopes.core.parameters import PARAMETER_NAMES, default_parameters
from slopes.core.parameters.codec import decode_parameters, encode_parameters
from slopes.core.parameters.persistence import (
    default_parameters_path,
    load_parameters,
    save_parameters,
)
from slopes.core.runtime_config import set_config_path


@pytest.fixture(autouse=True)
def _reset_runtime_config() -> None:
    set_config_path(None)
    yield
    set_config_path(None)


def _isolate_config_discovery(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


def _defaults():
    return default_parameters(np.random.default_rng(0))


def test_default_parameters_path_uses_output_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    assert default_parameters_path() == Path("data") / "output" / "param_store" / "slopes.json"


def test_encode_uses_parameter_names_as_keys():
    payload = encode_parameters(_defaults())

    assert list(payload) == list(PARAMETER_NAMES)
    assert payload["peaksCurve"] == [[0.5, 0.0], [0.5, 0.5], [0.5, 1.0]]
    json.dumps(payload)


def test_parameters_file_roundtrip(tmp_path: Path):
    params = _defaults()
    params["amplitudeAmount"] = 80.0
    params["peaksCurve"] = ((0.5, 0.0), (0.25, 0.75), (0.5, 1.0))
    path = tmp_path / "nested" / "slopes.json"

    save_parameters(params, path)
    loaded = load_parameters(path, fallback=_defaults())

    assert loaded == params


def test_load_parameters_missing_file_returns_none(tmp_path: Path):
    assert load_parameters(tmp_path / "missing.json", fallback=_defaults()) is None


def test_load_parameters_ignores_corrupted_file(tmp_path: Path):
    path = tmp_path / "slopes.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_parameters(path, fallback=_defaults()) is None


def test_decode_fills_missing_drops_unknown_and_clamps():
    fallback = _defaults()

    params = decode_parameters(
        {"amplitudeAmount": 500, "wavelength": "bad", "legacyKnob": 3},
        fallback=fallback,
    )

    assert set(params) == set(PARAMETER_NAMES)
    assert params["amplitudeAmount"] == 100.0
    assert params["wavelength"] == fallback["wavelength"]
    assert params["seed"] == fallback["seed"]
    assert "legacyKnob" not in params


def test_decode_rejects_non_dict_payload():
    with pytest.raises(TypeError):
        decode_parameters(["seed", 1], fallback=_defaults())
