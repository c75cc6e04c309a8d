import numpy as np
import pytest

from slopes.core.parameters import POWERED_PARAMETERS, default_parameters, make_state
from slopes.core.parameters import randomizer
from slopes.core.parameters.invariants import assert_invariants
from slopes.core.parameters.randomizer import is_blank, shuffle
from slopes.core.parameters.schema import SEED_MAX


@pytest.fixture
def current():
    params = default_parameters(np.random.default_rng(0))
    params["enableDarkMode"] = True
    params["enableMargins"] = False
    params["enableMirrored"] = True
    return params


def test_shuffle_outputs_are_valid(current):
    for seed in range(200):
        out = shuffle(current, rng=np.random.default_rng(seed))

        assert_invariants(make_state(out))
        assert not is_blank(out)
        assert 0 <= out["seed"] <= SEED_MAX
        for name in POWERED_PARAMETERS:
            assert float(out[name]).is_integer()


def test_shuffle_carries_cosmetic_and_hidden_flags(current):
    out = shuffle(current, rng=np.random.default_rng(5))

    assert out["enableDarkMode"] is True
    assert out["enableMargins"] is False
    assert out["enableMirrored"] is True


def test_shuffle_does_not_mutate_current(current):
    before = dict(current)

    shuffle(current, rng=np.random.default_rng(5))

    assert current == before


def test_shuffle_is_deterministic(current):
    a = shuffle(current, rng=np.random.default_rng(42))
    b = shuffle(current, rng=np.random.default_rng(42))

    assert a == b


def test_shuffle_rescues_blank_result(current, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(
        randomizer, "ZERO_PROBABILITY", {name: 1.0 for name in POWERED_PARAMETERS}
    )

    for seed in range(20):
        out = shuffle(current, rng=np.random.default_rng(seed))

        nonzero = [name for name in POWERED_PARAMETERS if out[name] != 0.0]
        assert len(nonzero) == 1
        assert 1.0 <= out[nonzero[0]] <= 100.0


def test_shuffle_moves_only_the_peaks_control_point(current):
    out = shuffle(current, rng=np.random.default_rng(9))

    start, control, end = out["peaksCurve"]
    assert start == (0.5, 0.0)
    assert end == (0.5, 1.0)
    assert 0.0 <= control[0] <= 1.0
    assert 0.0 <= control[1] <= 1.0
