import logging

import numpy as np
import pytest

from slopes.core.parameters import (
    EngineStore,
    Shuffle,
    ToggleParameter,
    TweakParameter,
    Undo,
    default_parameters,
    make_state,
)


class _FakeClock:
    def __init__(self, t: float = 100.0) -> None:
        self.t = t

    def __call__(self) -> float:
        return self.t


def _store(clock=None) -> EngineStore:
    state = make_state(default_parameters(np.random.default_rng(0)))
    return EngineStore(
        state,
        rng=np.random.default_rng(1),
        clock=clock or _FakeClock(),
        batch_window_s=0.6,
    )


def test_dispatch_uses_clock_for_batching():
    clock = _FakeClock()
    store = _store(clock)

    store.dispatch(TweakParameter({"amplitudeAmount": 70}))
    clock.t += 0.2
    batch_end = clock.t
    store.dispatch(TweakParameter({"amplitudeAmount": 75}))
    clock.t += 5.0
    store.dispatch(TweakParameter({"wavelength": 10}))

    assert len(store.state.history) == 2
    assert store.state.history[0].timestamp == batch_end


def test_dispatch_returns_read_model():
    store = _store()

    view = store.dispatch(TweakParameter({"amplitudeAmount": 0}))

    assert view.parameters["amplitudeAmount"] == 0.0
    assert "wavelength" in view.disabled_parameters
    assert store.view() == view


def test_observers_receive_action_and_settled_state():
    store = _store()
    seen = []
    unsubscribe = store.subscribe(lambda action, state: seen.append((action, state)))

    action = ToggleParameter("enableOcclusion")
    store.dispatch(action)
    unsubscribe()
    store.dispatch(Shuffle())

    assert len(seen) == 1
    assert seen[0][0] == action
    assert seen[0][1].parameters["enableOcclusion"] is False


def test_failing_observer_does_not_block_transition(caplog: pytest.LogCaptureFixture):
    store = _store()

    def _boom(action, state):
        raise RuntimeError("storage is down")

    store.subscribe(_boom)
    with caplog.at_level(logging.ERROR):
        view = store.dispatch(TweakParameter({"omega": 10}))

    assert view.parameters["omega"] == 10.0
    assert store.state.parameters["omega"] == 10.0
    assert "State observer failed" in caplog.text


def test_undo_on_empty_store_is_noop():
    store = _store()
    before = store.state

    store.dispatch(Undo())

    assert store.state is before


def test_noop_dispatch_is_logged_with_action_name(caplog: pytest.LogCaptureFixture):
    store = _store()
    caplog.set_level(logging.DEBUG, logger="slopes.core.parameters.store")

    store.dispatch(Undo())

    assert "no-op action: Undo" in caplog.text
