import threading
import time

import pytest

from slopes.interactive.runtime.debounce import KeyedDebouncer, TrailingDebouncer


def test_trailing_debounce_runs_last_call_once():
    calls = []
    done = threading.Event()

    def _fn(value):
        calls.append(value)
        done.set()

    debounced = TrailingDebouncer(_fn, wait_s=0.05)
    for i in range(5):
        debounced(i)

    assert done.wait(2.0)
    time.sleep(0.1)
    assert calls == [4]
    assert debounced.pending is False


def test_flush_runs_pending_call_immediately():
    calls = []
    debounced = TrailingDebouncer(calls.append, wait_s=60.0)

    debounced("a")
    debounced("b")
    debounced.flush()
    debounced.flush()

    assert calls == ["b"]


def test_cancel_drops_pending_call():
    calls = []
    debounced = TrailingDebouncer(calls.append, wait_s=60.0)

    debounced("a")
    debounced.cancel()
    debounced.flush()

    assert calls == []


def test_failures_are_swallowed():
    def _boom(value):
        raise OSError("disk full")

    debounced = TrailingDebouncer(_boom, wait_s=60.0)
    debounced(1)
    debounced.flush()


def test_negative_wait_is_rejected():
    with pytest.raises(ValueError):
        TrailingDebouncer(lambda: None, wait_s=-0.1)


def test_keyed_debounce_is_independent_per_key():
    calls = []
    debounced = KeyedDebouncer(lambda key, value: calls.append((key, value)), wait_s=60.0)

    debounced("omega", "omega", 1)
    debounced("ballSize", "ballSize", 1)
    debounced("omega", "omega", 2)
    debounced.flush()

    assert sorted(calls) == [("ballSize", 1), ("omega", 2)]
