# どこで: `src/slopes/interactive/runtime/effects.py`。
# 何を: 確定した EngineState を受けて動く副作用（永続化 / 解析イベント）を提供する。
# なぜ: 保存や送信の失敗・遅延を reducer から切り離し、fire-and-forget にするため。

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from slopes.core.parameters.actions import (
    Shuffle,
    ToggleMachinePower,
    ToggleParameter,
    TweakParameter,
)
from slopes.core.parameters.persistence import save_parameters
from slopes.core.parameters.schema import Parameters
from slopes.core.parameters.state import EngineState

from .analytics import (
    CHANGE_CONTROL_VALUE,
    SHUFFLE,
    TOGGLE_MACHINE_POWER,
    AnalyticsEvent,
    AnalyticsSink,
    log_sink,
)
from .debounce import KeyedDebouncer, TrailingDebouncer

_logger = logging.getLogger(__name__)


class PersistenceTrigger:
    """状態が確定するたびに、静止後のパラメータ一式を 1 回だけ保存する observer。"""

    def __init__(
        self,
        path: Path,
        *,
        wait_s: float,
        save: Callable[[Parameters, Path], None] = save_parameters,
    ) -> None:
        self._path = Path(path)
        self._save = save
        self._debouncer = TrailingDebouncer(self._write, wait_s=wait_s, name="persist")

    @property
    def path(self) -> Path:
        return self._path

    def _write(self, parameters: Parameters) -> None:
        self._save(parameters, self._path)
        _logger.debug("parameters saved: %s", self._path)

    def __call__(self, action: object, state: EngineState) -> None:
        # 保存値は読み取り専用の snapshot なので、そのまま debounce に渡してよい。
        self._debouncer(state.parameters)

    def flush(self) -> None:
        self._debouncer.flush()

    def cancel(self) -> None:
        self._debouncer.cancel()


class AnalyticsTrigger:
    """アクションに応じた解析イベントを送る observer。

    パラメータ単位のイベントは control_name ごとに debounce し、
    shuffle / 電源操作はその場で 1 回送る。undo は送らない。
    """

    def __init__(self, *, wait_s: float, sink: AnalyticsSink = log_sink) -> None:
        self._sink = sink
        self._by_control = KeyedDebouncer(self._emit, wait_s=wait_s, name="analytics")

    def _emit(self, event: AnalyticsEvent) -> None:
        self._sink(event)

    def _emit_now(self, event: AnalyticsEvent) -> None:
        try:
            self._sink(event)
        except Exception:
            _logger.exception("Failed to emit analytics event: %s", event.event_name)

    def __call__(self, action: object, state: EngineState) -> None:
        if isinstance(action, ToggleParameter):
            self._track_control(action.name)
        elif isinstance(action, TweakParameter):
            for name in action.values:
                self._track_control(name)
        elif isinstance(action, Shuffle):
            self._emit_now(AnalyticsEvent(event_name=SHUFFLE))
        elif isinstance(action, ToggleMachinePower):
            self._emit_now(AnalyticsEvent(event_name=TOGGLE_MACHINE_POWER))

    def _track_control(self, control_name: str) -> None:
        event = AnalyticsEvent(event_name=CHANGE_CONTROL_VALUE, control_name=control_name)
        self._by_control(control_name, event)

    def flush(self) -> None:
        self._by_control.flush()

    def cancel(self) -> None:
        self._by_control.cancel()


__all__ = ["AnalyticsTrigger", "PersistenceTrigger"]
