"""
どこで: `src/slopes/api/session.py`。公開 API のセッション実装。
何を: 初期状態の決定（override > 保存値 > 既定値）と、EngineStore と副作用の配線を提供する。
なぜ: UI 側がアクションを dispatch し、読み取りモデルを受け取るだけで済むようにするため。
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import numpy as np

from slopes.core.parameters.actions import (
    Shuffle,
    ToggleMachinePower,
    ToggleParameter,
    TweakParameter,
    Undo,
)
from slopes.core.parameters.codec import decode_parameters
from slopes.core.parameters.persistence import default_parameters_path, load_parameters
from slopes.core.parameters.schema import default_parameters
from slopes.core.parameters.state import EngineState, make_state
from slopes.core.parameters.store import EngineStore
from slopes.core.parameters.view import ParameterView
from slopes.core.runtime_config import runtime_config
from slopes.interactive.runtime.analytics import AnalyticsSink, log_sink
from slopes.interactive.runtime.effects import AnalyticsTrigger, PersistenceTrigger

_logger = logging.getLogger(__name__)


def initial_state(
    *,
    rng: np.random.Generator,
    override: Mapping[str, Any] | None = None,
    persisted: Mapping[str, Any] | None = None,
) -> EngineState:
    """セッション開始時の EngineState を返す。

    優先順位は override（注文から復元したパラメータなど）> persisted > 既定値。
    どちらも欠けたキーは既定値で埋める。
    """

    defaults = default_parameters(rng)
    if override is not None:
        parameters = decode_parameters(dict(override), fallback=defaults)
        source = "override"
    elif persisted is not None:
        parameters = decode_parameters(dict(persisted), fallback=defaults)
        source = "persisted"
    else:
        parameters = defaults
        source = "default"
    _logger.debug("initial parameters from %s", source)
    return make_state(parameters, history=(), animate_transitions=True, is_powered_on=True)


class Session:
    """1 回のセッション（EngineStore + 永続化 + 解析イベント）。"""

    def __init__(
        self,
        store: EngineStore,
        *,
        persistence: PersistenceTrigger | None = None,
        analytics: AnalyticsTrigger | None = None,
    ) -> None:
        self._store = store
        self._persistence = persistence
        self._analytics = analytics
        self._unsubscribers: list[Callable[[], None]] = []
        if analytics is not None:
            self._unsubscribers.append(store.subscribe(analytics))
        if persistence is not None:
            self._unsubscribers.append(store.subscribe(persistence))

    @property
    def store(self) -> EngineStore:
        return self._store

    @property
    def state(self) -> EngineState:
        return self._store.state

    def view(self) -> ParameterView:
        return self._store.view()

    def dispatch(self, action: object) -> ParameterView:
        return self._store.dispatch(action)

    # --- UI 向けの薄いショートカット ---
    def toggle_parameter(self, name: str) -> ParameterView:
        return self.dispatch(ToggleParameter(name))

    def tweak_parameter(self, name: str, value: Any) -> ParameterView:
        return self.dispatch(TweakParameter.single(name, value))

    def shuffle(self) -> ParameterView:
        return self.dispatch(Shuffle())

    def toggle_machine_power(self) -> ParameterView:
        return self.dispatch(ToggleMachinePower())

    def undo(self) -> ParameterView:
        return self.dispatch(Undo())

    def close(self, *, flush: bool = True) -> None:
        """observer を解除し、未実行の副作用を flush（または破棄）する。"""

        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        for trigger in (self._persistence, self._analytics):
            if trigger is None:
                continue
            if flush:
                trigger.flush()
            else:
                trigger.cancel()


def open_session(
    *,
    override: Mapping[str, Any] | None = None,
    parameter_persistence: bool = True,
    parameters_path: str | Path | None = None,
    analytics_sink: AnalyticsSink | None = log_sink,
    seed: int | None = None,
) -> Session:
    """設定を読み、初期状態を決めて Session を返す。

    Parameters
    ----------
    override : Mapping[str, Any] | None
        明示的に与える初期パラメータ。保存値より優先する。
    parameter_persistence : bool
        True の場合、パラメータを JSON に保存し、次回起動時に復元する。
    parameters_path : str | Path | None
        保存先。None の場合は `{output_dir}/param_store/slopes.json`。
    analytics_sink : AnalyticsSink | None
        解析イベントの送信先。None なら解析イベントを送らない。
    seed : int | None
        rng の seed。None なら OS のエントロピーを使う。
    """

    cfg = runtime_config()
    rng = np.random.default_rng(seed)

    path = Path(parameters_path) if parameters_path is not None else default_parameters_path()
    persisted = None
    if parameter_persistence and override is None:
        persisted = load_parameters(path, fallback=default_parameters(rng))

    state = initial_state(rng=rng, override=override, persisted=persisted)
    store = EngineStore(state, rng=rng, batch_window_s=cfg.batch_window_s)

    persistence = (
        PersistenceTrigger(path, wait_s=cfg.persist_debounce_s)
        if parameter_persistence
        else None
    )
    analytics = (
        AnalyticsTrigger(wait_s=cfg.analytics_debounce_s, sink=analytics_sink)
        if analytics_sink is not None
        else None
    )
    return Session(store, persistence=persistence, analytics=analytics)


__all__ = ["Session", "initial_state", "open_session"]
