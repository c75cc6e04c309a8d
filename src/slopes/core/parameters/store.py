# どこで: `src/slopes/core/parameters/store.py`。
# 何を: EngineStore（唯一の書き手として EngineState を保持し、dispatch を直列化する）を定義する。
# なぜ: 純粋な transition に時刻/rng/設定を供給し、確定した状態を observer（永続化/解析）へ通知するため。

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

import numpy as np

from .actions import action_name
from .history import DEFAULT_BATCH_WINDOW_S
from .reducer import transition
from .state import EngineState
from .view import ParameterView, read_model

_logger = logging.getLogger(__name__)

StateObserver = Callable[[object, EngineState], None]


class EngineStore:
    """EngineState を所有するストア。

    Notes
    -----
    - 外部へは不変な EngineState / ParameterView だけを渡す。
    - dispatch は lock で直列化する（1 つのアクションを適用し終えてから次を受け付ける）。
    - observer の失敗はログに残して握りつぶす（状態遷移には影響させない）。
    """

    def __init__(
        self,
        initial_state: EngineState,
        *,
        rng: np.random.Generator | None = None,
        clock: Callable[[], float] = time.time,
        batch_window_s: float = DEFAULT_BATCH_WINDOW_S,
    ) -> None:
        self._state = initial_state
        self._rng = rng if rng is not None else np.random.default_rng()
        self._clock = clock
        self._batch_window_s = float(batch_window_s)
        self._observers: list[StateObserver] = []
        self._lock = threading.Lock()

    @property
    def state(self) -> EngineState:
        """現在の EngineState を返す。"""

        return self._state

    def view(self) -> ParameterView:
        """現在の状態から読み取りモデルを再計算して返す。"""

        return read_model(self._state)

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        """確定した状態ごとに呼ばれる observer を登録し、解除関数を返す。"""

        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def dispatch(self, action: object) -> ParameterView:
        """action を適用し、新しい状態の読み取りモデルを返す。"""

        with self._lock:
            previous = self._state
            self._state = transition(
                previous,
                action,
                now=float(self._clock()),
                rng=self._rng,
                batch_window_s=self._batch_window_s,
            )
            state = self._state

        if state is previous:
            _logger.debug("no-op action: %s", action_name(action))
        for observer in list(self._observers):
            try:
                observer(action, state)
            except Exception:
                _logger.exception("State observer failed: %r", observer)
        return read_model(state)


__all__ = ["EngineStore", "StateObserver"]
