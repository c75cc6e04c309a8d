# どこで: `src/slopes/interactive/runtime/debounce.py`。
# 何を: trailing debounce（最後の呼び出しだけを静止時間後に実行する）を提供する。
# なぜ: スライダーのドラッグ中に保存/解析イベントが連射されないようにするため。

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable
from typing import Any

_logger = logging.getLogger(__name__)


class TrailingDebouncer:
    """呼び出しごとにタイマーをリセットし、静止後に最後の引数で fn を 1 回だけ実行する。

    Notes
    -----
    fn の例外はログに残して握りつぶす（呼び出し元へは伝播させない）。
    """

    def __init__(self, fn: Callable[..., Any], *, wait_s: float, name: str = "debounce") -> None:
        wait = float(wait_s)
        if wait < 0:
            raise ValueError("wait_s は 0 以上である必要がある")
        self._fn = fn
        self._wait_s = wait
        self._name = str(name)
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending: tuple[tuple[Any, ...], dict[str, Any]] | None = None

    @property
    def pending(self) -> bool:
        """未実行の呼び出しがあれば True。"""

        with self._lock:
            return self._pending is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = (args, kwargs)
            timer = threading.Timer(self._wait_s, self._fire)
            timer.daemon = True
            timer.name = f"{self._name}-timer"
            self._timer = timer
        timer.start()

    def _take_pending(self) -> tuple[tuple[Any, ...], dict[str, Any]] | None:
        with self._lock:
            pending = self._pending
            self._pending = None
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
        return pending

    def _fire(self) -> None:
        pending = self._take_pending()
        if pending is None:
            return
        args, kwargs = pending
        try:
            self._fn(*args, **kwargs)
        except Exception:
            _logger.exception("Debounced call failed: %s", self._name)

    def flush(self) -> None:
        """未実行の呼び出しがあれば今すぐ実行する。"""

        self._fire()

    def cancel(self) -> None:
        """未実行の呼び出しを捨てる。"""

        self._take_pending()


class KeyedDebouncer:
    """キーごとに独立した TrailingDebouncer を持つ debounce。"""

    def __init__(self, fn: Callable[..., Any], *, wait_s: float, name: str = "debounce") -> None:
        self._fn = fn
        self._wait_s = float(wait_s)
        self._name = str(name)
        self._lock = threading.Lock()
        self._by_key: dict[Hashable, TrailingDebouncer] = {}

    def _debouncer(self, key: Hashable) -> TrailingDebouncer:
        with self._lock:
            debouncer = self._by_key.get(key)
            if debouncer is None:
                debouncer = TrailingDebouncer(
                    self._fn, wait_s=self._wait_s, name=f"{self._name}[{key}]"
                )
                self._by_key[key] = debouncer
            return debouncer

    def __call__(self, key: Hashable, *args: Any, **kwargs: Any) -> None:
        self._debouncer(key)(*args, **kwargs)

    def flush(self) -> None:
        with self._lock:
            debouncers = list(self._by_key.values())
        for debouncer in debouncers:
            debouncer.flush()

    def cancel(self) -> None:
        with self._lock:
            debouncers = list(self._by_key.values())
        for debouncer in debouncers:
            debouncer.cancel()


__all__ = ["KeyedDebouncer", "TrailingDebouncer"]
