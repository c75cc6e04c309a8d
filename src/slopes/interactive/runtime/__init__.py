# どこで: `src/slopes/interactive/runtime/__init__.py`。
# 何を: interactive 実行時の副作用（debounce / 永続化 / 解析イベント）をまとめるパッケージ定義。
# なぜ: 時間やスレッドに依存する処理を interactive 側に閉じ込め、core を純粋に保つため。

from __future__ import annotations

from .analytics import AnalyticsEvent, log_sink
from .debounce import KeyedDebouncer, TrailingDebouncer
from .effects import AnalyticsTrigger, PersistenceTrigger

__all__ = [
    "AnalyticsEvent",
    "AnalyticsTrigger",
    "KeyedDebouncer",
    "PersistenceTrigger",
    "TrailingDebouncer",
    "log_sink",
]
