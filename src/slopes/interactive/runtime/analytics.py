# どこで: `src/slopes/interactive/runtime/analytics.py`。
# 何を: 解析イベントの形と、既定の送信先（ログ出力）を提供する。
# なぜ: 送信経路（transport）をエンジンから切り離し、イベントの形だけを固定するため。

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from slopes.core.parameters.schema import MACHINE_NAME

_logger = logging.getLogger(__name__)

CHANGE_CONTROL_VALUE = "change-control-value"
SHUFFLE = "shuffle"
TOGGLE_MACHINE_POWER = "toggle-machine-power"


@dataclass(frozen=True, slots=True)
class AnalyticsEvent:
    """解析イベント。control_name はパラメータ単位のイベントでのみ設定する。"""

    event_name: str
    machine_name: str = MACHINE_NAME
    control_name: str | None = None

    def as_payload(self) -> dict[str, Any]:
        """送信用の JSON 互換 dict を返す。"""

        payload: dict[str, Any] = {
            "eventName": self.event_name,
            "machineName": self.machine_name,
        }
        if self.control_name is not None:
            payload["controlName"] = self.control_name
        return payload


AnalyticsSink = Callable[[AnalyticsEvent], None]


def log_sink(event: AnalyticsEvent) -> None:
    """イベントをログへ出すだけの送信先。"""

    _logger.info("analytics event: %s", event.as_payload())


__all__ = [
    "AnalyticsEvent",
    "AnalyticsSink",
    "CHANGE_CONTROL_VALUE",
    "SHUFFLE",
    "TOGGLE_MACHINE_POWER",
    "log_sink",
]
