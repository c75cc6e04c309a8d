# どこで: `src/slopes/core/parameters/state.py`。
# 何を: EngineState（履歴/アニメーション指示/電源/パラメータ）を定義する。
# なぜ: reducer の入出力を不変な値にして、読み手（renderer/永続化）が書き換えられないようにするため。

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any

from .history import UndoHistory


@dataclass(frozen=True, slots=True)
class EngineState:
    """セッション中のパラメータエンジンの状態。"""

    history: UndoHistory
    animate_transitions: bool
    is_powered_on: bool
    parameters: Mapping[str, Any]


def make_state(
    parameters: Mapping[str, Any],
    *,
    history: UndoHistory = (),
    animate_transitions: bool = True,
    is_powered_on: bool = True,
) -> EngineState:
    """parameters をコピーして読み取り専用にした EngineState を返す。"""

    return EngineState(
        history=tuple(history),
        animate_transitions=bool(animate_transitions),
        is_powered_on=bool(is_powered_on),
        parameters=MappingProxyType(dict(parameters)),
    )


def with_parameters(state: EngineState, parameters: Mapping[str, Any], **changes: Any) -> EngineState:
    """parameters（と任意のフィールド）を差し替えた新しい EngineState を返す。"""

    return replace(state, parameters=MappingProxyType(dict(parameters)), **changes)


__all__ = ["EngineState", "make_state", "with_parameters"]
