# どこで: `src/slopes/core/parameters/actions.py`。
# 何を: UI から dispatch されるアクション（閉じたタグ付き集合）を定義する。
# なぜ: reducer の入力を不変な値オブジェクトにして、ログ/解析イベントでもそのまま扱えるようにするため。

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeAlias


@dataclass(frozen=True, slots=True)
class ToggleParameter:
    """bool パラメータを反転する。"""

    name: str


@dataclass(frozen=True, slots=True)
class TweakParameter:
    """1 つ以上のパラメータへ値を設定する（スライダー操作など）。"""

    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    @classmethod
    def single(cls, name: str, value: Any) -> TweakParameter:
        return cls(values={name: value})


@dataclass(frozen=True, slots=True)
class Shuffle:
    """パラメータ一式をランダムに作り直す。"""


@dataclass(frozen=True, slots=True)
class ToggleMachinePower:
    """マシンの電源を入/切する。"""


@dataclass(frozen=True, slots=True)
class Undo:
    """直近の undo ステップを取り消す。"""


Action: TypeAlias = ToggleParameter | TweakParameter | Shuffle | ToggleMachinePower | Undo


def action_name(action: object) -> str:
    """ログ/解析用のアクション名を返す。"""

    return type(action).__name__


__all__ = [
    "Action",
    "Shuffle",
    "ToggleMachinePower",
    "ToggleParameter",
    "TweakParameter",
    "Undo",
    "action_name",
]
