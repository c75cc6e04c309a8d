# どこで: `src/slopes/__init__.py`。
# 何を: ルート `slopes` パッケージを定義する。
# なぜ: import 起点を `slopes` に統一するため。

from __future__ import annotations

from slopes.api import Session, open_session
from slopes.core.parameters import (
    Shuffle,
    ToggleMachinePower,
    ToggleParameter,
    TweakParameter,
    Undo,
)

__all__ = [
    "Session",
    "Shuffle",
    "ToggleMachinePower",
    "ToggleParameter",
    "TweakParameter",
    "Undo",
    "open_session",
]
