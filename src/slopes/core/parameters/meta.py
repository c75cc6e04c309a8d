# どこで: `src/slopes/core/parameters/meta.py`。
# 何を: ParamMeta（検証/UI 表示/電源制御のためのメタ情報）を提供する。
# なぜ: 型・レンジ・電源 OFF 時の扱いを 1 箇所で管理し、reducer/shuffle/GUI で共有するため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ParamMeta:
    """パラメータの検証/UI 用メタ情報。

    ui_min/ui_max は数値 kind の有効レンジで、値は常にこの範囲へクランプされる。
    powered=True の数値は電源 OFF で 0 になる。cosmetic=True の値は電源の入/切を跨いで保持される。
    """

    kind: str  # "int" | "float" | "bool" | "curve"
    ui_min: Any | None = None
    ui_max: Any | None = None
    powered: bool = False
    cosmetic: bool = False

    @property
    def is_numeric(self) -> bool:
        return self.kind in {"int", "float"}
