# どこで: `src/slopes/core/parameters/disabled.py`。
# 何を: 「今の設定では見た目に効かないパラメータ」の集合を決めるルール表と解決関数を提供する。
# なぜ: 依存関係の例外条件を GUI 側に散らさず、明示的でテスト可能な表として 1 箇所に集約するため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .schema import Parameters


@dataclass(frozen=True, slots=True)
class DisableRule:
    """source の値が when と一致するとき targets を無効扱いにするルール。"""

    source: str
    when: Any
    targets: tuple[str, ...]

    def applies(self, parameters: Parameters) -> bool:
        value = parameters.get(self.source)
        if value is None:
            return False
        if isinstance(self.when, bool):
            return bool(value) is self.when
        if isinstance(value, bool):
            return False
        try:
            return float(value) == float(self.when)
        except (TypeError, ValueError):
            return False


DISABLE_RULES: tuple[DisableRule, ...] = (
    # 振幅が無ければ波形を整形するパラメータは全て無意味。
    DisableRule("amplitudeAmount", 0, ("wavelength", "octaveAmount", "spikyness", "peaksCurve")),
    DisableRule("spikyness", 0, ("peaksCurve",)),
    DisableRule("polarAmount", 0, ("omega", "ballSize")),
    # 完全な極座標表示は真上からの視点になる。
    DisableRule("polarAmount", 100, ("perspective",)),
    DisableRule("lineAmount", 0, ("perspective", "staticAmount", "dotAmount", "enableOcclusion")),
    DisableRule("splitUniverse", 0, ("personInflateAmount",)),
    DisableRule("dotAmount", 100, ("enableOcclusion",)),
)


def resolve_disabled(parameters: Parameters) -> frozenset[str]:
    """parameters の下で無効扱いになるパラメータ名の集合を返す（副作用なし）。

    無効扱いは表示上の話で、値そのものは保持される。
    """

    disabled: set[str] = set()
    for rule in DISABLE_RULES:
        if rule.applies(parameters):
            disabled.update(rule.targets)
    return frozenset(disabled)


__all__ = ["DISABLE_RULES", "DisableRule", "resolve_disabled"]
