# どこで: `src/slopes/core/parameters/curve.py`。
# 何を: カーブ記述子（制御点の列）の型と正規化を提供する。
# なぜ: JSON 由来の list/dict を、比較・ハッシュ可能な不変タプルへ揃えるため。

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeAlias

CurvePoint: TypeAlias = tuple[float, float]
Curve: TypeAlias = tuple[CurvePoint, ...]

# 山の形状を決めるカーブ（start → control → end）。座標は 0..1 の正規化空間。
DEFAULT_PEAKS_CURVE: Curve = ((0.5, 0.0), (0.5, 0.5), (0.5, 1.0))


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def _as_point(value: Any) -> CurvePoint:
    if isinstance(value, Mapping):
        return (_clamp01(value["x"]), _clamp01(value["y"]))
    x, y = value
    return (_clamp01(x), _clamp01(y))


def normalize_curve(value: Any) -> tuple[Curve | None, str | None]:
    """値を Curve へ正規化し、(正規化値, エラー種別) を返す。

    受け付ける形式は `[[x, y], ...]` または `[{"x": .., "y": ..}, ...]`。
    座標は 0..1 にクランプする。制御点が 2 点未満の場合はエラー。
    """

    if isinstance(value, (str, bytes, Mapping)):
        return None, "invalid_curve"
    try:
        points = tuple(_as_point(p) for p in value)
    except Exception:
        return None, "invalid_curve"
    if len(points) < 2:
        return None, "invalid_curve"
    return points, None


__all__ = ["Curve", "CurvePoint", "DEFAULT_PEAKS_CURVE", "normalize_curve"]
