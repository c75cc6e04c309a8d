# どこで: `src/slopes/core/parameters/schema.py`。
# 何を: Slopes マシンの固定パラメータ集合（名前/メタ/既定値/電源 OFF 値）を定義する。
# なぜ: 閉じたスキーマを 1 箇所に置き、reducer・shuffle・永続化・GUI が同じ定義を参照するため。

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeAlias

import numpy as np

from .curve import DEFAULT_PEAKS_CURVE
from .meta import ParamMeta

Parameters: TypeAlias = Mapping[str, Any]

MACHINE_NAME = "slopes"
SEED_MAX = 2**31 - 1


class InvalidParameterName(KeyError):
    """スキーマに存在しない（または操作対象にできない）パラメータ名が渡された。"""

    def __init__(self, name: str, reason: str = "unknown parameter") -> None:
        super().__init__(name)
        self.name = name
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.reason}: {self.name!r}"


def _amount() -> ParamMeta:
    return ParamMeta(kind="float", ui_min=0.0, ui_max=100.0, powered=True)


# 挿入順がそのまま GUI の表示順になる。
PARAMETER_META: dict[str, ParamMeta] = {
    "seed": ParamMeta(kind="int", ui_min=0, ui_max=SEED_MAX),
    "enableDarkMode": ParamMeta(kind="bool", cosmetic=True),
    "enableMargins": ParamMeta(kind="bool", cosmetic=True),
    "enableOcclusion": ParamMeta(kind="bool"),
    "amplitudeAmount": _amount(),
    "wavelength": _amount(),
    "octaveAmount": _amount(),
    "perspective": _amount(),
    "lineAmount": _amount(),
    "spikyness": _amount(),
    "staticAmount": _amount(),
    "polarAmount": _amount(),
    "omega": _amount(),
    "splitUniverse": _amount(),
    "personInflateAmount": _amount(),
    "waterBoilAmount": _amount(),
    "ballSize": _amount(),
    "dotAmount": _amount(),
    "peaksCurve": ParamMeta(kind="curve"),
    # 隠しパラメータ。UI には出さないが、スキーマ上は普通の bool として扱う。
    "enableMirrored": ParamMeta(kind="bool"),
}

PARAMETER_NAMES: tuple[str, ...] = tuple(PARAMETER_META)
POWERED_PARAMETERS: tuple[str, ...] = tuple(
    name for name, meta in PARAMETER_META.items() if meta.powered
)
COSMETIC_PARAMETERS: tuple[str, ...] = tuple(
    name for name, meta in PARAMETER_META.items() if meta.cosmetic
)

# seed / enableDarkMode / enableMargins は default_parameters() がセッションごとに抽選する。
STATIC_DEFAULTS: dict[str, Any] = {
    "enableOcclusion": True,
    "amplitudeAmount": 50.0,
    "wavelength": 25.0,
    "octaveAmount": 0.0,
    "perspective": 45.0,
    "lineAmount": 45.0,
    "spikyness": 0.0,
    "staticAmount": 0.0,
    "polarAmount": 0.0,
    "omega": 0.0,
    "splitUniverse": 0.0,
    "personInflateAmount": 50.0,
    "waterBoilAmount": 100.0,
    "ballSize": 50.0,
    "dotAmount": 0.0,
    "peaksCurve": DEFAULT_PEAKS_CURVE,
    "enableMirrored": False,
}

POWERED_OFF_PARAMETERS: dict[str, float] = {name: 0.0 for name in POWERED_PARAMETERS}


def meta_for(name: str) -> ParamMeta:
    """name の ParamMeta を返す。未知の名前は InvalidParameterName。"""

    meta = PARAMETER_META.get(name)
    if meta is None:
        raise InvalidParameterName(name)
    return meta


def random_seed(rng: np.random.Generator) -> int:
    """レンジ内の新しい seed を返す。"""

    return int(rng.integers(0, SEED_MAX, endpoint=True))


def default_parameters(rng: np.random.Generator) -> dict[str, Any]:
    """既定パラメータ一式を返す（seed と cosmetic フラグは毎回抽選）。"""

    params: dict[str, Any] = {
        "seed": random_seed(rng),
        "enableDarkMode": bool(rng.integers(0, 2)),
        "enableMargins": bool(rng.integers(0, 2)),
    }
    params.update(STATIC_DEFAULTS)
    return {name: params[name] for name in PARAMETER_NAMES}


__all__ = [
    "COSMETIC_PARAMETERS",
    "InvalidParameterName",
    "MACHINE_NAME",
    "PARAMETER_META",
    "PARAMETER_NAMES",
    "POWERED_OFF_PARAMETERS",
    "POWERED_PARAMETERS",
    "Parameters",
    "SEED_MAX",
    "STATIC_DEFAULTS",
    "default_parameters",
    "meta_for",
    "random_seed",
]
