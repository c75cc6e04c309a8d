# どこで: `src/slopes/core/parameters/randomizer.py`。
# 何を: shuffle 用に、レンジ内で有効な新しいパラメータ一式（と seed）を生成する。
# なぜ: rng を引数で受けて決定的にし、真っ白な絵（全 powered 値が 0）を出さないことを保証するため。

from __future__ import annotations

from typing import Any

import numpy as np

from .curve import DEFAULT_PEAKS_CURVE, Curve
from .schema import (
    COSMETIC_PARAMETERS,
    PARAMETER_META,
    POWERED_PARAMETERS,
    Parameters,
    STATIC_DEFAULTS,
    random_seed,
)

# 各 powered 値が 0（= 効果なし）で抽選される確率。
# 0 が既定の「飛び道具」系は高めにして、shuffle 結果が毎回カオスにならないようにする。
ZERO_PROBABILITY: dict[str, float] = {
    "amplitudeAmount": 0.05,
    "wavelength": 0.0,
    "octaveAmount": 0.4,
    "perspective": 0.1,
    "lineAmount": 0.0,
    "spikyness": 0.5,
    "staticAmount": 0.7,
    "polarAmount": 0.7,
    "omega": 0.6,
    "splitUniverse": 0.8,
    "personInflateAmount": 0.3,
    "waterBoilAmount": 0.2,
    "ballSize": 0.3,
    "dotAmount": 0.7,
}

OCCLUSION_PROBABILITY = 0.8


def _clamp_to_meta(name: str, value: float) -> float:
    meta = PARAMETER_META[name]
    return float(max(meta.ui_min, min(meta.ui_max, value)))


def _sample_amount(name: str, rng: np.random.Generator) -> float:
    meta = PARAMETER_META[name]
    if rng.random() < ZERO_PROBABILITY.get(name, 0.0):
        return 0.0
    value = float(np.round(rng.uniform(float(meta.ui_min), float(meta.ui_max))))
    return _clamp_to_meta(name, value)


def _sample_nonzero_amount(name: str, rng: np.random.Generator) -> float:
    meta = PARAMETER_META[name]
    value = float(rng.integers(1, int(meta.ui_max), endpoint=True))
    return _clamp_to_meta(name, value)


def _sample_peaks_curve(rng: np.random.Generator) -> Curve:
    """始点/終点は既定のまま、中央の制御点だけを動かしたカーブを返す。"""

    start, _control, end = DEFAULT_PEAKS_CURVE
    x, y = rng.uniform(0.0, 1.0, size=2)
    control = (float(np.clip(x, 0.0, 1.0)), float(np.clip(y, 0.0, 1.0)))
    return (start, control, end)


def is_blank(parameters: Parameters) -> bool:
    """powered 値が全て 0 なら True（何も描画されない構成）。"""

    return all(float(parameters[name]) == 0.0 for name in POWERED_PARAMETERS)


def shuffle(current: Parameters, *, rng: np.random.Generator) -> dict[str, Any]:
    """current を基にランダムな新しいパラメータ一式を返す。

    Notes
    -----
    - seed は常に新しく抽選する。
    - powered 値は独立に抽選する（無効扱いになる値もレンジ内の有効な値にする）。
    - cosmetic フラグと隠しパラメータ enableMirrored は current から引き継ぐ。
    - 抽選結果が全て 0 なら、rng で選んだ 1 つを 1 以上で引き直す。
    """

    params: dict[str, Any] = {}
    for name in COSMETIC_PARAMETERS:
        params[name] = bool(current[name])
    params["enableMirrored"] = bool(current.get("enableMirrored", STATIC_DEFAULTS["enableMirrored"]))

    params["seed"] = random_seed(rng)
    params["enableOcclusion"] = bool(rng.random() < OCCLUSION_PROBABILITY)
    for name in POWERED_PARAMETERS:
        params[name] = _sample_amount(name, rng)
    params["peaksCurve"] = _sample_peaks_curve(rng)

    if is_blank(params):
        rescue = POWERED_PARAMETERS[int(rng.integers(0, len(POWERED_PARAMETERS)))]
        params[rescue] = _sample_nonzero_amount(rescue, rng)

    return {name: params[name] for name in PARAMETER_META}


__all__ = ["OCCLUSION_PROBABILITY", "ZERO_PROBABILITY", "is_blank", "shuffle"]
