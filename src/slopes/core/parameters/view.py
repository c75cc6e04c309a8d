# どこで: `src/slopes/core/parameters/view.py`。
# 何を: 入力値の正規化と、EngineState から消費側（renderer/GUI）向けの読み取りモデルを作る純粋関数群を提供する。
# なぜ: 描画/ウィジェット依存部と切り離し、型変換・クランプ・派生値の再計算を単体テスト可能に保つため。

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from .curve import normalize_curve
from .disabled import resolve_disabled
from .meta import ParamMeta
from .schema import PARAMETER_META, Parameters, meta_for
from .state import EngineState


def _clamp(value: float, meta: ParamMeta) -> float:
    lo = meta.ui_min if meta.ui_min is not None else value
    hi = meta.ui_max if meta.ui_max is not None else value
    return max(lo, min(hi, value))


def normalize_input(value: Any, meta: ParamMeta) -> tuple[Any | None, str | None]:
    """kind に応じて入力を正規化し、(正規化値, エラー種別) を返す。

    Notes
    -----
    数値はレンジへクランプする。クランプが起きた場合は値と共に "clamped" を返す
    （値は有効なので呼び出し側は採用してよい）。
    """

    kind = meta.kind

    if kind == "bool":
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in {"true", "1", "on", "yes"}:
                return True, None
            if lowered in {"false", "0", "off", "no"}:
                return False, None
            return None, "invalid_bool"
        return bool(value), None

    if kind == "int":
        try:
            raw_int = int(value)
        except Exception:
            return None, "invalid_int"
        clamped_int = int(_clamp(raw_int, meta))
        return clamped_int, (None if clamped_int == raw_int else "clamped")

    if kind == "float":
        try:
            raw_float = float(value)
        except Exception:
            return None, "invalid_float"
        if not math.isfinite(raw_float):
            return None, "invalid_float"
        clamped_float = float(_clamp(raw_float, meta))
        return clamped_float, (None if clamped_float == raw_float else "clamped")

    if kind == "curve":
        return normalize_curve(value)

    # 未知 kind はそのまま返す
    return value, None


def coerce_value(name: str, value: Any) -> Any:
    """name の kind に従って値を正規化して返す。

    Raises
    ------
    InvalidParameterName
        name がスキーマに無い場合。
    ValueError
        値を kind に変換できない場合。
    """

    meta = meta_for(name)
    normalized, err = normalize_input(value, meta)
    if normalized is None:
        raise ValueError(f"{name} に不正な値が渡されました ({err}): {value!r}")
    return normalized


def animatable_parameters(parameters: Parameters) -> dict[str, float]:
    """renderer が補間してよい数値パラメータを返す。

    seed は補間しない（小数の seed は意味を持たず、途中の値が全て別の絵になるため）。
    """

    return {
        name: float(parameters[name])
        for name, meta in PARAMETER_META.items()
        if meta.is_numeric and name != "seed"
    }


@dataclass(frozen=True, slots=True)
class ParameterView:
    """1 回の遷移後に消費側へ渡す読み取りモデル。"""

    parameters: Mapping[str, Any]
    disabled_parameters: frozenset[str]
    animate_transitions: bool
    is_powered_on: bool

    @property
    def animatable(self) -> dict[str, float]:
        return animatable_parameters(self.parameters)


def read_model(state: EngineState) -> ParameterView:
    """EngineState から ParameterView を作る（disabled 集合はここで毎回再計算する）。"""

    return ParameterView(
        parameters=MappingProxyType(dict(state.parameters)),
        disabled_parameters=resolve_disabled(state.parameters),
        animate_transitions=bool(state.animate_transitions),
        is_powered_on=bool(state.is_powered_on),
    )


@dataclass(frozen=True, slots=True)
class ParameterRow:
    """GUI ウィジェット（スライダー/トグル）用の行モデル。"""

    name: str
    kind: str
    value: Any
    ui_min: Any | None
    ui_max: Any | None
    disabled: bool
    ordinal: int


def rows_from_state(
    state: EngineState, *, include_hidden: bool = False
) -> list[ParameterRow]:
    """EngineState から ParameterRow をスキーマ順に生成する。

    enableMirrored は隠しパラメータなので include_hidden=True のときだけ含める。
    """

    disabled = resolve_disabled(state.parameters)
    rows: list[ParameterRow] = []
    for ordinal, (name, meta) in enumerate(PARAMETER_META.items()):
        if name == "enableMirrored" and not include_hidden:
            continue
        rows.append(
            ParameterRow(
                name=name,
                kind=meta.kind,
                value=state.parameters[name],
                ui_min=meta.ui_min,
                ui_max=meta.ui_max,
                disabled=name in disabled,
                ordinal=ordinal,
            )
        )
    return rows


__all__ = [
    "ParameterRow",
    "ParameterView",
    "animatable_parameters",
    "coerce_value",
    "normalize_input",
    "read_model",
    "rows_from_state",
]
