# どこで: `src/slopes/core/parameters/codec.py`。
# 何を: パラメータ一式の JSON encode/decode を提供する。
# なぜ: 永続化仕様をストア本体から分離し、スキーマ変更の影響範囲を局所化するため。

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from .schema import PARAMETER_META, PARAMETER_NAMES, Parameters
from .view import normalize_input

_logger = logging.getLogger(__name__)


def encode_parameters(parameters: Parameters) -> dict[str, Any]:
    """パラメータ一式を JSON 化可能な dict（キーはパラメータ名そのもの）に変換して返す。"""

    out: dict[str, Any] = {}
    for name in PARAMETER_NAMES:
        value = parameters[name]
        if PARAMETER_META[name].kind == "curve":
            out[name] = [[float(x), float(y)] for x, y in value]
        else:
            out[name] = value
    return out


def dumps_parameters(parameters: Parameters) -> str:
    """パラメータ一式を JSON 文字列へ変換して返す。"""

    return json.dumps(encode_parameters(parameters))


def decode_parameters(obj: object, *, fallback: Mapping[str, Any]) -> dict[str, Any]:
    """JSON 由来の dict からパラメータ一式を復元して返す。

    Notes
    -----
    - 未知キーは捨てる。
    - 欠けているキー / 正規化できない値は fallback の値で埋める。
    - 数値はレンジへクランプする。
    """

    if not isinstance(obj, dict):
        raise TypeError("parameters payload must be a dict")

    unknown = sorted(str(k) for k in obj if k not in PARAMETER_META)
    if unknown:
        _logger.warning("未知のパラメータを無視します: %s", ", ".join(unknown))

    params: dict[str, Any] = {}
    for name, meta in PARAMETER_META.items():
        if name not in obj:
            params[name] = fallback[name]
            continue
        normalized, err = normalize_input(obj[name], meta)
        if normalized is None:
            _logger.warning("不正な保存値を既定値で置き換えます: %s=%r (%s)", name, obj[name], err)
            params[name] = fallback[name]
            continue
        params[name] = normalized
    return params


def loads_parameters(payload: str, *, fallback: Mapping[str, Any]) -> dict[str, Any]:
    """JSON 文字列からパラメータ一式を復元して返す。"""

    return decode_parameters(json.loads(payload), fallback=fallback)


__all__ = [
    "decode_parameters",
    "dumps_parameters",
    "encode_parameters",
    "loads_parameters",
]
