# どこで: `src/slopes/core/parameters/persistence.py`。
# 何を: パラメータ一式の JSON 永続化（path 算出 / load / save）を提供する。
# なぜ: 前回セッションで調整したパラメータを、再起動後に復元できるようにするため。

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .codec import dumps_parameters, loads_parameters
from .schema import MACHINE_NAME, Parameters

from slopes.core.runtime_config import output_root_dir

_logger = logging.getLogger(__name__)


def default_parameters_path(machine_name: str = MACHINE_NAME) -> Path:
    """パラメータ保存先の既定パスを返す。

    Notes
    -----
    パスは `{output_root}/param_store/{machine_name}.json`。
    """

    return output_root_dir() / "param_store" / f"{machine_name}.json"


def load_parameters(path: Path, *, fallback: Mapping[str, Any]) -> dict[str, Any] | None:
    """JSON ファイルからパラメータ一式をロードして返す。無い/読めない場合は None。"""

    try:
        payload = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError:
        _logger.warning("保存済みパラメータを読めません: %s", path)
        return None

    try:
        return loads_parameters(payload, fallback=fallback)
    except Exception:
        # 破損した JSON は利便性のため無視して既定値で起動する。
        _logger.warning("保存済みパラメータが壊れているため無視します: %s", path)
        return None


def save_parameters(parameters: Parameters, path: Path) -> None:
    """パラメータ一式を JSON として path に保存する（親ディレクトリは作成する）。"""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_parameters(parameters) + "\n", encoding="utf-8")


__all__ = ["default_parameters_path", "load_parameters", "save_parameters"]
