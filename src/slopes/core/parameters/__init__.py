# どこで: `src/slopes/core/parameters/__init__.py`。
# 何を: パラメータエンジンの公開エイリアスをまとめる。
# なぜ: API 層から最小インポートで使えるようにするため。

from .actions import Action, Shuffle, ToggleMachinePower, ToggleParameter, TweakParameter, Undo
from .disabled import DISABLE_RULES, DisableRule, resolve_disabled
from .history import HISTORY_SIZE_LIMIT, HistoryEntry, UndoHistory
from .meta import ParamMeta
from .randomizer import shuffle
from .reducer import transition
from .schema import (
    InvalidParameterName,
    PARAMETER_META,
    PARAMETER_NAMES,
    POWERED_PARAMETERS,
    default_parameters,
)
from .state import EngineState, make_state
from .store import EngineStore
from .view import ParameterRow, ParameterView, read_model, rows_from_state

__all__ = [
    "Action",
    "DISABLE_RULES",
    "DisableRule",
    "EngineState",
    "EngineStore",
    "HISTORY_SIZE_LIMIT",
    "HistoryEntry",
    "InvalidParameterName",
    "PARAMETER_META",
    "PARAMETER_NAMES",
    "POWERED_PARAMETERS",
    "ParamMeta",
    "ParameterRow",
    "ParameterView",
    "Shuffle",
    "ToggleMachinePower",
    "ToggleParameter",
    "TweakParameter",
    "Undo",
    "UndoHistory",
    "default_parameters",
    "make_state",
    "read_model",
    "resolve_disabled",
    "rows_from_state",
    "shuffle",
    "transition",
]
