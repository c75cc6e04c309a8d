# どこで: `src/slopes/core/parameters/invariants.py`。
# 何を: EngineState の不変条件をテストで検証する関数を提供する。
# なぜ: 遷移ごとに守るべき整合性の知識を 1 箇所へ固定し、踏み抜きを早期検知するため。

from __future__ import annotations

from .history import HISTORY_SIZE_LIMIT, HistoryEntry
from .schema import PARAMETER_META, PARAMETER_NAMES, POWERED_PARAMETERS
from .state import EngineState


def assert_invariants(state: EngineState) -> None:
    """EngineState の不変条件を検査する。

    Notes
    -----
    テスト専用の検査関数。実行時に常時呼ぶことは想定しない。
    """

    assert isinstance(state.history, tuple)
    assert len(state.history) <= HISTORY_SIZE_LIMIT
    for entry in state.history:
        assert isinstance(entry, HistoryEntry)
        assert set(entry.changed_parameters) <= set(PARAMETER_NAMES)
    timestamps = [entry.timestamp for entry in state.history]
    assert timestamps == sorted(timestamps)

    assert set(state.parameters) == set(PARAMETER_NAMES)
    for name, meta in PARAMETER_META.items():
        value = state.parameters[name]
        if meta.kind == "bool":
            assert isinstance(value, bool), name
        elif meta.kind == "int":
            assert isinstance(value, int) and not isinstance(value, bool), name
            assert meta.ui_min <= value <= meta.ui_max, name
        elif meta.kind == "float":
            assert isinstance(value, float), name
            assert meta.ui_min <= value <= meta.ui_max, name
        elif meta.kind == "curve":
            assert isinstance(value, tuple) and len(value) >= 2, name
            for x, y in value:
                assert 0.0 <= x <= 1.0 and 0.0 <= y <= 1.0, name

    if not state.is_powered_on:
        for name in POWERED_PARAMETERS:
            assert state.parameters[name] == 0.0, name


__all__ = ["assert_invariants"]
