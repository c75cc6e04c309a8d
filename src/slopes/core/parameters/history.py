# どこで: `src/slopes/core/parameters/history.py`。
# 何を: undo 履歴（容量制限付き FIFO）と、連続 tweak を 1 ステップにまとめる判定を提供する。
# なぜ: スライダーのドラッグ 1 回で数十個の undo ステップが積まれるのを防ぐため。

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, TypeAlias

HISTORY_SIZE_LIMIT = 5
DEFAULT_BATCH_WINDOW_S = 0.6


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """1 undo ステップ。

    changed_parameters は「変更される前の値」だけを持つ部分スナップショット。
    undo は現在値へのマージで復元する（全置換ではない）。
    """

    changed_parameters: Mapping[str, Any]
    timestamp: float


UndoHistory: TypeAlias = tuple[HistoryEntry, ...]


def make_entry(changed_parameters: Mapping[str, Any], timestamp: float) -> HistoryEntry:
    """読み取り専用の changed_parameters を持つ HistoryEntry を返す。"""

    return HistoryEntry(
        changed_parameters=MappingProxyType(dict(changed_parameters)),
        timestamp=float(timestamp),
    )


def push_entry(
    history: UndoHistory, entry: HistoryEntry, *, limit: int = HISTORY_SIZE_LIMIT
) -> UndoHistory:
    """entry を末尾に積んだ履歴を返す。容量を超えたら最古（先頭）から捨てる。"""

    pushed = tuple(history) + (entry,)
    if len(pushed) > limit:
        pushed = pushed[len(pushed) - limit :]
    return pushed


def pop_entry(history: UndoHistory) -> tuple[UndoHistory, HistoryEntry | None]:
    """(末尾を除いた履歴, 末尾 entry) を返す。空なら (history, None)。"""

    if not history:
        return history, None
    return tuple(history[:-1]), history[-1]


def is_first_in_batch(
    last_entry: HistoryEntry | None, now: float, *, window_s: float
) -> bool:
    """now の変更が新しいバッチの先頭かを返す。

    直前の entry が無いか、その timestamp が window_s より古ければ新しいバッチ。
    """

    if last_entry is None:
        return True
    return float(now) - float(last_entry.timestamp) > float(window_s)


def record_tweak(
    history: UndoHistory,
    previous_values: Mapping[str, Any],
    now: float,
    *,
    window_s: float = DEFAULT_BATCH_WINDOW_S,
    limit: int = HISTORY_SIZE_LIMIT,
) -> UndoHistory:
    """tweak 1 回分を履歴へ反映した新しい履歴を返す。

    Parameters
    ----------
    previous_values : Mapping[str, Any]
        これから変更されるキーの「変更前の値」。
    now : float
        変更時刻（epoch 秒）。

    Notes
    -----
    バッチ先頭なら previous_values を新しい entry として積む。
    バッチ継続なら末尾 entry の timestamp を now へ更新し、
    まだ記録していないキーの変更前の値だけを追記する（既に記録した値はバッチ開始時点の値なので上書きしない）。
    """

    last_entry = history[-1] if history else None
    if last_entry is None or is_first_in_batch(last_entry, now, window_s=window_s):
        return push_entry(history, make_entry(previous_values, now), limit=limit)

    merged = dict(previous_values)
    merged.update(last_entry.changed_parameters)
    return tuple(history[:-1]) + (make_entry(merged, now),)


__all__ = [
    "DEFAULT_BATCH_WINDOW_S",
    "HISTORY_SIZE_LIMIT",
    "HistoryEntry",
    "UndoHistory",
    "is_first_in_batch",
    "make_entry",
    "pop_entry",
    "push_entry",
    "record_tweak",
]
