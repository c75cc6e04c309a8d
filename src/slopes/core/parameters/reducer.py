# どこで: `src/slopes/core/parameters/reducer.py`。
# 何を: EngineState にアクションを 1 つ適用して新しい EngineState を返す純粋な遷移関数を提供する。
# なぜ: 時刻と rng を引数で受け取り、同じ入力に対して常に同じ結果を返す（テスト可能な）核にするため。

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np

from .actions import Shuffle, ToggleMachinePower, ToggleParameter, TweakParameter, Undo
from .history import DEFAULT_BATCH_WINDOW_S, pop_entry, record_tweak
from .randomizer import shuffle
from .schema import (
    PARAMETER_META,
    POWERED_OFF_PARAMETERS,
    default_parameters,
    meta_for,
)
from .state import EngineState, with_parameters
from .view import coerce_value


def _wakes_machine(state: EngineState, changes: Mapping[str, Any]) -> bool:
    """電源 OFF 中に powered 値を 0 以外へ書く変更なら True。"""

    if state.is_powered_on:
        return False
    for name, value in changes.items():
        meta = PARAMETER_META.get(name)
        if meta is not None and meta.powered and float(value) != 0.0:
            return True
    return False


def _toggle_parameter(state: EngineState, action: ToggleParameter) -> EngineState:
    meta = meta_for(action.name)
    if meta.kind != "bool":
        raise TypeError(f"bool 以外のパラメータは toggle できません: {action.name!r} (kind={meta.kind})")

    parameters = dict(state.parameters)
    parameters[action.name] = not bool(parameters[action.name])
    return with_parameters(state, parameters)


def _tweak_parameter(
    state: EngineState, action: TweakParameter, *, now: float, batch_window_s: float
) -> EngineState:
    changes = {name: coerce_value(name, value) for name, value in action.values.items()}
    if not changes:
        return with_parameters(state, state.parameters, animate_transitions=True)

    previous_values = {name: state.parameters[name] for name in changes}
    history = record_tweak(
        state.history, previous_values, now, window_s=batch_window_s
    )

    parameters = dict(state.parameters)
    parameters.update(changes)
    return with_parameters(
        state,
        parameters,
        history=history,
        animate_transitions=True,
        is_powered_on=state.is_powered_on or _wakes_machine(state, changes),
    )


def _shuffle(state: EngineState, *, rng: np.random.Generator) -> EngineState:
    parameters = shuffle(state.parameters, rng=rng)
    # shuffle は空の構成を返さないので、電源 OFF 中でも結果を見せるために ON へ戻す。
    return with_parameters(state, parameters, is_powered_on=True)


def _toggle_machine_power(state: EngineState, *, rng: np.random.Generator) -> EngineState:
    if state.is_powered_on:
        parameters = dict(state.parameters)
        parameters.update(POWERED_OFF_PARAMETERS)
        return with_parameters(
            state, parameters, is_powered_on=False, animate_transitions=False
        )

    parameters = default_parameters(rng)
    parameters["enableDarkMode"] = state.parameters["enableDarkMode"]
    parameters["enableMargins"] = state.parameters["enableMargins"]
    return with_parameters(
        state, parameters, is_powered_on=True, animate_transitions=False
    )


def _undo(state: EngineState) -> EngineState:
    history, entry = pop_entry(state.history)
    if entry is None:
        return state

    parameters = dict(state.parameters)
    parameters.update(entry.changed_parameters)
    return with_parameters(
        state,
        parameters,
        history=history,
        is_powered_on=state.is_powered_on or _wakes_machine(state, entry.changed_parameters),
    )


def transition(
    state: EngineState,
    action: object,
    *,
    now: float,
    rng: np.random.Generator,
    batch_window_s: float = DEFAULT_BATCH_WINDOW_S,
) -> EngineState:
    """state に action を適用した新しい EngineState を返す。

    Parameters
    ----------
    state : EngineState
        現在の状態。変更しない。
    action : object
        適用するアクション。未知のアクションは no-op（state をそのまま返す）。
    now : float
        アクションの時刻（epoch 秒）。undo バッチ判定に使う。
    rng : numpy.random.Generator
        shuffle / 電源 ON 時の seed 抽選に使う乱数生成器。
    batch_window_s : float
        この秒数以内の連続 tweak を 1 つの undo ステップにまとめる。

    Raises
    ------
    InvalidParameterName
        toggle/tweak にスキーマ外の名前が渡された場合。
    TypeError
        bool 以外のパラメータを toggle しようとした場合。
    ValueError
        tweak の値を kind に変換できない場合。
    """

    if isinstance(action, ToggleParameter):
        return _toggle_parameter(state, action)
    if isinstance(action, TweakParameter):
        return _tweak_parameter(state, action, now=now, batch_window_s=batch_window_s)
    if isinstance(action, Shuffle):
        return _shuffle(state, rng=rng)
    if isinstance(action, ToggleMachinePower):
        return _toggle_machine_power(state, rng=rng)
    if isinstance(action, Undo):
        return _undo(state)
    return state


__all__ = ["transition"]
