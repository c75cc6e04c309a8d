# どこで: `src/slopes/api/__init__.py`。
# 何を: 公開 API パッケージのエントリポイントとして Session / open_session を再エクスポートする。
# なぜ: ユーザーコードからシンプルに API を import できるようにするため。

from __future__ import annotations

from .session import Session, initial_state, open_session

__all__ = ["Session", "initial_state", "open_session"]
