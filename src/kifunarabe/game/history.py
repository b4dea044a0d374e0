"""Move history with undo/redo navigation.

棋譜（手順履歴）の管理。各エントリは盤面・持ち駒・手番の完全なスナップショット。
entries[0] は常に初期配置。currentIndex が末尾でないときに新しい手を記録すると、
それより後ろの履歴は捨てられる（分岐）。
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import NamedTuple

from kifunarabe.game.board import Board
from kifunarabe.game.capture import CapturedPieces
from kifunarabe.game.types import Player


@dataclass(frozen=True)
class HistoryEntry:
    """1手分の局面スナップショット。move_number は 0 が初期配置。"""

    board: Board = field(default_factory=Board)
    captured: CapturedPieces = field(default_factory=CapturedPieces)
    turn: Player = Player.SENTE
    move_number: int = 0


@dataclass(frozen=True)
class GameHistory:
    entries: tuple[HistoryEntry, ...] = field(default_factory=lambda: (HistoryEntry(),))
    current_index: int = 0


class NavigationStatus(NamedTuple):
    """UI のボタン有効/無効を決めるための情報。"""

    can_step_back: bool
    can_step_forward: bool
    current_move: int
    total_moves: int


def new_history(initial: HistoryEntry | None = None) -> GameHistory:
    return GameHistory(entries=(initial or HistoryEntry(),), current_index=0)


def record(history: GameHistory, entry: HistoryEntry) -> GameHistory:
    """現在位置より後ろを削除してから entry を末尾に追加する。"""
    entries = history.entries[: history.current_index + 1] + (entry,)
    return GameHistory(entries=entries, current_index=len(entries) - 1)


def step_back(history: GameHistory) -> GameHistory:
    return replace(history, current_index=max(0, history.current_index - 1))


def step_forward(history: GameHistory) -> GameHistory:
    last = len(history.entries) - 1
    return replace(history, current_index=min(last, history.current_index + 1))


def jump_to_start(history: GameHistory) -> GameHistory:
    return replace(history, current_index=0)


def jump_to_end(history: GameHistory) -> GameHistory:
    return replace(history, current_index=len(history.entries) - 1)


def current(history: GameHistory) -> HistoryEntry:
    return history.entries[history.current_index]


def navigation_status(history: GameHistory) -> NavigationStatus:
    last = len(history.entries) - 1
    return NavigationStatus(
        can_step_back=history.current_index > 0,
        can_step_forward=history.current_index < last,
        current_move=history.current_index,
        total_moves=last,
    )
