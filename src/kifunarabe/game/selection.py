"""Selection state and turn control.

UI の選択状態（盤上の駒・持ち駒・なし）と手番の切り替え。
"""

from __future__ import annotations

from dataclasses import dataclass

from kifunarabe.game.board import Piece, Square
from kifunarabe.game.types import PieceKind, Player


@dataclass(frozen=True)
class NoSelection:
    pass


@dataclass(frozen=True)
class BoardSelection:
    """盤上の駒を選択中。"""

    square: Square
    owner: Player


@dataclass(frozen=True)
class HandSelection:
    """持ち駒を選択中。"""

    kind: PieceKind
    owner: Player


Selection = NoSelection | BoardSelection | HandSelection

NO_SELECTION = NoSelection()


def can_select_piece(piece: Piece | None, turn: Player) -> bool:
    """手番のプレイヤーの駒だけ選択できる。空きマスは選択不可。"""
    return piece is not None and piece.owner == turn


def switch_turn(turn: Player) -> Player:
    return turn.opponent


def turn_display_name(turn: Player) -> str:
    return "先手の番" if turn == Player.SENTE else "後手の番"
