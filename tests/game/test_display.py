"""Tests for terminal display."""

from __future__ import annotations

from kifunarabe.game.board import Board
from kifunarabe.game.capture import CapturedPieces, Hand
from kifunarabe.game.display import format_board, format_hand
from kifunarabe.game.types import PieceKind, Player


class TestFormatBoard:
    def test_initial_board(self) -> None:
        text = format_board(Board())
        assert "後手持駒: なし" in text
        assert "先手持駒: なし" in text
        assert "v玉" in text
        assert " 王" in text

    def test_top_row_is_rank_9(self) -> None:
        lines = format_board(Board()).splitlines()
        assert lines[3].endswith(" 9")
        # 左端は9筋の香
        assert lines[3].startswith("|v香|v桂|")

    def test_hand(self) -> None:
        captured = CapturedPieces(
            hands=(Hand.from_dict({PieceKind.PAWN: 2, PieceKind.GOLD: 1}), Hand())
        )
        assert format_hand(captured, Player.SENTE) == "歩2 金"
        assert format_hand(captured, Player.GOTE) == "なし"
