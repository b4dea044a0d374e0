"""Shogi board rules: moves, drops, promotion, captures and history."""

from kifunarabe.game.board import Board, Piece, Square
from kifunarabe.game.capture import CapturedPieces, Hand
from kifunarabe.game.display import format_board
from kifunarabe.game.history import GameHistory, HistoryEntry
from kifunarabe.game.state import IllegalMoveError, ShogiGame
from kifunarabe.game.types import PieceKind, Player

__all__ = [
    "Board",
    "CapturedPieces",
    "GameHistory",
    "Hand",
    "HistoryEntry",
    "IllegalMoveError",
    "Piece",
    "PieceKind",
    "Player",
    "ShogiGame",
    "Square",
    "format_board",
]
