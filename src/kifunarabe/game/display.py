"""Terminal display for the shogi board."""

from __future__ import annotations

from kifunarabe.game.board import Board, Square
from kifunarabe.game.capture import CapturedPieces
from kifunarabe.game.types import FILES, RANKS, Player


def format_board(board: Board, captured: CapturedPieces | None = None) -> str:
    """Format the board for terminal display.

    上が後手側（9段目）、左が9筋。後手の駒には v を付ける。
    """
    captured = captured or CapturedPieces()
    lines: list[str] = []

    lines.append(f"後手持駒: {format_hand(captured, Player.GOTE)}")
    lines.append("  ９ ８ ７ ６ ５ ４ ３ ２ １")
    lines.append("+--+--+--+--+--+--+--+--+--+")

    for rank in range(RANKS, 0, -1):
        row_str = "|"
        for file in range(FILES, 0, -1):
            piece = board.piece_at(Square(file, rank))
            if piece is None:
                row_str += "  |"
            elif piece.owner == Player.GOTE:
                row_str += f"v{piece.symbol}|"
            else:
                row_str += f" {piece.symbol}|"
        lines.append(f"{row_str} {rank}")
        lines.append("+--+--+--+--+--+--+--+--+--+")

    lines.append(f"先手持駒: {format_hand(captured, Player.SENTE)}")

    return "\n".join(lines)


def format_hand(captured: CapturedPieces, player: Player) -> str:
    hand = captured.for_player(player).as_dict()
    if not hand:
        return "なし"
    pieces: list[str] = []
    for kind, count in hand.items():
        if count == 1:
            pieces.append(kind.symbol)
        else:
            pieces.append(f"{kind.symbol}{count}")
    return " ".join(pieces)
