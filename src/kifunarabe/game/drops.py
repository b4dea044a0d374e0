"""Drop rules (持ち駒を打つ).

打てるマスの判定と二歩（同じ筋に未成の歩を2枚置くこと）の禁止。
打てない理由は DropRejection で返し、UI がメッセージを表示できるようにする。
"""

from __future__ import annotations

from enum import Enum, unique
from typing import NamedTuple

from kifunarabe.game.board import Board, Piece, Square, all_squares, is_valid_square
from kifunarabe.game.types import FILES, PieceKind, Player


@unique
class DropRejection(Enum):
    """打てない理由のコード。"""

    DOUBLE_PAWN = "DOUBLE_PAWN"          # 二歩
    OUT_OF_BOARD = "OUT_OF_BOARD"        # 盤面外
    SQUARE_OCCUPIED = "SQUARE_OCCUPIED"  # 既に駒がある

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES: dict[DropRejection, str] = {
    DropRejection.DOUBLE_PAWN: "二歩は反則です",
    DropRejection.OUT_OF_BOARD: "盤面外には打てません",
    DropRejection.SQUARE_OCCUPIED: "既に駒があるマスには打てません",
}


class DropValidation(NamedTuple):
    """Result of a drop check. reason is None when the drop is allowed."""

    is_valid: bool
    reason: DropRejection | None = None

    @property
    def message(self) -> str | None:
        return self.reason.message if self.reason is not None else None


_VALID = DropValidation(True)


def has_unpromoted_pawn_in_file(board: Board, file: int, owner: Player) -> bool:
    """指定筋に owner の未成の歩があるか。と（成った歩）は数えない。"""
    return board.count_pawns_in_file(owner, file) > 0


def validate_drop(
    board: Board,
    square: Square,
    kind: PieceKind | None = None,
    owner: Player | None = None,
) -> DropValidation:
    """Check whether a piece may be dropped on square.

    kind と owner を省略した場合は盤内・空きマスだけを確認する。
    歩を打つ場合は、同じ筋に owner の未成の歩があると二歩になる。
    """
    if not is_valid_square(square):
        return DropValidation(False, DropRejection.OUT_OF_BOARD)
    if board.is_occupied(square):
        return DropValidation(False, DropRejection.SQUARE_OCCUPIED)
    if (
        kind == PieceKind.PAWN
        and owner is not None
        and has_unpromoted_pawn_in_file(board, square.file, owner)
    ):
        return DropValidation(False, DropRejection.DOUBLE_PAWN)
    return _VALID


def can_drop(
    board: Board,
    square: Square,
    kind: PieceKind | None = None,
    owner: Player | None = None,
) -> bool:
    return validate_drop(board, square, kind, owner).is_valid


def drop(board: Board, square: Square, kind: PieceKind, owner: Player) -> Board:
    """Place a new unpromoted piece on square (打った駒は必ず未成)."""
    return board.set_piece(square, Piece(kind, owner))


def valid_drop_squares(board: Board, owner: Player) -> frozenset[Square]:
    """Every square a pawn of owner may be dropped on.

    空きマスのうち、owner の未成の歩がない筋のもの。81マスを毎回走査する。
    """
    blocked_files = {
        file for file in range(1, FILES + 1) if has_unpromoted_pawn_in_file(board, file, owner)
    }
    return frozenset(
        square
        for square in all_squares()
        if square.file not in blocked_files and not board.is_occupied(square)
    )
