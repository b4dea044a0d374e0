"""Board representation for the 9x9 shogi board.

9×9盤の盤面データ構造。イミュータブルなデータクラスで、
変更メソッドは新しいオブジェクトを返す。
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import NamedTuple

from kifunarabe.game.types import (
    FILES,
    MAX_COORD,
    MIN_COORD,
    NUM_SQUARES,
    PROMOTED_SYMBOLS,
    RANKS,
    PieceKind,
    Player,
)


class Square(NamedTuple):
    """A board coordinate (筋, 段).

    盤外の座標も表現できる（合法性判定の入力として使うため）。
    盤内かどうかは is_valid_square() で判定する。
    """

    file: int
    rank: int

    def offset(self, d_file: int, d_rank: int, step: int = 1) -> Square:
        return Square(self.file + d_file * step, self.rank + d_rank * step)


def is_valid_square(square: Square) -> bool:
    """座標が盤面内（1〜9筋、1〜9段）かどうか。"""
    return (
        MIN_COORD <= square.file <= MAX_COORD
        and MIN_COORD <= square.rank <= MAX_COORD
    )


def all_squares() -> Iterator[Square]:
    """盤上の81マスを 1筋1段 から順に返す。"""
    for file in range(MIN_COORD, MAX_COORD + 1):
        for rank in range(MIN_COORD, MAX_COORD + 1):
            yield Square(file, rank)


def _index(square: Square) -> int:
    return (square.rank - 1) * FILES + (square.file - 1)


def _square_of(idx: int) -> Square:
    return Square(idx % FILES + 1, idx // FILES + 1)


@dataclass(frozen=True)
class Piece:
    """A piece on the board.

    盤面上の駒。種類・所有者・成りフラグを持つ。
    成れない駒種（王・玉・金）の promoted は常に False。
    """

    kind: PieceKind
    owner: Player
    promoted: bool = False

    @property
    def symbol(self) -> str:
        if self.promoted:
            return PROMOTED_SYMBOLS.get(self.kind, self.kind.symbol)
        return self.kind.symbol


@dataclass(frozen=True)
class Board:
    """Immutable board state.

    squares: 81要素のタプル（段優先）。squares[(rank-1) * 9 + (file-1)] でアクセス。
    同じマスに2枚の駒が置かれることは構造上あり得ない。
    """

    squares: tuple[Piece | None, ...] = field(
        default_factory=lambda: Board._initial_squares()
    )

    @staticmethod
    def _initial_squares() -> tuple[Piece | None, ...]:
        """Return the standard starting position (平手).

        先手は 1〜3段、後手は 7〜9段に配置する（計40枚）。
        """
        squares: list[Piece | None] = [None] * NUM_SQUARES

        back_rank = [
            PieceKind.LANCE, PieceKind.KNIGHT, PieceKind.SILVER,
            PieceKind.GOLD, PieceKind.KING, PieceKind.GOLD,
            PieceKind.SILVER, PieceKind.KNIGHT, PieceKind.LANCE,
        ]

        # 先手の後段（1段目）: 香桂銀金王金銀桂香
        for f, kind in enumerate(back_rank, start=1):
            squares[_index(Square(f, 1))] = Piece(kind, Player.SENTE)
        # 先手の角（2筋）・飛（8筋）
        squares[_index(Square(2, 2))] = Piece(PieceKind.BISHOP, Player.SENTE)
        squares[_index(Square(8, 2))] = Piece(PieceKind.ROOK, Player.SENTE)

        # 後手の後段（9段目）: 玉は後手の玉将
        for f, kind in enumerate(back_rank, start=1):
            if kind == PieceKind.KING:
                kind = PieceKind.JEWEL
            squares[_index(Square(f, 9))] = Piece(kind, Player.GOTE)
        # 後手の飛（2筋）・角（8筋）
        squares[_index(Square(2, 8))] = Piece(PieceKind.ROOK, Player.GOTE)
        squares[_index(Square(8, 8))] = Piece(PieceKind.BISHOP, Player.GOTE)

        # 歩兵（先手3段目、後手7段目）
        for f in range(1, FILES + 1):
            squares[_index(Square(f, 3))] = Piece(PieceKind.PAWN, Player.SENTE)
            squares[_index(Square(f, 7))] = Piece(PieceKind.PAWN, Player.GOTE)

        return tuple(squares)

    @classmethod
    def empty(cls) -> Board:
        return cls(squares=(None,) * NUM_SQUARES)

    @classmethod
    def from_pieces(cls, placements: Iterable[tuple[Square, Piece]]) -> Board:
        """Build a board from (square, piece) pairs.

        盤外の座標や同じマスへの重複配置は ValueError。
        """
        squares: list[Piece | None] = [None] * NUM_SQUARES
        for square, piece in placements:
            if not is_valid_square(square):
                msg = f"Square off the board: {tuple(square)}"
                raise ValueError(msg)
            idx = _index(square)
            if squares[idx] is not None:
                msg = f"Two pieces on one square: {tuple(square)}"
                raise ValueError(msg)
            squares[idx] = piece
        return cls(squares=tuple(squares))

    def piece_at(self, square: Square) -> Piece | None:
        """マスの駒を返す。駒がない、または盤外なら None。"""
        if not is_valid_square(square):
            return None
        return self.squares[_index(square)]

    def is_occupied(self, square: Square) -> bool:
        return self.piece_at(square) is not None

    def set_piece(self, square: Square, piece: Piece | None) -> Board:
        """マスの駒を変更した新しい Board を返す。"""
        squares = list(self.squares)
        squares[_index(square)] = piece
        return Board(squares=tuple(squares))

    def pieces(self) -> list[tuple[Square, Piece]]:
        """盤上の全ての駒を (マス, 駒) のリストで返す。"""
        return [
            (_square_of(idx), piece)
            for idx, piece in enumerate(self.squares)
            if piece is not None
        ]

    def count_pawns_in_file(self, player: Player, file: int) -> int:
        """Count unpromoted pawns of player in a file (for 二歩 check).

        指定筋にあるプレイヤーの未成の歩の枚数を返す。成った歩（と）は数えない。
        """
        count = 0
        for rank in range(1, RANKS + 1):
            p = self.piece_at(Square(file, rank))
            if (
                p is not None
                and p.owner == player
                and p.kind == PieceKind.PAWN
                and not p.promoted
            ):
                count += 1
        return count
