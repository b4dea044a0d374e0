"""Captured-piece (持ち駒) bookkeeping.

取った駒は成りを解除して取った側の持ち駒に加わる。
すべての操作は新しいオブジェクトを返し、入力は変更しない。
"""

from __future__ import annotations

from dataclasses import dataclass, field

from kifunarabe.game.board import Board, Piece, Square, is_valid_square
from kifunarabe.game.types import HAND_PIECE_KINDS, PieceKind, Player


@dataclass(frozen=True)
class Hand:
    """One player's captured pieces.

    counts: HAND_PIECE_KINDS の順に並んだ枚数（7要素）。
    """

    counts: tuple[int, ...] = field(default=(0,) * len(HAND_PIECE_KINDS))

    def count(self, kind: PieceKind) -> int:
        if kind not in HAND_PIECE_KINDS:
            return 0
        return self.counts[HAND_PIECE_KINDS.index(kind)]

    def with_count(self, kind: PieceKind, count: int) -> Hand:
        counts = list(self.counts)
        counts[HAND_PIECE_KINDS.index(kind)] = count
        return Hand(counts=tuple(counts))

    def kinds(self) -> list[PieceKind]:
        """1枚以上ある駒種を返す。"""
        return [k for k, c in zip(HAND_PIECE_KINDS, self.counts) if c > 0]

    def as_dict(self) -> dict[PieceKind, int]:
        """枚数0の駒種を含まない辞書。"""
        return {k: c for k, c in zip(HAND_PIECE_KINDS, self.counts) if c > 0}

    @classmethod
    def from_dict(cls, counts: dict[PieceKind, int]) -> Hand:
        return cls(counts=tuple(counts.get(k, 0) for k in HAND_PIECE_KINDS))


@dataclass(frozen=True)
class CapturedPieces:
    """先手・後手の持ち駒。hands[0]=先手、hands[1]=後手。"""

    hands: tuple[Hand, Hand] = field(default_factory=lambda: (Hand(), Hand()))

    def for_player(self, player: Player) -> Hand:
        return self.hands[player.value]

    def with_hand(self, player: Player, hand: Hand) -> CapturedPieces:
        hands = list(self.hands)
        hands[player.value] = hand
        return CapturedPieces(hands=(hands[0], hands[1]))


def target_piece(board: Board, square: Square, mover: Player) -> Piece | None:
    """square にある相手の駒を返す。空き・盤外・自分の駒なら None。"""
    if not is_valid_square(square):
        return None
    piece = board.piece_at(square)
    if piece is None or piece.owner == mover:
        return None
    return piece


def add_to_hand(
    captured: CapturedPieces,
    captured_piece: Piece,
    capturing_owner: Player,
) -> CapturedPieces:
    """Add a captured piece to the capturer's hand, reverting promotion.

    例: 龍を取ったら飛車として持ち駒に加える。
    王・玉は持ち駒にならないので入力をそのまま返す。
    """
    kind = captured_piece.kind
    if kind not in HAND_PIECE_KINDS:
        return captured
    hand = captured.for_player(capturing_owner)
    return captured.with_hand(capturing_owner, hand.with_count(kind, hand.count(kind) + 1))


def remove_from_hand(
    captured: CapturedPieces,
    kind: PieceKind,
    owner: Player,
) -> CapturedPieces:
    """持ち駒から1枚減らす。持っていなければそのまま返す。"""
    hand = captured.for_player(owner)
    count = hand.count(kind)
    if count == 0:
        return captured
    return captured.with_hand(owner, hand.with_count(kind, count - 1))


def remove_from_board(board: Board, piece: Piece, square: Square) -> Board:
    """square にある駒が piece と同じ種類・所有者なら取り除く。"""
    occupant = board.piece_at(square)
    if occupant is None or occupant.kind != piece.kind or occupant.owner != piece.owner:
        return board
    return board.set_piece(square, None)
