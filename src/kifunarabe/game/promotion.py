"""Promotion rules.

成りの判定。敵陣（相手側の3段）に入る・出る・中で動く手は成りを選べる。
行き所のなくなる駒（歩・香の最奥段、桂の最奥2段）は強制的に成る。
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum, unique

from kifunarabe.game.board import Piece, Square
from kifunarabe.game.types import NON_PROMOTABLE_KINDS, PieceKind, Player


@unique
class PromotionOption(Enum):
    """成りの選択肢。"""

    NONE = "none"          # 成れない
    OPTIONAL = "optional"  # 成る・成らないを選べる
    FORCED = "forced"      # 必ず成る


def is_promotable(kind: PieceKind) -> bool:
    """王・玉・金以外は成れる。"""
    return kind not in NON_PROMOTABLE_KINDS


def is_enemy_zone(rank: int, owner: Player) -> bool:
    """先手の敵陣は 7〜9段、後手の敵陣は 1〜3段。"""
    if owner == Player.SENTE:
        return rank >= 7
    return rank <= 3


def may_promote(piece: Piece, origin: Square, destination: Square) -> bool:
    """True if the move lets the piece choose to promote.

    条件: 成れる駒種、まだ成っていない、移動元か移動先が敵陣。
    """
    if not is_promotable(piece.kind) or piece.promoted:
        return False
    return is_enemy_zone(origin.rank, piece.owner) or is_enemy_zone(
        destination.rank, piece.owner
    )


def must_promote(piece: Piece, destination_rank: int) -> bool:
    """True if the piece would have no legal move left without promoting."""
    if piece.promoted:
        return False

    is_sente = piece.owner == Player.SENTE
    last_rank = 9 if is_sente else 1
    second_last_rank = 8 if is_sente else 2

    if piece.kind in (PieceKind.PAWN, PieceKind.LANCE):
        return destination_rank == last_rank
    if piece.kind == PieceKind.KNIGHT:
        # 先手は 8〜9段、後手は 1〜2段
        if is_sente:
            return destination_rank >= second_last_rank
        return destination_rank <= second_last_rank
    return False


def promotion_option(piece: Piece, origin: Square, destination: Square) -> PromotionOption:
    if must_promote(piece, destination.rank):
        return PromotionOption.FORCED
    if may_promote(piece, origin, destination):
        return PromotionOption.OPTIONAL
    return PromotionOption.NONE


def promote_piece(piece: Piece) -> Piece:
    """成った駒を返す。成れない駒はそのまま返す。"""
    if not is_promotable(piece.kind):
        return piece
    return replace(piece, promoted=True)
