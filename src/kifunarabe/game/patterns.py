"""Move pattern table.

駒種・成り状態ごとの移動パターン（方向ベクトル + 射程）。
ベクトルは (d_file, d_rank) で、先手視点（前 = rank 増加方向）で定義する。
後手の場合は参照時に両成分を反転する（テーブルには二重に持たない）。
"""

from __future__ import annotations

from typing import NamedTuple

from kifunarabe.game.types import NON_PROMOTABLE_KINDS, PieceKind

Vector = tuple[int, int]

# 射程: 1 なら1マスのみ、None なら盤端か駒に当たるまで
STEP = 1
UNBOUNDED = None


class MovePattern(NamedTuple):
    vectors: tuple[Vector, ...]
    range: int | None


_FORWARD: tuple[Vector, ...] = ((0, 1),)
_ORTHOGONAL: tuple[Vector, ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))
_DIAGONAL: tuple[Vector, ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
_ALL_DIRECTIONS: tuple[Vector, ...] = _ORTHOGONAL + _DIAGONAL

# 金: 前3方向 + 横2方向 + 真後ろ
_GOLD_VECTORS: tuple[Vector, ...] = (
    (-1, 1), (0, 1), (1, 1),
    (-1, 0), (1, 0),
    (0, -1),
)

_GOLD = MovePattern(_GOLD_VECTORS, STEP)
_KING = MovePattern(_ALL_DIRECTIONS, STEP)

MOVE_PATTERNS: dict[tuple[PieceKind, bool], MovePattern] = {
    (PieceKind.PAWN, False): MovePattern(_FORWARD, STEP),
    (PieceKind.LANCE, False): MovePattern(_FORWARD, UNBOUNDED),
    # 桂: 2マス前 + 左右1マス（飛び越え可）
    (PieceKind.KNIGHT, False): MovePattern(((-1, 2), (1, 2)), STEP),
    # 銀: 前3方向 + 斜め後ろ2方向
    (PieceKind.SILVER, False): MovePattern(
        ((-1, 1), (0, 1), (1, 1), (-1, -1), (1, -1)), STEP
    ),
    (PieceKind.GOLD, False): _GOLD,
    (PieceKind.BISHOP, False): MovePattern(_DIAGONAL, UNBOUNDED),
    (PieceKind.ROOK, False): MovePattern(_ORTHOGONAL, UNBOUNDED),
    (PieceKind.KING, False): _KING,
    (PieceKind.JEWEL, False): _KING,
    # 成り駒（と・成香・成桂・成銀）は金と同じ動き
    (PieceKind.PAWN, True): _GOLD,
    (PieceKind.LANCE, True): _GOLD,
    (PieceKind.KNIGHT, True): _GOLD,
    (PieceKind.SILVER, True): _GOLD,
    # 馬・龍は全方向。追加された方向だけ射程1になる（vector_range で判定）
    (PieceKind.BISHOP, True): MovePattern(_ALL_DIRECTIONS, UNBOUNDED),
    (PieceKind.ROOK, True): MovePattern(_ALL_DIRECTIONS, UNBOUNDED),
}


def pattern(kind: PieceKind, promoted: bool) -> MovePattern:
    """Look up the move pattern for (kind, promoted).

    成れない駒種（王・玉・金）には成りのエントリがないため、未成のパターンを返す。
    """
    if kind in NON_PROMOTABLE_KINDS:
        promoted = False
    return MOVE_PATTERNS[(kind, promoted)]


def is_diagonal(vector: Vector) -> bool:
    d_file, d_rank = vector
    return d_file != 0 and d_rank != 0


def vector_range(kind: PieceKind, promoted: bool, vector: Vector) -> int | None:
    """Range of a single direction, applying the Dragon/Horse override.

    龍（成り飛）は斜めが1マス、馬（成り角）は縦横が1マス。
    それ以外はパターン全体の射程をそのまま使う。
    """
    if promoted and kind == PieceKind.ROOK and is_diagonal(vector):
        return STEP
    if promoted and kind == PieceKind.BISHOP and not is_diagonal(vector):
        return STEP
    return pattern(kind, promoted).range
