"""Legal destination generation for board moves.

盤上の駒の移動先を列挙する。王手の判定は行わない（詰み判定は対象外）。
不正な入力は例外ではなく空集合・False を返す。
"""

from __future__ import annotations

from kifunarabe.game.board import Board, Piece, Square, is_valid_square
from kifunarabe.game.patterns import Vector, pattern, vector_range
from kifunarabe.game.promotion import promote_piece
from kifunarabe.game.types import MAX_COORD, Player


def adjusted_vectors(piece: Piece) -> list[Vector]:
    """Return the piece's direction vectors in its owner's orientation.

    先手はそのまま、後手は両成分を反転する。
    """
    vectors = pattern(piece.kind, piece.promoted).vectors
    if piece.owner == Player.SENTE:
        return list(vectors)
    return [(-d_file, -d_rank) for d_file, d_rank in vectors]


def legal_destinations(piece: Piece, origin: Square, board: Board) -> frozenset[Square]:
    """Enumerate every square the piece may move to from origin.

    各方向について1マスずつ進み:
    - 盤外なら打ち切り
    - 味方の駒があれば含めずに打ち切り
    - 相手の駒があれば含めて打ち切り（駒取り）
    - 空きマスなら含めて、射程が残っていれば続ける
    """
    if not is_valid_square(origin):
        return frozenset()

    destinations: set[Square] = set()
    for d_file, d_rank in adjusted_vectors(piece):
        # 斜め・縦横の区別は後手の反転後も変わらない
        limit = vector_range(piece.kind, piece.promoted, (d_file, d_rank))
        max_steps = MAX_COORD if limit is None else limit
        for step in range(1, max_steps + 1):
            target = origin.offset(d_file, d_rank, step)
            if not is_valid_square(target):
                break
            occupant = board.piece_at(target)
            if occupant is not None and occupant.owner == piece.owner:
                break
            destinations.add(target)
            if occupant is not None:
                break  # Captured, stop sliding
    return frozenset(destinations)


def is_legal_move(origin: Square, destination: Square, piece: Piece, board: Board) -> bool:
    """移動先が盤内で、かつ legal_destinations に含まれるか。"""
    if not is_valid_square(destination):
        return False
    return destination in legal_destinations(piece, origin, board)


def is_path_clear(origin: Square, destination: Square, board: Board) -> bool:
    """Check that no piece stands strictly between origin and destination.

    1マス移動と桂馬のジャンプは途中のマスがないので常に True。
    """
    d_file = destination.file - origin.file
    d_rank = destination.rank - origin.rank

    if abs(d_file) <= 1 and abs(d_rank) <= 1:
        return True
    if abs(d_file) == 1 and abs(d_rank) == 2:
        return True

    step_file = (d_file > 0) - (d_file < 0)
    step_rank = (d_rank > 0) - (d_rank < 0)

    current = origin.offset(step_file, step_rank)
    while current != destination:
        if not is_valid_square(current):
            # 直線上にない移動先（例: 2マス横+3マス前）は盤外まで進んでしまう
            return False
        if board.is_occupied(current):
            return False
        current = current.offset(step_file, step_rank)
    return True


def move_piece(
    board: Board,
    origin: Square,
    destination: Square,
    promote: bool = False,
) -> Board:
    """Move the piece at origin to destination and return the new board.

    移動先に駒があれば上書きされる（持ち駒への追加は capture 側で行う）。
    origin に駒がない場合は盤面をそのまま返す。
    """
    piece = board.piece_at(origin)
    if piece is None or not is_valid_square(destination):
        return board
    if promote and not piece.promoted:
        piece = promote_piece(piece)
    return board.set_piece(origin, None).set_piece(destination, piece)
