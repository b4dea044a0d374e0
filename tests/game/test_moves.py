"""Tests for legal destination generation."""

from __future__ import annotations

from kifunarabe.game.board import Board, Piece, Square
from kifunarabe.game.moves import (
    adjusted_vectors,
    is_legal_move,
    is_path_clear,
    legal_destinations,
    move_piece,
)
from kifunarabe.game.types import PieceKind, Player

CENTER = Square(5, 5)


def _board(*placements: tuple[Square, Piece]) -> Board:
    return Board.from_pieces(placements)


class TestAdjustedVectors:
    def test_sente_uses_table_orientation(self) -> None:
        assert adjusted_vectors(Piece(PieceKind.PAWN, Player.SENTE)) == [(0, 1)]

    def test_gote_negates_both_components(self) -> None:
        assert adjusted_vectors(Piece(PieceKind.KNIGHT, Player.GOTE)) == [(1, -2), (-1, -2)]

    def test_zero_component_stays_zero(self) -> None:
        [(d_file, d_rank)] = adjusted_vectors(Piece(PieceKind.PAWN, Player.GOTE))
        assert d_file == 0
        assert d_rank == -1


class TestStepPieces:
    def test_pawn_on_empty_board(self) -> None:
        pawn = Piece(PieceKind.PAWN, Player.SENTE)
        assert legal_destinations(pawn, Square(5, 7), Board.empty()) == {Square(5, 8)}

    def test_gote_pawn_moves_down(self) -> None:
        pawn = Piece(PieceKind.PAWN, Player.GOTE)
        assert legal_destinations(pawn, CENTER, Board.empty()) == {Square(5, 4)}

    def test_pawn_on_last_rank_has_no_moves(self) -> None:
        pawn = Piece(PieceKind.PAWN, Player.SENTE)
        assert legal_destinations(pawn, Square(5, 9), Board.empty()) == frozenset()

    def test_king_in_center_has_eight_moves(self) -> None:
        king = Piece(PieceKind.KING, Player.SENTE)
        assert len(legal_destinations(king, CENTER, Board.empty())) == 8

    def test_king_in_corner_has_three_moves(self) -> None:
        king = Piece(PieceKind.JEWEL, Player.GOTE)
        assert len(legal_destinations(king, Square(9, 9), Board.empty())) == 3

    def test_gold_moves(self) -> None:
        gold = Piece(PieceKind.GOLD, Player.SENTE)
        assert legal_destinations(gold, CENTER, Board.empty()) == {
            Square(4, 6), Square(5, 6), Square(6, 6),
            Square(4, 5), Square(6, 5),
            Square(5, 4),
        }

    def test_silver_moves(self) -> None:
        silver = Piece(PieceKind.SILVER, Player.SENTE)
        assert legal_destinations(silver, CENTER, Board.empty()) == {
            Square(4, 6), Square(5, 6), Square(6, 6),
            Square(4, 4), Square(6, 4),
        }

    def test_promoted_pawn_moves_like_gold(self) -> None:
        tokin = Piece(PieceKind.PAWN, Player.SENTE, promoted=True)
        gold = Piece(PieceKind.GOLD, Player.SENTE)
        board = Board.empty()
        assert legal_destinations(tokin, CENTER, board) == legal_destinations(gold, CENTER, board)


class TestKnight:
    def test_sente_knight(self) -> None:
        knight = Piece(PieceKind.KNIGHT, Player.SENTE)
        assert legal_destinations(knight, CENTER, Board.empty()) == {
            Square(4, 7),
            Square(6, 7),
        }

    def test_gote_knight(self) -> None:
        knight = Piece(PieceKind.KNIGHT, Player.GOTE)
        assert legal_destinations(knight, CENTER, Board.empty()) == {
            Square(4, 3),
            Square(6, 3),
        }

    def test_knight_jumps_over_pieces(self) -> None:
        knight = Piece(PieceKind.KNIGHT, Player.SENTE)
        blocker = Piece(PieceKind.PAWN, Player.SENTE)
        board = _board(
            (Square(4, 6), blocker),
            (Square(5, 6), Piece(PieceKind.GOLD, Player.SENTE)),
            (Square(6, 6), Piece(PieceKind.SILVER, Player.SENTE)),
        )
        assert legal_destinations(knight, CENTER, board) == {Square(4, 7), Square(6, 7)}


class TestSlidingPieces:
    def test_lance_from_corner(self) -> None:
        lance = Piece(PieceKind.LANCE, Player.SENTE)
        dests = legal_destinations(lance, Square(1, 1), Board.empty())
        assert len(dests) == 8
        assert dests == {Square(1, rank) for rank in range(2, 10)}

    def test_rook_on_empty_board(self) -> None:
        rook = Piece(PieceKind.ROOK, Player.SENTE)
        assert len(legal_destinations(rook, CENTER, Board.empty())) == 16

    def test_bishop_on_empty_board(self) -> None:
        bishop = Piece(PieceKind.BISHOP, Player.GOTE)
        assert len(legal_destinations(bishop, CENTER, Board.empty())) == 16

    def test_friendly_piece_blocks_slide(self) -> None:
        rook = Piece(PieceKind.ROOK, Player.SENTE)
        board = _board((Square(5, 7), Piece(PieceKind.PAWN, Player.SENTE)))
        dests = legal_destinations(rook, CENTER, board)
        assert Square(5, 6) in dests
        assert Square(5, 7) not in dests
        assert Square(5, 8) not in dests

    def test_enemy_piece_is_captured_and_stops_slide(self) -> None:
        rook = Piece(PieceKind.ROOK, Player.SENTE)
        board = _board((Square(5, 7), Piece(PieceKind.PAWN, Player.GOTE)))
        dests = legal_destinations(rook, CENTER, board)
        assert Square(5, 7) in dests
        assert Square(5, 8) not in dests

    def test_dragon(self) -> None:
        dragon = Piece(PieceKind.ROOK, Player.SENTE, promoted=True)
        dests = legal_destinations(dragon, CENTER, Board.empty())
        orthogonal = {Square(5, r) for r in range(1, 10) if r != 5} | {
            Square(f, 5) for f in range(1, 10) if f != 5
        }
        diagonal = {Square(4, 4), Square(4, 6), Square(6, 4), Square(6, 6)}
        assert dests == orthogonal | diagonal
        assert Square(3, 3) not in dests
        assert Square(7, 7) not in dests

    def test_horse(self) -> None:
        horse = Piece(PieceKind.BISHOP, Player.GOTE, promoted=True)
        dests = legal_destinations(horse, CENTER, Board.empty())
        assert len(dests) == 20
        assert {Square(5, 4), Square(5, 6), Square(4, 5), Square(6, 5)} <= dests
        assert Square(5, 7) not in dests
        assert Square(1, 1) in dests
        assert Square(9, 1) in dests


class TestProperties:
    def test_idempotent(self) -> None:
        board = Board()
        rook = Piece(PieceKind.ROOK, Player.SENTE)
        first = legal_destinations(rook, Square(8, 2), board)
        assert first == legal_destinations(rook, Square(8, 2), board)

    def test_gote_result_mirrors_sente(self) -> None:
        board = Board.empty()
        for kind in PieceKind:
            for promoted in (False, True):
                sente = legal_destinations(Piece(kind, Player.SENTE, promoted), CENTER, board)
                gote = legal_destinations(Piece(kind, Player.GOTE, promoted), CENTER, board)
                assert gote == {Square(10 - s.file, 10 - s.rank) for s in sente}

    def test_off_board_origin_has_no_moves(self) -> None:
        king = Piece(PieceKind.KING, Player.SENTE)
        assert legal_destinations(king, Square(0, 0), Board.empty()) == frozenset()

    def test_initial_position_pawn(self) -> None:
        pawn = Piece(PieceKind.PAWN, Player.SENTE)
        assert legal_destinations(pawn, Square(7, 3), Board()) == {Square(7, 4)}

    def test_initial_rook_blocked_by_own_pieces(self) -> None:
        rook = Piece(PieceKind.ROOK, Player.SENTE)
        dests = legal_destinations(rook, Square(8, 2), Board())
        # 左は2筋の角で止まり、前後は自駒で塞がれる
        assert dests == {Square(f, 2) for f in range(3, 8)} | {Square(9, 2)}


class TestIsLegalMove:
    def test_legal(self) -> None:
        pawn = Piece(PieceKind.PAWN, Player.SENTE)
        assert is_legal_move(Square(7, 3), Square(7, 4), pawn, Board())

    def test_not_in_pattern(self) -> None:
        pawn = Piece(PieceKind.PAWN, Player.SENTE)
        assert not is_legal_move(Square(7, 3), Square(7, 5), pawn, Board())

    def test_destination_off_board(self) -> None:
        lance = Piece(PieceKind.LANCE, Player.SENTE)
        assert not is_legal_move(Square(1, 1), Square(1, 10), lance, Board.empty())


class TestIsPathClear:
    def test_adjacent_move_is_clear(self) -> None:
        assert is_path_clear(CENTER, Square(6, 6), Board())

    def test_knight_jump_is_clear(self) -> None:
        board = _board((Square(5, 6), Piece(PieceKind.PAWN, Player.GOTE)))
        assert is_path_clear(CENTER, Square(4, 7), board)

    def test_open_file(self) -> None:
        assert is_path_clear(Square(5, 1), Square(5, 9), Board.empty())

    def test_blocked_file(self) -> None:
        board = _board((Square(5, 4), Piece(PieceKind.PAWN, Player.SENTE)))
        assert not is_path_clear(Square(5, 1), Square(5, 9), board)

    def test_endpoints_are_not_checked(self) -> None:
        board = _board(
            (Square(5, 1), Piece(PieceKind.ROOK, Player.SENTE)),
            (Square(5, 9), Piece(PieceKind.PAWN, Player.GOTE)),
        )
        assert is_path_clear(Square(5, 1), Square(5, 9), board)

    def test_blocked_diagonal(self) -> None:
        board = _board((Square(3, 3), Piece(PieceKind.PAWN, Player.GOTE)))
        assert not is_path_clear(Square(1, 1), Square(5, 5), board)

    def test_off_line_destination(self) -> None:
        assert not is_path_clear(Square(1, 1), Square(3, 4), Board.empty())


class TestMovePiece:
    def test_relocates_piece(self) -> None:
        board = move_piece(Board(), Square(7, 3), Square(7, 4))
        assert board.piece_at(Square(7, 3)) is None
        assert board.piece_at(Square(7, 4)) == Piece(PieceKind.PAWN, Player.SENTE)
        assert len(board.pieces()) == 40

    def test_promotes(self) -> None:
        board = _board((Square(5, 6), Piece(PieceKind.SILVER, Player.SENTE)))
        board = move_piece(board, Square(5, 6), Square(5, 7), promote=True)
        assert board.piece_at(Square(5, 7)) == Piece(PieceKind.SILVER, Player.SENTE, True)

    def test_replaces_captured_piece(self) -> None:
        board = _board(
            (Square(5, 5), Piece(PieceKind.ROOK, Player.SENTE)),
            (Square(5, 7), Piece(PieceKind.PAWN, Player.GOTE)),
        )
        board = move_piece(board, Square(5, 5), Square(5, 7))
        assert board.pieces() == [(Square(5, 7), Piece(PieceKind.ROOK, Player.SENTE))]

    def test_empty_origin_returns_same_board(self) -> None:
        board = Board()
        assert move_piece(board, CENTER, Square(5, 6)) is board
