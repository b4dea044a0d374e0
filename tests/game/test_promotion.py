"""Tests for promotion eligibility."""

from __future__ import annotations

from kifunarabe.game.board import Piece, Square
from kifunarabe.game.promotion import (
    PromotionOption,
    is_enemy_zone,
    is_promotable,
    may_promote,
    must_promote,
    promote_piece,
    promotion_option,
)
from kifunarabe.game.types import PieceKind, Player


class TestPromotable:
    def test_non_promotable_kinds(self) -> None:
        for kind in (PieceKind.GOLD, PieceKind.KING, PieceKind.JEWEL):
            assert not is_promotable(kind)

    def test_promotable_kinds(self) -> None:
        for kind in (
            PieceKind.PAWN, PieceKind.LANCE, PieceKind.KNIGHT,
            PieceKind.SILVER, PieceKind.BISHOP, PieceKind.ROOK,
        ):
            assert is_promotable(kind)


class TestEnemyZone:
    def test_sente_zone(self) -> None:
        assert [r for r in range(1, 10) if is_enemy_zone(r, Player.SENTE)] == [7, 8, 9]

    def test_gote_zone(self) -> None:
        assert [r for r in range(1, 10) if is_enemy_zone(r, Player.GOTE)] == [1, 2, 3]


class TestMayPromote:
    def test_entering_zone(self) -> None:
        silver = Piece(PieceKind.SILVER, Player.SENTE)
        assert may_promote(silver, Square(5, 6), Square(5, 7))

    def test_leaving_zone(self) -> None:
        silver = Piece(PieceKind.SILVER, Player.SENTE)
        assert may_promote(silver, Square(5, 7), Square(4, 6))

    def test_outside_zone(self) -> None:
        silver = Piece(PieceKind.SILVER, Player.SENTE)
        assert not may_promote(silver, Square(5, 5), Square(5, 6))

    def test_gote_entering_zone(self) -> None:
        bishop = Piece(PieceKind.BISHOP, Player.GOTE)
        assert may_promote(bishop, Square(8, 8), Square(2, 2))

    def test_already_promoted(self) -> None:
        tokin = Piece(PieceKind.PAWN, Player.SENTE, promoted=True)
        assert not may_promote(tokin, Square(5, 7), Square(5, 8))

    def test_gold_never(self) -> None:
        gold = Piece(PieceKind.GOLD, Player.SENTE)
        assert not may_promote(gold, Square(5, 7), Square(5, 8))


class TestMustPromote:
    def test_sente_pawn_last_rank(self) -> None:
        pawn = Piece(PieceKind.PAWN, Player.SENTE)
        assert must_promote(pawn, 9)
        assert not must_promote(pawn, 8)

    def test_gote_pawn_last_rank(self) -> None:
        pawn = Piece(PieceKind.PAWN, Player.GOTE)
        assert must_promote(pawn, 1)
        assert not must_promote(pawn, 2)

    def test_lance_last_rank(self) -> None:
        assert must_promote(Piece(PieceKind.LANCE, Player.SENTE), 9)
        assert must_promote(Piece(PieceKind.LANCE, Player.GOTE), 1)

    def test_sente_knight_last_two_ranks(self) -> None:
        knight = Piece(PieceKind.KNIGHT, Player.SENTE)
        assert must_promote(knight, 9)
        assert must_promote(knight, 8)
        assert not must_promote(knight, 7)

    def test_gote_knight_last_two_ranks(self) -> None:
        knight = Piece(PieceKind.KNIGHT, Player.GOTE)
        assert must_promote(knight, 1)
        assert must_promote(knight, 2)
        assert not must_promote(knight, 3)

    def test_already_promoted(self) -> None:
        assert not must_promote(Piece(PieceKind.PAWN, Player.SENTE, promoted=True), 9)

    def test_other_kinds(self) -> None:
        assert not must_promote(Piece(PieceKind.SILVER, Player.SENTE), 9)
        assert not must_promote(Piece(PieceKind.ROOK, Player.GOTE), 1)


class TestPromotionOption:
    def test_forced(self) -> None:
        pawn = Piece(PieceKind.PAWN, Player.SENTE)
        assert promotion_option(pawn, Square(5, 8), Square(5, 9)) == PromotionOption.FORCED

    def test_optional(self) -> None:
        pawn = Piece(PieceKind.PAWN, Player.SENTE)
        assert promotion_option(pawn, Square(5, 7), Square(5, 8)) == PromotionOption.OPTIONAL

    def test_none(self) -> None:
        pawn = Piece(PieceKind.PAWN, Player.SENTE)
        assert promotion_option(pawn, Square(5, 5), Square(5, 6)) == PromotionOption.NONE

    def test_promote_piece(self) -> None:
        assert promote_piece(Piece(PieceKind.ROOK, Player.GOTE)).promoted
        gold = Piece(PieceKind.GOLD, Player.GOTE)
        assert promote_piece(gold) == gold
