"""Game orchestration for two players at one board.

対局の進行管理。エンジン関数（移動・打ち・成り・持ち駒・履歴）を組み合わせて
1手ずつ新しい ShogiGame を返す。元のオブジェクトは変更しない。

終局判定（詰み・王手放置）は行わない。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from kifunarabe.game.board import Board, Square, all_squares
from kifunarabe.game.capture import (
    CapturedPieces,
    add_to_hand,
    remove_from_hand,
    target_piece,
)
from kifunarabe.game.drops import DropRejection, drop, valid_drop_squares, validate_drop
from kifunarabe.game.history import (
    GameHistory,
    HistoryEntry,
    NavigationStatus,
    current,
    jump_to_end,
    jump_to_start,
    navigation_status,
    new_history,
    record,
    step_back,
    step_forward,
)
from kifunarabe.game.moves import is_legal_move, legal_destinations, move_piece
from kifunarabe.game.promotion import PromotionOption, promotion_option
from kifunarabe.game.selection import (
    NO_SELECTION,
    BoardSelection,
    HandSelection,
    Selection,
    can_select_piece,
    switch_turn,
)
from kifunarabe.game.types import PieceKind, Player

logger = logging.getLogger(__name__)


class IllegalMoveError(ValueError):
    """Raised when a requested move or drop is rejected.

    reason は打てない理由（DropRejection）。盤上の手の場合は None。
    """

    def __init__(self, message: str, reason: DropRejection | None = None) -> None:
        super().__init__(message)
        self.reason = reason


@dataclass(frozen=True)
class ShogiGame:
    """Immutable game: the history log plus helpers that advance it.

    現在表示中の局面は常に history.entries[history.current_index]。
    過去の局面を表示中に手を指すと、それより後ろの履歴は捨てられる。
    """

    history: GameHistory = field(default_factory=new_history)

    @classmethod
    def new(cls) -> ShogiGame:
        """平手の初期局面から始める。"""
        return cls(history=new_history(HistoryEntry()))

    @property
    def entry(self) -> HistoryEntry:
        return current(self.history)

    @property
    def board(self) -> Board:
        return self.entry.board

    @property
    def captured(self) -> CapturedPieces:
        return self.entry.captured

    @property
    def turn(self) -> Player:
        return self.entry.turn

    @property
    def move_number(self) -> int:
        return self.entry.move_number

    @property
    def navigation(self) -> NavigationStatus:
        return navigation_status(self.history)

    # --- selection -------------------------------------------------------

    def select(self, square: Square) -> Selection:
        """盤上の駒を選択する。手番の駒でなければ NoSelection。"""
        piece = self.board.piece_at(square)
        if not can_select_piece(piece, self.turn):
            return NO_SELECTION
        return BoardSelection(square=square, owner=self.turn)

    def select_hand(self, kind: PieceKind) -> Selection:
        if self.captured.for_player(self.turn).count(kind) == 0:
            return NO_SELECTION
        return HandSelection(kind=kind, owner=self.turn)

    def highlights(self, selection: Selection) -> frozenset[Square]:
        """選択中の駒を動かせる（打てる）マスを返す。"""
        if isinstance(selection, BoardSelection):
            return self.destinations(selection.square)
        if isinstance(selection, HandSelection):
            return self.drop_squares(selection.kind)
        return frozenset()

    def destinations(self, square: Square) -> frozenset[Square]:
        piece = self.board.piece_at(square)
        if not can_select_piece(piece, self.turn):
            return frozenset()
        assert piece is not None
        return legal_destinations(piece, square, self.board)

    def drop_squares(self, kind: PieceKind) -> frozenset[Square]:
        """持ち駒を打てるマス。歩は二歩になる筋を除く。"""
        if self.captured.for_player(self.turn).count(kind) == 0:
            return frozenset()
        if kind == PieceKind.PAWN:
            return valid_drop_squares(self.board, self.turn)
        return frozenset(s for s in all_squares() if not self.board.is_occupied(s))

    # --- moves -----------------------------------------------------------

    def promotion_option(self, origin: Square, destination: Square) -> PromotionOption:
        piece = self.board.piece_at(origin)
        if piece is None:
            return PromotionOption.NONE
        return promotion_option(piece, origin, destination)

    def play_move(
        self,
        origin: Square,
        destination: Square,
        promote: bool = False,
    ) -> ShogiGame:
        """Move a piece and return the game after the move.

        強制成りの場合は promote の値にかかわらず成る。
        成れない手で promote=True を指定しても無視する。
        """
        piece = self.board.piece_at(origin)
        if not can_select_piece(piece, self.turn):
            logger.debug("rejected move from %s: not %s's piece", origin, self.turn.key)
            msg = f"No {self.turn.key} piece at {tuple(origin)}"
            raise IllegalMoveError(msg)
        assert piece is not None
        if not is_legal_move(origin, destination, piece, self.board):
            logger.debug("rejected move %s -> %s", origin, destination)
            msg = f"Illegal move: {tuple(origin)} -> {tuple(destination)}"
            raise IllegalMoveError(msg)

        option = promotion_option(piece, origin, destination)
        do_promote = option == PromotionOption.FORCED or (
            option == PromotionOption.OPTIONAL and promote
        )

        captured = self.captured
        target = target_piece(self.board, destination, self.turn)
        if target is not None:
            captured = add_to_hand(captured, target, self.turn)

        board = move_piece(self.board, origin, destination, promote=do_promote)
        return self._advance(board, captured)

    def play_drop(self, square: Square, kind: PieceKind) -> ShogiGame:
        """Drop a piece from the side-to-move's hand onto square."""
        if self.captured.for_player(self.turn).count(kind) == 0:
            msg = f"No {kind.name} in {self.turn.key}'s hand"
            raise IllegalMoveError(msg)
        result = validate_drop(self.board, square, kind, self.turn)
        if not result.is_valid:
            logger.debug("rejected drop of %s at %s: %s", kind.name, square, result.reason)
            raise IllegalMoveError(result.message or "Illegal drop", reason=result.reason)

        board = drop(self.board, square, kind, self.turn)
        captured = remove_from_hand(self.captured, kind, self.turn)
        return self._advance(board, captured)

    def _advance(self, board: Board, captured: CapturedPieces) -> ShogiGame:
        entry = HistoryEntry(
            board=board,
            captured=captured,
            turn=switch_turn(self.turn),  # 手番交代
            move_number=self.move_number + 1,
        )
        return ShogiGame(history=record(self.history, entry))

    # --- navigation ------------------------------------------------------

    def undo(self) -> ShogiGame:
        return ShogiGame(history=step_back(self.history))

    def redo(self) -> ShogiGame:
        return ShogiGame(history=step_forward(self.history))

    def to_start(self) -> ShogiGame:
        return ShogiGame(history=jump_to_start(self.history))

    def to_end(self) -> ShogiGame:
        return ShogiGame(history=jump_to_end(self.history))
