"""Save and restore a game as versioned JSON.

対局状態（盤面・持ち駒・手番・履歴・現在位置）を JSON ファイルに保存・復元する。
読み込んだデータは pydantic のスキーマで検証し、壊れたデータや形式の合わない
データは None を返して初期配置から始められるようにする。

保存・読み込みの失敗は例外にせず、警告ログを出して False / None を返す。
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    ValidationError,
    field_validator,
    model_validator,
)

from kifunarabe.game.board import Board, Piece, Square
from kifunarabe.game.capture import CapturedPieces, Hand
from kifunarabe.game.history import GameHistory, HistoryEntry
from kifunarabe.game.state import ShogiGame
from kifunarabe.game.types import ROYAL_KINDS, PieceKind, Player

logger = logging.getLogger(__name__)

# データ形式のバージョン（セマンティックバージョニング）
CURRENT_VERSION = "1.0.0"

PlayerKey = Literal["sente", "gote"]


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class PieceRecord(_Record):
    """盤上の駒1枚。type は駒の一文字表記（"歩" など）。"""

    type: str
    player: PlayerKey
    file: int = Field(ge=1, le=9)
    rank: int = Field(ge=1, le=9)
    promoted: bool = False

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: str) -> str:
        PieceKind.from_symbol(value)
        return value


class CapturedRecord(_Record):
    sente: dict[str, NonNegativeInt] = Field(default_factory=dict)
    gote: dict[str, NonNegativeInt] = Field(default_factory=dict)

    @field_validator("sente", "gote")
    @classmethod
    def _known_kinds(cls, value: dict[str, int]) -> dict[str, int]:
        for symbol in value:
            if PieceKind.from_symbol(symbol) in ROYAL_KINDS:
                msg = f"King cannot be held in hand: {symbol}"
                raise ValueError(msg)
        return value


class HistoryEntryRecord(_Record):
    pieces: list[PieceRecord]
    captured: CapturedRecord = Field(alias="capturedPieces")
    current_turn: PlayerKey = Field(alias="currentTurn")
    move_number: NonNegativeInt = Field(alias="moveNumber")


class PersistedGame(_Record):
    """保存される対局状態の完全なスナップショット。"""

    pieces: list[PieceRecord]
    captured: CapturedRecord = Field(alias="capturedPieces")
    current_turn: PlayerKey = Field(alias="currentTurn")
    history: list[HistoryEntryRecord]
    current_index: int = Field(alias="currentIndex")
    version: str
    timestamp: int

    @model_validator(mode="after")
    def _index_in_range(self) -> PersistedGame:
        if not 0 <= self.current_index <= len(self.history):
            msg = f"currentIndex {self.current_index} out of range"
            raise ValueError(msg)
        return self


# --- conversion ------------------------------------------------------------


def _pieces_to_records(board: Board) -> list[PieceRecord]:
    return [
        PieceRecord(
            type=piece.kind.symbol,
            player=piece.owner.key,
            file=square.file,
            rank=square.rank,
            promoted=piece.promoted,
        )
        for square, piece in board.pieces()
    ]


def _captured_to_record(captured: CapturedPieces) -> CapturedRecord:
    def hand_dict(player: Player) -> dict[str, int]:
        return {k.symbol: c for k, c in captured.for_player(player).as_dict().items()}

    return CapturedRecord(sente=hand_dict(Player.SENTE), gote=hand_dict(Player.GOTE))


def _board_from_records(records: list[PieceRecord]) -> Board:
    return Board.from_pieces(
        (
            Square(r.file, r.rank),
            Piece(PieceKind.from_symbol(r.type), Player.from_key(r.player), r.promoted),
        )
        for r in records
    )


def _captured_from_record(record: CapturedRecord) -> CapturedPieces:
    def hand(counts: dict[str, int]) -> Hand:
        return Hand.from_dict({PieceKind.from_symbol(s): c for s, c in counts.items()})

    return CapturedPieces(hands=(hand(record.sente), hand(record.gote)))


def _entry_to_record(entry: HistoryEntry) -> HistoryEntryRecord:
    return HistoryEntryRecord(
        pieces=_pieces_to_records(entry.board),
        captured=_captured_to_record(entry.captured),
        current_turn=entry.turn.key,
        move_number=entry.move_number,
    )


def _entry_from_record(record: HistoryEntryRecord) -> HistoryEntry:
    return HistoryEntry(
        board=_board_from_records(record.pieces),
        captured=_captured_from_record(record.captured),
        turn=Player.from_key(record.current_turn),
        move_number=record.move_number,
    )


def game_to_record(game: ShogiGame, timestamp: int | None = None) -> PersistedGame:
    """Convert a game to its persisted form (version and timestamp added)."""
    return PersistedGame(
        pieces=_pieces_to_records(game.board),
        captured=_captured_to_record(game.captured),
        current_turn=game.turn.key,
        history=[_entry_to_record(e) for e in game.history.entries],
        current_index=game.history.current_index,
        version=CURRENT_VERSION,
        timestamp=int(time.time() * 1000) if timestamp is None else timestamp,
    )


def game_from_record(record: PersistedGame) -> ShogiGame:
    """Rebuild a game from a validated record.

    履歴が空なら最上位の pieces / capturedPieces / currentTurn から1エントリ作る。
    currentIndex が履歴の長さと等しい場合は最終手に合わせる。

    Raises:
        ValueError: 同じマスに2枚の駒があるなど、盤面として成立しない場合。
    """
    entries = tuple(_entry_from_record(e) for e in record.history)
    if not entries:
        entries = (
            HistoryEntry(
                board=_board_from_records(record.pieces),
                captured=_captured_from_record(record.captured),
                turn=Player.from_key(record.current_turn),
                move_number=0,
            ),
        )
    index = min(record.current_index, len(entries) - 1)
    return ShogiGame(history=GameHistory(entries=entries, current_index=index))


def validate_persisted(data: object) -> PersistedGame | None:
    """Validate raw decoded data; return None if it does not fit the schema."""
    try:
        return PersistedGame.model_validate(data)
    except ValidationError:
        return None


# --- storage ---------------------------------------------------------------


class GameStore:
    """A single-slot JSON file store for the current game."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def save(self, game: ShogiGame) -> bool:
        """保存に成功したら True。失敗時は警告ログを出して False。"""
        try:
            record = game_to_record(game)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(record.model_dump_json(by_alias=True), encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to save game state to %s: %s", self.path, exc)
            return False
        return True

    def load(self) -> ShogiGame | None:
        """保存された対局を返す。データがない・壊れている場合は None。"""
        if not self.path.exists():
            return None
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to load game state from %s: %s", self.path, exc)
            return None

        try:
            record = PersistedGame.model_validate_json(text)
        except ValidationError as exc:
            logger.warning("Invalid persisted game state in %s: %s", self.path, exc)
            return None

        try:
            return game_from_record(record)
        except ValueError as exc:
            logger.warning("Inconsistent persisted game state in %s: %s", self.path, exc)
            return None

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Failed to clear game state at %s: %s", self.path, exc)
