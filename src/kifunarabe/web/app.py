"""FastAPI web application for the browser shogi board.

ブラウザの将棋盤UIから呼び出す REST API。
盤面の描画・クリック操作はフロントエンドが行い、このサーバは合法手判定と
局面の更新・履歴の操作・保存を受け持つ。

エンドポイント:
  POST /api/new-game      : 新規対局を開始（ゲームIDを返す）
  GET  /api/state/{id}    : 現在の局面情報を取得
  POST /api/destinations  : 選択した駒の移動先（ハイライト用）
  POST /api/drop-squares  : 持ち駒を打てるマス（ハイライト用）
  POST /api/move          : 駒を動かす（成りの選択が必要なら promotion_required）
  POST /api/drop          : 持ち駒を打つ
  POST /api/navigate      : 一手戻る/進む、初手/最終手へ移動
  POST /api/save/{id}     : 対局を保存
  POST /api/load          : 保存された対局を読み込む
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Literal

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from kifunarabe.config import AppConfig, load_config
from kifunarabe.game.board import Square
from kifunarabe.game.display import format_board
from kifunarabe.game.promotion import PromotionOption
from kifunarabe.game.selection import turn_display_name
from kifunarabe.game.state import IllegalMoveError, ShogiGame
from kifunarabe.game.types import PieceKind
from kifunarabe.persistence import GameStore

logger = logging.getLogger(__name__)

app = FastAPI(title="Kifunarabe")

# 対局情報のインメモリストレージ（サーバ再起動で消える）
_games: dict[str, ShogiGame] = {}

_config: AppConfig = load_config()


class SquareModel(BaseModel):
    file: int = Field(ge=1, le=9)
    rank: int = Field(ge=1, le=9)

    def to_square(self) -> Square:
        return Square(self.file, self.rank)


class DestinationsRequest(BaseModel):
    game_id: str
    square: SquareModel


class DropSquaresRequest(BaseModel):
    game_id: str
    kind: str  # 駒の一文字表記（"歩" など）


class MoveRequest(BaseModel):
    """指し手リクエスト。promote が None で成りを選べる手なら選択を求める。"""

    game_id: str
    origin: SquareModel
    destination: SquareModel
    promote: bool | None = None


class DropRequest(BaseModel):
    game_id: str
    kind: str
    square: SquareModel


class NavigateRequest(BaseModel):
    game_id: str
    action: Literal["back", "forward", "start", "end"]


def _store() -> GameStore:
    return GameStore(_config.storage_path)


def _get_game(game_id: str) -> ShogiGame:
    game = _games.get(game_id)
    if game is None:
        raise HTTPException(404, "Game not found")
    return game


def _parse_kind(symbol: str) -> PieceKind:
    try:
        return PieceKind.from_symbol(symbol)
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc


def _squares_to_list(squares: frozenset[Square]) -> list[dict[str, int]]:
    return [{"file": s.file, "rank": s.rank} for s in sorted(squares)]


def _state_to_dict(game: ShogiGame) -> dict[str, Any]:
    """Convert game state to JSON-serializable dict.

    局面情報を JSON 形式（辞書）に変換する。
    フロントエンドの JavaScript がこの形式を受け取って盤面を描画する。
    """
    pieces = [
        {
            "type": piece.kind.symbol,
            "player": piece.owner.key,
            "file": square.file,
            "rank": square.rank,
            "promoted": piece.promoted,
        }
        for square, piece in game.board.pieces()
    ]
    captured = {
        player_key: {k.symbol: c for k, c in game.captured.hands[i].as_dict().items()}
        for i, player_key in enumerate(("sente", "gote"))
    }
    nav = game.navigation
    return {
        "current_turn": game.turn.key,
        "turn_display": turn_display_name(game.turn),
        "move_number": game.move_number,
        "pieces": pieces,
        "captured_pieces": captured,
        "navigation": {
            "can_go_back": nav.can_step_back,
            "can_go_forward": nav.can_step_forward,
            "current_move_number": nav.current_move,
            "total_moves": nav.total_moves,
        },
        "board_display": format_board(game.board, game.captured),
    }


def _update(game_id: str, game: ShogiGame) -> dict[str, Any]:
    _games[game_id] = game
    if _config.autosave:
        _store().save(game)
    return {"game_id": game_id, "state": _state_to_dict(game)}


@app.post("/api/new-game")
def new_game() -> dict[str, Any]:
    """新規対局を開始する。対局IDはその後のリクエストで使用する。"""
    game_id = str(uuid.uuid4())[:8]
    logger.info("new game %s", game_id)
    return _update(game_id, ShogiGame.new())


@app.get("/api/state/{game_id}")
async def get_state(game_id: str) -> dict[str, Any]:
    return _state_to_dict(_get_game(game_id))


@app.post("/api/destinations")
async def destinations(req: DestinationsRequest) -> dict[str, Any]:
    """駒の移動先を返す。手番でない駒・空きマスなら空リスト。"""
    game = _get_game(req.game_id)
    return {"squares": _squares_to_list(game.destinations(req.square.to_square()))}


@app.post("/api/drop-squares")
async def drop_squares(req: DropSquaresRequest) -> dict[str, Any]:
    game = _get_game(req.game_id)
    kind = _parse_kind(req.kind)
    return {"squares": _squares_to_list(game.drop_squares(kind))}


@app.post("/api/move")
def make_move(req: MoveRequest) -> dict[str, Any]:
    """駒を動かす。

    処理フロー:
    1. 成りを選べる手で promote が未指定なら、局面を変えずに選択を求める
    2. 強制成りは自動で成る
    3. 手を適用して新局面を返す
    """
    game = _get_game(req.game_id)
    origin = req.origin.to_square()
    destination = req.destination.to_square()

    if (
        req.promote is None
        and destination in game.destinations(origin)
        and game.promotion_option(origin, destination) == PromotionOption.OPTIONAL
    ):
        return {
            "game_id": req.game_id,
            "promotion_required": True,
            "state": _state_to_dict(game),
        }

    try:
        game = game.play_move(origin, destination, promote=bool(req.promote))
    except IllegalMoveError as exc:
        raise HTTPException(400, str(exc)) from exc
    return {**_update(req.game_id, game), "promotion_required": False}


@app.post("/api/drop")
def make_drop(req: DropRequest) -> dict[str, Any]:
    """持ち駒を打つ。打てない場合は理由コードとメッセージを 400 で返す。"""
    game = _get_game(req.game_id)
    kind = _parse_kind(req.kind)
    try:
        game = game.play_drop(req.square.to_square(), kind)
    except IllegalMoveError as exc:
        detail: dict[str, Any] = {"message": str(exc)}
        if exc.reason is not None:
            detail["error_code"] = exc.reason.value
        raise HTTPException(400, detail) from exc
    return _update(req.game_id, game)


@app.post("/api/navigate")
def navigate(req: NavigateRequest) -> dict[str, Any]:
    game = _get_game(req.game_id)
    moves = {
        "back": game.undo,
        "forward": game.redo,
        "start": game.to_start,
        "end": game.to_end,
    }
    return _update(req.game_id, moves[req.action]())


@app.post("/api/save/{game_id}")
def save_game(game_id: str) -> dict[str, Any]:
    game = _get_game(game_id)
    if not _store().save(game):
        raise HTTPException(500, "Failed to save game state")
    return {"status": "saved"}


@app.post("/api/load")
def load_game() -> dict[str, Any]:
    """保存された対局を新しいゲームIDで読み込む。"""
    game = _store().load()
    if game is None:
        raise HTTPException(404, "No saved game")
    game_id = str(uuid.uuid4())[:8]
    _games[game_id] = game
    logger.info("loaded saved game as %s", game_id)
    return {"game_id": game_id, "state": _state_to_dict(game)}


def main() -> None:
    """Run the web server.

    `kifunarabe-web` または `python -m kifunarabe.web.app` で起動する。
    """
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host=_config.host, port=_config.port)


if __name__ == "__main__":
    main()
