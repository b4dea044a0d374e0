"""CLI entry point for kifunarabe: two players at one terminal.

コマンドラインで動く将棋盤。先手・後手とも人間が交互に入力する。
1手ごとに対局状態を保存し、次回起動時に続きから再開する。

起動方法: `kifunarabe`

コマンド:
  77 76        7七の駒を7六へ動かす（筋・段の2桁）
  P*55         持ち駒の歩を5五に打つ（P L N S G B R）
  ? 77         7七の駒の移動先を表示
  u / r        一手戻る / 一手進む
  f / l        初手に戻る / 最終手に進む
  new          新規対局
  q            終了
"""

from __future__ import annotations

import logging

from kifunarabe.config import AppConfig, load_config
from kifunarabe.game.board import Square
from kifunarabe.game.display import format_board
from kifunarabe.game.promotion import PromotionOption
from kifunarabe.game.selection import turn_display_name
from kifunarabe.game.state import IllegalMoveError, ShogiGame
from kifunarabe.game.types import PieceKind
from kifunarabe.persistence import GameStore

# 打ち駒の英字表記
DROP_LETTERS: dict[str, PieceKind] = {
    "P": PieceKind.PAWN,
    "L": PieceKind.LANCE,
    "N": PieceKind.KNIGHT,
    "S": PieceKind.SILVER,
    "G": PieceKind.GOLD,
    "B": PieceKind.BISHOP,
    "R": PieceKind.ROOK,
}

_NAVIGATION = {
    "u": ShogiGame.undo,
    "r": ShogiGame.redo,
    "f": ShogiGame.to_start,
    "l": ShogiGame.to_end,
}


def parse_square(text: str) -> Square:
    """Parse a two-digit square like "76" (file 7, rank 6).

    Raises:
        ValueError: 2桁の数字でない場合。
    """
    if len(text) != 2 or not text.isdigit():
        msg = f"Bad square: {text!r}"
        raise ValueError(msg)
    return Square(int(text[0]), int(text[1]))


def _format_squares(squares: frozenset[Square]) -> str:
    if not squares:
        return "(none)"
    return " ".join(f"{s.file}{s.rank}" for s in sorted(squares))


def _ask_promotion() -> bool:
    while True:
        answer = input("Promote? [y/n]: ").strip().lower()
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no"):
            return False


def handle_command(game: ShogiGame, line: str) -> ShogiGame:
    """Apply one input line to the game and return the resulting game.

    Raises:
        IllegalMoveError: 反則手の場合。
        ValueError: 入力の形式が正しくない場合。
    """
    tokens = line.split()
    if not tokens:
        return game

    head = tokens[0]
    if head in _NAVIGATION:
        return _NAVIGATION[head](game)
    if head == "new":
        return ShogiGame.new()
    if head == "?":
        if len(tokens) != 2:
            msg = "Usage: ? 77"
            raise ValueError(msg)
        print(_format_squares(game.destinations(parse_square(tokens[1]))))
        return game
    if "*" in head:
        letter, _, target = head.partition("*")
        kind = DROP_LETTERS.get(letter.upper())
        if kind is None:
            msg = f"Unknown piece letter: {letter!r}"
            raise ValueError(msg)
        return game.play_drop(parse_square(target), kind)
    if len(tokens) == 2:
        origin, destination = parse_square(tokens[0]), parse_square(tokens[1])
        promote = False
        if game.promotion_option(origin, destination) == PromotionOption.OPTIONAL and (
            destination in game.destinations(origin)
        ):
            promote = _ask_promotion()
        return game.play_move(origin, destination, promote=promote)

    msg = f"Unknown command: {line!r}"
    raise ValueError(msg)


def main(config: AppConfig | None = None) -> None:
    """Run a two-player game in the terminal."""
    logging.basicConfig(level=logging.WARNING)
    config = config or load_config()
    store = GameStore(config.storage_path)

    game = store.load() or ShogiGame.new()

    print("=== 棋譜並べ ===")
    print("Moves: '77 76', drops: 'P*55', '?' for destinations, u/r/f/l, new, q")
    print()

    while True:
        nav = game.navigation
        print(format_board(game.board, game.captured))
        print(f"{turn_display_name(game.turn)}  ({nav.current_move}/{nav.total_moves})")

        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if line == "q":
            break

        try:
            updated = handle_command(game, line)
        except IllegalMoveError as exc:
            print(f"Illegal: {exc}")
            continue
        except ValueError as exc:
            print(f"Invalid input: {exc}")
            continue

        if updated is not game and config.autosave:
            store.save(updated)
        game = updated
        print()


if __name__ == "__main__":
    main()
