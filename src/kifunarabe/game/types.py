"""Types and constants for the 9x9 shogi board.

将棋盤（9×9）の基本型・定数定義。
駒は9種類（王・玉・飛・角・金・銀・桂・香・歩）。成りは Piece.promoted で表す。

座標系:
  file（筋）: 1〜9。1 が右端、9 が左端。
  rank（段）: 1〜9。1 が先手の手前、9 が後手の手前。
"""

from __future__ import annotations

from enum import IntEnum, unique

FILES = 9
RANKS = 9
NUM_SQUARES = FILES * RANKS  # 81マス

MIN_COORD = 1
MAX_COORD = 9


@unique
class Player(IntEnum):
    """Player identifiers.

    先手（SENTE）は rank 1 側から rank 9 側へ進む。
    後手（GOTE）は rank 9 側から rank 1 側へ進む。
    """

    SENTE = 0  # 先手
    GOTE = 1   # 後手

    @property
    def opponent(self) -> Player:
        """相手プレイヤーを返す。"""
        return Player(1 - self.value)

    @property
    def key(self) -> str:
        """保存形式・API で使う名前（"sente" / "gote"）。"""
        return self.name.lower()

    @classmethod
    def from_key(cls, key: str) -> Player:
        return cls[key.upper()]


@unique
class PieceKind(IntEnum):
    """The nine base piece kinds.

    王（KING）は先手の玉将、玉（JEWEL）は後手の玉将。
    """

    PAWN = 0    # 歩
    LANCE = 1   # 香
    KNIGHT = 2  # 桂
    SILVER = 3  # 銀
    GOLD = 4    # 金
    BISHOP = 5  # 角
    ROOK = 6    # 飛
    KING = 7    # 王
    JEWEL = 8   # 玉

    @property
    def symbol(self) -> str:
        """駒の一文字表記。"""
        return KIND_SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> PieceKind:
        for kind, sym in KIND_SYMBOLS.items():
            if sym == symbol:
                return kind
        msg = f"Unknown piece symbol: {symbol}"
        raise ValueError(msg)


KIND_SYMBOLS: dict[PieceKind, str] = {
    PieceKind.PAWN: "歩",
    PieceKind.LANCE: "香",
    PieceKind.KNIGHT: "桂",
    PieceKind.SILVER: "銀",
    PieceKind.GOLD: "金",
    PieceKind.BISHOP: "角",
    PieceKind.ROOK: "飛",
    PieceKind.KING: "王",
    PieceKind.JEWEL: "玉",
}

# 成り駒の表記（盤面表示用）
PROMOTED_SYMBOLS: dict[PieceKind, str] = {
    PieceKind.PAWN: "と",
    PieceKind.LANCE: "杏",
    PieceKind.KNIGHT: "圭",
    PieceKind.SILVER: "全",
    PieceKind.BISHOP: "馬",
    PieceKind.ROOK: "龍",
}

ROYAL_KINDS = frozenset({PieceKind.KING, PieceKind.JEWEL})

# 成れない駒種（王・玉・金）
NON_PROMOTABLE_KINDS = ROYAL_KINDS | {PieceKind.GOLD}

# 持ち駒として使える駒種（王・玉以外の7種）
HAND_PIECE_KINDS: list[PieceKind] = [
    PieceKind.PAWN, PieceKind.LANCE, PieceKind.KNIGHT,
    PieceKind.SILVER, PieceKind.GOLD, PieceKind.BISHOP, PieceKind.ROOK,
]
