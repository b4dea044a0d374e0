"""kifunarabe: a two-player shogi board with full move legality."""

__version__ = "0.1.0"
