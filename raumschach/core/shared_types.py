"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    ACTIVE = "active"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"

    @property
    def is_terminal(self) -> bool:
        """No further moves may change the board once the game reached one of these."""
        return self in (Status.CHECKMATE, Status.STALEMATE)


# NOTE: An empty cell is simply `None` on the board, so neither enum carries an "empty" option.


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opposite(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    UNICORN = "unicorn"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"
