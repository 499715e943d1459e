"""Helpers for implementing the pawn promotion rules. The Game drives the actual hand-off."""

from dataclasses import dataclass
from typing import Optional

from raumschach.chess.pieces import Color, Piece, PieceType
from raumschach.chess.position import BOARD_DIMENSIONS, Position
from raumschach.core.settings import PROMOTION_OPTIONS


@dataclass(frozen=True)
class PendingPromotion:
    """
    A pawn reached the far level and the player still has to pick the piece it turns into.
    Lives only until that choice is made. The board is not changed while it exists.
    """

    position: Position
    color: Color
    from_position: Position


def promotion_level(color: Color) -> int:
    """White pawns promote on the top level, black pawns on the bottom level"""
    return BOARD_DIMENSIONS[0] - 1 if color == Color.WHITE else 0


def is_promotion_move(piece: Optional[Piece], to_position: Position) -> bool:
    """check if the move is a pawn move that reaches the far level for its color"""
    if piece is None or piece.type != PieceType.PAWN:
        return False
    return to_position.level == promotion_level(piece.color)


def is_promotable(piece_type: PieceType | str) -> bool:
    """plain strings work too, ex. "queen" (PieceType is a StrEnum)"""
    return piece_type in PROMOTION_OPTIONS
