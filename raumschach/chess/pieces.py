"""Defines the chess pieces of Raumschach"""

from dataclasses import dataclass, field, replace
from typing import Self

from raumschach.core.shared_types import Color, PieceType

CHAR_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "u": PieceType.UNICORN,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_CHAR: dict[PieceType, str] = {
    value: key for key, value in CHAR_TO_PIECE.items()
}


PIECE_POINTS: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.UNICORN: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
}


@dataclass(frozen=True)
class Piece:
    """
    Frozen on purpose: boards get copied on every move and share their Piece objects,
    so a piece must never change once it is placed.
    """

    type: PieceType
    color: Color
    points: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        # NOTE: The King's worth is undefined (does not count towards total points)
        object.__setattr__(self, "points", PIECE_POINTS.get(self.type, 0))

    @classmethod
    def from_char(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = CHAR_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_char(self) -> str:
        return (
            PIECE_TO_CHAR[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_CHAR[self.type].lower()
        )

    def promoted_to(self, new_type: PieceType) -> Self:
        """A pawn reaching the far level gets replaced by a new piece of the same color."""
        return replace(self, type=new_type)
