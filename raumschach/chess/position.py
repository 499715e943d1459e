"""
A single cell of the 5x5x5 board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase, ascii_uppercase, digits

from raumschach.core.exceptions import InvalidPositionError

# Raumschach is played on a cube: (levels, ranks, files)
BOARD_DIMENSIONS = (5, 5, 5)


@dataclass(frozen=True)
class Position:
    level: int
    rank: int
    file: int

    @classmethod
    def from_notation(cls, notation: str) -> Position:
        """
        Raumschach notation: <level letter><file letter><rank number>
        ---

        * Levels are the capital letters A (bottom, level 0) up to E (top, level 4)
        * Files are the letters a-e, like on a regular board
        * Ranks are 1-5

        ex. 'Aa1' is the corner (0, 0, 0), 'Cc3' the very center of the cube (2, 2, 2)
        """
        if len(notation) != 3:
            raise InvalidPositionError(
                f"Cannot interpret {notation!r} as a position. Expected 3 characters, ex. 'Cc3'."
            )
        level_char, file_char, rank_char = notation
        level = ascii_uppercase.find(level_char)
        file = ascii_lowercase.find(file_char)
        # "0" and anything that is not an ASCII digit end up off the board
        rank = digits.find(rank_char) - 1

        position = cls(level, rank, file)
        if not position.is_within_bounds():
            raise InvalidPositionError(
                f"Position {notation!r} does not lie on the {'x'.join(map(str, BOARD_DIMENSIONS))} board."
            )
        return position

    def to_notation(self) -> str:
        if not self.is_within_bounds():
            raise InvalidPositionError(f"{self} does not lie on the board, it has no name.")
        return f"{ascii_uppercase[self.level]}{ascii_lowercase[self.file]}{self.rank + 1}"

    def is_within_bounds(self) -> bool:
        return (
            (0 <= self.level < BOARD_DIMENSIONS[0])
            and (0 <= self.rank < BOARD_DIMENSIONS[1])
            and (0 <= self.file < BOARD_DIMENSIONS[2])
        )

    def shifted(self, d_level: int, d_rank: int, d_file: int) -> Position:
        """The position reached by taking a step along the given vector (may fall off the board)."""
        return Position(self.level + d_level, self.rank + d_rank, self.file + d_file)


# The UI sends this (any negative coordinate works) to drop the current selection
DESELECT = Position(-1, -1, -1)


def all_positions() -> list[Position]:
    """Every cell of the board, level by level"""
    return [
        Position(level, rank, file)
        for level in range(BOARD_DIMENSIONS[0])
        for rank in range(BOARD_DIMENSIONS[1])
        for file in range(BOARD_DIMENSIONS[2])
    ]
