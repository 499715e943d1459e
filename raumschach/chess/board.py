"""The 5x5x5 board: which piece stands on which cell. Pure data, the rules live elsewhere."""

from dataclasses import dataclass
from typing import Optional, Self

from raumschach.chess.pieces import Color, Piece, PieceType
from raumschach.chess.position import Position, all_positions

# Rows of piece characters per level, starting at rank 0 (first character: file 0)
# White occupies the two bottom levels, black the mirrored two top levels.
STARTING_LAYOUT: dict[int, list[str]] = {
    0: ["RNKNR", "PPPPP"],
    1: ["BUQBU", "PPPPP"],
    3: ["buqbu", "ppppp"],
    4: ["rnknr", "ppppp"],
}


@dataclass
class Board:
    cells: dict[Position, Optional[Piece]]

    @classmethod
    def empty(cls) -> Self:
        return cls({position: None for position in all_positions()})

    @classmethod
    def starting_position(cls) -> Self:
        """Raumschach opening setup, see STARTING_LAYOUT"""
        board = cls.empty()
        for level, rows in STARTING_LAYOUT.items():
            for rank, row in enumerate(rows):
                for file, character in enumerate(row):
                    # every cell gets its own Piece instance
                    board.place_piece(Piece.from_char(character), Position(level, rank, file))
        return board

    def piece(self, position: Position) -> Optional[Piece]:
        """None for an empty cell, but also for anything that is not on the board at all"""
        return self.cells.get(position)

    def is_empty(self, position: Position) -> bool:
        return self.piece(position) is None

    def place_piece(self, piece: Piece, position: Position) -> None:
        """Used to set up a position. Playing moves goes through `with_move()`."""
        if not position.is_within_bounds():
            raise ValueError(f"Cannot place a piece outside of the board: {position}")
        self.cells[position] = piece

    def remove_piece(self, position: Position) -> None:
        if position in self.cells:
            self.cells[position] = None

    def occupied(self) -> list[tuple[Position, Piece]]:
        return [
            (position, piece)
            for position, piece in self.cells.items()
            if piece is not None
        ]

    def locate_color(self, color: Color) -> list[Position]:
        return [position for position, piece in self.occupied() if piece.color == color]

    def locate_king(self, color: Color) -> Optional[Position]:
        """Scan the board for the king of the given color (None if it is not on the board)."""
        return next(
            (
                position
                for position, piece in self.occupied()
                if piece.type == PieceType.KING and piece.color == color
            ),
            None,
        )

    def copy(self) -> Self:
        """Pieces are immutable, so copying the mapping is enough to decouple the two boards"""
        return type(self)(dict(self.cells))

    def with_move(
        self,
        from_position: Position,
        to_position: Position,
        promote_to: Optional[PieceType] = None,
    ) -> Self:
        """
        Copy-on-write update
        ----

        Returns a NEW board with the piece moved (and promoted if requested).
        The board this is called on is left untouched, so anyone still holding on to it keeps seeing the old position.
        """
        new_board = self.copy()
        moving_piece = new_board.cells[from_position]
        if moving_piece is not None and promote_to is not None:
            moving_piece = moving_piece.promoted_to(promote_to)
        new_board.cells[from_position] = None
        new_board.cells[to_position] = moving_piece
        return new_board

    def count_material(self) -> dict[Color, int]:
        """Tally the points of material each player has on the board"""
        return {
            color: sum(piece.points for _, piece in self.occupied() if piece.color == color)
            for color in Color
        }
