"""
Capturing/attacking rules: is a cell (or a king) under attack?

Built directly on top of the movement rules, using their ATTACK mode.
"""

import logging

from raumschach.chess.board import Board
from raumschach.chess.moves import MoveMode, generate_moves
from raumschach.chess.pieces import Color
from raumschach.chess.position import Position

logger = logging.getLogger(__name__)


def is_position_under_attack(board: Board, position: Position, by_color: Color) -> bool:
    """
    Can any piece of `by_color` reach (capture on) the given cell?
    ---

    Simply asks every piece of that color for its attacked cells.
    At 125 cells that brute force approach is cheap enough, no attack maps are cached.
    """
    return any(
        position in generate_moves(board, attacker, MoveMode.ATTACK)
        for attacker in board.locate_color(by_color)
    )


def is_king_in_check(board: Board, color: Color) -> bool:
    """
    Is the king of `color` attacked by the opponent?

    NOTE: A board without a king of that color is simply reported as 'not in check' (no error).
    """
    king_position = board.locate_king(color)
    if king_position is None:
        logger.debug("No %s king on the board, treating it as not in check", color)
        return False
    return is_position_under_attack(board, king_position, color.opposite)
