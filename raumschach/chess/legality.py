"""
Legality filter: from candidate (pseudo-legal) moves to legal moves

A candidate move is legal if, after playing it, your own king is not in check.
There is no shortcut: every candidate gets played on a copy of the board and the king is checked afterwards.
"""

from raumschach.chess.attacks import is_king_in_check
from raumschach.chess.board import Board
from raumschach.chess.moves import MoveMode, generate_moves
from raumschach.chess.pieces import Color
from raumschach.chess.position import Position
from raumschach.core.shared_types import Status


def leaves_king_in_check(board: Board, from_position: Position, to_position: Position) -> bool:
    """Return True if the move puts (or leaves) the mover's own king in check

    plan:
    1. Copy the board with the candidate move applied (the original board is not touched)
    2. determine if the mover's king is in check on the new board
    """
    piece = board.piece(from_position)
    if piece is None:
        return False
    hypothetical_board = board.with_move(from_position, to_position)
    return is_king_in_check(hypothetical_board, piece.color)


def get_legal_moves(
    board: Board,
    position: Position,
    current_player: Color,
    status: Status = Status.ACTIVE,
) -> list[Position]:
    """
    Legal target cells for the piece on `position`
    ----

    Empty when:
    * there is no piece on the cell (or the cell is not on the board)
    * the piece belongs to the player who is not to move
    * the game is over already
    """
    piece = board.piece(position)
    if piece is None or piece.color != current_player or status.is_terminal:
        return []

    candidates = generate_moves(board, position, MoveMode.NORMAL)
    return [
        target
        for target in candidates
        if not leaves_king_in_check(board, position, target)
    ]


def has_any_legal_move(board: Board, color: Color) -> bool:
    """Is there at least one piece of `color` that can make at least one legal move? (Stops at the first one found.)"""
    return any(
        not leaves_king_in_check(board, position, target)
        for position in board.locate_color(color)
        for target in generate_moves(board, position, MoveMode.NORMAL)
    )
