"""
Geometry/Base movement and capturing/attacking rules in three dimensions

Key idea: Use strategy pattern to define the candidate target cells for each piece type.


Legality (not leaving your own king in check) is checked later, see legality.py
"""

from dataclasses import dataclass
from enum import Enum, auto
from itertools import product
from typing import Callable, Optional, Protocol

from raumschach.chess.pieces import PIECE_TO_CHAR, Color, Piece, PieceType
from raumschach.chess.position import Position


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, position: Position) -> Optional[Piece]: ...


# (d_level, d_rank, d_file)
Vector = tuple[int, int, int]


class MoveMode(Enum):
    """
    NORMAL: where can the piece actually go.
    ATTACK: which cells does the piece threaten. Only differs for pawns (see `candidate_pawn_moves()`).
    """

    NORMAL = auto()
    ATTACK = auto()


@dataclass(frozen=True)
class Move:
    """Record of a move that has been played. Only kept as history, never needed to decide legality."""

    from_position: Position
    to_position: Position
    piece: Piece
    captured_piece: Optional[Piece] = None
    promote_to: Optional[PieceType] = None

    def to_notation(self) -> str:
        """
        <from><to>[promotion], ex.
        * "Bb2Cb2": piece moved from level B to level C
        * "Dc4Ec4q": pawn reached the top level and promoted to a queen
        """
        promotion_char = PIECE_TO_CHAR[self.promote_to] if self.promote_to else ""
        return f"{self.from_position.to_notation()}{self.to_position.to_notation()}{promotion_char}"


# --- DIRECTIONS ---
# Unit vectors, classified by how many of the three coordinates change at the same time.
UNIT_VECTORS: list[Vector] = [
    vector for vector in product((1, 0, -1), repeat=3) if vector != (0, 0, 0)
]

# one coordinate changes: straight along level, rank or file
ORTHOGONALS: list[Vector] = [v for v in UNIT_VECTORS if sum(map(abs, v)) == 1]
# two coordinates change together: the diagonals of a face of the cube
DIAGONALS: list[Vector] = [v for v in UNIT_VECTORS if sum(map(abs, v)) == 2]
# all three coordinates change together: through the corners of the cube
TRIAGONALS: list[Vector] = [v for v in UNIT_VECTORS if sum(map(abs, v)) == 3]

# The classic L-jump (1, 2) applied to any pair of axes, the third axis stays put
KNIGHT_JUMPS: list[Vector] = [
    vector
    for vector in product((2, 1, 0, -1, -2), repeat=3)
    if sorted(map(abs, vector)) == [0, 1, 2]
]


# --- MOVEMENT RULES ---
def raycasting_move(
    position: Position, board: Board, directions: list[Vector]
) -> list[Position]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We walk along each direction cell by cell until we hit another piece or
    the edge of the board.

    * friendly piece: stop, the cell is not reachable
    * enemy piece: stop, the cell is reachable (capture)
    """
    player_color = _color_at(position, board)

    targets: list[Position] = []
    for direction in directions:
        target = position.shifted(*direction)
        while target.is_within_bounds():
            piece_found = board.piece(target)
            if piece_found is not None:
                # only need to add the first occupied cell found if it is the opponent's: then it can be captured.
                if piece_found.color != player_color:
                    targets.append(target)
                break

            targets.append(target)
            target = target.shifted(*direction)
    return targets


def single_step_move(
    position: Position, board: Board, deltas: list[Vector]
) -> list[Position]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump to a single cell per direction"""
    player_color = _color_at(position, board)

    targets: list[Position] = []
    for delta in deltas:
        target = position.shifted(*delta)
        if not target.is_within_bounds():
            continue

        piece_found = board.piece(target)
        if piece_found is None or piece_found.color != player_color:
            targets.append(target)
    return targets


def pawn_direction(color: Color) -> int:
    """White pawns climb up the levels, black pawns go down"""
    return 1 if color == Color.WHITE else -1


def candidate_pawn_moves(
    position: Position, board: Board, mode: MoveMode = MoveMode.NORMAL
) -> list[Position]:
    """
    A pawn:
    - moves a single level forward, onto an empty cell (no double step, no en passant)
    - takes 'diagonally': one level forward and one step along either the rank or the file (never both)

    NOTE: In ATTACK mode the four capture cells are always returned, occupied or not.
    An empty cell a pawn could take on is still a cell the opponent's king may not step onto.
    The push onto an empty cell is the same in both modes.
    """
    color = _color_at(position, board)
    forward = pawn_direction(color)

    targets: list[Position] = []
    push = position.shifted(forward, 0, 0)
    if push.is_within_bounds() and board.piece(push) is None:
        targets.append(push)

    pawn_takes: list[Vector] = [
        (forward, 1, 0),
        (forward, -1, 0),
        (forward, 0, 1),
        (forward, 0, -1),
    ]
    for delta in pawn_takes:
        target = position.shifted(*delta)
        if not target.is_within_bounds():
            continue

        if mode == MoveMode.ATTACK:
            targets.append(target)
            continue

        piece_found = board.piece(target)
        if piece_found is not None and piece_found.color != color:
            targets.append(target)
    return targets


def candidate_knight_moves(
    position: Position, board: Board, mode: MoveMode = MoveMode.NORMAL
) -> list[Position]:
    """24 jumps, nothing in between can block a knight"""
    return single_step_move(position, board, KNIGHT_JUMPS)


def candidate_bishop_moves(
    position: Position, board: Board, mode: MoveMode = MoveMode.NORMAL
) -> list[Position]:
    """Bishops slide along the 12 two-axis diagonals"""
    return raycasting_move(position, board, DIAGONALS)


def candidate_unicorn_moves(
    position: Position, board: Board, mode: MoveMode = MoveMode.NORMAL
) -> list[Position]:
    """The unicorn has no 2D counterpart: it slides along the 8 triagonals, |d_level| = |d_rank| = |d_file|"""
    return raycasting_move(position, board, TRIAGONALS)


def candidate_rook_moves(
    position: Position, board: Board, mode: MoveMode = MoveMode.NORMAL
) -> list[Position]:
    """Rooks slide along the 6 orthogonal directions (including straight up/down the levels)"""
    return raycasting_move(position, board, ORTHOGONALS)


def candidate_queen_moves(
    position: Position, board: Board, mode: MoveMode = MoveMode.NORMAL
) -> list[Position]:
    """
    The Queen combines the rook moves and the bishop moves (18 directions).
    NOTE: the queen does not slide along the triagonals, those are left to the unicorn.
    """
    return raycasting_move(position, board, ORTHOGONALS + DIAGONALS)


def candidate_king_moves(
    position: Position, board: Board, mode: MoveMode = MoveMode.NORMAL
) -> list[Position]:
    """The king steps to any of the 26 neighbouring cells"""
    return single_step_move(position, board, ORTHOGONALS + DIAGONALS + TRIAGONALS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Position, Board, MoveMode], list[Position]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.UNICORN: candidate_unicorn_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def generate_moves(
    board: Board, position: Position, mode: MoveMode = MoveMode.NORMAL
) -> list[Position]:
    """
    Candidate target cells for the piece standing on `position`
    ----

    These are pseudo-legal: they follow the movement/blocking rules of the piece,
    but might still leave the own king in check.
    """
    piece = board.piece(position)
    if piece is None:
        return []
    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(position, board, mode)


def _color_at(position: Position, board: Board) -> Optional[Color]:
    piece = board.piece(position)
    return piece.color if piece is not None else None
