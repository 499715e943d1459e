"""Unit tests for /raumschach/chess/legality.py"""

from typing import Callable

import pytest

from raumschach.chess.attacks import is_king_in_check
from raumschach.chess.board import Board
from raumschach.chess.legality import (
    get_legal_moves,
    has_any_legal_move,
    leaves_king_in_check,
)
from raumschach.chess.pieces import Color
from raumschach.chess.position import Position
from raumschach.core.shared_types import Status

BoardFactory = Callable[..., Board]


def notations(positions: list[Position]) -> set[str]:
    return {position.to_notation() for position in positions}


def test_pinned_rook_stays_on_the_line(board_with: BoardFactory) -> None:
    """The rook on Ba1 shields its king from the rook on Ea1: it may only move along that line"""
    board = board_with(Aa1="K", Ba1="R", Ea1="r", Ee5="k")
    legal_moves = get_legal_moves(board, Position.from_notation("Ba1"), Color.WHITE)
    assert notations(legal_moves) == {"Ca1", "Da1", "Ea1"}


def test_king_does_not_step_into_attack(board_with: BoardFactory) -> None:
    """The black rook on Eb1 covers Ab1 and Bb1 along the level axis"""
    board = board_with(Aa1="K", Eb1="r", Ee5="k")
    legal_moves = get_legal_moves(board, Position.from_notation("Aa1"), Color.WHITE)
    assert notations(legal_moves) == {"Aa2", "Ab2", "Ba1", "Ba2", "Bb2"}


def test_king_cannot_retreat_along_the_checking_line(board_with: BoardFactory) -> None:
    """Aa1 looks safe while the king itself blocks the ray. It is not: the move has to be simulated."""
    board = board_with(Ba1="K", Ea1="r", Ee5="k")
    assert is_king_in_check(board, Color.WHITE)

    legal_moves = get_legal_moves(board, Position.from_notation("Ba1"), Color.WHITE)
    assert Position.from_notation("Aa1") not in legal_moves
    assert Position.from_notation("Ca1") not in legal_moves
    assert Position.from_notation("Ab1") in legal_moves


def test_leaves_king_in_check_does_not_touch_the_board(board_with: BoardFactory) -> None:
    board = board_with(Aa1="K", Ba1="R", Ea1="r", Ee5="k")
    snapshot = board.copy()

    assert leaves_king_in_check(
        board, Position.from_notation("Ba1"), Position.from_notation("Bb1")
    )
    assert not leaves_king_in_check(
        board, Position.from_notation("Ba1"), Position.from_notation("Ea1")
    )
    assert board == snapshot


def test_no_legal_moves_for_the_wrong_player(starting_board: Board) -> None:
    knight = Position.from_notation("Ab1")
    assert get_legal_moves(starting_board, knight, Color.WHITE) != []
    assert get_legal_moves(starting_board, knight, Color.BLACK) == []


def test_no_legal_moves_on_empty_cell(starting_board: Board) -> None:
    assert get_legal_moves(starting_board, Position.from_notation("Cc3"), Color.WHITE) == []
    assert get_legal_moves(starting_board, Position(-1, -1, -1), Color.WHITE) == []


@pytest.mark.parametrize("status", [Status.CHECKMATE, Status.STALEMATE])
def test_no_legal_moves_once_the_game_is_over(starting_board: Board, status: Status) -> None:
    knight = Position.from_notation("Ab1")
    assert get_legal_moves(starting_board, knight, Color.WHITE, status) == []


def test_check_does_not_block_moves(starting_board: Board) -> None:
    """Being in check is not terminal"""
    knight = Position.from_notation("Ab1")
    assert get_legal_moves(starting_board, knight, Color.WHITE, Status.CHECK) != []


def test_starting_position_has_legal_moves(starting_board: Board) -> None:
    assert has_any_legal_move(starting_board, Color.WHITE)
    assert has_any_legal_move(starting_board, Color.BLACK)


def test_lone_cornered_king_has_no_legal_move(board_with: BoardFactory) -> None:
    """Rooks cover all seven neighbours of Ee5, the king itself is not attacked"""
    board = board_with(Ee5="k", Da5="R", Da4="R", Ea4="R", Ad5="R", Aa1="K")
    assert not is_king_in_check(board, Color.BLACK)
    assert not has_any_legal_move(board, Color.BLACK)
    assert has_any_legal_move(board, Color.WHITE)


@pytest.mark.parametrize(
    "pieces",
    [
        # starting position
        None,
        # pinned pieces on several axes
        {"Cc3": "K", "Cc1": "R", "Ce5": "b", "Ca1": "u", "Aa1": "r", "Ee5": "q", "Ec3": "k"},
        # checked king with some defenders around
        {"Aa1": "K", "Ba1": "N", "Bb2": "P", "Ea1": "r", "Ee5": "k", "Dd4": "u", "Cc2": "p"},
    ],
)
def test_legal_moves_never_leave_own_king_in_check(
    board_with: BoardFactory, starting_board: Board, pieces: dict[str, str] | None
) -> None:
    """Play every legal move of every white piece on a copy and verify the white king is safe afterwards"""
    board = starting_board if pieces is None else board_with(**pieces)
    for position in board.locate_color(Color.WHITE):
        for target in get_legal_moves(board, position, Color.WHITE):
            assert not is_king_in_check(board.with_move(position, target), Color.WHITE)
