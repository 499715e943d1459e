"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Callable

import pytest

from raumschach.chess.board import Board
from raumschach.chess.pieces import Piece
from raumschach.chess.position import Position

BoardFactory = Callable[..., Board]


@pytest.fixture
def board_with() -> BoardFactory:
    """
    Build an otherwise empty board from keyword arguments <cell>=<piece character>
    ex. board_with(Aa1="K", Ee5="k") places the white king on Aa1 and the black king on Ee5.
    """

    def _build(**pieces: str) -> Board:
        board = Board.empty()
        for notation, character in pieces.items():
            board.place_piece(Piece.from_char(character), Position.from_notation(notation))
        return board

    return _build


@pytest.fixture
def empty_board() -> Board:
    return Board.empty()


@pytest.fixture
def starting_board() -> Board:
    return Board.starting_position()


@pytest.fixture
def kings_only_board(board_with: BoardFactory) -> Board:
    """
    Only the two kings, in opposite corners of the cube.
    Because making a move involves inferring if a king is under attack, most scenarios start from this one.
    """
    return board_with(Aa1="K", Ee5="k")
