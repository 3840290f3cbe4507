"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple modules.
"""

from typing import Callable

import pytest

from src.engine.board import Board
from src.engine.grid import Grid
from src.engine.pieces import Color, Piece
from src.engine.square import Square

PieceMap = dict[str, str]


@pytest.fixture
def make_grid() -> Callable[[PieceMap], Grid]:
    """Call the inner function with {square name: piece letter}, ex. {"e1": "K", "e8": "k"}"""

    def _make_grid(pieces: PieceMap) -> Grid:
        grid = Grid.empty()
        for square_name, letter in pieces.items():
            grid.place_piece(Piece.from_letter(letter), Square.from_algebraic(square_name))
        return grid

    return _make_grid


@pytest.fixture
def make_board() -> Callable[[str, Color], Board]:
    """Call the inner function with a piece placement string and the color to move"""

    def _make_board(placement: str, turn: Color = Color.WHITE) -> Board:
        return Board.from_placement(placement, turn=turn)

    return _make_board


@pytest.fixture
def play() -> Callable[..., None]:
    """Call the inner function with a board and moves written like 'e2e4'. Fails loudly if one gets rejected"""

    def _play(board: Board, *moves: str) -> None:
        for move in moves:
            from_square = Square.from_algebraic(move[:2])
            to_square = Square.from_algebraic(move[2:4])
            assert board.move_piece(from_square, to_square), f"move {move} was rejected"

    return _play
