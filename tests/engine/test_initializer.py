"""Unit tests for /src/engine/initializer.py"""

import pytest

from src.core.exceptions import BoardIntegrityError, InvalidPlacementError
from src.engine.initializer import (
    EMPTY_PLACEMENT,
    STANDARD_PLACEMENT,
    grid_from_placement,
    grid_to_placement,
    standard_grid,
)
from src.engine.pieces import Color, Piece, PieceType
from src.engine.square import Square


def test_standard_grid() -> None:
    """White on ranks 0 and 1, Black on ranks 6 and 7, nothing in between"""
    grid = standard_grid()

    assert grid.piece(Square(0, 0)) == Piece(PieceType.ROOK, Color.WHITE)
    assert grid.piece(Square(0, 1)) == Piece(PieceType.KNIGHT, Color.WHITE)
    assert grid.piece(Square(0, 2)) == Piece(PieceType.BISHOP, Color.WHITE)
    assert grid.piece(Square(0, 3)) == Piece(PieceType.QUEEN, Color.WHITE)
    assert grid.piece(Square(0, 4)) == Piece(PieceType.KING, Color.WHITE)
    assert grid.piece(Square(0, 5)) == Piece(PieceType.BISHOP, Color.WHITE)
    assert grid.piece(Square(0, 6)) == Piece(PieceType.KNIGHT, Color.WHITE)
    assert grid.piece(Square(0, 7)) == Piece(PieceType.ROOK, Color.WHITE)

    assert grid.piece(Square(7, 3)) == Piece(PieceType.QUEEN, Color.BLACK)
    assert grid.piece(Square(7, 4)) == Piece(PieceType.KING, Color.BLACK)

    for file in range(8):
        assert grid.piece(Square(1, file)) == Piece(PieceType.PAWN, Color.WHITE)
        assert grid.piece(Square(6, file)) == Piece(PieceType.PAWN, Color.BLACK)
        for rank in range(2, 6):
            assert grid.is_empty(Square(rank, file))

    assert len(grid.pieces()) == 32
    assert grid.moved == set()


def test_standard_placement_matches_standard_grid() -> None:
    assert grid_from_placement(STANDARD_PLACEMENT).snapshot() == standard_grid().snapshot()
    assert grid_to_placement(standard_grid()) == STANDARD_PLACEMENT


def test_creating_grid_after_e4() -> None:
    grid = grid_from_placement("rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR")
    assert grid.piece(Square.from_algebraic("e4")) == Piece(PieceType.PAWN, Color.WHITE)
    assert grid.is_empty(Square.from_algebraic("e2"))


@pytest.mark.parametrize(
    "placement",
    [
        EMPTY_PLACEMENT,
        "2kr1b1r/p1p1pppp/2p2n2/3q2B1/6Q1/2NP4/PPP2PPP/R4RK1",
        "r3k2r/8/8/8/8/8/8/R3K2R",
    ],
)
def test_placement_roundtrip(placement: str) -> None:
    assert grid_to_placement(grid_from_placement(placement)) == placement


@pytest.mark.parametrize(
    "placement",
    [
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP",  # only 7 ranks
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBN",  # last rank too short
        "rnbqkbnrr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR",  # first rank too long
        "rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR",  # 9 empty squares
        "rnbqkbnr/ppppxppp/8/8/8/8/PPPPPPPP/RNBQKBNR",  # unknown piece
    ],
)
def test_malformed_placement(placement: str) -> None:
    with pytest.raises(InvalidPlacementError):
        grid_from_placement(placement)


def test_placement_with_two_white_kings() -> None:
    """Parses fine, but violates the one-king-per-color invariant"""
    with pytest.raises(BoardIntegrityError):
        grid_from_placement("K6K/8/8/8/8/8/8/8")
