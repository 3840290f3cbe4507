"""Unit tests for /src/engine/check.py"""

import logging

import pytest

from src.engine.check import CheckDetector
from src.engine.grid import Grid
from src.engine.initializer import grid_from_placement, standard_grid
from src.engine.pieces import Color
from src.engine.square import Square


def test_no_check_in_the_starting_position() -> None:
    detector = CheckDetector(standard_grid())
    assert not detector.is_in_check(Color.WHITE)
    assert not detector.is_in_check(Color.BLACK)


def test_find_king() -> None:
    detector = CheckDetector(standard_grid())
    assert detector.find_king(Color.WHITE) == Square(0, 4)
    assert detector.find_king(Color.BLACK) == Square(7, 4)


@pytest.mark.parametrize(
    "placement, in_check",
    [
        ("4r2k/8/8/8/8/8/8/4K3", True),  # rook on the e-file
        ("4r2k/8/8/8/8/8/4P3/4K3", False),  # ... blocked by a pawn
        ("7k/8/8/b7/8/8/8/4K3", True),  # bishop on the a5-e1 diagonal
        ("7k/8/8/b7/8/2P5/8/4K3", False),  # ... blocked on c3
        ("7k/8/8/8/8/3n4/8/4K3", True),  # knight
        ("7k/8/8/8/8/8/8/q3K3", True),  # queen along the first rank
        ("7k/8/8/8/8/8/3p4/4K3", True),  # black pawn takes diagonally downwards
        ("7k/8/8/8/8/8/4p3/4K3", False),  # pawns never attack straight ahead
        ("7k/8/8/8/8/8/8/4K2p", False),  # ... nor sideways
    ],
)
def test_white_king_in_check(placement: str, in_check: bool) -> None:
    detector = CheckDetector(grid_from_placement(placement))
    assert detector.is_in_check(Color.WHITE) == in_check


def test_white_pawn_attacks_upwards() -> None:
    detector = CheckDetector(grid_from_placement("8/8/8/8/8/3k4/4P3/4K3"))
    assert detector.is_in_check(Color.BLACK)
    assert not detector.is_in_check(Color.WHITE)


def test_square_attacked_by_king() -> None:
    detector = CheckDetector(grid_from_placement("8/8/8/8/8/3k4/8/4K3"))
    assert detector.is_square_attacked(Square.from_algebraic("e2"), Color.BLACK)
    assert detector.is_square_attacked(Square.from_algebraic("e2"), Color.WHITE)
    assert not detector.is_square_attacked(Square.from_algebraic("e4"), Color.WHITE)


def test_missing_king_is_reported_as_not_in_check(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A board without a king is a corrupted board: not in check, but worth a warning"""
    detector = CheckDetector(Grid.empty())
    assert detector.find_king(Color.WHITE) is None
    with caplog.at_level(logging.WARNING):
        assert not detector.is_in_check(Color.WHITE)
    assert "No WHITE king" in caplog.text
