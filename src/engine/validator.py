"""
Move Validator: decides whether a candidate move is legal.

1. basic checks (on the board, your own piece, not capturing your own piece)
2. per piece type shape check (see MOVEMENT_RULES), plus castling for the king
3. self-check simulation: play the move on the shared grid, ask the CheckDetector, undo the move.

The validator never leaves a trace on the grid, also when the probed move turns out to be illegal.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from src.engine.castling import castling_side_for, castling_squares
from src.engine.check import CheckDetector
from src.engine.grid import Grid
from src.engine.moves import MOVEMENT_RULES, delta, pawn_direction, squares_between
from src.engine.pieces import Color, Piece, PieceType
from src.engine.square import Square, SquareLike, all_squares, as_square

logger = logging.getLogger(__name__)

# square -> what should stand there while probing
Changes = dict[Square, Optional[Piece]]


class MoveValidator:
    def __init__(self, grid: Grid, detector: CheckDetector) -> None:
        self.grid = grid
        self.detector = detector

    def is_valid_move(
        self, from_square: SquareLike, to_square: SquareLike, mover: Color
    ) -> bool:
        """Regular moves and castling. En passant is asked for separately (`is_valid_en_passant()`)."""
        from_square = as_square(from_square)
        to_square = as_square(to_square)
        if not self._is_basic_move_valid(from_square, to_square, mover):
            return False

        piece = self.grid.piece(from_square)
        assert piece is not None

        if piece.type == PieceType.KING and self.is_castling_attempt(
            from_square, to_square, mover
        ):
            return self._is_valid_castling(from_square, to_square, mover)

        if not MOVEMENT_RULES[piece.type](from_square, to_square, self.grid):
            return False

        changes: Changes = {to_square: piece, from_square: None}
        return self._leaves_king_safe(changes, mover)

    def is_valid_en_passant(
        self,
        from_square: SquareLike,
        to_square: SquareLike,
        mover: Color,
        double_step_square: Optional[Square],
    ) -> bool:
        """
        Is this a legal en passant capture?
        ---

        `double_step_square` is where the opponent's pawn landed after its two-square advance on the previous move.
        The capturing pawn must stand right next to it (same rank, adjacent file) and moves diagonally behind it.
        """
        if double_step_square is None:
            return False
        from_square = as_square(from_square)
        to_square = as_square(to_square)
        if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
            return False

        pawn = self.grid.piece(from_square)
        if pawn != Piece(PieceType.PAWN, mover):
            return False
        if not self.grid.is_empty(to_square):
            return False

        d_rank, d_file = delta(from_square, to_square)
        if d_rank != pawn_direction(mover) or abs(d_file) != 1:
            return False

        victim_square = Square(from_square.rank, to_square.file)
        if victim_square != double_step_square:
            return False
        if self.grid.piece(victim_square) != Piece(PieceType.PAWN, mover.opponent):
            return False

        changes: Changes = {to_square: pawn, from_square: None, victim_square: None}
        return self._leaves_king_safe(changes, mover)

    def legal_destinations(
        self,
        from_square: SquareLike,
        mover: Color,
        double_step_square: Optional[Square] = None,
    ) -> list[Square]:
        from_square = as_square(from_square)
        return [
            to_square
            for to_square in all_squares()
            if self.is_valid_move(from_square, to_square, mover)
            or self.is_valid_en_passant(
                from_square, to_square, mover, double_step_square
            )
        ]

    def is_castling_attempt(
        self, from_square: Square, to_square: Square, mover: Color
    ) -> bool:
        return castling_side_for(mover, from_square, to_square) is not None

    # -- PRIVATE HELPERS ---
    def _is_basic_move_valid(
        self, from_square: Square, to_square: Square, mover: Color
    ) -> bool:
        if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
            return False
        if from_square == to_square:
            return False

        piece = self.grid.piece(from_square)
        if piece is None or piece.color != mover:
            return False

        # Can't move to a square occupied by own piece
        target = self.grid.piece(to_square)
        return target is None or target.color != mover

    def _is_valid_castling(
        self, from_square: Square, to_square: Square, mover: Color
    ) -> bool:
        """
        **you are allowed to castle if**

        * Neither the king nor the rook ever left (or got captured on) their starting squares.
        * All squares in between the two pieces are empty.
        * None of the squares the king stands on, passes through or lands on is attacked by the opponent
          (so in particular: you cannot castle out of check).
        """
        side = castling_side_for(mover, from_square, to_square)
        assert side is not None
        rule = castling_squares(mover, side)

        if self.grid.has_moved(rule.king_from) or self.grid.has_moved(rule.rook_from):
            return False

        rook = self.grid.piece(rule.rook_from)
        if rook != Piece(PieceType.ROOK, mover):
            return False

        if not all(
            self.grid.is_empty(square)
            for square in squares_between(rule.king_from, rule.rook_from)
        ):
            return False

        # always from the castling side's perspective
        opponent = mover.opponent
        if any(
            self.detector.is_square_attacked(square, opponent)
            for square in rule.king_path()
        ):
            return False

        king = self.grid.piece(rule.king_from)
        changes: Changes = {
            rule.king_to: king,
            rule.king_from: None,
            rule.rook_to: rook,
            rule.rook_from: None,
        }
        return self._leaves_king_safe(changes, mover)

    def _leaves_king_safe(self, changes: Changes, mover: Color) -> bool:
        """Self-check simulation. Mandatory for every move type."""
        with self._probe(changes):
            in_check = self.detector.is_in_check(mover)
        if in_check:
            logger.debug("Rejected: move would leave the %s king in check", mover.name)
        return not in_check

    @contextmanager
    def _probe(self, changes: Changes) -> Iterator[None]:
        """Temporarily apply `changes` to the shared grid. Everything is restored on exit."""
        originals: Changes = {square: self.grid.piece(square) for square in changes}
        try:
            for square, piece in changes.items():
                self.grid.restore(square, piece)
            yield
        finally:
            for square, piece in originals.items():
                self.grid.restore(square, piece)
