"""
The grid: which piece stands on which square.

A single Grid instance is shared (by reference) between the validator, the check detector and the executor.
Only the Board facade hands it out.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import BoardIntegrityError
from src.engine.pieces import Color, Piece, PieceType
from src.engine.square import Square, all_squares

# Hashable, comparable picture of a grid. Two grids with equal snapshots are identical.
GridSnapshot = tuple[tuple[Square, Optional[Piece]], ...]


@dataclass
class Grid:
    position: dict[Square, Optional[Piece]] = field(
        default_factory=lambda: {square: None for square in all_squares()}
    )
    # squares that have seen a piece leave or arrive (castling eligibility lives here, not on the pieces)
    moved: set[Square] = field(default_factory=set)

    @classmethod
    def empty(cls) -> Self:
        return cls()

    def piece(self, square: Square) -> Optional[Piece]:
        return self.position.get(square)

    def is_empty(self, square: Square) -> bool:
        return self.piece(square) is None

    def place_piece(self, piece: Piece, square: Square) -> None:
        """Setup helper. Guards the one-king-per-color invariant."""
        if not square.is_within_bounds():
            raise BoardIntegrityError(f"Cannot place {piece} off the board: {square}")
        self._assert_not_a_king(square)
        if piece.type == PieceType.KING and self.locate(PieceType.KING, piece.color):
            raise BoardIntegrityError(f"There already is a {piece.color.name} king")
        self.position[square] = piece

    def remove_piece(self, square: Square) -> Optional[Piece]:
        self._assert_not_a_king(square)
        removed = self.position[square]
        self.position[square] = None
        return removed

    def move_piece(self, from_square: Square, to_square: Square) -> Optional[Piece]:
        """Plain relocation. Returns whatever stood on the target square."""
        self._assert_not_a_king(to_square)
        displaced = self.position[to_square]
        self.position[to_square] = self.position[from_square]
        self.position[from_square] = None
        return displaced

    def restore(self, square: Square, piece: Optional[Piece]) -> None:
        """Put a square back the way a probe found it. No invariant checks: only used to undo a simulation."""
        self.position[square] = piece

    def mark_moved(self, *squares: Square) -> None:
        self.moved.update(squares)

    def has_moved(self, square: Square) -> bool:
        return square in self.moved

    def locate(self, piece_type: PieceType, color: Color) -> list[Square]:
        return [
            square
            for square, piece in self.position.items()
            if piece is not None and piece.type == piece_type and piece.color == color
        ]

    def occupied(self, color: Color) -> list[Square]:
        return [
            square
            for square, piece in self.position.items()
            if piece is not None and piece.color == color
        ]

    def pieces(self) -> list[Piece]:
        return [piece for piece in self.position.values() if piece is not None]

    def snapshot(self) -> GridSnapshot:
        return tuple(sorted(self.position.items()))

    def copy(self) -> Self:
        return deepcopy(self)

    def _assert_not_a_king(self, square: Square) -> None:
        """Kings never leave the board"""
        occupant = self.position.get(square)
        if occupant is not None and occupant.type == PieceType.KING:
            raise BoardIntegrityError(
                f"Refusing to remove the {occupant.color.name} king from {square.to_algebraic()}"
            )
