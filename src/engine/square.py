"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8. (ranks, files)
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True, order=True)
class Square:
    """Zero-based (rank, file). Rank 0 is White's home rank, file 0 is the a-file."""

    rank: int
    file: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        file = ord(sq[0]) - ord("a")
        rank = int(sq[1]) - 1
        return cls(rank, file)

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a'))}{self.rank + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.rank < BOARD_DIMENSIONS[0]) and (
            0 <= self.file < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_rank: int, d_file: int) -> Square:
        return Square(self.rank + d_rank, self.file + d_file)


# Callers (the UI) mostly think in plain (rank, file) tuples
SquareLike = Square | tuple[int, int]


def as_square(square: SquareLike) -> Square:
    """Accept either a Square or a (rank, file) tuple"""
    if isinstance(square, Square):
        return square
    rank, file = square
    return Square(rank, file)


def all_squares() -> list[Square]:
    """Every square on the board, a1 first, h8 last (rank by rank)"""
    return [
        Square(rank, file)
        for rank in range(BOARD_DIMENSIONS[0])
        for file in range(BOARD_DIMENSIONS[1])
    ]
