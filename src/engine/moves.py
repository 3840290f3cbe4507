"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the shape of a legal move for each piece type.
Every rule answers: "could the piece on `from_square` reach `to_square` on this grid?"

Whether the move leaves your own king in check is decided later by the MoveValidator.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from src.engine.grid import Grid
from src.engine.pieces import PIECE_TO_LETTER, Color, Piece, PieceType
from src.engine.square import BOARD_DIMENSIONS, Square

Vector = tuple[int, int]


@dataclass(frozen=True)
class MoveRecord:
    """An accepted move. Appended to the move history once the move completed."""

    from_square: Square
    to_square: Square
    piece: Piece
    is_capture: bool
    is_check: bool = False
    is_checkmate: bool = False
    promotion_piece: Optional[PieceType] = None
    is_castling: bool = False
    is_en_passant: bool = False

    def to_uci(self) -> str:
        """ex. 'e2e4', or 'e7e8q' when promoting"""
        piece_char = (
            PIECE_TO_LETTER[self.promotion_piece] if self.promotion_piece else ""
        )
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}{piece_char}"


# --- PAWN GEOMETRY ---
def pawn_direction(color: Color) -> int:
    """White moves UP the board, Black moves DOWN"""
    return 1 if color == Color.WHITE else -1


def pawn_start_rank(color: Color) -> int:
    return 1 if color == Color.WHITE else BOARD_DIMENSIONS[0] - 2


def promotion_rank(color: Color) -> int:
    return BOARD_DIMENSIONS[0] - 1 if color == Color.WHITE else 0


def back_rank(color: Color) -> int:
    return 0 if color == Color.WHITE else BOARD_DIMENSIONS[0] - 1


# --- LINES OF SIGHT ---
def delta(from_square: Square, to_square: Square) -> Vector:
    return to_square.rank - from_square.rank, to_square.file - from_square.file


def squares_between(from_square: Square, to_square: Square) -> list[Square]:
    """
    The squares strictly in between two squares on the same rank, file or diagonal.

    Used both by the sliding pieces (path must be clear) and by castling.
    """
    d_rank, d_file = delta(from_square, to_square)
    is_straight = (d_rank == 0) != (d_file == 0)
    is_diagonal = abs(d_rank) == abs(d_file) != 0
    if not (is_straight or is_diagonal):
        raise ValueError(
            f"squares_between requires both squares to share a line. \n from: {from_square}\n to:{to_square}"
        )

    step_rank = (d_rank > 0) - (d_rank < 0)
    step_file = (d_file > 0) - (d_file < 0)
    squares_found: list[Square] = []
    square = from_square.offset(step_rank, step_file)
    while square != to_square:
        squares_found.append(square)
        square = square.offset(step_rank, step_file)
    return squares_found


def is_path_clear(grid: Grid, from_square: Square, to_square: Square) -> bool:
    return all(grid.is_empty(square) for square in squares_between(from_square, to_square))


# --- MOVEMENT RULES ---
def pawn_move_shape(from_square: Square, to_square: Square, grid: Grid) -> bool:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - It can move by two in their first move (so when on their starting rank), when both squares are empty
    - takes diagonally, but only when an enemy piece stands there

    NOTE: En passant is authorized separately (it depends on the game state, not only on the grid)
    """
    pawn = grid.piece(from_square)
    if pawn is None:
        return False
    direction = pawn_direction(pawn.color)
    d_rank, d_file = delta(from_square, to_square)
    target = grid.piece(to_square)

    # pawn pushes
    if d_file == 0:
        if d_rank == direction:
            return target is None
        if d_rank == 2 * direction and from_square.rank == pawn_start_rank(pawn.color):
            skipped_square = from_square.offset(direction, 0)
            return target is None and grid.is_empty(skipped_square)
        return False

    # pawns take diagonally
    if abs(d_file) == 1 and d_rank == direction:
        return target is not None and target.color != pawn.color
    return False


def knight_shape(from_square: Square, to_square: Square, grid: Grid) -> bool:
    """Knights always move such that |delta_rank| + |delta_file| = 3 (and jump over everything)"""
    d_rank, d_file = delta(from_square, to_square)
    return (abs(d_rank), abs(d_file)) in {(1, 2), (2, 1)}


def bishop_shape(from_square: Square, to_square: Square, grid: Grid) -> bool:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    d_rank, d_file = delta(from_square, to_square)
    if abs(d_rank) != abs(d_file) or d_rank == 0:
        return False
    return is_path_clear(grid, from_square, to_square)


def rook_shape(from_square: Square, to_square: Square, grid: Grid) -> bool:
    """Rooks move either horizontally or vertically"""
    d_rank, d_file = delta(from_square, to_square)
    if (d_rank == 0) == (d_file == 0):
        return False
    return is_path_clear(grid, from_square, to_square)


def queen_shape(from_square: Square, to_square: Square, grid: Grid) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return rook_shape(from_square, to_square, grid) or bishop_shape(
        from_square, to_square, grid
    )


def king_step_shape(from_square: Square, to_square: Square, grid: Grid) -> bool:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (handled by the MoveValidator).
    """
    d_rank, d_file = delta(from_square, to_square)
    return max(abs(d_rank), abs(d_file)) == 1


# -- STRATEGY PATTERN: MOVEMENT RULES ---
ShapeRuleFn = Callable[[Square, Square, Grid], bool]
MOVEMENT_RULES: dict[PieceType, ShapeRuleFn] = {
    PieceType.PAWN: pawn_move_shape,
    PieceType.KNIGHT: knight_shape,
    PieceType.BISHOP: bishop_shape,
    PieceType.ROOK: rook_shape,
    PieceType.QUEEN: queen_shape,
    PieceType.KING: king_step_shape,
}


# --- CAPTURING RULES / ATTACKING RULES ---
def pawn_attack_shape(from_square: Square, to_square: Square, grid: Grid) -> bool:
    """
    Pawns attack diagonally forward, never straight ahead.

    NOTE: unlike `pawn_move_shape()` the target does not need to be occupied:
    we are asking "is this square covered?", not "can I take something there?"
    """
    pawn = grid.piece(from_square)
    if pawn is None:
        return False
    d_rank, d_file = delta(from_square, to_square)
    return d_rank == pawn_direction(pawn.color) and abs(d_file) == 1


# --- STRATEGY PATTERN: ATTACKING RULES ---
ATTACK_RULES: dict[PieceType, ShapeRuleFn] = {
    PieceType.PAWN: pawn_attack_shape,
    PieceType.KNIGHT: knight_shape,
    PieceType.BISHOP: bishop_shape,
    PieceType.ROOK: rook_shape,
    PieceType.QUEEN: queen_shape,
    PieceType.KING: king_step_shape,
}
