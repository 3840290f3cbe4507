"""
Board Initializer: fills a fresh grid.

Either with the standard opening arrangement, or with an arbitrary arrangement given as the
piece placement part of a FEN string.
"""

import logging

from src.core.exceptions import InvalidPlacementError
from src.engine.grid import Grid
from src.engine.pieces import LETTER_TO_PIECE, Color, Piece, PieceType
from src.engine.square import BOARD_DIMENSIONS, Square

logger = logging.getLogger(__name__)

STANDARD_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_PLACEMENT = "/".join(["8"] * BOARD_DIMENSIONS[0])

BACK_RANK_ORDER: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def standard_grid() -> Grid:
    """Standard starting arrangement. White on ranks 0 and 1, Black on ranks 6 and 7."""
    grid = Grid.empty()
    for file in range(BOARD_DIMENSIONS[1]):
        grid.place_piece(Piece(PieceType.PAWN, Color.WHITE), Square(1, file))
        grid.place_piece(Piece(PieceType.PAWN, Color.BLACK), Square(6, file))

    _place_back_rank(grid, 0, Color.WHITE)
    _place_back_rank(grid, BOARD_DIMENSIONS[0] - 1, Color.BLACK)
    return grid


def _place_back_rank(grid: Grid, rank: int, color: Color) -> None:
    for file, piece_type in enumerate(BACK_RANK_ORDER):
        grid.place_piece(Piece(piece_type, color), Square(rank, file))


def grid_from_placement(placement: str) -> Grid:
    """Construct a grid using the piece placement part of a FEN string.

    ex. standard starting position:
    rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
    means:
    * black pieces are on the top rank (rank 7), read from the a-file to the h-file
    * black pawns cover rank 6 entirely
    * ranks 5 through 2 have 8 consecutive empty squares
    * white pawns on rank 1 (capital letters)
    * white pieces on rank 0
    """
    ranks = placement.strip().split("/")
    if len(ranks) != BOARD_DIMENSIONS[0]:
        raise InvalidPlacementError(
            f"Expected {BOARD_DIMENSIONS[0]} ranks separated by '/', got {len(ranks)}: {placement!r}"
        )

    grid = Grid.empty()
    for rank_idx, one_rank in enumerate(ranks):
        # placement string is read from top rank to bottom rank
        rank = BOARD_DIMENSIONS[0] - 1 - rank_idx
        # ... but the first character is the a-file, so reads in normal direction
        file = 0
        for character in one_rank:
            if character.isdigit():
                # A number denotes the amount of empty squares after each other
                file += int(character)
                continue
            if character.lower() not in LETTER_TO_PIECE:
                raise InvalidPlacementError(
                    f"Unknown piece letter {character!r} in rank {rank + 1}"
                )
            if file >= BOARD_DIMENSIONS[1]:
                raise InvalidPlacementError(f"Rank {rank + 1} holds more than 8 squares")
            grid.place_piece(Piece.from_letter(character), Square(rank, file))
            file += 1

        if file != BOARD_DIMENSIONS[1]:
            raise InvalidPlacementError(
                f"Rank {rank + 1} describes {file} squares instead of {BOARD_DIMENSIONS[1]}: {one_rank!r}"
            )

    logger.debug("Built grid from placement %s", placement)
    return grid


def grid_to_placement(grid: Grid) -> str:
    """Ranks are separated by slashes, top rank first."""
    return "/".join(
        _rank_to_placement(grid, rank)
        for rank in range(BOARD_DIMENSIONS[0] - 1, -1, -1)
    )


def _rank_to_placement(grid: Grid, rank: int) -> str:
    characters: list[str] = []
    empty_count = 0
    for file in range(BOARD_DIMENSIONS[1]):
        piece = grid.piece(Square(rank, file))
        if piece is None:
            empty_count += 1
            continue
        if empty_count > 0:
            characters.append(str(empty_count))
            empty_count = 0
        characters.append(piece.to_letter())

    # if the entire rank is empty, then we still place this number in the string
    if empty_count > 0:
        characters.append(str(empty_count))
    return "".join(characters)
