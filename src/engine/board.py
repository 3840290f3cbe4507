"""
The Board is the entrypoint into the engine for the presentation layer.

It owns the grid and the game state, and composes the validator, the check detector and the executor
into a single public surface. Everything else in this package is a service working on the Board's grid.
"""

import logging
from dataclasses import replace
from typing import Optional, Self

from src.core.config import EngineConfig
from src.engine.check import CheckDetector
from src.engine.events import GameEvents
from src.engine.executor import PieceMovementExecutor
from src.engine.grid import Grid
from src.engine.initializer import (
    STANDARD_PLACEMENT,
    grid_from_placement,
    grid_to_placement,
    standard_grid,
)
from src.engine.moves import MoveRecord
from src.engine.pieces import PROMOTION_OPTIONS, Color, Piece, PieceType
from src.engine.square import Square, SquareLike, all_squares, as_square
from src.engine.state import GameState
from src.engine.validator import MoveValidator

logger = logging.getLogger(__name__)


class Board:
    def __init__(
        self,
        grid: Grid,
        state: Optional[GameState] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.grid = grid
        self.state = state or GameState()
        self.events = GameEvents()
        self.history: list[MoveRecord] = []

        self.detector = CheckDetector(self.grid)
        self.validator = MoveValidator(self.grid, self.detector)
        self.executor = PieceMovementExecutor(
            self.grid,
            self.state,
            self.validator,
            self.events,
            on_record=self._update_history,
        )

    @classmethod
    def new_game(cls, config: Optional[EngineConfig] = None) -> Self:
        """Fresh grid and state. A new game never reuses the old Board: it replaces it."""
        config = config or EngineConfig()
        if config.starting_placement == STANDARD_PLACEMENT:
            grid = standard_grid()
        else:
            grid = grid_from_placement(config.starting_placement)
        return cls(grid, GameState(), config)

    @classmethod
    def from_placement(
        cls,
        placement: str,
        turn: Color = Color.WHITE,
        config: Optional[EngineConfig] = None,
    ) -> Self:
        """Start from an arbitrary arrangement (piece placement part of a FEN string)"""
        return cls(grid_from_placement(placement), GameState(current_turn=turn), config)

    # --- QUERIES ---
    @property
    def current_turn(self) -> Color:
        return self.state.current_turn

    @property
    def last_move_from(self) -> Optional[Square]:
        return self.executor.last_move_from

    @property
    def last_move_to(self) -> Optional[Square]:
        return self.executor.last_move_to

    @property
    def in_check(self) -> bool:
        """Is the side to move in check?"""
        return self.is_check(self.current_turn)

    def get_piece(self, square: SquareLike) -> Optional[Piece]:
        square = as_square(square)
        if not square.is_within_bounds():
            return None
        return self.grid.piece(square)

    def get_piece_position(
        self, piece_type: PieceType, color: Color
    ) -> Optional[Square]:
        """First square (a1 -> h8) holding such a piece. Mostly used to highlight the king."""
        squares = self.grid.locate(piece_type, color)
        return min(squares) if squares else None

    def pieces(self) -> list[Piece]:
        return self.grid.pieces()

    def placement(self) -> str:
        return grid_to_placement(self.grid)

    def count_material(self) -> dict[Color, int]:
        """Tally the points of material each player has on the board"""
        return {
            color: sum(piece.points for piece in self.pieces() if piece.color == color)
            for color in Color
        }

    def is_valid_move(self, from_square: SquareLike, to_square: SquareLike) -> bool:
        """Could the side to move play this move right now? (en passant included)"""
        if self.state.is_promotion_pending:
            return False
        mover = self.current_turn
        return self.validator.is_valid_move(
            from_square, to_square, mover
        ) or self.validator.is_valid_en_passant(
            from_square, to_square, mover, self.state.last_pawn_double_step
        )

    def legal_moves(self) -> list[tuple[Square, Square]]:
        """Exhaustive (64 x 64) enumeration for the side to move"""
        if self.state.is_promotion_pending:
            return []
        return [
            (from_square, to_square)
            for from_square in self.grid.occupied(self.current_turn)
            for to_square in self.validator.legal_destinations(
                from_square, self.current_turn, self.state.last_pawn_double_step
            )
        ]

    def has_legal_move(self) -> bool:
        mover = self.current_turn
        double_step = self.state.last_pawn_double_step
        for from_square in self.grid.occupied(mover):
            for to_square in all_squares():
                if self.validator.is_valid_move(
                    from_square, to_square, mover
                ) or self.validator.is_valid_en_passant(
                    from_square, to_square, mover, double_step
                ):
                    return True
        return False

    # --- CHECKS FOR ENDING THE GAME ---
    def is_check(self, color: Color) -> bool:
        return self.detector.is_in_check(color)

    def is_checkmate(self) -> bool:
        return self.in_check and not self.has_legal_move()

    def is_stalemate(self) -> bool:
        return not self.in_check and not self.has_legal_move()

    # --- COMMANDS ---
    def move_piece(self, from_square: SquareLike, to_square: SquareLike) -> bool:
        """
        Attempt a move for the side to move.
        -----

        False means the move was illegal and nothing changed.
        After a pawn reaches the last rank, no further moves are accepted until `promote_pawn()` is called.
        """
        if self.executor.move(from_square, to_square) is None:
            return False

        # a PromotionRequired listener may already have completed the move through `promote_pawn()`
        record = self.executor.last_record
        assert record is not None
        if not self.state.is_promotion_pending and record.promotion_piece is None:
            record = self._with_check_flags(record)
            self._replace_last_record(record)
        logger.info("%s played %s", record.piece.color.name, record.to_uci())
        return True

    def promote_pawn(self, square: SquareLike, new_type: PieceType) -> None:
        """
        Finish the turn that was left pending by a pawn reaching the last rank.

        No-op unless a promotion is pending on `square`, there is a pawn standing there, and the new piece type
        is one of the PROMOTION_OPTIONS.
        Safe to call from inside a PromotionRequired listener: the pawn's record is stored before events fire.
        """
        square = as_square(square)
        if self.state.pending_promotion != square:
            logger.debug("No promotion pending on %s", square)
            return

        pawn = self.grid.piece(square)
        if pawn is None or pawn.type != PieceType.PAWN:
            logger.debug("No pawn to promote on %s", square)
            return

        if new_type not in PROMOTION_OPTIONS:
            logger.debug("Cannot promote to %s", new_type.name)
            return

        record = self.executor.last_record
        if record is None or record.piece != pawn or record.to_square != square:
            logger.debug("Last move did not bring a pawn to %s", square)
            return

        self.grid.remove_piece(square)
        self.grid.place_piece(pawn.promoted_to(new_type), square)
        self.state.pending_promotion = None
        self.state.switch_turns()

        record = replace(record, promotion_piece=new_type)
        self._replace_last_record(self._with_check_flags(record))
        logger.info("%s promoted on %s to %s", pawn.color.name, square.to_algebraic(), new_type.name)

    # -- PRIVATE HELPERS ---
    def _with_check_flags(self, record: MoveRecord) -> MoveRecord:
        """NOTE the turn already passed: the side to move is the opponent of whoever played `record`"""
        is_check = self.in_check
        has_reply = self.has_legal_move()
        is_checkmate = is_check and not has_reply
        if is_checkmate:
            logger.info("Checkmate. %s wins", record.piece.color.name)
        elif not has_reply:
            logger.info("Stalemate")
        return replace(record, is_check=is_check, is_checkmate=is_checkmate)

    def _update_history(self, record: MoveRecord) -> None:
        if self.config.record_history:
            self.history.append(record)

    def _replace_last_record(self, record: MoveRecord) -> None:
        """The most recent move got completed (check flags, promotion): swap in the final record"""
        self.executor.last_record = record
        if self.config.record_history:
            self.history[-1] = record


def new_game(config: Optional[EngineConfig] = None) -> Board:
    """Standard opening position, White to move"""
    return Board.new_game(config)
