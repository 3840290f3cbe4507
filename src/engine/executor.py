"""
Piece Movement Executor: applies a move to the grid once the validator accepted it.

Takes care of the side effects of the special moves:
* castling moves the rook as well
* en passant removes a pawn from a square other than the target square
* a pawn reaching the last rank leaves the turn pending until the promotion choice is made
"""

import logging
from typing import Callable, Optional

from src.engine.castling import castling_side_for, castling_squares
from src.engine.events import GameEvents, MoveExecuted, PromotionRequired
from src.engine.grid import Grid
from src.engine.moves import MoveRecord, promotion_rank
from src.engine.pieces import Color, PieceType
from src.engine.square import Square, SquareLike, as_square
from src.engine.state import GameState
from src.engine.validator import MoveValidator

logger = logging.getLogger(__name__)

# called with the record of every executed move, before any listener hears about it
RecordCallback = Callable[[MoveRecord], None]


class PieceMovementExecutor:
    def __init__(
        self,
        grid: Grid,
        state: GameState,
        validator: MoveValidator,
        events: GameEvents,
        on_record: Optional[RecordCallback] = None,
    ) -> None:
        self.grid = grid
        self.state = state
        self.validator = validator
        self.events = events
        self.on_record = on_record
        self.last_move_from: Optional[Square] = None
        self.last_move_to: Optional[Square] = None
        # record of the most recent move. `promote_pawn()` completes it in place of the pawn push.
        self.last_record: Optional[MoveRecord] = None

    def move(
        self, from_square: SquareLike, to_square: SquareLike
    ) -> Optional[MoveRecord]:
        """
        Attempt a move for the side to move
        -----

        Returns None (and touches nothing) if the move is illegal. Otherwise:
        1. detect the capture BEFORE any square gets overwritten
        2. update the grid (castling / en passant / standard move)
        3. update the counters in the game state
        4. hand the record over (`on_record`), so it is stored before any listener reacts
        5. notify: MoveExecuted, then PromotionRequired if a pawn reached the last rank
        6. pass the turn (unless a promotion is pending)
        """
        from_square = as_square(from_square)
        to_square = as_square(to_square)
        mover = self.state.current_turn

        if self.state.is_promotion_pending:
            logger.debug("Rejected: waiting for a promotion choice first")
            return None

        is_en_passant = self.validator.is_valid_en_passant(
            from_square, to_square, mover, self.state.last_pawn_double_step
        )
        if not is_en_passant and not self.validator.is_valid_move(
            from_square, to_square, mover
        ):
            logger.debug(
                "Rejected: %s cannot play %s -> %s", mover.name, from_square, to_square
            )
            return None

        piece = self.grid.piece(from_square)
        assert piece is not None
        is_capture = is_en_passant or self.grid.piece(to_square) is not None
        is_castling = piece.type == PieceType.KING and self.validator.is_castling_attempt(
            from_square, to_square, mover
        )

        if is_castling:
            self._execute_castling(from_square, to_square, mover)
        elif is_en_passant:
            self._execute_en_passant(from_square, to_square)
        else:
            self._execute_standard_move(from_square, to_square)

        self.last_move_from = from_square
        self.last_move_to = to_square
        self.state.record_move(piece, from_square, to_square, is_capture)

        record = MoveRecord(
            from_square=from_square,
            to_square=to_square,
            piece=piece,
            is_capture=is_capture,
            is_castling=is_castling,
            is_en_passant=is_en_passant,
        )
        self.last_record = record
        if self.on_record is not None:
            self.on_record(record)

        self.events.emit_move_executed(
            MoveExecuted(
                from_square=from_square,
                to_square=to_square,
                piece=piece,
                was_capture=is_capture,
            )
        )

        if piece.type == PieceType.PAWN and to_square.rank == promotion_rank(piece.color):
            self.state.pending_promotion = to_square
            self.events.emit_promotion_required(PromotionRequired(square=to_square))
        else:
            self.state.switch_turns()

        return record

    # -- PRIVATE HELPERS ---
    def _execute_standard_move(self, from_square: Square, to_square: Square) -> None:
        self.grid.move_piece(from_square, to_square)
        self.grid.mark_moved(from_square, to_square)

    def _execute_castling(
        self, from_square: Square, to_square: Square, mover: Color
    ) -> None:
        """Move both the King and the Rook, and flag all four squares as 'moved'"""
        side = castling_side_for(mover, from_square, to_square)
        assert side is not None
        rule = castling_squares(mover, side)
        self.grid.move_piece(rule.king_from, rule.king_to)
        self.grid.move_piece(rule.rook_from, rule.rook_to)
        self.grid.mark_moved(rule.king_from, rule.king_to, rule.rook_from, rule.rook_to)

    def _execute_en_passant(self, from_square: Square, to_square: Square) -> None:
        """
        1. Move the pawn diagonally
        2. Remove the opponent's pawn that gets taken

        NOTE The pawn removed stands on the destination file, on the rank the moving pawn started from.
        """
        self.grid.move_piece(from_square, to_square)
        taken_square = Square(from_square.rank, to_square.file)
        self.grid.remove_piece(taken_square)
        self.grid.mark_moved(from_square, to_square, taken_square)
