"""
Game State: whose turn it is and the move counters.

The counters mirror the last fields of a FEN string:
* The half move clock counts the number of moves made since the last pawn move or capture.
  (Used for the fifty-move rule. Tracked as data only, never adjudicated.)
* The full move number starts at 1 and increments after every move black makes.
"""

from dataclasses import dataclass
from typing import Optional

from src.engine.moves import pawn_direction, pawn_start_rank
from src.engine.pieces import Color, Piece, PieceType
from src.engine.square import Square


@dataclass
class GameState:
    current_turn: Color = Color.WHITE
    half_move_clock: int = 0
    full_move_number: int = 1
    # where the pawn landed after the most recent two-square advance (None if the last move was anything else)
    last_pawn_double_step: Optional[Square] = None
    # square of a pawn waiting for `promote_pawn()`. The turn does not pass while this is set.
    pending_promotion: Optional[Square] = None

    @property
    def en_passant_square(self) -> Optional[Square]:
        """The square the pawn skipped over: that is where an en passant capture lands"""
        if self.last_pawn_double_step is None:
            return None
        # white pawns land on the 4th rank after a double step, black pawns on the 5th
        white_landing_rank = pawn_start_rank(Color.WHITE) + 2 * pawn_direction(Color.WHITE)
        pawn_color = (
            Color.WHITE
            if self.last_pawn_double_step.rank == white_landing_rank
            else Color.BLACK
        )
        return self.last_pawn_double_step.offset(-pawn_direction(pawn_color), 0)

    @property
    def is_promotion_pending(self) -> bool:
        return self.pending_promotion is not None

    def record_move(
        self, piece: Piece, from_square: Square, to_square: Square, is_capture: bool
    ) -> None:
        """Update the counters after a move. NOTE: does not switch turns (see `switch_turns()`)."""
        is_pawn_move = piece.type == PieceType.PAWN
        if is_pawn_move or is_capture:
            self.half_move_clock = 0
        else:
            self.half_move_clock += 1

        ranks_moved = abs(to_square.rank - from_square.rank)
        self.last_pawn_double_step = (
            to_square if is_pawn_move and ranks_moved == 2 else None
        )

    def switch_turns(self) -> None:
        if self.current_turn == Color.BLACK:
            self.full_move_number += 1
        self.current_turn = self.current_turn.opponent
