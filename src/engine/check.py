"""
Check Detector: is a square (in particular: the king's square) attacked?

This answers a strictly weaker question than the MoveValidator ("is this square covered?" vs "is this move legal?").
It only uses ATTACK_RULES and must never call back into the validator.
"""

import logging
from typing import Optional

from src.engine.grid import Grid
from src.engine.moves import ATTACK_RULES
from src.engine.pieces import Color, PieceType
from src.engine.square import Square

logger = logging.getLogger(__name__)


class CheckDetector:
    def __init__(self, grid: Grid) -> None:
        self.grid = grid

    def find_king(self, color: Color) -> Optional[Square]:
        kings = self.grid.locate(PieceType.KING, color)
        return kings[0] if kings else None

    def is_square_attacked(self, square: Square, by_color: Color) -> bool:
        """Scan every piece of `by_color` and ask whether it could capture on `square`"""
        for attacker_square in self.grid.occupied(by_color):
            attacker = self.grid.piece(attacker_square)
            assert attacker is not None
            if attacker_square == square:
                continue
            attack_rule = ATTACK_RULES[attacker.type]
            if attack_rule(attacker_square, square, self.grid):
                return True
        return False

    def is_in_check(self, color: Color) -> bool:
        king_square = self.find_king(color)
        if king_square is None:
            # never reachable through validated moves: a corrupted board, not a chess position
            logger.warning("No %s king on the board, reporting 'not in check'", color.name)
            return False
        return self.is_square_attacked(king_square, color.opponent)
