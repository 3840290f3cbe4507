"""
Event Channel: tells listeners (the UI) that a move was executed or that a promotion decision is needed.

Payloads are the boundary data models between the engine and whoever listens.
Delivery is synchronous, in subscription order. A listener raising an exception is a bug in the listener: it propagates.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable

from pydantic import BaseModel, ConfigDict

from src.engine.pieces import Piece
from src.engine.square import Square

logger = logging.getLogger(__name__)


# --- PAYLOADS ---
class MoveExecuted(BaseModel):
    model_config = ConfigDict(frozen=True)

    from_square: Square
    to_square: Square
    piece: Piece
    was_capture: bool


class PromotionRequired(BaseModel):
    model_config = ConfigDict(frozen=True)

    square: Square


MoveExecutedCallback = Callable[[MoveExecuted], None]
PromotionRequiredCallback = Callable[[PromotionRequired], None]


# --- CHANNEL ---
@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move_executed: list[MoveExecutedCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionRequiredCallback] = field(
        default_factory=list
    )

    def subscribe_move_executed(self, callback: MoveExecutedCallback) -> None:
        self.on_move_executed.append(callback)

    def unsubscribe_move_executed(self, callback: MoveExecutedCallback) -> None:
        if callback in self.on_move_executed:
            self.on_move_executed.remove(callback)

    def subscribe_promotion_required(self, callback: PromotionRequiredCallback) -> None:
        self.on_promotion_required.append(callback)

    def unsubscribe_promotion_required(
        self, callback: PromotionRequiredCallback
    ) -> None:
        if callback in self.on_promotion_required:
            self.on_promotion_required.remove(callback)

    def emit_move_executed(self, event: MoveExecuted) -> None:
        logger.debug(
            "MoveExecuted %s -> %s (%d listeners)",
            event.from_square.to_algebraic(),
            event.to_square.to_algebraic(),
            len(self.on_move_executed),
        )
        for callback in list(self.on_move_executed):
            callback(event)

    def emit_promotion_required(self, event: PromotionRequired) -> None:
        logger.debug("PromotionRequired on %s", event.square.to_algebraic())
        for callback in list(self.on_promotion_required):
            callback(event)
