"""
Does the player to move have anything left to do?
---

Purely geometric: every live piece of the player's color is tried against all 64 destinations with its movement rule.
Tokens, captures and checks play no role here.
"""

import logging
from typing import Optional

from src.opaque_chess.board import BoardState
from src.opaque_chess.moves import Move
from src.opaque_chess.pieces import Color
from src.opaque_chess.square import all_coordinates

logger = logging.getLogger(__name__)


class TerminalStateScanner:
    def __init__(self, board: BoardState) -> None:
        self.board = board

    def first_available_move(self, color: Color) -> Optional[Move]:
        """Scan origins, then destinations, in row-major order. Stops at the first geometrically legal pattern."""
        for origin in self.board.live_squares(color):
            piece_type = self.board.square_at(origin).piece_type
            for destination in all_coordinates():
                move = Move(origin, destination)
                if move.is_legal_for(piece_type):
                    return move
        return None

    def has_legal_move(self, color: Color) -> bool:
        return self.first_available_move(color) is not None

    def is_terminal(self, color: Color) -> bool:
        move = self.first_available_move(color)
        if move is None:
            logger.debug("No legal pattern left for %s", color.name.lower())
            return True
        logger.debug("First legal pattern for %s: %s", color.name.lower(), move.to_uci())
        return False
