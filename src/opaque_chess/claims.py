"""Check that a submitted MoveClaim is about the squares it says it is about, without reading any token."""

import logging

from src.core.exceptions import ClaimMismatchError
from src.opaque_chess.board import BoardState
from src.opaque_chess.moves import MoveClaim
from src.opaque_chess.opaque import EqualityOracle

logger = logging.getLogger(__name__)


class MoveClaimVerifier:
    """Bridges the board and the equality oracle."""

    def __init__(self, oracle: EqualityOracle) -> None:
        self.oracle = oracle

    def verify(self, claim: MoveClaim, board: BoardState) -> None:
        """
        Both claimed tokens must match what is stored on the board right now
        ----

        1. claimed 'from' token == token on the from square
        2. claimed 'to' token == token on the to square

        Raises ClaimMismatchError if either check fails. Nothing is mutated here.
        """
        move = claim.move
        stored_from = board.square_at(move.from_square).position
        stored_to = board.square_at(move.to_square).position

        if not claim.from_token.matches(stored_from, claim.proof, self.oracle):
            logger.warning("Claimed token does not match square %s", move.from_square.to_algebraic())
            raise ClaimMismatchError(
                f"Claimed token does not match the piece on {move.from_square.to_algebraic()}."
            )

        if not claim.to_token.matches(stored_to, claim.proof, self.oracle):
            logger.warning("Claimed token does not match square %s", move.to_square.to_algebraic())
            raise ClaimMismatchError(
                f"Claimed token does not match the piece on {move.to_square.to_algebraic()}."
            )
