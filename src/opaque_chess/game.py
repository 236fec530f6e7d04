"""
The GameEngine is the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating everything required to play a turn on the opaque board -->
passes this information to the service layer, which can then pass it onwards to the API layer.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import (
    AlreadyRevealedError,
    DeadPieceError,
    GameStateError,
    IllegalMoveError,
    RevealProofError,
    UnknownMoveError,
    WrongColorPieceError,
)
from src.core.models import GameModel
from src.core.shared_types import Status
from src.opaque_chess.board import BoardState, Grid
from src.opaque_chess.claims import MoveClaimVerifier
from src.opaque_chess.events import GameEvents, GameOver, MoveMade, PlayerRegistered
from src.opaque_chess.history import GameStats, RecordedMove
from src.opaque_chess.moves import MoveClaim
from src.opaque_chess.opaque import EqualityOracle, Proof
from src.opaque_chess.pieces import Color
from src.opaque_chess.square import Square
from src.opaque_chess.terminal import TerminalStateScanner
from src.opaque_chess.turns import TurnController

logger = logging.getLogger(__name__)


@dataclass
class GameEngine:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: BoardState
    turns: TurnController
    oracle: EqualityOracle
    moves: list[RecordedMove] = field(default_factory=list)
    winner: Optional[Color] = None
    events: GameEvents = field(default_factory=GameEvents)

    @classmethod
    def new_game(cls, oracle: EqualityOracle, events: Optional[GameEvents] = None) -> Self:
        """Empty board (every square vacant), nobody registered yet."""
        return cls(
            board=BoardState(),
            turns=TurnController(),
            oracle=oracle,
            events=events or GameEvents(),
        )

    @classmethod
    def from_model(
        cls,
        model: GameModel,
        oracle: EqualityOracle,
        events: Optional[GameEvents] = None,
    ) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.status not in [status.value for status in Status]:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {', '.join(status.value for status in Status)}"
            )
        if model.current_player not in [color.value for color in Color]:
            raise GameStateError(f"Invalid player index: {model.current_player!r}")
        if model.winner is not None and model.winner not in [color.value for color in Color]:
            raise GameStateError(f"Invalid winner index: {model.winner!r}")

        turns = TurnController(
            players=list(model.registered_players),
            current_player=Color(model.current_player),
            status=Status(model.status),
            board_initialized=model.board_initialized,
        )
        return cls(
            board=BoardState.from_records(model.board),
            turns=turns,
            oracle=oracle,
            moves=[RecordedMove.from_record(record) for record in model.moves],
            winner=Color(model.winner) if model.winner is not None else None,
            events=events or GameEvents(),
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            board=self.board.to_records(),
            registered_players=list(self.turns.players),
            current_player=int(self.turns.current_player),
            status=self.turns.status.value,
            board_initialized=self.turns.board_initialized,
            winner=int(self.winner) if self.winner is not None else None,
            moves=[move.to_record() for move in self.moves],
        )

    def register_player(self, identity: str) -> Color:
        color = self.turns.register(identity)
        logger.info("Registered player %r as %s", identity, color.name.lower())
        self.events.emit_player_registered(PlayerRegistered(identity, color))
        return color

    def initialize_board(self, identity: str, grid: Grid) -> None:
        """One-shot bulk load of all 64 squares by the white player, before the game starts."""
        self.turns.assert_can_initialize(identity)
        self.board.bulk_initialize(grid)
        self.turns.mark_board_initialized()
        logger.info("Board initialized by %r", identity)

    def make_move(self, identity: str, claim: MoveClaim) -> None:
        """
        Attempt to make a move
        -----

        Checks, in order (the first one to fail is the one reported):
        1. game is in progress
        2. player is registered
        3. it is the player's turn
        4. the piece on the from square is still in play
        5. the piece on the from square has the player's color
        6. the claimed tokens match the tokens on both squares (asked to the oracle)
        7. the displacement is legal for the piece

        Then:
        8. update the board (destination overwritten, origin flagged captured)
        9. record the move
        10. hand the turn to the opponent
        11. check whether the opponent has any move left
        """
        # 1-3
        color = self.turns.assert_your_turn(identity)

        move = claim.move
        source = self.board.square_at(move.from_square)

        # 4
        if source.is_captured:
            raise DeadPieceError(
                f"No piece in play on {move.from_square.to_algebraic()}."
            )

        # 5
        if source.is_white != color.is_white:
            raise WrongColorPieceError(
                f"Piece on {move.from_square.to_algebraic()} does not belong to {identity!r}."
            )

        # 6
        MoveClaimVerifier(self.oracle).verify(claim, self.board)

        # 7
        if not move.is_legal_for(source.piece_type):
            logger.warning("Illegal move %s for piece code %d", move.to_uci(), source.piece_type)
            raise IllegalMoveError(f"Move not allowed: {move.to_uci()}")

        # --- every check passed: from here on nothing can fail ---
        self._update_board(claim)
        self._update_moves(identity, claim, source)
        self.turns.advance()
        logger.info("Move %s by %r accepted", move.to_uci(), identity)

        game_over = self._update_game_status()

        self.events.emit_move(
            MoveMade(
                actor=identity,
                from_x=move.from_square.x,
                from_y=move.from_square.y,
                to_x=move.to_square.x,
                to_y=move.to_square.y,
            )
        )
        if game_over:
            assert self.winner is not None
            self.events.emit_game_over(GameOver(self.winner))

    def reveal_move(self, move_id: int, clear_value: int, proof: Proof) -> int:
        """
        Explicit reveal of the token a recorded move carried.
        ---

        The oracle has to accept the decryption proof. A move can be revealed only once.
        """
        recorded = self._find_move(move_id)
        if recorded.is_verified:
            raise AlreadyRevealedError(f"Move {move_id} has already been revealed.")
        if not self.oracle.verify_decryption(recorded.token, clear_value, proof):
            logger.warning("Rejected decryption proof for move %d", move_id)
            raise RevealProofError(f"Decryption proof for move {move_id} was rejected.")

        recorded.mark_revealed(clear_value)
        logger.info("Move %d revealed", move_id)
        return clear_value

    def get_board(self) -> Grid:
        return self.board.snapshot()

    def get_current_player(self) -> Optional[str]:
        return self.turns.current_identity

    def is_game_over(self) -> bool:
        return self.turns.is_finished

    def stats(self) -> GameStats:
        return GameStats.from_moves(self.moves)

    # -- PRIVATE HELPERS ---
    def _update_board(self, claim: MoveClaim) -> None:
        """Whatever stood on the destination is gone. The origin keeps its token but is flagged captured."""
        move = claim.move
        source = self.board.square_at(move.from_square)
        self.board.set(move.to_square.x, move.to_square.y, source)
        # NOTE read the origin again: if from == to, the piece just written gets flagged.
        origin = self.board.square_at(move.from_square)
        self.board.set(move.from_square.x, move.from_square.y, origin.captured())

    def _update_moves(self, identity: str, claim: MoveClaim, source: Square) -> None:
        self.moves.append(
            RecordedMove(
                move_id=len(self.moves) + 1,
                actor=identity,
                move=claim.move,
                piece_type=source.piece_type,
                token=source.position,
            )
        )

    def _update_game_status(self) -> bool:
        """Performs the terminal scan and changes status accordingly.

        NOTE the turn has already been handed over. The color scanned is the opponent of the player who just moved,
        and that same color ends up in `winner` (the player left without a move).
        """
        next_color = self.turns.current_player
        if not TerminalStateScanner(self.board).is_terminal(next_color):
            return False

        self.winner = next_color
        self.turns.finish()
        logger.info("Game over: %s has no move left", next_color.name.lower())
        return True

    def _find_move(self, move_id: int) -> RecordedMove:
        found = next((move for move in self.moves if move.move_id == move_id), None)
        if found is None:
            raise UnknownMoveError(f"No recorded move with id {move_id}.")
        return found
