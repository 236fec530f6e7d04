"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
import threading
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GameStatsResponse,
    GetGameRequest,
    InitializeBoardRequest,
    JoinGameRequest,
    MoveRequest,
    RecordedMovePayload,
    RevealMoveRequest,
    RevealMoveResponse,
    SquarePayload,
)
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Color
from src.db.repository import GameRepository
from src.opaque_chess.events import GameEvents
from src.opaque_chess.game import GameEngine
from src.opaque_chess.moves import MoveClaim
from src.opaque_chess.opaque import EqualityOracle, OpaqueToken
from src.opaque_chess.square import Square

logger = logging.getLogger(__name__)

# registration order -> color name used across the API boundary
COLOR_BY_INDEX: tuple[Color, Color] = (Color.WHITE, Color.BLACK)


class OpaqueChessService:
    """
    Orchestration of layers for the opaque-board game.

    Every request is one read-modify-write of a stored snapshot. A single lock makes sure only one of them
    is in flight at any moment, so two submissions can never interleave their mutations.
    """

    def __init__(
        self,
        repository: GameRepository,
        oracle: EqualityOracle,
        events: GameEvents | None = None,
    ) -> None:
        self.repo = repository
        self.oracle = oracle
        self.events = events or GameEvents()
        self._lock = threading.Lock()

    # -- API routes logic ---
    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """First player requested to create a new game (and plays white)."""
        with self._lock:
            events = self.events.deferred_copy()
            game = GameEngine.new_game(self.oracle, events)
            game.register_player(request.player_name)

            stored_game, game_id = self.repo.create_game(game.to_model())
            logger.info("Created game %s", game_id)
            events.flush()
            return self._create_game_response(game_id, stored_game)

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        """Second player requested to join a game."""
        with self._lock:
            game = self._load_game(request.game_id)
            game.register_player(request.player_name)
            return self._store(request.game_id, game)

    def initialize_board(self, request: InitializeBoardRequest) -> GameResponse:
        """White player uploads the full 8x8 board."""
        with self._lock:
            game = self._load_game(request.game_id)
            grid = [
                [Square.from_record(square.model_dump()) for square in row]
                for row in request.squares
            ]
            game.initialize_board(request.player_name, grid)
            return self._store(request.game_id, game)

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt."""
        with self._lock:
            game = self._load_game(request.game_id)

            # Parse data in MoveRequest into a claim
            claim = MoveClaim.build(
                from_x=request.from_x,
                from_y=request.from_y,
                to_x=request.to_x,
                to_y=request.to_y,
                from_token=OpaqueToken(request.from_token),
                to_token=OpaqueToken(request.to_token),
                proof=request.proof,
            )

            # Attempt the move. Any failure raises before the snapshot gets stored.
            game.make_move(request.player_name, claim)
            return self._store(request.game_id, game)

    def reveal_move(self, request: RevealMoveRequest) -> RevealMoveResponse:
        """Present a decryption proof for the token carried by a recorded move."""
        with self._lock:
            game = self._load_game(request.game_id)
            clear_value = game.reveal_move(
                request.move_id, request.clear_value, request.proof
            )
            self._persist(request.game_id, game.to_model())
            return RevealMoveResponse(
                game_id=request.game_id,
                move_id=request.move_id,
                clear_value=clear_value,
            )

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        with self._lock:
            game_model = self._fetch_game(request.game_id)
            return self._create_game_response(request.game_id, game_model)

    def game_stats(self, request: GetGameRequest) -> GameStatsResponse:
        with self._lock:
            stats = self._load_game(request.game_id).stats()
        return GameStatsResponse(
            game_id=request.game_id,
            total_moves=stats.total_moves,
            verified_moves=stats.verified_moves,
            active_players=stats.active_players,
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        with self._lock:
            self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    def _load_game(self, game_id: UUID) -> GameEngine:
        """
        Rebuild the engine from the stored snapshot, wired to this service's oracle.
        Listeners are attached through a deferred copy: nothing reaches them until `_store` has persisted the result.
        """
        return GameEngine.from_model(
            self._fetch_game(game_id), self.oracle, self.events.deferred_copy()
        )

    def _store(self, game_id: UUID, game: GameEngine) -> GameResponse:
        """Capture updated state in GameModel, persist it, notify listeners, and respond with it."""
        model = game.to_model()
        self._persist(game_id, model)
        game.events.flush()
        return self._create_game_response(game_id, model)

    def _persist(self, game_id: UUID, model: GameModel) -> None:
        """Write the snapshot back. A repository that reports no row updated means the game is gone."""
        if self.repo.update_game(game_id, model) is None:
            raise RepositoryError(f"Game with {game_id=} could not be updated.")

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        players = {
            COLOR_BY_INDEX[index]: name
            for index, name in enumerate(model.registered_players)
        }
        return GameResponse(
            game_id=game_id,
            players=players,
            status=model.status,
            current_player=players.get(COLOR_BY_INDEX[model.current_player]),
            board=[[SquarePayload(**record) for record in row] for row in model.board],
            move_history=[
                RecordedMovePayload(
                    move_id=record["move_id"],
                    actor=record["actor"],
                    move=record["move"],
                    piece_type=record["piece_type"],
                    is_verified=record["is_verified"],
                    revealed_value=record["revealed_value"],
                )
                for record in model.moves
            ],
            winner=COLOR_BY_INDEX[model.winner] if model.winner is not None else None,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
