"""
Who is playing, and whose turn it is.
---

WAITING_FOR_PLAYERS --2nd registration--> AWAITING_INITIAL_BOARD --board initialized--> IN_PROGRESS --no moves left--> FINISHED

If the board was already initialized while waiting for the second player, the 2nd registration goes straight to IN_PROGRESS.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from src.core.exceptions import (
    AlreadyActiveError,
    AlreadyRegisteredError,
    GameFullError,
    GameNotActiveError,
    NotAuthorizedError,
    TurnViolationError,
    UnknownPlayerError,
)
from src.core.shared_types import Status
from src.opaque_chess.pieces import Color

logger = logging.getLogger(__name__)

MAX_PLAYERS = 2


@dataclass
class TurnController:
    players: list[str] = field(default_factory=list)
    current_player: Color = Color.WHITE
    status: Status = Status.WAITING_FOR_PLAYERS
    board_initialized: bool = False

    @property
    def is_active(self) -> bool:
        return self.status == Status.IN_PROGRESS

    @property
    def is_finished(self) -> bool:
        return self.status == Status.FINISHED

    @property
    def current_identity(self) -> Optional[str]:
        if len(self.players) <= self.current_player:
            return None
        return self.players[self.current_player]

    def color_of(self, identity: str) -> Optional[Color]:
        if identity not in self.players:
            return None
        return Color(self.players.index(identity))

    def register(self, identity: str) -> Color:
        """Registration order decides the color. Duplicates are rejected before a full game is."""
        if identity in self.players:
            raise AlreadyRegisteredError(f"Player {identity!r} is already registered.")
        if len(self.players) >= MAX_PLAYERS:
            raise GameFullError("Game already has two registered players.")

        self.players.append(identity)
        color = Color(len(self.players) - 1)
        if len(self.players) == MAX_PLAYERS:
            self.current_player = Color.WHITE
            self._change_status(
                Status.IN_PROGRESS
                if self.board_initialized
                else Status.AWAITING_INITIAL_BOARD
            )
        return color

    def assert_can_initialize(self, identity: str) -> None:
        """Only white sets up the board, and only once, before the game starts."""
        if self.color_of(identity) != Color.WHITE:
            raise NotAuthorizedError(f"Player {identity!r} may not initialize the board.")
        if self.board_initialized or self.status in (Status.IN_PROGRESS, Status.FINISHED):
            raise AlreadyActiveError("Board can no longer be initialized.")

    def mark_board_initialized(self) -> None:
        self.board_initialized = True
        if self.status == Status.AWAITING_INITIAL_BOARD:
            self._change_status(Status.IN_PROGRESS)

    def assert_your_turn(self, identity: str) -> Color:
        """
        The turn-related checks, in order:
        1. game must be in progress
        2. the player must be registered
        3. the player's color must be the one to move
        """
        if not self.is_active:
            raise GameNotActiveError(f"Game is not in progress. status: {self.status}")

        color = self.color_of(identity)
        if color is None:
            raise UnknownPlayerError(f"Player {identity!r} is not registered in this game.")

        if color != self.current_player:
            raise TurnViolationError(
                f"It is not your turn. Waiting for player {self.current_identity} to make a move first."
            )
        return color

    def advance(self) -> None:
        self.current_player = self.current_player.opponent

    def finish(self) -> None:
        self._change_status(Status.FINISHED)

    def _change_status(self, new_status: Status) -> None:
        logger.info("Status: %s -> %s", self.status, new_status)
        self.status = new_status
