"""Notifications for whatever presents the game. Only public data travels here: identities, colors, coordinates."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from src.opaque_chess.pieces import Color


@dataclass(frozen=True)
class PlayerRegistered:
    identity: str
    color: Color


@dataclass(frozen=True)
class MoveMade:
    actor: str
    from_x: int
    from_y: int
    to_x: int
    to_y: int


@dataclass(frozen=True)
class GameOver:
    # index of the player who was left without a move (the field has always been called 'winner')
    winner: Color


PlayerRegisteredCallback = Callable[[PlayerRegistered], None]
MoveMadeCallback = Callable[[MoveMade], None]
GameOverCallback = Callable[[GameOver], None]


@dataclass
class GameEvents:
    """
    Observable callbacks. Multiple handlers per event.
    ---

    With `deferred=True` nothing is delivered right away: events queue up until `flush()`.
    The service uses this to notify listeners only once the new state has been stored.
    """

    on_player_registered: list[PlayerRegisteredCallback] = field(default_factory=list)
    on_move: list[MoveMadeCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    deferred: bool = False
    _pending: list[Callable[[], None]] = field(default_factory=list, repr=False, compare=False)

    def deferred_copy(self) -> GameEvents:
        """Same subscribers, but holding events back until flushed."""
        return GameEvents(
            on_player_registered=self.on_player_registered,
            on_move=self.on_move,
            on_game_over=self.on_game_over,
            deferred=True,
        )

    def emit_player_registered(self, event: PlayerRegistered) -> None:
        self._dispatch(self.on_player_registered, event)

    def emit_move(self, event: MoveMade) -> None:
        self._dispatch(self.on_move, event)

    def emit_game_over(self, event: GameOver) -> None:
        self._dispatch(self.on_game_over, event)

    def flush(self) -> None:
        """Deliver queued events in the order they were emitted."""
        pending, self._pending = self._pending, []
        for deliver in pending:
            deliver()

    def _dispatch(self, callbacks: list, event: object) -> None:
        def deliver() -> None:
            for callback in callbacks:
                callback(event)

        if self.deferred:
            self._pending.append(deliver)
        else:
            deliver()
