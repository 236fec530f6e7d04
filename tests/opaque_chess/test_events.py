"""Unit tests for /src/opaque_chess/events.py"""

from src.opaque_chess.events import GameEvents, GameOver, MoveMade, PlayerRegistered
from src.opaque_chess.pieces import Color


def _listening(events: GameEvents) -> list[object]:
    received: list[object] = []
    events.on_player_registered.append(received.append)
    events.on_move.append(received.append)
    events.on_game_over.append(received.append)
    return received


def test_events_are_delivered_immediately_by_default() -> None:
    events = GameEvents()
    received = _listening(events)
    events.emit_player_registered(PlayerRegistered("alice", Color.WHITE))
    assert received == [PlayerRegistered("alice", Color.WHITE)]


def test_multiple_handlers_per_event() -> None:
    events = GameEvents()
    first: list[MoveMade] = []
    second: list[MoveMade] = []
    events.on_move.extend([first.append, second.append])
    events.emit_move(MoveMade("alice", 0, 0, 0, 1))
    assert first == second == [MoveMade("alice", 0, 0, 0, 1)]


def test_deferred_events_wait_for_flush() -> None:
    events = GameEvents()
    received = _listening(events)
    deferred = events.deferred_copy()

    deferred.emit_move(MoveMade("alice", 0, 0, 0, 1))
    deferred.emit_game_over(GameOver(Color.BLACK))
    assert received == []

    deferred.flush()
    assert received == [MoveMade("alice", 0, 0, 0, 1), GameOver(Color.BLACK)]

    # nothing is delivered twice
    deferred.flush()
    assert len(received) == 2


def test_deferred_copy_shares_subscribers() -> None:
    events = GameEvents()
    deferred = events.deferred_copy()
    received = _listening(events)

    deferred.emit_player_registered(PlayerRegistered("bob", Color.BLACK))
    deferred.flush()
    assert received == [PlayerRegistered("bob", Color.BLACK)]
    assert not events.deferred


def test_dropped_deferred_copy_delivers_nothing() -> None:
    events = GameEvents()
    received = _listening(events)
    events.deferred_copy().emit_move(MoveMade("alice", 0, 0, 0, 1))
    assert received == []
