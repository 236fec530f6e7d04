"""Unit tests for /src/opaque_chess/history.py"""

from datetime import datetime, timezone

from src.opaque_chess.history import GameStats, RecordedMove
from src.opaque_chess.moves import Move
from src.opaque_chess.opaque import OpaqueToken
from src.opaque_chess.pieces import PieceType


def _recorded(move_id: int, actor: str, verified: bool = False) -> RecordedMove:
    recorded = RecordedMove(
        move_id=move_id,
        actor=actor,
        move=Move.from_uci("a1a2"),
        piece_type=PieceType.KNIGHT,
        token=OpaqueToken(f"token-{move_id}"),
        timestamp=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )
    if verified:
        recorded.mark_revealed(42)
    return recorded


def test_record_roundtrip() -> None:
    recorded = _recorded(1, "alice", verified=True)
    assert RecordedMove.from_record(recorded.to_record()) == recorded


def test_record_does_not_leak_value_before_reveal() -> None:
    record = _recorded(1, "alice").to_record()
    assert record["is_verified"] is False
    assert record["revealed_value"] is None


def test_stats_from_moves() -> None:
    moves = [_recorded(1, "alice", verified=True), _recorded(2, "bob"), _recorded(3, "alice")]
    assert GameStats.from_moves(moves) == GameStats(total_moves=3, verified_moves=1, active_players=2)


def test_stats_without_moves() -> None:
    assert GameStats.from_moves([]) == GameStats(total_moves=0, verified_moves=0, active_players=0)
