"""Log of accepted moves, and the explicit reveal of what a moved token stood for."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from src.opaque_chess.moves import Move
from src.opaque_chess.opaque import OpaqueToken
from src.opaque_chess.pieces import PieceType


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RecordedMove:
    """
    One accepted move.
    ---

    Coordinates, actor and piece code are public anyway. `token` is the moved piece's opaque token;
    `revealed_value` stays None until someone presents a valid decryption proof for it.
    """

    move_id: int
    actor: str
    move: Move
    piece_type: PieceType
    token: OpaqueToken
    timestamp: datetime = field(default_factory=utc_now)
    is_verified: bool = False
    revealed_value: Optional[int] = None

    def mark_revealed(self, clear_value: int) -> None:
        self.is_verified = True
        self.revealed_value = clear_value

    def to_record(self) -> dict[str, Any]:
        return {
            "move_id": self.move_id,
            "actor": self.actor,
            "move": self.move.to_uci(),
            "piece_type": int(self.piece_type),
            "token": self.token.handle,
            "timestamp": self.timestamp.isoformat(),
            "is_verified": self.is_verified,
            "revealed_value": self.revealed_value,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> RecordedMove:
        return cls(
            move_id=record["move_id"],
            actor=record["actor"],
            move=Move.from_uci(record["move"]),
            piece_type=PieceType.from_code(record["piece_type"]),
            token=OpaqueToken(record["token"]),
            timestamp=datetime.fromisoformat(record["timestamp"]),
            is_verified=record["is_verified"],
            revealed_value=record["revealed_value"],
        )


@dataclass(frozen=True)
class GameStats:
    total_moves: int
    verified_moves: int
    active_players: int

    @classmethod
    def from_moves(cls, moves: list[RecordedMove]) -> GameStats:
        return cls(
            total_moves=len(moves),
            verified_moves=sum(1 for move in moves if move.is_verified),
            active_players=len({move.actor for move in moves}),
        )
