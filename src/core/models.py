"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Any, Optional

# Type aliases to make GameModel easier to read
PlayerName = str
SquareRecord = dict[str, Any]
MoveRecord = dict[str, Any]


@dataclass
class GameModel:
    """Transport-safe representation of an opaque-board game used between API, Service, DB, and Game layers.

    The board is stored row by row: `board[y][x]`. Opaque tokens travel as their handle strings only.
    """

    board: list[list[SquareRecord]]
    registered_players: list[PlayerName]
    current_player: int
    status: str
    board_initialized: bool = False
    winner: Optional[int] = None
    moves: list[MoveRecord] = field(default_factory=list)
