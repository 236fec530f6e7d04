"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, Status

PlayerName = str

BOARD_SIZE = 8
PIECE_CODES = range(7)


def _validate_coordinate(value: int) -> int:
    if not 0 <= value < BOARD_SIZE:
        raise InvalidRequestError(f"Coordinate {value!r} is off the board (0-{BOARD_SIZE - 1}).")
    return value


# --- SHARED PAYLOADS ---
class SquarePayload(BaseModel):
    """One square as the outside world sees it: the token is an opaque handle."""

    position: str
    piece_type: int
    is_white: bool
    is_captured: bool

    @field_validator("piece_type")
    @classmethod
    def validate_piece_type(cls, value: int) -> int:
        if value not in PIECE_CODES:
            raise InvalidRequestError(f"Unknown piece code: {value!r}.")
        return value


class RecordedMovePayload(BaseModel):
    move_id: int
    actor: PlayerName
    move: str
    piece_type: int
    is_verified: bool
    revealed_value: Optional[int]


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_name: str


class JoinGameRequest(BaseModel):
    game_id: UUID
    player_name: str


class InitializeBoardRequest(BaseModel):
    game_id: UUID
    player_name: str
    squares: list[list[SquarePayload]]

    @field_validator("squares")
    @classmethod
    def validate_grid_shape(cls, value: list[list[SquarePayload]]) -> list[list[SquarePayload]]:
        if len(value) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in value):
            raise InvalidRequestError(
                f"Board must contain {BOARD_SIZE} rows of {BOARD_SIZE} squares."
            )
        return value


class MoveRequest(BaseModel):
    game_id: UUID
    player_name: str
    from_x: int
    from_y: int
    to_x: int
    to_y: int
    from_token: str
    to_token: str
    proof: str

    @field_validator(*["from_x", "from_y", "to_x", "to_y"])
    @classmethod
    def validate_coordinate(cls, value: int) -> int:
        return _validate_coordinate(value)


class RevealMoveRequest(BaseModel):
    game_id: UUID
    move_id: int
    clear_value: int
    proof: str


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    players: dict[Color, PlayerName]
    status: Status
    current_player: Optional[PlayerName]
    board: list[list[SquarePayload]]
    move_history: list[RecordedMovePayload]
    winner: Optional[Color]


class RevealMoveResponse(BaseModel):
    game_id: UUID
    move_id: int
    clear_value: int


class GameStatsResponse(BaseModel):
    game_id: UUID
    total_moves: int
    verified_moves: int
    active_players: int
