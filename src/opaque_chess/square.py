"""
Coordinates and the per-square record on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterator

from src.core.exceptions import InvalidRequestError
from src.opaque_chess.opaque import OpaqueToken
from src.opaque_chess.pieces import PieceType

# Board is always 8x8. Coordinates are zero-based: x is the file (a-h), y is the rank (1-8).
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Coordinate:
    x: int
    y: int

    def __post_init__(self) -> None:
        if not self.is_within_bounds():
            raise InvalidRequestError(
                f"Coordinate ({self.x}, {self.y}) is not on the {BOARD_DIMENSIONS[0]}x{BOARD_DIMENSIONS[1]} board."
            )

    @classmethod
    def from_algebraic(cls, sq: str) -> Coordinate:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        if len(sq) != 2 or not sq[0].isalpha() or not sq[1].isdigit():
            raise InvalidRequestError(f"Cannot interpret {sq!r} as a square name.")
        x = ord(sq[0].lower()) - ord("a")
        y = int(sq[1]) - 1
        return cls(x, y)

    def to_algebraic(self) -> str:
        return f"{chr(self.x + ord('a'))}{self.y + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.x < BOARD_DIMENSIONS[0]) and (0 <= self.y < BOARD_DIMENSIONS[1])


def all_coordinates() -> Iterator[Coordinate]:
    """Row-major walk over the whole board: (0,0), (1,0), ... (7,7)"""
    for y in range(BOARD_DIMENSIONS[1]):
        for x in range(BOARD_DIMENSIONS[0]):
            yield Coordinate(x, y)


@dataclass(frozen=True)
class Square:
    """
    What the board stores per coordinate.
    ----

    * `position`: opaque commitment to the piece's identity. The engine only ever compares it through the oracle.
    * `piece_type` / `is_white`: public, fixed at placement.
    * `is_captured`: set once the piece leaves (or is removed from) this square.

    NOTE there is no separate 'empty' state. An uninitialized square and a captured one look exactly the same.
    """

    position: OpaqueToken
    piece_type: PieceType
    is_white: bool
    is_captured: bool = False

    @classmethod
    def vacant(cls) -> Square:
        """The record every square holds before the board gets initialized."""
        return cls(
            position=OpaqueToken.null(),
            piece_type=PieceType.PAWN,
            is_white=False,
            is_captured=True,
        )

    def captured(self) -> Square:
        """Same record, flagged as captured. The token is kept on purpose."""
        return replace(self, is_captured=True)

    def is_live_for(self, white: bool) -> bool:
        return (not self.is_captured) and self.is_white == white

    def to_record(self) -> dict[str, Any]:
        return {
            "position": self.position.handle,
            "piece_type": int(self.piece_type),
            "is_white": self.is_white,
            "is_captured": self.is_captured,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Square:
        return cls(
            position=OpaqueToken(record["position"]),
            piece_type=PieceType.from_code(record["piece_type"]),
            is_white=bool(record["is_white"]),
            is_captured=bool(record["is_captured"]),
        )
