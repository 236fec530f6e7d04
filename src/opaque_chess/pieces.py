"""Defines the piece types (movement rule codes) and colors"""

from enum import IntEnum
from typing import Self

from src.core.exceptions import InvalidRequestError


class PieceType(IntEnum):
    """
    Closed set of movement rule codes.
    ----

    The integer value IS the index into the movement rule table (see moves.py).
    The names follow the labels the codes have always carried, even where the rule behind a label
    has little to do with the chess piece of the same name (ex. ROOK moves along diagonals).
    Code 5 never had a chess label: it is a single orthogonal step.
    """

    PAWN = 0
    BISHOP = 1
    KNIGHT = 2
    ROOK = 3
    QUEEN = 4
    ORTHOGONAL_STEP = 5
    KING = 6

    @classmethod
    def from_code(cls, code: int) -> Self:
        try:
            return cls(code)
        except ValueError:
            raise InvalidRequestError(
                f"Unknown piece code: {code!r}. Pick one from {', '.join(str(int(p)) for p in cls)}"
            ) from None


class Color(IntEnum):
    """Players are indexed by registration order: the first one plays white."""

    WHITE = 0
    BLACK = 1

    @property
    def opponent(self) -> Self:
        return Color.BLACK if self == Color.WHITE else Color.WHITE

    @property
    def is_white(self) -> bool:
        return self == Color.WHITE
