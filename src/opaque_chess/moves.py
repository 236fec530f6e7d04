"""
Geometry of a move.

Key idea: Use strategy pattern to define the displacement rule for each piece code.

A rule only looks at the signed displacement (dx, dy). It does not know about the board: no path blocking,
no check, no look at what stands on the destination square. Turn order, ownership and claim verification are
the Game's business.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from src.core.exceptions import InvalidRequestError
from src.opaque_chess.opaque import OpaqueToken, Proof
from src.opaque_chess.pieces import PieceType
from src.opaque_chess.square import Coordinate

DisplacementRule = Callable[[int, int], bool]


# --- MOVEMENT RULES (indexed by piece code) ---
def pawn_rule(dx: int, dy: int) -> bool:
    """Single step along the rank. No forward direction, no double step."""
    return abs(dx) == 1 and dy == 0


def bishop_rule(dx: int, dy: int) -> bool:
    """Single diagonal step"""
    return abs(dx) == 1 and abs(dy) == 1


def knight_rule(dx: int, dy: int) -> bool:
    """Single step along the file"""
    return dx == 0 and abs(dy) == 1


def rook_rule(dx: int, dy: int) -> bool:
    """Any distance along a diagonal (including standing still)"""
    return abs(dx) == abs(dy)


def queen_rule(dx: int, dy: int) -> bool:
    """Any distance along a rank or a file (including standing still)"""
    return dx == 0 or dy == 0


def orthogonal_step_rule(dx: int, dy: int) -> bool:
    """Single step along a rank or a file"""
    return (abs(dx) == 1 and dy == 0) or (dx == 0 and abs(dy) == 1)


def king_rule(dx: int, dy: int) -> bool:
    """At most one step in every direction (including standing still)"""
    return abs(dx) <= 1 and abs(dy) <= 1


# -- STRATEGY PATTERN ---
MOVEMENT_RULES: dict[PieceType, DisplacementRule] = {
    PieceType.PAWN: pawn_rule,
    PieceType.BISHOP: bishop_rule,
    PieceType.KNIGHT: knight_rule,
    PieceType.ROOK: rook_rule,
    PieceType.QUEEN: queen_rule,
    PieceType.ORTHOGONAL_STEP: orthogonal_step_rule,
    PieceType.KING: king_rule,
}


def is_legal(piece_type: PieceType, from_x: int, from_y: int, to_x: int, to_y: int) -> bool:
    """Geometric legality: a pure function of the piece code and the displacement."""
    return MOVEMENT_RULES[piece_type](to_x - from_x, to_y - from_y)


@dataclass(frozen=True)
class Move:
    """basic definition of a move: where from, where to"""

    from_square: Coordinate
    to_square: Coordinate

    @classmethod
    def from_uci(cls, uci: str) -> Move:
        """
        "a1d1": move whatever stands on a1 to d1.
        (no promotion suffix: promotion does not exist here)
        """
        if len(uci) != 4:
            raise InvalidRequestError(f"Expected 4 characters in {uci!r}")
        return cls(Coordinate.from_algebraic(uci[:2]), Coordinate.from_algebraic(uci[2:]))

    def to_uci(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"

    @property
    def displacement(self) -> tuple[int, int]:
        return (
            self.to_square.x - self.from_square.x,
            self.to_square.y - self.from_square.y,
        )

    def is_legal_for(self, piece_type: PieceType) -> bool:
        return MOVEMENT_RULES[piece_type](*self.displacement)


@dataclass(frozen=True)
class MoveClaim:
    """
    What a player submits to make a move.
    ----

    The two tokens claim to be (re-encryptions of) whatever is stored on the from/to squares right now.
    `proof` is the oracle's artifact vouching for those tokens. A claim lives for a single call to `make_move`;
    nothing keeps a reference to it afterwards.
    """

    move: Move
    from_token: OpaqueToken
    to_token: OpaqueToken
    proof: Proof

    @classmethod
    def build(
        cls,
        from_x: int,
        from_y: int,
        to_x: int,
        to_y: int,
        from_token: OpaqueToken,
        to_token: OpaqueToken,
        proof: Proof,
    ) -> MoveClaim:
        """Convenience constructor from raw coordinates"""
        move = Move(Coordinate(from_x, from_y), Coordinate(to_x, to_y))
        return cls(move, from_token, to_token, proof)
