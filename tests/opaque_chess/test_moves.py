"""Unit tests for /src/opaque_chess/moves.py"""

from itertools import product

import pytest

from src.core.exceptions import InvalidRequestError
from src.opaque_chess.moves import MOVEMENT_RULES, Move, MoveClaim, is_legal
from src.opaque_chess.opaque import OpaqueToken
from src.opaque_chess.pieces import PieceType
from src.opaque_chess.square import Coordinate

DISPLACEMENTS = list(product(range(-7, 8), repeat=2))


def _legal_displacements(piece_type: PieceType) -> set[tuple[int, int]]:
    return {(dx, dy) for dx, dy in DISPLACEMENTS if MOVEMENT_RULES[piece_type](dx, dy)}


def test_every_piece_code_has_a_rule() -> None:
    assert set(MOVEMENT_RULES) == set(PieceType)


def test_pawn_steps_along_the_rank() -> None:
    assert _legal_displacements(PieceType.PAWN) == {(1, 0), (-1, 0)}


def test_bishop_single_diagonal_step() -> None:
    assert _legal_displacements(PieceType.BISHOP) == {(1, 1), (1, -1), (-1, 1), (-1, -1)}


def test_knight_steps_along_the_file() -> None:
    assert _legal_displacements(PieceType.KNIGHT) == {(0, 1), (0, -1)}


def test_rook_moves_along_diagonals() -> None:
    legal = _legal_displacements(PieceType.ROOK)
    assert legal == {(d, d) for d in range(-7, 8)} | {(d, -d) for d in range(-7, 8)}
    assert (3, 0) not in legal


def test_queen_moves_along_ranks_and_files() -> None:
    legal = _legal_displacements(PieceType.QUEEN)
    assert legal == {(d, 0) for d in range(-7, 8)} | {(0, d) for d in range(-7, 8)}
    assert (1, 1) not in legal


def test_orthogonal_step() -> None:
    assert _legal_displacements(PieceType.ORTHOGONAL_STEP) == {(1, 0), (-1, 0), (0, 1), (0, -1)}


def test_king_one_step_including_standing_still() -> None:
    assert _legal_displacements(PieceType.KING) == set(product((-1, 0, 1), repeat=2))


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_only_the_displacement_matters(piece_type: PieceType) -> None:
    """Same (dx, dy) from anywhere on the board --> same verdict"""
    for dx, dy in [(1, 0), (0, 1), (1, 1), (2, 2), (3, 0), (2, 1), (0, 0)]:
        verdicts = {
            is_legal(piece_type, x, y, x + dx, y + dy)
            for x, y in product(range(8), repeat=2)
            if 0 <= x + dx < 8 and 0 <= y + dy < 8
        }
        assert len(verdicts) == 1


def test_move_uci_roundtrip() -> None:
    move = Move.from_uci("a1d4")
    assert move.from_square == Coordinate(0, 0)
    assert move.to_square == Coordinate(3, 3)
    assert move.displacement == (3, 3)
    assert move.to_uci() == "a1d4"
    assert move.is_legal_for(PieceType.ROOK)
    assert not move.is_legal_for(PieceType.QUEEN)


@pytest.mark.parametrize("uci", ["a1", "a1d4q", "a1z9"])
def test_invalid_uci(uci: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = Move.from_uci(uci)


def test_claim_from_raw_coordinates() -> None:
    a, b = OpaqueToken("a"), OpaqueToken("b")
    claim = MoveClaim.build(0, 0, 3, 0, a, b, "proof")
    assert claim.move == Move(Coordinate(0, 0), Coordinate(3, 0))
    assert claim.from_token == a
    assert claim.to_token == b
    assert claim.proof == "proof"


def test_claim_off_the_board() -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveClaim.build(0, 0, 8, 0, OpaqueToken("a"), OpaqueToken("b"), "proof")
