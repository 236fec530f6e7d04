"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base
from src.opaque_chess.board import BoardState, Grid
from src.opaque_chess.moves import MoveClaim
from src.opaque_chess.opaque import HmacOracle
from src.opaque_chess.pieces import PieceType
from src.opaque_chess.square import BOARD_DIMENSIONS, Square

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

# (x, y) -> (piece code, is_white)
Placement = dict[tuple[int, int], tuple[PieceType, bool]]
GridFactory = Callable[[Placement], Grid]
ClaimFactory = Callable[[BoardState, int, int, int, int], MoveClaim]


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def oracle() -> HmacOracle:
    return HmacOracle(key=b"test-key")


@pytest.fixture
def grid_factory(oracle: HmacOracle) -> GridFactory:
    """
    Build a full 8x8 grid: every square gets its own encrypted value (y * 8 + x),
    only the squares listed in the placement hold a live piece. All the others are captured.
    """

    def build(placement: Placement) -> Grid:
        grid: Grid = []
        for y in range(BOARD_DIMENSIONS[1]):
            row: list[Square] = []
            for x in range(BOARD_DIMENSIONS[0]):
                token = oracle.encrypt(y * BOARD_DIMENSIONS[0] + x)
                if (x, y) in placement:
                    piece_type, is_white = placement[(x, y)]
                    row.append(Square(token, piece_type, is_white, is_captured=False))
                else:
                    row.append(Square(token, PieceType.PAWN, False, is_captured=True))
            grid.append(row)
        return grid

    return build


@pytest.fixture
def claim_factory(oracle: HmacOracle) -> ClaimFactory:
    """Honest claim: the tokens currently stored on both squares, with a proof covering them."""

    def build(board: BoardState, from_x: int, from_y: int, to_x: int, to_y: int) -> MoveClaim:
        from_token = board.get(from_x, from_y).position
        to_token = board.get(to_x, to_y).position
        return MoveClaim.build(
            from_x, from_y, to_x, to_y, from_token, to_token, oracle.prove(from_token, to_token)
        )

    return build
