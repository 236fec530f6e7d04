"""The board owns every Square record. It is the single source of truth for where the pieces are."""

from dataclasses import dataclass, field
from typing import Any, Self

from src.core.exceptions import InvalidRequestError
from src.opaque_chess.pieces import Color
from src.opaque_chess.square import BOARD_DIMENSIONS, Coordinate, Square, all_coordinates

Grid = list[list[Square]]


def vacant_grid() -> Grid:
    """Every square holds the captured/uninitialized record. Indexed as grid[y][x]."""
    return [
        [Square.vacant() for _ in range(BOARD_DIMENSIONS[0])]
        for _ in range(BOARD_DIMENSIONS[1])
    ]


@dataclass
class BoardState:
    squares: Grid = field(default_factory=vacant_grid)

    def get(self, x: int, y: int) -> Square:
        coordinate = Coordinate(x, y)
        return self.squares[coordinate.y][coordinate.x]

    def set(self, x: int, y: int, square: Square) -> None:
        coordinate = Coordinate(x, y)
        self.squares[coordinate.y][coordinate.x] = square

    def bulk_initialize(self, grid: Grid) -> None:
        """
        Replace the whole board in one go.
        ---

        Either all 64 squares get written or none: the shape is checked before anything is touched,
        so a bad grid can never leave half of the board initialized.
        """
        self._assert_full_grid(grid)
        self.squares = [list(row) for row in grid]

    def snapshot(self) -> Grid:
        """Copy of the grid. Square records are frozen, so copying the rows is enough."""
        return [list(row) for row in self.squares]

    def square_at(self, coordinate: Coordinate) -> Square:
        return self.squares[coordinate.y][coordinate.x]

    def live_squares(self, color: Color) -> list[Coordinate]:
        """Coordinates of the pieces of a given color that are still in play"""
        return [
            coordinate
            for coordinate in all_coordinates()
            if self.square_at(coordinate).is_live_for(color.is_white)
        ]

    def to_records(self) -> list[list[dict[str, Any]]]:
        return [[square.to_record() for square in row] for row in self.squares]

    @classmethod
    def from_records(cls, records: list[list[dict[str, Any]]]) -> Self:
        grid = [[Square.from_record(record) for record in row] for row in records]
        cls._assert_full_grid(grid)
        return cls(grid)

    @staticmethod
    def _assert_full_grid(grid: Grid) -> None:
        files, ranks = BOARD_DIMENSIONS
        if len(grid) != ranks or any(len(row) != files for row in grid):
            raise InvalidRequestError(
                f"Board must be a full {files}x{ranks} grid of squares."
            )
        if not all(isinstance(square, Square) for row in grid for square in row):
            raise InvalidRequestError("Every entry of the board must be a Square.")
