from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import GRID_ROWS, GRID_COLS

# (row, col), 0-indexed
Cell = Tuple[int, int]


@dataclass(frozen=True)
class GridSnapshot:
    """Read-only view of the grid handed to the rendering layer."""

    rows: int
    cols: int
    walls: Tuple[Tuple[bool, ...], ...]
    start: Optional[Cell]
    end: Optional[Cell]
    path: Tuple[Cell, ...]
    search_effort: int
    explored: Tuple[Cell, ...]

    def is_wall(self, cell: Cell) -> bool:
        return self.walls[cell[0]][cell[1]]


class Grid:
    """
    Obstacle mask plus start/end endpoints and the last computed path.

    The path is not kept in sync automatically: whoever mutates walls or
    endpoints is responsible for re-running the search.
    """

    def __init__(self, rows: int = GRID_ROWS, cols: int = GRID_COLS) -> None:
        for name, value in (("rows", rows), ("cols", cols)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Grid {name} must be an int, got {value!r}")
            if value <= 0:
                raise ValueError(f"Grid {name} must be positive, got {value}")
        self.rows = rows
        self.cols = cols
        self.walls: List[List[bool]] = [
            [False] * cols for _ in range(rows)
        ]
        self._start: Optional[Cell] = None
        self._end: Optional[Cell] = None
        # Results of the last search
        self.path: List[Cell] = []
        self.search_effort: int = 0
        self.explored: List[Cell] = []

    def in_bounds(self, cell: Cell) -> bool:
        """Return True if cell lies inside [0, rows) x [0, cols)."""
        row, col = cell
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_passable(self, cell: Cell) -> bool:
        """Return True if cell is in bounds and not a wall."""
        return self.in_bounds(cell) and not self.walls[cell[0]][cell[1]]

    def is_wall(self, cell: Cell) -> bool:
        """Return the wall flag of an in-bounds cell."""
        self._check_bounds(cell)
        return self.walls[cell[0]][cell[1]]

    def set_wall(self, cell: Cell, value: bool) -> bool:
        """
        Set the wall flag at cell.
        Returns True if the stored value changed.
        """
        self._check_bounds(cell)
        row, col = cell
        if self.walls[row][col] == value:
            return False
        self.walls[row][col] = value
        return True

    @property
    def start(self) -> Optional[Cell]:
        return self._start

    @start.setter
    def start(self, cell: Optional[Cell]) -> None:
        if cell is not None:
            self._check_bounds(cell)
        self._start = cell

    @property
    def end(self) -> Optional[Cell]:
        return self._end

    @end.setter
    def end(self, cell: Optional[Cell]) -> None:
        if cell is not None:
            self._check_bounds(cell)
        self._end = cell

    def index(self, cell: Cell) -> int:
        """Flat index of cell, row-major."""
        return cell[0] * self.cols + cell[1]

    def snapshot(self) -> GridSnapshot:
        return GridSnapshot(
            rows=self.rows,
            cols=self.cols,
            walls=tuple(tuple(row) for row in self.walls),
            start=self._start,
            end=self._end,
            path=tuple(self.path),
            search_effort=self.search_effort,
            explored=tuple(self.explored),
        )

    def _check_bounds(self, cell: Cell) -> None:
        if not self.in_bounds(cell):
            raise IndexError(
                f"Cell {cell} outside grid of {self.rows}x{self.cols}"
            )
