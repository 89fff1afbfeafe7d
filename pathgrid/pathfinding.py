"""
Pathfinding: grid-based A* over the obstacle mask of a Grid.
"""
from __future__ import annotations
import heapq
import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from .grid import Cell, Grid

logger = logging.getLogger(__name__)

# Expansion order: up, down, right, left
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, 0),
    (1, 0),
    (0, 1),
    (0, -1),
)


@dataclass
class SearchResult:
    """
    Outcome of one search.
    path: cells from start (exclusive) to end (inclusive), empty if no route.
    effort: number of cells finalized.
    explored: finalized cells in the order they were expanded.
    """

    path: List[Cell] = field(default_factory=list)
    effort: int = 0
    explored: List[Cell] = field(default_factory=list)


def heuristic(a: Cell, b: Cell) -> int:
    """Manhattan distance heuristic for grid."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def find_path(grid: Grid) -> SearchResult:
    """
    Find the shortest 4-connected route from grid.start to grid.end using A*.
    Frontier entries are (f_score, row, col) so ties on f resolve by row and
    then column, which makes the result reproducible for identical inputs.
    Returns an empty SearchResult when an endpoint is missing, walled or
    equal to the other, or when no route exists.
    """
    start, goal = grid.start, grid.end
    if start is None or goal is None or start == goal:
        return SearchResult()
    # Both endpoints must be walkable before any expansion happens
    if not grid.is_passable(start) or not grid.is_passable(goal):
        return SearchResult()

    # Per-call tables, flat and indexed by row * cols + col
    size = grid.rows * grid.cols
    g_score: List[Optional[int]] = [None] * size
    came_from: List[Optional[Cell]] = [None] * size
    closed = [False] * size
    g_score[grid.index(start)] = 0

    open_set = [(heuristic(start, goal), start[0], start[1])]
    explored: List[Cell] = []

    while open_set:
        _, row, col = heapq.heappop(open_set)
        current = (row, col)
        current_idx = grid.index(current)
        # Stale duplicate of an already finalized cell
        if closed[current_idx]:
            continue
        closed[current_idx] = True
        explored.append(current)

        if current == goal:
            return SearchResult(
                _reconstruct(came_from, grid, start, goal),
                len(explored),
                explored,
            )

        tentative_g = g_score[current_idx] + 1
        for d_row, d_col in NEIGHBOR_OFFSETS:
            neighbor = (row + d_row, col + d_col)
            if not grid.is_passable(neighbor):
                continue
            n_idx = grid.index(neighbor)
            if closed[n_idx]:
                continue
            known = g_score[n_idx]
            # First arrival sets the parent; a later arrival only replaces
            # it when strictly cheaper
            if known is None or tentative_g < known:
                came_from[n_idx] = current
                g_score[n_idx] = tentative_g
                f_score = tentative_g + heuristic(neighbor, goal)
                heapq.heappush(open_set, (f_score, neighbor[0], neighbor[1]))

    # No path found
    return SearchResult(effort=len(explored), explored=explored)


def search(grid: Grid) -> SearchResult:
    """Run find_path and store path, effort and explored cells on the grid."""
    began = time.perf_counter()
    result = find_path(grid)
    elapsed_ms = (time.perf_counter() - began) * 1000.0
    grid.path = result.path
    grid.search_effort = result.effort
    grid.explored = result.explored
    logger.debug(
        "Search %s -> %s: effort=%d path_len=%d in %.3f ms",
        grid.start,
        grid.end,
        result.effort,
        len(result.path),
        elapsed_ms,
    )
    return result


def _reconstruct(
    came_from: List[Optional[Cell]], grid: Grid, start: Cell, goal: Cell
) -> List[Cell]:
    path = []
    current = goal
    while current != start:
        path.append(current)
        current = came_from[grid.index(current)]
    path.reverse()
    return path
