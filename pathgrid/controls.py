"""
Interaction state machine: turns per-tick input into grid edits and decides
when the path has to be recomputed.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from . import pathfinding
from .grid import Cell, Grid, GridSnapshot

logger = logging.getLogger(__name__)

MODE_GRID = "grid"
MODE_PANNING = "panning"
MODE_DRAWING = "drawing"


@dataclass(frozen=True)
class ControlState:
    """
    Current interaction mode. paint is only set in drawing mode and holds the
    wall value being painted for the whole stroke.
    """

    mode: str = MODE_GRID
    paint: Optional[bool] = None

    @classmethod
    def drawing(cls, paint: bool) -> ControlState:
        return cls(MODE_DRAWING, paint)

    def __str__(self) -> str:
        if self.mode == MODE_DRAWING:
            return f"Drawing({self.paint})"
        return self.mode.capitalize()


GRID = ControlState(MODE_GRID)
PANNING = ControlState(MODE_PANNING)


@dataclass(frozen=True)
class TickInput:
    """
    Input derived for one tick.
    cell: grid cell under the pointer, None when the pointer is off the grid.
    *_pressed / *_released: button edges that happened this tick.
    mark_*_held: continuous key state.
    """

    cell: Optional[Cell] = None
    primary_pressed: bool = False
    primary_released: bool = False
    secondary_pressed: bool = False
    secondary_released: bool = False
    mark_start_held: bool = False
    mark_end_held: bool = False


@dataclass(frozen=True)
class SetStart:
    cell: Cell

    def apply(self, grid: Grid) -> bool:
        if grid.start == self.cell:
            return False
        grid.start = self.cell
        return True


@dataclass(frozen=True)
class SetEnd:
    cell: Cell

    def apply(self, grid: Grid) -> bool:
        if grid.end == self.cell:
            return False
        grid.end = self.cell
        return True


@dataclass(frozen=True)
class SetWall:
    cell: Cell
    value: bool

    def apply(self, grid: Grid) -> bool:
        return grid.set_wall(self.cell, self.value)


Effect = Union[SetStart, SetEnd, SetWall]


def transition(
    state: ControlState, grid: Union[Grid, GridSnapshot], tick: TickInput
) -> Tuple[ControlState, List[Effect]]:
    """
    Compute the next state and the grid edits for one tick without touching
    the grid. At most one edit is returned, and only when it would change
    the stored value.
    """
    cell = tick.cell
    if state.mode == MODE_GRID:
        if tick.secondary_pressed:
            return PANNING, []
        if cell is None:
            return state, []
        if tick.primary_pressed:
            return ControlState.drawing(not grid.is_wall(cell)), []
        # Start takes precedence when both marking keys are held
        if tick.mark_start_held and cell != grid.start:
            return state, [SetStart(cell)]
        if tick.mark_end_held and cell != grid.end:
            return state, [SetEnd(cell)]
        return state, []

    if state.mode == MODE_PANNING:
        if tick.secondary_released:
            return GRID, []
        return state, []

    if state.mode == MODE_DRAWING:
        if tick.primary_released:
            return GRID, []
        if cell is not None and grid.is_wall(cell) != state.paint:
            return state, [SetWall(cell, state.paint)]
        return state, []

    raise ValueError(f"Unknown control mode: {state.mode!r}")


class Editor:
    """
    Owns the grid and the interaction state. tick() is the single mutation
    entry point per frame.
    """

    def __init__(self, grid: Optional[Grid] = None) -> None:
        self.grid = grid if grid is not None else Grid()
        self.state = GRID
        # Number of searches run so far
        self.search_count = 0

    def tick(self, tick: TickInput) -> bool:
        """
        Apply one tick of input. Returns True if the grid changed and the
        path was recomputed.
        """
        new_state, effects = transition(self.state, self.grid, tick)
        if new_state != self.state:
            logger.debug("Control state %s -> %s", self.state, new_state)
            self.state = new_state
        changed = False
        for effect in effects:
            changed = effect.apply(self.grid) or changed
        if changed:
            self.recompute()
        return changed

    def recompute(self) -> pathfinding.SearchResult:
        self.search_count += 1
        return pathfinding.search(self.grid)

    def snapshot(self) -> GridSnapshot:
        return self.grid.snapshot()
