"""2D camera: zoom, drag panning and screen <-> world <-> cell mapping."""

from __future__ import annotations
from typing import Optional, Tuple

from .config import (
    INITIAL_ZOOM,
    ZOOM_MIN,
    ZOOM_MAX,
    ZOOM_IN_FACTOR,
    ZOOM_OUT_FACTOR,
)
from .grid import Cell


class Camera:
    """
    Orthographic camera over the grid plane. World x runs along columns and
    world y along rows, both increasing right/down like screen pixels.
    target: world point shown at the center of the screen.
    zoom: fraction of half the screen height covered by one world unit.
    """

    def __init__(
        self,
        screen_width: int,
        screen_height: int,
        target: Tuple[float, float] = (0.0, 0.0),
        zoom: float = INITIAL_ZOOM,
    ) -> None:
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.target_x, self.target_y = float(target[0]), float(target[1])
        self.zoom = zoom

    @property
    def scale(self) -> float:
        """Pixels per world unit."""
        return self.zoom * self.screen_height / 2.0

    def resize(self, width: int, height: int) -> None:
        self.screen_width = width
        self.screen_height = height

    def zoom_by(self, wheel_y: float) -> None:
        """Zoom in for positive wheel motion, out for negative."""
        if wheel_y > 0:
            self.zoom = min(ZOOM_MAX, self.zoom * ZOOM_IN_FACTOR)
        elif wheel_y < 0:
            self.zoom = max(ZOOM_MIN, self.zoom * ZOOM_OUT_FACTOR)

    def pan(self, dx: float, dy: float) -> None:
        """Drag the view by a pointer movement of (dx, dy) pixels."""
        self.target_x -= dx / self.scale
        self.target_y -= dy / self.scale

    def screen_to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        scale = self.scale
        wx = self.target_x + (sx - self.screen_width / 2.0) / scale
        wy = self.target_y + (sy - self.screen_height / 2.0) / scale
        return wx, wy

    def world_to_screen(self, wx: float, wy: float) -> Tuple[float, float]:
        scale = self.scale
        sx = (wx - self.target_x) * scale + self.screen_width / 2.0
        sy = (wy - self.target_y) * scale + self.screen_height / 2.0
        return sx, sy

    def visible_rect(self) -> Tuple[float, float, float, float]:
        """World-space (left, top, right, bottom) of the screen."""
        left, top = self.screen_to_world(0, 0)
        right, bottom = self.screen_to_world(
            self.screen_width, self.screen_height
        )
        return left, top, right, bottom


def cell_at(wx: float, wy: float, rows: int, cols: int) -> Optional[Cell]:
    """
    Return the (row, col) containing world point (wx, wy), or None when the
    point lies outside the grid.
    """
    # Compare before truncating: int() rounds -0.5 up to 0
    if 0.0 <= wx < cols and 0.0 <= wy < rows:
        return int(wy), int(wx)
    return None
