from __future__ import annotations
import logging
import pygame
from typing import Optional, Tuple

from .camera import Camera, cell_at
from .config import (
    GRID_ROWS,
    GRID_COLS,
    SCREEN_WIDTH,
    SCREEN_HEIGHT,
    FPS,
    WINDOW_TITLE,
    INITIAL_ZOOM,
)
from .controls import MODE_PANNING, Editor
from .grid import Cell, Grid
from .input_handler import InputHandler
from .renderer import Renderer

logger = logging.getLogger(__name__)


class App:
    """Main application: window setup, frame loop and wiring of editor, camera and renderer."""

    def __init__(
        self,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        clock: Optional[pygame.time.Clock] = None,
    ) -> None:
        # Grid is validated before any window is created
        grid = Grid(rows, cols)
        pygame.init()
        self.screen_width = SCREEN_WIDTH
        self.screen_height = SCREEN_HEIGHT
        self.screen = pygame.display.set_mode(
            (self.screen_width, self.screen_height),
            pygame.OPENGL | pygame.DOUBLEBUF | pygame.RESIZABLE,
        )
        pygame.display.set_caption(WINDOW_TITLE)
        # Flush any initial mouse movement deltas
        pygame.mouse.get_rel()
        # Clock for frame rate (injectable for testing)
        self.clock = clock or pygame.time.Clock()
        self.fps = FPS
        self.editor = Editor(grid)
        # Start centered on the grid
        self.camera = Camera(
            self.screen_width,
            self.screen_height,
            target=(cols / 2.0, rows / 2.0),
            zoom=INITIAL_ZOOM,
        )
        self.renderer = Renderer(self.screen_width, self.screen_height)
        self.input = InputHandler()
        # Pointer position in world space and the grid cell under it
        self.pointer_world: Tuple[float, float] = (0.0, 0.0)
        self.hover: Optional[Cell] = None
        self.running = True
        logger.info(
            "Started %dx%d grid in a %dx%d window",
            rows,
            cols,
            self.screen_width,
            self.screen_height,
        )

    def handle_events(self) -> None:
        """Process input events via InputHandler and handle quit/resize/zoom."""
        self.input.process_events()
        if self.input.should_quit():
            self.running = False
        resize = self.input.get_resize()
        if resize is not None:
            self.screen_width, self.screen_height = resize
            self.camera.resize(*resize)
            self.renderer.resize(*resize)
        self.camera.zoom_by(self.input.get_wheel())

    def update(self) -> None:
        """Map the pointer to a cell, tick the editor and pan if needed."""
        grid = self.editor.grid
        self.pointer_world = self.camera.screen_to_world(*self.input.get_mouse_pos())
        self.hover = cell_at(*self.pointer_world, grid.rows, grid.cols)
        was_panning = self.editor.state.mode == MODE_PANNING
        self.editor.tick(self.input.tick_input(self.hover))
        # Pan only while a drag that began on an earlier frame continues
        if was_panning and self.editor.state.mode == MODE_PANNING:
            self.camera.pan(*self.input.get_mouse_rel())

    def step(self) -> None:
        """One frame of input handling and state update, without drawing."""
        self.handle_events()
        self.update()

    def render(self) -> None:
        self.renderer.render(
            self.editor.snapshot(),
            self.camera,
            self.editor.state,
            hover=self.hover,
            pointer_world=self.pointer_world,
        )

    def run(self) -> None:
        """Main loop: handle events, update, and render."""
        while self.running:
            self.clock.tick(self.fps)
            self.step()
            if self.running:
                self.render()
        # Clean up GL resources before quitting
        self.renderer.shutdown()
        pygame.quit()
        logger.info(
            "Stopped after %d path searches", self.editor.search_count
        )
