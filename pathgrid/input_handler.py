"""
Input handling abstraction to decouple Pygame input from the editor logic.
"""

from __future__ import annotations
import pygame
from typing import Optional, Sequence, Tuple

from .config import (
    PRIMARY_BUTTON,
    SECONDARY_BUTTON,
    MARK_START_KEY,
    MARK_END_KEY,
    QUIT_KEY,
)
from .controls import TickInput
from .grid import Cell


class InputHandler:
    """
    Abstraction for gathering input state. Processes Pygame events once per
    frame and exposes button edges, held keys, wheel and pointer motion.
    """

    def __init__(self) -> None:
        self._quit = False
        self._primary_pressed = False
        self._primary_released = False
        self._secondary_pressed = False
        self._secondary_released = False
        self._wheel_y = 0
        self._resize: Optional[Tuple[int, int]] = None
        self._mouse_pos: Tuple[int, int] = (0, 0)
        self._mouse_rel: Tuple[int, int] = (0, 0)
        # Key state is initialized in process_events()
        self._keys: Sequence[bool] = ()

    def process_events(self) -> None:
        """
        Poll Pygame events, update per-frame edges (quit, button presses and
        releases, wheel, resize) and capture pointer and key state.
        """
        self._quit = False
        self._primary_pressed = False
        self._primary_released = False
        self._secondary_pressed = False
        self._secondary_released = False
        self._wheel_y = 0
        self._resize = None
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit = True
            elif event.type == pygame.KEYDOWN:
                if event.key == QUIT_KEY:
                    self._quit = True
            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == PRIMARY_BUTTON:
                    self._primary_pressed = True
                elif event.button == SECONDARY_BUTTON:
                    self._secondary_pressed = True
            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button == PRIMARY_BUTTON:
                    self._primary_released = True
                elif event.button == SECONDARY_BUTTON:
                    self._secondary_released = True
            elif event.type == pygame.MOUSEWHEEL:
                self._wheel_y += event.y
            elif event.type == pygame.VIDEORESIZE:
                self._resize = (event.w, event.h)
        # Update continuous states
        self._keys = pygame.key.get_pressed()
        self._mouse_pos = pygame.mouse.get_pos()
        self._mouse_rel = pygame.mouse.get_rel()

    def should_quit(self) -> bool:
        """Return True if a quit command was issued this frame."""
        return self._quit

    def get_wheel(self) -> int:
        """Return accumulated vertical wheel motion this frame."""
        return self._wheel_y

    def get_resize(self) -> Optional[Tuple[int, int]]:
        """Return the new window size if the window was resized this frame."""
        return self._resize

    def get_mouse_pos(self) -> Tuple[int, int]:
        return self._mouse_pos

    def get_mouse_rel(self) -> Tuple[int, int]:
        """Return mouse movement delta since last call to process_events."""
        return self._mouse_rel

    def is_key_held(self, key: int) -> bool:
        return bool(self._keys[key]) if self._keys else False

    def tick_input(self, cell: Optional[Cell]) -> TickInput:
        """Build the editor input for this frame with the pointer over cell."""
        return TickInput(
            cell=cell,
            primary_pressed=self._primary_pressed,
            primary_released=self._primary_released,
            secondary_pressed=self._secondary_pressed,
            secondary_released=self._secondary_released,
            mark_start_held=self.is_key_held(MARK_START_KEY),
            mark_end_held=self.is_key_held(MARK_END_KEY),
        )
