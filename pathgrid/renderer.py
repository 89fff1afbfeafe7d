"""
OpenGL-based renderer: immediate-mode grid geometry under a camera projection
plus textured quads for labels and the HUD overlay.
"""

from __future__ import annotations
import ctypes
import functools
import logging
import math
from typing import TYPE_CHECKING, Dict, Optional, Tuple

import numpy as np
import pygame

try:
    import OpenGL.GL as gl  # noqa: N811
except ImportError:
    raise ImportError(
        "PyOpenGL is required to run this renderer. "
        "Please install via: pip install PyOpenGL PyOpenGL_accelerate"
    )
from .config import (
    BACKGROUND_COLOR,
    WALL_COLOR,
    GRID_LINE_COLOR,
    HOVER_COLOR,
    PATH_COLOR,
    EXPLORED_COLOR,
    ORIGIN_MARKER_COLOR,
    POINTER_MARKER_COLOR,
    LABEL_TEXT_COLOR,
    HUD_TEXT_COLOR,
    GRID_LINE_WIDTH,
    HOVER_LINE_WIDTH,
    PATH_LINE_WIDTH,
    MARKER_RADIUS,
    LABEL_FONT_SIZE,
    LABEL_WORLD_SCALE,
    HUD_FONT_SIZE,
    HUD_MARGIN,
    SHOW_EXPLORED,
)
from .gl_resources import GLResourceManager, delete_buffer, delete_texture
from .gl_utils import ShaderProgram, render_text_texture, set_ortho, setup_opengl

if TYPE_CHECKING:
    from .camera import Camera
    from .controls import ControlState
    from .grid import Cell, GridSnapshot

logger = logging.getLogger(__name__)

TEXT_VERTEX_SHADER = """
#version 120
attribute vec2 aPos;
attribute vec2 aUV;
varying vec2 vUV;
void main() {
    gl_Position = vec4(aPos, 0.0, 1.0);
    vUV = aUV;
}
"""

TEXT_FRAGMENT_SHADER = """
#version 120
uniform sampler2D uTex;
varying vec2 vUV;
void main() {
    gl_FragColor = texture2D(uTex, vUV);
}
"""

# Triangle fan segments for marker discs
_DISC_SEGMENTS = 16


def hud_lines(snapshot: GridSnapshot, state: ControlState) -> Tuple[str, ...]:
    """Text lines shown in the top-left overlay."""
    if snapshot.start is None or snapshot.end is None:
        path_text = "Path: -"
    elif snapshot.path:
        path_text = f"Path: {len(snapshot.path)}"
    else:
        path_text = "Path: none"
    return (
        str(state),
        path_text,
        f"Explored: {snapshot.search_effort}",
    )


class Renderer:
    """Draws a GridSnapshot through a Camera into the current GL context."""

    def __init__(self, screen_width: int, screen_height: int) -> None:
        self.w = screen_width
        self.h = screen_height
        # GL resource manager to track and clean up GL objects
        self._res = GLResourceManager()
        setup_opengl(self.w, self.h)
        # Textured quad shader for text
        self.text_shader = ShaderProgram(
            vertex_source=TEXT_VERTEX_SHADER,
            fragment_source=TEXT_FRAGMENT_SHADER,
        )
        self.aPosLoc = self.text_shader.get_attrib("aPos")
        self.aUVLoc = self.text_shader.get_attrib("aUV")
        self.uTexLoc = self.text_shader.get_uniform("uTex")
        self.text_vbo = self._res.gen(lambda: gl.glGenBuffers(1), delete_buffer)
        self.label_font = pygame.font.SysFont(None, LABEL_FONT_SIZE)
        self.hud_font = pygame.font.SysFont(None, HUD_FONT_SIZE)
        # slot -> (text, texture id, width px, height px)
        self._text_slots: Dict[str, Tuple[str, int, int, int]] = {}

    def resize(self, width: int, height: int) -> None:
        self.w = width
        self.h = height
        gl.glViewport(0, 0, width, height)

    def render(
        self,
        snapshot: GridSnapshot,
        camera: Camera,
        state: ControlState,
        hover: Optional[Cell] = None,
        pointer_world: Optional[Tuple[float, float]] = None,
    ) -> None:
        gl.glClearColor(*BACKGROUND_COLOR, 1.0)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT)
        # World pass: y grows downwards, so the bottom edge is the larger y
        left, top, right, bottom = camera.visible_rect()
        set_ortho(left, right, bottom, top)
        if SHOW_EXPLORED:
            self._draw_cells(snapshot.explored, EXPLORED_COLOR)
        self._draw_walls(snapshot)
        self._draw_grid_lines(snapshot.rows, snapshot.cols)
        if hover is not None:
            self._draw_cell_outline(hover, HOVER_COLOR, HOVER_LINE_WIDTH)
        self._draw_path(snapshot)
        self._draw_disc(0.0, 0.0, MARKER_RADIUS, ORIGIN_MARKER_COLOR)
        if pointer_world is not None:
            self._draw_disc(*pointer_world, MARKER_RADIUS, POINTER_MARKER_COLOR)
        # Text pass in normalized device coordinates
        if snapshot.start is not None:
            self._draw_label("S", snapshot.start, camera)
        if snapshot.end is not None:
            self._draw_label("E", snapshot.end, camera)
        y = HUD_MARGIN
        for i, line in enumerate(hud_lines(snapshot, state)):
            tex, tw, th = self._text(f"hud{i}", self.hud_font, line, HUD_TEXT_COLOR)
            self._draw_text_quad(tex, HUD_MARGIN, y, HUD_MARGIN + tw, y + th)
            y += th
        pygame.display.flip()

    def _draw_cells(self, cells, color) -> None:
        if not cells:
            return
        gl.glColor3f(*color)
        gl.glBegin(gl.GL_QUADS)
        for row, col in cells:
            gl.glVertex2f(col, row)
            gl.glVertex2f(col + 1, row)
            gl.glVertex2f(col + 1, row + 1)
            gl.glVertex2f(col, row + 1)
        gl.glEnd()

    def _draw_walls(self, snapshot: GridSnapshot) -> None:
        walls = [
            (r, c)
            for r, row in enumerate(snapshot.walls)
            for c, wall in enumerate(row)
            if wall
        ]
        self._draw_cells(walls, WALL_COLOR)

    def _draw_grid_lines(self, rows: int, cols: int) -> None:
        gl.glColor3f(*GRID_LINE_COLOR)
        gl.glLineWidth(GRID_LINE_WIDTH)
        gl.glBegin(gl.GL_LINES)
        for r in range(rows + 1):
            gl.glVertex2f(0, r)
            gl.glVertex2f(cols, r)
        for c in range(cols + 1):
            gl.glVertex2f(c, 0)
            gl.glVertex2f(c, rows)
        gl.glEnd()

    def _draw_cell_outline(self, cell: Cell, color, width: float) -> None:
        row, col = cell
        gl.glColor3f(*color)
        gl.glLineWidth(width)
        gl.glBegin(gl.GL_LINE_LOOP)
        gl.glVertex2f(col, row)
        gl.glVertex2f(col + 1, row)
        gl.glVertex2f(col + 1, row + 1)
        gl.glVertex2f(col, row + 1)
        gl.glEnd()

    def _draw_path(self, snapshot: GridSnapshot) -> None:
        if snapshot.start is None or not snapshot.path:
            return
        gl.glColor3f(*PATH_COLOR)
        gl.glLineWidth(PATH_LINE_WIDTH)
        gl.glBegin(gl.GL_LINE_STRIP)
        for row, col in (snapshot.start,) + snapshot.path:
            gl.glVertex2f(col + 0.5, row + 0.5)
        gl.glEnd()

    def _draw_disc(self, x: float, y: float, radius: float, color) -> None:
        gl.glColor3f(*color)
        gl.glBegin(gl.GL_TRIANGLE_FAN)
        gl.glVertex2f(x, y)
        for i in range(_DISC_SEGMENTS + 1):
            a = 2.0 * math.pi * i / _DISC_SEGMENTS
            gl.glVertex2f(x + math.cos(a) * radius, y + math.sin(a) * radius)
        gl.glEnd()

    def _draw_label(self, text: str, cell: Cell, camera: Camera) -> None:
        """Draw text centered on cell, sized in grid units."""
        tex, tw, th = self._text(f"label{text}", self.label_font, text, LABEL_TEXT_COLOR)
        half_w = tw * LABEL_WORLD_SCALE * 0.5
        half_h = th * LABEL_WORLD_SCALE * 0.5
        cx, cy = cell[1] + 0.5, cell[0] + 0.5
        x0, y0 = camera.world_to_screen(cx - half_w, cy - half_h)
        x1, y1 = camera.world_to_screen(cx + half_w, cy + half_h)
        self._draw_text_quad(tex, x0, y0, x1, y1)

    def _text(self, slot: str, font, text: str, color) -> Tuple[int, int, int]:
        """
        Texture for text held in a named slot. A slot keeps one texture; it is
        re-rasterized only when its text changes.
        """
        cached = self._text_slots.get(slot)
        if cached is not None:
            if cached[0] == text:
                return cached[1], cached[2], cached[3]
            self._res.release(cached[1], delete_texture)
        tex, tw, th = render_text_texture(font, text, color)
        self._res.track(tex, delete_texture)
        self._text_slots[slot] = (text, tex, tw, th)
        return tex, tw, th

    def _draw_text_quad(
        self, tex: int, x0: float, y0: float, x1: float, y1: float
    ) -> None:
        """Draw tex over the screen rectangle (x0, y0)-(x1, y1), y down."""
        inv_w = 2.0 / self.w
        inv_h = 2.0 / self.h
        nx0 = x0 * inv_w - 1.0
        nx1 = x1 * inv_w - 1.0
        # Screen top maps to NDC +1 and to texture v = 1
        ny0 = 1.0 - y0 * inv_h
        ny1 = 1.0 - y1 * inv_h
        verts = np.array(
            [
                [nx0, ny1, 0.0, 0.0],
                [nx1, ny1, 1.0, 0.0],
                [nx1, ny0, 1.0, 1.0],
                [nx0, ny1, 0.0, 0.0],
                [nx1, ny0, 1.0, 1.0],
                [nx0, ny0, 0.0, 1.0],
            ],
            dtype=np.float32,
        )
        self.text_shader.use()
        bind_array = functools.partial(gl.glBindBuffer, gl.GL_ARRAY_BUFFER)
        with self._res.bind(bind_array, self.text_vbo):
            gl.glBufferData(
                gl.GL_ARRAY_BUFFER, verts.nbytes, verts, gl.GL_DYNAMIC_DRAW
            )
            stride = verts.strides[0]
            gl.glEnableVertexAttribArray(self.aPosLoc)
            gl.glVertexAttribPointer(
                self.aPosLoc, 2, gl.GL_FLOAT, gl.GL_FALSE, stride, ctypes.c_void_p(0)
            )
            gl.glEnableVertexAttribArray(self.aUVLoc)
            gl.glVertexAttribPointer(
                self.aUVLoc, 2, gl.GL_FLOAT, gl.GL_FALSE, stride, ctypes.c_void_p(8)
            )
            gl.glActiveTexture(gl.GL_TEXTURE0)
            gl.glBindTexture(gl.GL_TEXTURE_2D, tex)
            gl.glUniform1i(self.uTexLoc, 0)
            gl.glDrawArrays(gl.GL_TRIANGLES, 0, 6)
            gl.glDisableVertexAttribArray(self.aPosLoc)
            gl.glDisableVertexAttribArray(self.aUVLoc)
            gl.glBindTexture(gl.GL_TEXTURE_2D, 0)
        self.text_shader.stop()

    def shutdown(self) -> None:
        """Free tracked GL resources."""
        self._res.shutdown()
        self._text_slots.clear()
        self.text_shader.delete()
        logger.debug("Renderer resources released")
