"""
Helper functions and classes for OpenGL setup, shader compilation, projection
and text texture creation.
"""

from __future__ import annotations
import logging
import pygame
import OpenGL.GL as gl  # noqa: N811
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


class ShaderProgram:
    """
    Encapsulates an OpenGL shader program (vertex + fragment).
    Handles compilation, linking, and provides convenience methods.
    """

    def __init__(
        self,
        vertex_source: Optional[str] = None,
        fragment_source: Optional[str] = None,
    ) -> None:
        if vertex_source is None or fragment_source is None:
            raise ValueError(
                "Vertex and fragment shader sources must be provided"
            )
        vs = self._compile_shader(vertex_source, gl.GL_VERTEX_SHADER)
        fs = self._compile_shader(fragment_source, gl.GL_FRAGMENT_SHADER)
        self.id = self._link_program(vs, fs)
        # Shaders are owned by the program once linked
        gl.glDeleteShader(vs)
        gl.glDeleteShader(fs)

    def _compile_shader(self, source: str, shader_type: int) -> int:
        shader = gl.glCreateShader(shader_type)
        gl.glShaderSource(shader, source)
        gl.glCompileShader(shader)
        status = gl.glGetShaderiv(shader, gl.GL_COMPILE_STATUS)
        if not status:
            log = gl.glGetShaderInfoLog(shader).decode()
            logger.error("Shader compile failed: %s", log)
            raise RuntimeError(f"Shader compile error: {log}")
        return shader

    def _link_program(self, vs: int, fs: int) -> int:
        prog = gl.glCreateProgram()
        gl.glAttachShader(prog, vs)
        gl.glAttachShader(prog, fs)
        gl.glLinkProgram(prog)
        status = gl.glGetProgramiv(prog, gl.GL_LINK_STATUS)
        if not status:
            log = gl.glGetProgramInfoLog(prog).decode()
            logger.error("Program link failed: %s", log)
            raise RuntimeError(f"Shader link error: {log}")
        return prog

    def use(self) -> None:
        gl.glUseProgram(self.id)

    def stop(self) -> None:
        gl.glUseProgram(0)

    def get_attrib(self, name: str) -> int:
        return gl.glGetAttribLocation(self.id, name)

    def get_uniform(self, name: str) -> int:
        return gl.glGetUniformLocation(self.id, name)

    def delete(self) -> None:
        gl.glDeleteProgram(self.id)


def setup_opengl(width: int, height: int) -> None:
    """
    Configure OpenGL state for flat 2D drawing: viewport, no depth test,
    alpha blending and smoothed lines.
    """
    gl.glViewport(0, 0, width, height)
    gl.glDisable(gl.GL_DEPTH_TEST)
    gl.glEnable(gl.GL_BLEND)
    gl.glBlendFunc(gl.GL_SRC_ALPHA, gl.GL_ONE_MINUS_SRC_ALPHA)
    gl.glEnable(gl.GL_LINE_SMOOTH)


def set_ortho(left: float, right: float, bottom: float, top: float) -> None:
    """Load an orthographic projection and reset the modelview matrix."""
    gl.glMatrixMode(gl.GL_PROJECTION)
    gl.glLoadIdentity()
    gl.glOrtho(left, right, bottom, top, -1.0, 1.0)
    gl.glMatrixMode(gl.GL_MODELVIEW)
    gl.glLoadIdentity()


def create_texture_from_surface(
    surf: pygame.Surface,
    min_filter: int = gl.GL_LINEAR,
    mag_filter: int = gl.GL_LINEAR,
) -> int:
    """
    Create an OpenGL texture from a Pygame Surface (e.g., for UI text).
    Rows are flipped so texture v=0 is the bottom of the surface.
    """
    data = pygame.image.tostring(surf, "RGBA", True)
    w, h = surf.get_size()
    tex = gl.glGenTextures(1)
    gl.glBindTexture(gl.GL_TEXTURE_2D, tex)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, min_filter)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, mag_filter)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, gl.GL_CLAMP_TO_EDGE)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, gl.GL_CLAMP_TO_EDGE)
    gl.glTexImage2D(
        gl.GL_TEXTURE_2D,
        0,
        gl.GL_RGBA,
        w,
        h,
        0,
        gl.GL_RGBA,
        gl.GL_UNSIGNED_BYTE,
        data,
    )
    gl.glBindTexture(gl.GL_TEXTURE_2D, 0)
    return tex


def render_text_texture(
    font: pygame.font.Font, text: str, color: Tuple[int, int, int]
) -> Tuple[int, int, int]:
    """Rasterize text with font and upload it. Returns (texture, width, height)."""
    surf = font.render(text, True, color)
    w, h = surf.get_size()
    return create_texture_from_surface(surf), w, h
