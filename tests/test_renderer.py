import itertools

import pygame
import pytest
import OpenGL.GL

import pathgrid.renderer as renderer_mod
from pathgrid.camera import Camera
from pathgrid.controls import GRID, PANNING, ControlState
from pathgrid.gl_resources import GLResourceManager
from pathgrid.grid import Grid
from pathgrid.renderer import Renderer, hud_lines


class RecordingGL:
    """Stand-in for OpenGL.GL: constants resolve to their names, calls are recorded."""

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        if name.startswith("GL_"):
            return name

        def record(*args):
            self.calls.append((name,) + args)
            return 1

        return record

    def named(self, name):
        return [c for c in self.calls if c[0] == name]


class DummyShader:
    def use(self):
        pass

    def stop(self):
        pass


@pytest.fixture
def recording(monkeypatch):
    rec = RecordingGL()
    monkeypatch.setattr(renderer_mod, "gl", rec)
    ortho = []
    monkeypatch.setattr(renderer_mod, "set_ortho", lambda *args: ortho.append(args))
    monkeypatch.setattr(pygame.display, "flip", lambda: None)
    ids = itertools.count(100)
    rasterized = []

    def fake_text(font, text, color):
        rasterized.append(text)
        return next(ids), 10, 5

    monkeypatch.setattr(renderer_mod, "render_text_texture", fake_text)
    return rec, ortho, rasterized


def bare_renderer(w=1600, h=900):
    # Skip __init__: no GL context or fonts in tests
    r = Renderer.__new__(Renderer)
    r.w, r.h = w, h
    r._res = GLResourceManager()
    r.text_shader = DummyShader()
    r.aPosLoc, r.aUVLoc, r.uTexLoc = 0, 1, 2
    r.text_vbo = 3
    r.label_font = r.hud_font = None
    r._text_slots = {}
    return r


def make_snapshot():
    g = Grid(3, 3)
    g.set_wall((1, 1), True)
    g.start = (0, 0)
    g.end = (0, 2)
    g.path = [(0, 1), (0, 2)]
    g.search_effort = 3
    g.explored = [(0, 0), (0, 1), (0, 2)]
    return g.snapshot()


def test_hud_lines():
    snap = make_snapshot()
    assert hud_lines(snap, GRID) == ("Grid", "Path: 2", "Explored: 3")
    assert hud_lines(Grid(2, 2).snapshot(), ControlState.drawing(True))[:2] == (
        "Drawing(True)",
        "Path: -",
    )
    g = Grid(2, 2)
    g.start, g.end = (0, 0), (1, 1)
    assert hud_lines(g.snapshot(), GRID)[1] == "Path: none"


def test_render_draws_path_from_start(recording):
    rec, ortho, rasterized = recording
    r = bare_renderer()
    cam = Camera(1600, 900, target=(1.5, 1.5))
    r.render(make_snapshot(), cam, GRID, hover=(2, 2), pointer_world=(2.5, 2.5))

    left, top, right, bottom = cam.visible_rect()
    assert ortho == [(left, right, bottom, top)]
    # Path polyline: start center, then each path cell center
    calls = rec.calls
    begin = calls.index(("glBegin", "GL_LINE_STRIP"))
    end = calls.index(("glEnd",), begin)
    vertices = [c[1:] for c in calls[begin:end] if c[0] == "glVertex2f"]
    assert vertices == [(0.5, 0.5), (1.5, 0.5), (2.5, 0.5)]
    assert ("glBegin", "GL_LINE_LOOP") in calls
    # Two labels plus three HUD lines
    assert len(rec.named("glDrawArrays")) == 5
    assert sorted(rasterized) == sorted(["S", "E", "Grid", "Path: 2", "Explored: 3"])


def test_text_slots_reuse_and_release(recording, monkeypatch):
    _, _, rasterized = recording
    deleted = []
    monkeypatch.setattr(OpenGL.GL, "glDeleteTextures", lambda n, ids: deleted.extend(ids))
    r = bare_renderer()
    cam = Camera(1600, 900, target=(1.5, 1.5))
    snap = make_snapshot()
    r.render(snap, cam, GRID)
    r.render(snap, cam, GRID)
    # Nothing changed, nothing re-rasterized
    assert len(rasterized) == 5
    r.render(snap, cam, PANNING)
    assert rasterized[-1] == "Panning"
    assert len(deleted) == 1
    assert r._res.tracked() == 5


def test_render_without_endpoints_skips_labels_and_path(recording):
    rec, _, rasterized = recording
    r = bare_renderer()
    r.render(Grid(2, 2).snapshot(), Camera(1600, 900), GRID)
    assert ("glBegin", "GL_LINE_STRIP") not in rec.calls
    assert "S" not in rasterized and "E" not in rasterized
