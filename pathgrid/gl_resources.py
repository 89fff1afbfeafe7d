from __future__ import annotations

import contextlib
import OpenGL.GL as gl
from collections import defaultdict
from typing import Callable, DefaultDict, List


def delete_texture(obj_id: int) -> None:
    """Deletes a single GL texture."""
    gl.glDeleteTextures(1, [obj_id])


def delete_buffer(obj_id: int) -> None:
    """Deletes a single GL buffer."""
    gl.glDeleteBuffers(1, [obj_id])


class GLResourceManager:
    """
    Tracks GL objects (text textures, vertex buffers) owned by the renderer
    and frees them on shutdown. Objects may also be released early, e.g. when
    a HUD line changes and its texture is no longer needed.

    Usage:
        mgr = GLResourceManager()
        vbo = mgr.gen(lambda: gl.glGenBuffers(1), delete_buffer)
        tex = mgr.track(create_texture_from_surface(surf), delete_texture)
        ...
        mgr.shutdown()
    """

    def __init__(self) -> None:
        self._objs: DefaultDict[Callable[[int], None], List[int]] = defaultdict(list)

    def gen(self, creator: Callable[[], int], deleter: Callable[[int], None]) -> int:
        """Wraps any glGen* that returns ONE uint id."""
        return self.track(creator(), deleter)

    def track(self, obj_id: int, deleter: Callable[[int], None]) -> int:
        """Register an id created elsewhere; returns it unchanged."""
        self._objs[deleter].append(obj_id)
        return obj_id

    def release(self, obj_id: int, deleter: Callable[[int], None]) -> None:
        """Delete one tracked object now and stop tracking it."""
        ids = self._objs.get(deleter, [])
        if obj_id in ids:
            ids.remove(obj_id)
            deleter(int(obj_id))

    @contextlib.contextmanager
    def bind(self, binder: Callable[[int], None], obj_id: int):
        """Context-manager for glBind*-style calls, auto-unbinds to 0."""
        binder(obj_id)
        try:
            yield
        finally:
            binder(0)

    def tracked(self) -> int:
        """Number of objects still awaiting deletion."""
        return sum(len(ids) for ids in self._objs.values())

    def shutdown(self) -> None:
        """Call at program exit **WITH A VALID GL CONTEXT**."""
        for deleter, ids in self._objs.items():
            for obj_id in ids:
                deleter(int(obj_id))
        self._objs.clear()
