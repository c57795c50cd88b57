"""Shared helpers for the qrdots test suite."""

import math

from qrdots.surface import DrawingSurface

OFFSETS = {
    "left": (-1, 0),
    "right": (1, 0),
    "top": (0, -1),
    "bottom": (0, 1),
}


class RecordingSurface(DrawingSurface):
    """DrawingSurface that remembers what each stroke() call painted."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.strokes = []

    def stroke(self, color=None):
        open_paths = [sp.points for sp in self.subpaths if not sp.closed]
        self.strokes.append((self.line_width, open_paths))
        super().stroke(color)


def neighbors(*names):
    """Neighbour query reporting the named sides as occupied."""
    occupied = {OFFSETS[n] for n in names}
    return lambda dx, dy: (dx, dy) in occupied


def distances(points, cx, cy):
    return [math.hypot(x - cx, y - cy) for x, y in points]


def min_distance(points, x, y):
    return min(distances(points, x, y))

