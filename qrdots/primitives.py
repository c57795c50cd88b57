"""Dot shape primitives and the frame-rotation helper.

Every primitive is authored around the origin of a frame centred on the
module, with half-extent ``size / 2``, in canonical orientation: at rotation 0
the rounded feature sits on the right side or the top-right corner. The
selector in ``qrdots.dot`` picks a rotation to point the feature elsewhere.

Primitives only emit path geometry. Opening/filling the overall path is the
caller's business and closing the per-dot sub-path is done by
``rotate_figure``.
"""

import math
from contextlib import contextmanager
from typing import Callable

from qrdots.star import calculate_star_points
from qrdots.surface import DrawingSurface

Primitive = Callable[[DrawingSurface, float], None]

HALF_PI = math.pi / 2

STAR_ARMS = 5
STAR_INNER_RATIO = 0.6

# Absolute values, not scaled by the module size
CROSS_LINE_WIDTH = 24
CROSS_INSET = 5


@contextmanager
def rotate_figure(surface: DrawingSurface, x: float, y: float, size: float, rotation: float = 0):
    """Centre the frame on the module at (x, y) and rotate it for the body.

    On exit, including exceptions, the active sub-path is closed and the
    frame is restored to what it was on entry.
    """
    cx = x + size / 2
    cy = y + size / 2

    surface.translate(cx, cy)
    if rotation:
        surface.rotate(rotation)
    try:
        yield surface
    finally:
        surface.close_path()
        if rotation:
            surface.rotate(-rotation)
        surface.translate(-cx, -cy)


def draw_figure(
    surface: DrawingSurface,
    primitive: Primitive,
    x: float,
    y: float,
    size: float,
    rotation: float = 0,
) -> None:
    """Run one primitive for the module at (x, y) inside ``rotate_figure``."""
    with rotate_figure(surface, x, y, size, rotation):
        primitive(surface, size)


# ---------------------------------------------------------------------------
# Canonical primitives
# ---------------------------------------------------------------------------

def basic_dot(surface: DrawingSurface, size: float) -> None:
    surface.arc(0, 0, size / 2, 0, math.pi * 2)


def basic_square(surface: DrawingSurface, size: float) -> None:
    surface.rect(-size / 2, -size / 2, size, size)


def basic_side_rounded(surface: DrawingSurface, size: float) -> None:
    """Right side replaced by a half circle."""
    h = size / 2
    surface.arc(0, 0, h, -HALF_PI, HALF_PI)
    surface.line_to(-h, h)
    surface.line_to(-h, -h)
    surface.line_to(0, -h)


def basic_corner_rounded(surface: DrawingSurface, size: float) -> None:
    """Top-right corner replaced by a quarter circle of radius size/2."""
    h = size / 2
    surface.arc(0, 0, h, -HALF_PI, 0)
    surface.line_to(h, h)
    surface.line_to(-h, h)
    surface.line_to(-h, -h)
    surface.line_to(0, -h)


def basic_corner_extra_rounded(surface: DrawingSurface, size: float) -> None:
    """Top-right corner cut by an arc of radius ``size`` centred on the bottom-left corner."""
    h = size / 2
    surface.arc(-h, h, size, -HALF_PI, 0)
    surface.line_to(-h, h)
    surface.line_to(-h, -h)


def basic_corners_rounded(surface: DrawingSurface, size: float) -> None:
    """Top-right and bottom-left corners rounded with radius size/2."""
    h = size / 2
    surface.arc(0, 0, h, -HALF_PI, 0)
    surface.line_to(h, h)
    surface.line_to(0, h)
    surface.arc(0, 0, h, HALF_PI, math.pi)
    surface.line_to(-h, -h)
    surface.line_to(0, -h)


def basic_corners_extra_rounded(surface: DrawingSurface, size: float) -> None:
    h = size / 2
    surface.arc(-h, h, size, -HALF_PI, 0)
    surface.arc(h, -h, size, HALF_PI, math.pi)


# ---------------------------------------------------------------------------
# Fixed-orientation figures
# ---------------------------------------------------------------------------

def draw_star(surface: DrawingSurface, size: float) -> None:
    outer_radius = size / 2
    points = calculate_star_points(0, 0, outer_radius, outer_radius * STAR_INNER_RATIO, STAR_ARMS)
    x0, y0 = points[0]
    surface.move_to(x0, y0)
    for px, py in points:
        surface.line_to(px, py)


def draw_cross(surface: DrawingSurface, size: float) -> None:
    """Two diagonal strokes, stroked immediately with a fixed line width."""
    start = -size / 2 - CROSS_INSET
    cap = size / 2 - CROSS_INSET

    with surface.line_width_override(CROSS_LINE_WIDTH):
        surface.move_to(start, start)
        surface.line_to(cap, cap)
        surface.move_to(start, cap)
        surface.line_to(cap, start)
        surface.stroke()
