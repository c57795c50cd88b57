"""Neighbour-aware dot style selection.

For each module the selector reads which of its four orthogonal neighbours
are also dark, picks one of the canonical primitives plus a rotation, and
draws it through ``rotate_figure``. Runs of neighbouring modules therefore
merge into continuous shapes instead of a grid of separate squares.
"""

import math
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Callable

from qrdots.primitives import (
    HALF_PI,
    Primitive,
    basic_corner_extra_rounded,
    basic_corner_rounded,
    basic_corners_rounded,
    basic_dot,
    basic_side_rounded,
    basic_square,
    draw_cross,
    draw_figure,
    draw_star,
)
from qrdots.surface import DrawingSurface

NeighborQuery = Callable[[int, int], bool]
Shape = tuple[Primitive, float]


class DotType(str, Enum):
    SQUARE = "square"
    FILLED_CIRCLE = "filled-circle"
    ROUNDED = "rounded"
    EXTRA_ROUNDED = "extra-rounded"
    CLASSY = "classy"
    CLASSY_ROUNDED = "classy-rounded"
    STAR = "star"
    CROSS = "cross"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            return _DOT_TYPE_ALIASES.get(value)
        return None


_DOT_TYPE_ALIASES = {"dots": DotType.FILLED_CIRCLE}


def parse_dot_type(style: DotType | str) -> DotType | None:
    """Map a style tag to ``DotType``; unknown tags give None."""
    if isinstance(style, DotType):
        return style
    try:
        return DotType(style)
    except ValueError:
        return None


@dataclass(frozen=True)
class Neighbors:
    """Occupancy (0/1) of the four orthogonal neighbours."""

    left: int = 0
    right: int = 0
    top: int = 0
    bottom: int = 0

    @classmethod
    def read(cls, get_neighbor: NeighborQuery | None) -> "Neighbors":
        if get_neighbor is None:
            return cls()
        return cls(
            left=int(bool(get_neighbor(-1, 0))),
            right=int(bool(get_neighbor(1, 0))),
            top=int(bool(get_neighbor(0, -1))),
            bottom=int(bool(get_neighbor(0, 1))),
        )

    @property
    def count(self) -> int:
        return self.left + self.right + self.top + self.bottom


# ---------------------------------------------------------------------------
# Decision procedures
# ---------------------------------------------------------------------------

def rounded_shape(nb: Neighbors, corner: Primitive) -> Shape:
    """Rounded / extra-rounded family; ``corner`` is the L-shape primitive."""
    if nb.count == 0:
        return basic_dot, 0

    if nb.count > 2 or (nb.left and nb.right) or (nb.top and nb.bottom):
        return basic_square, 0

    if nb.count == 2:
        # Round the corner opposite the two neighbours
        rotation = 0
        if nb.left and nb.top:
            rotation = HALF_PI
        elif nb.top and nb.right:
            rotation = math.pi
        elif nb.right and nb.bottom:
            rotation = -HALF_PI
        return corner, rotation

    # One neighbour: round the far side. There is no extra-rounded side
    # variant, both families share basic_side_rounded here.
    rotation = 0
    if nb.top:
        rotation = HALF_PI
    elif nb.right:
        rotation = math.pi
    elif nb.bottom:
        rotation = -HALF_PI
    return basic_side_rounded, rotation


def classy_shape(nb: Neighbors, corner: Primitive) -> Shape:
    """Classy / classy-rounded family; ``corner`` is the single-corner primitive."""
    if nb.count == 0:
        return basic_corners_rounded, HALF_PI

    if not nb.left and not nb.top:
        return corner, -HALF_PI

    if not nb.right and not nb.bottom:
        return corner, HALF_PI

    return basic_square, 0


_FIXED_SHAPES: dict[DotType, Shape] = {
    DotType.FILLED_CIRCLE: (basic_dot, 0),
    DotType.SQUARE: (basic_square, 0),
    DotType.STAR: (draw_star, 0),
    DotType.CROSS: (draw_cross, 0),
}

_NEIGHBOR_SHAPES: dict[DotType, Callable[[Neighbors], Shape]] = {
    DotType.ROUNDED: partial(rounded_shape, corner=basic_corner_rounded),
    DotType.EXTRA_ROUNDED: partial(rounded_shape, corner=basic_corner_extra_rounded),
    DotType.CLASSY: partial(classy_shape, corner=basic_corner_rounded),
    DotType.CLASSY_ROUNDED: partial(classy_shape, corner=basic_corner_extra_rounded),
}


def choose_shape(style: DotType | str, get_neighbor: NeighborQuery | None = None) -> Shape:
    """Pick ``(primitive, rotation)`` for one module.

    Unknown styles fall back to the plain square.
    """
    dot_type = parse_dot_type(style)
    if dot_type in _FIXED_SHAPES:
        return _FIXED_SHAPES[dot_type]
    chooser = _NEIGHBOR_SHAPES.get(dot_type)
    if chooser is None:
        return basic_square, 0
    return chooser(Neighbors.read(get_neighbor))


class QRDot:
    """Draws modules of one style onto a surface."""

    def __init__(self, surface: DrawingSurface, dot_type: DotType | str = DotType.SQUARE):
        self.surface = surface
        self.dot_type = dot_type

    def draw(self, x: float, y: float, size: float, get_neighbor: NeighborQuery | None = None) -> None:
        primitive, rotation = choose_shape(self.dot_type, get_neighbor)
        draw_figure(self.surface, primitive, x, y, size, rotation)


def render_dot(
    surface: DrawingSurface,
    style: DotType | str,
    x: float,
    y: float,
    size: float,
    get_neighbor: NeighborQuery | None = None,
) -> None:
    """Emit the path of one module at (x, y) with side ``size``."""
    QRDot(surface, style).draw(x, y, size, get_neighbor)
