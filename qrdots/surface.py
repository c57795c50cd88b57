"""Raster drawing surface with an HTML-canvas style path API.

The dot engine only needs a handful of path operations (translate/rotate,
arc, move/line, rect, close, stroke with an overridable line width). This
module provides them on top of Pillow: the current frame is a numpy affine
matrix, every emitted coordinate is mapped to device space immediately, and
accumulated sub-paths are rasterised with ``ImageDraw`` on ``fill``/``stroke``.

Drawing happens at ``supersample`` times the logical size and is downscaled
with Lanczos in ``to_image`` for anti-aliased edges.
"""

import math
from contextlib import contextmanager
from dataclasses import dataclass, field

import numpy as np
from PIL import Image, ImageDraw

# Target arc length (device px) per flattened arc segment
_ARC_STEP_PX = 2.0
_MAX_ARC_SEGMENTS = 720

TWO_PI = 2 * math.pi


@dataclass
class SubPath:
    """A run of device-space points; ``closed`` once close_path() was called."""

    points: list[tuple[float, float]] = field(default_factory=list)
    closed: bool = False


def _arc_sweep(start: float, end: float, anticlockwise: bool) -> float:
    """Signed sweep angle following canvas ``arc()`` rules."""
    if not anticlockwise:
        if end - start >= TWO_PI:
            return TWO_PI
        return (end - start) % TWO_PI
    if start - end >= TWO_PI:
        return -TWO_PI
    return -((start - end) % TWO_PI)


class DrawingSurface:
    """Pillow-backed path canvas.

    Args:
        width, height: Logical size in pixels.
        supersample: Internal render scale factor (1 disables anti-aliasing).
        background: RGB background colour.
    """

    def __init__(
        self,
        width: int,
        height: int,
        supersample: int = 4,
        background: tuple[int, ...] = (255, 255, 255),
    ):
        self.width = width
        self.height = height
        self.supersample = supersample
        self.line_width = 1.0
        self.fill_color: tuple[int, ...] = (0, 0, 0)
        self.stroke_color: tuple[int, ...] = (0, 0, 0)

        self._image = Image.new("RGB", (width * supersample, height * supersample), background)
        self._draw = ImageDraw.Draw(self._image)
        self._matrix = np.diag([float(supersample), float(supersample), 1.0])
        self._subpaths: list[SubPath] = []

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    # ------------------------------------------------------------------
    # Frame
    # ------------------------------------------------------------------

    @property
    def matrix(self) -> np.ndarray:
        """Copy of the current 3x3 device transform."""
        return self._matrix.copy()

    @property
    def scale_factor(self) -> float:
        """Uniform scale of the current frame (used for stroke widths)."""
        return math.sqrt(abs(np.linalg.det(self._matrix[:2, :2])))

    def translate(self, dx: float, dy: float) -> None:
        self._matrix = self._matrix @ np.array([
            [1.0, 0.0, dx],
            [0.0, 1.0, dy],
            [0.0, 0.0, 1.0],
        ])

    def rotate(self, angle: float) -> None:
        c, s = math.cos(angle), math.sin(angle)
        self._matrix = self._matrix @ np.array([
            [c, -s, 0.0],
            [s, c, 0.0],
            [0.0, 0.0, 1.0],
        ])

    def _to_device(self, x: float, y: float) -> tuple[float, float]:
        dx, dy, _ = self._matrix @ np.array([x, y, 1.0])
        return float(dx), float(dy)

    # ------------------------------------------------------------------
    # Path construction
    # ------------------------------------------------------------------

    @property
    def subpaths(self) -> list[SubPath]:
        """Pending sub-paths in device coordinates."""
        return [SubPath(list(sp.points), sp.closed) for sp in self._subpaths]

    def _current(self) -> SubPath | None:
        if self._subpaths and not self._subpaths[-1].closed:
            return self._subpaths[-1]
        return None

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append(SubPath([self._to_device(x, y)]))

    def line_to(self, x: float, y: float) -> None:
        current = self._current()
        if current is None:
            self.move_to(x, y)
            return
        current.points.append(self._to_device(x, y))

    def arc(
        self,
        cx: float,
        cy: float,
        radius: float,
        start_angle: float,
        end_angle: float,
        anticlockwise: bool = False,
    ) -> None:
        """Append a circular arc, joined to the current point by a straight line."""
        sweep = _arc_sweep(start_angle, end_angle, anticlockwise)
        device_radius = radius * self.scale_factor
        segments = int(math.ceil(abs(sweep) * max(device_radius, 1.0) / _ARC_STEP_PX))
        segments = min(max(segments, 4), _MAX_ARC_SEGMENTS)

        angles = start_angle + np.linspace(0.0, sweep, segments + 1)
        xs = cx + radius * np.cos(angles)
        ys = cy + radius * np.sin(angles)

        current = self._current()
        if current is None:
            current = SubPath()
            self._subpaths.append(current)
        current.points.extend(self._to_device(x, y) for x, y in zip(xs, ys))

    def rect(self, x: float, y: float, w: float, h: float) -> None:
        corners = [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
        self._subpaths.append(SubPath([self._to_device(px, py) for px, py in corners], closed=True))

    def close_path(self) -> None:
        current = self._current()
        if current is not None:
            current.closed = True

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    @contextmanager
    def line_width_override(self, width: float):
        """Temporarily set ``line_width``; the previous value is always restored."""
        previous = self.line_width
        self.line_width = width
        try:
            yield self
        finally:
            self.line_width = previous

    def stroke(self, color: tuple[int, ...] | None = None) -> None:
        """Rasterise and consume the open sub-paths.

        Closed sub-paths are left pending for ``fill``.
        """
        color = color or self.stroke_color
        width = max(1, int(round(self.line_width * self.scale_factor)))
        remaining = []
        for sp in self._subpaths:
            if sp.closed:
                remaining.append(sp)
            elif len(sp.points) >= 2:
                self._draw.line(sp.points, fill=color, width=width, joint="curve")
        self._subpaths = remaining

    def fill(self, color: tuple[int, ...] | None = None) -> None:
        """Rasterise and consume every pending sub-path (open ones implicitly closed)."""
        color = color or self.fill_color
        for sp in self._subpaths:
            if len(sp.points) >= 3:
                self._draw.polygon(sp.points, fill=color)
        self._subpaths = []

    def to_image(self) -> Image.Image:
        """Return the rendered image at the logical size."""
        if self.supersample == 1:
            return self._image.copy()
        return self._image.resize((self.width, self.height), Image.LANCZOS)
