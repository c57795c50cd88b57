import math

import numpy as np
import pytest

from qrdots.primitives import (
    CROSS_LINE_WIDTH,
    basic_corner_extra_rounded,
    basic_corner_rounded,
    basic_corners_extra_rounded,
    basic_corners_rounded,
    basic_dot,
    basic_side_rounded,
    basic_square,
    draw_cross,
    draw_figure,
    draw_star,
    rotate_figure,
)

from helpers import RecordingSurface, distances, min_distance

ROTATIONS = [0, math.pi / 2, math.pi, -math.pi / 2]
ALL_PRIMITIVES = [
    basic_dot,
    basic_square,
    basic_side_rounded,
    basic_corner_rounded,
    basic_corner_extra_rounded,
    basic_corners_rounded,
    basic_corners_extra_rounded,
    draw_star,
]


def _has_vertex(points, x, y):
    return min_distance(points, x, y) < 1e-9


@pytest.mark.parametrize("rotation", ROTATIONS)
@pytest.mark.parametrize("primitive", ALL_PRIMITIVES, ids=lambda p: p.__name__)
def test_frame_restored_after_figure(surface, primitive, rotation):
    surface.translate(3, 4)
    before = surface.matrix
    draw_figure(surface, primitive, 12, 7, 10, rotation)
    assert np.allclose(surface.matrix, before, atol=1e-12)


@pytest.mark.parametrize("rotation", ROTATIONS)
def test_frame_restored_when_body_raises(surface, identity, rotation):
    with pytest.raises(ZeroDivisionError):
        with rotate_figure(surface, 5, 5, 10, rotation):
            surface.move_to(0, 0)
            surface.line_to(1, 1)
            1 / 0
    assert np.allclose(surface.matrix, identity, atol=1e-12)
    assert surface.subpaths[-1].closed


def test_figure_subpath_is_closed(surface):
    draw_figure(surface, basic_corner_rounded, 0, 0, 10)
    (sp,) = surface.subpaths
    assert sp.closed


def test_dot_is_centered_circle(surface):
    draw_figure(surface, basic_dot, 20, 30, 8)
    points = surface.subpaths[0].points
    assert distances(points, 24, 34) == pytest.approx([4] * len(points))


def test_square_covers_module(surface):
    draw_figure(surface, basic_square, 0, 0, 10)
    assert surface.subpaths[0].points == [(0, 0), (10, 0), (10, 10), (0, 10)]


def test_side_rounded_rounds_right_side(surface):
    draw_figure(surface, basic_side_rounded, 0, 0, 10)
    points = surface.subpaths[0].points
    assert _has_vertex(points, 0, 0)
    assert _has_vertex(points, 0, 10)
    assert min_distance(points, 10, 0) > 1
    assert min_distance(points, 10, 10) > 1
    assert max(x for x, _ in points) == pytest.approx(10)


def test_corner_rounded_rounds_top_right_only(surface):
    draw_figure(surface, basic_corner_rounded, 0, 0, 10)
    points = surface.subpaths[0].points
    for corner in [(0, 0), (10, 10), (0, 10)]:
        assert _has_vertex(points, *corner)
    # quarter arc of radius 5 keeps 5*sqrt(2) - 5 away from the corner
    assert min_distance(points, 10, 0) == pytest.approx(5 * math.sqrt(2) - 5, abs=0.05)


def test_corner_extra_rounded_uses_full_size_radius(surface):
    draw_figure(surface, basic_corner_extra_rounded, 0, 0, 10)
    points = surface.subpaths[0].points
    assert _has_vertex(points, 0, 0)
    assert _has_vertex(points, 0, 10)
    assert _has_vertex(points, 10, 10)
    assert min_distance(points, 10, 0) == pytest.approx(10 * math.sqrt(2) - 10, abs=0.05)


def test_corners_rounded_rounds_diagonal_pair(surface):
    draw_figure(surface, basic_corners_rounded, 0, 0, 10)
    points = surface.subpaths[0].points
    assert _has_vertex(points, 0, 0)
    assert _has_vertex(points, 10, 10)
    assert min_distance(points, 10, 0) > 1
    assert min_distance(points, 0, 10) > 1


def test_corners_extra_rounded_is_a_lens(surface):
    draw_figure(surface, basic_corners_extra_rounded, 0, 0, 10)
    points = surface.subpaths[0].points
    assert _has_vertex(points, 0, 0)
    assert _has_vertex(points, 10, 10)
    assert min_distance(points, 10, 0) > 4
    assert min_distance(points, 0, 10) > 4


def test_rotation_moves_rounded_corner(surface):
    # +90 degrees turns the top-right feature to the bottom-right
    draw_figure(surface, basic_corner_rounded, 0, 0, 10, math.pi / 2)
    points = surface.subpaths[0].points
    assert min_distance(points, 10, 10) > 1
    assert min_distance(points, 10, 0) < 1e-9


def test_star_radii(surface):
    draw_figure(surface, draw_star, 0, 0, 20)
    (sp,) = surface.subpaths
    assert sp.closed
    ds = distances(sp.points[1:], 10, 10)
    assert len(ds) == 10
    for i, d in enumerate(ds):
        assert d == pytest.approx(10 if i % 2 == 0 else 6)


def test_cross_strokes_with_fixed_width_and_restores(recording_surface):
    recording_surface.line_width = 2.5
    draw_figure(recording_surface, draw_cross, 0, 0, 20)

    (width, paths), = recording_surface.strokes
    assert width == CROSS_LINE_WIDTH
    assert paths[0] == [(-5, -5), (15, 15)]
    assert paths[1] == [(-5, 15), (15, -5)]
    assert recording_surface.line_width == 2.5
    assert recording_surface.subpaths == []


def test_cross_width_independent_of_size(recording_surface):
    draw_figure(recording_surface, draw_cross, 0, 0, 4)
    draw_figure(recording_surface, draw_cross, 0, 0, 80)
    assert [w for w, _ in recording_surface.strokes] == [CROSS_LINE_WIDTH, CROSS_LINE_WIDTH]


class _FailingStroke(RecordingSurface):
    def stroke(self, color=None):
        raise RuntimeError("stroke failed")


def test_cross_restores_line_width_when_stroke_fails(identity):
    s = _FailingStroke(32, 32, supersample=1)
    s.line_width = 1.5
    with pytest.raises(RuntimeError):
        draw_figure(s, draw_cross, 0, 0, 20)
    assert s.line_width == 1.5
    assert np.allclose(s.matrix, identity)
