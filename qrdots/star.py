"""Star polygon vertices for the star dot style."""

import math


def calculate_star_points(
    cx: float,
    cy: float,
    outer_radius: float,
    inner_radius: float,
    arms: int,
) -> list[tuple[float, float]]:
    """Return the ``2 * arms`` vertices of a star centred on (cx, cy).

    Vertices alternate between the outer radius (even indices) and the inner
    radius (odd indices), stepping by ``pi / arms`` starting from angle 0.
    """
    step = math.pi / arms
    points = []
    for i in range(2 * arms):
        r = outer_radius if i % 2 == 0 else inner_radius
        angle = i * step
        points.append((cx + math.cos(angle) * r, cy + math.sin(angle) * r))
    return points
