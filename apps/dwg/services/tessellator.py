"""
Polyline approximation of curved primitives.

Angles are in radians. Arcs are walked linearly from the start to the end
angle as given, so an end angle below the start sweeps backwards.
"""
import math

from .models import Point2D

ARC_SEGMENTS = 16
CIRCLE_SEGMENTS = 32


def _point_at(center: Point2D, radius: float, angle: float) -> Point2D:
    return Point2D(
        center.x + radius * math.cos(angle),
        center.y + radius * math.sin(angle),
    )


def tessellate_arc(center: Point2D, radius: float,
                   start_angle: float, end_angle: float) -> list[Point2D]:
    """Return ARC_SEGMENTS + 1 points from start_angle to end_angle inclusive."""
    step = (end_angle - start_angle) / ARC_SEGMENTS
    return [
        _point_at(center, radius, start_angle + i * step)
        for i in range(ARC_SEGMENTS + 1)
    ]


def tessellate_circle(center: Point2D, radius: float) -> list[Point2D]:
    """
    Return CIRCLE_SEGMENTS + 1 points over a full turn.

    The last point repeats the first one so the ring closes when it is
    turned into segments.
    """
    points = [
        _point_at(center, radius, 2 * math.pi * i / CIRCLE_SEGMENTS)
        for i in range(CIRCLE_SEGMENTS)
    ]
    points.append(points[0])
    return points
