"""Tests for arc and circle tessellation."""
import math

import pytest

from apps.dwg.services.models import Point2D
from apps.dwg.services.tessellator import tessellate_arc, tessellate_circle

CENTER = Point2D(10.0, -4.0)


def _angle(center: Point2D, point: Point2D) -> float:
    return math.atan2(point.y - center.y, point.x - center.x)


class TestTessellateArc:

    @pytest.mark.parametrize("radius,start,end", [
        (1.0, 0.0, math.pi / 2),
        (2.5, math.pi / 4, math.pi),
        (0.3, 1.0, -1.0),
    ])
    def test_seventeen_points_on_the_circle(self, radius, start, end):
        points = tessellate_arc(CENTER, radius, start, end)

        assert len(points) == 17
        for p in points:
            assert math.hypot(p.x - CENTER.x, p.y - CENTER.y) == pytest.approx(radius)

    def test_endpoints_match_start_and_end_angles(self):
        points = tessellate_arc(CENTER, 3.0, 0.2, 1.4)

        assert _angle(CENTER, points[0]) == pytest.approx(0.2)
        assert _angle(CENTER, points[16]) == pytest.approx(1.4)

    def test_reverse_sweep_walks_decreasing_angles(self):
        points = tessellate_arc(CENTER, 1.0, 1.0, -1.0)
        angles = [_angle(CENTER, p) for p in points]

        assert angles == sorted(angles, reverse=True)
        assert angles[8] == pytest.approx(0.0, abs=1e-12)

    def test_equal_angular_steps(self):
        points = tessellate_arc(Point2D(0.0, 0.0), 1.0, 0.0, math.pi)

        assert points[8].x == pytest.approx(0.0, abs=1e-12)
        assert points[8].y == pytest.approx(1.0)
        assert _angle(Point2D(0.0, 0.0), points[1]) == pytest.approx(math.pi / 16)


class TestTessellateCircle:

    def test_thirty_three_points_closing_the_ring(self):
        points = tessellate_circle(CENTER, 2.0)

        assert len(points) == 33
        assert points[0] == points[32]

    def test_points_lie_on_circle(self):
        points = tessellate_circle(CENTER, 2.0)

        for p in points:
            assert math.hypot(p.x - CENTER.x, p.y - CENTER.y) == pytest.approx(2.0)

    def test_starts_at_angle_zero(self):
        points = tessellate_circle(CENTER, 2.0)

        assert points[0].x == pytest.approx(12.0)
        assert points[0].y == pytest.approx(-4.0)
        assert points[8].y == pytest.approx(-2.0)
