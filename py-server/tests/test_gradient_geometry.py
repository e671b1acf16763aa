"""
Tests for gradient handle geometry.

Verifies:
- Line descriptor fields and degenerate handles
- Origin corner lookup for every direction class
- Projection onto the corner-anchored line
- Signed stop distances and non-mutation of input stops
- CSS direction angle and radial ellipse position
"""
import math

import pytest

from models.figma_types import ColorStop, Vector
from utils.gradient_geometry import (
    ORIGIN_CORNER_TABLE,
    Point,
    gradient_direction_angle,
    origin_corner_for,
    radial_gradient_position,
    remap_stops,
    resolve_gradient_line,
    signed_stop_distance,
)

UNIT_CORNERS = {Point(0.0, 0.0), Point(1.0, 0.0), Point(1.0, 1.0), Point(0.0, 1.0)}


def _v(*points):
    return [Vector(x=x, y=y) for x, y in points]


# ══════════════════════════════════════════════════════════════════════════
# Line descriptor
# ══════════════════════════════════════════════════════════════════════════

class TestResolveGradientLine:

    def test_rightward_line(self, rightward_handles):
        line = resolve_gradient_line(rightward_handles)
        assert line.r == pytest.approx(1.0)
        assert line.cos == pytest.approx(1.0)
        assert line.sin == pytest.approx(0.0)
        assert line.m == pytest.approx(0.0)
        assert line.origin_corner == Point(0.0, 0.0)

    def test_vertical_line_has_no_slope(self):
        line = resolve_gradient_line(_v((0.5, 0.0), (0.5, 1.0)))
        assert line.m is None
        assert line.sin == pytest.approx(1.0)

    @pytest.mark.parametrize("handles", [
        _v((0.3, 0.7), (0.9, 0.1)),
        _v((0.0, 0.0), (1.0, 1.0)),
        _v((0.8, 0.2), (0.1, 0.6)),
    ])
    def test_unit_direction(self, handles):
        line = resolve_gradient_line(handles)
        assert line.cos ** 2 + line.sin ** 2 == pytest.approx(1.0)
        assert line.r > 0

    def test_third_handle_ignored(self):
        two = resolve_gradient_line(_v((0.0, 0.5), (1.0, 0.5)))
        three = resolve_gradient_line(_v((0.0, 0.5), (1.0, 0.5), (0.0, 1.0)))
        assert two == three

    def test_coincident_handles_have_no_geometry(self):
        assert resolve_gradient_line(_v((0.3, 0.3), (0.3, 0.3))) is None

    @pytest.mark.parametrize("handles", [[], _v((0.5, 0.5)), None])
    def test_too_few_handles(self, handles):
        assert resolve_gradient_line(handles) is None

    def test_accepts_plain_tuples(self):
        line = resolve_gradient_line([(0.0, 0.0), (0.0, 2.0)])
        assert line.r == pytest.approx(2.0)

    def test_descriptor_is_immutable(self, rightward_handles):
        line = resolve_gradient_line(rightward_handles)
        with pytest.raises(AttributeError):
            line.r = 2.0

    def test_overflowing_span_has_no_geometry(self):
        assert resolve_gradient_line(_v((-1e308, 0.0), (1e308, 0.1))) is None

    def test_unrepresentable_slope_dropped(self):
        line = resolve_gradient_line(_v((0.0, 0.0), (1e-320, 1.0)))
        assert line.m is None
        assert line.sin == pytest.approx(1.0)


# ══════════════════════════════════════════════════════════════════════════
# Origin corner
# ══════════════════════════════════════════════════════════════════════════

class TestOriginCorner:

    @pytest.mark.parametrize("dx,dy,expected", [
        # Rightward, shallow and steep
        (1.0, 0.5, (0.0, 0.0)),
        (0.5, 1.0, (0.0, 0.0)),
        (1.0, 0.0, (0.0, 0.0)),
        (1.0, -0.5, (0.0, 1.0)),
        (0.5, -1.0, (0.0, 1.0)),
        # Leftward
        (-1.0, 0.5, (1.0, 0.0)),
        (-0.5, 1.0, (1.0, 0.0)),
        (-1.0, 0.0, (1.0, 0.0)),
        (-1.0, -0.5, (1.0, 1.0)),
        (-0.5, -1.0, (1.0, 1.0)),
        # Vertical
        (0.0, 1.0, (0.0, 0.0)),
        (0.0, -1.0, (0.0, 1.0)),
    ])
    def test_corner_by_direction(self, dx, dy, expected):
        assert origin_corner_for(dx, dy) == Point(*expected)

    def test_table_only_holds_unit_corners(self):
        assert set(ORIGIN_CORNER_TABLE.values()) <= UNIT_CORNERS

    def test_equal_magnitudes_use_steep_entry(self):
        assert origin_corner_for(1.0, -1.0) == ORIGIN_CORNER_TABLE[(1, -1, False)]


# ══════════════════════════════════════════════════════════════════════════
# Projection
# ══════════════════════════════════════════════════════════════════════════

class TestProjection:

    def test_horizontal_line(self, rightward_handles):
        line = resolve_gradient_line(rightward_handles)
        assert line.project(Point(0.5, 0.7)) == Point(0.5, 0.0)

    def test_vertical_line(self):
        line = resolve_gradient_line(_v((0.5, 0.0), (0.5, 1.0)))
        assert line.project(Point(0.2, 0.3)) == Point(0.5, 0.3)

    def test_diagonal_line_through_origin_corner(self):
        line = resolve_gradient_line(_v((0.0, 0.0), (1.0, 1.0)))
        projected = line.project(Point(1.0, 0.0))
        assert projected.x == pytest.approx(0.5)
        assert projected.y == pytest.approx(0.5)

    def test_diagonal_line_anchored_at_corner_not_start(self):
        # Handles start mid-shape; the line still passes through (0, 1)
        line = resolve_gradient_line(_v((0.25, 0.75), (0.75, 0.25)))
        assert line.origin_corner == Point(0.0, 1.0)
        projected = line.project(Point(0.0, 1.0))
        assert projected.x == pytest.approx(0.0)
        assert projected.y == pytest.approx(1.0)


# ══════════════════════════════════════════════════════════════════════════
# Stop remapping
# ══════════════════════════════════════════════════════════════════════════

class TestRemapStops:

    def test_rightward_stops_keep_positions(self, rightward_handles, two_stops):
        line = resolve_gradient_line(rightward_handles)
        remapped = remap_stops(line, two_stops)
        assert [s.position for s in remapped] == pytest.approx([0.0, 1.0])

    def test_diagonal_end_is_full_diagonal(self, two_stops):
        line = resolve_gradient_line(_v((0.0, 0.0), (1.0, 1.0)))
        remapped = remap_stops(line, two_stops)
        assert [s.position for s in remapped] == pytest.approx([0.0, math.sqrt(2)])

    def test_colors_and_order_preserved(self, rightward_handles, red, blue):
        stops = [
            ColorStop(color=red, position=0.0),
            ColorStop(color=blue, position=0.4),
            ColorStop(color=red, position=1.0),
        ]
        remapped = remap_stops(resolve_gradient_line(rightward_handles), stops)
        assert len(remapped) == len(stops)
        assert [s.color for s in remapped] == [s.color for s in stops]

    def test_input_stops_not_mutated(self, two_stops):
        line = resolve_gradient_line(_v((0.0, 0.0), (1.0, 1.0)))
        remapped = remap_stops(line, two_stops)
        assert [s.position for s in two_stops] == [0.0, 1.0]
        assert all(a is not b for a, b in zip(remapped, two_stops))

    def test_stop_before_left_edge_is_negative(self):
        line = resolve_gradient_line(_v((0.25, 0.5), (0.75, 0.5)))
        distance = signed_stop_distance(line, -1.0)
        assert distance == pytest.approx(-math.hypot(0.25, 0.5))

    def test_stop_past_right_edge_from_right_corner_is_negative(self):
        line = resolve_gradient_line(_v((1.0, 0.0), (0.0, 0.0)))
        assert line.origin_corner == Point(1.0, 0.0)
        assert signed_stop_distance(line, -0.5) == pytest.approx(-0.5)
        assert signed_stop_distance(line, 1.0) == pytest.approx(1.0)

    def test_bottom_right_origin(self):
        line = resolve_gradient_line(_v((1.0, 1.0), (0.0, 0.0)))
        assert line.origin_corner == Point(1.0, 1.0)
        assert signed_stop_distance(line, 0.0) == pytest.approx(0.0)
        assert signed_stop_distance(line, 1.0) == pytest.approx(math.sqrt(2))
        assert signed_stop_distance(line, -0.5) == pytest.approx(-math.sqrt(0.5))

    def test_bottom_left_origin(self):
        line = resolve_gradient_line(_v((0.0, 1.0), (1.0, 0.0)))
        assert line.origin_corner == Point(0.0, 1.0)
        assert signed_stop_distance(line, 1.0) == pytest.approx(math.sqrt(2))
        assert signed_stop_distance(line, -0.25) < 0

    def test_empty_stops(self, rightward_handles):
        assert remap_stops(resolve_gradient_line(rightward_handles), []) == []

    @pytest.mark.parametrize("handles", [
        _v((0.0, 0.0), (1.0, 1e-320)),
        _v((0.0, 0.0), (1e-320, 1.0)),
    ])
    def test_extreme_slopes_stay_finite(self, handles, two_stops):
        remapped = remap_stops(resolve_gradient_line(handles), two_stops)
        assert all(math.isfinite(s.position) for s in remapped)
        assert [s.position for s in remapped] == pytest.approx([0.0, 1.0])


# ══════════════════════════════════════════════════════════════════════════
# Direction angle
# ══════════════════════════════════════════════════════════════════════════

class TestDirectionAngle:

    @pytest.mark.parametrize("handles,expected", [
        (_v((0.0, 0.0), (1.0, 0.0)), 90.0),
        (_v((0.0, 0.0), (0.0, 1.0)), 0.0),
        (_v((1.0, 0.0), (0.0, 0.0)), -90.0),
        (_v((0.0, 1.0), (0.0, 0.0)), 180.0),
        (_v((0.0, 0.0), (1.0, 1.0)), 45.0),
    ])
    def test_angle(self, handles, expected):
        assert gradient_direction_angle(handles) == pytest.approx(expected)

    def test_single_handle(self):
        assert gradient_direction_angle(_v((0.5, 0.5))) is None

    def test_coincident_handles(self):
        assert gradient_direction_angle(_v((0.3, 0.3), (0.3, 0.3))) is None


# ══════════════════════════════════════════════════════════════════════════
# Radial position
# ══════════════════════════════════════════════════════════════════════════

class TestRadialPosition:

    def test_centered_circle(self, centered_radial_handles):
        ellipse = radial_gradient_position(centered_radial_handles)
        assert (ellipse.rx, ellipse.ry, ellipse.cx, ellipse.cy) == pytest.approx((50, 50, 50, 50))

    def test_off_center_ellipse(self):
        ellipse = radial_gradient_position(_v((0.25, 0.5), (0.75, 0.5), (0.25, 0.75)))
        assert (ellipse.rx, ellipse.ry, ellipse.cx, ellipse.cy) == pytest.approx((50, 25, 25, 50))

    def test_rotated_axes_use_lengths(self):
        ellipse = radial_gradient_position(_v((0.5, 0.5), (0.8, 0.9), (0.1, 0.8)))
        assert ellipse.rx == pytest.approx(50.0)
        assert ellipse.ry == pytest.approx(50.0)

    @pytest.mark.parametrize("handles", [[], _v((0.5, 0.5)), _v((0.5, 0.5), (1.0, 0.5))])
    def test_too_few_handles(self, handles):
        assert radial_gradient_position(handles) is None
