"""
Tests for the anchor-invariant resize calculator.
"""

import math

import pytest

from bulletin_canvas.errors import InvalidHandleError
from bulletin_canvas.geometry import (
    BlockGeometry,
    ResizeHandle,
    anchor_point,
    distance,
    naive_resize,
    resize_geometry,
)

ROTATIONS = [0, 15, 30, 45, 90, 135, 180, 270, 330]


def _anchor_shift(before: BlockGeometry, after: BlockGeometry, handle) -> float:
    return distance(anchor_point(before, handle), anchor_point(after, handle))


class TestUnrotatedResize:
    """Rotation 0 is plain edge arithmetic and must be exact."""

    def test_se_grows_without_moving(self, square_geometry):
        """Dragging se keeps x/y exactly."""
        result = resize_geometry(square_geometry, 'se', 30, 20)
        geometry = result.geometry
        assert (geometry.x, geometry.y) == (100, 100)
        assert (geometry.width, geometry.height) == (130, 120)
        assert not result.clamped

    def test_nw_moves_origin(self, square_geometry):
        """Dragging nw keeps the right and bottom edges."""
        geometry = resize_geometry(square_geometry, 'nw', 10, 20).geometry
        assert (geometry.x, geometry.y) == (110, 120)
        assert (geometry.width, geometry.height) == (90, 80)
        assert geometry.x + geometry.width == 200
        assert geometry.y + geometry.height == 200

    def test_edge_handles_touch_one_axis(self, square_geometry):
        """Edge handles ignore the perpendicular delta."""
        east = resize_geometry(square_geometry, 'e', 25, 999).geometry
        assert (east.x, east.y, east.width, east.height) == (100, 100, 125, 100)

        north = resize_geometry(square_geometry, 'n', 999, -25).geometry
        assert (north.x, north.y, north.width, north.height) == (100, 75, 100, 125)

        west = resize_geometry(square_geometry, 'w', -10, 0).geometry
        assert (west.x, west.width) == (90, 110)

        south = resize_geometry(square_geometry, 's', 0, 15).geometry
        assert (south.y, south.height) == (100, 115)

    def test_matches_naive_resize(self, square_geometry):
        """Without rotation both calculators agree exactly."""
        for handle in ResizeHandle:
            assert resize_geometry(square_geometry, handle, 13, -7) == naive_resize(square_geometry, handle, 13, -7)

    def test_rotation_unchanged(self):
        """Resize never changes rotation."""
        geometry = BlockGeometry(x=0, y=0, width=100, height=50, rotation=30)
        assert resize_geometry(geometry, 'se', 10, 10).geometry.rotation == 30


class TestRotatedResize:
    """Under rotation the anchor must stay put on screen."""

    @pytest.mark.parametrize("rotation", ROTATIONS)
    @pytest.mark.parametrize("handle", list(ResizeHandle))
    def test_anchor_fixed(self, rotation, handle):
        """The point opposite the dragged handle moves at most half a unit."""
        before = BlockGeometry(x=200, y=300, width=300, height=200, rotation=rotation)
        after = resize_geometry(before, handle, 37, -21).geometry
        assert _anchor_shift(before, after, handle) <= 0.5

    def test_45_degree_se_drag(self, square_geometry):
        """A horizontal drag on a 45 degree block splits across both local axes."""
        before = square_geometry.model_copy(update={'rotation': 45})
        result = resize_geometry(before, 'se', 20, 0)
        after = result.geometry

        local = 20 * math.cos(math.radians(45))
        assert after.width == pytest.approx(100 + local)
        assert after.height == pytest.approx(100 - local)
        assert after.width == pytest.approx(114.14, abs=0.01)
        assert after.height == pytest.approx(85.86, abs=0.01)
        assert result.local_delta == pytest.approx((local, -local))
        assert _anchor_shift(before, after, 'se') < 1e-9

    def test_rotated_position_shifts(self, square_geometry):
        """x/y legitimately change under rotation, unlike the naive calculator."""
        before = square_geometry.model_copy(update={'rotation': 45})
        correct = resize_geometry(before, 'se', 20, 0).geometry
        naive = naive_resize(before, 'se', 20, 0).geometry

        assert (correct.x, correct.y) != (before.x, before.y)
        assert (naive.x, naive.y) == (before.x, before.y)
        assert naive.width == 120
        assert _anchor_shift(before, naive, 'se') > 1

    def test_90_degree_drag_maps_to_height(self):
        """At 90 degrees a screen-right drag on se shrinks the local height."""
        before = BlockGeometry(x=0, y=0, width=200, height=100, rotation=90)
        after = resize_geometry(before, 'se', 30, 0).geometry
        assert after.width == pytest.approx(200)
        assert after.height == pytest.approx(70)
        assert _anchor_shift(before, after, 'se') <= 0.5


class TestResizeConstraints:
    """Minimum sizes and grid snapping."""

    def test_clamps_to_minimum(self, square_geometry):
        """Shrinking past the minimum clamps and keeps the anchor."""
        result = resize_geometry(square_geometry, 'se', -500, -500)
        assert result.geometry.width == 20
        assert result.geometry.height == 20
        assert result.clamped_width and result.clamped_height
        assert (result.geometry.x, result.geometry.y) == (100, 100)

    def test_clamp_nw_keeps_opposite_edge(self, square_geometry):
        result = resize_geometry(square_geometry, 'nw', 500, 0, min_width=40, min_height=40)
        assert result.geometry.width == 40
        assert result.geometry.x == 160
        assert result.clamped_width
        assert not result.clamped_height

    def test_clamped_rotated_keeps_anchor(self):
        before = BlockGeometry(x=50, y=50, width=120, height=80, rotation=30)
        result = resize_geometry(before, 'ne', -400, 400, min_width=50, min_height=30)
        assert result.clamped
        assert result.geometry.width == 50
        assert result.geometry.height == 30
        assert _anchor_shift(before, result.geometry, 'ne') <= 0.5

    def test_grid_snaps_size(self, square_geometry):
        """Grid snapping rounds the extent, not the position."""
        geometry = resize_geometry(square_geometry, 'se', 7, 0, grid_size=16).geometry
        assert geometry.width == 112
        assert geometry.height == 96
        assert (geometry.x, geometry.y) == (100, 100)

    def test_invalid_minimum(self, square_geometry):
        with pytest.raises(ValueError):
            resize_geometry(square_geometry, 'se', 10, 10, min_width=0)


class TestResizeHandleInput:
    """Handle tags are validated."""

    def test_unknown_handle(self, square_geometry):
        with pytest.raises(InvalidHandleError):
            resize_geometry(square_geometry, 'middle', 10, 10)

    def test_unknown_handle_is_value_error(self, square_geometry):
        with pytest.raises(ValueError):
            naive_resize(square_geometry, 'xx', 10, 10)

    def test_alias_accepted(self, square_geometry):
        result = resize_geometry(square_geometry, 'bottomRight', 10, 10)
        assert result.handle == ResizeHandle.SE

    def test_to_dict(self, square_geometry):
        data = resize_geometry(square_geometry, 'e', 10, 0).to_dict()
        assert data['handle'] == 'e'
        assert data['geometry']['width'] == 110
        assert data['clampedWidth'] is False
        assert data['localDelta'] == {'x': 10.0, 'y': 0.0}
