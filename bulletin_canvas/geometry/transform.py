"""Rotation transforms for canvas blocks.

Blocks are rendered the way CSS composes ``left/top/width/height`` with
``transform: rotate(θ)`` and ``transform-origin: center``: the unrotated box
is placed at (x, y) and then rotated clockwise about its own center. With y
pointing down, a clockwise rotation by θ is the matrix

    [[cos θ, -sin θ],
     [sin θ,  cos θ]]
"""

import math

import numpy as np

from .handles import ResizeHandle
from .types import BlockGeometry, Rect

# Fractional corner positions in nw, ne, se, sw order
_CORNER_FRACTIONS = np.array([
    [0.0, 0.0],
    [1.0, 0.0],
    [1.0, 1.0],
    [0.0, 1.0],
])


def rotation_matrix(degrees: float) -> np.ndarray:
    """Clockwise (y-down) rotation matrix for an angle in degrees."""
    radians = math.radians(degrees)
    cos_t = math.cos(radians)
    sin_t = math.sin(radians)
    return np.array([[cos_t, -sin_t], [sin_t, cos_t]])


def rotate_vector(dx: float, dy: float, degrees: float) -> tuple[float, float]:
    """Rotate a vector clockwise by the given angle."""
    rx, ry = rotation_matrix(degrees) @ np.array([dx, dy])
    return float(rx), float(ry)


def block_center(geometry: BlockGeometry) -> tuple[float, float]:
    """Center of the block, which is also its rotation origin."""
    return geometry.center


def local_to_page(geometry: BlockGeometry, fx: float, fy: float) -> tuple[float, float]:
    """
    Page position of a block-local fractional point after rotation.

    Args:
        geometry: Block geometry
        fx: Horizontal fraction (0 = left edge, 1 = right edge)
        fy: Vertical fraction (0 = top edge, 1 = bottom edge)

    Returns:
        (x, y) in page coordinates
    """
    cx, cy = geometry.center
    offset = np.array([(fx - 0.5) * geometry.width, (fy - 0.5) * geometry.height])
    px, py = np.array([cx, cy]) + rotation_matrix(geometry.rotation) @ offset
    return float(px), float(py)


def handle_point(geometry: BlockGeometry, handle: ResizeHandle) -> tuple[float, float]:
    """Page position of a handle."""
    fx, fy = ResizeHandle.parse(handle).fraction
    return local_to_page(geometry, fx, fy)


def anchor_point(geometry: BlockGeometry, handle: ResizeHandle) -> tuple[float, float]:
    """Page position of the anchor held fixed while dragging ``handle``."""
    return handle_point(geometry, ResizeHandle.parse(handle).anchor)


def rotated_corners(geometry: BlockGeometry) -> np.ndarray:
    """Page positions of the four corners (nw, ne, se, sw) as a 4x2 array."""
    cx, cy = geometry.center
    offsets = (_CORNER_FRACTIONS - 0.5) * np.array([geometry.width, geometry.height])
    return offsets @ rotation_matrix(geometry.rotation).T + np.array([cx, cy])


def bounding_rect(geometry: BlockGeometry) -> Rect:
    """Axis-aligned bounding rect of the rotated block."""
    if not geometry.is_rotated:
        return Rect(left=geometry.x, top=geometry.y,
                    width=geometry.width, height=geometry.height)
    corners = rotated_corners(geometry)
    min_x, min_y = corners.min(axis=0)
    max_x, max_y = corners.max(axis=0)
    return Rect(
        left=float(min_x),
        top=float(min_y),
        width=float(max_x - min_x),
        height=float(max_y - min_y),
    )


def rects_overlap(a: Rect, b: Rect) -> bool:
    """True when two axis-aligned rects share interior area (touching edges don't count)."""
    return a.left < b.right and b.left < a.right and a.top < b.bottom and b.top < a.bottom


def distance(p: tuple[float, float], q: tuple[float, float]) -> float:
    return math.hypot(p[0] - q[0], p[1] - q[1])
