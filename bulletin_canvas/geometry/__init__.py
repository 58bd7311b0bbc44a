"""
Canvas geometry.

Pure functions and value types for block placement, rotation and the
anchor-invariant resize calculator. Nothing here touches layouts or I/O.
"""

from .types import BlockGeometry, Rect, normalize_rotation
from .handles import ResizeHandle
from .transform import (
    anchor_point,
    block_center,
    bounding_rect,
    distance,
    handle_point,
    local_to_page,
    rects_overlap,
    rotate_vector,
    rotated_corners,
    rotation_matrix,
)
from .grid import (
    DEFAULT_MIN_SIZE,
    MIN_BLOCK_SIZES,
    constrain_to_page,
    get_min_size,
    snap_geometry_to_grid,
    snap_to_grid,
)
from .resize import ResizeResult, naive_resize, resize_geometry

__all__ = [
    # Types
    'BlockGeometry',
    'Rect',
    'normalize_rotation',
    'ResizeHandle',
    # Transforms
    'anchor_point',
    'block_center',
    'bounding_rect',
    'distance',
    'handle_point',
    'local_to_page',
    'rects_overlap',
    'rotate_vector',
    'rotated_corners',
    'rotation_matrix',
    # Grid and bounds
    'DEFAULT_MIN_SIZE',
    'MIN_BLOCK_SIZES',
    'constrain_to_page',
    'get_min_size',
    'snap_geometry_to_grid',
    'snap_to_grid',
    # Resize
    'ResizeResult',
    'naive_resize',
    'resize_geometry',
]
