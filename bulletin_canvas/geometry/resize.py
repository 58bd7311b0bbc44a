"""
Anchor-invariant resize calculator.

Dragging a handle must keep the opposite point of the block (the anchor)
fixed on screen. With rotation 0 this is plain edge arithmetic: keep the
opposite edge's model coordinate. With rotation the renderer turns the box
about its center, and the center moves when the size changes, so keeping
x/y fixed makes the visible corner slide. The calculator therefore:

1. finds the anchor in block-local space (opposite the handle),
2. maps it to page space using the pre-resize center and rotation,
3. rotates the pointer delta back by -rotation and applies it to the axes
   the handle controls (clamped to the minimum size),
4. solves x/y so that the anchor, placed with the new size about the new
   center, lands on the same page position.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

import numpy as np

from ..config import settings
from .grid import snap_to_grid
from .handles import ResizeHandle
from .transform import local_to_page, rotate_vector, rotation_matrix
from .types import BlockGeometry


@dataclass(frozen=True)
class ResizeResult:
    """Outcome of a single resize computation."""

    geometry: BlockGeometry
    handle: ResizeHandle
    local_delta: tuple[float, float]
    clamped_width: bool = False
    clamped_height: bool = False

    @property
    def clamped(self) -> bool:
        return self.clamped_width or self.clamped_height

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API response."""
        return {
            "geometry": self.geometry.model_dump(),
            "handle": self.handle.value,
            "localDelta": {"x": self.local_delta[0], "y": self.local_delta[1]},
            "clampedWidth": self.clamped_width,
            "clampedHeight": self.clamped_height,
        }


def _resolve_minimums(
    min_width: Optional[float], min_height: Optional[float]
) -> tuple[float, float]:
    min_width = settings.MIN_BLOCK_SIZE if min_width is None else float(min_width)
    min_height = settings.MIN_BLOCK_SIZE if min_height is None else float(min_height)
    if min_width <= 0 or min_height <= 0:
        raise ValueError(f"Minimum size must be positive, got {min_width}x{min_height}")
    return min_width, min_height


def _resolve_extent(
    extent: float,
    delta: float,
    sign: int,
    minimum: float,
    grid_size: Optional[float],
) -> tuple[float, bool]:
    """New extent along one axis and whether it was clamped."""
    if sign == 0:
        return extent, False
    requested = extent + sign * delta
    if grid_size:
        requested = snap_to_grid(requested, grid_size)
    if requested < minimum:
        return minimum, True
    return requested, False


def _pinned_position(
    geometry: BlockGeometry, handle: ResizeHandle, width: float, height: float
) -> tuple[float, float]:
    """x/y keeping the opposite model edge fixed (rotation ignored)."""
    x = geometry.x + geometry.width - width if handle.x_sign < 0 else geometry.x
    y = geometry.y + geometry.height - height if handle.y_sign < 0 else geometry.y
    return x, y


def naive_resize(
    geometry: BlockGeometry,
    handle: Union[ResizeHandle, str],
    dx: float,
    dy: float,
    *,
    min_width: Optional[float] = None,
    min_height: Optional[float] = None,
    grid_size: Optional[float] = None,
) -> ResizeResult:
    """
    Resize keeping the opposite edge's model coordinates fixed.

    Ignores rotation entirely: the delta is applied in page axes and x/y are
    solved as if the block were unrotated. Correct only at rotation 0.
    """
    handle = ResizeHandle.parse(handle)
    min_width, min_height = _resolve_minimums(min_width, min_height)

    width, clamped_width = _resolve_extent(geometry.width, dx, handle.x_sign, min_width, grid_size)
    height, clamped_height = _resolve_extent(geometry.height, dy, handle.y_sign, min_height, grid_size)
    x, y = _pinned_position(geometry, handle, width, height)

    return ResizeResult(
        geometry=BlockGeometry(x=x, y=y, width=width, height=height, rotation=geometry.rotation),
        handle=handle,
        local_delta=(float(dx), float(dy)),
        clamped_width=clamped_width,
        clamped_height=clamped_height,
    )


def resize_geometry(
    geometry: BlockGeometry,
    handle: Union[ResizeHandle, str],
    dx: float,
    dy: float,
    *,
    min_width: Optional[float] = None,
    min_height: Optional[float] = None,
    grid_size: Optional[float] = None,
) -> ResizeResult:
    """
    Resize a block from a handle so the opposite anchor stays fixed on screen.

    Args:
        geometry: Geometry at pointer-down
        handle: Dragged handle ("nw", "n", "ne", "e", "se", "s", "sw", "w")
        dx: Pointer displacement in page units (screen axes)
        dy: Pointer displacement in page units (screen axes)
        min_width: Minimum width (defaults to settings.MIN_BLOCK_SIZE)
        min_height: Minimum height (defaults to settings.MIN_BLOCK_SIZE)
        grid_size: Snap the new width/height to this grid

    Returns:
        ResizeResult with the new geometry; rotation is unchanged

    Raises:
        InvalidHandleError: If handle is not a known handle tag
    """
    handle = ResizeHandle.parse(handle)
    if not geometry.is_rotated:
        return naive_resize(
            geometry, handle, dx, dy,
            min_width=min_width, min_height=min_height, grid_size=grid_size,
        )

    min_width, min_height = _resolve_minimums(min_width, min_height)
    local_dx, local_dy = rotate_vector(dx, dy, -geometry.rotation)

    width, clamped_width = _resolve_extent(geometry.width, local_dx, handle.x_sign, min_width, grid_size)
    height, clamped_height = _resolve_extent(geometry.height, local_dy, handle.y_sign, min_height, grid_size)

    ax, ay = handle.anchor.fraction
    anchor = np.array(local_to_page(geometry, ax, ay))
    offset = rotation_matrix(geometry.rotation) @ np.array([(ax - 0.5) * width, (ay - 0.5) * height])
    cx, cy = anchor - offset

    return ResizeResult(
        geometry=BlockGeometry(
            x=float(cx - width / 2),
            y=float(cy - height / 2),
            width=width,
            height=height,
            rotation=geometry.rotation,
        ),
        handle=handle,
        local_delta=(local_dx, local_dy),
        clamped_width=clamped_width,
        clamped_height=clamped_height,
    )
