"""Grid snapping, page bounds and per-type minimum sizes."""

from typing import Optional

from ..config import settings
from .types import BlockGeometry

# Minimum (width, height) per block type
MIN_BLOCK_SIZES: dict[str, tuple[float, float]] = {
    'text': (50, 30),
    'image': (50, 50),
    'qr': (80, 80),
    'serviceItems': (200, 150),
    'announcements': (200, 100),
    'events': (200, 100),
    'giving': (150, 150),
    'contactInfo': (150, 80),
}

# Minimum for block types missing from MIN_BLOCK_SIZES
DEFAULT_MIN_SIZE: tuple[float, float] = (50, 50)


def get_min_size(block_type: Optional[str] = None) -> tuple[float, float]:
    """
    Minimum size for a block type.

    Unknown or missing types fall back to DEFAULT_MIN_SIZE (50x50).
    """
    if block_type is None:
        return DEFAULT_MIN_SIZE
    return MIN_BLOCK_SIZES.get(str(getattr(block_type, 'value', block_type)), DEFAULT_MIN_SIZE)


def snap_to_grid(value: float, grid_size: Optional[float]) -> float:
    """Snap a value to the nearest grid increment (no-op for grid <= 0)."""
    if not grid_size or grid_size <= 0:
        return value
    return round(value / grid_size) * grid_size


def snap_geometry_to_grid(geometry: BlockGeometry, grid_size: Optional[float]) -> BlockGeometry:
    """Snap position and size to the grid, keeping sizes positive."""
    if not grid_size or grid_size <= 0:
        return geometry
    return geometry.model_copy(update={
        'x': snap_to_grid(geometry.x, grid_size),
        'y': snap_to_grid(geometry.y, grid_size),
        'width': max(grid_size, snap_to_grid(geometry.width, grid_size)),
        'height': max(grid_size, snap_to_grid(geometry.height, grid_size)),
    })


def constrain_to_page(
    geometry: BlockGeometry,
    page_width: Optional[float] = None,
    page_height: Optional[float] = None,
) -> BlockGeometry:
    """Clamp x/y so the unrotated block stays on the page."""
    page_width = settings.PAGE_WIDTH if page_width is None else page_width
    page_height = settings.PAGE_HEIGHT if page_height is None else page_height
    x = max(0.0, min(page_width - geometry.width, geometry.x))
    y = max(0.0, min(page_height - geometry.height, geometry.y))
    return geometry.model_copy(update={'x': x, 'y': y})
