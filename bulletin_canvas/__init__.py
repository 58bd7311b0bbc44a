"""
Bulletin canvas - page layout core for the bulletin canvas editor.

Blocks are placed on fixed-size pages, may be rotated about their center,
and are resized from eight handles without the opposite anchor drifting.

Example:
    from bulletin_canvas import ResizeController, create_default_canvas_layout

    layout = create_default_canvas_layout(bulletin_id, church_name="Grace Church")
    controller = ResizeController(layout)
    controller.begin(block_id, "se")
    controller.move(40, 24)
    controller.end()
"""

__version__ = "0.1.0"

from .config import settings
from .errors import (
    BlockNotFoundError,
    BulletinLockedError,
    BulletinNotFoundError,
    CanvasError,
    InvalidHandleError,
    ResizeStateError,
)
from .geometry import BlockGeometry, Rect, ResizeHandle, ResizeResult, naive_resize, resize_geometry
from .blocks import BlockType, CanvasBlock, CanvasPage
from .formats import CanvasLayout, create_default_canvas_layout, create_empty_layout
from .editing import ResizeController, ResizeListener
from .diagnostics import DriftClassifier, DriftReport, DriftTestHarness, PositionStabilityTracker
from .store import BulletinStatus, LayoutStore, layout_store

__all__ = [
    '__version__',
    'settings',
    # Errors
    'CanvasError',
    'InvalidHandleError',
    'BlockNotFoundError',
    'ResizeStateError',
    'BulletinNotFoundError',
    'BulletinLockedError',
    # Geometry
    'BlockGeometry',
    'Rect',
    'ResizeHandle',
    'ResizeResult',
    'naive_resize',
    'resize_geometry',
    # Layout model
    'BlockType',
    'CanvasBlock',
    'CanvasPage',
    'CanvasLayout',
    'create_default_canvas_layout',
    'create_empty_layout',
    # Editing and diagnostics
    'ResizeController',
    'ResizeListener',
    'DriftClassifier',
    'DriftReport',
    'DriftTestHarness',
    'PositionStabilityTracker',
    # Service
    'BulletinStatus',
    'LayoutStore',
    'layout_store',
]
