"""Canvas layout formats.

This module contains the layout document model, its JSON I/O and the
default layout synthesizer.
"""

from .layout import CanvasLayout, create_empty_layout
from .default_layout import centered_x, create_default_canvas_layout

__all__ = [
    'CanvasLayout',
    'create_empty_layout',
    'centered_x',
    'create_default_canvas_layout',
]
