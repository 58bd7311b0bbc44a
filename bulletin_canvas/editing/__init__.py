"""Interactive editing: the resize controller, its events and block operations."""

from .events import (
    ResizeCancelEvent,
    ResizeEndEvent,
    ResizeListener,
    ResizeMoveEvent,
    ResizeStartEvent,
)
from .controller import ResizeController, ResizeOperation
from .operations import (
    add_block,
    bring_to_front,
    delete_block,
    duplicate_block,
    move_block,
    send_to_back,
    update_block,
)

__all__ = [
    # Events
    'ResizeListener',
    'ResizeStartEvent',
    'ResizeMoveEvent',
    'ResizeEndEvent',
    'ResizeCancelEvent',
    # Controller
    'ResizeController',
    'ResizeOperation',
    # Operations
    'add_block',
    'update_block',
    'delete_block',
    'duplicate_block',
    'bring_to_front',
    'send_to_back',
    'move_block',
]
