"""Resize lifecycle events and the listener interface.

The resize controller notifies listeners synchronously, in registration
order, from inside the pointer handler. Listeners replace ambient global
events so diagnostics can be attached and tested without a browser.
"""

from dataclasses import dataclass

from bulletin_canvas.geometry import BlockGeometry, ResizeHandle


@dataclass(frozen=True)
class ResizeStartEvent:
    """Pointer went down on a handle."""

    block_id: str
    block_type: str
    handle: ResizeHandle
    geometry: BlockGeometry


@dataclass(frozen=True)
class ResizeMoveEvent:
    """Pointer moved; ``geometry`` is the preview, not yet committed."""

    block_id: str
    handle: ResizeHandle
    geometry: BlockGeometry
    local_delta: tuple[float, float] = (0.0, 0.0)
    clamped_width: bool = False
    clamped_height: bool = False

    @property
    def clamped(self) -> bool:
        return self.clamped_width or self.clamped_height


@dataclass(frozen=True)
class ResizeEndEvent:
    """Pointer released; ``geometry`` was committed to the block."""

    block_id: str
    handle: ResizeHandle
    geometry: BlockGeometry


@dataclass(frozen=True)
class ResizeCancelEvent:
    """Drag aborted; the block keeps its pre-resize geometry."""

    block_id: str
    handle: ResizeHandle


class ResizeListener:
    """Observer of resize operations. Override the hooks you need."""

    def on_resize_start(self, event: ResizeStartEvent) -> None:
        pass

    def on_resize_move(self, event: ResizeMoveEvent) -> None:
        pass

    def on_resize_end(self, event: ResizeEndEvent) -> None:
        pass

    def on_resize_cancel(self, event: ResizeCancelEvent) -> None:
        pass
