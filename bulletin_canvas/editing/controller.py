"""Interactive resize controller.

Turns a pointer-down / move / up stream into resize computations for one
block of a layout. The in-progress geometry lives on an ephemeral
ResizeOperation and only reaches the block on end(); cancel() drops it.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Union

from bulletin_canvas.blocks import CanvasBlock
from bulletin_canvas.errors import BlockNotFoundError, ResizeStateError
from bulletin_canvas.formats import CanvasLayout
from bulletin_canvas.geometry import (
    BlockGeometry,
    ResizeHandle,
    ResizeResult,
    get_min_size,
    resize_geometry,
)

from .events import (
    ResizeCancelEvent,
    ResizeEndEvent,
    ResizeListener,
    ResizeMoveEvent,
    ResizeStartEvent,
)

logger = logging.getLogger(__name__)

ResizeFunction = Callable[..., ResizeResult]


@dataclass
class ResizeOperation:
    """State of one drag. Exists only between begin() and end()/cancel()."""

    block_id: str
    block_type: str
    handle: ResizeHandle
    start_geometry: BlockGeometry
    current_geometry: BlockGeometry
    min_width: float
    min_height: float
    pointer_delta: tuple[float, float] = (0.0, 0.0)
    last_result: Optional[ResizeResult] = field(default=None)

    @property
    def rotation(self) -> float:
        return self.start_geometry.rotation


class ResizeController:
    """Drives resize operations on a layout and notifies listeners."""

    def __init__(
        self,
        layout: CanvasLayout,
        listeners: Optional[Iterable[ResizeListener]] = None,
        *,
        scale: float = 1.0,
        grid_size: Optional[float] = None,
        min_size: Optional[tuple[float, float]] = None,
        resize_fn: ResizeFunction = resize_geometry,
    ):
        """
        Args:
            layout: Layout whose blocks are resized in place on end()
            listeners: Initial listeners, notified in order
            scale: Screen pixels per page unit (editor zoom)
            grid_size: Snap resized width/height to this grid
            min_size: (width, height) override; defaults to the per-type minimum
            resize_fn: Resize calculator (resize_geometry or naive_resize)
        """
        if scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")
        self.layout = layout
        self.scale = scale
        self.grid_size = grid_size
        self.min_size = min_size
        self.resize_fn = resize_fn
        self._listeners: list[ResizeListener] = list(listeners or [])
        self._operation: Optional[ResizeOperation] = None

    # --- Listeners ---

    def add_listener(self, listener: ResizeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ResizeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, hook: str, event) -> None:
        for listener in list(self._listeners):
            try:
                getattr(listener, hook)(event)
            except Exception:
                # A failing observer must not break the drag in progress
                logger.exception(f"Resize listener {listener!r} failed in {hook}")

    # --- Lifecycle ---

    @property
    def active(self) -> bool:
        return self._operation is not None

    @property
    def operation(self) -> Optional[ResizeOperation]:
        return self._operation

    def _require_operation(self) -> ResizeOperation:
        if self._operation is None:
            raise ResizeStateError("No resize in progress")
        return self._operation

    def begin(self, block_id: str, handle: Union[ResizeHandle, str]) -> ResizeOperation:
        """
        Start resizing a block from a handle (pointer-down).

        Raises:
            InvalidHandleError: If handle is not a known handle tag
            BlockNotFoundError: If the block is not in the layout
            ResizeStateError: If another resize is already in progress
        """
        handle = ResizeHandle.parse(handle)
        if self._operation is not None:
            raise ResizeStateError(
                f"Resize of block {self._operation.block_id} already in progress"
            )
        found = self.layout.find_block(block_id)
        if found is None:
            raise BlockNotFoundError(block_id)
        _, block = found

        min_width, min_height = self.min_size or get_min_size(block.block_type)
        geometry = block.geometry
        self._operation = ResizeOperation(
            block_id=block.id,
            block_type=str(block.block_type),
            handle=handle,
            start_geometry=geometry,
            current_geometry=geometry,
            min_width=min_width,
            min_height=min_height,
        )
        logger.debug(
            f"Resize start: block {block.id} ({block.block_type}) handle {handle.value} "
            f"rotation {geometry.rotation}"
        )
        self._notify('on_resize_start', ResizeStartEvent(
            block_id=block.id,
            block_type=str(block.block_type),
            handle=handle,
            geometry=geometry,
        ))
        return self._operation

    def move(self, dx: float, dy: float) -> BlockGeometry:
        """
        Update the preview from the cumulative pointer delta since begin().

        Args:
            dx: Screen-space delta in pixels
            dy: Screen-space delta in pixels

        Returns:
            Preview geometry (not yet committed)
        """
        operation = self._require_operation()
        operation.pointer_delta = (dx, dy)
        result = self.resize_fn(
            operation.start_geometry,
            operation.handle,
            dx / self.scale,
            dy / self.scale,
            min_width=operation.min_width,
            min_height=operation.min_height,
            grid_size=self.grid_size,
        )
        operation.last_result = result
        operation.current_geometry = result.geometry
        self._notify('on_resize_move', ResizeMoveEvent(
            block_id=operation.block_id,
            handle=operation.handle,
            geometry=result.geometry,
            local_delta=result.local_delta,
            clamped_width=result.clamped_width,
            clamped_height=result.clamped_height,
        ))
        return result.geometry

    def move_by(self, ddx: float, ddy: float) -> BlockGeometry:
        """Update the preview from an incremental pointer delta."""
        operation = self._require_operation()
        px, py = operation.pointer_delta
        return self.move(px + ddx, py + ddy)

    def end(self) -> CanvasBlock:
        """Commit the preview geometry to the block (pointer-up)."""
        operation = self._require_operation()
        self._operation = None

        found = self.layout.find_block(operation.block_id)
        if found is None:
            raise BlockNotFoundError(operation.block_id)
        page, block = found
        committed = block.with_geometry(operation.current_geometry)
        page.blocks[page.index_of(block.id)] = committed

        logger.debug(
            f"Resize end: block {committed.id} now at ({committed.x:.2f}, {committed.y:.2f}) "
            f"size {committed.width:.2f}x{committed.height:.2f}"
        )
        self._notify('on_resize_end', ResizeEndEvent(
            block_id=operation.block_id,
            handle=operation.handle,
            geometry=operation.current_geometry,
        ))
        return committed

    def cancel(self) -> None:
        """Abort the drag without touching the block. No-op when idle."""
        operation = self._operation
        if operation is None:
            return
        self._operation = None
        logger.debug(f"Resize cancelled: block {operation.block_id}")
        self._notify('on_resize_cancel', ResizeCancelEvent(
            block_id=operation.block_id,
            handle=operation.handle,
        ))
