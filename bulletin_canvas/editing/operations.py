"""Block editing operations on a layout.

These mirror the editor's toolbar actions: add, update, delete, duplicate,
reorder and drag-move. All of them mutate the given layout in place and
return the affected block.
"""

import uuid
from typing import Any, Optional

from bulletin_canvas.blocks import CanvasBlock, CanvasPage
from bulletin_canvas.config import settings
from bulletin_canvas.errors import BlockNotFoundError
from bulletin_canvas.formats import CanvasLayout
from bulletin_canvas.geometry import constrain_to_page, snap_to_grid


def _locate(layout: CanvasLayout, block_id: str) -> tuple[CanvasPage, int, CanvasBlock]:
    found = layout.find_block(block_id)
    if found is None:
        raise BlockNotFoundError(block_id)
    page, block = found
    return page, page.index_of(block_id), block


def _replace(layout: CanvasLayout, block_id: str, **changes: Any) -> CanvasBlock:
    page, index, block = _locate(layout, block_id)
    data = block.model_dump()
    data.update(changes)
    # Re-validate so width/height/rotation rules still hold
    updated = CanvasBlock.model_validate(data)
    page.blocks[index] = updated
    return updated


def add_block(layout: CanvasLayout, page_number: int, block: CanvasBlock) -> CanvasBlock:
    """
    Append a block to a page on top of its existing blocks.

    Raises:
        KeyError: If the page does not exist
        ValueError: If the page already has a block with this id
    """
    page = layout.get_page(page_number)
    if page is None:
        raise KeyError(f"Page {page_number} not found")
    if page.get_block(block.id) is not None:
        raise ValueError(f"Block {block.id} already on page {page_number}")
    placed = block.model_copy(update={'z_index': page.max_z_index() + 1})
    page.blocks.append(placed)
    return placed


def update_block(layout: CanvasLayout, block_id: str, **changes: Any) -> CanvasBlock:
    """Apply field changes (snake_case names) to a block."""
    changes.pop('id', None)
    return _replace(layout, block_id, **changes)


def delete_block(layout: CanvasLayout, block_id: str) -> CanvasBlock:
    page, index, block = _locate(layout, block_id)
    del page.blocks[index]
    return block


def duplicate_block(layout: CanvasLayout, block_id: str, offset: Optional[float] = None) -> CanvasBlock:
    """Copy a block onto the same page, shifted by ``offset`` and painted on top."""
    offset = settings.GRID_SIZE if offset is None else offset
    page, _, block = _locate(layout, block_id)
    copy = block.model_copy(update={
        'id': str(uuid.uuid4()),
        'x': block.x + offset,
        'y': block.y + offset,
        'z_index': page.max_z_index() + 1,
        'data': dict(block.data),
    })
    page.blocks.append(copy)
    return copy


def bring_to_front(layout: CanvasLayout, block_id: str) -> CanvasBlock:
    """Paint the block above every other block in the layout."""
    top = max([0, *(block.z_index for _, block in layout.iter_blocks())])
    return _replace(layout, block_id, z_index=top + 1)


def send_to_back(layout: CanvasLayout, block_id: str) -> CanvasBlock:
    """Paint the block below every other block in the layout."""
    bottom = min([0, *(block.z_index for _, block in layout.iter_blocks())])
    return _replace(layout, block_id, z_index=bottom - 1)


def move_block(
    layout: CanvasLayout,
    block_id: str,
    dx: float,
    dy: float,
    *,
    grid_size: Optional[float] = None,
    page_size: Optional[tuple[float, float]] = None,
) -> CanvasBlock:
    """
    Drag a block by (dx, dy), snapping the new position and keeping it on the page.

    Args:
        layout: Layout containing the block
        block_id: Block to move
        dx: Horizontal displacement in page units
        dy: Vertical displacement in page units
        grid_size: Snap x/y to this grid (None disables snapping)
        page_size: (width, height) of the page, defaults to the configured canvas
    """
    _, _, block = _locate(layout, block_id)
    geometry = block.geometry.model_copy(update={
        'x': snap_to_grid(block.x + dx, grid_size),
        'y': snap_to_grid(block.y + dy, grid_size),
    })
    page_width, page_height = page_size or (settings.PAGE_WIDTH, settings.PAGE_HEIGHT)
    geometry = constrain_to_page(geometry, page_width, page_height)
    return _replace(layout, block_id, x=geometry.x, y=geometry.y)
