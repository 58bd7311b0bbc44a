"""
Canvas block models.

Pydantic models for the blocks placed on bulletin pages, matching the
layout JSON persisted by the bulletin service.

Block payloads are keyed by block type:
    text          -> TextBlockData
    image         -> ImageBlockData
    qr            -> QrBlockData
    serviceItems  -> ServiceItemsBlockData
    announcements -> AnnouncementsBlockData
    events        -> EventsBlockData
    giving        -> GivingBlockData
    contactInfo   -> ContactInfoBlockData
"""

from typing import Union

from .base import BlockType, CanvasBlock, sorted_by_paint_order
from .data import (
    AnnouncementsBlockData,
    BlockData,
    ContactInfoBlockData,
    EventsBlockData,
    GivingBlockData,
    ImageBlockData,
    QrBlockData,
    ServiceItemsBlockData,
    TextBlockData,
)
from .page import CanvasPage

# Payload registry for typed access to block data
_DATA_REGISTRY: dict[str, type[BlockData]] = {
    BlockType.TEXT.value: TextBlockData,
    BlockType.IMAGE.value: ImageBlockData,
    BlockType.QR.value: QrBlockData,
    BlockType.SERVICE_ITEMS.value: ServiceItemsBlockData,
    BlockType.ANNOUNCEMENTS.value: AnnouncementsBlockData,
    BlockType.EVENTS.value: EventsBlockData,
    BlockType.GIVING.value: GivingBlockData,
    BlockType.CONTACT_INFO.value: ContactInfoBlockData,
}


def get_block_data_class(block_type: Union[BlockType, str]) -> type[BlockData]:
    """
    Get the payload model for a block type.

    Args:
        block_type: Block type ('text', 'serviceItems', ...)

    Returns:
        Payload model class (BlockData for unknown types)
    """
    key = block_type.value if isinstance(block_type, BlockType) else block_type
    return _DATA_REGISTRY.get(key, BlockData)


def block_from_dict(data: dict) -> CanvasBlock:
    """Create a block from a serialized dictionary."""
    return CanvasBlock.from_api_dict(data)


__all__ = [
    # Blocks
    'BlockType',
    'CanvasBlock',
    'CanvasPage',
    'sorted_by_paint_order',
    # Payloads
    'BlockData',
    'TextBlockData',
    'ImageBlockData',
    'QrBlockData',
    'ServiceItemsBlockData',
    'AnnouncementsBlockData',
    'EventsBlockData',
    'GivingBlockData',
    'ContactInfoBlockData',
    # Utilities
    'get_block_data_class',
    'block_from_dict',
]
