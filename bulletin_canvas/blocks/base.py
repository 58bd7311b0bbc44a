"""
CanvasBlock - Pydantic model for a positioned block on a bulletin page.

Provides:
- Identity: id, type
- Geometry: x, y, width, height, rotation
- Paint order: zIndex
- Payload: data (type-specific, opaque to the geometry core)

Uses Pydantic v2 with camelCase aliases matching the persisted layout JSON.
"""

from enum import Enum
from typing import Any, Iterable
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bulletin_canvas.geometry.types import BlockGeometry, normalize_rotation


class BlockType(str, Enum):
    """Block type identifiers matching the editor's block palette."""
    TEXT = "text"
    SERVICE_ITEMS = "serviceItems"
    GIVING = "giving"
    ANNOUNCEMENTS = "announcements"
    EVENTS = "events"
    CONTACT_INFO = "contactInfo"
    QR = "qr"
    IMAGE = "image"


class CanvasBlock(BaseModel):
    """
    A positioned rectangle on a page.

    Serializes to:
    {
        "id": "uuid",
        "type": "text",
        "x": 58.0,
        "y": 32.0,
        "width": 700.0,
        "height": 80.0,
        "rotation": 0.0,
        "zIndex": 1,
        "data": {"content": "Welcome", ...}
    }
    """

    model_config = ConfigDict(
        # Allow both snake_case and camelCase input
        populate_by_name=True,
        # Don't validate on assignment; edits go through with_geometry()
        validate_assignment=False,
        # Allow extra fields for forward compatibility
        extra='ignore',
        # Serialize enums by value ("text" not "BlockType.TEXT")
        use_enum_values=True,
        # Reject NaN and Infinity in numeric fields
        allow_inf_nan=False,
    )

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    block_type: BlockType = Field(alias='type')

    # Top-left corner before rotation, page-local
    x: float = Field(default=0.0)
    y: float = Field(default=0.0)
    width: float = Field(gt=0)
    height: float = Field(gt=0)

    # Degrees clockwise about the block center
    rotation: float = Field(default=0.0)

    z_index: int = Field(default=0, alias='zIndex')
    data: dict[str, Any] = Field(default_factory=dict)

    @field_validator('rotation', mode='before')
    @classmethod
    def _normalize_rotation(cls, value: Any) -> float:
        if value is None:
            return 0.0
        return normalize_rotation(value)

    @property
    def geometry(self) -> BlockGeometry:
        """Positional part of the block."""
        return BlockGeometry(
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
            rotation=self.rotation,
        )

    def with_geometry(self, geometry: BlockGeometry) -> 'CanvasBlock':
        """Copy of this block placed at ``geometry``."""
        return self.model_copy(update={
            'x': geometry.x,
            'y': geometry.y,
            'width': geometry.width,
            'height': geometry.height,
            'rotation': geometry.rotation,
        })

    def typed_data(self) -> BaseModel:
        """Payload validated against the model registered for this block type."""
        from bulletin_canvas.blocks import get_block_data_class

        return get_block_data_class(self.block_type).model_validate(self.data)

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to the persisted JSON shape (camelCase keys)."""
        return self.model_dump(by_alias=True, mode='json')

    @classmethod
    def from_api_dict(cls, data: dict[str, Any]) -> 'CanvasBlock':
        """Create a block from camelCase or snake_case keys."""
        return cls.model_validate(data)

    def __repr__(self) -> str:
        return (
            f"<CanvasBlock: {self.block_type} at ({self.x}, {self.y}) "
            f"size {self.width}x{self.height} rot {self.rotation}>"
        )


def sorted_by_paint_order(blocks: Iterable[CanvasBlock]) -> list[CanvasBlock]:
    """Blocks in paint order: ascending zIndex, ties kept in insertion order."""
    # sorted() is stable, so equal zIndex keeps list order
    return sorted(blocks, key=lambda block: block.z_index)
