"""
CanvasPage - Pydantic model for one bulletin page.

Serialization format:
{
    "id": "uuid",
    "pageNumber": 1,
    "blocks": [...]
}
"""

import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .base import CanvasBlock


class CanvasPage(BaseModel):
    """A page with its blocks. Block ids are unique within the page."""

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=False,
        extra='ignore',
    )

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    page_number: int = Field(default=1, ge=1, alias='pageNumber')
    blocks: list[CanvasBlock] = Field(default_factory=list)

    @model_validator(mode='after')
    def _check_unique_block_ids(self) -> 'CanvasPage':
        seen = set()
        for block in self.blocks:
            if block.id in seen:
                raise ValueError(f"Duplicate block id {block.id!r} on page {self.page_number}")
            seen.add(block.id)
        return self

    def get_block(self, block_id: str) -> Optional[CanvasBlock]:
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None

    def index_of(self, block_id: str) -> int:
        """Index of a block in this page, -1 if absent."""
        for i, block in enumerate(self.blocks):
            if block.id == block_id:
                return i
        return -1

    def max_z_index(self) -> int:
        return max([0, *(block.z_index for block in self.blocks)])
