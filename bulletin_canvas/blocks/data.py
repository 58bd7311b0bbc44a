"""
Typed payloads for each block type.

The block model stores ``data`` as a plain dict so layouts round-trip
losslessly; these models describe what renderers expect inside it.

Each block type has a corresponding payload:
- TextBlockData: rich-ish text (content, font, alignment)
- ImageBlockData / QrBlockData: media
- ServiceItemsBlockData: order of worship for a bulletin issue
- AnnouncementsBlockData / EventsBlockData: filtered feeds
- GivingBlockData / ContactInfoBlockData: church details
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class BlockData(BaseModel):
    """Base payload (no fields)."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra='ignore',
    )


class TextBlockData(BlockData):
    content: str = Field(default='')
    font_size: Optional[float] = Field(default=None, alias='fontSize')
    font_weight: Optional[Literal['normal', 'bold', 'semibold']] = Field(default=None, alias='fontWeight')
    text_align: Optional[Literal['left', 'center', 'right']] = Field(default=None, alias='textAlign')
    color: Optional[str] = Field(default=None)


class ImageBlockData(BlockData):
    image_url: str = Field(default='', alias='imageUrl')
    alt: Optional[str] = Field(default=None)
    object_fit: Optional[Literal['contain', 'cover', 'fill']] = Field(default=None, alias='objectFit')


class QrBlockData(BlockData):
    url: str = Field(default='')
    label: Optional[str] = Field(default=None)


class ServiceItemsBlockData(BlockData):
    bulletin_issue_id: str = Field(default='', alias='bulletinIssueId')
    max_items: Optional[int] = Field(default=None, alias='maxItems')
    show_ccli: Optional[bool] = Field(default=None, alias='showCcli')


class AnnouncementsBlockData(BlockData):
    max_items: Optional[int] = Field(default=None, alias='maxItems')
    category: Optional[str] = Field(default=None)
    priority_filter: Optional[Literal['high', 'normal', 'low']] = Field(default=None, alias='priorityFilter')


class EventsBlockData(BlockData):
    max_items: Optional[int] = Field(default=None, alias='maxItems')
    date_range: Optional[Literal['week', 'month', 'all']] = Field(default=None, alias='dateRange')


class GivingBlockData(BlockData):
    display_type: Optional[Literal['qr', 'text', 'both']] = Field(default=None, alias='displayType')
    giving_url: Optional[str] = Field(default=None, alias='givingUrl')


class ContactInfoBlockData(BlockData):
    show_address: Optional[bool] = Field(default=None, alias='showAddress')
    show_phone: Optional[bool] = Field(default=None, alias='showPhone')
    show_email: Optional[bool] = Field(default=None, alias='showEmail')
    show_website: Optional[bool] = Field(default=None, alias='showWebsite')
