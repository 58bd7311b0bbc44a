"""
Default Layout - Seed a ready-to-edit canvas for bulletins without one.

Produces a four-page, booklet-ready layout on the 816x1056 letter canvas:

Page 1 (front):
- Welcome text header
- Service items (order of worship)
- Giving info footer

Page 2 (back):
- Announcements
- Events
- Contact info

Pages 3-4 are blank for user content. Geometry is fixed; only ids are random.
"""

import logging
from typing import Optional

from bulletin_canvas.blocks import BlockType, CanvasBlock, CanvasPage
from bulletin_canvas.config import settings

from .layout import CanvasLayout

logger = logging.getLogger(__name__)

# Horizontal extents
FULL_WIDTH = 700
NARROW_WIDTH = 350

# Vertical bands (top, height) per page, separated by 32-unit gutters
WELCOME_BAND = (32, 80)
SERVICE_ITEMS_BAND = (144, 600)
GIVING_BAND = (784, 240)
ANNOUNCEMENTS_BAND = (32, 320)
EVENTS_BAND = (384, 320)
CONTACT_INFO_BAND = (736, 288)

PAGE_COUNT = 4


def centered_x(block_width: float, page_width: Optional[float] = None) -> float:
    """x that centers a block horizontally: (page_width - block_width) / 2."""
    page_width = settings.PAGE_WIDTH if page_width is None else page_width
    return (page_width - block_width) / 2


def _band_block(
    block_type: BlockType,
    band: tuple[int, int],
    width: float,
    z_index: int,
    data: dict,
) -> CanvasBlock:
    top, height = band
    return CanvasBlock(
        block_type=block_type,
        x=centered_x(width),
        y=top,
        width=width,
        height=height,
        z_index=z_index,
        data=data,
    )


def _front_page_blocks(church_name: str, giving_url: str, bulletin_issue_id: str) -> list[CanvasBlock]:
    return [
        _band_block(BlockType.TEXT, WELCOME_BAND, FULL_WIDTH, 1, {
            'content': f'Welcome to {church_name}',
            'fontSize': 32,
            'fontWeight': 'bold',
            'textAlign': 'center',
            'color': '#1F2937',
        }),
        _band_block(BlockType.SERVICE_ITEMS, SERVICE_ITEMS_BAND, FULL_WIDTH, 2, {
            'bulletinIssueId': bulletin_issue_id,
            'maxItems': 20,
            'showCcli': False,
        }),
        _band_block(BlockType.GIVING, GIVING_BAND, NARROW_WIDTH, 3, {
            'displayType': 'both',
            'givingUrl': giving_url,
        }),
    ]


def _back_page_blocks() -> list[CanvasBlock]:
    return [
        _band_block(BlockType.ANNOUNCEMENTS, ANNOUNCEMENTS_BAND, FULL_WIDTH, 1, {
            'maxItems': 5,
            'category': None,
            'priorityFilter': None,
        }),
        _band_block(BlockType.EVENTS, EVENTS_BAND, FULL_WIDTH, 2, {
            'maxItems': 5,
            'dateRange': 'month',
        }),
        _band_block(BlockType.CONTACT_INFO, CONTACT_INFO_BAND, NARROW_WIDTH, 3, {
            'showAddress': True,
            'showPhone': True,
            'showEmail': True,
            'showWebsite': True,
        }),
    ]


def create_default_canvas_layout(
    bulletin_issue_id: str,
    church_name: Optional[str] = None,
    giving_url: Optional[str] = None,
) -> CanvasLayout:
    """
    Create the default canvas layout for a bulletin.

    Args:
        bulletin_issue_id: Owning bulletin issue (wired into the service items block)
        church_name: Display name for the welcome header
        giving_url: Link shown by the giving block

    Returns:
        CanvasLayout with pages 1-2 populated and pages 3-4 empty
    """
    church_name = church_name or settings.DEFAULT_CHURCH_NAME
    giving_url = giving_url or settings.DEFAULT_GIVING_URL

    pages = [
        CanvasPage(page_number=1, blocks=_front_page_blocks(church_name, giving_url, bulletin_issue_id)),
        CanvasPage(page_number=2, blocks=_back_page_blocks()),
    ]
    pages.extend(CanvasPage(page_number=n) for n in range(3, PAGE_COUNT + 1))

    logger.debug(f"Synthesized default layout for bulletin {bulletin_issue_id}")
    return CanvasLayout(pages=pages)
