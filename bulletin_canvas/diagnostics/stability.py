"""Page-relative position stability checks.

Used when the editor viewport changes (window resize, zoom): blocks may move
on screen with their page, but their offset from the page must not change.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from bulletin_canvas.geometry import Rect

from .measurement import BlockRenderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PagePosition:
    """Rendered block position relative to its page."""

    block_id: str
    rect: Rect
    page_rect: Rect

    @property
    def offset(self) -> tuple[float, float]:
        return self.rect.left - self.page_rect.left, self.rect.top - self.page_rect.top


def collect_page_positions(
    renderer: BlockRenderer,
    blocks: Iterable,
    page_rect: Rect,
) -> list[PagePosition]:
    """
    Measure blocks through a renderer, skipping ones without an element.

    Args:
        renderer: Renderer to sample
        blocks: CanvasBlock instances on the page
        page_rect: Screen rect of the page element
    """
    positions = []
    for block in blocks:
        rendered = renderer.measure(block.id, block.geometry)
        if rendered is None:
            logger.warning(f"Could not find rendered element for block {block.id}")
            continue
        positions.append(PagePosition(block_id=block.id, rect=rendered.rect, page_rect=page_rect))
    return positions


class PositionStabilityTracker:
    """Remembers page-relative offsets between checks and flags changes."""

    def __init__(self, tolerance: float = 1.0):
        self.tolerance = tolerance
        self._last_offsets: dict[str, tuple[float, float]] = {}

    def last_offset(self, block_id: str) -> Optional[tuple[float, float]]:
        return self._last_offsets.get(block_id)

    def check(self, positions: Iterable[PagePosition]) -> bool:
        """
        Compare offsets with the previous check.

        Blocks seen for the first time only record their offset.

        Returns:
            True when no block moved relative to its page by more than the tolerance
        """
        stable = True
        for position in positions:
            offset = position.offset
            last = self._last_offsets.get(position.block_id)
            if last is not None:
                drift_x = abs(offset[0] - last[0])
                drift_y = abs(offset[1] - last[1])
                if drift_x > self.tolerance or drift_y > self.tolerance:
                    logger.error(
                        f"Block {position.block_id} moved relative to its page: "
                        f"({last[0]:.0f}, {last[1]:.0f}) -> ({offset[0]:.0f}, {offset[1]:.0f})"
                    )
                    stable = False
            self._last_offsets[position.block_id] = offset

        if stable and self._last_offsets:
            logger.debug("Block positions stable relative to page")
        return stable

    def reset(self) -> None:
        self._last_offsets.clear()
