"""
Position measurements for drift diagnostics.

A measurement samples a block three ways:
- model: the block's own x/y/width/height and the anchor point they imply
- presentation: computed style strings (left, top, width, height)
- rendered: the on-screen axis-aligned bounding rect after the transform

The renderer is an external collaborator reached through the BlockRenderer
protocol. CssTransformRenderer reproduces browser compositing for an
absolutely positioned box with ``transform: rotate()`` about its center.
"""

import logging
import math
from typing import Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field

from bulletin_canvas.geometry import BlockGeometry, Rect, ResizeHandle, anchor_point, bounding_rect

logger = logging.getLogger(__name__)


def format_px(value: float) -> str:
    """Format a length the way computed styles report it ("58px", "58.5px")."""
    text = f"{value:.4f}".rstrip('0').rstrip('.')
    if text in ('-0', ''):
        text = '0'
    return f"{text}px"


def format_transform(rotation: float) -> str:
    """Computed ``transform`` value for a rotation ("none" when unrotated)."""
    if rotation == 0:
        return 'none'
    radians = math.radians(rotation)
    a, b = math.cos(radians), math.sin(radians)
    values = [a, b, -b, a, 0.0, 0.0]
    return 'matrix(' + ', '.join(f"{v:.6g}" for v in values) + ')'


class RenderedBox(BaseModel):
    """What a renderer reports for one block element."""

    model_config = ConfigDict(frozen=True)

    css_left: str
    css_top: str
    css_width: str
    css_height: str
    rect: Rect
    transform: str = 'none'
    transform_origin: str = 'center'


class BlockRenderer(Protocol):
    """Renderer seam used by the drift classifier."""

    def measure(self, block_id: str, geometry: BlockGeometry) -> Optional[RenderedBox]:
        """Rendered box for a block shown at ``geometry``, or None if no element exists."""
        ...


class CssTransformRenderer:
    """
    Reference renderer: ``left/top/width/height`` from the model, then
    ``rotate()`` about the center, on a page placed at ``origin`` on screen
    and zoomed by ``scale``.
    """

    def __init__(self, scale: float = 1.0, origin: tuple[float, float] = (0.0, 0.0)):
        self.scale = scale
        self.origin = origin
        self._mounted: set[str] = set()

    def mount(self, block_id: str) -> None:
        self._mounted.add(block_id)

    def unmount(self, block_id: str) -> None:
        self._mounted.discard(block_id)

    def mount_blocks(self, block_ids) -> None:
        self._mounted.update(block_ids)

    def is_mounted(self, block_id: str) -> bool:
        return block_id in self._mounted

    def measure(self, block_id: str, geometry: BlockGeometry) -> Optional[RenderedBox]:
        if block_id not in self._mounted:
            return None
        page_rect = bounding_rect(geometry)
        ox, oy = self.origin
        screen_rect = Rect(
            left=ox + page_rect.left * self.scale,
            top=oy + page_rect.top * self.scale,
            width=page_rect.width * self.scale,
            height=page_rect.height * self.scale,
        )
        return RenderedBox(
            css_left=format_px(geometry.x),
            css_top=format_px(geometry.y),
            css_width=format_px(geometry.width),
            css_height=format_px(geometry.height),
            rect=screen_rect,
            transform=format_transform(geometry.rotation),
            transform_origin='center',
        )


class PositionMeasurement(BaseModel):
    """One sample of a block's position in model, presentation and rendered space."""

    # Allow model_* field names
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    # Model values
    model_x: float = Field(default=0.0, alias='modelX')
    model_y: float = Field(default=0.0, alias='modelY')
    model_width: float = Field(default=0.0, alias='modelWidth')
    model_height: float = Field(default=0.0, alias='modelHeight')
    # Anchor point implied by the model (rotation about center)
    anchor_x: float = Field(default=0.0, alias='anchorX')
    anchor_y: float = Field(default=0.0, alias='anchorY')

    # Computed style strings
    css_left: str = Field(default='0px', alias='cssLeft')
    css_top: str = Field(default='0px', alias='cssTop')
    css_width: str = Field(default='0px', alias='cssWidth')
    css_height: str = Field(default='0px', alias='cssHeight')

    # Rendered bounding rect (screen space)
    dom_left: float = Field(default=0.0, alias='domLeft')
    dom_top: float = Field(default=0.0, alias='domTop')
    dom_width: float = Field(default=0.0, alias='domWidth')
    dom_height: float = Field(default=0.0, alias='domHeight')

    transform: str = Field(default='none')
    transform_origin: str = Field(default='center', alias='transformOrigin')

    # False when the renderer had no element and the presentation/rendered parts are zeroed
    found: bool = Field(default=True)

    @property
    def dom_rect(self) -> Rect:
        return Rect(left=self.dom_left, top=self.dom_top, width=self.dom_width, height=self.dom_height)

    @classmethod
    def placeholder(cls, geometry: BlockGeometry, handle: ResizeHandle) -> 'PositionMeasurement':
        """Zeroed measurement keeping only the model values."""
        ax, ay = anchor_point(geometry, handle)
        return cls(
            model_x=geometry.x,
            model_y=geometry.y,
            model_width=geometry.width,
            model_height=geometry.height,
            anchor_x=ax,
            anchor_y=ay,
            found=False,
        )


def measure_block(
    renderer: BlockRenderer,
    block_id: str,
    geometry: BlockGeometry,
    handle: ResizeHandle,
) -> PositionMeasurement:
    """
    Sample a block through the renderer.

    Never raises: when the renderer has no element for the block a warning is
    logged and a placeholder measurement is returned.
    """
    rendered = renderer.measure(block_id, geometry)
    if rendered is None:
        logger.warning(f"Could not find rendered element for block {block_id}")
        return PositionMeasurement.placeholder(geometry, handle)

    ax, ay = anchor_point(geometry, handle)
    return PositionMeasurement(
        model_x=geometry.x,
        model_y=geometry.y,
        model_width=geometry.width,
        model_height=geometry.height,
        anchor_x=ax,
        anchor_y=ay,
        css_left=rendered.css_left,
        css_top=rendered.css_top,
        css_width=rendered.css_width,
        css_height=rendered.css_height,
        dom_left=rendered.rect.left,
        dom_top=rendered.rect.top,
        dom_width=rendered.rect.width,
        dom_height=rendered.rect.height,
        transform=rendered.transform,
        transform_origin=rendered.transform_origin,
    )
