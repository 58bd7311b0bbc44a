"""Canvas layout API endpoints.

Bulletin-scoped operations use the URL pattern:
/bulletins/{bulletin_id}/canvas-layout[/...]

The stateless resize preview lives under /canvas/resize so an editor can ask
the server for the same geometry it computes locally.
"""

import logging
import uuid
from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from bulletin_canvas import __version__
from bulletin_canvas.errors import (
    BulletinLockedError,
    BulletinNotFoundError,
    InvalidHandleError,
)
from bulletin_canvas.formats import CanvasLayout, create_default_canvas_layout
from bulletin_canvas.geometry import BlockGeometry, resize_geometry
from bulletin_canvas.store import BulletinStatus, layout_store

logger = logging.getLogger(__name__)

api_router = APIRouter()


# --- Request Models ---


class BulletinCreateRequest(BaseModel):
    """Request body for registering a bulletin."""
    id: Optional[str] = None
    status: BulletinStatus = BulletinStatus.DRAFT


class CanvasLayoutSaveRequest(BaseModel):
    """Request body for saving a canvas layout."""
    model_config = ConfigDict(populate_by_name=True)

    canvas_layout: dict[str, Any] = Field(alias='canvasLayout')
    use_canvas_layout: bool = Field(default=True, alias='useCanvasLayout')


class DefaultLayoutRequest(BaseModel):
    """Request body for synthesizing a default layout."""
    model_config = ConfigDict(populate_by_name=True)

    church_name: Optional[str] = Field(default=None, alias='churchName')
    giving_url: Optional[str] = Field(default=None, alias='givingUrl')


class ResizeRequest(BaseModel):
    """Request body for a resize preview."""
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    geometry: BlockGeometry
    handle: str
    dx: float = 0.0
    dy: float = 0.0
    min_width: Optional[float] = Field(default=None, alias='minWidth', gt=0)
    min_height: Optional[float] = Field(default=None, alias='minHeight', gt=0)
    grid_size: Optional[float] = Field(default=None, alias='gridSize', ge=0)


# --- Helper Functions ---


def _require_bulletin(bulletin_id: str) -> None:
    if not layout_store.has(bulletin_id):
        raise HTTPException(status_code=404, detail="Bulletin not found")


# --- Endpoints ---


@api_router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@api_router.post("/bulletins")
async def create_bulletin(request: BulletinCreateRequest):
    """Register a bulletin (generates an id when none is given)."""
    bulletin_id = request.id or str(uuid.uuid4())
    record = layout_store.register(bulletin_id, request.status)
    return {"id": record.id, "status": record.status.value}


@api_router.post("/bulletins/{bulletin_id}/lock")
async def lock_bulletin(bulletin_id: str):
    """Lock a bulletin against further layout changes."""
    try:
        layout_store.lock(bulletin_id)
    except BulletinNotFoundError:
        raise HTTPException(status_code=404, detail="Bulletin not found")
    return {"success": True, "status": BulletinStatus.LOCKED.value}


@api_router.get("/bulletins/{bulletin_id}/canvas-layout")
async def get_canvas_layout(bulletin_id: str):
    """Get the saved layout, or a freshly synthesized default when none was saved.

    The default is not persisted; saving it is the editor's decision.
    """
    _require_bulletin(bulletin_id)
    layout = layout_store.get_layout(bulletin_id)
    if layout is None:
        layout = create_default_canvas_layout(bulletin_id)
        return {"layout": layout.to_api_dict(), "isDefault": True}
    return {"layout": layout.to_api_dict(), "isDefault": False}


@api_router.put("/bulletins/{bulletin_id}/canvas-layout")
async def save_canvas_layout(bulletin_id: str, request: CanvasLayoutSaveRequest):
    """Replace the bulletin's canvas layout."""
    _require_bulletin(bulletin_id)
    if layout_store.get_status(bulletin_id) == BulletinStatus.LOCKED:
        raise HTTPException(status_code=403, detail="Cannot update locked bulletin")

    try:
        layout = CanvasLayout.from_api_dict(request.canvas_layout)
    except ValidationError as e:
        logger.warning(f"Rejected canvas layout for bulletin {bulletin_id}: {e.error_count()} errors")
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False, include_input=False),
        )

    try:
        layout_store.save_layout(bulletin_id, layout, request.use_canvas_layout)
    except BulletinNotFoundError:
        raise HTTPException(status_code=404, detail="Bulletin not found")
    except BulletinLockedError:
        # Locked between the status check and the save
        raise HTTPException(status_code=403, detail="Cannot update locked bulletin")
    return {"success": True}


@api_router.post("/bulletins/{bulletin_id}/canvas-layout/default")
async def create_default_layout(bulletin_id: str, request: DefaultLayoutRequest):
    """Synthesize the default layout for a bulletin without saving it."""
    _require_bulletin(bulletin_id)
    layout = create_default_canvas_layout(
        bulletin_id,
        church_name=request.church_name,
        giving_url=request.giving_url,
    )
    return {"layout": layout.to_api_dict()}


@api_router.post("/canvas/resize")
async def resize_preview(request: ResizeRequest):
    """Compute the anchor-invariant geometry for a handle drag."""
    try:
        result = resize_geometry(
            request.geometry,
            request.handle,
            request.dx,
            request.dy,
            min_width=request.min_width,
            min_height=request.min_height,
            grid_size=request.grid_size,
        )
    except InvalidHandleError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return result.to_dict()
