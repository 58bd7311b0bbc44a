"""In-memory bulletin layout store.

Holds each bulletin's status and its saved canvas layout. Saves replace the
whole layout (last write wins); locked bulletins reject saves.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from .errors import BulletinLockedError, BulletinNotFoundError
from .formats import CanvasLayout

logger = logging.getLogger(__name__)


class BulletinStatus(str, Enum):
    DRAFT = "draft"
    APPROVED = "approved"
    BUILT = "built"
    LOCKED = "locked"


@dataclass
class BulletinRecord:
    """Stored state of one bulletin."""

    id: str
    status: BulletinStatus = BulletinStatus.DRAFT
    layout: Optional[CanvasLayout] = None
    use_canvas_layout: bool = False
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def is_locked(self) -> bool:
        return self.status == BulletinStatus.LOCKED


class LayoutStore:
    """Thread-safe registry of bulletins and their canvas layouts."""

    def __init__(self):
        self._records: dict[str, BulletinRecord] = {}
        self._lock = threading.Lock()

    def _require(self, bulletin_id: str) -> BulletinRecord:
        record = self._records.get(bulletin_id)
        if record is None:
            raise BulletinNotFoundError(f"Bulletin '{bulletin_id}' not found")
        return record

    def register(
        self,
        bulletin_id: str,
        status: Union[BulletinStatus, str] = BulletinStatus.DRAFT,
    ) -> BulletinRecord:
        """Register a bulletin, or update the status of an existing one."""
        status = BulletinStatus(status)
        with self._lock:
            record = self._records.get(bulletin_id)
            if record is None:
                record = BulletinRecord(id=bulletin_id, status=status)
                self._records[bulletin_id] = record
                logger.info(f"Registered bulletin {bulletin_id} ({status.value})")
            else:
                record.status = status
                record.updated_at = datetime.now()
            return record

    def has(self, bulletin_id: str) -> bool:
        with self._lock:
            return bulletin_id in self._records

    def get_status(self, bulletin_id: str) -> BulletinStatus:
        with self._lock:
            return self._require(bulletin_id).status

    def set_status(self, bulletin_id: str, status: Union[BulletinStatus, str]) -> None:
        status = BulletinStatus(status)
        with self._lock:
            record = self._require(bulletin_id)
            record.status = status
            record.updated_at = datetime.now()
        logger.info(f"Bulletin {bulletin_id} is now {status.value}")

    def lock(self, bulletin_id: str) -> None:
        self.set_status(bulletin_id, BulletinStatus.LOCKED)

    def get_layout(self, bulletin_id: str) -> Optional[CanvasLayout]:
        """Saved layout, or None when the bulletin never saved one."""
        with self._lock:
            layout = self._require(bulletin_id).layout
            return layout.model_copy(deep=True) if layout is not None else None

    def uses_canvas_layout(self, bulletin_id: str) -> bool:
        with self._lock:
            return self._require(bulletin_id).use_canvas_layout

    def save_layout(
        self,
        bulletin_id: str,
        layout: CanvasLayout,
        use_canvas_layout: bool = True,
    ) -> None:
        """
        Replace the bulletin's layout.

        Raises:
            BulletinNotFoundError: If the bulletin is not registered
            BulletinLockedError: If the bulletin is locked
        """
        with self._lock:
            record = self._require(bulletin_id)
            if record.is_locked:
                raise BulletinLockedError(f"Cannot update locked bulletin '{bulletin_id}'")
            record.layout = layout.model_copy(deep=True)
            record.use_canvas_layout = use_canvas_layout
            record.updated_at = datetime.now()
        logger.info(
            f"Saved canvas layout for bulletin {bulletin_id}: "
            f"{len(layout.pages)} pages, {layout.block_count()} blocks"
        )

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


# Global instance
layout_store = LayoutStore()
