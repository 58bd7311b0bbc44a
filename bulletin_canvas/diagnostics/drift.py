"""
Drift classifier - instruments resize operations and classifies anchor drift.

During a resize the anchor (the point opposite the dragged handle) must not
move on screen. The classifier samples the block at resize start and on
every move, then compares three measurements:

- Model drift: the anchor point implied by the model fields moved. At
  rotation 0 with the ``se`` handle this is exactly "x or y changed". Under
  rotation x/y legitimately shift; only the implied anchor counts.
- Presentation drift: a computed style string the handle pins changed.
  ``left`` is pinned unless the handle is on the left side, ``top`` unless
  it is on the top side; checked only at rotation 0, where left/top map
  straight to the anchor.
- Rendered-rect change: the bounding-rect point matching the anchor moved
  more than a pixel. Rotation changes the axis-aligned rect even when the
  anchor math is right, so this alone is informational.

Only model or presentation drift is real drift. Detections are advisory:
they are logged and reported through callbacks, never raised.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from bulletin_canvas.config import settings
from bulletin_canvas.editing.events import (
    ResizeCancelEvent,
    ResizeEndEvent,
    ResizeListener,
    ResizeMoveEvent,
    ResizeStartEvent,
)
from bulletin_canvas.geometry import ResizeHandle

from .measurement import BlockRenderer, PositionMeasurement, measure_block

logger = logging.getLogger(__name__)


class DriftCase(str, Enum):
    """Most severe finding of a classification."""
    NONE = "none"
    MODEL = "model"
    PRESENTATION = "presentation"
    RECT_ONLY = "rect_only"


def pinned_presentation_fields(handle: ResizeHandle, rotation: float) -> tuple[str, ...]:
    """
    Computed style fields that must keep their exact value while dragging ``handle``.

    Args:
        handle: Dragged handle
        rotation: Block rotation in degrees

    Returns:
        Subset of ("left", "top"); empty for rotated blocks
    """
    if rotation != 0:
        return ()
    handle = ResizeHandle.parse(handle)
    fields = []
    if handle.x_sign >= 0:
        fields.append('left')
    if handle.y_sign >= 0:
        fields.append('top')
    return tuple(fields)


@dataclass(frozen=True)
class DriftVerdict:
    """Classification of one sample against the start sample."""

    model_delta: tuple[float, float]
    position_delta: tuple[float, float]
    presentation_changed: dict[str, bool]
    rect_delta: tuple[float, float]
    model_drift: bool
    presentation_drift: bool
    bounding_rect_changed: bool

    @property
    def has_real_drift(self) -> bool:
        # Rect movement alone is never a defect
        return self.model_drift or self.presentation_drift

    @property
    def drift_case(self) -> DriftCase:
        if self.model_drift:
            return DriftCase.MODEL
        if self.presentation_drift:
            return DriftCase.PRESENTATION
        if self.bounding_rect_changed:
            return DriftCase.RECT_ONLY
        return DriftCase.NONE


def classify_drift(
    start: PositionMeasurement,
    current: PositionMeasurement,
    handle: ResizeHandle,
    rotation: float,
    *,
    model_tolerance: Optional[float] = None,
    rect_tolerance: Optional[float] = None,
) -> DriftVerdict:
    """Classify the difference between two measurements of the same resize."""
    handle = ResizeHandle.parse(handle)
    model_tolerance = settings.MODEL_DRIFT_TOLERANCE if model_tolerance is None else model_tolerance
    rect_tolerance = settings.RECT_DRIFT_TOLERANCE if rect_tolerance is None else rect_tolerance

    model_delta = (current.anchor_x - start.anchor_x, current.anchor_y - start.anchor_y)
    position_delta = (current.model_x - start.model_x, current.model_y - start.model_y)
    model_drift = abs(model_delta[0]) > model_tolerance or abs(model_delta[1]) > model_tolerance

    presentation_changed = {
        'left': current.css_left != start.css_left,
        'top': current.css_top != start.css_top,
    }
    # Placeholder samples carry no presentation values to compare
    comparable = start.found and current.found
    presentation_drift = comparable and any(
        presentation_changed[name] for name in pinned_presentation_fields(handle, rotation)
    )

    ax, ay = handle.anchor.fraction
    start_x, start_y = start.dom_rect.point_at(ax, ay)
    current_x, current_y = current.dom_rect.point_at(ax, ay)
    rect_delta = (current_x - start_x, current_y - start_y)
    bounding_rect_changed = comparable and (
        abs(rect_delta[0]) > rect_tolerance or abs(rect_delta[1]) > rect_tolerance
    )

    return DriftVerdict(
        model_delta=model_delta,
        position_delta=position_delta,
        presentation_changed=presentation_changed,
        rect_delta=rect_delta,
        model_drift=model_drift,
        presentation_drift=presentation_drift,
        bounding_rect_changed=bounding_rect_changed,
    )


class DriftReport(BaseModel):
    """
    Verdict for one resize operation.

    Flags are sticky over the operation (any sample with drift sets them);
    deltas and the current measurement reflect the latest sample.
    """

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    block_id: str = Field(alias='blockId')
    block_type: str = Field(default='unknown', alias='blockType')
    handle: str
    rotation: float = 0.0

    start: PositionMeasurement
    current: PositionMeasurement

    model_delta: tuple[float, float] = Field(default=(0.0, 0.0), alias='modelDelta')
    position_delta: tuple[float, float] = Field(default=(0.0, 0.0), alias='positionDelta')
    presentation_changed: dict[str, bool] = Field(
        default_factory=lambda: {'left': False, 'top': False}, alias='presentationChanged'
    )
    rect_delta: tuple[float, float] = Field(default=(0.0, 0.0), alias='rectDelta')

    model_drift: bool = Field(default=False, alias='modelDrift')
    presentation_drift: bool = Field(default=False, alias='presentationDrift')
    bounding_rect_changed: bool = Field(default=False, alias='boundingRectChanged')
    has_real_drift: bool = Field(default=False, alias='hasRealDrift')
    clamped: bool = Field(default=False)
    drift_case: DriftCase = Field(default=DriftCase.NONE, alias='driftCase')
    sample_count: int = Field(default=0, alias='sampleCount')

    def to_api_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode='json')


class DriftTestResult(BaseModel):
    """Pass/fail entry for one completed resize."""

    model_config = ConfigDict(populate_by_name=True)

    timestamp: str
    block_type: str = Field(alias='blockType')
    rotation: float = 0.0
    handle: str
    drift_detected: bool = Field(alias='driftDetected')
    drift_type: Optional[str] = Field(default=None, alias='driftType')
    drift_amount: Optional[dict[str, float]] = Field(default=None, alias='driftAmount')

    @property
    def passed(self) -> bool:
        return not self.drift_detected

    @classmethod
    def from_report(cls, report: DriftReport) -> 'DriftTestResult':
        drift_type = None
        drift_amount = None
        if report.has_real_drift:
            if report.model_drift:
                drift_type = 'model'
                dx, dy = report.model_delta
            else:
                drift_type = 'presentation'
                dx, dy = report.position_delta
            drift_amount = {'x': dx, 'y': dy}
        return cls(
            timestamp=datetime.now(timezone.utc).isoformat(),
            block_type=report.block_type,
            rotation=report.rotation,
            handle=report.handle,
            drift_detected=report.has_real_drift,
            drift_type=drift_type,
            drift_amount=drift_amount,
        )


@dataclass
class _Snapshot:
    report: DriftReport
    handle: ResizeHandle


class DriftClassifier(ResizeListener):
    """Resize listener that measures and classifies anchor drift."""

    def __init__(
        self,
        renderer: BlockRenderer,
        *,
        on_drift_detected: Optional[Callable[[DriftReport], None]] = None,
        on_report: Optional[Callable[[DriftReport], None]] = None,
        history_limit: Optional[int] = None,
        model_tolerance: Optional[float] = None,
        rect_tolerance: Optional[float] = None,
    ):
        """
        Args:
            renderer: Source of presentation and rendered measurements
            on_drift_detected: Called for every move sample with real drift
            on_report: Called with the final report when a resize ends
            history_limit: Number of entries kept in ``history`` and ``results``
            model_tolerance: Anchor movement (page units) tolerated as rounding
            rect_tolerance: Bounding-rect movement (screen px) tolerated as rounding
        """
        self.renderer = renderer
        self.on_drift_detected = on_drift_detected
        self.on_report = on_report
        self.history_limit = settings.HISTORY_LIMIT if history_limit is None else history_limit
        self.model_tolerance = model_tolerance
        self.rect_tolerance = rect_tolerance
        self.history: list[DriftReport] = []
        self.results: list[DriftTestResult] = []
        self._snapshot: Optional[_Snapshot] = None

    @property
    def is_resizing(self) -> bool:
        return self._snapshot is not None

    @property
    def current_report(self) -> Optional[DriftReport]:
        return self._snapshot.report if self._snapshot else None

    def reset(self) -> None:
        """Forget history, results and any in-progress snapshot."""
        self.history.clear()
        self.results.clear()
        self._snapshot = None

    # --- ResizeListener hooks ---

    def on_resize_start(self, event: ResizeStartEvent) -> None:
        start = measure_block(self.renderer, event.block_id, event.geometry, event.handle)
        self._snapshot = _Snapshot(
            report=DriftReport(
                block_id=event.block_id,
                block_type=event.block_type,
                handle=event.handle.value,
                rotation=event.geometry.rotation,
                start=start,
                current=start,
            ),
            handle=event.handle,
        )
        logger.debug(
            f"Monitoring resize of {event.block_type} block {event.block_id} "
            f"from {event.handle.value} at {event.geometry.rotation} deg"
        )

    def on_resize_move(self, event: ResizeMoveEvent) -> None:
        snapshot = self._snapshot
        if snapshot is None or snapshot.report.block_id != event.block_id:
            return
        previous = snapshot.report
        current = measure_block(self.renderer, event.block_id, event.geometry, snapshot.handle)
        verdict = classify_drift(
            previous.start,
            current,
            snapshot.handle,
            previous.rotation,
            model_tolerance=self.model_tolerance,
            rect_tolerance=self.rect_tolerance,
        )

        model_drift = previous.model_drift or verdict.model_drift
        presentation_drift = previous.presentation_drift or verdict.presentation_drift
        rect_changed = previous.bounding_rect_changed or verdict.bounding_rect_changed
        report = previous.model_copy(update={
            'current': current,
            'model_delta': verdict.model_delta,
            'position_delta': verdict.position_delta,
            'presentation_changed': verdict.presentation_changed,
            'rect_delta': verdict.rect_delta,
            'model_drift': model_drift,
            'presentation_drift': presentation_drift,
            'bounding_rect_changed': rect_changed,
            'has_real_drift': model_drift or presentation_drift,
            'clamped': previous.clamped or event.clamped,
            'drift_case': _worst_case(previous.drift_case, verdict.drift_case),
            'sample_count': previous.sample_count + 1,
        })
        snapshot.report = report

        if verdict.has_real_drift:
            logger.warning(
                f"Anchor drift ({verdict.drift_case.value}) on {report.block_type} block "
                f"{report.block_id}, handle {report.handle}, rotation {report.rotation}: "
                f"anchor moved {verdict.model_delta[0]:.2f}, {verdict.model_delta[1]:.2f}"
            )
            if self.on_drift_detected is not None:
                self.on_drift_detected(report)
        elif verdict.bounding_rect_changed:
            logger.debug(
                f"Bounding rect moved {verdict.rect_delta[0]:.1f}, {verdict.rect_delta[1]:.1f} "
                f"for block {report.block_id} (rotation {report.rotation}), anchor intact"
            )

    def on_resize_end(self, event: ResizeEndEvent) -> None:
        snapshot = self._snapshot
        if snapshot is None or snapshot.report.block_id != event.block_id:
            return
        self._snapshot = None
        report = snapshot.report

        self.history.append(report)
        del self.history[:-self.history_limit or None]
        result = DriftTestResult.from_report(report)
        self.results.append(result)
        del self.results[:-self.history_limit or None]

        if report.has_real_drift:
            logger.warning(f"Resize of block {report.block_id} finished with drift: {result.drift_type}")
        else:
            logger.debug(f"Resize of block {report.block_id} finished without drift")
        if self.on_report is not None:
            self.on_report(report)

    def on_resize_cancel(self, event: ResizeCancelEvent) -> None:
        if self._snapshot is not None and self._snapshot.report.block_id == event.block_id:
            self._snapshot = None


_CASE_SEVERITY = {
    DriftCase.NONE: 0,
    DriftCase.RECT_ONLY: 1,
    DriftCase.PRESENTATION: 2,
    DriftCase.MODEL: 3,
}


def _worst_case(a: DriftCase, b: DriftCase) -> DriftCase:
    return a if _CASE_SEVERITY[DriftCase(a)] >= _CASE_SEVERITY[DriftCase(b)] else b
