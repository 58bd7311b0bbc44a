"""
Drift test harness - runs resize scenarios across rotations and handles.

Each case lays out a single announcements block on a fresh one-page layout,
drives a ResizeController through a few pointer moves with a DriftClassifier
attached, and records whether the anchor stayed put.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from bulletin_canvas.blocks import BlockType, CanvasBlock, CanvasPage
from bulletin_canvas.editing import ResizeController
from bulletin_canvas.formats import CanvasLayout
from bulletin_canvas.geometry import ResizeHandle, resize_geometry, rotate_vector

from .drift import DriftClassifier, DriftReport, DriftTestResult
from .measurement import CssTransformRenderer

logger = logging.getLogger(__name__)

DEFAULT_ROTATIONS: tuple[float, ...] = (0, 15, 45, 90)
TEST_BLOCK_ID = 'drift-test-block'


@dataclass
class DriftTestSummary:
    """Aggregated outcome of a harness run."""

    results: list[DriftTestResult] = field(default_factory=list)
    reports: list[DriftReport] = field(default_factory=list)

    @property
    def pass_count(self) -> int:
        return sum(1 for result in self.results if result.passed)

    @property
    def fail_count(self) -> int:
        return len(self.results) - self.pass_count

    @property
    def pass_rate(self) -> int:
        """Percentage of passing cases, rounded (0 for an empty run)."""
        if not self.results:
            return 0
        return round(self.pass_count / len(self.results) * 100)

    @property
    def failures(self) -> list[DriftTestResult]:
        return [result for result in self.results if not result.passed]


class DriftTestHarness:
    """Runs a rotation x handle matrix of resize cases through the drift classifier."""

    def __init__(
        self,
        resize_fn=resize_geometry,
        *,
        block_size: tuple[float, float] = (300, 200),
        position: tuple[float, float] = (200, 300),
        delta: tuple[float, float] = (40, 24),
        scale: float = 1.0,
        steps: int = 4,
    ):
        """
        Args:
            resize_fn: Resize calculator under test
            block_size: (width, height) of the test block
            position: (x, y) of the test block
            delta: Total outward pointer travel in screen pixels
            scale: Editor zoom used for the renderer and controller
            steps: Number of pointer moves per case
        """
        if steps < 1:
            raise ValueError(f"steps must be at least 1, got {steps}")
        self.resize_fn = resize_fn
        self.block_size = block_size
        self.position = position
        self.delta = delta
        self.scale = scale
        self.steps = steps

    def _make_layout(self, rotation: float) -> CanvasLayout:
        width, height = self.block_size
        x, y = self.position
        block = CanvasBlock(
            id=TEST_BLOCK_ID,
            block_type=BlockType.ANNOUNCEMENTS,
            x=x,
            y=y,
            width=width,
            height=height,
            rotation=rotation,
            z_index=1,
            data={'maxItems': 5, 'category': None, 'priorityFilter': None},
        )
        return CanvasLayout(pages=[CanvasPage(page_number=1, blocks=[block])])

    def _pointer_travel(self, handle: ResizeHandle, rotation: float) -> tuple[float, float]:
        # Outward along the block's local axes, expressed in screen space
        dx, dy = self.delta
        return rotate_vector(dx * handle.x_sign, dy * handle.y_sign, rotation)

    def run_case(self, rotation: float, handle) -> tuple[DriftTestResult, DriftReport]:
        """Run one resize of the test block and return its result and report."""
        handle = ResizeHandle.parse(handle)
        layout = self._make_layout(rotation)
        renderer = CssTransformRenderer(scale=self.scale)
        renderer.mount(TEST_BLOCK_ID)
        classifier = DriftClassifier(renderer)
        controller = ResizeController(
            layout,
            [classifier],
            scale=self.scale,
            resize_fn=self.resize_fn,
        )

        total_dx, total_dy = self._pointer_travel(handle, rotation)
        controller.begin(TEST_BLOCK_ID, handle)
        for step in range(1, self.steps + 1):
            fraction = step / self.steps
            controller.move(total_dx * fraction, total_dy * fraction)
        controller.end()

        report = classifier.history[-1]
        result = classifier.results[-1]
        return result, report

    def run_matrix(
        self,
        rotations: Iterable[float] = DEFAULT_ROTATIONS,
        handles: Optional[Iterable] = None,
    ) -> DriftTestSummary:
        """Run every rotation x handle combination."""
        handles = list(ResizeHandle) if handles is None else [ResizeHandle.parse(h) for h in handles]
        summary = DriftTestSummary()
        for rotation in rotations:
            for handle in handles:
                result, report = self.run_case(rotation, handle)
                summary.results.append(result)
                summary.reports.append(report)

        logger.info(
            f"Drift test run: {summary.pass_count}/{len(summary.results)} passed "
            f"({summary.pass_rate}%)"
        )
        for failure in summary.failures:
            logger.warning(
                f"Drift at rotation {failure.rotation} handle {failure.handle}: "
                f"{failure.drift_type} {failure.drift_amount}"
            )
        return summary
