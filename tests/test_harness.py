"""
Tests for the drift test harness and the position stability tracker.
"""

import pytest

from bulletin_canvas.blocks import CanvasBlock
from bulletin_canvas.diagnostics import (
    DEFAULT_ROTATIONS,
    CssTransformRenderer,
    DriftTestHarness,
    DriftTestSummary,
    PagePosition,
    PositionStabilityTracker,
    collect_page_positions,
)
from bulletin_canvas.geometry import Rect, ResizeHandle, naive_resize


class TestDriftTestHarness:
    """Rotation x handle matrix runs."""

    def test_correct_calculator_passes_everything(self):
        summary = DriftTestHarness().run_matrix()
        assert len(summary.results) == len(DEFAULT_ROTATIONS) * 8
        assert summary.fail_count == 0
        assert summary.pass_rate == 100

    def test_naive_calculator_fails_under_rotation(self):
        summary = DriftTestHarness(resize_fn=naive_resize).run_matrix(rotations=[0, 15, 45])
        for result in summary.results:
            assert result.drift_detected == (result.rotation != 0)
        assert summary.pass_count == 8
        assert summary.pass_rate == 33
        assert all(failure.drift_type == 'model' for failure in summary.failures)

    def test_every_case_resizes(self):
        """Each case changes the block size, whatever the rotation."""
        summary = DriftTestHarness().run_matrix()
        for report in summary.reports:
            start, current = report.start, report.current
            assert (current.model_width, current.model_height) != (start.model_width, start.model_height), (
                f"{report.handle} at {report.rotation} did not resize"
            )

    @pytest.mark.parametrize('handle', ['n', 'e', 's', 'w'])
    def test_edge_handles_at_quarter_turn(self, handle):
        result, report = DriftTestHarness().run_case(90, handle)
        assert result.passed
        handle = ResizeHandle.parse(handle)
        if handle.x_sign:
            assert report.current.model_width == pytest.approx(report.start.model_width + 40)
            assert report.current.model_height == pytest.approx(report.start.model_height)
        else:
            assert report.current.model_height == pytest.approx(report.start.model_height + 24)
            assert report.current.model_width == pytest.approx(report.start.model_width)

    def test_subset(self):
        summary = DriftTestHarness().run_matrix(rotations=[30], handles=['se', 'w'])
        assert [r.handle for r in summary.results] == ['se', 'w']
        assert all(r.rotation == 30 for r in summary.results)
        assert all(r.block_type == 'announcements' for r in summary.results)

    def test_run_case_returns_report(self):
        result, report = DriftTestHarness(steps=2).run_case(45, ResizeHandle.NE)
        assert result.passed
        assert report.sample_count == 2
        assert report.handle == 'ne'

    def test_zoomed_editor(self):
        summary = DriftTestHarness(scale=1.5).run_matrix(rotations=[0, 60])
        assert summary.fail_count == 0

    def test_invalid_steps(self):
        with pytest.raises(ValueError):
            DriftTestHarness(steps=0)

    def test_empty_summary(self):
        summary = DriftTestSummary()
        assert summary.pass_rate == 0
        assert summary.fail_count == 0


class TestPositionStability:
    """Page-relative offsets across viewport changes."""

    def _position(self, block_left, page_left, block_top=100.0, page_top=0.0, block_id='a'):
        return PagePosition(
            block_id=block_id,
            rect=Rect(left=block_left, top=block_top, width=50, height=50),
            page_rect=Rect(left=page_left, top=page_top, width=816, height=1056),
        )

    def test_first_check_is_stable(self):
        tracker = PositionStabilityTracker()
        assert tracker.check([self._position(110, 10)])
        assert tracker.last_offset('a') == (100, 100)

    def test_page_moves_with_block(self):
        """Block and page moving together is not drift."""
        tracker = PositionStabilityTracker()
        tracker.check([self._position(110, 10)])
        assert tracker.check([self._position(310, 210)])

    def test_drift_detected(self):
        tracker = PositionStabilityTracker()
        tracker.check([self._position(110, 10)])
        assert not tracker.check([self._position(315, 210)])

    def test_within_tolerance(self):
        tracker = PositionStabilityTracker()
        tracker.check([self._position(110, 10)])
        assert tracker.check([self._position(110.8, 10)])

    def test_reset(self):
        tracker = PositionStabilityTracker()
        tracker.check([self._position(110, 10)])
        tracker.reset()
        assert tracker.last_offset('a') is None
        assert tracker.check([self._position(500, 10)])

    def test_collect_from_renderer(self):
        renderer = CssTransformRenderer(scale=1.0, origin=(40, 20))
        blocks = [
            CanvasBlock(id='one', block_type='text', x=10, y=10, width=50, height=30),
            CanvasBlock(id='two', block_type='text', x=100, y=10, width=50, height=30),
        ]
        renderer.mount('one')
        page_rect = Rect(left=40, top=20, width=816, height=1056)
        positions = collect_page_positions(renderer, blocks, page_rect)
        assert [p.block_id for p in positions] == ['one']
        assert positions[0].offset == (10, 10)
