"""
Resize drift diagnostics.

Instrumentation for the canvas editor: samples blocks during resize through a
renderer seam, classifies anchor drift, and runs scenario matrices across
rotations and handles.
"""

from .measurement import (
    BlockRenderer,
    CssTransformRenderer,
    PositionMeasurement,
    RenderedBox,
    format_px,
    format_transform,
    measure_block,
)
from .drift import (
    DriftCase,
    DriftClassifier,
    DriftReport,
    DriftTestResult,
    DriftVerdict,
    classify_drift,
    pinned_presentation_fields,
)
from .harness import DEFAULT_ROTATIONS, DriftTestHarness, DriftTestSummary
from .stability import PagePosition, PositionStabilityTracker, collect_page_positions

__all__ = [
    # Measurement
    'BlockRenderer',
    'CssTransformRenderer',
    'PositionMeasurement',
    'RenderedBox',
    'format_px',
    'format_transform',
    'measure_block',
    # Classification
    'DriftCase',
    'DriftClassifier',
    'DriftReport',
    'DriftTestResult',
    'DriftVerdict',
    'classify_drift',
    'pinned_presentation_fields',
    # Harness
    'DEFAULT_ROTATIONS',
    'DriftTestHarness',
    'DriftTestSummary',
    # Stability
    'PagePosition',
    'PositionStabilityTracker',
    'collect_page_positions',
]
