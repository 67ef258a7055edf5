"""Centralized threshold and magic number configuration.

This module contains the thresholds, weights and limits used by the bubble
and handwriting decisions and by the grading engine. Having these in one
place makes tuning easier and documents what each value controls.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BubbleThresholds:
    """Thresholds for deciding which bubble options are marked."""

    fill_threshold: float = 0.6  # Fill ratio at or above which an option counts as marked


@dataclass
class HandwritingThresholds:
    """Thresholds and weights for handwriting presence and confidence."""

    # Presence decision
    min_density: float = 0.05  # Ink density below this is "no handwriting" without further checks
    min_component_area: int = 20  # Pixels for a connected component to be significant
    min_significant_components: int = 2  # Separate strokes needed to call it writing

    # Confidence fusion (each signal saturates at its cap before weighting)
    density_saturation: float = 0.2  # Ink density scoring full marks
    edge_saturation: float = 0.15  # Edge density scoring full marks
    density_weight: float = 0.4
    edge_weight: float = 0.3
    component_weight: float = 0.3


@dataclass
class GradingThresholds:
    """Defaults for score aggregation."""

    points_per_question: float = 1.0  # Weight of a question without an override
    partial_credit_threshold: float = 0.7  # Minimum text similarity earning partial credit


@dataclass
class OcrThresholds:
    """Thresholds for accepting recognized handwriting text."""

    min_confidence: float = 50.0  # OCR mean confidence (0-100) below which text is rejected


# Global instances for easy import
BUBBLE_THRESHOLDS = BubbleThresholds()
HANDWRITING_THRESHOLDS = HandwritingThresholds()
GRADING_THRESHOLDS = GradingThresholds()
OCR_THRESHOLDS = OcrThresholds()
