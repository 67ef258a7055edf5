"""
Module: detection.handwriting

Purpose:
    Decides whether a fill-in-the-blank region holds handwriting, from
    scalar signals measured upstream: ink pixel density, stroke edge
    density and the areas of connected ink components.

    Two separate paths:
    - Presence: density below the minimum rules handwriting out without
      looking at components; otherwise at least two significant components
      (separate strokes, not a single blob) are required.
    - Confidence: weighted fusion of the three signals, each capped before
      weighting so no one signal can crowd out the others.

Key Classes:
    - HandwritingSignals: Measurements for one region
    - HandwritingAssessment: Confidence and presence verdict
    - HandwritingConfidenceFuser: The decision policy

Dependencies:
    - numpy: Component area filtering

Used By:
    - extraction.sheet.AnswerExtractor
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Iterable, Mapping, Tuple, TypeVar, Union

import numpy as np

from ..common.thresholds import HANDWRITING_THRESHOLDS

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)

ComponentAreas = Union[Iterable[int], Callable[[], Iterable[int]]]


@dataclass(frozen=True)
class HandwritingSignals:
    """
    Upstream measurements for one handwriting region.

    Attributes:
        density: Fraction of ink pixels in the region (0.0-1.0)
        edge_density: Fraction of stroke-edge pixels (0.0-1.0)
        component_areas: Pixel areas of the connected ink components
    """
    density: float
    edge_density: float = 0.0
    component_areas: Tuple[int, ...] = ()

    def __post_init__(self) -> None:
        for name in ("density", "edge_density"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1]: {value}")
        object.__setattr__(self, "component_areas", tuple(int(a) for a in self.component_areas))


@dataclass(frozen=True)
class HandwritingAssessment:
    """Fused confidence (0.0-1.0) and presence verdict for one region."""
    confidence: float
    present: bool


class HandwritingConfidenceFuser:
    """
    Handwriting presence and confidence from scalar signals.

    Attributes:
        min_density: Ink density below which a region is empty

    Example:
        >>> fuser = HandwritingConfidenceFuser()
        >>> fuser.confidence(0.1, 0.15, True)
        0.8
        >>> fuser.is_present(0.02, [500, 400])
        False
    """

    def __init__(
        self,
        min_density: float = HANDWRITING_THRESHOLDS.min_density,
        min_component_area: int = HANDWRITING_THRESHOLDS.min_component_area,
    ):
        if not 0.0 <= min_density <= 1.0:
            logger.warning(
                f"Minimum density must be within [0, 1], got {min_density}; "
                f"using {HANDWRITING_THRESHOLDS.min_density}"
            )
            min_density = HANDWRITING_THRESHOLDS.min_density
        self._min_density = min_density
        self.min_component_area = min_component_area

    @property
    def min_density(self) -> float:
        return self._min_density

    def set_min_density(self, density: float) -> None:
        """Change the minimum density; values outside [0, 1] are ignored."""
        if 0.0 <= density <= 1.0:
            self._min_density = density

    # ─────────────────────────────────────────────────────────────────────────
    # Decisions
    # ─────────────────────────────────────────────────────────────────────────

    def has_significant_components(self, component_areas: Iterable[int]) -> bool:
        """At least two components reach the minimum area."""
        areas = np.fromiter(component_areas, dtype=np.int64)
        significant = int(np.count_nonzero(areas >= self.min_component_area))
        return significant >= HANDWRITING_THRESHOLDS.min_significant_components

    def confidence(self, density: float, edge_density: float, has_components: bool) -> float:
        """
        Weighted fusion of the three signals.

        confidence = min(density / 0.2, 1) * 0.4
                   + min(edge_density / 0.15, 1) * 0.3
                   + (0.3 if has_components else 0)

        capped at 1.0.
        """
        t = HANDWRITING_THRESHOLDS
        density_score = min(density / t.density_saturation, 1.0) * t.density_weight
        edge_score = min(edge_density / t.edge_saturation, 1.0) * t.edge_weight
        component_score = t.component_weight if has_components else 0.0
        return min(density_score + edge_score + component_score, 1.0)

    def is_present(self, density: float, component_areas: ComponentAreas) -> bool:
        """
        Binary presence decision.

        Args:
            density: Ink pixel density of the region
            component_areas: Component areas, or a callable producing them.
                A callable is only invoked when density passes the minimum,
                so component analysis can be skipped for empty regions.

        Returns:
            True if the region holds handwriting
        """
        if density < self._min_density:
            logger.debug(f"Density {density:.3f} below minimum {self._min_density:.3f}")
            return False
        if callable(component_areas):
            component_areas = component_areas()
        return self.has_significant_components(component_areas)

    def assess(self, signals: HandwritingSignals) -> HandwritingAssessment:
        """Run both decisions over one region's signals."""
        has_components = self.has_significant_components(signals.component_areas)
        confidence = self.confidence(signals.density, signals.edge_density, has_components)
        present = signals.density >= self._min_density and has_components
        return HandwritingAssessment(confidence=confidence, present=present)

    def filter_present(self, regions: Mapping[K, HandwritingSignals]) -> Dict[K, HandwritingSignals]:
        """Keep only the regions whose presence verdict is true."""
        return {
            region: signals
            for region, signals in regions.items()
            if self.is_present(signals.density, signals.component_areas)
        }
