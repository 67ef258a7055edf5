"""
Module: detection.bubbles

Purpose:
    Decides which option of a bubble question was marked, given one fill
    ratio per option from the upstream bubble measurement.

    Exactly one marked option is an answer. None, or more than one, is
    "no decision" (-1): the resolver never guesses between double marks
    and never picks the darkest of several bubbles, so smudges and
    crossed-out answers do not turn into false positives.

Key Classes:
    - BubbleMarkResolver: Fill-ratio threshold decision

Dependencies:
    - numpy: Vectorized threshold over option fills

Used By:
    - extraction.sheet.AnswerExtractor
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from ..common.thresholds import BUBBLE_THRESHOLDS
from ..core.models.answers import NO_SELECTION

logger = logging.getLogger(__name__)


class BubbleMarkResolver:
    """
    Fill-ratio decision policy for one question's bubbles.

    Attributes:
        fill_threshold: Fill ratio at or above which an option is marked

    Example:
        >>> resolver = BubbleMarkResolver()
        >>> resolver.resolve([0.1, 0.8, 0.2])
        1
        >>> resolver.resolve([0.7, 0.9, 0.1])
        -1
    """

    def __init__(self, fill_threshold: float = BUBBLE_THRESHOLDS.fill_threshold):
        if not 0.0 <= fill_threshold <= 1.0:
            logger.warning(
                f"Fill threshold must be within [0, 1], got {fill_threshold}; "
                f"using {BUBBLE_THRESHOLDS.fill_threshold}"
            )
            fill_threshold = BUBBLE_THRESHOLDS.fill_threshold
        self._fill_threshold = fill_threshold

    @property
    def fill_threshold(self) -> float:
        return self._fill_threshold

    def set_fill_threshold(self, threshold: float) -> None:
        """Change the threshold; values outside [0, 1] are ignored."""
        if 0.0 <= threshold <= 1.0:
            self._fill_threshold = threshold

    def is_marked(self, fill_ratio: float) -> bool:
        return fill_ratio >= self._fill_threshold

    def marked_options(self, fill_ratios: Sequence[float]) -> List[int]:
        """
        Indices of every marked option, in option order.

        Args:
            fill_ratios: One 0.0-1.0 fill ratio per option

        Returns:
            Possibly empty list of 0-based option indices
        """
        fills = np.asarray(fill_ratios, dtype=float)
        if fills.size == 0:
            return []
        return [int(i) for i in np.flatnonzero(fills >= self._fill_threshold)]

    def resolve(self, fill_ratios: Sequence[float]) -> int:
        """
        Decide the answer for one question.

        Returns:
            The single marked option index, or NO_SELECTION (-1) when zero
            or several options are marked
        """
        marked = self.marked_options(fill_ratios)
        if len(marked) != 1:
            logger.debug(f"No decision: {len(marked)} option(s) marked in {list(fill_ratios)}")
            return NO_SELECTION
        return marked[0]
