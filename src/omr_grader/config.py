"""
Module: config

Purpose:
    Configuration dataclass for one grading setup. Immutable, validated on
    construction, and able to build each configured component.

    This is the validating entry point: a bad value here raises. The
    component setters themselves keep their fail-silent behavior.

Key Classes:
    - GradingConfig: Settings for extraction decisions and scoring

Key Functions:
    - load_config(): Read a GradingConfig from a JSON file

Dependencies:
    - dataclasses (std)
    - json (std)

Used By:
    - cli
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .common.thresholds import (
    BUBBLE_THRESHOLDS,
    GRADING_THRESHOLDS,
    HANDWRITING_THRESHOLDS,
)
from .detection.bubbles import BubbleMarkResolver
from .detection.handwriting import HandwritingConfidenceFuser
from .extraction.sheet import AnswerExtractor
from .grading.answer_key import AnswerKey
from .grading.comparator import AnswerComparator
from .grading.score_calculator import ScoreCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GradingConfig:
    """
    Configuration for grading a batch of sheets (immutable).

    Attributes:
        case_sensitive: Compare fill-in text with letter case
        fill_threshold: Bubble fill ratio counted as marked
        min_handwriting_density: Ink density below which a blank is empty
        points_per_question: Default question weight
        question_points: Per-question weight overrides
        partial_credit_enabled: Award similarity credit to near-miss text
        partial_credit_threshold: Minimum similarity for partial credit
        ocr_min_confidence: Drop OCR text below this confidence (None = keep all)
        omit_unresolved: Treat unresolved regions as unanswered

    Invariants:
        - fill_threshold, min_handwriting_density, partial_credit_threshold in [0, 1]
        - points_per_question > 0 and every question_points value > 0
        - ocr_min_confidence is None or in [0, 100]

    Example:
        >>> config = GradingConfig(question_points={13: 2.0})
        >>> calculator = config.build_score_calculator(key)
        >>> calculator.question_points(13)
        2.0
    """

    case_sensitive: bool = False
    fill_threshold: float = BUBBLE_THRESHOLDS.fill_threshold
    min_handwriting_density: float = HANDWRITING_THRESHOLDS.min_density
    points_per_question: float = GRADING_THRESHOLDS.points_per_question
    question_points: Dict[int, float] = field(default_factory=dict)
    partial_credit_enabled: bool = True
    partial_credit_threshold: float = GRADING_THRESHOLDS.partial_credit_threshold
    ocr_min_confidence: Optional[float] = None
    omit_unresolved: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        for name in ("fill_threshold", "min_handwriting_density", "partial_credit_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1]: {value}")
        if self.points_per_question <= 0:
            raise ValueError(f"points_per_question must be positive: {self.points_per_question}")
        for question_num, points in self.question_points.items():
            if points <= 0:
                raise ValueError(f"points for question {question_num} must be positive: {points}")
        if self.ocr_min_confidence is not None and not 0.0 <= self.ocr_min_confidence <= 100.0:
            raise ValueError(f"ocr_min_confidence must be within [0, 100]: {self.ocr_min_confidence}")

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GradingConfig:
        """
        Build a config from a dictionary, ignoring unknown keys.

        question_points keys may be strings (as in JSON).
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")
        values = {k: v for k, v in data.items() if k in known}
        if "question_points" in values:
            values["question_points"] = {
                int(q): float(p) for q, p in values["question_points"].items()
            }
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["question_points"] = {str(q): p for q, p in self.question_points.items()}
        return data

    # ─────────────────────────────────────────────────────────────────────────
    # Component builders
    # ─────────────────────────────────────────────────────────────────────────

    def build_comparator(self) -> AnswerComparator:
        return AnswerComparator(case_sensitive=self.case_sensitive)

    def build_bubble_resolver(self) -> BubbleMarkResolver:
        return BubbleMarkResolver(self.fill_threshold)

    def build_handwriting_fuser(self) -> HandwritingConfidenceFuser:
        return HandwritingConfidenceFuser(self.min_handwriting_density)

    def build_extractor(self) -> AnswerExtractor:
        return AnswerExtractor(
            self.build_bubble_resolver(),
            self.build_handwriting_fuser(),
            ocr_min_confidence=self.ocr_min_confidence,
            omit_unresolved=self.omit_unresolved,
        )

    def build_score_calculator(
        self,
        answer_key: AnswerKey,
        comparator: Optional[AnswerComparator] = None,
    ) -> ScoreCalculator:
        """Score calculator over answer_key with this config's weights applied."""
        calculator = ScoreCalculator(answer_key, comparator or self.build_comparator(), strict=True)
        calculator.set_points_per_question(self.points_per_question)
        for question_num, points in self.question_points.items():
            calculator.set_question_points(question_num, points)
        calculator.set_partial_credit_enabled(self.partial_credit_enabled)
        calculator.set_partial_credit_threshold(self.partial_credit_threshold)
        calculator.strict = False
        return calculator


def load_config(path: Union[str, Path]) -> GradingConfig:
    """
    Load a GradingConfig from a JSON file.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the JSON is invalid or a value is out of range
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file must hold a JSON object: {path}")
    return GradingConfig.from_dict(data)
