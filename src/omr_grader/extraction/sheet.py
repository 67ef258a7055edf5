"""
Module: extraction.sheet

Purpose:
    Turns one sheet's per-region readings into student Answers. A reading
    is what the image and OCR collaborators deliver for a question region:
    one fill ratio per option for bubble questions, or a presence verdict
    (or the signals to decide it) plus recognized text for fill-in
    questions.

Key Classes:
    - RegionReading: Measurements for one question region
    - AnswerExtractor: Applies the bubble/handwriting decisions per region

Dependencies:
    - detection.bubbles.BubbleMarkResolver
    - detection.handwriting.HandwritingConfidenceFuser
    - extraction.ocr_text

Used By:
    - config.GradingConfig.build_extractor
    - cli

Unresolved regions:
    An ambiguous bubble row or an empty blank can either become an Answer
    holding the sentinel (-1 / "") and be graded incorrect, or produce no
    Answer and be graded unanswered. omit_unresolved picks which; a caller
    should use one policy for a whole batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple

from ..core.models.answers import NO_SELECTION, Answer, AnswerType
from ..detection.bubbles import BubbleMarkResolver
from ..detection.handwriting import HandwritingConfidenceFuser, HandwritingSignals
from .ocr_text import accept_recognized_text, clean_recognized_text

logger = logging.getLogger(__name__)

TRUE_FALSE_OPTIONS = 2


@dataclass(frozen=True)
class RegionReading:
    """
    Upstream measurements for one question region.

    Attributes:
        question_number: Question the region belongs to
        type: Kind of question
        fill_ratios: One fill ratio per option (MC / TF)
        has_handwriting: Presence verdict from upstream (FILL), None if not decided
        recognized_text: Raw OCR text (FILL)
        ocr_confidence: OCR mean confidence, 0-100, None if unknown
        signals: Handwriting signals, used when has_handwriting is None

    Example:
        >>> bubbles = RegionReading(1, AnswerType.MULTIPLE_CHOICE, fill_ratios=(0.1, 0.8, 0.2))
        >>> written = RegionReading(11, AnswerType.FILL_IN_BLANK, has_handwriting=True, recognized_text="Ankara")
    """
    question_number: int
    type: AnswerType
    fill_ratios: Tuple[float, ...] = ()
    has_handwriting: Optional[bool] = None
    recognized_text: str = ""
    ocr_confidence: Optional[float] = None
    signals: Optional[HandwritingSignals] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fill_ratios", tuple(float(f) for f in self.fill_ratios))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RegionReading:
        """
        Build a reading from a JSON object.

        Keys: question, type (MC/FILL/TF), fills, has_handwriting, text,
        confidence, signals ({density, edge_density, component_areas}).
        """
        signals_data = data.get("signals")
        signals = None
        if signals_data is not None:
            signals = HandwritingSignals(
                density=float(signals_data["density"]),
                edge_density=float(signals_data.get("edge_density", 0.0)),
                component_areas=tuple(signals_data.get("component_areas", ())),
            )
        confidence = data.get("confidence")
        return cls(
            question_number=int(data["question"]),
            type=AnswerType.from_token(data["type"]),
            fill_ratios=tuple(data.get("fills", ())),
            has_handwriting=data.get("has_handwriting"),
            recognized_text=data.get("text", "") or "",
            ocr_confidence=float(confidence) if confidence is not None else None,
            signals=signals,
        )


class AnswerExtractor:
    """
    Applies the decision policies to a sheet's region readings.

    Attributes:
        resolver: Bubble decision policy
        fuser: Handwriting decision policy
        ocr_min_confidence: Drop OCR text below this confidence (None = keep all)
        omit_unresolved: Produce no Answer for unresolved regions

    Example:
        >>> extractor = AnswerExtractor()
        >>> answers = extractor.extract([RegionReading(1, AnswerType.MULTIPLE_CHOICE, (0.1, 0.8))])
        >>> answers[0].selected_option
        1
    """

    def __init__(
        self,
        resolver: Optional[BubbleMarkResolver] = None,
        fuser: Optional[HandwritingConfidenceFuser] = None,
        *,
        ocr_min_confidence: Optional[float] = None,
        omit_unresolved: bool = False,
    ):
        self.resolver = resolver or BubbleMarkResolver()
        self.fuser = fuser or HandwritingConfidenceFuser()
        self.ocr_min_confidence = ocr_min_confidence
        self.omit_unresolved = omit_unresolved

    def extract(self, readings: Iterable[RegionReading]) -> List[Answer]:
        """Extract answers for every region, in reading order."""
        answers: List[Answer] = []
        for reading in readings:
            answer = self.extract_region(reading)
            if answer is not None:
                answers.append(answer)
        return answers

    def extract_region(self, reading: RegionReading) -> Optional[Answer]:
        """
        Extract the answer for one region.

        Returns:
            The Answer, or None if the region is unresolved and
            omit_unresolved is set
        """
        if reading.type is AnswerType.FILL_IN_BLANK:
            answer = self._read_text(reading)
        else:
            answer = self._read_bubbles(reading)

        if answer.is_blank and self.omit_unresolved:
            logger.debug(f"Question {reading.question_number}: unresolved, omitted")
            return None
        return answer

    def _read_bubbles(self, reading: RegionReading) -> Answer:
        fills = reading.fill_ratios
        if reading.type is AnswerType.TRUE_FALSE:
            fills = fills[:TRUE_FALSE_OPTIONS]

        option = self.resolver.resolve(fills)
        if option == NO_SELECTION:
            logger.debug(f"Question {reading.question_number}: no mark or multiple marks")
        else:
            logger.debug(f"Question {reading.question_number}: option {option}")
        return Answer(reading.question_number, reading.type, selected_option=option)

    def _read_text(self, reading: RegionReading) -> Answer:
        if not self._handwriting_present(reading):
            logger.debug(f"Question {reading.question_number}: blank")
            return Answer.fill_in_blank(reading.question_number, "")

        if self.ocr_min_confidence is None:
            text = clean_recognized_text(reading.recognized_text)
        else:
            text = accept_recognized_text(
                reading.recognized_text, reading.ocr_confidence, self.ocr_min_confidence
            )
        logger.debug(f"Question {reading.question_number}: {text!r}")
        return Answer.fill_in_blank(reading.question_number, text)

    def _handwriting_present(self, reading: RegionReading) -> bool:
        if reading.has_handwriting is not None:
            return reading.has_handwriting
        if reading.signals is None:
            # Unmeasurable region
            return False
        signals = reading.signals
        return self.fuser.is_present(signals.density, signals.component_areas)
