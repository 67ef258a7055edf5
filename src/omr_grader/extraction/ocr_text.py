"""
Module: extraction.ocr_text

Purpose:
    Post-processing for text returned by the OCR engine. The engine itself
    is an external collaborator; this module only cleans its output and
    applies the confidence gate.

Key Functions:
    - clean_recognized_text(): Trim and collapse whitespace runs
    - accept_recognized_text(): Reject text below a confidence minimum

Used By:
    - extraction.sheet.AnswerExtractor
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from ..common.thresholds import OCR_THRESHOLDS

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


def clean_recognized_text(raw_text: Optional[str]) -> str:
    """
    Normalize raw OCR output.

    Newlines, tabs and repeated spaces collapse to a single space and the
    result is trimmed. No spelling correction is attempted.

    Example:
        >>> clean_recognized_text("  Mustafa \\n\\n Kemal ")
        'Mustafa Kemal'
    """
    if not raw_text:
        return ""
    return _WHITESPACE_RUN.sub(" ", raw_text).strip()


def accept_recognized_text(
    raw_text: Optional[str],
    confidence: Optional[float],
    min_confidence: float = OCR_THRESHOLDS.min_confidence,
) -> str:
    """
    Clean OCR text and drop it if the engine was not confident enough.

    Args:
        raw_text: Text as returned by the OCR engine
        confidence: Engine mean confidence on a 0-100 scale, None if unknown
        min_confidence: Minimum confidence to keep the text

    Returns:
        Cleaned text, or "" when confidence is known and below the minimum
    """
    text = clean_recognized_text(raw_text)
    if confidence is not None and confidence < min_confidence:
        logger.debug(f"Rejected OCR text {text!r}: confidence {confidence:.1f} < {min_confidence:.1f}")
        return ""
    return text
