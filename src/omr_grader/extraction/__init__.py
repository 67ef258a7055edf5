"""
Extraction Package

Turns per-region readings from the image and OCR collaborators into the
student Answers the grading engine consumes.
"""

from .ocr_text import accept_recognized_text, clean_recognized_text
from .sheet import AnswerExtractor, RegionReading

__all__ = [
    "AnswerExtractor",
    "RegionReading",
    "accept_recognized_text",
    "clean_recognized_text",
]
