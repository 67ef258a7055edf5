"""
Detection Package

Decision policies that turn scalar measurements from the image and OCR
collaborators into discrete answers. Nothing here touches pixels.
"""

from .bubbles import BubbleMarkResolver
from .handwriting import HandwritingAssessment, HandwritingConfidenceFuser, HandwritingSignals

__all__ = [
    "BubbleMarkResolver",
    "HandwritingAssessment",
    "HandwritingConfidenceFuser",
    "HandwritingSignals",
]
