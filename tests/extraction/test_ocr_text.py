"""
Unit Tests for OCR text post-processing
"""

import pytest

from omr_grader.extraction.ocr_text import accept_recognized_text, clean_recognized_text


class TestCleanRecognizedText:

    @pytest.mark.parametrize("raw, cleaned", [
        ("  Ankara \n", "Ankara"),
        ("Mustafa\n\n  Kemal", "Mustafa Kemal"),
        ("\t1923\t", "1923"),
        ("", ""),
        (None, ""),
        ("   \n ", ""),
    ])
    def test_clean_when_raw_then_whitespace_collapsed(self, raw, cleaned):
        assert clean_recognized_text(raw) == cleaned


class TestAcceptRecognizedText:

    def test_accept_when_confident_then_cleaned_text(self):
        assert accept_recognized_text(" Ankara ", 87.5) == "Ankara"

    def test_accept_when_below_default_minimum_then_empty(self):
        assert accept_recognized_text("Ankara", 49.9) == ""

    def test_accept_when_exactly_minimum_then_kept(self):
        assert accept_recognized_text("Ankara", 50.0) == "Ankara"

    def test_accept_when_confidence_unknown_then_kept(self):
        assert accept_recognized_text("Ankara", None) == "Ankara"

    def test_accept_when_custom_minimum_then_applied(self):
        assert accept_recognized_text("Ankara", 70.0, min_confidence=80.0) == ""
