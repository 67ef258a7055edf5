"""
Unit Tests for BubbleMarkResolver
"""

import numpy as np
import pytest

from omr_grader.core.models.answers import NO_SELECTION
from omr_grader.detection.bubbles import BubbleMarkResolver


class TestBubbleMarkResolver:
    """Tests for the fill-ratio decision policy."""

    # ─────────────────────────────────────────────────────────────────────────
    # Threshold Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_init_when_default_then_threshold_point_six(self):
        assert BubbleMarkResolver().fill_threshold == 0.6

    @pytest.mark.parametrize("threshold", [-0.5, 1.2])
    def test_init_when_out_of_range_then_falls_back_to_default(self, threshold, caplog):
        resolver = BubbleMarkResolver(threshold)
        assert resolver.fill_threshold == 0.6
        assert "Fill threshold must be within" in caplog.text

    @pytest.mark.parametrize("threshold", [-0.01, 1.5])
    def test_set_fill_threshold_when_out_of_range_then_previous_kept(self, threshold):
        resolver = BubbleMarkResolver(0.5)
        resolver.set_fill_threshold(threshold)
        assert resolver.fill_threshold == 0.5

    def test_set_fill_threshold_when_valid_then_applied(self):
        resolver = BubbleMarkResolver()
        resolver.set_fill_threshold(0.3)
        assert resolver.resolve([0.3, 0.1]) == 0

    def test_is_marked_when_exactly_threshold_then_true(self):
        resolver = BubbleMarkResolver(0.6)
        assert resolver.is_marked(0.6)
        assert not resolver.is_marked(0.59)

    # ─────────────────────────────────────────────────────────────────────────
    # Decision Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_resolve_when_single_mark_then_index(self):
        assert BubbleMarkResolver().resolve([0.1, 0.8, 0.2]) == 1

    def test_resolve_when_two_marks_then_no_selection(self):
        """Double marks are never guessed between, even with a clear favourite."""
        assert BubbleMarkResolver().resolve([0.7, 0.9, 0.1]) == NO_SELECTION

    def test_resolve_when_no_marks_then_no_selection(self):
        assert BubbleMarkResolver().resolve([0.3, 0.4, 0.5]) == NO_SELECTION

    def test_resolve_when_no_options_then_no_selection(self):
        assert BubbleMarkResolver().resolve([]) == NO_SELECTION

    def test_resolve_when_numpy_input_then_plain_int(self):
        option = BubbleMarkResolver().resolve(np.array([0.0, 0.0, 0.0, 0.95]))
        assert option == 3
        assert type(option) is int

    def test_marked_options_when_several_then_all_in_order(self):
        assert BubbleMarkResolver().marked_options([0.9, 0.1, 0.6, 0.61]) == [0, 2, 3]
