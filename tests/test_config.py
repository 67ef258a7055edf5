"""
Unit Tests for GradingConfig

Tests validation, dictionary/JSON loading and the component builders.
"""

import json
import logging

import pytest

from omr_grader.config import GradingConfig, load_config
from omr_grader.core.models.answers import Answer
from omr_grader.extraction.sheet import AnswerExtractor


class TestGradingConfigValidation:

    def test_defaults_when_created_then_documented_values(self):
        config = GradingConfig()
        assert config.case_sensitive is False
        assert config.fill_threshold == 0.6
        assert config.min_handwriting_density == 0.05
        assert config.points_per_question == 1.0
        assert config.partial_credit_enabled is True
        assert config.partial_credit_threshold == 0.7
        assert config.ocr_min_confidence is None
        assert config.omit_unresolved is False

    @pytest.mark.parametrize("kwargs", [
        {"fill_threshold": 1.5},
        {"min_handwriting_density": -0.1},
        {"partial_credit_threshold": 2.0},
        {"points_per_question": 0.0},
        {"question_points": {3: -1.0}},
        {"ocr_min_confidence": 101.0},
    ])
    def test_create_when_out_of_range_then_raises(self, kwargs):
        with pytest.raises(ValueError):
            GradingConfig(**kwargs)


class TestGradingConfigSerialization:

    def test_from_dict_when_json_keys_then_question_points_are_ints(self):
        config = GradingConfig.from_dict({"question_points": {"13": 2}})
        assert config.question_points == {13: 2.0}

    def test_from_dict_when_unknown_key_then_warns_and_ignores(self, caplog):
        with caplog.at_level(logging.WARNING):
            config = GradingConfig.from_dict({"case_sensitive": True, "colour": "red"})
        assert config.case_sensitive is True
        assert "colour" in caplog.text

    def test_to_dict_when_reloaded_then_same_config(self):
        config = GradingConfig(question_points={4: 3.0}, ocr_min_confidence=55.0)
        assert GradingConfig.from_dict(config.to_dict()) == config

    def test_load_config_when_json_object_then_config(self, tmp_path):
        path = tmp_path / "grading.json"
        path.write_text(json.dumps({"fill_threshold": 0.5, "omit_unresolved": True}), encoding="utf-8")
        config = load_config(path)
        assert config.fill_threshold == 0.5
        assert config.omit_unresolved is True

    def test_load_config_when_not_object_then_raises(self, tmp_path):
        path = tmp_path / "grading.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)

    def test_load_config_when_missing_then_oserror(self, tmp_path):
        with pytest.raises(OSError):
            load_config(tmp_path / "missing.json")


class TestGradingConfigBuilders:

    def test_build_score_calculator_when_weights_then_applied(self, scenario_key):
        config = GradingConfig(
            points_per_question=2.0,
            question_points={3: 5.0},
            partial_credit_enabled=False,
            partial_credit_threshold=0.9,
        )
        calculator = config.build_score_calculator(scenario_key)

        assert calculator.question_points(1) == 2.0
        assert calculator.question_points(3) == 5.0
        assert calculator.partial_credit_enabled is False
        assert calculator.partial_credit_threshold == 0.9
        assert calculator.strict is False

    def test_build_score_calculator_when_case_sensitive_then_comparator_respects_case(self, scenario_key):
        calculator = GradingConfig(case_sensitive=True, partial_credit_enabled=False).build_score_calculator(scenario_key)
        score = calculator.calculate_score([Answer.fill_in_blank(2, "ankara")])
        assert score.correct_answers == 0
        assert score.incorrect_answers == 1

    def test_build_extractor_when_configured_then_components_share_settings(self):
        extractor = GradingConfig(fill_threshold=0.4, min_handwriting_density=0.1,
                                  ocr_min_confidence=30.0, omit_unresolved=True).build_extractor()
        assert isinstance(extractor, AnswerExtractor)
        assert extractor.resolver.fill_threshold == 0.4
        assert extractor.fuser.min_density == 0.1
        assert extractor.ocr_min_confidence == 30.0
        assert extractor.omit_unresolved is True
