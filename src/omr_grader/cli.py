"""
Command-line entry point: grade one sheet's answers against a key file.

Usage:
    omr-grade answer_key.txt answers.json [--config grading.json] [--json] [-v]

answers.json is either a list of answers
    [{"question": 1, "type": "MC", "option": 2}, {"question": 2, "type": "FILL", "text": "ankar"}]
or an object with region readings to extract answers from first
    {"regions": [{"question": 1, "type": "MC", "fills": [0.1, 0.8, 0.2]}, ...]}
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

from . import __version__
from .config import GradingConfig, load_config
from .core.models.answers import Answer
from .extraction.sheet import RegionReading
from .grading.answer_key import AnswerKey
from .grading.score_calculator import STATISTIC_NAMES

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BAD_INPUT = 1
EXIT_NO_KEY = 2


def _read_answers(data: Any, config: GradingConfig) -> List[Answer]:
    if isinstance(data, dict) and "regions" in data:
        readings = [RegionReading.from_dict(item) for item in data["regions"]]
        return config.build_extractor().extract(readings)
    if isinstance(data, list):
        return [Answer.from_dict(item) for item in data]
    raise ValueError("answers file must hold a list of answers or an object with 'regions'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="omr-grade",
        description="Grade extracted exam sheet answers against an answer key",
    )
    parser.add_argument("key", type=Path, help="Answer key file (questionNum,TYPE,value lines)")
    parser.add_argument("answers", type=Path, help="JSON file with answers or region readings")
    parser.add_argument("--config", type=Path, help="JSON grading configuration")
    parser.add_argument("--strict", action="store_true", help="Fail on malformed answer key lines")
    parser.add_argument("--json", action="store_true", help="Print the full score as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-question decisions")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else GradingConfig()
    except (OSError, TypeError, AttributeError, ValueError) as e:
        logger.error(f"Invalid configuration {args.config}: {e}")
        return EXIT_BAD_INPUT

    key = AnswerKey()
    try:
        loaded = key.load_from_file(args.key, strict=args.strict)
    except ValueError as e:
        logger.error(str(e))
        return EXIT_NO_KEY
    if not loaded:
        logger.error(f"Answer key not found or unreadable: {args.key}")
        return EXIT_NO_KEY

    try:
        with open(args.answers, "r", encoding="utf-8") as f:
            answers = _read_answers(json.load(f), config)
    except (OSError, KeyError, TypeError, AttributeError, ValueError) as e:
        logger.error(f"Could not read answers from {args.answers}: {e}")
        return EXIT_BAD_INPUT

    calculator = config.build_score_calculator(key)
    score = calculator.calculate_score(answers)

    if args.json:
        print(json.dumps(score.to_dict(), indent=2, ensure_ascii=False))
    else:
        stats = calculator.get_statistics(score)
        for name in STATISTIC_NAMES:
            value = stats[name]
            shown = f"{value:.2f}" if name in ("Raw Score", "Percentage", "Accuracy Rate") else f"{value:.0f}"
            print(f"{name:<18} {shown}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
