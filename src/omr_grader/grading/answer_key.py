"""
Module: grading.answer_key

Purpose:
    Ordered store of canonical answers, one per question number, with
    load/save in a line-oriented text format:

        # comment
        1,MC,2
        5,FILL,Istanbul
        16,TF,T

    TYPE is MC (0-based option index), FILL (arbitrary text, may contain
    commas) or TF (T/1 for true, anything else false). Lines without two
    commas or with an unknown TYPE are skipped.

Key Classes:
    - AnswerKey: Mapping of question number to canonical Answer

Dependencies:
    - common.file_locking: Shared/exclusive locks on key files
    - core.models.answers

Used By:
    - grading.score_calculator.ScoreCalculator
    - grading.presets
    - cli
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from ..common.file_locking import locked_file
from ..core.models.answers import Answer, AnswerType
from ..exceptions import AnswerKeyFormatError

logger = logging.getLogger(__name__)

HEADER_LINES = (
    "# Answer Key",
    "# Format: questionNum,type,answer",
)

PathLike = Union[str, Path]


class AnswerKey:
    """
    Canonical answers keyed by question number.

    Adding an answer for a question that already has one replaces it.
    Iteration and saving are always in ascending question order.

    Example:
        >>> key = AnswerKey()
        >>> key.add_multiple_choice_answer(1, 2)
        >>> key.add_true_false_answer(2, True)
        >>> key.get_total_questions()
        2
        >>> key.get_answer(99).selected_option
        -1
    """

    def __init__(self) -> None:
        self._answers: Dict[int, Answer] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # Building
    # ─────────────────────────────────────────────────────────────────────────

    def add_multiple_choice_answer(self, question_num: int, correct_option: int) -> None:
        """
        Store a multiple choice answer (0-based option index).

        Any question number is accepted. The option may be -1 (no correct
        option) or higher; anything lower breaks the Answer invariant.

        Raises:
            ValueError: If correct_option is below -1
        """
        self._store(Answer.multiple_choice(question_num, correct_option))

    def add_fill_in_blank_answer(self, question_num: int, correct_text: str) -> None:
        self._store(Answer.fill_in_blank(question_num, correct_text))

    def add_true_false_answer(self, question_num: int, is_true: bool) -> None:
        """Store a True/False answer (option 0 for true, 1 for false)."""
        self._store(Answer.true_false(question_num, is_true))

    def _store(self, answer: Answer) -> None:
        self._answers[answer.question_number] = answer

    def clear(self) -> None:
        self._answers.clear()

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    def get_answer(self, question_num: int) -> Answer:
        """
        Get the canonical answer for a question.

        Returns:
            The stored answer, or Answer.empty() (multiple choice, option -1)
            when the key has no entry. The empty answer is a sentinel, not
            an error.
        """
        answer = self._answers.get(question_num)
        if answer is None:
            return Answer.empty()
        return answer

    def has_answer(self, question_num: int) -> bool:
        return question_num in self._answers

    def get_total_questions(self) -> int:
        """Number of distinct question numbers stored."""
        return len(self._answers)

    def question_numbers(self) -> List[int]:
        return sorted(self._answers)

    def __len__(self) -> int:
        return len(self._answers)

    def __contains__(self, question_num: object) -> bool:
        return question_num in self._answers

    def __iter__(self) -> Iterator[Answer]:
        for question_num in sorted(self._answers):
            yield self._answers[question_num]

    def copy(self) -> AnswerKey:
        """Independent copy, for mutating a key while another run reads it."""
        clone = AnswerKey()
        clone._answers = dict(self._answers)
        return clone

    # ─────────────────────────────────────────────────────────────────────────
    # Persistence
    # ─────────────────────────────────────────────────────────────────────────

    def load_from_file(self, path: PathLike, *, strict: bool = False) -> bool:
        """
        Replace the key's contents with answers read from a file.

        Args:
            path: Answer key file
            strict: Raise on malformed lines instead of skipping them

        Returns:
            False if the file cannot be opened (the key is left unchanged),
            True otherwise.

        Raises:
            AnswerKeyFormatError: If strict and any line is malformed. The
                key is left unchanged.
        """
        try:
            with locked_file(path, 'rb') as f:
                raw_lines = f.read().splitlines()
        except OSError as e:
            logger.warning(f"Could not open answer key file {path}: {e}")
            return False

        parsed: Dict[int, Answer] = {}
        errors: List[str] = []
        for line_no, raw_line in enumerate(raw_lines, start=1):
            # Decoded per line so one badly encoded line is skipped like any other
            try:
                line = raw_line.decode('utf-8-sig' if line_no == 1 else 'utf-8')
            except UnicodeDecodeError:
                errors.append(f"line {line_no}: not valid UTF-8 {raw_line!r}")
                continue
            if not line or line.startswith('#'):
                continue
            answer = parse_key_line(line)
            if answer is None:
                errors.append(f"line {line_no}: {line!r}")
                continue
            parsed[answer.question_number] = answer

        if errors:
            if strict:
                raise AnswerKeyFormatError(
                    f"{len(errors)} malformed line(s) in {path}", path=path, errors=errors
                )
            logger.debug(f"Skipped {len(errors)} malformed line(s) in {path}")

        self._answers = parsed
        logger.info(f"Loaded {len(parsed)} answers from {Path(path).name}")
        return True

    def save_to_file(self, path: PathLike) -> bool:
        """
        Write the key in the text format, preceded by a two-line header.

        Fill-in answers containing a line break cannot be written as one
        line; the save is refused and an existing file is left untouched.

        Returns:
            True on success, False if the file cannot be written or an
            answer cannot be formatted.
        """
        try:
            lines = [format_key_line(answer) for answer in self]
        except ValueError as e:
            logger.warning(f"Not saving answer key to {path}: {e}")
            return False

        try:
            with locked_file(path, 'w') as f:
                f.write("\n".join(HEADER_LINES) + "\n\n")
                for line in lines:
                    f.write(line + "\n")
        except OSError as e:
            logger.warning(f"Could not write answer key file {path}: {e}")
            return False

        logger.info(f"Saved {len(self._answers)} answers to {Path(path).name}")
        return True


def format_key_line(answer: Answer) -> str:
    """
    Format one answer as a ``questionNum,TYPE,value`` line.

    Raises:
        ValueError: If the value contains a line break
    """
    value = answer.value_token
    if '\n' in value or '\r' in value:
        raise ValueError(f"question {answer.question_number}: value {value!r} spans several lines")
    return f"{answer.question_number},{answer.type.token},{value}"


def parse_key_line(line: str) -> Optional[Answer]:
    """
    Parse one ``questionNum,TYPE,value`` line.

    Everything after the second comma is the value, so FILL answers may
    contain commas. TF values are true only for the exact tokens "T" and
    "1".

    Returns:
        The parsed Answer, or None if the line is malformed.
    """
    parts = line.split(',', 2)
    if len(parts) < 3:
        return None
    number_text, type_token, value = parts

    try:
        question_num = int(number_text.strip())
        answer_type = AnswerType.from_token(type_token)
    except ValueError:
        return None

    if answer_type is AnswerType.FILL_IN_BLANK:
        return Answer.fill_in_blank(question_num, value)
    if answer_type is AnswerType.TRUE_FALSE:
        return Answer.true_false(question_num, value in ("T", "1"))

    try:
        option = int(value.strip())
    except ValueError:
        return None
    if option < -1:
        return None
    return Answer.multiple_choice(question_num, option)
