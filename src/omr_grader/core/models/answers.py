"""
Module: answers

Purpose:
    Provides the Answer dataclass - one response unit for one question,
    whether it came from a student's sheet or from the answer key.
    The answer type decides which field carries the response.

Key Functions:
    - Answer.multiple_choice(q, option): Option-index answer
    - Answer.true_false(q, is_true): True/False answer (0 = true, 1 = false)
    - Answer.fill_in_blank(q, text): Text answer
    - Answer.empty(q): Default answer with nothing selected

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - grading.answer_key.AnswerKey
    - grading.comparator.AnswerComparator
    - grading.score_calculator.ScoreCalculator
    - extraction.sheet.AnswerExtractor
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


NO_SELECTION = -1
"""Sentinel option index: nothing (or more than one option) was marked."""

TRUE_OPTION = 0
FALSE_OPTION = 1


class AnswerType(str, Enum):
    """Kind of question an answer belongs to."""
    MULTIPLE_CHOICE = "multiple_choice"
    FILL_IN_BLANK = "fill_in_blank"
    TRUE_FALSE = "true_false"

    @property
    def token(self) -> str:
        """Short token used in answer key files ("MC", "FILL", "TF")."""
        return _TOKENS[self]

    @classmethod
    def from_token(cls, token: str) -> AnswerType:
        """
        Look up a type by its answer key token.

        Tokens are matched exactly (case-sensitive).

        Raises:
            ValueError: If the token is not one of MC, FILL, TF
        """
        for member, member_token in _TOKENS.items():
            if member_token == token:
                return member
        raise ValueError(f"Unknown answer type token: {token!r}")

    @property
    def uses_option(self) -> bool:
        """Whether answers of this type are carried by selected_option."""
        return self is not AnswerType.FILL_IN_BLANK

    def __str__(self) -> str:
        return self.value


_TOKENS = {
    AnswerType.MULTIPLE_CHOICE: "MC",
    AnswerType.FILL_IN_BLANK: "FILL",
    AnswerType.TRUE_FALSE: "TF",
}


@dataclass(frozen=True, slots=True)
class Answer:
    """
    One response unit (immutable).

    Attributes:
        question_number: Question this answer belongs to
        type: Kind of question
        selected_option: 0-based option index, or NO_SELECTION (-1)
        text_answer: Free text for fill-in-the-blank, empty otherwise

    Invariants:
        - FILL_IN_BLANK answers have selected_option == NO_SELECTION
        - MULTIPLE_CHOICE / TRUE_FALSE answers have empty text_answer
        - selected_option >= NO_SELECTION

    Example:
        >>> a = Answer.multiple_choice(3, 2)
        >>> a.selected_option
        2
        >>> Answer.true_false(4, False).selected_option
        1
    """

    question_number: int
    type: AnswerType = AnswerType.MULTIPLE_CHOICE
    selected_option: int = NO_SELECTION
    text_answer: str = ""

    def __post_init__(self) -> None:
        """Validate that the type decides which field is meaningful."""
        if not isinstance(self.type, AnswerType):
            raise ValueError(f"Invalid answer type: {self.type!r}")
        if self.selected_option < NO_SELECTION:
            raise ValueError(f"selected_option cannot be below -1: {self.selected_option}")
        if self.type is AnswerType.FILL_IN_BLANK and self.selected_option != NO_SELECTION:
            raise ValueError(
                f"Fill-in-the-blank answer for question {self.question_number} "
                f"cannot select option {self.selected_option}"
            )
        if self.type.uses_option and self.text_answer:
            raise ValueError(
                f"{self.type.token} answer for question {self.question_number} "
                f"cannot carry text {self.text_answer!r}"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def multiple_choice(cls, question_number: int, option: int) -> Answer:
        """Create a multiple choice answer selecting a 0-based option."""
        return cls(question_number, AnswerType.MULTIPLE_CHOICE, selected_option=option)

    @classmethod
    def true_false(cls, question_number: int, is_true: bool) -> Answer:
        """Create a True/False answer. True is stored as option 0, False as 1."""
        option = TRUE_OPTION if is_true else FALSE_OPTION
        return cls(question_number, AnswerType.TRUE_FALSE, selected_option=option)

    @classmethod
    def fill_in_blank(cls, question_number: int, text: str) -> Answer:
        """Create a fill-in-the-blank answer."""
        return cls(question_number, AnswerType.FILL_IN_BLANK, text_answer=text)

    @classmethod
    def empty(cls, question_number: int = 0) -> Answer:
        """Default answer: multiple choice with nothing selected."""
        return cls(question_number)

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_blank(self) -> bool:
        """True when no option is selected and no text was given."""
        return self.selected_option == NO_SELECTION and not self.text_answer

    @property
    def value_token(self) -> str:
        """Value as written in an answer key file line."""
        if self.type is AnswerType.FILL_IN_BLANK:
            return self.text_answer
        if self.type is AnswerType.TRUE_FALSE:
            return "T" if self.selected_option == TRUE_OPTION else "F"
        return str(self.selected_option)

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dictionary."""
        return {
            "question": self.question_number,
            "type": self.type.token,
            "option": self.selected_option,
            "text": self.text_answer,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Answer:
        """
        Deserialize from a dictionary produced by to_dict().

        Missing option/text fall back to their defaults.

        Raises:
            ValueError: If the type token is unknown or fields break invariants
            KeyError: If question or type is missing
        """
        answer_type = AnswerType.from_token(data["type"])
        return cls(
            question_number=int(data["question"]),
            type=answer_type,
            selected_option=int(data.get("option", NO_SELECTION)),
            text_answer=data.get("text", "") or "",
        )
