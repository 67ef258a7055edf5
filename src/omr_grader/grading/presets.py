"""
Sample answer key for demos and smoke tests.

Nothing in the package loads this implicitly; callers that want it pass
the returned key into the score calculator themselves.
"""

from __future__ import annotations

from .answer_key import AnswerKey

# Questions 1-10: multiple choice, 0-based (A=0 ... E=4)
EXAMPLE_MULTIPLE_CHOICE = {1: 2, 2: 0, 3: 3, 4: 1, 5: 4, 6: 2, 7: 0, 8: 3, 9: 1, 10: 2}
# Questions 11-15: fill in the blank
EXAMPLE_FILL_IN_BLANK = {
    11: "Istanbul",
    12: "1923",
    13: "Ankara",
    14: "Mustafa Kemal",
    15: "Cumhuriyet",
}
# Questions 16-20: true/false
EXAMPLE_TRUE_FALSE = {16: True, 17: False, 18: True, 19: True, 20: False}


def example_answer_key() -> AnswerKey:
    """Build a fresh 20-question key (10 MC, 5 fill-in, 5 true/false)."""
    key = AnswerKey()
    for question_num, option in EXAMPLE_MULTIPLE_CHOICE.items():
        key.add_multiple_choice_answer(question_num, option)
    for question_num, text in EXAMPLE_FILL_IN_BLANK.items():
        key.add_fill_in_blank_answer(question_num, text)
    for question_num, is_true in EXAMPLE_TRUE_FALSE.items():
        key.add_true_false_answer(question_num, is_true)
    return key
