import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import omr_grader
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from omr_grader.grading.answer_key import AnswerKey  # noqa: E402
from omr_grader.grading.comparator import AnswerComparator  # noqa: E402


# Common test fixtures
@pytest.fixture
def scenario_key():
    """Three-question key: 1 MC (C), 2 FILL (Ankara), 3 TF (true)."""
    key = AnswerKey()
    key.add_multiple_choice_answer(1, 2)
    key.add_fill_in_blank_answer(2, "Ankara")
    key.add_true_false_answer(3, True)
    return key


@pytest.fixture
def comparator():
    """Case-insensitive comparator."""
    return AnswerComparator()


@pytest.fixture
def key_file(tmp_path: Path):
    """Answer key file with 3 valid lines, 1 malformed line and comments."""
    path = tmp_path / "answer_key.txt"
    path.write_text(
        "# Answer Key\n"
        "# Format: questionNum,type,answer\n"
        "\n"
        "1,MC,2\n"
        "2,FILL,Ankara\n"
        "this line is malformed\n"
        "3,TF,T\n",
        encoding="utf-8",
    )
    return path
