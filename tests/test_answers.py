import pytest

from app.core.error_codes import ErrorCode
from app.core.errors import ValidationError
from app.schemas.courses import QuestionDefinition
from app.services.answers import BoolAnswer, ChoiceAnswer, TextAnswer, parse_answer

BOOLEAN = QuestionDefinition(text="Ready?", type="boolean")
CHOICE = QuestionDefinition(text="Pick one", type="multiple-choice", options=["Mop", "Broom"])
TEXT = QuestionDefinition(text="Describe", type="text")
OPTIONAL_TEXT = QuestionDefinition(text="Comments", type="text", required=False)


@pytest.mark.parametrize("raw,expected", [(True, True), (False, False), ("true", True), (" False ", False)])
def test_boolean_question_accepts_bools_and_bool_strings(raw, expected):
    answer = parse_answer(BOOLEAN, raw)

    assert answer == BoolAnswer(expected)
    assert answer.to_storage() == ("true" if expected else "false")


@pytest.mark.parametrize("raw", ["yes", "1", ""])
def test_boolean_question_rejects_other_strings(raw):
    with pytest.raises(ValidationError) as exc:
        parse_answer(BOOLEAN, raw)
    assert exc.value.code == ErrorCode.INVALID_ANSWER
    assert exc.value.status_code == 422


def test_choice_must_be_one_of_the_options():
    assert parse_answer(CHOICE, "Mop") == ChoiceAnswer("Mop")
    with pytest.raises(ValidationError):
        parse_answer(CHOICE, "Vacuum")


def test_non_boolean_questions_reject_bools():
    with pytest.raises(ValidationError):
        parse_answer(TEXT, True)
    with pytest.raises(ValidationError):
        parse_answer(CHOICE, False)


def test_required_text_rejects_blank_but_optional_allows_it():
    with pytest.raises(ValidationError):
        parse_answer(TEXT, "   ")

    assert parse_answer(OPTIONAL_TEXT, "") == TextAnswer("")
    assert parse_answer(TEXT, "Report it to the supervisor").to_storage() == "Report it to the supervisor"


def test_typed_answer_is_revalidated_against_question():
    assert parse_answer(BOOLEAN, BoolAnswer(True)) == BoolAnswer(True)
    with pytest.raises(ValidationError):
        parse_answer(CHOICE, TextAnswer("Vacuum"))
