"""
Typed answers.

Each question type accepts exactly one answer shape:

    text             -> TextAnswer(str)
    multiple-choice  -> ChoiceAnswer(str), one of the question's options
    boolean          -> BoolAnswer(bool), from a JSON bool or "true"/"false"

Answers are persisted as plain strings (`to_storage`) so a progress record's
answer map stays a flat str -> str mapping.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from app.core.error_codes import ErrorCode
from app.core.errors import ValidationError
from app.schemas.courses import QuestionDefinition


@dataclass(frozen=True)
class TextAnswer:
    value: str

    def to_storage(self) -> str:
        return self.value


@dataclass(frozen=True)
class ChoiceAnswer:
    value: str

    def to_storage(self) -> str:
        return self.value


@dataclass(frozen=True)
class BoolAnswer:
    value: bool

    def to_storage(self) -> str:
        return "true" if self.value else "false"


Answer = Union[TextAnswer, ChoiceAnswer, BoolAnswer]

_BOOL_STRINGS = {"true": True, "false": False}


def _invalid(message: str) -> ValidationError:
    return ValidationError(code=ErrorCode.INVALID_ANSWER, message=message)


def parse_answer(question: QuestionDefinition, raw: str | bool | Answer) -> Answer:
    if isinstance(raw, (TextAnswer, ChoiceAnswer, BoolAnswer)):
        raw = raw.value

    if question.type == "boolean":
        if isinstance(raw, bool):
            return BoolAnswer(raw)
        if isinstance(raw, str) and raw.strip().lower() in _BOOL_STRINGS:
            return BoolAnswer(_BOOL_STRINGS[raw.strip().lower()])
        raise _invalid("Boolean questions accept only true or false")

    if isinstance(raw, bool):
        raise _invalid(f"A {question.type} question does not accept a boolean answer")

    if question.type == "multiple-choice":
        if raw not in question.options:
            raise _invalid(f"'{raw}' is not one of the question's options")
        return ChoiceAnswer(raw)

    if question.required and not raw.strip():
        raise _invalid("This question requires a non-empty answer")
    return TextAnswer(raw)
