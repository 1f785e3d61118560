"""
Course progress tracker.

Walks one learner linearly through a course's section/question tree:

    InProgress(section, question) --advance--> InProgress(...) | Completed
    InProgress(section, question) --retreat--> InProgress(...)

Completed is terminal. Answers are keyed "<section>_<question>". Every move
is followed by a checkpoint written through the progress store; a failed
checkpoint is reported back as a warning and never undoes the move.
"""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Protocol

from app.core.error_codes import ErrorCode
from app.core.errors import PersistenceError, ValidationError
from app.core.security import now_utc
from app.schemas.courses import CourseDefinition, QuestionDefinition, SectionDefinition
from app.schemas.progress import ProgressRecord, TrackerState
from app.services.answers import Answer, parse_answer

logger = logging.getLogger(__name__)


class ProgressStore(Protocol):
    def upsert(self, learner_id: uuid.UUID, course_id: str, payload: dict[str, Any]) -> Any: ...


@dataclass(frozen=True)
class Transition:
    moved: bool
    completed: bool
    warning: str | None = None


def answer_key(section: int, question: int) -> str:
    return f"{section}_{question}"


def percentage(answered: int, total: int) -> int:
    if total <= 0:
        return 0
    # Half-up rounding, so 2.5 -> 3 rather than banker's 2.
    return int(math.floor(100 * answered / total + 0.5))


class CourseTracker:
    def __init__(
        self,
        course: CourseDefinition,
        *,
        store: ProgressStore | None = None,
        learner_id: uuid.UUID | None = None,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self.course = course
        self.store = store
        self.learner_id = learner_id
        self.clock = clock

        self.current_section = 0
        self.current_question = 0
        self.answers: dict[str, str] = {}
        self.completed = False
        self.completed_at: datetime | None = None
        self.last_warning: str | None = None

    @classmethod
    def initialize(
        cls,
        course: CourseDefinition,
        record: ProgressRecord | None = None,
        *,
        store: ProgressStore | None = None,
        learner_id: uuid.UUID | None = None,
        clock: Callable[[], datetime] = now_utc,
    ) -> "CourseTracker":
        tracker = cls(course, store=store, learner_id=learner_id, clock=clock)
        if record is not None:
            tracker._restore(record)
        return tracker

    def _restore(self, record: ProgressRecord) -> None:
        self.answers = dict(record.answers or {})
        self.completed = bool(record.completed)
        if self.completed:
            self.completed_at = record.completed_at
            self.current_section, self.current_question = self.section_count, 0
            return

        section, question = record.current_section, record.current_question
        if self.section_count == 0:
            section, question = 0, 0
        elif section >= self.section_count or section < 0:
            # The course shrank since this checkpoint; resume at its last question.
            logger.info(
                "restored position out of range course=%s position=%s,%s", self.course.id, section, question
            )
            section = self.section_count - 1
            question = len(self.course.sections[section].questions) - 1
        else:
            last_question = len(self.course.sections[section].questions) - 1
            question = min(max(question, 0), last_question)
        self.current_section, self.current_question = section, question

    # ── accessors ─────────────────────────────────────────────────────────────

    @property
    def section_count(self) -> int:
        return len(self.course.sections)

    @property
    def total_questions(self) -> int:
        return self.course.total_questions

    @property
    def position(self) -> tuple[int, int]:
        return self.current_section, self.current_question

    @property
    def current_key(self) -> str:
        return answer_key(self.current_section, self.current_question)

    @property
    def current_section_data(self) -> SectionDefinition | None:
        if self.completed or self.current_section >= self.section_count:
            return None
        return self.course.sections[self.current_section]

    @property
    def current_question_data(self) -> QuestionDefinition | None:
        section = self.current_section_data
        if section is None:
            return None
        return section.questions[self.current_question]

    @property
    def current_answer(self) -> str | None:
        return self.answers.get(self.current_key)

    @property
    def is_first(self) -> bool:
        return not self.completed and self.position == (0, 0)

    @property
    def is_last(self) -> bool:
        if self.completed or self.section_count == 0:
            return False
        last_section = self.section_count - 1
        return (
            self.current_section == last_section
            and self.current_question == len(self.course.sections[last_section].questions) - 1
        )

    @property
    def answered_count(self) -> int:
        count = 0
        for section_index, section in enumerate(self.course.sections):
            for question_index in range(len(section.questions)):
                if answer_key(section_index, question_index) in self.answers:
                    count += 1
        return count

    def completion_percentage(self) -> int:
        return percentage(self.answered_count, self.total_questions)

    # ── operations ────────────────────────────────────────────────────────────

    def record_answer(self, value: str | bool | Answer) -> Answer:
        question = self.current_question_data
        if question is None:
            raise ValidationError(code=ErrorCode.COURSE_ALREADY_COMPLETED, message="There is no open question to answer")
        answer = parse_answer(question, value)
        self.answers[self.current_key] = answer.to_storage()
        return answer

    def advance(self) -> Transition:
        if self.completed:
            return Transition(moved=False, completed=True)

        section = self.current_section_data
        if section is not None and self.current_question < len(section.questions) - 1:
            self.current_question += 1
        elif self.current_section < self.section_count - 1:
            self.current_section += 1
            self.current_question = 0
        else:
            self.completed = True
            self.completed_at = self.clock()
            self.current_section, self.current_question = self.section_count, 0
            logger.info("course completed course=%s learner=%s", self.course.id, self.learner_id)
            return Transition(moved=True, completed=True, warning=self.checkpoint(True))

        logger.debug("advance course=%s position=%s", self.course.id, self.position)
        return Transition(moved=True, completed=False, warning=self.checkpoint(False))

    def retreat(self) -> Transition:
        if self.completed:
            return Transition(moved=False, completed=True)

        moved = True
        if self.current_question > 0:
            self.current_question -= 1
        elif self.current_section > 0:
            self.current_section -= 1
            self.current_question = len(self.course.sections[self.current_section].questions) - 1
        else:
            moved = False

        logger.debug("retreat course=%s position=%s moved=%s", self.course.id, self.position, moved)
        return Transition(moved=moved, completed=False, warning=self.checkpoint(False))

    def save(self) -> Transition:
        """Checkpoint the current position and answers without moving."""
        return Transition(moved=False, completed=self.completed, warning=self.checkpoint(self.completed))

    def checkpoint_payload(self, is_completed: bool) -> dict[str, Any]:
        completed_at = None
        if is_completed:
            completed_at = self.completed_at or self.clock()
        return {
            "current_section": self.current_section,
            "current_question": self.current_question,
            "answers": dict(self.answers),
            "completion_percentage": self.completion_percentage(),
            "completed": is_completed,
            "completed_at": completed_at,
        }

    def checkpoint(self, is_completed: bool) -> str | None:
        """Persist the tracker state. Returns a warning message when the write fails."""
        if self.store is None or self.learner_id is None:
            return None
        try:
            self.store.upsert(self.learner_id, self.course.id, self.checkpoint_payload(is_completed))
        except PersistenceError as exc:
            logger.warning("checkpoint failed course=%s learner=%s: %s", self.course.id, self.learner_id, exc.message)
            self.last_warning = exc.message
            return exc.message
        self.last_warning = None
        return None

    def snapshot(self) -> TrackerState:
        section = self.current_section_data
        return TrackerState(
            course_id=self.course.id,
            course_title=self.course.title,
            section_count=self.section_count,
            total_questions=self.total_questions,
            current_section=self.current_section,
            current_question=self.current_question,
            section_title=section.title if section else None,
            section_description=section.description if section else None,
            questions_in_section=len(section.questions) if section else 0,
            question=self.current_question_data,
            current_answer=None if self.completed else self.current_answer,
            answers=dict(self.answers),
            completion_percentage=self.completion_percentage(),
            completed=self.completed,
            completed_at=self.completed_at,
            is_first=self.is_first,
            is_last=self.is_last,
        )
