from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.courses import QuestionDefinition


class ProgressRecord(BaseModel):
    """One learner's checkpoint within one course."""

    model_config = ConfigDict(from_attributes=True)

    current_section: int = 0
    current_question: int = 0
    answers: dict[str, str] = Field(default_factory=dict)
    completion_percentage: int = 0
    completed: bool = False
    started_at: datetime | None = None
    updated_at: datetime | None = None
    completed_at: datetime | None = None


class TrackerState(BaseModel):
    course_id: str
    course_title: str
    section_count: int
    total_questions: int
    current_section: int
    current_question: int
    section_title: str | None = None
    section_description: str | None = None
    questions_in_section: int = 0
    question: QuestionDefinition | None = None
    current_answer: str | None = None
    answers: dict[str, str]
    completion_percentage: int
    completed: bool
    completed_at: datetime | None = None
    is_first: bool
    is_last: bool


class AnswerRequest(BaseModel):
    answer: str | bool


class NavigateRequest(BaseModel):
    # Recorded on the current question before moving.
    answer: str | bool | None = None


class TrackerResponse(BaseModel):
    state: TrackerState
    moved: bool
    warning: str | None = None
    server_time: datetime
