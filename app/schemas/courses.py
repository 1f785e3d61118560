from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, model_validator

QuestionType = Literal["text", "multiple-choice", "boolean"]
CourseStatus = Literal["active", "inactive"]


class QuestionDefinition(BaseModel):
    text: str = Field(min_length=1)
    type: QuestionType = "text"
    options: list[str] = Field(default_factory=list)
    required: bool = True
    correct_answer: str | None = None

    @model_validator(mode="after")
    def _check_options(self) -> "QuestionDefinition":
        if self.type == "multiple-choice":
            if len(self.options) < 2:
                raise ValueError("Multiple choice questions must have at least two options")
            if any(not option.strip() for option in self.options):
                raise ValueError("Multiple choice options must not be blank")
            if len(set(self.options)) != len(self.options):
                raise ValueError("Multiple choice options must be unique")
        elif self.options:
            raise ValueError(f"Options are only allowed on multiple-choice questions, not '{self.type}'")
        return self


class SectionDefinition(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    order: int = Field(ge=0)
    questions: list[QuestionDefinition] = Field(min_length=1)


def check_section_order(sections: list[SectionDefinition]) -> None:
    """Section order values must read 0, 1, 2, ... in list order."""
    for index, section in enumerate(sections):
        if section.order != index:
            raise ValueError(f"Section '{section.title}' has order {section.order}, expected {index}")


class CourseDefinition(BaseModel):
    """The read-only course tree a learner walks through."""

    id: str
    title: str
    description: str = ""
    category: str = ""
    sections: list[SectionDefinition] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_order(self) -> "CourseDefinition":
        check_section_order(self.sections)
        return self

    @property
    def total_questions(self) -> int:
        return sum(len(section.questions) for section in self.sections)


class CourseSummary(BaseModel):
    id: str
    title: str
    description: str
    category: str
    image_url: str = ""
    status: CourseStatus
    section_count: int
    question_count: int
    created_at: str


class CourseDetailResponse(CourseSummary):
    sections: list[SectionDefinition]


class CoursesListResponse(BaseModel):
    courses: list[CourseSummary]
    total: int


class CourseProgressItem(BaseModel):
    course_id: str
    course_title: str
    course_category: str
    course_image_url: str = ""
    section_count: int
    current_section: int
    completion_percentage: int
    completed: bool
    started_at: datetime
    updated_at: datetime
    completed_at: datetime | None = None


class CourseProgressListResponse(BaseModel):
    items: list[CourseProgressItem]
