from pydantic import BaseModel, Field, model_validator

from app.schemas.courses import CourseDetailResponse, CourseStatus, CourseSummary, SectionDefinition, check_section_order


class AdminCourseCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    category: str = Field(min_length=1, max_length=120)
    image_url: str = ""
    status: CourseStatus = "active"
    sections: list[SectionDefinition] = Field(min_length=1)

    @model_validator(mode="after")
    def _check_order(self) -> "AdminCourseCreateRequest":
        check_section_order(self.sections)
        return self


class AdminCourseUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1, max_length=120)
    image_url: str | None = None
    status: CourseStatus | None = None
    # Replaces the whole section tree when given.
    sections: list[SectionDefinition] | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def _check_order(self) -> "AdminCourseUpdateRequest":
        if self.sections is not None:
            check_section_order(self.sections)
        return self


class AdminCourseSummaryResponse(CourseSummary):
    learners_started: int
    learners_completed: int


class AdminCourseListResponse(BaseModel):
    courses: list[AdminCourseSummaryResponse]
    total: int


class AdminCourseResponse(CourseDetailResponse):
    updated_at: str
