from __future__ import annotations

import logging

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from app.core.error_codes import ErrorCode
from app.core.errors import NotFoundError, ValidationError
from app.core.ids import parse_id
from app.models import Course
from app.schemas.courses import CourseDefinition

logger = logging.getLogger(__name__)


def course_definition(course: Course) -> CourseDefinition:
    try:
        return CourseDefinition(
            id=str(course.id),
            title=course.title,
            description=course.description,
            category=course.category,
            sections=course.sections or [],
        )
    except PydanticValidationError as exc:
        logger.error("stored course is malformed course_id=%s errors=%s", course.id, exc.errors())
        raise ValidationError(code=ErrorCode.COURSE_INVALID, message="Course content is malformed") from exc


class CourseCatalog:
    """Read-only access to course definitions."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_course_row(self, course_id: str) -> Course:
        key = parse_id(course_id, code=ErrorCode.COURSE_NOT_FOUND, message="Course not found")
        course = self.db.get(Course, key)
        if not course:
            raise NotFoundError(code=ErrorCode.COURSE_NOT_FOUND, message="Course not found")
        return course

    def load_course(self, course_id: str, *, active_only: bool = True) -> CourseDefinition:
        course = self.get_course_row(course_id)
        if active_only and course.status != "active":
            raise NotFoundError(code=ErrorCode.COURSE_INACTIVE, message="Course is not available")
        return course_definition(course)
