from __future__ import annotations

import logging

from sqlalchemy import case, func, select
from sqlalchemy import delete as sql_delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.error_codes import ErrorCode
from app.core.errors import PersistenceError
from app.models import Course, CourseProgress
from app.schemas.admin_courses import AdminCourseCreateRequest, AdminCourseUpdateRequest
from app.services.course_catalog import CourseCatalog

logger = logging.getLogger(__name__)


def create_course(db: Session, payload: AdminCourseCreateRequest) -> Course:
    course = Course(
        title=payload.title.strip(),
        description=payload.description.strip(),
        category=payload.category.strip(),
        image_url=payload.image_url.strip(),
        status=payload.status,
        sections=[section.model_dump() for section in payload.sections],
    )
    db.add(course)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError(code=ErrorCode.COURSE_SAVE_FAILED, message="Failed to save course") from exc
    db.refresh(course)
    logger.info("course created id=%s title=%s sections=%d", course.id, course.title, len(course.sections))
    return course


def get_course_or_404(db: Session, course_id: str) -> Course:
    return CourseCatalog(db).get_course_row(course_id)


def update_course(db: Session, course_id: str, payload: AdminCourseUpdateRequest) -> Course:
    course = get_course_or_404(db, course_id)
    for field in ["title", "description", "category", "image_url", "status"]:
        value = getattr(payload, field, None)
        if value is not None:
            setattr(course, field, value.strip() if isinstance(value, str) else value)
    if payload.sections is not None:
        course.sections = [section.model_dump() for section in payload.sections]
    db.commit()
    db.refresh(course)
    logger.info("course updated id=%s", course.id)
    return course


def list_all_courses(
    db: Session,
    *,
    search: str | None = None,
    category: str | None = None,
) -> list[tuple[Course, int, int]]:
    """Return all courses (newest first) with started and completed learner counts."""
    stmt = select(Course).order_by(Course.created_at.desc())
    if category:
        stmt = stmt.where(Course.category == category)
    if search:
        pattern = f"%{search.strip().lower()}%"
        stmt = stmt.where(func.lower(Course.title).like(pattern) | func.lower(Course.description).like(pattern))
    courses = db.execute(stmt).scalars().all()
    if not courses:
        return []

    course_ids = [c.id for c in courses]
    counts_result = db.execute(
        select(
            CourseProgress.course_id,
            func.count(CourseProgress.id).label("started"),
            func.sum(case((CourseProgress.completed.is_(True), 1), else_=0)).label("completed"),
        )
        .where(CourseProgress.course_id.in_(course_ids))
        .group_by(CourseProgress.course_id)
    ).all()
    count_map = {row.course_id: (row.started, int(row.completed or 0)) for row in counts_result}
    return [(course, *count_map.get(course.id, (0, 0))) for course in courses]


def delete_course(db: Session, course_id: str, *, hard: bool = False) -> None:
    """Deactivate a course; with hard=True delete it together with its progress records."""
    course = get_course_or_404(db, course_id)
    if not hard:
        course.status = "inactive"
        db.commit()
        logger.info("course deactivated id=%s", course.id)
        return

    db.execute(sql_delete(CourseProgress).where(CourseProgress.course_id == course.id))
    db.delete(course)
    db.commit()
    logger.info("course deleted id=%s", course_id)
