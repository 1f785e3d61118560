from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import Course, CourseProgress, User
from app.schemas.courses import CourseProgressItem
from app.services.course_catalog import CourseCatalog
from app.services.course_tracker import CourseTracker
from app.services.progress_store import SqlProgressStore


def open_tracker(db: Session, user: User, course_id: str) -> CourseTracker:
    """Load the course and the learner's checkpoint (if any) into a fresh tracker."""
    course = CourseCatalog(db).load_course(course_id)
    store = SqlProgressStore(db)
    record = store.load(user.id, course.id)
    return CourseTracker.initialize(course, record, store=store, learner_id=user.id)


def list_progress(db: Session, user_id: uuid.UUID, *, completed: bool | None = None) -> list[CourseProgressItem]:
    stmt = (
        select(CourseProgress, Course)
        .join(Course, CourseProgress.course_id == Course.id)
        .where(CourseProgress.user_id == user_id)
        .order_by(CourseProgress.updated_at.desc())
    )
    if completed is not None:
        stmt = stmt.where(CourseProgress.completed.is_(completed))

    items: list[CourseProgressItem] = []
    for progress, course in db.execute(stmt).all():
        items.append(
            CourseProgressItem(
                course_id=str(course.id),
                course_title=course.title,
                course_category=course.category,
                course_image_url=course.image_url,
                section_count=len(course.sections or []),
                current_section=progress.current_section,
                completion_percentage=progress.completion_percentage,
                completed=progress.completed,
                started_at=progress.started_at,
                updated_at=progress.updated_at,
                completed_at=progress.completed_at,
            )
        )
    return items
