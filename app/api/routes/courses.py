from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import CurrentUser
from app.db.session import get_db
from app.models import Course
from app.schemas.courses import (
    CourseDetailResponse,
    CourseProgressListResponse,
    CoursesListResponse,
    CourseSummary,
)
from app.services.course_catalog import CourseCatalog
from app.services.training_service import list_progress

router = APIRouter(prefix="/v1/courses", tags=["courses"])


def course_summary(course: Course) -> CourseSummary:
    sections = course.sections or []
    return CourseSummary(
        id=str(course.id),
        title=course.title,
        description=course.description,
        category=course.category,
        image_url=course.image_url,
        status=course.status,
        section_count=len(sections),
        question_count=sum(len(section.get("questions", [])) for section in sections),
        created_at=course.created_at.isoformat(),
    )


def course_detail(course: Course) -> CourseDetailResponse:
    return CourseDetailResponse(**course_summary(course).model_dump(), sections=course.sections or [])


@router.get("", response_model=CoursesListResponse)
def list_courses(
    current_user: CurrentUser,
    category: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> CoursesListResponse:
    stmt = select(Course).where(Course.status == "active").order_by(Course.title.asc())
    if category:
        stmt = stmt.where(Course.category == category)
    courses = [course_summary(course) for course in db.execute(stmt).scalars().all()]
    return CoursesListResponse(courses=courses, total=len(courses))


@router.get("/in-progress", response_model=CourseProgressListResponse)
def list_in_progress(current_user: CurrentUser, db: Session = Depends(get_db)) -> CourseProgressListResponse:
    return CourseProgressListResponse(items=list_progress(db, current_user.id, completed=False))


@router.get("/completed", response_model=CourseProgressListResponse)
def list_completed(current_user: CurrentUser, db: Session = Depends(get_db)) -> CourseProgressListResponse:
    return CourseProgressListResponse(items=list_progress(db, current_user.id, completed=True))


@router.get("/{course_id}", response_model=CourseDetailResponse)
def get_course(course_id: str, current_user: CurrentUser, db: Session = Depends(get_db)) -> CourseDetailResponse:
    catalog = CourseCatalog(db)
    catalog.load_course(course_id)
    return course_detail(catalog.get_course_row(course_id))
