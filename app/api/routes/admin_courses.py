from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.admin_auth import require_admin
from app.api.routes.courses import course_detail, course_summary
from app.db.session import get_db
from app.models import Course
from app.schemas.admin_courses import (
    AdminCourseCreateRequest,
    AdminCourseListResponse,
    AdminCourseResponse,
    AdminCourseSummaryResponse,
    AdminCourseUpdateRequest,
)
from app.services.admin_course_service import (
    create_course,
    delete_course,
    get_course_or_404,
    list_all_courses,
    update_course,
)

router = APIRouter(prefix="/v1/admin/courses", tags=["admin"], dependencies=[Depends(require_admin)])


def _course_response(course: Course) -> AdminCourseResponse:
    return AdminCourseResponse(**course_detail(course).model_dump(), updated_at=course.updated_at.isoformat())


@router.get("", response_model=AdminCourseListResponse)
def list_courses(
    search: str | None = Query(default=None),
    category: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> AdminCourseListResponse:
    items = [
        AdminCourseSummaryResponse(
            **course_summary(course).model_dump(), learners_started=started, learners_completed=completed
        )
        for course, started, completed in list_all_courses(db, search=search, category=category)
    ]
    return AdminCourseListResponse(courses=items, total=len(items))


@router.post("", response_model=AdminCourseResponse, status_code=201)
def create_course_endpoint(
    payload: AdminCourseCreateRequest,
    db: Session = Depends(get_db),
) -> AdminCourseResponse:
    return _course_response(create_course(db, payload))


@router.get("/{course_id}", response_model=AdminCourseResponse)
def get_course(
    course_id: str,
    db: Session = Depends(get_db),
) -> AdminCourseResponse:
    return _course_response(get_course_or_404(db, course_id))


@router.patch("/{course_id}", response_model=AdminCourseResponse)
def update_course_endpoint(
    course_id: str,
    payload: AdminCourseUpdateRequest,
    db: Session = Depends(get_db),
) -> AdminCourseResponse:
    return _course_response(update_course(db, course_id, payload))


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_course_endpoint(
    course_id: str,
    hard: bool = Query(default=False, description="Delete the course and its progress records instead of deactivating"),
    db: Session = Depends(get_db),
) -> Response:
    delete_course(db, course_id, hard=hard)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
