from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import CurrentUser
from app.core.security import now_utc
from app.db.session import get_db
from app.schemas.progress import AnswerRequest, NavigateRequest, TrackerResponse, TrackerState
from app.services.course_tracker import CourseTracker, Transition
from app.services.training_service import open_tracker

router = APIRouter(prefix="/v1/training", tags=["training"])


def _response(tracker: CourseTracker, transition: Transition) -> TrackerResponse:
    return TrackerResponse(
        state=tracker.snapshot(),
        moved=transition.moved,
        warning=transition.warning,
        server_time=now_utc(),
    )


@router.get("/{course_id}", response_model=TrackerState)
def get_training_state(course_id: str, current_user: CurrentUser, db: Session = Depends(get_db)) -> TrackerState:
    tracker = open_tracker(db, current_user, course_id)
    return tracker.snapshot()


@router.put("/{course_id}/answer", response_model=TrackerResponse)
def save_answer(
    course_id: str,
    payload: AnswerRequest,
    current_user: CurrentUser,
    db: Session = Depends(get_db),
) -> TrackerResponse:
    tracker = open_tracker(db, current_user, course_id)
    tracker.record_answer(payload.answer)
    return _response(tracker, tracker.save())


@router.post("/{course_id}/next", response_model=TrackerResponse)
def next_question(
    course_id: str,
    current_user: CurrentUser,
    payload: NavigateRequest | None = None,
    db: Session = Depends(get_db),
) -> TrackerResponse:
    tracker = open_tracker(db, current_user, course_id)
    if payload is not None and payload.answer is not None and not tracker.completed:
        tracker.record_answer(payload.answer)
    return _response(tracker, tracker.advance())


@router.post("/{course_id}/previous", response_model=TrackerResponse)
def previous_question(
    course_id: str,
    current_user: CurrentUser,
    payload: NavigateRequest | None = None,
    db: Session = Depends(get_db),
) -> TrackerResponse:
    tracker = open_tracker(db, current_user, course_id)
    if payload is not None and payload.answer is not None and not tracker.completed:
        tracker.record_answer(payload.answer)
    return _response(tracker, tracker.retreat())
