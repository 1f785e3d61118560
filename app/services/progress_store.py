from __future__ import annotations

import logging
import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.error_codes import ErrorCode
from app.core.errors import PersistenceError
from app.core.security import now_utc
from app.models import CourseProgress
from app.schemas.progress import ProgressRecord

logger = logging.getLogger(__name__)

MERGEABLE_FIELDS = (
    "current_section",
    "current_question",
    "answers",
    "completion_percentage",
    "completed",
    "completed_at",
)


class SqlProgressStore:
    """
    One CourseProgress row per (learner, course).

    `upsert` creates the row with started_at=now when absent, otherwise merges
    the given fields into it and bumps updated_at. Writes are last-write-wins;
    there is no version check.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def _row(self, learner_id: uuid.UUID, course_id: uuid.UUID) -> CourseProgress | None:
        return self.db.execute(
            select(CourseProgress).where(
                CourseProgress.user_id == learner_id,
                CourseProgress.course_id == course_id,
            )
        ).scalars().first()

    def load(self, learner_id: uuid.UUID, course_id: str | uuid.UUID) -> ProgressRecord | None:
        row = self._row(learner_id, uuid.UUID(str(course_id)))
        if row is None:
            return None
        return ProgressRecord.model_validate(row)

    def upsert(self, learner_id: uuid.UUID, course_id: str | uuid.UUID, payload: dict[str, Any]) -> ProgressRecord:
        course_key = uuid.UUID(str(course_id))
        fields = {key: payload[key] for key in MERGEABLE_FIELDS if key in payload}
        now = now_utc()
        try:
            row = self._row(learner_id, course_key)
            if row is None:
                row = CourseProgress(user_id=learner_id, course_id=course_key, started_at=now, updated_at=now, **fields)
                self.db.add(row)
            else:
                for key, value in fields.items():
                    setattr(row, key, value)
                row.updated_at = now
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.warning("progress write failed user=%s course=%s: %s", learner_id, course_key, exc)
            raise PersistenceError(code=ErrorCode.PROGRESS_SAVE_FAILED, message="Failed to save progress") from exc

        self.db.refresh(row)
        return ProgressRecord.model_validate(row)
