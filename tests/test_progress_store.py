import uuid

import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import PersistenceError
from app.models import User
from app.services.progress_store import SqlProgressStore


@pytest.fixture
def learner(db_session):
    user = User(email=f"store_{uuid.uuid4().hex[:6]}@example.com", display_name="Store")
    db_session.add(user)
    db_session.commit()
    return user


def test_upsert_creates_then_merges(db_session, learner, make_course):
    course = make_course()
    store = SqlProgressStore(db_session)
    assert store.load(learner.id, course.id) is None

    created = store.upsert(learner.id, str(course.id), {"current_question": 1, "answers": {"0_0": "true"}})
    assert created.started_at is not None
    assert created.current_section == 0

    merged = store.upsert(learner.id, course.id, {"current_section": 1, "current_question": 0, "ignored": "x"})
    loaded = store.load(learner.id, course.id)

    assert merged.answers == {"0_0": "true"}
    assert (loaded.current_section, loaded.current_question) == (1, 0)
    assert loaded.started_at == created.started_at


def test_failed_write_raises_persistence_error(db_session, learner, make_course, monkeypatch):
    course = make_course()
    store = SqlProgressStore(db_session)

    def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db_session, "commit", failing_commit)

    with pytest.raises(PersistenceError) as exc:
        store.upsert(learner.id, course.id, {"current_question": 1})
    assert exc.value.code == "PROGRESS_SAVE_FAILED"
    assert exc.value.status_code == 503
