import json

import pytest
from pydantic import ValidationError
from sqlalchemy import func, select

from app.db.seed import SAMPLE_COURSE_TITLE, seed_if_needed
from app.models import Course
from app.schemas.courses import CourseDefinition
from app.scripts.import_course import load_course
from app.services.auth_service import authenticate, ensure_admin
from conftest import SAMPLE_SECTIONS


def test_seed_is_idempotent_and_well_formed(db_session):
    seed_if_needed(db_session)
    seed_if_needed(db_session)

    courses = db_session.execute(select(Course).where(Course.title == SAMPLE_COURSE_TITLE)).scalars().all()
    assert len(courses) == 1
    definition = CourseDefinition(id=str(courses[0].id), title=courses[0].title, sections=courses[0].sections)
    assert definition.total_questions == 4


def test_ensure_admin_promotes_existing_user(db_session):
    user, created = ensure_admin(db_session, email="Boss@Example.com", password="First-pass1")
    assert created is True
    assert user.role == "admin"

    again, created = ensure_admin(db_session, email="boss@example.com", password="Second-pass1", display_name="Boss")
    assert created is False
    assert again.id == user.id
    assert again.display_name == "Boss"
    assert authenticate(db_session, email="boss@example.com", password="Second-pass1").id == user.id
    assert db_session.execute(select(func.count()).select_from(Course)).scalar_one() == 0


def test_import_course_validates_file(tmp_path):
    good = tmp_path / "course.json"
    good.write_text(
        json.dumps({"title": "Childcare", "description": "Centres", "category": "Childcare", "sections": SAMPLE_SECTIONS}),
        encoding="utf-8",
    )
    assert len(load_course(good).sections) == 3

    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"title": "Childcare", "description": "Centres", "category": "C", "sections": []}), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_course(bad)
