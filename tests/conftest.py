import os
from uuid import uuid4

# Settings are read once; point them at an in-memory database before the app is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DATA"] = "false"
os.environ["LOG_DIR"] = ""
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models import Course
from app.services.auth_service import ensure_admin

SAMPLE_SECTIONS = [
    {
        "title": "Introduction",
        "description": "Welcome",
        "order": 0,
        "questions": [
            {"text": "Are you ready to begin?", "type": "boolean"},
            {"text": "What is your name?", "type": "text"},
        ],
    },
    {
        "title": "Chemicals",
        "description": "",
        "order": 1,
        "questions": [
            {"text": "Where do you check handling instructions?", "type": "multiple-choice",
             "options": ["Safety Data Sheet", "The bottle colour"]},
        ],
    },
    {
        "title": "Wrap up",
        "description": "",
        "order": 2,
        "questions": [
            {"text": "Any comments?", "type": "text", "required": False},
        ],
    },
]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def register(client, *, email: str | None = None, password: str | None = None, display_name: str = "Test Cleaner"):
    email = email or f"cleaner_{uuid4().hex[:8]}@example.com"
    password = password or f"Pwd-{uuid4().hex[:10]}"
    resp = client.post(
        "/v1/auth/register",
        json={"email": email, "password": password, "display_name": display_name},
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return {"Authorization": f"Bearer {body['access_token']}"}, body["user"]


@pytest.fixture
def user_headers(client):
    headers, _ = register(client)
    return headers


@pytest.fixture
def admin_headers(client, db_session):
    email = f"admin_{uuid4().hex[:8]}@example.com"
    password = f"Pwd-{uuid4().hex[:10]}"
    ensure_admin(db_session, email=email, password=password, display_name="Site Admin")
    resp = client.post("/v1/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def make_course(db_session):
    def _make(*, title: str = "Office Cleaning Essentials", status: str = "active", sections=None) -> Course:
        course = Course(
            title=title,
            description="Induction for office sites",
            category="Office Cleaning",
            status=status,
            sections=SAMPLE_SECTIONS if sections is None else sections,
        )
        db_session.add(course)
        db_session.commit()
        db_session.refresh(course)
        return course

    return _make


@pytest.fixture
def signup(client):
    def _signup(**kwargs):
        return register(client, **kwargs)

    return _signup
