import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.models import Course
from app.services.auth_service import ensure_admin

logger = logging.getLogger(__name__)

SAMPLE_COURSE_TITLE = "Office Cleaning Essentials"


def seed_if_needed(db: Session) -> None:
    settings = get_settings()
    if settings.bootstrap_admin_email and settings.bootstrap_admin_password:
        user, created = ensure_admin(
            db, email=settings.bootstrap_admin_email, password=settings.bootstrap_admin_password
        )
        logger.info("bootstrap admin %s email=%s", "created" if created else "refreshed", user.email)

    existing_course = db.execute(select(Course).where(Course.title == SAMPLE_COURSE_TITLE)).scalars().first()
    if existing_course:
        return

    course = Course(
        title=SAMPLE_COURSE_TITLE,
        description="Induction course for cleaners working on commercial office sites.",
        category="Office Cleaning",
        status="active",
        sections=[
            {
                "title": "Introduction",
                "description": "Welcome to the course",
                "order": 0,
                "questions": [
                    {"text": "Are you ready to begin?", "type": "boolean", "options": [], "required": True},
                ],
            },
            {
                "title": "Chemical Safety",
                "description": "Handling and storing cleaning chemicals on site.",
                "order": 1,
                "questions": [
                    {
                        "text": "Where should you check a chemical's handling instructions?",
                        "type": "multiple-choice",
                        "options": ["Safety Data Sheet", "The bottle colour", "Ask the client"],
                        "correct_answer": "Safety Data Sheet",
                        "required": True,
                    },
                    {
                        "text": "Bleach and ammonia-based products can be mixed safely.",
                        "type": "boolean",
                        "options": [],
                        "correct_answer": "false",
                        "required": True,
                    },
                ],
            },
            {
                "title": "Client Sites",
                "description": "Working in occupied offices.",
                "order": 2,
                "questions": [
                    {
                        "text": "Describe how you would report a hazard you find on site.",
                        "type": "text",
                        "options": [],
                        "required": True,
                    },
                ],
            },
        ],
    )
    db.add(course)
    db.commit()
    logger.info("seeded sample course id=%s", course.id)
