from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.error_codes import ErrorCode
from app.core.errors import ApiError, NotFoundError, ValidationError
from app.core.ids import parse_id
from app.models import Job, JobApplication, User
from app.schemas.jobs import ApplicationOut, ApplicationStatusUpdateRequest, JobCreateRequest, JobOut, JobUpdateRequest

logger = logging.getLogger(__name__)


def job_out(job: Job) -> JobOut:
    return JobOut(
        id=str(job.id),
        title=job.title,
        project=job.project,
        description=job.description,
        location=job.location,
        category=job.category,
        start_date=job.start_date,
        end_date=job.end_date,
        pay_rate=job.pay_rate,
        hours_per_day=job.hours_per_day,
        cleaners_needed=job.cleaners_needed,
        status=job.status,
        created_at=job.created_at.isoformat(),
    )


def application_out(application: JobApplication, job: Job, applicant: User) -> ApplicationOut:
    return ApplicationOut(
        id=str(application.id),
        job_id=str(job.id),
        job_title=job.title,
        user_id=str(applicant.id),
        applicant_name=applicant.display_name,
        status=application.status,
        message=application.message,
        admin_notes=application.admin_notes,
        applied_at=application.applied_at.isoformat(),
    )


def get_job_or_404(db: Session, job_id: str) -> Job:
    key = parse_id(job_id, code=ErrorCode.JOB_NOT_FOUND, message="Job not found")
    job = db.get(Job, key)
    if not job:
        raise NotFoundError(code=ErrorCode.JOB_NOT_FOUND, message="Job not found")
    return job


def list_jobs(
    db: Session,
    *,
    category: str | None = None,
    location: str | None = None,
    status: str | None = None,
) -> list[Job]:
    stmt = select(Job)
    if category:
        stmt = stmt.where(Job.category == category)
    if location:
        stmt = stmt.where(Job.location == location)
    if status:
        stmt = stmt.where(Job.status == status)
    return db.execute(stmt.order_by(Job.start_date.desc())).scalars().all()


def recent_jobs(db: Session, limit: int) -> list[Job]:
    return db.execute(select(Job).order_by(Job.created_at.desc()).limit(limit)).scalars().all()


def create_job(db: Session, payload: JobCreateRequest, *, created_by: uuid.UUID | None) -> Job:
    job = Job(
        title=payload.title.strip(),
        project=payload.project.strip(),
        description=payload.description.strip(),
        location=payload.location.strip(),
        category=payload.category.strip(),
        start_date=payload.start_date,
        end_date=payload.end_date,
        pay_rate=payload.pay_rate,
        hours_per_day=payload.hours_per_day,
        cleaners_needed=payload.cleaners_needed,
        status="open",
        created_by=created_by,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("job created id=%s title=%s", job.id, job.title)
    return job


def update_job(db: Session, job_id: str, payload: JobUpdateRequest) -> Job:
    job = get_job_or_404(db, job_id)
    for field, value in payload.model_dump(exclude_none=True).items():
        setattr(job, field, value.strip() if isinstance(value, str) else value)
    if job.end_date < job.start_date:
        db.rollback()
        raise ValidationError(code=ErrorCode.JOB_INVALID, message="end_date must not be before start_date")
    db.commit()
    db.refresh(job)
    return job


def apply_for_job(db: Session, user: User, job_id: str, message: str) -> JobApplication:
    job = get_job_or_404(db, job_id)
    if job.status != "open":
        raise ApiError(status_code=409, code=ErrorCode.JOB_NOT_OPEN, message="Job is not open for applications")

    application = JobApplication(user_id=user.id, job_id=job.id, message=message.strip(), status="pending")
    db.add(application)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ApiError(status_code=409, code=ErrorCode.ALREADY_APPLIED, message="Already applied for this job") from exc
    db.refresh(application)
    logger.info("application created id=%s job=%s user=%s", application.id, job.id, user.id)
    return application


def list_user_applications(db: Session, user_id: uuid.UUID) -> list[tuple[JobApplication, Job, User]]:
    stmt = (
        select(JobApplication, Job, User)
        .join(Job, JobApplication.job_id == Job.id)
        .join(User, JobApplication.user_id == User.id)
        .where(JobApplication.user_id == user_id)
        .order_by(JobApplication.applied_at.desc())
    )
    return [tuple(row) for row in db.execute(stmt).all()]


def list_job_applications(db: Session, job_id: str) -> list[tuple[JobApplication, Job, User]]:
    job = get_job_or_404(db, job_id)
    stmt = (
        select(JobApplication, Job, User)
        .join(Job, JobApplication.job_id == Job.id)
        .join(User, JobApplication.user_id == User.id)
        .where(JobApplication.job_id == job.id)
        .order_by(JobApplication.applied_at.desc())
    )
    return [tuple(row) for row in db.execute(stmt).all()]


def update_application_status(
    db: Session, application_id: str, payload: ApplicationStatusUpdateRequest
) -> tuple[JobApplication, Job, User]:
    key = parse_id(application_id, code=ErrorCode.APPLICATION_NOT_FOUND, message="Application not found")
    application = db.get(JobApplication, key)
    if not application:
        raise NotFoundError(code=ErrorCode.APPLICATION_NOT_FOUND, message="Application not found")
    application.status = payload.status
    if payload.admin_notes is not None:
        application.admin_notes = payload.admin_notes.strip()
    db.commit()
    db.refresh(application)
    logger.info("application %s -> %s", application.id, application.status)
    return application, db.get(Job, application.job_id), db.get(User, application.user_id)
