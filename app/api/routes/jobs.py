from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import CurrentUser
from app.core.config import get_settings
from app.db.session import get_db
from app.schemas.jobs import ApplicationListResponse, ApplicationOut, ApplyRequest, JobListResponse, JobOut
from app.services.job_service import (
    application_out,
    apply_for_job,
    get_job_or_404,
    job_out,
    list_jobs,
    list_user_applications,
    recent_jobs,
)

router = APIRouter(prefix="/v1/jobs", tags=["jobs"])


@router.get("", response_model=JobListResponse)
def list_jobs_endpoint(
    current_user: CurrentUser,
    category: str | None = Query(default=None),
    location: str | None = Query(default=None),
    status: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> JobListResponse:
    jobs = [job_out(job) for job in list_jobs(db, category=category, location=location, status=status)]
    return JobListResponse(jobs=jobs, total=len(jobs))


@router.get("/recent", response_model=JobListResponse)
def list_recent_jobs(
    current_user: CurrentUser,
    limit: int | None = Query(default=None, ge=1, le=50),
    db: Session = Depends(get_db),
) -> JobListResponse:
    jobs = [job_out(job) for job in recent_jobs(db, limit or get_settings().recent_jobs_limit)]
    return JobListResponse(jobs=jobs, total=len(jobs))


@router.get("/applications/mine", response_model=ApplicationListResponse)
def list_my_applications(current_user: CurrentUser, db: Session = Depends(get_db)) -> ApplicationListResponse:
    rows = list_user_applications(db, current_user.id)
    applications = [application_out(application, job, user) for application, job, user in rows]
    return ApplicationListResponse(applications=applications, total=len(applications))


@router.get("/{job_id}", response_model=JobOut)
def get_job(job_id: str, current_user: CurrentUser, db: Session = Depends(get_db)) -> JobOut:
    return job_out(get_job_or_404(db, job_id))


@router.post("/{job_id}/apply", response_model=ApplicationOut, status_code=status.HTTP_201_CREATED)
def apply(
    job_id: str,
    current_user: CurrentUser,
    payload: ApplyRequest | None = None,
    db: Session = Depends(get_db),
) -> ApplicationOut:
    application = apply_for_job(db, current_user, job_id, payload.message if payload else "")
    return application_out(application, get_job_or_404(db, job_id), current_user)
