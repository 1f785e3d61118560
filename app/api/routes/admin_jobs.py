from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.admin_auth import require_admin
from app.core.session_context import SessionContext
from app.db.session import get_db
from app.schemas.jobs import (
    ApplicationListResponse,
    ApplicationOut,
    ApplicationStatusUpdateRequest,
    JobCreateRequest,
    JobListResponse,
    JobOut,
    JobUpdateRequest,
)
from app.services.job_service import (
    application_out,
    create_job,
    job_out,
    list_job_applications,
    list_jobs,
    update_application_status,
    update_job,
)

router = APIRouter(prefix="/v1/admin/jobs", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("", response_model=JobListResponse)
def list_all_jobs(
    status: str | None = Query(default=None),
    search: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> JobListResponse:
    jobs = list_jobs(db, status=status)
    if search:
        needle = search.strip().lower()
        jobs = [
            job for job in jobs
            if needle in job.title.lower() or needle in job.project.lower() or needle in job.location.lower()
        ]
    items = [job_out(job) for job in jobs]
    return JobListResponse(jobs=items, total=len(items))


@router.post("", response_model=JobOut, status_code=201)
def create_job_endpoint(
    payload: JobCreateRequest,
    context: SessionContext = Depends(require_admin),
    db: Session = Depends(get_db),
) -> JobOut:
    return job_out(create_job(db, payload, created_by=context.user.id))


@router.patch("/{job_id}", response_model=JobOut)
def update_job_endpoint(
    job_id: str,
    payload: JobUpdateRequest,
    db: Session = Depends(get_db),
) -> JobOut:
    return job_out(update_job(db, job_id, payload))


@router.get("/{job_id}/applications", response_model=ApplicationListResponse)
def list_applications_for_job(job_id: str, db: Session = Depends(get_db)) -> ApplicationListResponse:
    applications = [application_out(a, job, user) for a, job, user in list_job_applications(db, job_id)]
    return ApplicationListResponse(applications=applications, total=len(applications))


@router.patch("/applications/{application_id}", response_model=ApplicationOut)
def update_application(
    application_id: str,
    payload: ApplicationStatusUpdateRequest,
    db: Session = Depends(get_db),
) -> ApplicationOut:
    application, job, user = update_application_status(db, application_id, payload)
    return application_out(application, job, user)
