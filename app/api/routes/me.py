from fastapi import APIRouter, Depends, Path, Response, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.deps import CurrentUser
from app.core.config import get_settings
from app.db.session import get_db
from app.schemas.auth import (
    CREDENTIAL_TYPES,
    CredentialListResponse,
    CredentialOut,
    CredentialUpsertRequest,
    ProfileOut,
    ProfileUpdateRequest,
    UserOut,
)
from app.schemas.courses import CourseProgressItem
from app.schemas.jobs import ApplicationOut, JobOut
from app.services.auth_service import user_out
from app.services.job_service import application_out, job_out, list_user_applications, recent_jobs
from app.services.profile_service import (
    credential_out,
    delete_credential,
    list_credentials,
    profile_out,
    update_profile,
    upsert_credential,
)
from app.services.training_service import list_progress

router = APIRouter(prefix="/v1", tags=["users"])


class DashboardResponse(BaseModel):
    user: UserOut
    recent_jobs: list[JobOut]
    applications: list[ApplicationOut]
    courses_in_progress: list[CourseProgressItem]
    courses_completed: int


@router.get("/me", response_model=UserOut)
def me(current_user: CurrentUser) -> UserOut:
    return user_out(current_user)


@router.get("/me/profile", response_model=ProfileOut)
def get_profile(current_user: CurrentUser) -> ProfileOut:
    return profile_out(current_user)


@router.patch("/me/profile", response_model=ProfileOut)
def patch_profile(payload: ProfileUpdateRequest, current_user: CurrentUser, db: Session = Depends(get_db)) -> ProfileOut:
    return profile_out(update_profile(db, current_user, payload))


@router.get("/me/credentials", response_model=CredentialListResponse)
def get_credentials(current_user: CurrentUser, db: Session = Depends(get_db)) -> CredentialListResponse:
    return CredentialListResponse(credentials=[credential_out(doc) for doc in list_credentials(db, current_user.id)])


@router.put("/me/credentials/{doc_type}", response_model=CredentialOut)
def put_credential(
    payload: CredentialUpsertRequest,
    current_user: CurrentUser,
    doc_type: str = Path(pattern=CREDENTIAL_TYPES),
    db: Session = Depends(get_db),
) -> CredentialOut:
    return credential_out(upsert_credential(db, current_user.id, doc_type, payload))


@router.delete("/me/credentials/{doc_type}", status_code=status.HTTP_204_NO_CONTENT)
def remove_credential(
    current_user: CurrentUser,
    doc_type: str = Path(pattern=CREDENTIAL_TYPES),
    db: Session = Depends(get_db),
) -> Response:
    delete_credential(db, current_user.id, doc_type)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me/dashboard", response_model=DashboardResponse)
def dashboard(current_user: CurrentUser, db: Session = Depends(get_db)) -> DashboardResponse:
    progress = list_progress(db, current_user.id)
    return DashboardResponse(
        user=user_out(current_user),
        recent_jobs=[job_out(job) for job in recent_jobs(db, get_settings().recent_jobs_limit)],
        applications=[application_out(a, job, user) for a, job, user in list_user_applications(db, current_user.id)],
        courses_in_progress=[item for item in progress if not item.completed],
        courses_completed=sum(1 for item in progress if item.completed),
    )
