from typing import Literal

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.api.admin_auth import require_admin
from app.core.error_codes import ErrorCode
from app.core.errors import NotFoundError
from app.core.ids import parse_id
from app.db.session import get_db
from app.models import Course, Job, JobApplication, User
from app.schemas.auth import CREDENTIAL_TYPES, CredentialOut, ProfileOut
from app.services.profile_service import credential_out, list_credentials, profile_out, set_credential_verified

router = APIRouter(prefix="/v1/admin", tags=["admin"], dependencies=[Depends(require_admin)])


class AdminUserDetail(ProfileOut):
    created_at: str
    credentials: list[CredentialOut]


class AdminUserListResponse(BaseModel):
    users: list[ProfileOut]
    total: int


class AdminUserUpdateRequest(BaseModel):
    role: Literal["cleaner", "admin"] | None = None
    status: Literal["pending", "active", "suspended"] | None = None


class CredentialVerifyRequest(BaseModel):
    verified: bool


class AdminDashboardResponse(BaseModel):
    total_cleaners: int
    total_jobs: int
    open_jobs: int
    total_courses: int
    pending_applications: int


def _get_user_or_404(db: Session, user_id: str) -> User:
    user = db.get(User, parse_id(user_id, code=ErrorCode.USER_NOT_FOUND, message="User not found"))
    if not user:
        raise NotFoundError(code=ErrorCode.USER_NOT_FOUND, message="User not found")
    return user


def _count(db: Session, stmt) -> int:
    return int(db.execute(stmt).scalar_one())


@router.get("/users", response_model=AdminUserListResponse)
def list_users(
    role: Literal["cleaner", "admin"] = Query(default="cleaner"),
    status: str | None = Query(default=None),
    search: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> AdminUserListResponse:
    stmt = select(User).where(User.role == role).order_by(User.created_at.desc())
    if status:
        stmt = stmt.where(User.status == status)
    if search:
        pattern = f"%{search.strip().lower()}%"
        stmt = stmt.where(func.lower(User.email).like(pattern) | func.lower(User.display_name).like(pattern))
    users = [profile_out(user) for user in db.execute(stmt).scalars().all()]
    return AdminUserListResponse(users=users, total=len(users))


@router.get("/users/{user_id}", response_model=AdminUserDetail)
def get_user(user_id: str, db: Session = Depends(get_db)) -> AdminUserDetail:
    user = _get_user_or_404(db, user_id)
    return AdminUserDetail(
        **profile_out(user).model_dump(),
        created_at=user.created_at.isoformat(),
        credentials=[credential_out(doc) for doc in list_credentials(db, user.id)],
    )


@router.patch("/users/{user_id}", response_model=ProfileOut)
def update_user(user_id: str, payload: AdminUserUpdateRequest, db: Session = Depends(get_db)) -> ProfileOut:
    user = _get_user_or_404(db, user_id)
    if payload.role is not None:
        user.role = payload.role
    if payload.status is not None:
        user.status = payload.status
    db.commit()
    db.refresh(user)
    return profile_out(user)


@router.patch("/users/{user_id}/credentials/{doc_type}", response_model=CredentialOut)
def verify_credential(
    user_id: str,
    payload: CredentialVerifyRequest,
    doc_type: str = Path(pattern=CREDENTIAL_TYPES),
    db: Session = Depends(get_db),
) -> CredentialOut:
    return credential_out(set_credential_verified(db, user_id, doc_type, payload.verified))


@router.get("/dashboard", response_model=AdminDashboardResponse)
def admin_dashboard(db: Session = Depends(get_db)) -> AdminDashboardResponse:
    return AdminDashboardResponse(
        total_cleaners=_count(db, select(func.count()).select_from(User).where(User.role == "cleaner")),
        total_jobs=_count(db, select(func.count()).select_from(Job)),
        open_jobs=_count(db, select(func.count()).select_from(Job).where(Job.status == "open")),
        total_courses=_count(db, select(func.count()).select_from(Course)),
        pending_applications=_count(
            db, select(func.count()).select_from(JobApplication).where(JobApplication.status == "pending")
        ),
    )
