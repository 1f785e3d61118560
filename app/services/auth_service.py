import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.error_codes import ErrorCode
from app.core.errors import ApiError
from app.core.security import create_access_token, hash_password, verify_password
from app.models import User
from app.schemas.auth import AuthResponse, UserOut

logger = logging.getLogger(__name__)

settings = get_settings()


def user_out(user: User) -> UserOut:
    return UserOut(
        id=str(user.id),
        email=user.email,
        display_name=user.display_name,
        role=user.role,
        status=user.status,
        profile_complete=user.profile_complete,
    )


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == email.lower().strip())).scalars().first()


def register_user(db: Session, *, email: str, password: str, display_name: str | None) -> User:
    email = email.lower().strip()
    if find_user_by_email(db, email):
        raise ApiError(status_code=400, code=ErrorCode.EMAIL_ALREADY_REGISTERED, message="Email already registered")

    user = User(
        email=email,
        display_name=(display_name or email.split("@")[0]).strip(),
        password_hash=hash_password(password),
        role="cleaner",
        status="pending",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("user registered id=%s", user.id)
    return user


def authenticate(db: Session, *, email: str, password: str) -> User:
    user = find_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise ApiError(status_code=401, code=ErrorCode.INVALID_CREDENTIALS, message="Invalid email or password")
    if user.status == "suspended":
        raise ApiError(status_code=401, code=ErrorCode.INVALID_USER, message="Account suspended")
    return user


def issue_token(user: User) -> AuthResponse:
    access_token = create_access_token(str(user.id), extra={"email": user.email, "role": user.role})
    return AuthResponse(
        user=user_out(user),
        access_token=access_token,
        access_token_expires_in=settings.access_token_expire_seconds,
    )


def ensure_admin(db: Session, *, email: str, password: str, display_name: str = "") -> tuple[User, bool]:
    """Create an active admin, or promote and re-password an existing account. Returns (user, created)."""
    email = email.lower().strip()
    user = find_user_by_email(db, email)
    created = user is None
    if user is None:
        user = User(email=email, display_name=display_name.strip() or email.split("@")[0])
        db.add(user)
    elif display_name.strip():
        user.display_name = display_name.strip()
    user.password_hash = hash_password(password)
    user.role = "admin"
    user.status = "active"
    db.commit()
    db.refresh(user)
    return user, created
