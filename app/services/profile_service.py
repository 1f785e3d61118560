from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.error_codes import ErrorCode
from app.core.errors import ApiError, NotFoundError
from app.core.ids import parse_id
from app.core.security import now_utc
from app.models import CredentialDocument, User
from app.schemas.auth import CredentialOut, CredentialUpsertRequest, ProfileOut, ProfileUpdateRequest
from app.services.auth_service import user_out

PROFILE_FIELDS = ["display_name", "phone", "address", "abn", "bank_name", "account_name", "bsb", "account_number"]
# Fields a cleaner must fill in before the profile counts as complete.
REQUIRED_PROFILE_FIELDS = ["phone", "address", "abn", "bank_name", "account_name", "bsb", "account_number"]


def profile_out(user: User) -> ProfileOut:
    return ProfileOut(
        **user_out(user).model_dump(),
        phone=user.phone,
        address=user.address,
        abn=user.abn,
        bank_name=user.bank_name,
        account_name=user.account_name,
        bsb=user.bsb,
        account_number=user.account_number,
        skills=list(user.skills or []),
    )


def update_profile(db: Session, user: User, payload: ProfileUpdateRequest) -> User:
    for field in PROFILE_FIELDS:
        value = getattr(payload, field, None)
        if value is not None:
            setattr(user, field, value.strip())
    if payload.skills is not None:
        user.skills = sorted({skill.strip() for skill in payload.skills if skill.strip()})
    user.profile_complete = all(getattr(user, field) for field in REQUIRED_PROFILE_FIELDS)
    db.commit()
    db.refresh(user)
    return user


def credential_out(doc: CredentialDocument, today: date | None = None) -> CredentialOut:
    today = today or now_utc().date()
    return CredentialOut(
        id=str(doc.id),
        doc_type=doc.doc_type,
        document_number=doc.document_number,
        document_url=doc.document_url,
        expiry_date=doc.expiry_date,
        verified=doc.verified,
        expired=doc.expiry_date is not None and doc.expiry_date < today,
    )


def list_credentials(db: Session, user_id: uuid.UUID) -> list[CredentialDocument]:
    return db.execute(
        select(CredentialDocument).where(CredentialDocument.user_id == user_id).order_by(CredentialDocument.doc_type.asc())
    ).scalars().all()


def _get_credential(db: Session, user_id: uuid.UUID, doc_type: str) -> CredentialDocument | None:
    return db.execute(
        select(CredentialDocument).where(CredentialDocument.user_id == user_id, CredentialDocument.doc_type == doc_type)
    ).scalars().first()


def upsert_credential(db: Session, user_id: uuid.UUID, doc_type: str, payload: CredentialUpsertRequest) -> CredentialDocument:
    doc = _get_credential(db, user_id, doc_type)
    if doc is None:
        doc = CredentialDocument(user_id=user_id, doc_type=doc_type)
        db.add(doc)
    elif (doc.document_number, doc.document_url, doc.expiry_date) != (
        payload.document_number.strip(),
        payload.document_url.strip(),
        payload.expiry_date,
    ):
        # A replaced document needs to be checked again.
        doc.verified = False
    doc.document_number = payload.document_number.strip()
    doc.document_url = payload.document_url.strip()
    doc.expiry_date = payload.expiry_date
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ApiError(status_code=409, code=ErrorCode.CREDENTIAL_CONFLICT, message="Credential already exists") from exc
    db.refresh(doc)
    return doc


def delete_credential(db: Session, user_id: uuid.UUID, doc_type: str) -> None:
    doc = _get_credential(db, user_id, doc_type)
    if doc is None:
        raise NotFoundError(code=ErrorCode.CREDENTIAL_NOT_FOUND, message="Credential not found")
    db.delete(doc)
    db.commit()


def set_credential_verified(db: Session, user_id: str, doc_type: str, verified: bool) -> CredentialDocument:
    key = parse_id(user_id, code=ErrorCode.USER_NOT_FOUND, message="User not found")
    doc = _get_credential(db, key, doc_type)
    if doc is None:
        raise NotFoundError(code=ErrorCode.CREDENTIAL_NOT_FOUND, message="Credential not found")
    doc.verified = verified
    db.commit()
    db.refresh(doc)
    return doc
