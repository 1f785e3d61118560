from datetime import date

from pydantic import BaseModel, EmailStr, Field

CREDENTIAL_TYPES = "^(driver_license|white_card|blue_card|police_check|first_aid)$"


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    display_name: str | None = Field(default=None, min_length=1, max_length=120)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)


class UserOut(BaseModel):
    id: str
    email: EmailStr
    display_name: str
    role: str
    status: str
    profile_complete: bool


class AuthResponse(BaseModel):
    user: UserOut
    access_token: str
    access_token_expires_in: int


class ProfileOut(UserOut):
    phone: str
    address: str
    abn: str
    bank_name: str
    account_name: str
    bsb: str
    account_number: str
    skills: list[str]


class ProfileUpdateRequest(BaseModel):
    display_name: str | None = Field(default=None, min_length=1, max_length=120)
    phone: str | None = Field(default=None, max_length=64)
    address: str | None = None
    abn: str | None = Field(default=None, pattern=r"^(\d{11})?$")
    bank_name: str | None = Field(default=None, max_length=120)
    account_name: str | None = Field(default=None, max_length=120)
    bsb: str | None = Field(default=None, pattern=r"^(\d{3}-?\d{3})?$")
    account_number: str | None = Field(default=None, max_length=32)
    skills: list[str] | None = None


class CredentialUpsertRequest(BaseModel):
    document_number: str = Field(default="", max_length=64)
    document_url: str = ""
    expiry_date: date | None = None


class CredentialOut(BaseModel):
    id: str
    doc_type: str
    document_number: str
    document_url: str
    expiry_date: date | None = None
    verified: bool
    expired: bool


class CredentialListResponse(BaseModel):
    credentials: list[CredentialOut]
