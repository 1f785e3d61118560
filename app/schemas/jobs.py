from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, model_validator

JobStatus = Literal["open", "filled", "completed", "cancelled"]
ApplicationStatus = Literal["pending", "approved", "rejected"]


class JobCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    project: str = Field(min_length=1, max_length=255)
    description: str = ""
    location: str = Field(min_length=1, max_length=120)
    category: str = Field(min_length=1, max_length=120)
    start_date: date
    end_date: date
    pay_rate: float = Field(gt=0)
    hours_per_day: float = Field(gt=0, le=24)
    cleaners_needed: int = Field(ge=1)

    @model_validator(mode="after")
    def _check_dates(self) -> "JobCreateRequest":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class JobUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    project: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    location: str | None = Field(default=None, min_length=1, max_length=120)
    category: str | None = Field(default=None, min_length=1, max_length=120)
    start_date: date | None = None
    end_date: date | None = None
    pay_rate: float | None = Field(default=None, gt=0)
    hours_per_day: float | None = Field(default=None, gt=0, le=24)
    cleaners_needed: int | None = Field(default=None, ge=1)
    status: JobStatus | None = None


class JobOut(BaseModel):
    id: str
    title: str
    project: str
    description: str
    location: str
    category: str
    start_date: date
    end_date: date
    pay_rate: float
    hours_per_day: float
    cleaners_needed: int
    status: str
    created_at: str


class JobListResponse(BaseModel):
    jobs: list[JobOut]
    total: int


class ApplyRequest(BaseModel):
    message: str = Field(default="", max_length=2000)


class ApplicationOut(BaseModel):
    id: str
    job_id: str
    job_title: str
    user_id: str
    applicant_name: str
    status: str
    message: str
    admin_notes: str
    applied_at: str


class ApplicationListResponse(BaseModel):
    applications: list[ApplicationOut]
    total: int


class ApplicationStatusUpdateRequest(BaseModel):
    status: ApplicationStatus
    admin_notes: str | None = None
