from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

JobType = Literal["full-time", "part-time", "contract", "gig"]
PayType = Literal["hourly", "salary", "per-job"]
JobStatus = Literal["active", "inactive", "closed"]


class JobCreate(BaseModel):
    title: str = Field(min_length=3, max_length=120)
    company_name: str = Field(min_length=2, max_length=120)
    company_email: str = Field(min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    company_logo_url: str | None = Field(None, max_length=500)
    location_city: str = Field(min_length=2, max_length=80)
    location_state: str = Field(min_length=2, max_length=2)
    trades: list[str] = Field(min_length=1, max_length=6)
    job_type: JobType
    pay_min: int | None = Field(None, ge=0, le=1_000_000)
    pay_max: int | None = Field(None, ge=0, le=1_000_000)
    pay_type: PayType | None = None
    description: str = Field(min_length=10, max_length=8000)
    requirements: str | None = Field(None, max_length=4000)
    how_to_apply: str | None = Field(None, max_length=2000)
    expires_at: datetime | None = None


class JobUpdate(BaseModel):
    title: str | None = Field(None, min_length=3, max_length=120)
    company_name: str | None = Field(None, min_length=2, max_length=120)
    company_logo_url: str | None = Field(None, max_length=500)
    location_city: str | None = Field(None, min_length=2, max_length=80)
    location_state: str | None = Field(None, min_length=2, max_length=2)
    trades: list[str] | None = Field(None, min_length=1, max_length=6)
    job_type: JobType | None = None
    pay_min: int | None = Field(None, ge=0, le=1_000_000)
    pay_max: int | None = Field(None, ge=0, le=1_000_000)
    pay_type: PayType | None = None
    description: str | None = Field(None, min_length=10, max_length=8000)
    requirements: str | None = Field(None, max_length=4000)
    how_to_apply: str | None = Field(None, max_length=2000)
    status: JobStatus | None = None
    expires_at: datetime | None = None

    model_config = {"extra": "forbid"}


class JobResponse(BaseModel):
    id: str
    slug: str
    title: str
    company_name: str
    company_logo_url: str | None
    location_city: str
    location_state: str
    trades: list[str] = []
    job_type: str
    pay_min: int | None
    pay_max: int | None
    pay_type: str | None
    pay_display: str | None
    description: str
    requirements: str | None
    how_to_apply: str | None
    is_featured: bool
    status: str
    expires_at: str | None
    created_at: str


class JobCreatedResponse(BaseModel):
    job: JobResponse
    manage_token: str


class JobListResponse(BaseModel):
    jobs: list[JobResponse]
    page: int
    limit: int
