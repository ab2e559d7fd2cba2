"""
Search criteria and the filter/sort predicates built from them.

Builders return an unexecuted query plus its ordering so the caller can
either paginate in the database or materialize the whole candidate set
for radius filtering.
"""
import math
from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from jobboard.models.installer import Installer, InstallerSpecialty
from jobboard.models.job import Job, JobTrade
from jobboard.utils.text import (
    parse_int_in_range,
    parse_positive_float,
    sanitize_location,
    sanitize_search_term,
)

JOB_TYPES = ("full-time", "part-time", "contract", "gig")
SORT_OPTIONS = ("newest", "highest-pay", "name-asc", "experience-desc")
MAX_PAY = 1_000_000

SortOption = Literal["newest", "highest-pay", "name-asc", "experience-desc"]


class SearchCriteria(BaseModel):
    q: str = ""
    location: str = ""
    radius_miles: float | None = None
    trade: str = ""
    job_type: str | None = None
    pay_min: int | None = None
    pay_max: int | None = None
    sort: SortOption = "newest"
    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1)
    is_featured: bool | None = None
    available_only: bool = False

    model_config = {"frozen": True}

    @field_validator("q", mode="before")
    @classmethod
    def _clean_keyword(cls, value):
        return sanitize_search_term(value)

    @field_validator("location", mode="before")
    @classmethod
    def _clean_location(cls, value):
        return sanitize_location(value)

    @field_validator("trade", mode="before")
    @classmethod
    def _clean_trade(cls, value):
        return sanitize_search_term(value, 40).strip().lower()

    @field_validator("job_type", mode="before")
    @classmethod
    def _known_job_type(cls, value):
        return value if value in JOB_TYPES else None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def wants_radius(self) -> bool:
        return (
            bool(self.location)
            and self.radius_miles is not None
            and math.isfinite(self.radius_miles)
            and self.radius_miles > 0
        )

    @classmethod
    def from_query_params(
        cls,
        *,
        q: str | None = None,
        location: str | None = None,
        radius: str | None = None,
        trade: str | None = None,
        job_type: str | None = None,
        pay_min: str | None = None,
        pay_max: str | None = None,
        sort: str | None = None,
        page: str | None = None,
        limit: str | None = None,
        default_limit: int = 20,
        max_limit: int = 50,
        max_page: int = 10_000,
        is_featured: bool | None = None,
        available_only: bool = False,
    ) -> "SearchCriteria":
        """Lenient parse of raw query-string values: bad numbers fall back, out-of-range ones clamp."""
        return cls(
            q=q,
            location=location,
            radius_miles=parse_positive_float(radius),
            trade=trade,
            job_type=job_type,
            pay_min=parse_int_in_range(pay_min, 0, MAX_PAY, 0) if pay_min else None,
            pay_max=parse_int_in_range(pay_max, 0, MAX_PAY, MAX_PAY) if pay_max else None,
            sort=sort if sort in SORT_OPTIONS else "newest",
            page=parse_int_in_range(page, 1, max_page, 1),
            limit=parse_int_in_range(limit, 1, max_limit, min(default_limit, max_limit)),
            is_featured=is_featured,
            available_only=available_only,
        )


@dataclass(frozen=True)
class BuiltQuery:
    query: Query
    order_by: tuple

    def ordered(self) -> Query:
        return self.query.order_by(*self.order_by)


def _job_order(sort: str) -> tuple:
    if sort == "highest-pay":
        return (
            Job.pay_max.desc().nulls_last(),
            Job.pay_min.desc().nulls_last(),
            Job.created_at.desc(),
            Job.id,
        )
    if sort == "name-asc":
        return (Job.title.asc(), Job.id)
    return (Job.created_at.desc(), Job.id)


def _installer_order(sort: str) -> tuple:
    if sort == "name-asc":
        return (Installer.name.asc(), Installer.id)
    if sort == "experience-desc":
        return (Installer.years_experience.desc().nulls_last(), Installer.created_at.desc(), Installer.id)
    return (Installer.created_at.desc(), Installer.id)


def build_job_query(
    db: Session, criteria: SearchCriteria, now: str, include_location: bool = True
) -> BuiltQuery:
    """Public job search: active, unexpired postings narrowed by every requested filter."""
    query = db.query(Job).filter(
        Job.status == "active",
        or_(Job.expires_at.is_(None), Job.expires_at > now),
    )

    if criteria.q:
        pattern = f"%{criteria.q}%"
        query = query.filter(
            Job.title.ilike(pattern)
            | Job.description.ilike(pattern)
            | Job.company_name.ilike(pattern)
        )
    if include_location and criteria.location:
        pattern = f"%{criteria.location}%"
        query = query.filter(
            Job.location_city.ilike(pattern) | Job.location_state.ilike(pattern)
        )
    if criteria.trade:
        query = query.filter(Job.trades.any(JobTrade.trade == criteria.trade))
    if criteria.job_type:
        query = query.filter(Job.job_type == criteria.job_type)
    if criteria.pay_min is not None:
        query = query.filter(Job.pay_min >= criteria.pay_min)
    if criteria.pay_max is not None:
        query = query.filter(Job.pay_max <= criteria.pay_max)
    if criteria.is_featured is not None:
        query = query.filter(Job.is_featured == criteria.is_featured)

    return BuiltQuery(query=query, order_by=_job_order(criteria.sort))


def build_installer_query(
    db: Session, criteria: SearchCriteria, include_location: bool = True
) -> BuiltQuery:
    query = db.query(Installer)

    if criteria.q:
        pattern = f"%{criteria.q}%"
        query = query.filter(Installer.name.ilike(pattern) | Installer.bio.ilike(pattern))
    if include_location and criteria.location:
        pattern = f"%{criteria.location}%"
        query = query.filter(
            Installer.location_city.ilike(pattern) | Installer.location_state.ilike(pattern)
        )
    if criteria.trade:
        query = query.filter(
            Installer.specialties.any(InstallerSpecialty.specialty == criteria.trade)
        )
    if criteria.available_only:
        query = query.filter(Installer.is_available.is_(True))

    return BuiltQuery(query=query, order_by=_installer_order(criteria.sort))
