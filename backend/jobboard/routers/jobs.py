import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.database import get_db
from jobboard.dependencies import get_city_index, require_manage_token
from jobboard.models.job import Job, JobTrade
from jobboard.schemas.job import (
    JobCreate,
    JobCreatedResponse,
    JobListResponse,
    JobResponse,
    JobUpdate,
)
from jobboard.services.city_index import CityIndex
from jobboard.services.query_builder import SearchCriteria
from jobboard.services.search_service import search_jobs
from jobboard.utils.formatting import format_pay, format_timestamp
from jobboard.utils.security import (
    generate_manage_token,
    generate_slug_suffix,
    hash_manage_token,
    verify_manage_token,
)
from jobboard.utils.text import parse_flag, sanitize_plain_text, slugify

router = APIRouter(prefix="/jobs", tags=["jobs"])

_TEXT_LIMITS = {
    "title": 120,
    "company_name": 120,
    "company_logo_url": 500,
    "location_city": 80,
    "description": 8000,
    "requirements": 4000,
    "how_to_apply": 2000,
}
_REQUIRED_FIELDS = {
    "title", "company_name", "location_city", "location_state", "job_type", "description", "status",
}


def _utc_now() -> str:
    return format_timestamp(datetime.now(timezone.utc))


def clean_tags(values: list[str]) -> list[str]:
    tags: list[str] = []
    for value in values:
        tag = sanitize_plain_text(value.lower(), 40)
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def _create_slug(title: str, city: str, state: str) -> str:
    slug = "-".join(
        part
        for part in (
            slugify(title, 80),
            slugify(city, 40),
            slugify(state, 2),
            generate_slug_suffix(),
        )
        if part
    )
    return slugify(slug, 160).strip("-")


def job_to_response(job: Job) -> JobResponse:
    return JobResponse(
        id=job.id,
        slug=job.slug,
        title=job.title,
        company_name=job.company_name,
        company_logo_url=job.company_logo_url,
        location_city=job.location_city,
        location_state=job.location_state,
        trades=job.trade_names,
        job_type=job.job_type,
        pay_min=job.pay_min,
        pay_max=job.pay_max,
        pay_type=job.pay_type,
        pay_display=format_pay(job.pay_min, job.pay_max, job.pay_type),
        description=job.description,
        requirements=job.requirements,
        how_to_apply=job.how_to_apply,
        is_featured=bool(job.is_featured),
        status=job.status,
        expires_at=job.expires_at,
        created_at=job.created_at,
    )


def get_job_by_slug(db: Session, slug: str) -> Job:
    job = db.query(Job).filter(Job.slug == slugify(slug, 160)).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


def get_managed_job(db: Session, slug: str, token: str) -> Job:
    job = db.query(Job).filter(Job.slug == slugify(slug, 160)).first()
    # Same answer for a missing job and a wrong token.
    if not job or not verify_manage_token(job.manage_token_hash, token):
        raise HTTPException(status_code=404, detail="Job not found or unauthorized.")
    return job


@router.get("", response_model=JobListResponse)
async def list_jobs(
    q: str | None = None,
    location: str | None = None,
    radius: str | None = None,
    trade: str | None = None,
    job_type: str | None = Query(None, alias="type"),
    pay_min: str | None = Query(None, alias="payMin"),
    pay_max: str | None = Query(None, alias="payMax"),
    sort: str | None = None,
    page: str | None = None,
    limit: str | None = None,
    featured: str | None = None,
    db: Session = Depends(get_db),
    index: CityIndex = Depends(get_city_index),
):
    criteria = SearchCriteria.from_query_params(
        q=q,
        location=location,
        radius=radius,
        trade=trade,
        job_type=job_type,
        pay_min=pay_min,
        pay_max=pay_max,
        sort=sort,
        page=page,
        limit=limit,
        default_limit=settings.default_job_limit,
        max_limit=settings.max_limit,
        max_page=settings.max_page,
        is_featured=parse_flag(featured),
    )
    result = search_jobs(db, index, criteria)
    if result.failed:
        raise HTTPException(status_code=500, detail="Unable to load jobs at this time.")

    return JobListResponse(
        jobs=[job_to_response(j) for j in result.items],
        page=criteria.page,
        limit=criteria.limit,
    )


@router.post("", response_model=JobCreatedResponse, status_code=201)
async def create_job(req: JobCreate, db: Session = Depends(get_db)):
    if req.pay_min is not None and req.pay_max is not None and req.pay_max < req.pay_min:
        raise HTTPException(status_code=400, detail="Pay range is invalid.")
    trades = clean_tags(req.trades)
    if not trades:
        raise HTTPException(status_code=400, detail="At least one trade is required.")

    now = _utc_now()
    manage_token = generate_manage_token()
    job = Job(
        id=str(uuid.uuid4()),
        slug=_create_slug(req.title, req.location_city, req.location_state),
        title=sanitize_plain_text(req.title, 120),
        company_name=sanitize_plain_text(req.company_name, 120),
        company_email=sanitize_plain_text(req.company_email.lower(), 254),
        company_logo_url=sanitize_plain_text(req.company_logo_url, 500) or None,
        location_city=sanitize_plain_text(req.location_city, 80),
        location_state=sanitize_plain_text(req.location_state.upper(), 2),
        job_type=req.job_type,
        pay_min=req.pay_min,
        pay_max=req.pay_max,
        pay_type=req.pay_type,
        description=sanitize_plain_text(req.description, 8000),
        requirements=sanitize_plain_text(req.requirements, 4000) or None,
        how_to_apply=sanitize_plain_text(req.how_to_apply, 2000) or None,
        is_featured=False,
        status="active",
        manage_token_hash=hash_manage_token(manage_token),
        expires_at=format_timestamp(req.expires_at) if req.expires_at else None,
        created_at=now,
        updated_at=now,
        trades=[JobTrade(trade=t) for t in trades],
    )
    db.add(job)
    db.commit()
    db.refresh(job)

    return JobCreatedResponse(job=job_to_response(job), manage_token=manage_token)


@router.get("/{slug}", response_model=JobResponse)
async def get_job(slug: str, db: Session = Depends(get_db)):
    return job_to_response(get_job_by_slug(db, slug))


@router.put("/{slug}", response_model=JobResponse)
async def update_job(
    slug: str,
    req: JobUpdate,
    token: str = Depends(require_manage_token),
    db: Session = Depends(get_db),
):
    job = get_managed_job(db, slug, token)
    update_data = req.model_dump(exclude_unset=True)

    pay_min = update_data.get("pay_min", job.pay_min)
    pay_max = update_data.get("pay_max", job.pay_max)
    if pay_min is not None and pay_max is not None and pay_max < pay_min:
        raise HTTPException(status_code=400, detail="Pay range is invalid.")

    trades = update_data.pop("trades", None)
    if trades is not None:
        cleaned = clean_tags(trades)
        if not cleaned:
            raise HTTPException(status_code=400, detail="At least one trade is required.")
        job.trades = [JobTrade(trade=t) for t in cleaned]

    if any(update_data.get(key) is None for key in _REQUIRED_FIELDS & update_data.keys()):
        raise HTTPException(status_code=400, detail="Invalid update payload.")

    for key, value in update_data.items():
        if key in _TEXT_LIMITS and value is not None:
            value = sanitize_plain_text(value, _TEXT_LIMITS[key]) or None
        elif key == "location_state" and value is not None:
            value = value.strip().upper()
        elif key == "expires_at" and value is not None:
            value = format_timestamp(value)
        setattr(job, key, value)
    job.updated_at = _utc_now()

    db.commit()
    db.refresh(job)
    return job_to_response(job)


@router.delete("/{slug}")
async def delete_job(
    slug: str,
    token: str = Depends(require_manage_token),
    db: Session = Depends(get_db),
):
    job = get_managed_job(db, slug, token)
    db.delete(job)
    db.commit()
    return {"message": "Job deleted successfully"}
