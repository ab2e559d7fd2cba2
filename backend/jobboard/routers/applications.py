import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.dependencies import require_manage_token
from jobboard.models.application import Application
from jobboard.routers.jobs import get_job_by_slug, get_managed_job
from jobboard.schemas.application import ApplicationCreate, ApplicationResponse
from jobboard.utils.formatting import format_timestamp
from jobboard.utils.text import sanitize_plain_text

router = APIRouter(prefix="/jobs/{slug}", tags=["applications"])


def _application_to_response(application: Application) -> ApplicationResponse:
    return ApplicationResponse(
        id=application.id,
        job_id=application.job_id,
        name=application.name,
        email=application.email,
        phone=application.phone,
        message=application.message,
        resume_url=application.resume_url,
        created_at=application.created_at,
    )


@router.post("/apply", status_code=201)
async def apply_to_job(slug: str, req: ApplicationCreate, db: Session = Depends(get_db)):
    job = get_job_by_slug(db, slug)
    if job.status != "active":
        raise HTTPException(status_code=409, detail="This job is no longer accepting applications.")

    name = sanitize_plain_text(req.name, 120)
    message = sanitize_plain_text(req.message, 4000)
    if not name or not message:
        raise HTTPException(status_code=400, detail="Missing required fields: name, email, message")

    application = Application(
        id=str(uuid.uuid4()),
        job_id=job.id,
        name=name,
        email=sanitize_plain_text(req.email.lower(), 254),
        phone=sanitize_plain_text(req.phone, 40) or None,
        message=message,
        resume_url=sanitize_plain_text(req.resume_url, 500) or None,
        created_at=format_timestamp(datetime.now(timezone.utc)),
    )
    db.add(application)
    db.commit()
    db.refresh(application)
    return {
        "application": _application_to_response(application),
        "message": "Application submitted successfully",
    }


@router.get("/applications", response_model=list[ApplicationResponse])
async def list_applications(
    slug: str,
    token: str = Depends(require_manage_token),
    db: Session = Depends(get_db),
):
    job = get_managed_job(db, slug, token)
    applications = (
        db.query(Application)
        .filter(Application.job_id == job.id)
        .order_by(Application.created_at.desc(), Application.id)
        .all()
    )
    return [_application_to_response(a) for a in applications]
