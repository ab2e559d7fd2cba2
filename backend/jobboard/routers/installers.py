import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.database import get_db
from jobboard.dependencies import get_city_index
from jobboard.models.installer import Installer, InstallerSpecialty
from jobboard.routers.jobs import clean_tags
from jobboard.schemas.installer import (
    InstallerCreate,
    InstallerCreatedResponse,
    InstallerListResponse,
    InstallerResponse,
)
from jobboard.services.city_index import CityIndex
from jobboard.services.query_builder import SearchCriteria
from jobboard.services.search_service import search_installers
from jobboard.utils.formatting import format_timestamp
from jobboard.utils.security import generate_manage_token, hash_manage_token
from jobboard.utils.text import parse_flag, sanitize_plain_text

router = APIRouter(prefix="/installers", tags=["installers"])


def _installer_to_response(installer: Installer) -> InstallerResponse:
    return InstallerResponse(
        id=installer.id,
        name=installer.name,
        bio=installer.bio,
        location_city=installer.location_city,
        location_state=installer.location_state,
        specialties=installer.specialty_names,
        years_experience=installer.years_experience,
        is_available=bool(installer.is_available),
        avatar_url=installer.avatar_url,
        created_at=installer.created_at,
    )


@router.get("", response_model=InstallerListResponse)
async def list_installers(
    q: str | None = None,
    location: str | None = None,
    radius: str | None = None,
    specialty: str | None = None,
    available: str | None = None,
    sort: str | None = None,
    page: str | None = None,
    limit: str | None = None,
    db: Session = Depends(get_db),
    index: CityIndex = Depends(get_city_index),
):
    criteria = SearchCriteria.from_query_params(
        q=q,
        location=location,
        radius=radius,
        trade=specialty,
        sort=sort,
        page=page,
        limit=limit,
        default_limit=settings.default_installer_limit,
        max_limit=settings.max_limit,
        max_page=settings.max_page,
        available_only=parse_flag(available) is True,
    )
    result = search_installers(db, index, criteria)
    if result.failed:
        raise HTTPException(status_code=500, detail="Unable to load installers at this time.")

    return InstallerListResponse(
        installers=[_installer_to_response(i) for i in result.items],
        page=criteria.page,
        limit=criteria.limit,
    )


@router.post("", response_model=InstallerCreatedResponse, status_code=201)
async def create_installer(req: InstallerCreate, db: Session = Depends(get_db)):
    name = sanitize_plain_text(req.name, 120)
    bio = sanitize_plain_text(req.bio, 4000)
    specialties = clean_tags(req.specialties)
    if not name or not bio or not specialties:
        raise HTTPException(
            status_code=400,
            detail="Missing required fields: name, location, specialties, bio",
        )

    now = format_timestamp(datetime.now(timezone.utc))
    manage_token = generate_manage_token()
    installer = Installer(
        id=str(uuid.uuid4()),
        name=name,
        bio=bio,
        location_city=sanitize_plain_text(req.location_city, 80),
        location_state=sanitize_plain_text(req.location_state.upper(), 2),
        years_experience=req.years_experience,
        is_available=req.is_available,
        avatar_url=sanitize_plain_text(req.avatar_url, 500) or None,
        manage_token_hash=hash_manage_token(manage_token),
        created_at=now,
        updated_at=now,
        specialties=[InstallerSpecialty(specialty=s) for s in specialties],
    )
    db.add(installer)
    db.commit()
    db.refresh(installer)

    return InstallerCreatedResponse(
        installer=_installer_to_response(installer),
        manage_token=manage_token,
    )


@router.get("/{installer_id}", response_model=InstallerResponse)
async def get_installer(installer_id: str, db: Session = Depends(get_db)):
    installer = db.query(Installer).filter(Installer.id == installer_id).first()
    if not installer:
        raise HTTPException(status_code=404, detail="Installer not found")
    return _installer_to_response(installer)
