import logging

from fastapi import APIRouter, Depends, HTTPException

from jobboard.dependencies import require_geocoder
from jobboard.schemas.geocode import GeocodeRequest, GeocodeResponse
from jobboard.services.geocode_service import GeocodeError, OpenCageGeocoder
from jobboard.utils.text import sanitize_location

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/geocode", tags=["geocode"])


@router.post("", response_model=GeocodeResponse)
async def geocode(req: GeocodeRequest, geocoder: OpenCageGeocoder = Depends(require_geocoder)):
    safe_location = sanitize_location(req.location, 120)
    if not safe_location:
        raise HTTPException(status_code=400, detail="Location is required.")
    try:
        coordinate = await geocoder.geocode(safe_location)
    except GeocodeError as exc:
        logger.error("Error geocoding location %r: %s", safe_location, exc)
        raise HTTPException(status_code=500, detail="Failed to geocode location.") from exc

    if coordinate is None:
        raise HTTPException(status_code=404, detail="Location not found.")
    return GeocodeResponse(lat=coordinate.lat, lng=coordinate.lng)
