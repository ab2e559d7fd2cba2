import logging

from fastapi import Header, HTTPException, Request

from jobboard.services.city_index import CityIndex
from jobboard.services.geocode_service import GeocodeConfigError, OpenCageGeocoder, get_geocoder

logger = logging.getLogger(__name__)


async def get_city_index(request: Request) -> CityIndex:
    return request.app.state.city_index


async def require_manage_token(x_manage_token: str | None = Header(None)) -> str:
    token = (x_manage_token or "").strip()
    if not token:
        raise HTTPException(status_code=401, detail="Authorization token is required.")
    return token


async def require_geocoder() -> OpenCageGeocoder:
    try:
        return get_geocoder()
    except GeocodeConfigError as exc:
        logger.error("Geocoding requested but no API key is configured")
        raise HTTPException(status_code=500, detail="Server configuration error.") from exc
