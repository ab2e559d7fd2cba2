import logging
from typing import Any

import httpx

from jobboard.config import settings
from jobboard.services.geo_service import Coordinate

logger = logging.getLogger(__name__)


class GeocodeError(Exception):
    """Raised when the geocoding provider fails or returns an unexpected response."""


class GeocodeConfigError(GeocodeError):
    """Raised when geocoding is not configured."""


class OpenCageGeocoder:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.opencagedata.com/geocode/v1/json",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    async def _get(self, params: dict[str, Any]) -> dict:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.get(self.base_url, params=params)
                r.raise_for_status()
                return r.json()
        except httpx.HTTPStatusError as e:
            logger.warning("Geocoding error %s: %s", e.response.status_code, e.response.text[:500])
            raise GeocodeError("Geocoding service returned an error.") from e
        except httpx.RequestError as e:
            raise GeocodeError("Geocoding service unavailable.") from e
        except ValueError as e:
            raise GeocodeError("Geocoding service returned invalid JSON.") from e

    async def geocode(self, location: str) -> Coordinate | None:
        """Best single match for free text, or None when the provider has nothing."""
        data = await self._get({"q": location, "key": self.api_key, "limit": 1})
        results = data.get("results") or []
        if not results:
            return None
        geometry = results[0].get("geometry") or {}
        try:
            return Coordinate(float(geometry["lat"]), float(geometry["lng"]))
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodeError("Geocoding service returned an unexpected payload.") from e


def get_geocoder() -> OpenCageGeocoder:
    if not settings.opencage_api_key:
        raise GeocodeConfigError("Geocoding is not configured.")
    return OpenCageGeocoder(
        api_key=settings.opencage_api_key,
        base_url=settings.geocode_url,
        timeout=settings.geocode_timeout_seconds,
    )
