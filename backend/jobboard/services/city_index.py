"""
Static (city, state) -> coordinate reference index.

Built once at startup from the packaged CSV and shared read-only by every
search request.
"""
import csv
import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import NamedTuple

from jobboard.services.geo_service import Coordinate

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


class CityCoordinate(NamedTuple):
    city: str
    state: str
    lat: float
    lng: float


def normalize_city(value: str) -> str:
    """Lowercase, trim, drop periods and collapse whitespace ("St. Louis" -> "st louis")."""
    return _WHITESPACE.sub(" ", value.lower().replace(".", "").strip())


def _exact_key(city: str, state: str) -> str:
    return f"{normalize_city(city)}|{state.strip().upper()}"


class CityIndex:
    def __init__(self, records: Iterable[CityCoordinate]):
        self._by_city_state: dict[str, Coordinate] = {}
        self._by_name: dict[str, Coordinate] = {}
        for record in records:
            coordinate = Coordinate(record.lat, record.lng)
            # First occurrence wins in both indexes; ambiguous names like
            # "Springfield" resolve to whichever row appears first.
            self._by_city_state.setdefault(_exact_key(record.city, record.state), coordinate)
            self._by_name.setdefault(normalize_city(record.city), coordinate)

    def __len__(self) -> int:
        return len(self._by_city_state)

    def lookup(self, city: str | None, state: str | None) -> Coordinate | None:
        if not city or not state:
            return None
        return self._by_city_state.get(_exact_key(city, state))

    def lookup_name(self, city: str | None) -> Coordinate | None:
        if not city:
            return None
        return self._by_name.get(normalize_city(city))


def read_city_records(path: Path) -> list[CityCoordinate]:
    with path.open(newline="", encoding="utf-8") as fh:
        return [
            CityCoordinate(
                city=row["city"],
                state=row["state"],
                lat=float(row["lat"]),
                lng=float(row["lng"]),
            )
            for row in csv.DictReader(fh)
        ]


def load_city_index(path: Path) -> CityIndex:
    records = read_city_records(path)
    index = CityIndex(records)
    logger.info("Loaded %d city coordinates from %s", len(index), path.name)
    return index
