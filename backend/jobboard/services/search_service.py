"""
Job and installer search.

Two strategies share one result shape:

* direct: filters, ordering and LIMIT/OFFSET all run in the database;
* radius: the location is resolved to a center, every candidate matching
  the other filters is loaded, kept when within ``radius_miles`` of the
  center and paginated in memory.
"""
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.services.city_index import CityIndex
from jobboard.services.geo_service import distance_miles
from jobboard.services.location_resolver import resolve_location
from jobboard.services.query_builder import (
    BuiltQuery,
    SearchCriteria,
    build_installer_query,
    build_job_query,
)
from jobboard.utils.formatting import format_timestamp

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    items: list = field(default_factory=list)
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def _direct_page(criteria: SearchCriteria, built: BuiltQuery) -> list:
    return built.ordered().offset(criteria.offset).limit(criteria.limit).all()


def _radius_page(
    criteria: SearchCriteria, built: BuiltQuery, index: CityIndex, max_candidates: int
) -> list:
    center = resolve_location(index, criteria.location)
    if center is None:
        logger.debug("Radius search location %r did not resolve", criteria.location)
        return []

    candidates = built.ordered().limit(max_candidates + 1).all()
    if len(candidates) > max_candidates:
        logger.warning(
            "Radius search around %r hit the candidate cap; only the first %d rows are considered",
            criteria.location,
            max_candidates,
        )
        candidates = candidates[:max_candidates]

    in_range = []
    for row in candidates:
        coordinate = index.lookup(row.location_city, row.location_state)
        if coordinate is None:
            continue
        if distance_miles(center, coordinate) <= criteria.radius_miles:
            in_range.append(row)

    return in_range[criteria.offset : criteria.offset + criteria.limit]


def _run(
    collection: str,
    criteria: SearchCriteria,
    index: CityIndex,
    build: Callable[[bool], BuiltQuery],
    max_candidates: int | None,
) -> SearchResult:
    try:
        if criteria.wants_radius:
            items = _radius_page(
                criteria,
                build(False),
                index,
                max_candidates or settings.max_radius_candidates,
            )
        else:
            items = _direct_page(criteria, build(True))
    except SQLAlchemyError as exc:
        logger.exception("Error fetching %s", collection)
        return SearchResult(items=[], error=str(exc))
    return SearchResult(items=items)


def search_jobs(
    db: Session,
    index: CityIndex,
    criteria: SearchCriteria,
    now: datetime | None = None,
    max_candidates: int | None = None,
) -> SearchResult:
    now_iso = format_timestamp(now or datetime.now(timezone.utc))
    return _run(
        "jobs",
        criteria,
        index,
        lambda include_location: build_job_query(db, criteria, now_iso, include_location),
        max_candidates,
    )


def search_installers(
    db: Session,
    index: CityIndex,
    criteria: SearchCriteria,
    max_candidates: int | None = None,
) -> SearchResult:
    return _run(
        "installers",
        criteria,
        index,
        lambda include_location: build_installer_query(db, criteria, include_location),
        max_candidates,
    )
