import re

from jobboard.services.city_index import CityIndex
from jobboard.services.geo_service import Coordinate

# "Austin TX", "Austin,TX", "Fort  Worth tx"
_TRAILING_STATE = re.compile(r"^(?P<city>.+?)[\s,]+(?P<state>[A-Za-z]{2})$")


def _split_on_comma(text: str) -> tuple[str, str]:
    city, _, rest = text.partition(",")
    return city.strip(), rest.strip()[:2].upper()


def resolve_location(index: CityIndex, text: str | None) -> Coordinate | None:
    """
    Turn free-text like "Austin, TX", "austin tx" or "St. Louis" into a
    coordinate. Tries city+state first, then the bare city name.
    """
    text = (text or "").strip()
    if not text:
        return None

    if "," in text:
        city, state = _split_on_comma(text)
        return index.lookup(city, state)

    match = _TRAILING_STATE.match(text)
    if match:
        coordinate = index.lookup(match.group("city"), match.group("state"))
        if coordinate is not None:
            return coordinate

    return index.lookup_name(text)
