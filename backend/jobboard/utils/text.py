"""Input sanitizing and lenient numeric parsing for query strings and form fields."""
import math
import re

_SEARCH_UNSAFE = re.compile(r"[^a-zA-Z0-9\s\-.'&]")
_LOCATION_UNSAFE = re.compile(r"[^a-zA-Z0-9\s\-.'&,]")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+))")


def sanitize_search_term(value: str | None, max_length: int = 80) -> str:
    """Trim, truncate and drop anything that could act as pattern syntax (%, _, quotes)."""
    if not value:
        return ""
    return _SEARCH_UNSAFE.sub("", value.strip()[:max_length])


def sanitize_location(value: str | None, max_length: int = 80) -> str:
    # Same as search terms, but commas survive so "Austin, TX" still splits.
    if not value:
        return ""
    return _LOCATION_UNSAFE.sub("", value.strip()[:max_length]).strip()


def sanitize_plain_text(value: str | None, max_length: int = 2000) -> str:
    if not value:
        return ""
    return value.strip()[:max_length].replace("\x00", "")


def slugify(value: str, max_length: int = 80) -> str:
    cleaned = sanitize_search_term(value.lower(), max_length)
    cleaned = re.sub(r"\s+", "-", cleaned)
    return re.sub(r"-+", "-", cleaned)


def parse_int_in_range(value: str | None, minimum: int, maximum: int, fallback: int) -> int:
    """Parse a leading integer ("12abc" -> 12) and clamp it; anything unparseable gives fallback."""
    match = _LEADING_INT.match(value or "")
    if not match:
        return fallback
    return min(max(int(match.group(1)), minimum), maximum)


def parse_positive_float(value: str | None) -> float | None:
    match = _LEADING_FLOAT.match(value or "")
    if not match:
        return None
    parsed = float(match.group(1))
    if not math.isfinite(parsed) or parsed <= 0:
        return None
    return parsed


def parse_flag(value: str | None) -> bool | None:
    if value is None:
        return None
    value = value.strip().lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return None
