from datetime import datetime, timezone

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def format_timestamp(value: datetime) -> str:
    """UTC text form used for every stored timestamp. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def _format_salary(value: int) -> str:
    in_thousands = value / 1000
    if in_thousands == int(in_thousands):
        normalized = str(int(in_thousands))
    else:
        normalized = f"{in_thousands:.1f}".removesuffix(".0")
    return f"${normalized}K"


def format_pay(pay_min: int | None, pay_max: int | None, pay_type: str | None) -> str | None:
    """Human-readable pay range, e.g. "$25-35/hr", "$50K-$80K/yr", "$1,200-$2,000/job"."""
    if pay_min is None and pay_max is None:
        return None
    low = pay_min if pay_min is not None else pay_max
    high = pay_max if pay_max is not None else pay_min

    if pay_type == "salary":
        return f"{_format_salary(low)}-{_format_salary(high)}/yr"
    if pay_type == "per-job":
        return f"${low:,}-${high:,}/job"
    return f"${low}-{high}/hr"
