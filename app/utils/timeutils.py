from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC time as a naive datetime (the format stored in the database)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Aware datetimes are converted to UTC first; naive ones are taken as UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def to_iso(value: datetime) -> str:
    return to_naive_utc(value).isoformat()


def from_iso(value: str) -> datetime:
    return to_naive_utc(datetime.fromisoformat(value))
