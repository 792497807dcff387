from datetime import datetime, timezone


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_timestamp(value) -> datetime:
    """Read a timestamptz string as returned by PostgREST."""
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def first_row(rows):
    return rows[0] if rows else None
