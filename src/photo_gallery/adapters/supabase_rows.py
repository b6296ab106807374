"""Helpers shared by the Supabase repositories."""

from datetime import UTC, datetime


def parse_timestamp(raw: object) -> datetime | None:
    """Parse a timestamp column returned by PostgREST."""
    if not isinstance(raw, str) or not raw:
        return None
    return datetime.fromisoformat(raw)


def now_iso() -> str:
    """Return the current UTC time formatted for a timestamp column."""
    return datetime.now(tz=UTC).isoformat()


def optional_str(raw: object) -> str | None:
    """Return a string column value, mapping SQL null to None."""
    if raw is None:
        return None
    return str(raw)
