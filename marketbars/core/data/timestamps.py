"""Range boundary parsing."""

from __future__ import annotations

from datetime import datetime, timezone

from marketbars.core.exceptions.base import DataValidationError


def parse_boundary(value: str) -> datetime:
    """Parse an ISO-8601 date or date-time into an aware UTC datetime.

    Naive values are taken to be UTC.

    Raises:
        DataValidationError: if ``value`` is not ISO-8601.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError as exc:
        raise DataValidationError(
            f"Invalid timestamp: {value!r}",
            validation_errors={"value": value, "reason": str(exc)},
        ) from exc

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_utc_iso(value: str) -> str:
    """Render ``value`` as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    parsed = parse_boundary(value)
    return parsed.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"


__all__ = ["parse_boundary", "to_utc_iso"]
