"""Time utility helpers for UTC-safe timestamps."""

from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return current timezone-aware UTC timestamp."""

    return datetime.now(timezone.utc)


def filename_timestamp(value: datetime | None = None) -> str:
    """Return an ISO 8601 timestamp with ':' replaced so it is filename-safe."""

    moment = value or now_utc()
    return moment.isoformat().replace(":", ".")
