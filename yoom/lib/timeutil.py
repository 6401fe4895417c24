"""Timestamp helpers.

Session timestamps are stored as strings (UTC, millisecond precision,
trailing Z) and never re-parsed, so saving a loaded session never
rewrites them.
"""

from datetime import datetime, timezone


def now_iso() -> str:
    """Current UTC time, e.g. 2026-10-18T09:30:00.123Z."""
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")
