"""Conversions between date-input strings and the canonical UTC instant form.

Date inputs carry a calendar day (``YYYY-MM-DD``) in the viewer's timezone;
storage and the API carry an ISO-8601 UTC instant with millisecond precision
(``2024-03-01T05:00:00.000Z``). Both helpers map empty input to empty output.

Round trips are only defined per call. A viewer west of UTC always recovers
the same calendar day; east of UTC the UTC instant falls on the previous day,
so equality depends on converting back in the same zone.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone, tzinfo
from typing import Optional

LOCAL_DATE_FORMAT = "%Y-%m-%d"
_LOCAL_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def _localize(naive: datetime, tz: Optional[tzinfo]) -> datetime:
    if tz is None:
        # astimezone() on a naive value reads it as system local time.
        return naive.astimezone()
    return naive.replace(tzinfo=tz)


def _format_instant(value: datetime) -> str:
    utc = value.astimezone(timezone.utc)
    return (
        f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
        f"T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}.{utc.microsecond // 1000:03d}Z"
    )


def parse_instant(instant: str, tz: Optional[tzinfo] = None) -> datetime:
    """Parse an ISO-8601 instant; naive values are read in the viewer timezone."""
    text = instant.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = _localize(parsed, tz)
    return parsed


def to_canonical(local: str, tz: Optional[tzinfo] = None) -> str:
    """Convert a ``YYYY-MM-DD`` local date to the UTC instant of its local midnight."""
    if not local:
        return ""
    text = local.strip()
    if not _LOCAL_DATE_RE.fullmatch(text):
        raise ValueError(f"Expected a YYYY-MM-DD date, got {local!r}")
    naive = datetime.strptime(text, LOCAL_DATE_FORMAT)
    return _format_instant(_localize(naive, tz))


def to_local_date_string(instant: str, tz: Optional[tzinfo] = None) -> str:
    """Render a canonical instant as ``YYYY-MM-DD`` in the viewer timezone."""
    if not instant:
        return ""
    parsed = parse_instant(instant, tz)
    local = parsed.astimezone() if tz is None else parsed.astimezone(tz)
    return f"{local.year:04d}-{local.month:02d}-{local.day:02d}"
