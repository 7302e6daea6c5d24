"""Time zone aware date parts and note path templates."""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from notepush.models import TimeParts

DEFAULT_TIMEZONE = "Asia/Tokyo"


def format_time_parts(now: datetime | None = None, tz_name: str = DEFAULT_TIMEZONE) -> TimeParts:
    """Break an instant down into zero-padded fields in ``tz_name``.

    Naive datetimes are taken to be UTC.
    """

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local = now.astimezone(ZoneInfo(tz_name))

    yyyy = f"{local.year:04d}"
    mm = f"{local.month:02d}"
    dd = f"{local.day:02d}"
    return TimeParts(
        yyyy=yyyy,
        yy=yyyy[-2:],
        mm=mm,
        dd=dd,
        hh=f"{local.hour:02d}",
        minute=f"{local.minute:02d}",
        ss=f"{local.second:02d}",
        date=f"{yyyy}-{mm}-{dd}",
    )


def resolve_note_path(template: str, parts: TimeParts) -> str:
    """Fill ``{yyyy} {yy} {mm} {dd} {date}`` placeholders; anything else is left as is."""

    replacements = (
        ("{yyyy}", parts.yyyy),
        ("{yy}", parts.yy),
        ("{mm}", parts.mm),
        ("{dd}", parts.dd),
        ("{date}", parts.date),
    )
    path = template
    for placeholder, value in replacements:
        path = path.replace(placeholder, value)
    return path
