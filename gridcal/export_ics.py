"""
iCalendar (.ics) export.

We convert dated occurrences into a calendar file that can be imported into:
- Google Calendar
- Outlook
- Apple Calendar

Occurrence datetimes are local wall-clock times. With a timezone they are
written as TZID=Europe/Paris times (plus the matching VTIMEZONE block),
without one as floating times.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Tuple

from gridcal.model import Course, format_categories


TIMEZONE = "Europe/Paris"
PRODID = "-//gridcal//EN"
# Placeholder address, ATTENDEE requires a calendar user address
ORGANIZER_ADDRESS = "mailto:place@holder.com"

_VTIMEZONE = [
    "BEGIN:VTIMEZONE",
    f"TZID:{TIMEZONE}",
    "BEGIN:DAYLIGHT",
    "TZOFFSETFROM:+0100",
    "TZOFFSETTO:+0200",
    "TZNAME:CEST",
    "DTSTART:19700329T020000",
    "RRULE:FREQ=YEARLY;BYMONTH=3;BYDAY=-1SU",
    "END:DAYLIGHT",
    "BEGIN:STANDARD",
    "TZOFFSETFROM:+0200",
    "TZOFFSETTO:+0100",
    "TZNAME:CET",
    "DTSTART:19701025T030000",
    "RRULE:FREQ=YEARLY;BYMONTH=10;BYDAY=-1SU",
    "END:STANDARD",
    "END:VTIMEZONE",
]


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _param_value(text: str) -> str:
    # Parameter values cannot hold DQUOTE; quote them so ':' ';' ',' are allowed
    return '"' + text.replace('"', "'") + '"'


def _dt_local(dt: datetime) -> str:
    return dt.strftime("%Y%m%dT%H%M%S")


def ensure_ics_suffix(filename: str | Path) -> Path:
    """
    Append '.ics' unless the name already ends with it (any case).
    """
    path = Path(filename)
    if path.suffix.lower() == ".ics":
        return path
    return path.with_name(path.name + ".ics")


def _event_lines(
    course: Course, dtstart: datetime, dtend: datetime, with_tz: bool, dtstamp: str
) -> List[str]:
    categories = format_categories(course.category)
    tz_param = f";TZID={TIMEZONE}" if with_tz else ""

    lines = ["BEGIN:VEVENT"]
    lines.append(f"UID:{uuid.uuid4()}@gridcal")
    lines.append(f"DTSTAMP:{dtstamp}")
    lines.append("CLASS:PUBLIC")
    lines.append("TRANSP:OPAQUE")
    if course.professor:
        lines.append(
            f"ATTENDEE;CN={_param_value(course.professor)};PARTSTAT=ACCEPTED;ROLE=CHAIR:{ORGANIZER_ADDRESS}"
        )
    lines.append(f"DTSTART{tz_param}:{_dt_local(dtstart)}")
    lines.append(f"DTEND{tz_param}:{_dt_local(dtend)}")
    lines.append(f"LOCATION:{_ics_escape(course.room)}")
    lines.append(f"SUMMARY;LANGUAGE=fr:{_ics_escape(f'{categories} - {course.name}')}")
    lines.append(f"CATEGORIES:{_ics_escape(categories)}")
    if course.data:
        lines.append(f"DESCRIPTION:{_ics_escape(course.data)}")
    lines.append("END:VEVENT")
    return lines


def export_courses_to_ics(
    courses: Iterable[Course], filename: str | Path, with_tz: bool = True
) -> Tuple[Path, int]:
    """
    Export dated occurrences to an .ics file.

    Returns the path actually written ('.ics' appended if needed) and the
    number of exported events. Courses without dtstart/dtend are skipped.
    """
    out = ensure_ics_suffix(filename)
    out.parent.mkdir(parents=True, exist_ok=True)

    lines: List[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append(f"PRODID:{PRODID}")
    lines.append("CALSCALE:GREGORIAN")
    if with_tz:
        lines.append(f"X-WR-TIMEZONE:{TIMEZONE}")
        lines.extend(_VTIMEZONE)

    dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    count = 0
    for course in courses:
        if course.dtstart is None or course.dtend is None:
            continue
        lines.extend(_event_lines(course, course.dtstart, course.dtend, with_tz, dtstamp))
        count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    return out, count
