"""
Academic period dates.

From the first day of the academic year, derive for both semesters the
two stretches of teaching weeks around the mid-term break:

    S1: 6 weeks | 1 break week | 7 weeks
        4 weeks of holidays
    S2: 6 weeks | 1 break week | 7 weeks

When TD/TP start one week after lectures (week_skip), the first TD/TP
stretch starts a week later and is one week shorter.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Dict

from gridcal.model import PeriodInfo, Stretch


WEEKS_BEFORE_BREAK = 6
WEEKS_AFTER_BREAK = 7
BREAK_WEEKS = 1
HOLIDAY_WEEKS = 4

FRENCH_MONTHS = {
    "janvier": 1,
    "février": 2,
    "fevrier": 2,
    "mars": 3,
    "avril": 4,
    "mai": 5,
    "juin": 6,
    "juillet": 7,
    "août": 8,
    "aout": 8,
    "septembre": 9,
    "octobre": 10,
    "novembre": 11,
    "décembre": 12,
    "decembre": 12,
}

_FRENCH_DATE_RE = re.compile(r"^(?P<day>\d{1,2})\s+(?P<month>[^\W\d_]+)\s+(?P<year>\d{4})$")


def monday_of(d: date) -> date:
    return d - timedelta(days=d.weekday())


def parse_first_day(text: str) -> date:
    """
    Parse '2024-09-02' or '2 septembre 2024'.

    Raises ValueError for anything else.
    """
    raw = text.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass

    m = _FRENCH_DATE_RE.match(raw.lower())
    if not m:
        raise ValueError(f"Unrecognized date: {text!r} (expected YYYY-MM-DD or e.g. '2 septembre 2024')")
    month = FRENCH_MONTHS.get(m.group("month"))
    if month is None:
        raise ValueError(f"Unknown month: {m.group('month')!r}")
    return date(int(m.group("year")), month, int(m.group("day")))


def _semester(start: date, week_skip: bool) -> PeriodInfo:
    before = Stretch(start, WEEKS_BEFORE_BREAK)
    after = Stretch(start + timedelta(weeks=WEEKS_BEFORE_BREAK + BREAK_WEEKS), WEEKS_AFTER_BREAK)

    other_before = before
    if week_skip:
        other_before = Stretch(before.start + timedelta(weeks=1), max(before.weeks - 1, 0))

    return PeriodInfo(lecture=(before, after), other=(other_before, after))


def build_periods(first_day: date, week_skip: bool = False) -> Dict[int, PeriodInfo]:
    """
    Period descriptors for semesters 1 and 2, anchored on the Monday of the
    week containing `first_day`.
    """
    s1 = _semester(monday_of(first_day), week_skip)
    s2_start = s1.lecture[1].start + timedelta(weeks=WEEKS_AFTER_BREAK + HOLIDAY_WEEKS)
    s2 = _semester(s2_start, week_skip)
    return {1: s1, 2: s2}
