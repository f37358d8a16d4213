"""
Recurrence expansion (weekly grid -> dated occurrences).

The filtered grid describes one week. Each semester is two stretches of
weeks (before and after the mid-term break), and lectures and TD/TP may
follow different stretches. Expansion runs twice:

- lectures: every course carrying Cours, dated with the lecture stretches
- others:   every course without Cours, dated with the TD/TP stretches

so a combined Cours/TD slot is dated once, with the lecture stretches.

Datetimes are naive local wall-clock times; the exporter decides which
timezone they belong to.
"""

from __future__ import annotations

import warnings
from dataclasses import replace
from datetime import date, datetime, time, timedelta
from typing import Callable, Dict, Iterable, List, Sequence

from gridcal.errors import DataShapeError, EmptyScheduleWarning, MissingPeriodError
from gridcal.model import WEEKDAYS, Category, Course, PeriodInfo, Stretch, Timetable


def _minute(t: time) -> time:
    return t.replace(second=0, microsecond=0)


def _is_lecture(course: Course) -> bool:
    return Category.LECTURE in course.category


def _not_lecture(course: Course) -> bool:
    return Category.LECTURE not in course.category


def _weekday_offset(day_name: str) -> int:
    try:
        return WEEKDAYS.index(day_name)
    except ValueError:
        raise DataShapeError(f"Unknown weekday: {day_name!r}") from None


def _add_courses(
    out: List[Course],
    timetable: Timetable,
    stretches: Iterable[Stretch],
    eligible: Callable[[Course], bool],
) -> None:
    """
    Append one occurrence per eligible course, per week of every stretch.
    """
    for stretch in stretches:
        monday: date = stretch.start
        for _ in range(stretch.weeks):
            for day in timetable.days:
                current = monday + timedelta(days=_weekday_offset(day.name))
                for course in day.courses:
                    if course is None or not eligible(course):
                        continue
                    # negative indices would wrap around the slot table
                    if course.start < 0:
                        raise IndexError(f"Course {course.name!r} starts at slot {course.start}")
                    start = _minute(timetable.slots[course.start].start)
                    end = _minute(timetable.slots[course.last].end)
                    out.append(
                        replace(
                            course,
                            dtstart=datetime.combine(current, start),
                            dtend=datetime.combine(current, end),
                        )
                    )
            # Friday -> next Monday
            monday += timedelta(weeks=1)


def expand(
    timetable: Timetable,
    period_lecture: Sequence[Stretch],
    period_other: Sequence[Stretch],
) -> List[Course]:
    """
    Dated occurrences of every course of the (filtered) grid.

    The grid itself is left untouched: occurrences are copies.
    """
    occurrences: List[Course] = []
    _add_courses(occurrences, timetable, period_lecture, _is_lecture)
    _add_courses(occurrences, timetable, period_other, _not_lecture)
    return occurrences


def build(timetable: Timetable, periods: Dict[int, PeriodInfo]) -> List[Course]:
    """
    Expand `timetable` with the period descriptor of its semester.
    """
    info = periods.get(timetable.semester)
    if info is None:
        known = ", ".join(str(s) for s in sorted(periods)) or "none"
        raise MissingPeriodError(f"No period dates for semester {timetable.semester} (known: {known})")

    occurrences = expand(timetable, info.lecture, info.other)
    if not occurrences:
        warnings.warn(f"Semester {timetable.semester}: no course to export", EmptyScheduleWarning, stacklevel=2)
    return occurrences
