"""
Central data model definitions used across the project.

This module defines the canonical weekly grid so that:
- the parser, the filters, the expander and the exporter share the same types
- a course is a recurring weekly pattern until the expander stamps it with
  absolute dtstart/dtend values
- period descriptors are checked once, when they are built
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import FrozenSet, Iterator, List, Optional, Tuple

from gridcal.errors import InvalidPeriodError


WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")


class Category(Enum):
    LECTURE = "Cours"
    TUTORIAL = "TD"
    PRACTICAL = "TP"

    def __str__(self) -> str:
        return self.value


# Display order of categories (summaries, table view)
CATEGORY_ORDER = (Category.LECTURE, Category.TUTORIAL, Category.PRACTICAL)


def format_categories(categories: FrozenSet[Category], sep: str = "/") -> str:
    return sep.join(str(c) for c in CATEGORY_ORDER if c in categories)


@dataclass(frozen=True)
class TimeSlot:
    """
    One fixed-width interval of the day, e.g. 08:00-08:15.
    """

    start: time
    end: time

    @property
    def start_label(self) -> str:
        return self.start.strftime("%H:%M")

    @property
    def end_label(self) -> str:
        return self.end.strftime("%H:%M")

    def __str__(self) -> str:
        return f"{self.start_label}-{self.end_label}"


def default_slot_table(
    first: time = time(8, 0),
    last: time = time(20, 0),
    step_minutes: int = 15,
) -> List[TimeSlot]:
    """
    Build the quarter-hour slot table covering [first, last).
    """
    slots: List[TimeSlot] = []
    day = date(2000, 1, 3)
    cursor = datetime.combine(day, first)
    stop = datetime.combine(day, last)
    step = timedelta(minutes=step_minutes)
    while cursor + step <= stop:
        slots.append(TimeSlot(cursor.time(), (cursor + step).time()))
        cursor += step
    return slots


@dataclass
class Course:
    """
    One course of the weekly grid.

    start is a 0-based index into the slot table and size the number of
    contiguous slots the course occupies. dtstart/dtend stay None until
    the course is expanded into a dated occurrence.
    """

    name: str
    category: FrozenSet[Category]
    room: str
    start: int
    size: int = 1
    professor: Optional[str] = None
    data: Optional[str] = None
    dtstart: Optional[datetime] = None
    dtend: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.category = frozenset(self.category)
        if not self.category:
            raise ValueError(f"Course {self.name!r} has no category")
        if self.start < 0:
            raise ValueError(f"Course {self.name!r} starts at slot {self.start}")
        if self.size < 1:
            raise ValueError(f"Course {self.name!r} has size {self.size}")

    @property
    def last(self) -> int:
        """Index of the last slot the course occupies."""
        return self.start + self.size - 1


@dataclass
class Day:
    """
    One weekday of the grid.

    courses is aligned with the slot table: a course stands for `size`
    slots starting at its own index, None stands for one empty slot.
    """

    name: str
    courses: List[Optional[Course]] = field(default_factory=list)


@dataclass
class Timetable:
    slots: List[TimeSlot]
    semester: int
    days: List[Day]

    def iter_courses(self) -> Iterator[Tuple[str, Course]]:
        """
        Yield (day name, course) for every course of the week, in grid order.
        """
        for day in self.days:
            for course in day.courses:
                if course is not None:
                    yield day.name, course


@dataclass(frozen=True)
class Stretch:
    """
    A run of `weeks` consecutive weeks, the first one starting on `start`.
    """

    start: date
    weeks: int

    def __post_init__(self) -> None:
        if self.start.weekday() != 0:
            raise InvalidPeriodError(f"Stretch must start on a Monday, got {self.start.isoformat()}")
        if self.weeks < 0:
            raise InvalidPeriodError(f"Negative week count: {self.weeks}")


@dataclass(frozen=True)
class PeriodInfo:
    """
    Dates of one semester: the stretch before and the stretch after the
    mid-term break, once for lectures and once for tutorials/practicals.
    """

    lecture: Tuple[Stretch, Stretch]
    other: Tuple[Stretch, Stretch]

    def __post_init__(self) -> None:
        for label, stretches in (("lecture", self.lecture), ("other", self.other)):
            if len(stretches) != 2:
                raise InvalidPeriodError(
                    f"{label} period needs exactly 2 stretches (before/after break), got {len(stretches)}"
                )
        object.__setattr__(self, "lecture", tuple(self.lecture))
        object.__setattr__(self, "other", tuple(self.other))
