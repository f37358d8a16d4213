"""
Course identities and slot-option counting.

Two courses share an identity when they are options for the same logical
activity: same name and same categories, or same name only when TD and TP
are merged. Counting how many options each identity has tells the filters
which courses need a choice from the user.

Counts describe the grid at the moment they are computed: recompute them
after every filter step.
"""

from __future__ import annotations

from collections import Counter
from typing import FrozenSet, Hashable, Iterable, List, Tuple

from gridcal.model import Category, Course, Timetable


def identity(course: Course, merge_td_tp: bool = False) -> Hashable:
    if merge_td_tp:
        return course.name
    return (course.name, course.category)


def occurrences(timetable: Timetable, allowed: Iterable[Category]) -> List[Tuple[str, Course]]:
    """
    (day name, course) for every course sharing a category with `allowed`.
    """
    allowed_set: FrozenSet[Category] = frozenset(allowed)
    return [(day, c) for day, c in timetable.iter_courses() if c.category & allowed_set]


def count(timetable: Timetable, allowed: Iterable[Category], merge_td_tp: bool = False) -> Counter:
    """
    Number of weekly slot-options per identity, among courses in `allowed`.
    """
    return Counter(identity(c, merge_td_tp) for _, c in occurrences(timetable, allowed))
