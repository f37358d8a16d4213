"""
Timetable filtering.

The weekly grid usually offers more than one slot for the same course
(several lecture groups, several TD/TP groups). Filtering narrows it down
to the slots the user actually attends, in three steps:

    1. subjects  -> keep only the chosen course names
    2. lectures  -> choose among lecture slots offered more than once
    3. TD/TP     -> choose among tutorial/practical slots offered more than once

Steps 2 and 3 both need step 1 done, because counts must reflect the
courses that are still in the grid.

Note on combined Cours/TD slots: when a lecture and its tutorial share a
slot, it is an alternation block with no other option, so such a slot is
never dropped by steps 2 or 3.

The actual choice is delegated to a Selector (see gridcal.interactive).
"""

from __future__ import annotations

from typing import Callable, FrozenSet, List, Protocol, Sequence, Set

from gridcal.counting import count, identity, occurrences
from gridcal.errors import SelectionIndexError
from gridcal.labels import selection_label
from gridcal.model import Category, Course, Timetable


LECTURE_CATEGORIES: FrozenSet[Category] = frozenset({Category.LECTURE})
TDTP_CATEGORIES: FrozenSet[Category] = frozenset({Category.TUTORIAL, Category.PRACTICAL})


class Selector(Protocol):
    def select(self, prompt: str, items: Sequence[str], defaults: Sequence[bool]) -> List[int]:
        """
        Let the user pick among `items`. Returns indices into `items`.
        """
        ...


def _chosen_items(selector: Selector, prompt: str, items: List[str], defaults: List[bool]) -> Set[str]:
    picks = selector.select(prompt, items, defaults)
    chosen: Set[str] = set()
    for i in picks:
        if not (0 <= i < len(items)):
            raise SelectionIndexError(f"Selection index {i} out of range (0..{len(items) - 1})")
        chosen.add(items[i])
    return chosen


def _retain(timetable: Timetable, keep: Callable[[Course, str], bool]) -> None:
    """
    Rebuild every day with only the courses `keep` accepts.
    """
    for day in timetable.days:
        day.courses = [c for c in day.courses if c is not None and keep(c, day.name)]


def subject_names(timetable: Timetable) -> List[str]:
    """
    Distinct course names, in order of first appearance in the week.
    """
    names: List[str] = []
    for _, course in timetable.iter_courses():
        if course.name not in names:
            names.append(course.name)
    return names


def select_subjects(timetable: Timetable, selector: Selector) -> Timetable:
    """
    Keep only the courses whose name the user chose (all checked by default).
    """
    names = subject_names(timetable)
    chosen: Set[str] = set()
    if names:
        chosen = _chosen_items(selector, "Choose your subjects", names, [True] * len(names))

    _retain(timetable, lambda course, _day: course.name in chosen)
    return timetable


def ambiguous_labels(timetable: Timetable, allowed: FrozenSet[Category], merge_td_tp: bool = False) -> List[str]:
    """
    Sorted labels of every slot-option whose identity is offered more than once.
    """
    counts = count(timetable, allowed, merge_td_tp)
    labels = {
        selection_label(course, day, timetable.slots)
        for day, course in occurrences(timetable, allowed)
        if counts[identity(course, merge_td_tp)] > 1
    }
    return sorted(labels)


def _disambiguate(
    timetable: Timetable,
    selector: Selector,
    prompt: str,
    allowed: FrozenSet[Category],
    always_keep: FrozenSet[Category],
    merge_td_tp: bool,
) -> Timetable:
    counts = count(timetable, allowed, merge_td_tp)

    labels = ambiguous_labels(timetable, allowed, merge_td_tp)
    chosen: Set[str] = set()
    if labels:
        chosen = _chosen_items(selector, prompt, labels, [False] * len(labels))

    def keep(course: Course, day_name: str) -> bool:
        if course.category & always_keep:
            return True
        if counts[identity(course, merge_td_tp)] == 1:
            return True
        return selection_label(course, day_name, timetable.slots) in chosen

    _retain(timetable, keep)
    return timetable


def select_lectures(timetable: Timetable, selector: Selector) -> Timetable:
    """
    Choose among lecture slots offered more than once (none checked by default).
    """
    return _disambiguate(
        timetable,
        selector,
        "Choose your lecture slots",
        allowed=LECTURE_CATEGORIES,
        always_keep=TDTP_CATEGORIES,
        merge_td_tp=False,
    )


def select_tutorials(timetable: Timetable, selector: Selector, merge_td_tp: bool = False) -> Timetable:
    """
    Choose among TD/TP slots offered more than once (none checked by default).

    With merge_td_tp, a TD and a TP sharing a name count as options of the
    same activity.
    """
    return _disambiguate(
        timetable,
        selector,
        "Choose your TD/TP slots",
        allowed=TDTP_CATEGORIES,
        always_keep=LECTURE_CATEGORIES,
        merge_td_tp=merge_td_tp,
    )


def filter_timetable(timetable: Timetable, selector: Selector, merge_td_tp: bool = False) -> Timetable:
    select_subjects(timetable, selector)
    select_lectures(timetable, selector)
    select_tutorials(timetable, selector, merge_td_tp)
    return timetable
