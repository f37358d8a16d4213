"""
Human-readable labels shown in the selection prompts.
"""

from __future__ import annotations

from typing import Sequence

from gridcal.model import Course, TimeSlot


def slot_range(course: Course, slots: Sequence[TimeSlot]) -> str:
    """
    '08:00-09:30' for a course covering slots[start] .. slots[start + size - 1].
    """
    return f"{slots[course.start].start_label}-{slots[course.last].end_label}"


def selection_label(course: Course, day_name: str, slots: Sequence[TimeSlot]) -> str:
    """
    Label of one slot-option, e.g. 'Algebra - Monday 08:00-09:00'.

    Filters compare chosen labels by string equality, so the format must
    stay stable between building the list and applying the choice.
    """
    return f"{course.name} - {day_name} {slot_range(course, slots)}"
