"""
Grid consistency checks.

A day is consistent when walking its entries covers every slot of the
slot table exactly once:

    course entry -> must start where the previous entry stopped, covers `size` slots
    empty entry  -> covers one slot

and the walk ends exactly on the last slot. Anything else means the source
page no longer matches the slot table we built for it.
"""

from __future__ import annotations

from gridcal.errors import DataShapeError
from gridcal.model import Day, Timetable


def check_day(day: Day, slot_count: int) -> None:
    """
    Raise DataShapeError if `day` does not tile `slot_count` slots exactly.
    """
    expected = 0
    for entry in day.courses:
        if entry is None:
            expected += 1
            continue
        if entry.start != expected:
            kind = "overlaps the previous entry" if entry.start < expected else "leaves a gap"
            raise DataShapeError(
                f"{day.name}: {entry.name!r} starts at slot {entry.start}, expected {expected} ({kind})"
            )
        expected += entry.size

    if expected != slot_count:
        raise DataShapeError(f"{day.name}: entries cover {expected} slots, slot table has {slot_count}")


def is_valid_day(day: Day, slot_count: int) -> bool:
    try:
        check_day(day, slot_count)
    except DataShapeError:
        return False
    return True


def check_timetable(timetable: Timetable) -> None:
    """
    Check every day of the timetable against its slot table.
    """
    for day in timetable.days:
        check_day(day, len(timetable.slots))
