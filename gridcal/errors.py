"""
Error types.

Every check in gridcal fails fast: the exceptions below are raised where a
contract is broken and travel up to the CLI unchanged, which prints them
and exits with a nonzero code. Nothing in the core retries or recovers.
"""

from __future__ import annotations


class GridError(Exception):
    """Base class for every error raised by gridcal."""


class DataShapeError(GridError):
    """A day does not tile the slot table (gap, overlap or unknown slot)."""


class MissingPeriodError(GridError):
    """No period descriptor exists for the timetable's semester."""


class SelectionIndexError(GridError):
    """The UI returned an index outside of the presented list."""


class InvalidPeriodError(GridError):
    """A stretch does not start on a Monday, or has a negative week count."""


class FetchError(GridError):
    """The timetable page could not be fetched, or holds no timetable."""


class EmptyScheduleWarning(UserWarning):
    """
    Not an error: an expansion produced no occurrence at all.

    Emitted through warnings.warn so callers can surface it, silence it,
    or turn it into an error in tests.
    """
