"""
gridcal – turn a weekly university timetable into dated calendar events.
"""

from pathlib import Path

__version__ = (Path(__file__).resolve().parent / "VERSION").read_text(encoding="utf-8").strip()
