"""
Parsing (timetable HTML -> Timetable).

The EDT page is one big table: each course is a <td> with a rowspan equal
to its number of quarter-hour slots and a title such as

    "TD Algorithmique M1 : mardi 10h30 (durée : 1h30)"

- Reads one page of HTML
- Extracts EACH titled cell as exactly ONE course of the weekly grid
- Returns the days Monday..Friday, each tiling the slot table

Important rules:
- the slot table is fixed (see gridcal.model.default_slot_table)
- a cell starting at a time missing from the slot table is a shape error
"""

from __future__ import annotations

import re
from datetime import date, time
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup, Tag
from rich.console import Console

from gridcal.errors import DataShapeError, FetchError
from gridcal.model import WEEKDAYS, Category, Course, Day, TimeSlot, Timetable, default_slot_table
from gridcal.periods import parse_first_day


console = Console(stderr=True)

NO_TIMETABLE = "Aucun créneau horaire affecté"

FRENCH_DAYS = {
    "lundi": "Monday",
    "mardi": "Tuesday",
    "mercredi": "Wednesday",
    "jeudi": "Thursday",
    "vendredi": "Friday",
}

CATEGORY_BY_TYPE: Dict[str, FrozenSet[Category]] = {
    "COURS": frozenset({Category.LECTURE}),
    "COURS_TD": frozenset({Category.LECTURE, Category.TUTORIAL}),
    "TD": frozenset({Category.TUTORIAL}),
    "TD_M2": frozenset({Category.TUTORIAL}),
    "TP": frozenset({Category.PRACTICAL}),
    "TP_M2": frozenset({Category.PRACTICAL}),
}

_TITLE_RE = re.compile(
    r"^(?:(?P<type>COURS_TD|COURS|TD_M2|TD|TP_M2|TP) )?(?P<name>.*) : "
    r"(?P<day>lundi|mardi|mercredi|jeudi|vendredi) (?P<start>\d{1,2}h\d{2})\s*"
    r"\(durée : (?P<duration>[^)]*)\)"
)
_LEVEL_SUFFIX_RE = re.compile(r"[ -][ML][1-3]$")
_BR = r"<br\s*/?>"
_ROOM_RE = re.compile(rf"(<table.*</table>|{_BR}.*?{_BR}.*?)?{_BR}(?P<location>.*?){_BR}", re.S)
_START_DATE_RE = re.compile(r"\d{1,2} (?:septembre|octobre)")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def parse_hour(text: str) -> time:
    """
    '8h30' -> time(8, 30).
    """
    m = re.fullmatch(r"\s*(\d{1,2})h(\d{2})\s*", text)
    if not m:
        raise ValueError(f"Invalid hour: {text!r}")
    return time(int(m.group(1)), int(m.group(2)))


def _slot_index(slots: Sequence[TimeSlot], start: time, title: str) -> int:
    for i, slot in enumerate(slots):
        if slot.start == start:
            return i
    raise DataShapeError(f"No slot starts at {start.strftime('%H:%M')} ({title!r})")


def _html_text(fragment: str) -> str:
    return BeautifulSoup(fragment, "html.parser").get_text(" ", strip=True)


def _professor(cell: Tag) -> Optional[str]:
    smalls = cell.find_all("small")
    if not smalls:
        return None
    last = smalls[-1]
    # the extra-data <small> wraps a <span>, it is not a name
    if last.find("span") is not None:
        return None
    return last.get_text(strip=True) or None


def _room(cell: Tag) -> str:
    bolds = cell.find_all("b")
    if not bolds:
        return ""
    m = _ROOM_RE.search(bolds[-1].decode_contents())
    if not m:
        return ""
    return _html_text(m.group("location"))


def _extra_data(cell: Tag) -> Optional[str]:
    span = cell.find("span")
    if span is None:
        return None
    text = _html_text(re.sub(_BR, " ", span.decode_contents()))
    return " ".join(text.split()) or None


# ---------------------------------------------------------------------------
# Cell parsing (CORE LOGIC)
# ---------------------------------------------------------------------------


def parse_cell(cell: Tag, slots: Sequence[TimeSlot]) -> Tuple[str, Course]:
    """
    Parses exactly one titled cell into (weekday, course).
    """
    title = str(cell.get("title", "")).strip()
    m = _TITLE_RE.match(title)
    if not m:
        raise DataShapeError(f"Unrecognized course cell title: {title!r}")

    kind = m.group("type") or ""
    category = CATEGORY_BY_TYPE.get(kind)
    if category is None:
        console.print(f"[yellow]Unknown type of course, falling back to 'Cours':[/] {title}")
        category = CATEGORY_BY_TYPE["COURS"]

    try:
        size = int(str(cell.get("rowspan", "1")))
    except ValueError:
        raise DataShapeError(f"Invalid rowspan in {title!r}") from None

    course = Course(
        name=_LEVEL_SUFFIX_RE.sub("", m.group("name").strip()),
        category=category,
        room=_room(cell),
        start=_slot_index(slots, parse_hour(m.group("start")), title),
        size=size,
        professor=_professor(cell),
        data=_extra_data(cell),
    )
    return FRENCH_DAYS[m.group("day")], course


def _tile(name: str, courses: List[Course], slot_count: int) -> Day:
    """
    Lay the courses of one day out on the slot table, empty slots as None.
    """
    entries: List[Optional[Course]] = []
    pos = 0
    for course in sorted(courses, key=lambda c: c.start):
        while pos < course.start:
            entries.append(None)
            pos += 1
        entries.append(course)
        pos = max(pos, course.start + course.size)
    while pos < slot_count:
        entries.append(None)
        pos += 1
    return Day(name=name, courses=entries)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_timetable(html: str, semester: int, slots: Optional[List[TimeSlot]] = None) -> Timetable:
    """
    Parses one EDT page into the weekly grid of `semester`.
    """
    if NO_TIMETABLE in html:
        raise FetchError(NO_TIMETABLE)

    slots = slots if slots is not None else default_slot_table()
    soup = BeautifulSoup(html, "html.parser")

    table = soup.find("table")
    if table is None:
        raise FetchError("No timetable found in page")
    body = table.find("tbody") or table

    by_day: Dict[str, List[Course]] = {name: [] for name in WEEKDAYS}
    for cell in body.find_all("td", title=True):
        day, course = parse_cell(cell, slots)
        by_day[day].append(course)

    days = [_tile(name, by_day[name], len(slots)) for name in WEEKDAYS]
    return Timetable(slots=slots, semester=semester, days=days)


def find_start_date(html: str, year: int) -> Optional[date]:
    """
    Back-to-school date announced in the page banner ('2 septembre'), if any.
    """
    soup = BeautifulSoup(html, "html.parser")
    for bold in soup.find_all("b"):
        if bold.find("font") is None:
            continue
        m = _START_DATE_RE.search(bold.get_text(" ", strip=True))
        if m:
            return parse_first_day(f"{m.group(0)} {year}")
    return None
