"""
Terminal UI.

- selectors: the multi-choice prompts used by the filters (gridcal.filters)
- first-day prompt
- weekly timetable view
"""

from __future__ import annotations

import re
from datetime import date
from typing import Callable, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gridcal.labels import slot_range
from gridcal.model import Timetable, format_categories
from gridcal.periods import parse_first_day


console = Console()


class DefaultSelector:
    """
    Non-interactive selector: accepts the default choices as they are.
    """

    def select(self, prompt: str, items: Sequence[str], defaults: Sequence[bool]) -> List[int]:
        return [i for i, checked in enumerate(defaults) if checked]


class ConsoleSelector:
    """
    Numbered checklist in the terminal.

    The user answers with the numbers to select ('1 3' or '1,3'),
    blank to keep the checked ones, 'all' or 'none'.
    """

    def __init__(self, out: Optional[Console] = None, ask: Optional[Callable[[str], str]] = None) -> None:
        self.console = out or console
        self.ask = ask or self.console.input

    def _show(self, prompt: str, items: Sequence[str], checked: Sequence[int]) -> None:
        table = Table(title=escape(prompt), box=box.SIMPLE)
        table.add_column("#", justify="right")
        table.add_column("")
        table.add_column("Option")
        for i, item in enumerate(items):
            mark = "[x]" if i in checked else "[ ]"
            table.add_row(str(i + 1), escape(mark), escape(item))
        self.console.print(table)

    def select(self, prompt: str, items: Sequence[str], defaults: Sequence[bool]) -> List[int]:
        checked = [i for i, d in enumerate(defaults) if d]

        while True:
            self._show(prompt, items, checked)
            answer = self.ask("Numbers to select [blank = keep checked, 'all', 'none']: ").strip().lower()

            if not answer:
                return checked
            if answer == "all":
                return list(range(len(items)))
            if answer == "none":
                return []

            picks: List[int] = []
            valid = True
            for token in re.split(r"[,\s]+", answer):
                if not token:
                    continue
                if not token.isdigit():
                    self.console.print(f"Not a number: {escape(token)}")
                    valid = False
                    break
                n = int(token)
                if not (1 <= n <= len(items)):
                    self.console.print(f"Out of range: {n}")
                    valid = False
                    break
                if n - 1 not in picks:
                    picks.append(n - 1)

            if valid:
                return sorted(picks)


def ask_first_day(default: Optional[date] = None, ask: Optional[Callable[[str], str]] = None) -> date:
    """
    Prompt for the first day of classes (first period of the year).
    """
    ask = ask or console.input
    hint = f" [{default.isoformat()}]" if default else ""

    while True:
        answer = ask(f"First day of classes of the year (first period){hint}: ").strip()
        if not answer and default:
            return default
        try:
            return parse_first_day(answer)
        except ValueError as e:
            console.print(f"[red]{escape(str(e))}[/]")


def display_timetable(timetable: Timetable, out: Optional[Console] = None) -> None:
    """
    One table per weekday with the courses left after filtering.
    """
    out = out or console

    for day in timetable.days:
        courses = [c for c in day.courses if c is not None]
        if not courses:
            continue

        table = Table(title=day.name, box=box.SIMPLE, title_justify="left")
        table.add_column("Time")
        table.add_column("Type")
        table.add_column("Course", style="bold cyan")
        table.add_column("Room")
        table.add_column("Professor", style="magenta")

        for course in courses:
            table.add_row(
                slot_range(course, timetable.slots),
                format_categories(course.category, ", "),
                escape(course.name),
                escape(course.room),
                escape(course.professor or "N/A"),
            )
        out.print(table)
