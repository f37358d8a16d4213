"""
Tests for the terminal UI: selectors, first-day prompt, timetable view.

Prompts are answered by a scripted `ask` function and output goes to an
in-memory console.
"""

import io
import unittest
from datetime import date, time
from typing import Callable, List

from rich.console import Console

from gridcal.interactive import ConsoleSelector, DefaultSelector, ask_first_day, display_timetable
from gridcal.model import Category, Course, Day, Timetable, default_slot_table

ITEMS = ["Algebra - Monday 08:00-09:00", "Algebra - Tuesday 08:00-09:00", "Logic - Friday 10:00-12:00"]


def _answers(*replies: str) -> Callable[[str], str]:
    pending: List[str] = list(replies)
    return lambda prompt: pending.pop(0)


def _console() -> Console:
    return Console(file=io.StringIO(), width=120)


class TestSelectors(unittest.TestCase):
    def test_default_selector(self) -> None:
        self.assertEqual(DefaultSelector().select("p", ITEMS, [True, False, True]), [0, 2])

    def test_blank_keeps_defaults(self) -> None:
        sel = ConsoleSelector(out=_console(), ask=_answers(""))
        self.assertEqual(sel.select("p", ITEMS, [False, True, False]), [1])

    def test_numbers(self) -> None:
        sel = ConsoleSelector(out=_console(), ask=_answers("3, 1 3"))
        self.assertEqual(sel.select("p", ITEMS, [False] * 3), [0, 2])

    def test_all_and_none(self) -> None:
        self.assertEqual(ConsoleSelector(out=_console(), ask=_answers("all")).select("p", ITEMS, [False] * 3), [0, 1, 2])
        self.assertEqual(ConsoleSelector(out=_console(), ask=_answers("none")).select("p", ITEMS, [True] * 3), [])

    def test_invalid_answers_prompt_again(self) -> None:
        out = _console()
        sel = ConsoleSelector(out=out, ask=_answers("x", "4", "2"))
        self.assertEqual(sel.select("p", ITEMS, [False] * 3), [1])
        text = out.file.getvalue()
        self.assertIn("Not a number", text)
        self.assertIn("Out of range", text)

    def test_checklist_is_shown(self) -> None:
        out = _console()
        ConsoleSelector(out=out, ask=_answers("")).select("Choose your lecture slots", ITEMS, [True, False, False])
        text = out.file.getvalue()
        self.assertIn("Choose your lecture slots", text)
        self.assertIn("[x]", text)
        self.assertIn("Logic - Friday 10:00-12:00", text)


class TestAskFirstDay(unittest.TestCase):
    def test_blank_uses_default(self) -> None:
        self.assertEqual(ask_first_day(date(2024, 9, 2), ask=_answers("")), date(2024, 9, 2))

    def test_retry_on_bad_date(self) -> None:
        self.assertEqual(ask_first_day(None, ask=_answers("", "soon", "9 septembre 2024")), date(2024, 9, 9))


class TestDisplay(unittest.TestCase):
    def test_days_with_courses(self) -> None:
        timetable = Timetable(
            slots=default_slot_table(time(8, 0), time(12, 0)),
            semester=1,
            days=[
                Day("Monday", [Course("Algebra", {Category.LECTURE}, "Salle 101", start=0, size=4, professor="Dupont")]),
                Day("Tuesday", [None]),
            ],
        )
        out = _console()
        display_timetable(timetable, out=out)
        text = out.file.getvalue()
        self.assertIn("Monday", text)
        self.assertIn("08:00-09:00", text)
        self.assertIn("Algebra", text)
        self.assertIn("Dupont", text)
        self.assertNotIn("Tuesday", text)


if __name__ == "__main__":
    unittest.main()
