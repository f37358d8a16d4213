import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from gridcal.export_ics import ensure_ics_suffix, export_courses_to_ics
from gridcal.model import Category, Course


def _occurrence(**kw) -> Course:
    fields = dict(
        name="Algèbre",
        category={Category.LECTURE},
        room="Salle 101",
        start=0,
        size=4,
        professor="Dupont",
        dtstart=datetime(2024, 9, 2, 8, 0),
        dtend=datetime(2024, 9, 2, 9, 0),
    )
    fields.update(kw)
    return Course(**fields)


class TestExportICS(unittest.TestCase):
    def test_export_creates_file_and_contains_calendar(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            out, n = export_courses_to_ics([_occurrence()], Path(d) / "out.ics")
            self.assertEqual(n, 1)
            raw = out.read_bytes()
        text = raw.decode("utf-8")

        self.assertIn("BEGIN:VCALENDAR", text)
        self.assertIn("BEGIN:VTIMEZONE", text)
        self.assertIn("BEGIN:VEVENT", text)
        self.assertIn("DTSTART;TZID=Europe/Paris:20240902T080000", text)
        self.assertIn("DTEND;TZID=Europe/Paris:20240902T090000", text)
        self.assertIn("SUMMARY;LANGUAGE=fr:Cours - Algèbre", text)
        self.assertIn("LOCATION:Salle 101", text)
        self.assertIn('ATTENDEE;CN="Dupont";PARTSTAT=ACCEPTED;ROLE=CHAIR:', text)
        # every line is CRLF-terminated
        self.assertTrue(raw.startswith(b"BEGIN:VCALENDAR\r\n"))
        self.assertTrue(raw.endswith(b"END:VCALENDAR\r\n"))
        self.assertEqual(raw.count(b"\n"), raw.count(b"\r\n"))

    def test_without_timezone(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            out, _ = export_courses_to_ics([_occurrence()], Path(d) / "out.ics", with_tz=False)
            text = out.read_text(encoding="utf-8")

        self.assertNotIn("VTIMEZONE", text)
        self.assertIn("DTSTART:20240902T080000", text)

    def test_combined_categories_and_description(self) -> None:
        occ = _occurrence(
            name="Projet",
            category={Category.TUTORIAL, Category.LECTURE},
            professor=None,
            data="Groupe 1, semaines impaires",
        )
        with tempfile.TemporaryDirectory() as d:
            out, _ = export_courses_to_ics([occ], Path(d) / "out.ics")
            text = out.read_text(encoding="utf-8")

        self.assertIn("SUMMARY;LANGUAGE=fr:Cours/TD - Projet", text)
        self.assertIn("CATEGORIES:Cours/TD", text)
        self.assertIn("DESCRIPTION:Groupe 1\\, semaines impaires", text)
        self.assertNotIn("ATTENDEE", text)

    def test_undated_courses_are_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            _, n = export_courses_to_ics([_occurrence(), _occurrence(dtstart=None, dtend=None)], Path(d) / "o.ics")
        self.assertEqual(n, 1)

    def test_suffix(self) -> None:
        self.assertEqual(ensure_ics_suffix("cal"), Path("cal.ics"))
        self.assertEqual(ensure_ics_suffix("cal.ICS"), Path("cal.ICS"))
        self.assertEqual(ensure_ics_suffix("s1.2024"), Path("s1.2024.ics"))


if __name__ == "__main__":
    unittest.main()
