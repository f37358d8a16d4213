"""
Tests for the CLI entry point.

These tests focus on:
- argument validation (class must be M1 / M2)
- a complete offline run on a saved page (--html), without prompts (--yes)
- errors ending the run with exit code 1
"""

import tempfile
import unittest
from pathlib import Path

from gridcal.cli import main

PAGE = """
<b><font>Rentrée : 2 septembre</font></b>
<table><tbody>
<tr><td title="COURS Algèbre M1 : lundi 8h00 (durée : 1h00)" rowspan="4"><b>A<br>Salle 1<br></b></td></tr>
<tr><td title="TD Algèbre M1 : mardi 10h00 (durée : 1h00)" rowspan="4"><b>A<br>Salle 2<br></b></td></tr>
<tr><td title="COURS_TD Projet M1 : vendredi 14h00 (durée : 2h00)" rowspan="8"><b>P<br>Amphi<br></b></td></tr>
</tbody></table>
"""


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self._dir = tempfile.TemporaryDirectory()
        self.dir = Path(self._dir.name)
        self.html = self.dir / "edt.html"
        self.html.write_text(PAGE, encoding="utf-8")

    def tearDown(self) -> None:
        self._dir.cleanup()

    def _run(self, *argv: str) -> int:
        with self.assertRaises(SystemExit) as ctx:
            main(list(argv))
        return ctx.exception.code

    def test_cli_requires_valid_class(self) -> None:
        self.assertEqual(self._run("L3", "--html", str(self.html)), 2)

    def test_export_semester(self) -> None:
        out = self.dir / "s1"
        code = self._run("m1", "-s", "1", "--html", str(self.html), "--yes", "-f", "2024-09-02", "-e", str(out))
        self.assertEqual(code, 0)

        text = (self.dir / "s1.ics").read_text(encoding="utf-8")
        # 13 weeks: Algèbre lecture + Projet block (lecture dates) + Algèbre TD
        self.assertEqual(text.count("BEGIN:VEVENT"), 39)
        self.assertIn("DTSTART;TZID=Europe/Paris:20240902T080000", text)

    def test_week_skip_and_page_date(self) -> None:
        out = self.dir / "s1.ics"
        code = self._run("M1", "-s", "1", "-y", "2024", "--html", str(self.html), "--yes", "-w", "-n", "-e", str(out))
        self.assertEqual(code, 0)

        text = out.read_text(encoding="utf-8")
        self.assertEqual(text.count("BEGIN:VEVENT"), 38)
        self.assertNotIn("TZID", text)
        # first TD one week after the first lecture
        self.assertNotIn("DTSTART:20240903T100000", text)
        self.assertIn("DTSTART:20240910T100000", text)

    def test_display_only(self) -> None:
        self.assertEqual(self._run("M1", "-s", "1", "--html", str(self.html), "--yes"), 0)

    def test_missing_page_is_an_error(self) -> None:
        self.assertEqual(self._run("M1", "--html", str(self.dir / "missing.html"), "--yes"), 1)

    def test_bad_first_day_is_an_error(self) -> None:
        code = self._run("M1", "--html", str(self.html), "--yes", "-f", "someday", "-e", str(self.dir / "x"))
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
