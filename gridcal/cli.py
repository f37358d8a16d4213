"""
CLI (Command Line Interface).

    gridcal M1                      show the filtered weekly timetable
    gridcal M1 -e my_courses        export the semester to my_courses.ics
    gridcal M2 -s 2 -t -w -e s2     semester 2, TD=TP, TD/TP start a week late

Steps of a run:
    fetch page -> parse grid -> check grid -> choose subjects/slots
    -> first day of the year -> period dates -> export (or display)

Note:
- The prompts and the timetable view live in gridcal/interactive.py
- Every error aborts the run with 'Error: ...' and exit code 1
"""

from __future__ import annotations

import argparse
import re
import sys
from datetime import date
from pathlib import Path

from gridcal import __version__
from gridcal.errors import GridError
from gridcal.expand import build
from gridcal.export_ics import export_courses_to_ics
from gridcal.filters import filter_timetable
from gridcal.interactive import ConsoleSelector, DefaultSelector, ask_first_day, console, display_timetable
from gridcal.parse import find_start_date, parse_timetable
from gridcal.periods import build_periods, parse_first_day
from gridcal.scrape import TIMETABLE_URL, current_semester, fetch_page, school_year, timetable_url
from gridcal.validate import check_timetable


def _level(text: str) -> int:
    """
    'M1' / 'm2' -> 1 / 2.
    """
    m = re.fullmatch(r"M(?P<level>[12])", text.strip(), re.IGNORECASE)
    if not m:
        raise argparse.ArgumentTypeError(f"invalid class {text!r} (expected M1 or M2)")
    return int(m.group("level"))


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser.
    """
    parser = argparse.ArgumentParser(
        prog="gridcal",
        description="Turn the weekly EDT timetable into a semester calendar (.ics)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("level", metavar="CLASS", type=_level, help="The class you want the timetable of, i.e. M1")
    parser.add_argument(
        "-s", "--semester", type=int, choices=[1, 2], help="Semester (1 or 2), default to current semester"
    )
    parser.add_argument("-y", "--year", type=int, help="First year of the academic year, default to current one")
    parser.add_argument("-e", "--export", metavar="FILE", help="Export to iCalendar format (.ics)")
    parser.add_argument("-t", "--td-are-tp", action="store_true", help="Don't distinguish TD from TP")
    parser.add_argument(
        "-f", "--first-day", metavar="DATE", help="First day of your year, e.g. 2024-09-02 or '2 septembre 2024'"
    )
    parser.add_argument("-w", "--week-skip", action="store_true", help="TD/TP start a week after lectures")
    parser.add_argument("-n", "--no-tz", action="store_true", help="Don't tag exported times with a timezone")
    parser.add_argument("--url", default=TIMETABLE_URL, help="Timetable URL template ({year}, {level}, {semester})")
    parser.add_argument("--html", metavar="HTML_PATH", help="Use a saved timetable page instead of fetching it")
    parser.add_argument("--yes", action="store_true", help="Accept every default choice without prompting")
    return parser


def _first_day(args: argparse.Namespace, html: str, year: str) -> date:
    if args.first_day:
        return parse_first_day(args.first_day)

    default = find_start_date(html, int(year.split("-", 1)[0]))
    if args.yes:
        if default is None:
            raise ValueError("No back-to-school date found in the page, use --first-day")
        return default
    return ask_first_day(default)


def run(args: argparse.Namespace) -> int:
    semester = args.semester or current_semester()
    year = school_year(args.year)

    if args.html:
        html = Path(args.html).read_text(encoding="utf-8")
    else:
        console.print(f"Fetching the M{args.level} timetable ({year}, semester {semester})...")
        html = fetch_page(timetable_url(args.level, semester, year, template=args.url))

    timetable = parse_timetable(html, semester)
    check_timetable(timetable)

    selector = DefaultSelector() if args.yes else ConsoleSelector()
    filter_timetable(timetable, selector, merge_td_tp=args.td_are_tp)

    if not args.export:
        display_timetable(timetable)
        return 0

    first_day = _first_day(args, html, year)
    console.print("Computing the semester dates...")
    periods = build_periods(first_day, week_skip=args.week_skip)

    occurrences = build(timetable, periods)
    out_path, n = export_courses_to_ics(occurrences, args.export, with_tz=not args.no_tz)
    console.print(f"Exported {n} events to: {out_path}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, runs the pipeline,
    and exits via SystemExit with a return code.
    """
    args = build_parser().parse_args(argv)
    try:
        code = run(args)
    except (GridError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        code = 1
    raise SystemExit(code)
