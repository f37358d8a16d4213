from __future__ import annotations

import argparse
from datetime import date
from pathlib import Path
from typing import Optional

import requests

from gridcal import __version__
from gridcal.errors import FetchError


# ---------------------------------------------------------------------------
# URLs & defaults
# ---------------------------------------------------------------------------

BASE_URL = "https://silice.informatique.univ-paris-diderot.fr"
TIMETABLE_URL = BASE_URL + "/ufr/U{year}/EDT/visualiserEmploiDuTemps.php?quoi=M{level},{semester}"

USER_AGENT = f"gridcal/{__version__}"
TIMEOUT_SECONDS = 30


def current_semester(today: Optional[date] = None) -> int:
    """
    Semester running on `today`: 1 from August to January, 2 otherwise.
    """
    today = today or date.today()
    return 1 if today.month >= 8 or today.month == 1 else 2


def school_year(first_year: Optional[int] = None, today: Optional[date] = None) -> str:
    """
    Academic year label, e.g. '2024-2025'.

    Without `first_year`, the year starting in the last August before `today`.
    """
    if first_year is None:
        today = today or date.today()
        first_year = today.year if today.month >= 8 else today.year - 1
    return f"{first_year}-{first_year + 1}"


def timetable_url(level: int, semester: int, year: str, template: str = TIMETABLE_URL) -> str:
    return template.format(year=year, level=level, semester=semester)


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def fetch_page(url: str, user_agent: str = USER_AGENT) -> str:
    """
    Download one timetable page and return its HTML.
    """
    try:
        resp = requests.get(url, headers={"User-Agent": user_agent}, timeout=TIMEOUT_SECONDS)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"Can't reach timetable website ({url}): {e}") from e

    # The EDT pages do not always declare their charset
    if not resp.encoding or resp.encoding.lower() == "iso-8859-1":
        resp.encoding = resp.apparent_encoding
    return resp.text


# ---------------------------------------------------------------------------
# CLI entry
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="gridcal.scrape", description="Download one EDT page (cache HTML)")
    p.add_argument("--level", "-l", type=int, choices=[1, 2], default=1, help="Master level (1 or 2)")
    p.add_argument("--semester", "-s", type=int, choices=[1, 2], default=None, help="Semester (1 or 2)")
    p.add_argument("--year", "-y", type=int, default=None, help="First year of the academic year, e.g. 2024")
    p.add_argument("--out", "-o", type=Path, default=Path("timetable.html"), help="Output HTML file")
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    semester = args.semester or current_semester()
    year = school_year(args.year)

    url = timetable_url(args.level, semester, year)
    print(f"FETCH {url}")
    args.out.write_text(fetch_page(url), encoding="utf-8")
    print(f"Saved to: {args.out.resolve()}")


if __name__ == "__main__":
    main()
