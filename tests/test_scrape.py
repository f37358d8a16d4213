import unittest
from datetime import date
from unittest import mock

import requests

from gridcal.errors import FetchError
from gridcal.scrape import current_semester, fetch_page, school_year, timetable_url


class TestDefaults(unittest.TestCase):
    def test_current_semester(self) -> None:
        self.assertEqual(current_semester(date(2024, 9, 15)), 1)
        self.assertEqual(current_semester(date(2025, 1, 10)), 1)
        self.assertEqual(current_semester(date(2025, 3, 1)), 2)
        self.assertEqual(current_semester(date(2025, 7, 1)), 2)

    def test_school_year(self) -> None:
        self.assertEqual(school_year(2024), "2024-2025")
        self.assertEqual(school_year(today=date(2024, 10, 1)), "2024-2025")
        self.assertEqual(school_year(today=date(2025, 3, 1)), "2024-2025")

    def test_timetable_url(self) -> None:
        url = timetable_url(2, 1, "2024-2025", template="https://edt.example/U{year}?quoi=M{level},{semester}")
        self.assertEqual(url, "https://edt.example/U2024-2025?quoi=M2,1")


class TestFetchPage(unittest.TestCase):
    @mock.patch("gridcal.scrape.requests.get")
    def test_returns_html(self, get: mock.Mock) -> None:
        resp = mock.Mock(text="<table></table>", encoding="utf-8")
        get.return_value = resp

        self.assertEqual(fetch_page("https://edt.example/"), "<table></table>")
        resp.raise_for_status.assert_called_once()
        _, kwargs = get.call_args
        self.assertTrue(kwargs["headers"]["User-Agent"].startswith("gridcal/"))

    @mock.patch("gridcal.scrape.requests.get")
    def test_network_error(self, get: mock.Mock) -> None:
        get.side_effect = requests.ConnectionError("down")
        with self.assertRaises(FetchError):
            fetch_page("https://edt.example/")

    @mock.patch("gridcal.scrape.requests.get")
    def test_http_error(self, get: mock.Mock) -> None:
        resp = mock.Mock(encoding="utf-8")
        resp.raise_for_status.side_effect = requests.HTTPError("404")
        get.return_value = resp
        with self.assertRaises(FetchError):
            fetch_page("https://edt.example/")


if __name__ == "__main__":
    unittest.main()
