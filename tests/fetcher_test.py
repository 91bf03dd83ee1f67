import os
import shutil
import tempfile
import unittest
from unittest.mock import MagicMock, patch

import requests

from pagediff.fetcher import fetch_html, is_remote, load_snapshot_text


def response(status=200, content_type="text/html; charset=utf-8", text="<p>Hi</p>"):
    r = MagicMock()
    r.status_code = status
    r.headers = {"Content-Type": content_type}
    r.text = text
    r.content = text.encode("utf-8")
    return r


class TestFetchHtml(unittest.TestCase):
    @patch("pagediff.fetcher.requests.get")
    def test_html_response(self, mock_get):
        mock_get.return_value = response()
        self.assertEqual(fetch_html("https://example.com/"), "<p>Hi</p>")
        _, kwargs = mock_get.call_args
        self.assertIn("User-Agent", kwargs["headers"])
        self.assertTrue(kwargs["allow_redirects"])

    @patch("pagediff.fetcher.requests.get")
    def test_http_error(self, mock_get):
        mock_get.return_value = response(status=404)
        self.assertIsNone(fetch_html("https://example.com/missing"))

    @patch("pagediff.fetcher.requests.get")
    def test_non_html_ignored(self, mock_get):
        mock_get.return_value = response(content_type="application/pdf")
        self.assertIsNone(fetch_html("https://example.com/file.pdf"))

    @patch("pagediff.fetcher.requests.get")
    def test_network_errors_are_not_raised(self, mock_get):
        for error in (
            requests.exceptions.Timeout(),
            requests.exceptions.ConnectionError(),
            requests.exceptions.TooManyRedirects(),
        ):
            mock_get.side_effect = error
            self.assertIsNone(fetch_html("https://example.com/"))


class TestLoadSnapshotText(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp)

    def test_reads_file(self):
        path = os.path.join(self.tmp, "page.html")
        with open(path, "wb") as f:
            f.write("<p>Café</p>".encode("utf-8") + b"\xff")
        self.assertEqual(load_snapshot_text(path), "<p>Café</p>")

    def test_missing_file(self):
        self.assertIsNone(load_snapshot_text(os.path.join(self.tmp, "nope.html")))

    @patch("pagediff.fetcher.fetch_html")
    def test_remote_location_is_fetched(self, mock_fetch):
        mock_fetch.return_value = "<p>Remote</p>"
        self.assertEqual(load_snapshot_text("https://example.com/"), "<p>Remote</p>")
        mock_fetch.assert_called_once_with("https://example.com/")

    def test_is_remote(self):
        self.assertTrue(is_remote("http://example.com"))
        self.assertTrue(is_remote("https://example.com/a"))
        self.assertFalse(is_remote("snapshots/home.html"))
        self.assertFalse(is_remote("file:///tmp/home.html"))


if __name__ == "__main__":
    unittest.main()
