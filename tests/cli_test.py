import io
import json
import os
import shutil
import tempfile
import unittest
from contextlib import redirect_stdout

from pagediff.cli import EXIT_EMPTY_SOURCE, EXIT_LOAD_FAILED, EXIT_OK, main

SOURCE = """
<html><body>
  <h1>Spring Sale</h1>
  <p>Everything must go.</p>
  <a href="/shop">Shop now</a>
  <a href="/contact">Contact</a>
  <img src="/img/banner-v1.png">
</body></html>
"""

CURRENT = """
<html><body>
  <h1>Summer Sale</h1>
  <p>Everything must go.</p>
  <a href="/shop">Shop the sale</a>
  <a href="/help">Contact</a>
  <img src="/img/banner-v2.png">
</body></html>
"""


class TestCli(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self.source = self._write("source.html", SOURCE)
        self.current = self._write("current.html", CURRENT)

    def tearDown(self):
        shutil.rmtree(self.tmp)

    def _write(self, name, content):
        path = os.path.join(self.tmp, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def _run(self, *args):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(list(args))
        return code, out.getvalue()

    def test_prints_table(self):
        code, output = self._run(self.source, self.current)
        self.assertEqual(code, EXIT_OK)
        self.assertIn("Page Differences (", output)
        self.assertIn("Heading Change", output)
        self.assertIn("Image Change", output)

    def test_json_export(self):
        out_path = os.path.join(self.tmp, "out", "diff.json")
        code, _ = self._run(self.source, self.current, "--json", out_path)
        self.assertEqual(code, EXIT_OK)
        with open(out_path, encoding="utf-8") as f:
            records = json.load(f)
        kinds = [r["kind"] for r in records]
        self.assertEqual(kinds[0], "Heading Change")
        self.assertIn("CTA Text Change", kinds)
        self.assertIn("Modified Link", kinds)
        self.assertIn("Removed Link", kinds)
        self.assertEqual([r["priority"] for r in records], sorted(r["priority"] for r in records))
        removed = [r for r in records if r["category"] == "REMOVED"]
        self.assertTrue(all(r["element_id"] is None for r in removed))

    def test_filter_links(self):
        out_path = os.path.join(self.tmp, "links.json")
        code, _ = self._run(self.source, self.current, "--filter", "link", "--json", out_path)
        self.assertEqual(code, EXIT_OK)
        with open(out_path, encoding="utf-8") as f:
            records = json.load(f)
        self.assertEqual([r["kind"] for r in records], ["Modified Link"])

    def test_search(self):
        out_path = os.path.join(self.tmp, "search.json")
        self._run(self.source, self.current, "--search", "banner", "--json", out_path)
        with open(out_path, encoding="utf-8") as f:
            records = json.load(f)
        self.assertEqual([r["kind"] for r in records], ["Image Change"])

    def test_annotate(self):
        out_path = os.path.join(self.tmp, "annotated.html")
        code, _ = self._run(self.source, self.current, "--annotate", out_path)
        self.assertEqual(code, EXIT_OK)
        with open(out_path, encoding="utf-8") as f:
            html = f.read()
        self.assertIn('data-pce-marked="true"', html)
        self.assertIn('id="pce-element-1"', html)
        self.assertIn("pce-marker", html)

    def test_empty_source(self):
        empty = self._write("empty.html", "  \n")
        code, output = self._run(empty, self.current)
        self.assertEqual(code, EXIT_EMPTY_SOURCE)
        self.assertIn("empty", output)

    def test_missing_snapshot(self):
        code, _ = self._run(os.path.join(self.tmp, "missing.html"), self.current)
        self.assertEqual(code, EXIT_LOAD_FAILED)


if __name__ == "__main__":
    unittest.main()
