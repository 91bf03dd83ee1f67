import unittest

from pagediff.errors import MissingIndexError
from pagediff.indexer import build_source_index
from pagediff.models import Category, DiffKind, MarkAction
from pagediff.parser import parse_document
from pagediff.removals import detect_removals
from pagediff.run import ComparisonRun

BASE = "https://example.com/"


class TestDetectRemovals(unittest.TestCase):
    def _removals(self, source_html, current_html):
        run = ComparisonRun()
        run.source_index = build_source_index(parse_document(source_html, BASE))
        return detect_removals(parse_document(current_html, BASE), run), run

    def test_removed_text(self):
        records, _ = self._removals("<p>Contact Us</p><p>Keep</p>", "<p>Keep</p>")
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].kind, DiffKind.REMOVED_TEXT)
        self.assertEqual(records[0].category, Category.REMOVED)
        self.assertEqual(records[0].detail, 'Text removed: "contact us"')
        self.assertIsNone(records[0].anchor)
        self.assertEqual(records[0].mark_action, MarkAction.NONE)

    def test_text_moved_elsewhere_is_not_removed(self):
        records, _ = self._removals("<p>Contact Us</p>", "<footer><span>contact us</span></footer>")
        self.assertEqual(records, [])

    def test_removed_link_and_its_text(self):
        records, _ = self._removals('<a href="/old-page">Old</a><p>Keep</p>', "<p>Keep</p>")
        self.assertEqual(
            [(r.kind, r.detail) for r in records],
            [
                (DiffKind.REMOVED_TEXT, 'Text removed: "old"'),
                (DiffKind.REMOVED_LINK, "URL removed: https://example.com/old-page"),
            ],
        )

    def test_link_kept_with_new_text_is_not_removed(self):
        records, _ = self._removals('<a href="/a">Buy</a>', '<a href="/a">Buy</a><a href="/a">Other</a>')
        self.assertEqual(records, [])

    def test_removed_texts_follow_source_order(self):
        records, _ = self._removals("<p>Zeta</p><p>Alpha</p><p>Mid</p>", "<p>Mid</p>")
        self.assertEqual([r.detail for r in records], ['Text removed: "zeta"', 'Text removed: "alpha"'])

    def test_current_index_built_once(self):
        _, run = self._removals("<p>A</p>", "<p>B</p>")
        self.assertIsNotNone(run.current_index)
        self.assertEqual(run.current_index.texts, frozenset({"b"}))

    def test_sequence_continues_after_classification(self):
        run = ComparisonRun()
        run.source_index = build_source_index(parse_document("<p>Gone</p>", BASE))
        run.next_sequence_id()
        run.next_sequence_id()
        records = detect_removals(parse_document("<p>New</p>", BASE), run)
        self.assertEqual([r.sequence_id for r in records], [3])

    def test_missing_index(self):
        with self.assertRaises(MissingIndexError):
            detect_removals(parse_document("<p>x</p>", BASE), ComparisonRun())


if __name__ == "__main__":
    unittest.main()
