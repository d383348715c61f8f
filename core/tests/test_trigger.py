import os
import sys
import unittest

PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from noteshift_core import MatchPolicy, TriggerDetector


class FirstOccurrenceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.detector = TriggerDetector()

    def test_completed_trigger_matches(self) -> None:
        match = self.detector.detect("patient has :htn ")
        self.assertIsNotNone(match)
        self.assertEqual(match.raw_key, "htn")
        self.assertEqual(match.start, 12)
        self.assertEqual(match.end, 17)

    def test_trigger_without_trailing_whitespace_is_in_progress(self) -> None:
        self.assertIsNone(self.detector.detect("patient has :htn"))
        self.assertIsNone(self.detector.detect("patient has :"))

    def test_whitespace_after_sentinel_is_allowed(self) -> None:
        match = self.detector.detect("note : cc\n")
        self.assertEqual(match.raw_key, "cc")
        self.assertEqual(match.start, 5)

    def test_first_occurrence_wins(self) -> None:
        match = self.detector.detect(":cc then :dm ")
        self.assertEqual(match.raw_key, "cc")
        self.assertEqual(match.start, 0)

    def test_no_sentinel_means_no_match(self) -> None:
        self.assertIsNone(self.detector.detect("plain text "))
        self.assertIsNone(self.detector.detect(""))


class AnchoredEndTests(unittest.TestCase):
    def setUp(self) -> None:
        self.detector = TriggerDetector(MatchPolicy.ANCHORED_END)

    def test_only_trigger_at_end_matches(self) -> None:
        self.assertIsNone(self.detector.detect(":cc then more"))
        match = self.detector.detect(":cc then :dm ")
        self.assertEqual(match.raw_key, "dm")
        self.assertEqual(match.start, 9)

    def test_cursor_hint_sets_the_anchor(self) -> None:
        text = "pt :htn and more"
        match = self.detector.detect(text, cursor_hint=8)
        self.assertEqual(match.raw_key, "htn")
        self.assertEqual((match.start, match.end), (3, 8))
        self.assertIsNone(self.detector.detect(text, cursor_hint=7))


if __name__ == "__main__":
    unittest.main()
