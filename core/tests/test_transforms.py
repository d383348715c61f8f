import os
import sys
import unittest
from datetime import date

PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from noteshift_core import expand_onset, expand_prescription, finalize_note

TODAY = date(2026, 10, 19)


class OnsetTests(unittest.TestCase):
    def test_each_unit(self) -> None:
        self.assertEqual(expand_onset("fever 2d:(", TODAY), "fever (onset 2-day ago 2026-10-17)")
        self.assertEqual(expand_onset("cough 1w:(", TODAY), "cough (onset 1-week ago 2026-10-12)")
        self.assertEqual(expand_onset("pain 1m:(", TODAY), "pain (onset 1-month ago 2026-09-19)")
        self.assertEqual(expand_onset("dm 1y:(", TODAY), "dm (onset 1-year ago 2025-10-19)")

    def test_unknown_unit_is_left_alone(self) -> None:
        self.assertEqual(expand_onset("odd 3x:(", TODAY), "odd 3x:(")


class PrescriptionTests(unittest.TestCase):
    def test_codes(self) -> None:
        self.assertEqual(expand_prescription("metformin 500:>2"), "metformin 500 mg 1 tab p.o. b.i.d.")
        self.assertEqual(expand_prescription("BP control :>0"), "BP control  without medications")
        self.assertEqual(expand_prescription("x:>9"), "x:>9")

    def test_finalize_applies_both(self) -> None:
        text = "HA 3d:(\naspirin 100:>1"
        self.assertEqual(
            finalize_note(text, TODAY),
            "HA (onset 3-day ago 2026-10-16)\naspirin 100 mg 1 tab p.o. q.d.",
        )


if __name__ == "__main__":
    unittest.main()
