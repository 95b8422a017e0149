import unittest

from linebadge.badges import badge_severity, badge_text, format_count, tooltip
from linebadge.config import LineCountConfig
from linebadge.models import LineCountResult


class TestBadges(unittest.TestCase):
    def test_format_count_abbreviated(self):
        self.assertEqual(format_count(0), "0")
        self.assertEqual(format_count(999), "999")
        self.assertEqual(format_count(1000), "1K")
        self.assertEqual(format_count(1234), "1.2K")
        self.assertEqual(format_count(12345), "12K")
        self.assertEqual(format_count(1_500_000), "1.5M")
        self.assertEqual(format_count(25_000_000), "25M")

    def test_format_count_exact(self):
        self.assertEqual(format_count(12345, "exact"), "12345")

    def test_badge_text_marks_estimates(self):
        config = LineCountConfig()
        self.assertEqual(badge_text(LineCountResult(total=1234, estimated=True), config), "~1.2K")
        self.assertEqual(badge_text(LineCountResult(total=12), config), "12")

    def test_badge_severity(self):
        config = LineCountConfig(warning_threshold=10, error_threshold=20)
        self.assertEqual(badge_severity(9, config), "normal")
        self.assertEqual(badge_severity(10, config), "warning")
        self.assertEqual(badge_severity(20, config), "error")

    def test_tooltip(self):
        full = LineCountResult(total=5, code=1, comment=3, blank=1)
        text = tooltip("a.ts", full)
        self.assertIn("a.ts: 5 lines", text)
        self.assertIn("comments: 3", text)
        self.assertEqual(tooltip("b", LineCountResult(total=2000, estimated=True)),
                         "b: ~2,000 lines (estimated)")
        self.assertEqual(tooltip("c", LineCountResult(total=3)), "c: 3 lines")


if __name__ == "__main__":
    unittest.main()
