import unittest
from datetime import datetime, timezone

from motivator.domain import ActivityStats, Tone
from motivator.fallback import FALLBACK_MODEL_NAME, get_fallback_motivation

NOW = datetime(2025, 5, 20, tzinfo=timezone.utc)


def _stats(total_activities, days_remaining=10):
    return ActivityStats(
        total_activities=total_activities,
        month=5,
        year=2025,
        days_elapsed=31 - days_remaining,
        days_remaining=days_remaining,
        total_days=31,
    )


class TestFallbackMotivation(unittest.TestCase):
    def _get(self, *args, **kwargs):
        return get_fallback_motivation(_stats(*args, **kwargs), now=lambda: NOW)

    def test_no_activities(self):
        result = self._get(0)
        self.assertIn("first activity", result.message)
        self.assertEqual(result.tone, Tone.ENCOURAGING)

    def test_high_volume_is_celebratory(self):
        result = self._get(20)
        self.assertEqual(result.tone, Tone.CELEBRATORY)

    def test_steady_progress_mentions_count(self):
        result = self._get(12)
        self.assertEqual(result.message, "Great progress with 12 activities! Keep the momentum going.")
        self.assertEqual(result.tone, Tone.ENCOURAGING)

    def test_low_volume_with_time_left_is_challenging(self):
        result = self._get(3, days_remaining=15)
        self.assertEqual(result.message, "3 activities so far. Plenty of time to add more!")
        self.assertEqual(result.tone, Tone.CHALLENGING)

    def test_low_volume_near_month_end(self):
        result = self._get(3, days_remaining=7)
        self.assertEqual(result.tone, Tone.ENCOURAGING)
        self.assertIn("finish the month strong", result.message)

    def test_metadata(self):
        result = self._get(5)
        self.assertEqual(result.model, FALLBACK_MODEL_NAME)
        self.assertEqual(result.generated_at, NOW)
        self.assertFalse(result.cached)


if __name__ == "__main__":
    unittest.main()
