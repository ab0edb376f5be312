import unittest

from motivator.domain import ActivityStats
from motivator.errors import MotivationError, MotivationValidationError
from motivator.validation import validate_stats


def _stats(**overrides):
    base = dict(
        total_activities=5,
        total_distance_meters=10000,
        month=6,
        year=2025,
        days_elapsed=10,
        days_remaining=20,
        total_days=30,
    )
    base.update(overrides)
    return ActivityStats(**base)


class TestValidateStats(unittest.TestCase):
    def test_accepts_boundaries(self):
        for overrides in (
            {"month": 1, "year": 2000},
            {"month": 12, "year": 2100},
            {"total_activities": 0, "total_distance_meters": 0},
            {"days_elapsed": 0, "days_remaining": 0},
        ):
            validate_stats(_stats(**overrides))

    def test_rejections_and_messages(self):
        cases = [
            ({"month": 0}, "Invalid month: must be 1-12"),
            ({"month": 13}, "Invalid month: must be 1-12"),
            ({"year": 1999}, "Invalid year: must be 2000-2100"),
            ({"year": 2101}, "Invalid year: must be 2000-2100"),
            ({"total_activities": -1}, "Total activities cannot be negative"),
            ({"total_distance_meters": -0.5}, "Total distance cannot be negative"),
            ({"days_elapsed": -1}, "Invalid day counts"),
            ({"days_remaining": -3}, "Invalid day counts"),
        ]
        for overrides, message in cases:
            with self.subTest(overrides=overrides):
                with self.assertRaises(MotivationValidationError) as ctx:
                    validate_stats(_stats(**overrides))
                self.assertEqual(str(ctx.exception), message)

    def test_inconsistent_day_totals_are_tolerated(self):
        validate_stats(_stats(days_elapsed=10, days_remaining=10, total_days=31))

    def test_validation_error_is_a_motivation_error(self):
        self.assertTrue(issubclass(MotivationValidationError, MotivationError))


if __name__ == "__main__":
    unittest.main()
