import os
import unittest

from motivator.config import DEFAULT_BASE_URL, DEFAULT_FALLBACK_MODEL, DEFAULT_MODEL, Settings


class _EnvOverride:
    """Temporarily set (or unset, with None) MOTIVATOR_* variables."""

    def __init__(self, **values):
        self.values = values
        self.previous = {}

    def __enter__(self):
        for name, value in self.values.items():
            self.previous[name] = os.environ.get(name)
            if value is None:
                os.environ.pop(name, None)
            else:
                os.environ[name] = value
        return self

    def __exit__(self, *exc):
        for name, value in self.previous.items():
            if value is None:
                os.environ.pop(name, None)
            else:
                os.environ[name] = value


class TestConfig(unittest.TestCase):
    def test_settings_defaults(self):
        with _EnvOverride(
            MOTIVATOR_OPENROUTER_API_KEY=None,
            MOTIVATOR_OPENROUTER_BASE_URL=None,
            MOTIVATOR_OPENROUTER_MODEL=None,
            MOTIVATOR_OPENROUTER_FALLBACK_MODEL=None,
            MOTIVATOR_MAX_RETRIES=None,
            MOTIVATOR_CACHE_TTL_SECONDS=None,
            MOTIVATOR_ENABLE_AI_MOTIVATION=None,
        ):
            s = Settings()
            self.assertEqual(s.openrouter_base_url, DEFAULT_BASE_URL)
            self.assertEqual(s.openrouter_model, DEFAULT_MODEL)
            self.assertEqual(s.openrouter_fallback_model, DEFAULT_FALLBACK_MODEL)
            self.assertEqual(s.max_retries, 3)
            self.assertEqual(s.cache_ttl_seconds, 900)
            self.assertEqual(s.request_timeout_seconds, 30.0)
            self.assertTrue(s.fallback_on_server_error)
            self.assertFalse(s.has_api_key)
            self.assertFalse(s.ai_motivation_available)

    def test_settings_env_override(self):
        with _EnvOverride(
            MOTIVATOR_OPENROUTER_API_KEY="sk-or-v1-abc",
            MOTIVATOR_OPENROUTER_BASE_URL="http://proxy.local/api/v1/",
            MOTIVATOR_MAX_RETRIES="5",
        ):
            s = Settings()
            self.assertEqual(s.openrouter_base_url, "http://proxy.local/api/v1")
            self.assertEqual(s.max_retries, 5)
            self.assertTrue(s.has_api_key)
            self.assertTrue(s.ai_motivation_available)

    def test_feature_flag_disables_ai(self):
        with _EnvOverride(MOTIVATOR_OPENROUTER_API_KEY="sk-or-v1-abc", MOTIVATOR_ENABLE_AI_MOTIVATION="false"):
            s = Settings()
            self.assertTrue(s.has_api_key)
            self.assertFalse(s.ai_motivation_available)

    def test_blank_values_are_treated_as_unset(self):
        s = Settings(openrouter_api_key="   ", openrouter_fallback_model="  ")
        self.assertFalse(s.has_api_key)
        self.assertIsNone(s.openrouter_fallback_model)


if __name__ == "__main__":
    unittest.main()
