import unittest

from motivator.config import Settings
from motivator.main import app, create_app


class TestMain(unittest.TestCase):
    def test_app_metadata(self):
        self.assertEqual(app.title, "Motivator")
        paths = set(app.openapi()["paths"])
        self.assertIn("/v1/motivation/generate", paths)
        self.assertIn("/v1/motivation/cache/{user_id}", paths)
        self.assertIn("/v1/motivation/health", paths)

    def test_create_app_without_key_has_no_service(self):
        built = create_app(settings=Settings(openrouter_api_key=None))
        self.assertIsNone(built.state.motivation_service)

    def test_create_app_with_key_builds_service(self):
        built = create_app(settings=Settings(openrouter_api_key="sk-test", openrouter_model="custom/model"))
        service = built.state.motivation_service
        self.assertIsNotNone(service)
        self.assertEqual(service.default_model, "custom/model")

    def test_feature_flag_off_skips_service(self):
        built = create_app(settings=Settings(openrouter_api_key="sk-test", enable_ai_motivation=False))
        self.assertIsNone(built.state.motivation_service)


if __name__ == "__main__":
    unittest.main()
