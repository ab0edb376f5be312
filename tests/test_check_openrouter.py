import unittest

from motivator.check_openrouter import check_openrouter, get_openrouter_status
from motivator.config import Settings


class DummyResp:
    def __init__(self, json_payload, status_code=200):
        self._payload = json_payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code != 200:
            raise Exception("bad status")

    def json(self):
        return self._payload


def _settings(**overrides):
    values = dict(
        openrouter_api_key="sk-test",
        openrouter_base_url="https://example.test/api/v1",
        openrouter_model="primary/model:free",
        openrouter_fallback_model="fallback/model:free",
    )
    values.update(overrides)
    return Settings(**values)


class TestCheckOpenRouter(unittest.TestCase):
    def setUp(self):
        import motivator.check_openrouter as co
        self._orig_get = co.requests.get
        self.urls = []

    def tearDown(self):
        import motivator.check_openrouter as co
        co.requests.get = self._orig_get

    def _install(self, payload=None, status_code=200, exc=None):
        import motivator.check_openrouter as co

        def fake_get(url, headers=None, timeout=None):
            self.urls.append((url, headers))
            if exc is not None:
                raise exc
            return DummyResp(payload, status_code)

        co.requests.get = fake_get

    def test_status_ok_when_models_listed(self):
        self._install({"data": [{"id": "primary/model:free"}, {"id": "fallback/model:free"}]})
        status = get_openrouter_status(_settings())

        self.assertTrue(status["reachable"])
        self.assertTrue(status["models_ok"])
        self.assertTrue(status["ok"])
        url, headers = self.urls[0]
        self.assertEqual(url, "https://example.test/api/v1/models")
        self.assertEqual(headers["Authorization"], "Bearer sk-test")

    def test_status_reports_missing_models(self):
        self._install({"data": [{"id": "primary/model:free"}]})
        status = get_openrouter_status(_settings())

        self.assertTrue(status["reachable"])
        self.assertFalse(status["models_ok"])
        self.assertEqual(status["missing_models"], ["fallback/model:free"])
        self.assertFalse(status["ok"])

    def test_status_explicit_required_models(self):
        self._install({"data": []})
        status = get_openrouter_status(_settings(), required_models=["missing-model"])
        self.assertIn("missing-model", status["missing_models"])

    def test_status_unreachable(self):
        self._install(exc=ConnectionError("refused"))
        status = get_openrouter_status(_settings())

        self.assertFalse(status["reachable"])
        self.assertFalse(status["ok"])
        self.assertIn("refused", status["error"])

    def test_check_exits_when_unreachable(self):
        self._install(status_code=503)
        with self.assertRaises(SystemExit):
            check_openrouter(_settings())

    def test_check_tolerates_missing_models(self):
        self._install({"data": []})
        check_openrouter(_settings())

    def test_check_skipped_without_key(self):
        self._install(exc=AssertionError("should not be called"))
        check_openrouter(_settings(openrouter_api_key=None))
        self.assertEqual(self.urls, [])


if __name__ == "__main__":
    unittest.main()
