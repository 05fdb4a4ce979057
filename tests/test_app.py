import unittest

from _support_api import BaseAPITestCase


class InfoEndpointTests(BaseAPITestCase):
    def test_root_lists_docs_and_health(self):
        res = self.client.get("/")
        self.assertEqual(res.status_code, 200)
        body = res.json()
        self.assertEqual(body["name"], "Purchase Request API")
        self.assertEqual(body["health"], "/health")
        self.assertEqual(body["docs"]["swagger"], "/docs")

    def test_health_needs_no_token(self):
        res = self.client.get("/health")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["status"], "ok")
        self.assertIn("time", res.json())

    def test_unknown_route_uses_error_body(self):
        res = self.client.get("/nope")
        self.assertEqual(res.status_code, 404)
        self.assertIn("error", res.json())


if __name__ == "__main__":
    unittest.main()
