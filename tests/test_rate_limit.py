"""
Tests for per-IP throttling of the credential endpoints.
"""

import unittest

from dreamcatcher.rate_limiter import HybridRateLimiter
from helpers import ApiTestCase


class HybridRateLimiterTests(unittest.TestCase):
    def test_memory_window_counts_requests(self):
        limiter = HybridRateLimiter()
        results = [limiter.check("login:1.2.3.4", 3, 60)[0] for _ in range(4)]
        self.assertEqual(results, [True, True, True, False])

    def test_keys_are_independent(self):
        limiter = HybridRateLimiter()
        for _ in range(3):
            limiter.check("login:1.1.1.1", 3, 60)
        self.assertTrue(limiter.check("login:2.2.2.2", 3, 60)[0])

    def test_reset_clears_counters(self):
        limiter = HybridRateLimiter()
        for _ in range(3):
            limiter.check("login:1.1.1.1", 3, 60)
        limiter.reset()
        self.assertTrue(limiter.check("login:1.1.1.1", 3, 60)[0])


class LoginThrottleTests(ApiTestCase):
    settings_overrides = {"rate_limit_enabled": True}

    def test_eleventh_login_attempt_is_429(self):
        for _ in range(10):
            response = self.client.post("/api/login", json={"clientId": "0000", "password": "x"})
            self.assertEqual(response.status_code, 401)

        response = self.client.post("/api/login", json={"clientId": "0000", "password": "x"})
        self.assertEqual(response.status_code, 429)
        self.assertEqual(response.json()["message"], "Zbyt wiele prób. Spróbuj ponownie później.")
        self.assertIn("Retry-After", response.headers)

    def test_admin_login_has_its_own_counter(self):
        for _ in range(10):
            self.client.post("/api/login", json={"clientId": "0000", "password": "x"})
        self.admin_headers()


if __name__ == "__main__":
    unittest.main()
