import unittest
from unittest.mock import patch

import jwt
from fastapi import HTTPException

from organic_trace.config import Settings
from organic_trace.core.security import identity_from_authorization

SECRET = "unit-test-secret-with-enough-length-for-hs256"


def _settings(**overrides):
    values = {"JWT_SECRET": SECRET}
    values.update(overrides)
    return Settings(**values)


class SecurityTest(unittest.TestCase):
    def test_valid_token_yields_identity(self):
        token = jwt.encode({"sub": "u-farm", "role": "authenticated"}, SECRET, algorithm="HS256")
        with patch("organic_trace.core.security.get_settings", return_value=_settings()):
            identity = identity_from_authorization("Bearer {}".format(token))
        self.assertEqual(identity.user_id, "u-farm")
        self.assertEqual(identity.access_token, token)
        self.assertEqual(identity.claims["role"], "authenticated")

    def test_audience_is_checked_when_configured(self):
        token = jwt.encode({"sub": "u-farm", "aud": "other"}, SECRET, algorithm="HS256")
        with patch(
            "organic_trace.core.security.get_settings",
            return_value=_settings(JWT_AUDIENCE="authenticated"),
        ):
            with self.assertRaises(HTTPException) as ctx:
                identity_from_authorization("Bearer {}".format(token))
        self.assertEqual(ctx.exception.detail, "Invalid JWT")

    def test_missing_header_and_subject(self):
        with patch("organic_trace.core.security.get_settings", return_value=_settings()):
            with self.assertRaises(HTTPException) as ctx:
                identity_from_authorization(None)
            self.assertEqual(ctx.exception.status_code, 401)
            self.assertEqual(ctx.exception.detail, "Not authenticated")

            token = jwt.encode({"role": "anon"}, SECRET, algorithm="HS256")
            with self.assertRaises(HTTPException) as ctx:
                identity_from_authorization("Bearer {}".format(token))
            self.assertEqual(ctx.exception.detail, "Token has no subject")

    def test_unconfigured_secret(self):
        with patch("organic_trace.core.security.get_settings", return_value=_settings(JWT_SECRET=None)):
            with self.assertRaises(HTTPException) as ctx:
                identity_from_authorization("Bearer abc.def.ghi")
        self.assertEqual(ctx.exception.detail, "JWT auth is not configured")

    def test_wrong_signature(self):
        token = jwt.encode({"sub": "u-farm"}, "a-different-secret-that-is-also-long-enough", algorithm="HS256")
        with patch("organic_trace.core.security.get_settings", return_value=_settings()):
            with self.assertRaises(HTTPException) as ctx:
                identity_from_authorization("Bearer {}".format(token))
        self.assertEqual(ctx.exception.status_code, 401)


if __name__ == "__main__":
    unittest.main()
