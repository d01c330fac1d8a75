"""Tests for TokenIssuer: issue, verify, expiry and tampering."""

import unittest
from datetime import datetime, timedelta, timezone

from jose import jwt

from services.token_service import TokenIssuer


class TestTokenIssuer(unittest.TestCase):

    def setUp(self):
        self.issuer = TokenIssuer("test-secret", timedelta(hours=24))

    def test_round_trip_claims(self):
        token = self.issuer.issue("acc-1", is_admin=True)

        claims = self.issuer.verify(token)

        self.assertEqual(claims.account_id, "acc-1")
        self.assertTrue(claims.is_admin)
        self.assertEqual(claims.expires_at - claims.issued_at, timedelta(hours=24))

    def test_expired_token_rejected(self):
        expired = TokenIssuer("test-secret", timedelta(seconds=-10))

        self.assertIsNone(expired.verify(expired.issue("acc-1", False)))

    def test_wrong_secret_rejected(self):
        other = TokenIssuer("other-secret", timedelta(hours=1))

        self.assertIsNone(self.issuer.verify(other.issue("acc-1", False)))

    def test_tampered_token_rejected(self):
        token = self.issuer.issue("acc-1", False)
        header, payload, signature = token.split(".")
        forged = jwt.encode({"sub": "acc-2", "is_admin": True}, "guess", algorithm="HS256").split(".")[1]

        self.assertIsNone(self.issuer.verify(f"{header}.{forged}.{signature}"))

    def test_garbage_rejected(self):
        self.assertIsNone(self.issuer.verify("not.a.token"))
        self.assertIsNone(self.issuer.verify(""))

    def test_token_without_subject_rejected(self):
        now = datetime.now(timezone.utc)
        token = jwt.encode({"iat": now, "exp": now + timedelta(hours=1)}, "test-secret", algorithm="HS256")

        self.assertIsNone(self.issuer.verify(token))

    def test_empty_secret_refused(self):
        with self.assertRaises(ValueError):
            TokenIssuer("", timedelta(hours=1))


if __name__ == '__main__':
    unittest.main()
