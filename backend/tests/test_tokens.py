"""Tests for token issue / verify."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from blogapi.auth.tokens import InvalidToken, issue_token, verify_token

SECRET = "unit-test-secret-0123456789abcdef"


class TestIssueAndVerify:
    def test_claims_survive_round_trip(self):
        token = issue_token("user-1", "a@blog.io", SECRET)
        claims = verify_token(token, SECRET)
        assert claims.user_id == "user-1"
        assert claims.email == "a@blog.io"

    def test_token_expires_after_one_hour(self):
        now = datetime.now(timezone.utc)
        token = issue_token("user-1", "a@blog.io", SECRET)
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert payload["exp"] - payload["iat"] == 3600
        assert abs(payload["iat"] - int(now.timestamp())) <= 5

    def test_token_verified_61_minutes_later_is_invalid(self):
        issued_at = datetime.now(timezone.utc) - timedelta(minutes=61)
        token = issue_token("user-1", "a@blog.io", SECRET, now=issued_at)
        with pytest.raises(InvalidToken):
            verify_token(token, SECRET)

    def test_token_verified_59_minutes_later_is_valid(self):
        issued_at = datetime.now(timezone.utc) - timedelta(minutes=59)
        token = issue_token("user-1", "a@blog.io", SECRET, now=issued_at)
        assert verify_token(token, SECRET).user_id == "user-1"


class TestRejection:
    def test_wrong_secret(self):
        token = issue_token("user-1", "a@blog.io", SECRET)
        with pytest.raises(InvalidToken):
            verify_token(token, "another-secret-0123456789abcdef0123")

    def test_garbage(self):
        with pytest.raises(InvalidToken):
            verify_token("xyz", SECRET)

    def test_tampered_payload(self):
        token = issue_token("user-1", "a@blog.io", SECRET)
        header, _payload, signature = token.split(".")
        forged = jwt.encode({"userId": "user-2"}, "attacker-secret-0123456789abcdef01", algorithm="HS256").split(".")[1]
        with pytest.raises(InvalidToken):
            verify_token(f"{header}.{forged}.{signature}", SECRET)

    def test_missing_user_id_claim(self):
        token = jwt.encode({"email": "a@blog.io"}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidToken, match="userId"):
            verify_token(token, SECRET)

    def test_unsigned_token_is_refused(self):
        token = jwt.encode({"userId": "user-1"}, None, algorithm="none")
        with pytest.raises(InvalidToken):
            verify_token(token, SECRET)
