"""
Tests for session token issuance and verification.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from brandhub.auth.principal import Principal
from brandhub.auth.token_service import (
    TokenConfig,
    TokenExpiredError,
    TokenInvalidError,
    TokenService,
)


SECRET = "unit-test-secret"


@pytest.fixture
def token_service():
    return TokenService(TokenConfig(jwt_secret=SECRET))


@pytest.fixture
def principal():
    return Principal(
        user_id="user-1",
        company_id="company-1",
        role="MASTER",
        email="founder@acme.example.com",
    )


class TestTokenRoundTrip:

    def test_issue_and_verify(self, token_service, principal):
        assert token_service.verify(token_service.issue(principal)) == principal

    def test_claims_use_camel_case(self, token_service, principal):
        payload = jwt.decode(token_service.issue(principal), SECRET, algorithms=["HS256"])

        assert payload["userId"] == "user-1"
        assert payload["companyId"] == "company-1"
        assert payload["exp"] - payload["iat"] == 7 * 24 * 60 * 60

    def test_max_age_matches_lifetime(self):
        service = TokenService(TokenConfig(jwt_secret=SECRET, lifetime_days=2))

        assert service.max_age_seconds == 2 * 24 * 60 * 60


class TestTokenRejection:

    def test_expired_token(self, token_service):
        past = datetime.now(timezone.utc) - timedelta(days=1)
        token = jwt.encode(
            {
                "userId": "u", "companyId": "c", "role": "USER", "email": "e@x.com",
                "exp": int(past.timestamp()),
            },
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(TokenExpiredError):
            token_service.verify(token)

    def test_wrong_secret(self, token_service, principal):
        other = TokenService(TokenConfig(jwt_secret="another-secret"))

        with pytest.raises(TokenInvalidError):
            token_service.verify(other.issue(principal))

    def test_garbage(self, token_service):
        with pytest.raises(TokenInvalidError):
            token_service.verify("not-a-jwt")

    def test_missing_claim(self, token_service):
        token = jwt.encode({"userId": "u"}, SECRET, algorithm="HS256")

        with pytest.raises(TokenInvalidError, match="Missing claim"):
            token_service.verify(token)


class TestTokenConfig:

    def test_from_env_requires_secret(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)

        with pytest.raises(ValueError):
            TokenConfig.from_env()

    def test_from_env_reads_expiry(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "s")
        monkeypatch.setenv("JWT_EXPIRY_DAYS", "3")

        assert TokenConfig.from_env().lifetime_days == 3
