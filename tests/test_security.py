from datetime import timedelta

import pytest
from jose import jwt

from movieapi.core.exceptions import InvalidTokenError
from movieapi.core.security import PasswordHasher, TokenService


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return TokenService(secret_key="unit-secret", expire_days=7)


class TestPasswordHasher:
    def test_hash_is_not_plaintext_and_verifies(self, hasher):
        hashed = hasher.hash("secret1")

        assert hashed != "secret1"
        assert hashed.startswith("$2")
        assert hasher.verify("secret1", hashed) is True

    def test_wrong_password_fails(self, hasher):
        hashed = hasher.hash("secret1")

        assert hasher.verify("secret2", hashed) is False

    def test_hashes_are_salted(self, hasher):
        assert hasher.hash("secret1") != hasher.hash("secret1")

    def test_malformed_hash_does_not_raise(self, hasher):
        assert hasher.verify("secret1", "not-a-hash") is False
        assert hasher.verify("secret1", None) is False

    def test_cost_factor_is_embedded(self):
        hashed = PasswordHasher(rounds=5).hash("pw")

        assert hashed.split("$")[2] == "05"



class TestTokenService:
    def test_issue_then_verify_returns_claims(self, tokens):
        token = tokens.issue(user_id=42, email="a@x.com")

        data = tokens.verify(token)

        assert data.user_id == 42
        assert data.email == "a@x.com"

    def test_expiry_is_seven_days_after_issue(self, tokens):
        token = tokens.issue(user_id=1, email="a@x.com")

        claims = jwt.get_unverified_claims(token)

        assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())

    def test_altered_signature_fails(self, tokens):
        token = tokens.issue(user_id=1, email="a@x.com")
        header, payload, signature = token.split(".")
        flipped = ("A" if signature[0] != "A" else "B") + signature[1:]

        with pytest.raises(InvalidTokenError):
            tokens.verify(".".join([header, payload, flipped]))

    def test_expired_token_fails(self, tokens):
        token = tokens.issue(user_id=1, email="a@x.com", expires_delta=timedelta(seconds=-1))

        with pytest.raises(InvalidTokenError):
            tokens.verify(token)

    def test_wrong_secret_fails(self, tokens):
        other = TokenService(secret_key="other-secret")
        token = other.issue(user_id=1, email="a@x.com")

        with pytest.raises(InvalidTokenError):
            tokens.verify(token)

    def test_malformed_token_fails(self, tokens):
        with pytest.raises(InvalidTokenError):
            tokens.verify("not.a.token")

    def test_missing_user_claim_fails(self, tokens):
        token = jwt.encode({"sub": "a@x.com"}, "unit-secret", algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            tokens.verify(token)
