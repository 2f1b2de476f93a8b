"""
Unit tests for password hashing and tokens.
"""

from datetime import timedelta

from admissions.core.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)


class TestPasswords:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("s3cret!")
        assert hashed != "s3cret!"
        assert hashed.startswith("$2")

    def test_verify_matches_original_password(self):
        hashed = hash_password("s3cret!")
        assert verify_password("s3cret!", hashed)
        assert not verify_password("wrong", hashed)

    def test_malformed_hash_fails_closed(self):
        assert not verify_password("anything", "not-a-bcrypt-hash")


class TestTokens:
    def test_round_trip_claims(self):
        token = create_access_token("abc", {"role": "student", "email": "s@test.com"})
        payload = decode_token(token)

        assert payload["sub"] == "abc"
        assert payload["type"] == "access"
        assert payload["role"] == "student"

    def test_default_lifetime_is_one_hour(self):
        payload = decode_token(create_access_token("abc"))
        assert payload["exp"] - payload["iat"] == 3600

    def test_expired_token_decodes_to_none(self):
        token = create_access_token("abc", expires_delta=timedelta(seconds=-1))
        assert decode_token(token) is None
