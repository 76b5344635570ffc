"""
Tests for CredentialService: password hashing, identifiers and tokens.
"""

import secrets
import uuid
from datetime import timedelta

import pytest
from jose import jwt

from core.config import Settings
from core.exceptions import AuthenticationError, TokenError
from core.security import CredentialService


def test_hash_never_equals_plaintext(credentials):
    hashed = credentials.hash_password("secret1")

    assert hashed != "secret1"
    assert "secret1" not in hashed
    assert hashed.startswith("$2b$04$")


def test_hash_is_salted(credentials):
    assert credentials.hash_password("secret1") != credentials.hash_password("secret1")


def test_verify_random_passwords(credentials):
    for _ in range(10):
        password = secrets.token_urlsafe(16)
        other = secrets.token_urlsafe(16)
        hashed = credentials.hash_password(password)

        assert credentials.verify_password(password, hashed)
        assert not credentials.verify_password(other, hashed)


def test_verify_unrecognized_hash_fails(credentials):
    assert not credentials.verify_password("secret1", "not-a-bcrypt-hash")


def test_overlong_password_never_matches_stored_prefix(credentials):
    password = "p" * 72
    hashed = credentials.hash_password(password)

    assert credentials.verify_password(password, hashed)
    assert not credentials.verify_password(password + "x", hashed)


def test_cost_comes_from_settings():
    service = CredentialService(Settings(jwt_secret_key="k", bcrypt_rounds=5))

    assert service.hash_password("pw").startswith("$2b$05$")


def test_new_user_id_is_random_uuid(credentials):
    ids = {credentials.new_user_id() for _ in range(100)}

    assert len(ids) == 100
    for value in ids:
        assert uuid.UUID(value).version == 4


def test_token_round_trip(credentials, settings):
    token = credentials.create_access_token("user-1", "alice")

    assert credentials.decode_access_token(token) == "user-1"

    claims = jwt.decode(token, settings.jwt_secret_key, algorithms=["HS256"])
    assert claims["username"] == "alice"
    assert claims["exp"] > claims["iat"]
    assert claims["exp"] - claims["iat"] == 5 * 60


def test_expired_token_rejected(credentials):
    token = credentials.create_access_token("user-1", "alice", expires_delta=timedelta(seconds=-30))

    with pytest.raises(AuthenticationError):
        credentials.decode_access_token(token)


def test_token_signed_with_other_key_rejected(credentials):
    other = CredentialService(Settings(jwt_secret_key="someone-else", bcrypt_rounds=4))
    token = other.create_access_token("user-1", "alice")

    with pytest.raises(AuthenticationError) as exc_info:
        credentials.decode_access_token(token)
    assert exc_info.value.message == "could not validate credentials"


def test_token_without_subject_rejected(credentials, settings):
    token = jwt.encode({"username": "alice"}, settings.jwt_secret_key, algorithm="HS256")

    with pytest.raises(AuthenticationError):
        credentials.decode_access_token(token)


def test_garbage_token_rejected(credentials):
    with pytest.raises(AuthenticationError):
        credentials.decode_access_token("not.a.token")


def test_signing_failure_raises_token_error():
    service = CredentialService(Settings(jwt_secret_key="k", jwt_algorithm="NOPE256", bcrypt_rounds=4))

    with pytest.raises(TokenError):
        service.create_access_token("user-1", "alice")
