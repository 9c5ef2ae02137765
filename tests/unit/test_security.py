from datetime import UTC, datetime, timedelta
import hashlib

import jwt
import pytest

from inkblog.core.config_models import SecurityConfig
from inkblog.core.exceptions import AuthenticationError
from inkblog.core.jwt import decode_session_token, encode_session_token
from inkblog.core.security import get_password_hash, is_legacy_hash, needs_rehash, verify_password

SECRET = "unit-test-secret-key-with-enough-length-000"


@pytest.fixture
def security() -> SecurityConfig:
    return SecurityConfig(secret_key=SECRET)


@pytest.mark.unit
def test_scrypt_hash_is_salted_and_verifies():
    first = get_password_hash("s3cret!")
    second = get_password_hash("s3cret!")

    assert first != second
    assert first.startswith("scrypt:")
    assert verify_password("s3cret!", first)
    assert not verify_password("wrong", first)
    assert not needs_rehash(first)


@pytest.mark.unit
def test_legacy_sha256_hash_still_verifies_and_needs_rehash():
    legacy = hashlib.sha256(b"123456").hexdigest()

    assert is_legacy_hash(legacy)
    assert verify_password("123456", legacy)
    assert not verify_password("1234567", legacy)
    assert needs_rehash(legacy)


@pytest.mark.unit
def test_verify_password_rejects_garbage_hash():
    assert not verify_password("x", "")
    assert not verify_password("x", "not-a-real-hash")


@pytest.mark.unit
def test_session_token_roundtrip(security: SecurityConfig):
    token = encode_session_token("admin", security)
    claims = decode_session_token(token, security)

    assert claims["sub"] == "admin"
    assert claims["typ"] == "admin"
    assert claims["exp"] - claims["iat"] == security.session_max_age_seconds
    assert claims["jti"]


@pytest.mark.unit
def test_tampered_token_is_rejected(security: SecurityConfig):
    token = encode_session_token("admin", security)
    other = SecurityConfig(secret_key="another-secret-key-with-enough-length-111")

    with pytest.raises(AuthenticationError) as exc_info:
        decode_session_token(token, other)
    assert exc_info.value.message == "Invalid session"


@pytest.mark.unit
def test_expired_token_is_rejected(security: SecurityConfig):
    past = datetime.now(UTC) - timedelta(days=2)
    token = jwt.encode(
        {"sub": "admin", "typ": "admin", "iat": int(past.timestamp()), "exp": int(past.timestamp()) + 60},
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(AuthenticationError) as exc_info:
        decode_session_token(token, security)
    assert exc_info.value.message == "Session expired"


@pytest.mark.unit
def test_wrong_token_type_is_rejected(security: SecurityConfig):
    exp = int((datetime.now(UTC) + timedelta(hours=1)).timestamp())
    token = jwt.encode({"sub": "admin", "typ": "refresh", "exp": exp}, SECRET, algorithm="HS256")

    with pytest.raises(AuthenticationError):
        decode_session_token(token, security)
