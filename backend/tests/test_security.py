from datetime import datetime, timedelta, timezone

import jwt
import pytest

from portal.core.config import settings
from portal.core.security import (
    BCRYPT_MAX_BYTES,
    create_access_token,
    decode_access_token,
    get_password_hash,
    pwd_context,
    verify_password,
)


def test_hash_round_trip():
    hashed = get_password_hash("correct horse")

    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("correct horsE", hashed)
    assert not verify_password("", hashed)


def test_hash_is_salted():
    assert get_password_hash("same-password") != get_password_hash("same-password")


def test_hash_uses_configured_cost():
    hashed = get_password_hash("whatever1")

    assert hashed.startswith("$2b$")
    assert int(hashed.split("$")[2]) == settings.BCRYPT_ROUNDS
    assert pwd_context.identify(hashed) == "bcrypt"


def test_password_beyond_bcrypt_limit_is_not_hashed():
    with pytest.raises(ValueError):
        get_password_hash("x" * (BCRYPT_MAX_BYTES + 1))


def test_long_password_does_not_verify_against_its_prefix():
    prefix = "x" * BCRYPT_MAX_BYTES
    hashed = get_password_hash(prefix)

    assert verify_password(prefix, hashed)
    # bcrypt would ignore everything after byte 72
    assert not verify_password(prefix + "totally-different", hashed)


def test_byte_limit_counts_utf8_bytes():
    # 37 two-byte characters are 74 bytes
    with pytest.raises(ValueError):
        get_password_hash("\u00e9" * 37)


def test_unrecognised_stored_value_never_verifies():
    assert not verify_password("plaintext", "plaintext")
    assert not verify_password("anything", "")


def test_token_round_trip():
    token = create_access_token("user-1", {"role": "HR"})
    payload = decode_access_token(token)

    assert payload["sub"] == "user-1"
    assert payload["role"] == "HR"
    assert payload["exp"] > payload["iat"]


def test_expired_token_is_rejected():
    token = create_access_token("user-1", expires_delta=timedelta(seconds=-5))

    assert decode_access_token(token) is None


def test_token_signed_with_other_key_is_rejected():
    forged = jwt.encode({"sub": "user-1", "role": "ADMIN"}, "not-the-key", algorithm="HS256")

    assert decode_access_token(forged) is None


def test_garbage_token_is_rejected():
    assert decode_access_token("not.a.token") is None


def test_subject_is_not_overridden_by_claims():
    token = create_access_token("user-1", {"sub": "someone-else", "email": "a@b.com"})
    payload = decode_access_token(token)

    assert payload["sub"] == "user-1"
    assert payload["email"] == "a@b.com"


def test_token_without_subject_is_rejected():
    token = jwt.encode(
        {"email": "a@b.com", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )

    assert decode_access_token(token) is None


def test_token_without_expiry_is_rejected():
    token = jwt.encode({"sub": "user-1"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    assert decode_access_token(token) is None
