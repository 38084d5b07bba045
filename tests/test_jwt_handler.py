from datetime import datetime, timedelta, timezone
import re

import jwt
import pytest

from shared import IdentityRecord
from app.auth import (
    InvalidTokenError,
    create_access_token,
    create_refresh_token,
    decode_access_token,
    hash_password,
    is_refresh_token_valid,
    verify_access_token,
    verify_password,
)


SECRET = "unit-test-secret-with-at-least-32-bytes"
OTHER_SECRET = "another-secret-also-at-least-32-bytes!"
NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


# ============== 비밀번호 해싱 ==============

def test_hash_round_trip():
    digest = hash_password("secret123", rounds=4)

    assert verify_password("secret123", digest)
    assert not verify_password("secret124", digest)


def test_hash_is_salted_and_opaque():
    first = hash_password("secret123", rounds=4)
    second = hash_password("secret123", rounds=4)

    assert first != second
    assert "secret123" not in first
    # 알고리즘/cost가 해시 문자열에 포함됨
    assert first.startswith("$2b$04$")
    assert len(first) == 60


def test_verify_malformed_digest_raises():
    with pytest.raises(ValueError):
        verify_password("secret123", "not-a-bcrypt-hash")


# ============== Access Token ==============

def test_access_token_claims():
    token = create_access_token("a@b.com", SECRET, now=NOW)
    claims = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})

    assert claims["iss"] == "chirpy"
    assert claims["sub"] == "a@b.com"
    assert claims["iat"] == int(NOW.timestamp())
    assert claims["exp"] == int((NOW + timedelta(hours=1)).timestamp())


def test_access_token_valid_until_expiry():
    token = create_access_token("a@b.com", SECRET, now=NOW)

    assert verify_access_token(token, SECRET, now=NOW) == "a@b.com"
    assert verify_access_token(token, SECRET, now=NOW + timedelta(minutes=59, seconds=59)) == "a@b.com"

    with pytest.raises(InvalidTokenError):
        verify_access_token(token, SECRET, now=NOW + timedelta(hours=1))
    with pytest.raises(InvalidTokenError):
        verify_access_token(token, SECRET, now=NOW + timedelta(days=1))


def test_access_token_bound_to_secret():
    token = create_access_token("a@b.com", SECRET, now=NOW)

    with pytest.raises(InvalidTokenError):
        verify_access_token(token, OTHER_SECRET, now=NOW)


def test_tampered_and_garbage_tokens_rejected():
    token = create_access_token("a@b.com", SECRET, now=NOW)
    header, payload, signature = token.split(".")
    forged = create_access_token("evil@b.com", OTHER_SECRET, now=NOW).split(".")[1]

    for candidate in (f"{header}.{forged}.{signature}", "garbage", "", "a.b.c"):
        with pytest.raises(InvalidTokenError):
            verify_access_token(candidate, SECRET, now=NOW)


def test_token_from_other_issuer_rejected():
    token = create_access_token("a@b.com", SECRET, now=NOW, issuer="someone-else")

    with pytest.raises(InvalidTokenError):
        verify_access_token(token, SECRET, now=NOW)


def test_decode_access_token_payload():
    token = create_access_token("a@b.com", SECRET, now=NOW)
    payload = decode_access_token(token, SECRET, now=NOW)

    assert payload.sub == "a@b.com"
    assert payload.iss == "chirpy"
    assert payload.iat == NOW
    assert payload.exp == NOW + timedelta(hours=1)


# ============== Refresh Token ==============

def test_refresh_token_shape_and_expiry():
    token, expires_at = create_refresh_token(now=NOW)

    assert re.fullmatch(r"[0-9a-f]{64}", token)
    assert expires_at == NOW + timedelta(days=60)


def test_refresh_tokens_are_unique():
    tokens = {create_refresh_token(now=NOW)[0] for _ in range(1000)}
    assert len(tokens) == 1000


def test_refresh_token_validity():
    token, expires_at = create_refresh_token(now=NOW)
    record = IdentityRecord(
        id=1,
        email="a@b.com",
        password_hash="x",
        refresh_token=token,
        refresh_token_expires_at=expires_at,
    )

    assert is_refresh_token_valid(record, token, now=NOW)
    assert not is_refresh_token_valid(record, token, now=expires_at)
    assert not is_refresh_token_valid(record, "0" * 64, now=NOW)


def test_refresh_token_invalid_before_first_login():
    record = IdentityRecord(id=1, email="a@b.com", password_hash="x")
    assert not is_refresh_token_valid(record, "0" * 64, now=NOW)


# ============== 입력 한계 / 경계 ==============

def test_verify_overlong_password_is_mismatch():
    digest = hash_password("secret123", rounds=4)

    assert not verify_password("x" * 100, digest)
    assert not verify_password("secret123" + "x" * 100, digest)


def test_access_token_expires_exactly_one_hour_after_fractional_issue():
    issued = NOW + timedelta(milliseconds=700)
    token = create_access_token("a@b.com", SECRET, now=issued)

    assert verify_access_token(token, SECRET, now=issued + timedelta(hours=1, milliseconds=-500)) == "a@b.com"
    with pytest.raises(InvalidTokenError):
        verify_access_token(token, SECRET, now=issued + timedelta(hours=1))


def test_access_token_algorithm_must_match():
    token = create_access_token("a@b.com", SECRET, now=NOW, algorithm="HS512")

    assert jwt.get_unverified_header(token)["alg"] == "HS512"
    assert verify_access_token(token, SECRET, now=NOW, algorithm="HS512") == "a@b.com"
    with pytest.raises(InvalidTokenError):
        verify_access_token(token, SECRET, now=NOW)
