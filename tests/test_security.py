import pytest

from backend.app.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


def test_password_hashing_not_plain():
    plain = "password123"
    hashed = get_password_hash(plain)
    assert hashed and hashed != plain


def test_verify_password():
    hashed = get_password_hash("secret")
    assert verify_password("secret", hashed)
    assert not verify_password("wrong", hashed)


def test_token_carries_employee_id_and_expiry():
    token = create_access_token(42)
    decoded = decode_access_token(token)
    assert decoded.get("sub") == "42"
    assert "exp" in decoded
    assert "lvl" not in decoded


def test_token_can_carry_access_level():
    decoded = decode_access_token(create_access_token(7, access_level=2))
    assert decoded["lvl"] == 2


def test_expired_token_raises_value_error():
    token = create_access_token(1, expires_minutes=-1)
    with pytest.raises(ValueError):
        decode_access_token(token)


def test_invalid_token_raises_value_error():
    with pytest.raises(ValueError):
        decode_access_token("invalid.token.value")
