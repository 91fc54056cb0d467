from chainflow.utils.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


def test_password_hash_round_trip() -> None:
    password = "Password123!"
    hashed = get_password_hash(password)

    assert hashed != password
    assert verify_password(password, hashed)
    assert not verify_password("wrong-password", hashed)


def test_verify_password_rejects_invalid_hash() -> None:
    assert verify_password("Password123!", "not-a-valid-bcrypt-hash") is False


def test_access_token_carries_subject() -> None:
    token = create_access_token(7)
    payload = decode_access_token(token)

    assert payload is not None
    assert payload["sub"] == "7"
    assert payload["type"] == "access"


def test_decode_rejects_tampered_and_expired_tokens() -> None:
    header, payload, _ = create_access_token(7).split(".")
    foreign_signature = create_access_token(8).split(".")[2]
    assert decode_access_token(f"{header}.{payload}.{foreign_signature}") is None
    assert decode_access_token(create_access_token(7, expires_minutes=-1)) is None
    assert decode_access_token("garbage") is None
