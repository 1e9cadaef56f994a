from __future__ import annotations

from datetime import timedelta

import jwt
import pytest

from userauth.application.services.tokens import JwtTokenService
from userauth.domain.users.exceptions import TokenExpiredError, TokenInvalidError

from .fakes import FakeClock

SECRET = "unit-test-secret"


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def tokens(clock: FakeClock) -> JwtTokenService:
    return JwtTokenService(SECRET, clock=clock)


def test_issue_and_verify_returns_subject(tokens: JwtTokenService) -> None:
    token = tokens.issue(42, timedelta(minutes=5))

    assert tokens.verify(token) == 42


def test_token_valid_until_just_before_expiry(tokens: JwtTokenService, clock: FakeClock) -> None:
    token = tokens.issue(7, timedelta(seconds=60))

    clock.advance(seconds=59)

    assert tokens.verify(token) == 7


def test_token_exactly_at_expiry_is_expired(tokens: JwtTokenService, clock: FakeClock) -> None:
    token = tokens.issue(7, timedelta(seconds=60))

    clock.advance(seconds=60)

    with pytest.raises(TokenExpiredError):
        tokens.verify(token)


def test_zero_ttl_token_is_already_expired(tokens: JwtTokenService) -> None:
    token = tokens.issue(1, timedelta(0))

    with pytest.raises(TokenExpiredError):
        tokens.verify(token)


def test_default_ttl_is_session_ttl(tokens: JwtTokenService, clock: FakeClock) -> None:
    token = tokens.issue(1)

    clock.advance(minutes=59, seconds=59)
    assert tokens.verify(token) == 1

    clock.advance(seconds=1)
    with pytest.raises(TokenExpiredError):
        tokens.verify(token)


def test_session_token_lasts_one_hour(tokens: JwtTokenService, clock: FakeClock) -> None:
    token = tokens.issue_session(1)

    clock.advance(minutes=59)
    assert tokens.verify(token) == 1

    clock.advance(minutes=1)
    with pytest.raises(TokenExpiredError):
        tokens.verify(token)


def test_reset_token_lasts_fifteen_minutes(tokens: JwtTokenService, clock: FakeClock) -> None:
    token = tokens.issue_reset(1)

    clock.advance(minutes=14, seconds=59)
    assert tokens.verify(token) == 1

    clock.advance(seconds=1)
    with pytest.raises(TokenExpiredError):
        tokens.verify(token)


def test_token_signed_with_other_secret_is_invalid(clock: FakeClock) -> None:
    issued = JwtTokenService("old-secret", clock=clock).issue_session(1)
    rotated = JwtTokenService("new-secret", clock=clock)

    with pytest.raises(TokenInvalidError):
        rotated.verify(issued)


def test_expired_token_with_bad_signature_is_invalid(clock: FakeClock) -> None:
    issued = JwtTokenService("old-secret", clock=clock).issue(1, timedelta(seconds=1))
    clock.advance(minutes=5)

    with pytest.raises(TokenInvalidError):
        JwtTokenService(SECRET, clock=clock).verify(issued)


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
def test_malformed_token_is_invalid(tokens: JwtTokenService, token: str) -> None:
    with pytest.raises(TokenInvalidError):
        tokens.verify(token)


def test_token_without_expiry_is_invalid(tokens: JwtTokenService) -> None:
    token = jwt.encode({"sub": "1"}, SECRET, algorithm="HS256")

    with pytest.raises(TokenInvalidError):
        tokens.verify(token)


def test_token_with_non_numeric_subject_is_invalid(
    tokens: JwtTokenService, clock: FakeClock
) -> None:
    exp = int((clock() + timedelta(minutes=5)).timestamp())
    token = jwt.encode({"sub": "alice", "exp": exp}, SECRET, algorithm="HS256")

    with pytest.raises(TokenInvalidError):
        tokens.verify(token)


def test_empty_secret_is_rejected() -> None:
    with pytest.raises(ValueError):
        JwtTokenService("")


def test_rejection_does_not_carry_decode_details(tokens: JwtTokenService) -> None:
    with pytest.raises(TokenInvalidError) as exc_info:
        tokens.verify("a.b.c")

    assert exc_info.value.context is None
    assert exc_info.value.to_dict() == {"error": "token_invalid", "message": "Invalid token"}
