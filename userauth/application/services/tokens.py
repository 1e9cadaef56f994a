"""Signed, time-bounded bearer tokens.

Tokens are HS256 JWTs carrying ``sub`` (user id), ``iat`` and ``exp``.
Nothing is stored server side: a token is valid while its signature checks
out and the clock is before ``exp``. The signing secret is injected at
construction, so rotating it invalidates every outstanding token.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from userauth.domain.users.exceptions import TokenExpiredError, TokenInvalidError
from userauth.domain.users.repositories import TokenIssuer
from userauth.shared.logging import logger

DEFAULT_SESSION_TTL = timedelta(hours=1)
DEFAULT_RESET_TTL = timedelta(minutes=15)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService(TokenIssuer):
    def __init__(
        self,
        secret: str,
        *,
        session_ttl: timedelta = DEFAULT_SESSION_TTL,
        reset_ttl: timedelta = DEFAULT_RESET_TTL,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self._session_ttl = session_ttl
        self._reset_ttl = reset_ttl
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, subject: int, ttl: timedelta | None = None) -> str:
        now = self._clock()
        payload = {
            "sub": str(subject),
            "iat": int(now.timestamp()),
            "exp": int((now + (self._session_ttl if ttl is None else ttl)).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def issue_session(self, subject: int) -> str:
        return self.issue(subject, self._session_ttl)

    def issue_reset(self, subject: int) -> str:
        return self.issue(subject, self._reset_ttl)

    def verify(self, token: str) -> int:
        """Return the subject of ``token``.

        Raises ``TokenExpiredError`` once the clock reaches ``exp`` (a token
        exactly at its expiry instant is expired) and ``TokenInvalidError``
        for anything that fails signature or claim checks.
        """
        try:
            # Expiry is checked below against the injected clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": ["sub", "exp"]},
            )
        except jwt.InvalidTokenError as exc:
            logger.info(f"tokens.verify: rejected ({type(exc).__name__}: {exc})")
            raise TokenInvalidError() from exc

        try:
            expires_at = int(payload["exp"])
            subject = int(payload["sub"])
        except (TypeError, ValueError) as exc:
            logger.info("tokens.verify: rejected (malformed claims)")
            raise TokenInvalidError() from exc

        if self._clock().timestamp() >= expires_at:
            raise TokenExpiredError()
        return subject
