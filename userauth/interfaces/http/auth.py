# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast

from flask import g, request

from userauth.domain.users.exceptions import TokenExpiredError, TokenInvalidError
from userauth.domain.users.repositories import TokenIssuer
from userauth.shared.errors import UnauthorizedError
from userauth.shared.logging import logger

F = TypeVar("F", bound=Callable[..., Any])


def bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        return auth[7:].strip()
    return ""


def current_user_id() -> int:
    """Return the subject attached by ``auth_required``."""
    return cast(int, g.user_id)


def auth_required(tokens: TokenIssuer) -> Callable[[F], F]:
    def decorator(f: F) -> F:
        @wraps(f)
        def inner(*a, **kw):
            token = bearer_token()
            if not token:
                logger.warning(
                    f"No Authorization header on {request.method} {request.path} "
                    f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
                )
                raise UnauthorizedError("No token, authorization denied")

            try:
                g.user_id = tokens.verify(token)
            except (TokenExpiredError, TokenInvalidError) as exc:
                logger.warning(
                    f"Auth failed ({exc.code}) on {request.method} {request.path}"
                )
                raise UnauthorizedError("Token is not valid") from exc

            logger.debug(f"Auth OK: user={g.user_id} {request.method} {request.path}")
            return f(*a, **kw)

        return cast(F, inner)

    return decorator
