# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import AuthenticatedSession, User
from .users.exceptions import (
    InvalidCredentialsError,
    TokenExpiredError,
    TokenInvalidError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

__all__ = [
    "AuthenticatedSession",
    "InvalidCredentialsError",
    "TokenExpiredError",
    "TokenInvalidError",
    "User",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]
