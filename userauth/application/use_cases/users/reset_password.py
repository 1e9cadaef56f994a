# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from userauth.domain.users.exceptions import UserNotFoundError
from userauth.domain.users.repositories import PasswordHasher, TokenIssuer, UserRepository
from userauth.shared.logging import logger


class ResetPasswordUseCase:
    """Replace a user's password given a valid reset token.

    Tokens are not marked as used: the same token can be replayed until it
    expires.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenIssuer,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, token: str, new_password: str) -> None:
        user_id = self._tokens.verify(token)

        user = self._users.find_by_id(user_id)
        if user is None:
            logger.info(f"auth.reset_password: no user behind token user_id={user_id}")
            raise UserNotFoundError()

        hashed = self._password_hasher.hash(new_password)
        self._users.save(user.with_password_hash(hashed))
        logger.info(f"auth.reset_password: ok user_id={user_id}")
