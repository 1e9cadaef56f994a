# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from userauth.domain.users.exceptions import UserNotFoundError
from userauth.domain.users.repositories import TokenIssuer, UserRepository
from userauth.shared.logging import logger


class ForgotPasswordUseCase:
    """Issue a short-lived reset token for the account behind ``email``.

    The token is handed straight back to the caller; there is no mail
    delivery, so whoever knows the address can reset the password.
    """

    def __init__(self, *, users: UserRepository, tokens: TokenIssuer) -> None:
        self._users = users
        self._tokens = tokens

    def execute(self, email: str) -> str:
        user = self._users.find_by_email(email)
        if user is None:
            raise UserNotFoundError()

        reset_token = self._tokens.issue_reset(user.id)
        logger.info(f"auth.forgot_password: reset token issued user_id={user.id}")
        return reset_token
