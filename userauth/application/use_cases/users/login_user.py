# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from userauth.domain.users.entities import AuthenticatedSession
from userauth.domain.users.exceptions import InvalidCredentialsError
from userauth.domain.users.repositories import PasswordHasher, TokenIssuer, UserRepository
from userauth.shared.logging import logger


class LoginUserUseCase:
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
        self._placeholder_hash: str | None = None

    def _unknown_user_hash(self) -> str:
        # Hashed once with the live hasher so a miss costs the same as a mismatch.
        if self._placeholder_hash is None:
            self._placeholder_hash = self._password_hasher.hash(secrets.token_urlsafe(16))
        return self._placeholder_hash

    def execute(self, email: str, password: str) -> AuthenticatedSession:
        user = self._users.find_by_email(email)

        # Unknown email and wrong password must be indistinguishable.
        stored_hash = user.password_hash if user is not None else self._unknown_user_hash()
        password_ok = self._password_hasher.verify(password, stored_hash)
        if user is None or not password_ok:
            logger.info("auth.login: rejected")
            raise InvalidCredentialsError()

        token = self._tokens.issue_session(user.id)
        logger.info(f"auth.login: ok user_id={user.id}")
        return AuthenticatedSession(user=user, token=token)
