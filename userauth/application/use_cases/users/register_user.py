# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from userauth.domain.users.entities import User
from userauth.domain.users.exceptions import UserAlreadyExistsError
from userauth.domain.users.repositories import PasswordHasher, UserRepository
from userauth.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, username: str, email: str, password: str) -> User:
        if self._users.find_by_email(email) is not None:
            raise UserAlreadyExistsError()
        hashed = self._password_hasher.hash(password)
        # The unique index still decides between concurrent registrations.
        user = self._users.create(username=username, email=email, password_hash=hashed)
        logger.info(f"auth.register: ok user_id={user.id}")
        return user
