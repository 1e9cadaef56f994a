# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from typing import Protocol

from .entities import User


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def create(self, username: str, email: str, password_hash: str) -> User: ...
    def save(self, user: User) -> User: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenIssuer(Protocol):
    def issue(self, subject: int, ttl: timedelta | None = None) -> str: ...
    def issue_session(self, subject: int) -> str: ...
    def issue_reset(self, subject: int) -> str: ...
    def verify(self, token: str) -> int: ...
