# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    email: str
    password_hash: str
    created_at: datetime

    def with_password_hash(self, password_hash: str) -> User:
        return replace(self, password_hash=password_hash)

    def public_profile(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(slots=True, frozen=True)
class AuthenticatedSession:

    user: User
    token: str
