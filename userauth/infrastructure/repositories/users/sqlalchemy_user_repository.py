# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from userauth.domain.users.entities import User as DomainUser
from userauth.domain.users.exceptions import UserAlreadyExistsError, UserNotFoundError
from userauth.domain.users.repositories import UserRepository
from userauth.infrastructure.db.models import User
from userauth.infrastructure.db.session import session_scope
from userauth.shared.errors import StoreUnavailableError
from userauth.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    created_at = row.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=created_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        try:
            with session_scope(self._session_factory) as session:
                yield session
        except SQLAlchemyError as exc:
            logger.error(f"users.{operation}: store error {type(exc).__name__}")
            raise StoreUnavailableError(operation) from exc

    def find_by_email(self, email: str) -> DomainUser | None:
        with self._session("find_by_email") as session:
            row = session.scalars(select(User).where(User.email == email)).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with self._session("find_by_id") as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def create(self, username: str, email: str, password_hash: str) -> DomainUser:
        try:
            with session_scope(self._session_factory) as session:
                row = User(
                    username=username,
                    email=email,
                    password_hash=password_hash,
                    created_at=datetime.now(UTC),
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            logger.info("users.create: email already present")
            raise UserAlreadyExistsError() from exc
        except SQLAlchemyError as exc:
            logger.error(f"users.create: store error {type(exc).__name__}")
            raise StoreUnavailableError("create") from exc

    def save(self, user: DomainUser) -> DomainUser:
        with self._session("save") as session:
            row = session.get(User, user.id)
            if row is None:
                logger.info(f"users.save: row missing user_id={user.id}")
                raise UserNotFoundError()
            row.username = user.username
            row.email = user.email
            row.password_hash = user.password_hash
            session.flush()
            return _to_domain(row)
