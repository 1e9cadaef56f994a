from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace

import pytest
from sqlalchemy import func, select
from sqlalchemy.engine import Engine

from userauth.domain.users.exceptions import UserAlreadyExistsError, UserNotFoundError
from userauth.infrastructure.db import build_engine, build_session_factory, init_db
from userauth.infrastructure.db.models import User
from userauth.infrastructure.repositories.users import SqlAlchemyUserRepository
from userauth.shared.config import DatabaseConfig
from userauth.shared.errors import StoreUnavailableError


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = build_engine(DatabaseConfig(DATABASE_URL="sqlite://"))
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def repository(engine: Engine) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(build_session_factory(engine))


def _count_users(engine: Engine) -> int:
    with engine.connect() as connection:
        return connection.execute(select(func.count()).select_from(User)).scalar_one()


def test_create_assigns_id_and_timestamp(repository: SqlAlchemyUserRepository) -> None:
    user = repository.create("alice", "alice@example.com", "hash")

    assert user.id > 0
    assert user.created_at.tzinfo is not None
    assert repository.find_by_id(user.id) == user
    assert repository.find_by_email("alice@example.com") == user


def test_lookup_misses_return_none(repository: SqlAlchemyUserRepository) -> None:
    assert repository.find_by_email("ghost@example.com") is None
    assert repository.find_by_id(42) is None


def test_email_is_unique(repository: SqlAlchemyUserRepository, engine: Engine) -> None:
    repository.create("alice", "alice@example.com", "hash")

    with pytest.raises(UserAlreadyExistsError):
        repository.create("alice2", "alice@example.com", "other")

    assert _count_users(engine) == 1


def test_email_match_is_case_sensitive(repository: SqlAlchemyUserRepository) -> None:
    repository.create("alice", "alice@example.com", "hash")

    assert repository.find_by_email("Alice@Example.com") is None


def test_save_replaces_password_hash(repository: SqlAlchemyUserRepository) -> None:
    user = repository.create("alice", "alice@example.com", "old-hash")

    repository.save(user.with_password_hash("new-hash"))

    stored = repository.find_by_id(user.id)
    assert stored is not None
    assert stored.password_hash == "new-hash"
    assert stored.created_at == user.created_at


def test_save_missing_user_raises(repository: SqlAlchemyUserRepository) -> None:
    user = repository.create("alice", "alice@example.com", "hash")
    ghost = replace(user, id=user.id + 100)

    with pytest.raises(UserNotFoundError):
        repository.save(ghost)


def test_store_failure_is_reported_as_unavailable(engine: Engine) -> None:
    repository = SqlAlchemyUserRepository(build_session_factory(engine))
    User.__table__.drop(engine)

    with pytest.raises(StoreUnavailableError) as exc_info:
        repository.find_by_email("alice@example.com")

    assert exc_info.value.context == {"operation": "find_by_email"}
