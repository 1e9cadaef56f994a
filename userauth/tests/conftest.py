from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from flask import Flask

from userauth.app import create_app
from userauth.application.services.password_hashing import WerkzeugPasswordHasher
from userauth.application.services.tokens import JwtTokenService
from userauth.container import Container
from userauth.shared.config import AppConfig, DatabaseConfig

from .fakes import FakeClock

TEST_SECRET = "integration-test-secret"


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        JWT_SECRET=TEST_SECRET,
        LOG_FILE=tmp_path / "app.log",
        database=DatabaseConfig(DATABASE_URL="sqlite://"),
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def container(app_config: AppConfig, clock: FakeClock) -> Iterator[Container]:
    container = Container(app_config)
    container.password_hasher = WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")
    container.token_service = JwtTokenService(TEST_SECRET, clock=clock)
    yield container
    container.engine.dispose()


@pytest.fixture()
def app(container: Container) -> Flask:
    return create_app(container=container)
