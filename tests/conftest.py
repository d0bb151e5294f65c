from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy.orm import Session

from user_api import create_app
from user_api.config import BaseConfig
from user_api.db.repositories.user_repo import UserRepository
from user_api.db.session import db
from user_api.services.user_service import UserService


@pytest.fixture()
def app(tmp_path: Path) -> Iterator[Flask]:
    config = BaseConfig(
        DATABASE_URL=f"sqlite:///{tmp_path / 'users.sqlite3'}",
        CORS_ORIGINS=["http://localhost:3000"],
        LOG_LEVEL="WARNING",
    )
    app = create_app(config)
    app.config["TESTING"] = True
    yield app
    assert db.engine is not None
    db.engine.dispose()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture()
def session(app: Flask) -> Iterator[Session]:
    assert db.Session is not None
    yield db.Session()
    db.Session.remove()


@pytest.fixture()
def repo(session: Session) -> UserRepository:
    return UserRepository(session)


@pytest.fixture()
def service(repo: UserRepository) -> UserService:
    return UserService(repo)
