import os
import sys
import tempfile

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Keep the app's data dir and default database out of the user's home.
_TMP_DATA_DIR = tempfile.mkdtemp(prefix="gametrc-tests-")
os.environ["GAMETRC_DATA_DIR"] = _TMP_DATA_DIR
os.environ["DATABASE_URL"] = "sqlite://"

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from gametrc_api.main import app
from gametrc_api.db import get_db
from gametrc_api.db_init import init_db


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_game(**overrides) -> dict:
    data = {
        "title": "Test Game",
        "platform": "PC",
        "status": "NotStarted",
    }
    data.update(overrides)
    return data
