# ruff: noqa: E402
# File: /tests/conftest.py
import pathlib
import sys

# Make repo root importable as "docview"
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from docview.crud.records import SqlRecordStorage
from docview.db import Base
from docview.engine.registry import build_default_registry
from docview.main import app
from docview.security import create_access_token
from docview.services.property_schema import PropertySchema
from docview.services.view_store import ViewStore

TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def _create_schema():
    Base.metadata.create_all(bind=engine)
    try:
        yield
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session():
    connection = engine.connect()
    trans = connection.begin()
    try:
        session = TestingSessionLocal(bind=connection)
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()


@pytest.fixture()
def client(db_session):
    from docview.db.session import get_db  # late import to avoid circulars

    def _override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def auth_headers(owner_id: str) -> dict:
    token = create_access_token({"sub": owner_id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def headers():
    return auth_headers("owner-1")


@pytest.fixture()
def registry():
    return build_default_registry()


@pytest.fixture()
def storage(db_session):
    return SqlRecordStorage(db_session)


@pytest.fixture()
def schema(db_session, registry, storage):
    return PropertySchema(db_session, registry, storage)


@pytest.fixture()
def store(db_session, registry, schema):
    return ViewStore(db_session, registry, schema)


@pytest.fixture()
def other_headers():
    return auth_headers("owner-2")
