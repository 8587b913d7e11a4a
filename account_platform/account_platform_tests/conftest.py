"""
Pytest configuration for Account Service tests.

Settings are read once at import, so the test secret and a throwaway SQLite
database are put in the environment before the service is imported.
"""
import os
import tempfile

TEST_SECRET = "test-secret-key-for-unit-tests-1234567890"
TEST_DB_PATH = os.path.join(tempfile.gettempdir(), "account_service_test.db")

os.environ["JWT_SECRET"] = TEST_SECRET
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"

import pytest
from fastapi.testclient import TestClient

from account_platform.account_service.db import Base, SessionLocal, engine
from account_platform.account_service.main import app
from account_platform.account_service import models  # noqa: F401


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them before each test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
