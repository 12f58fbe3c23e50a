# tests/conftest.py
import pytest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from catalog.database import Base, get_db
from catalog.main import app

from .fakes import make_remote_catalog, make_failing_catalog, make_html_catalog, make_malformed_catalog

def _client_for(engine, create_tables=True):
    if create_tables:
        Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)

def _memory_engine():
    return create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)

@pytest.fixture
def client():
    engine = _memory_engine()
    yield _client_for(engine)
    app.dependency_overrides.clear()
    engine.dispose()

@pytest.fixture
def broken_client():
    # No tables: every query fails inside the database layer.
    engine = _memory_engine()
    yield _client_for(engine, create_tables=False)
    app.dependency_overrides.clear()
    engine.dispose()

@pytest.fixture
def remote_session():
    return TestClient(make_remote_catalog())

@pytest.fixture
def failing_session():
    return TestClient(make_failing_catalog())

@pytest.fixture
def html_session():
    return TestClient(make_html_catalog())

@pytest.fixture
def malformed_session():
    return TestClient(make_malformed_catalog())
