"""
Shared fixtures: an in-memory database rebuilt for every test.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from muzechat.db.base import Base
from muzechat.db.session import SessionLocal, engine, get_db
from muzechat.main import app
import muzechat.models  # noqa: F401


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def login(client):
    """Log the test client in and return the user payload."""
    def _login(username="alice", email="alice@x.com"):
        response = client.post("/api/auth/login", json={"username": username, "email": email})
        assert response.status_code == 200
        return response.json()["user"]
    return _login


@pytest.fixture
def anyio_backend():
    return "asyncio"


class BrokenSession:
    """Stands in for a session whose database is unreachable."""
    
    def query(self, *args, **kwargs):
        from sqlalchemy.exc import OperationalError
        raise OperationalError("SELECT 1", {}, Exception("database unreachable"))
    
    def rollback(self):
        pass
    
    def close(self):
        pass


@pytest.fixture
def broken_db():
    def _override():
        yield BrokenSession()
    app.dependency_overrides[get_db] = _override
    return BrokenSession()
