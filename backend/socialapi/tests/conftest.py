"""
Shared fixtures: a fresh in-memory store per test wired into the app.
"""
import pytest
from fastapi.testclient import TestClient
from socialapi.db.session import get_db
from socialapi.db.store import MemoryStore
from socialapi.main import app


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_db] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def signup(client):
    """Sign up a user; returns the response JSON ``user`` object."""
    def _signup(accountname, email=None, password="abcdef", username=None):
        response = client.post(
            "/api/user",
            json={
                "user": {
                    "username": username or accountname,
                    "email": email or f"{accountname.replace('.', '_')}@example.com",
                    "password": password,
                    "accountname": accountname,
                }
            },
        )
        assert response.status_code == 201, response.json()
        return response.json()["user"]
    return _signup


@pytest.fixture
def login(client):
    """Sign in and return an Authorization header dict."""
    def _login(email, password="abcdef"):
        response = client.post("/api/user/signin", json={"user": {"email": email, "password": password}})
        assert response.status_code == 200, response.json()
        return {"Authorization": f"Bearer {response.json()['user']['accessToken']}"}
    return _login


@pytest.fixture
def member(signup, login):
    """Sign up and sign in; returns (user, auth headers)."""
    def _member(accountname):
        user = signup(accountname)
        return user, login(user["email"])
    return _member
