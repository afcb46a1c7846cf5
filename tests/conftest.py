"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from livraria.config import Settings
from livraria.main import create_app

TEST_SECRET = "test-secret-key"


@pytest.fixture
def settings():
    """Settings backed by an in-memory SQLite database."""
    return Settings(database_url="sqlite://", secret_jwt=TEST_SECRET, _env_file=None)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client with the lifespan running (tables created)."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def user_payload():
    return {"nome": "Ana", "email": "ana@x.com", "password": "12345678"}


@pytest.fixture
def book_payload():
    return {"nome": "Dom Casmurro", "autor": "Machado de Assis", "preco": 39.9, "quantidade": 10}


@pytest.fixture
def registered_user(client, user_payload):
    response = client.post("/user", json=user_payload)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def token(client, registered_user, user_payload):
    response = client.post(
        "/login", json={"email": user_payload["email"], "password": user_payload["password"]}
    )
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
