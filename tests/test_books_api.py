"""
Tests for the book endpoints.
"""

import time
from datetime import datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from livraria.database import get_db


def parse_timestamp(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.fixture
def created_book(client, auth_headers, book_payload):
    response = client.post("/livros", json=book_payload, headers=auth_headers)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def broken_store(app, auth_headers):
    """A session whose every call fails like a lost database connection (set up after login)."""
    failure = OperationalError("SELECT 1", {}, Exception("connection refused"))
    db = MagicMock()
    db.commit.side_effect = failure
    db.query.side_effect = failure
    app.dependency_overrides[get_db] = lambda: db
    yield db
    app.dependency_overrides.clear()


def test_create_book(created_book, book_payload):
    for field, value in book_payload.items():
        assert created_book[field] == value
    assert created_book["id"]
    assert created_book["createdAt"]
    assert created_book["updatedAt"]


def test_create_then_list_includes_book(client, auth_headers, created_book):
    response = client.get("/livros", headers=auth_headers)

    assert response.status_code == 200
    books = response.json()
    assert books == [created_book]
    assert set(books[0]) == {"id", "nome", "autor", "preco", "quantidade", "createdAt", "updatedAt"}


def test_list_keeps_creation_order(client, auth_headers, book_payload):
    ids = []
    for name in ("Primeiro", "Segundo", "Terceiro"):
        response = client.post("/livros", json={**book_payload, "nome": name}, headers=auth_headers)
        ids.append(response.json()["id"])

    listed = client.get("/livros", headers=auth_headers).json()
    assert sorted(book["id"] for book in listed) == sorted(ids)
    assert [book["nome"] for book in listed] == ["Primeiro", "Segundo", "Terceiro"]


def test_create_book_rejects_invalid_payload(client, auth_headers):
    response = client.post(
        "/livros", json={"nome": "Livro", "autor": "Autor", "preco": -5, "quantidade": 1}, headers=auth_headers
    )

    assert response.status_code == 400
    assert [d["field"] for d in response.json()["details"]] == ["preco"]


@pytest.mark.parametrize(
    "method, path",
    [("post", "/livros"), ("get", "/livros"), ("delete", "/livros/some-id"), ("get", "/profile")],
)
def test_protected_routes_require_token(client, method, path):
    response = client.request(method, path)

    assert response.status_code == 401
    assert response.json() == {"error": "Você precisa estar logado."}


def test_auth_is_checked_before_validation(client):
    response = client.post("/livros", json={"nome": 123})
    assert response.status_code == 401

    response = client.post("/livros", content=b"{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 401


def test_rejected_requests_never_reach_the_store(app, client, book_payload):
    calls = []

    def tracking_db():
        calls.append("get_db")
        yield MagicMock()

    app.dependency_overrides[get_db] = tracking_db
    try:
        client.post("/livros", json=book_payload)
        client.get("/livros", headers={"Authorization": "Bearer forged.token.value"})
        client.delete("/livros/some-id")
    finally:
        app.dependency_overrides.clear()

    assert calls == []


def test_update_book(client, auth_headers, created_book, book_payload):
    changes = {**book_payload, "preco": 49.9, "quantidade": 3}
    time.sleep(0.01)

    response = client.put(f"/livros/{created_book['id']}", json=changes, headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == created_book["id"]
    assert data["preco"] == 49.9
    assert data["quantidade"] == 3
    assert data["createdAt"] == created_book["createdAt"]
    assert parse_timestamp(data["updatedAt"]) > parse_timestamp(created_book["updatedAt"])


def test_update_with_same_values_refreshes_updated_at(client, created_book, book_payload):
    time.sleep(0.01)

    response = client.put(f"/livros/{created_book['id']}", json=book_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["createdAt"] == created_book["createdAt"]
    assert parse_timestamp(data["updatedAt"]) > parse_timestamp(created_book["updatedAt"])


def test_timestamps_are_timezone_aware(client, auth_headers, created_book):
    listed = client.get("/livros", headers=auth_headers).json()[0]

    for book in (created_book, listed):
        for field in ("createdAt", "updatedAt"):
            assert parse_timestamp(book[field]).utcoffset() is not None


def test_update_book_does_not_require_token(client, created_book, book_payload):
    """PUT /livros/{id} is public while POST and DELETE are not; kept as observed."""
    response = client.put(f"/livros/{created_book['id']}", json={**book_payload, "quantidade": 0})

    assert response.status_code == 200
    assert response.json()["quantidade"] == 0


def test_update_unknown_book_is_not_found(client, book_payload):
    response = client.put("/livros/does-not-exist", json=book_payload)

    assert response.status_code == 404
    assert response.json() == {"error": "Livro não encontrado"}


def test_update_validates_body(client, created_book):
    response = client.put(f"/livros/{created_book['id']}", json={"nome": "Só o nome"})

    assert response.status_code == 400
    assert {d["field"] for d in response.json()["details"]} == {"autor", "preco", "quantidade"}


def test_delete_book_twice(client, auth_headers, created_book):
    first = client.delete(f"/livros/{created_book['id']}", headers=auth_headers)
    second = client.delete(f"/livros/{created_book['id']}", headers=auth_headers)

    assert first.status_code == 200
    assert first.json() == {"message": "Livro removido com sucesso"}
    assert second.status_code == 404
    assert second.json() == {"error": "Livro não encontrado"}
    assert client.get("/livros", headers=auth_headers).json() == []


def test_store_failure_on_create_is_a_generic_server_error(client, auth_headers, book_payload, broken_store):
    response = client.post("/livros", json=book_payload, headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Erro ao criar livro"}
    broken_store.rollback.assert_called_once()


def test_store_failure_on_list_is_a_generic_server_error(client, auth_headers, broken_store):
    response = client.get("/livros", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Erro ao buscar livros"}
