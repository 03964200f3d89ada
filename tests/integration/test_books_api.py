"""End-to-end tests of the books endpoints against in-memory SQLite."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.books_api.api.http.deps import get_book_service
from src.books_api.core.services.book_service import BookService
from tests.fixtures.dummies import FailingBookRepository

DUNE = {"title": "Dune", "year": 1965}


def create_book(client: TestClient, payload: dict | None = None) -> dict:
    response = client.post("/books", json=payload or DUNE)
    assert response.status_code == 201
    return response.json()["book"]


class TestCreateBook:
    def test_create_returns_201_with_book(self, client: TestClient):
        response = client.post("/books", json=DUNE)

        assert response.status_code == 201
        body = response.json()
        assert body["message"]
        assert body["book"]["title"] == "Dune"
        assert body["book"]["year"] == 1965
        assert body["book"]["id"] > 0

    def test_created_book_is_retrievable(self, client: TestClient):
        book = create_book(client)

        response = client.get(f"/books/{book['id']}")

        assert response.status_code == 200
        assert response.json() == {"id": book["id"], "title": "Dune", "year": 1965}

    @pytest.mark.parametrize(
        "payload",
        [
            {"year": 1965},
            {"title": "Dune"},
            {"title": "", "year": 1965},
            {"title": "Dune", "year": "nineteen"},
            {"title": "Dune", "year": 2**31},
            {"title": "Dune", "year": -(2**31) - 1},
            {"title": "Dune", "year": 10**30},
            {},
        ],
    )
    def test_invalid_body_returns_400_and_creates_nothing(self, client: TestClient, payload):
        response = client.post("/books", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid data"
        assert client.get("/books").json() == []

    def test_non_json_body_returns_400(self, client: TestClient):
        response = client.post(
            "/books", content="not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400


class TestReadBooks:
    def test_list_empty(self, client: TestClient):
        response = client.get("/books")

        assert response.status_code == 200
        assert response.json() == []

    def test_list_returns_all(self, client: TestClient):
        create_book(client)
        create_book(client, {"title": "Emma", "year": 1815})

        response = client.get("/books")

        assert response.status_code == 200
        assert [book["title"] for book in response.json()] == ["Dune", "Emma"]

    def test_get_missing_returns_404(self, client: TestClient):
        response = client.get("/books/12345")

        assert response.status_code == 404
        assert "12345" in response.json()["error"]

    def test_get_invalid_id_returns_400(self, client: TestClient):
        response = client.get("/books/abc")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid ID"}

    @pytest.mark.parametrize(
        "book_id", ["1.0", "%201", "1e0", "99999999999999999999", "-99999999999999999999"]
    )
    def test_get_non_integer_id_returns_400(self, client: TestClient, book_id):
        create_book(client)

        response = client.get(f"/books/{book_id}")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid ID"}


class TestUpdateBook:
    def test_update_changes_fields_and_keeps_id(self, client: TestClient):
        book = create_book(client)

        response = client.put(
            f"/books/{book['id']}", json={"title": "Dune Messiah", "year": 1969}
        )

        assert response.status_code == 200
        assert response.json()["book"] == {
            "id": book["id"],
            "title": "Dune Messiah",
            "year": 1969,
        }
        assert client.get(f"/books/{book['id']}").json()["title"] == "Dune Messiah"

    def test_update_missing_returns_404_and_creates_nothing(self, client: TestClient):
        response = client.put("/books/77", json=DUNE)

        assert response.status_code == 404
        assert client.get("/books").json() == []

    def test_update_zero_id_returns_400(self, client: TestClient):
        response = client.put("/books/0", json=DUNE)

        assert response.status_code == 400
        assert "required" in response.json()["error"]

    def test_update_invalid_id_returns_400(self, client: TestClient):
        response = client.put("/books/abc", json=DUNE)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid ID"}

    def test_update_invalid_body_returns_400(self, client: TestClient):
        book = create_book(client)

        response = client.put(f"/books/{book['id']}", json={"title": "Dune"})

        assert response.status_code == 400
        assert client.get(f"/books/{book['id']}").json()["year"] == 1965


class TestDeleteBook:
    def test_delete_then_get_returns_404(self, client: TestClient):
        book = create_book(client)

        response = client.delete(f"/books/{book['id']}")

        assert response.status_code == 200
        assert response.json()["message"]
        assert client.get(f"/books/{book['id']}").status_code == 404

    def test_delete_missing_returns_404_and_keeps_rows(self, client: TestClient):
        create_book(client)

        response = client.delete("/books/999")

        assert response.status_code == 404
        assert len(client.get("/books").json()) == 1

    def test_delete_invalid_id_returns_400(self, client: TestClient):
        response = client.delete("/books/1.5")

        assert response.status_code == 400

    def test_delete_out_of_range_id_returns_400(self, client: TestClient):
        create_book(client)

        response = client.delete("/books/99999999999999999999")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid ID"}
        assert len(client.get("/books").json()) == 1


class TestWalkthrough:
    def test_create_read_delete(self, client: TestClient):
        created = client.post("/books", json=DUNE)
        assert created.status_code == 201
        assert created.json()["book"] == {"id": 1, "title": "Dune", "year": 1965}

        fetched = client.get("/books/1")
        assert fetched.status_code == 200
        assert fetched.json() == {"id": 1, "title": "Dune", "year": 1965}

        assert client.delete("/books/1").status_code == 200
        assert client.get("/books/1").status_code == 404


class TestStorageFailures:
    def test_storage_error_returns_500_with_message(self, app: FastAPI):
        app.dependency_overrides[get_book_service] = lambda: BookService(
            FailingBookRepository("lost connection to MySQL server")
        )

        with TestClient(app) as client:
            list_response = client.get("/books")
            create_response = client.post("/books", json=DUNE)

        assert list_response.status_code == 500
        assert list_response.json() == {"error": "lost connection to MySQL server"}
        assert create_response.status_code == 500

    def test_unexpected_error_returns_500(self, app: FastAPI):
        class BrokenService:
            def get_all(self):
                raise RuntimeError("boom")

        app.dependency_overrides[get_book_service] = lambda: BrokenService()

        with TestClient(app) as client:
            response = client.get("/books")

        assert response.status_code == 500
        assert response.json()["error"] == "Internal Server Error"
        assert response.headers["X-Request-ID"]
