from dataclasses import dataclass

from fastapi.testclient import TestClient
from httpx import Response


@dataclass
class BooksApi:
    _client: TestClient

    def list(self) -> Response:
        return self._client.get("/books")

    def get(self, isbn: str) -> Response:
        return self._client.get(f"/books/{isbn}")

    def create(self, book: dict) -> Response:
        return self._client.post("/books", json={"book": book})

    def update(self, isbn: str, book: dict) -> Response:
        return self._client.put(f"/books/{isbn}", json={"book": book})

    def delete(self, isbn: str) -> Response:
        return self._client.delete(f"/books/{isbn}")
