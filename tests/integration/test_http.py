"""HTTP-level tests through FastAPI and the Strawberry router."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from httpx import AsyncClient

pytestmark = pytest.mark.usefixtures("seeded")


async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["environment"] == "test"


async def test_readiness_checks_database(client: AsyncClient) -> None:
    response = await client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": True, "detail": None}


async def test_graphql_query_over_http(client: AsyncClient) -> None:
    response = await client.post(
        "/graphql",
        json={"query": "{ recentBooks { title author { name } } }"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "data": {
            "recentBooks": [
                {"title": "Les aventures de Clément", "author": {"name": "ROLLIN Clément"}},
                {"title": "City of Glass", "author": {"name": "Paul Auster"}},
            ],
        },
    }


async def test_graphql_mutation_error_has_code(client: AsyncClient) -> None:
    response = await client.post(
        "/graphql",
        json={
            "query": 'mutation { deleteBook(title: "Ulysses") { id } }',
        },
    )

    body = response.json()
    assert body["data"] == {"deleteBook": None}
    assert body["errors"][0]["message"] == "Book not found"
    assert body["errors"][0]["extensions"]["code"] == "NOT_FOUND"


async def test_mutation_is_visible_to_next_request(client: AsyncClient) -> None:
    await client.post("/graphql", json={"query": 'mutation { addAuthor(name: "Toni Morrison") { id } }'})

    response = await client.post("/graphql", json={"query": "{ authors { name } }"})

    assert response.json()["data"]["authors"][-1] == {"name": "Toni Morrison"}


async def test_request_id_is_echoed(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"X-Request-ID": "req-42"})

    assert response.headers["x-request-id"] == "req-42"


async def test_request_id_is_generated(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert len(response.headers["x-request-id"]) == 36
