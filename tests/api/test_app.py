"""
End-to-end tests through the FastAPI app over an in-process ASGI transport
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from libris import __version__
from libris.api.app import create_app


@pytest_asyncio.fixture
async def client(database, test_settings) -> AsyncGenerator[AsyncClient, None]:
    _ = database
    app = create_app(test_settings)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def _graphql(client: AsyncClient, query: str, variables=None, token: str | None = None):
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    response = await client.post(
        "/graphql", json={"query": query, "variables": variables or {}}, headers=headers
    )
    assert response.status_code == 200
    return response.json()


@pytest.mark.asyncio
class TestApp:
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}

    async def test_request_id_is_echoed_or_generated(self, client):
        echoed = await client.get("/health", headers={"X-Request-ID": "req-123"})
        generated = await client.get("/health")

        assert echoed.headers["X-Request-ID"] == "req-123"
        assert generated.headers["X-Request-ID"]

    async def test_invalid_token_is_treated_as_anonymous(self, client):
        body = await _graphql(client, "{ books { id } me { id } }", token="not-a-jwt")

        assert "errors" not in body
        assert body["data"] == {"books": [], "me": None}

    async def test_admin_flow_with_bearer_token(self, client):
        register = """
            mutation ($email: String!, $role: Role) {
                registerUser(username: "root", email: $email, password: "s3cret!", role: $role) {
                    id
                }
            }
        """
        await _graphql(client, register, {"email": "admin@example.com", "role": "ADMIN"})
        login = await _graphql(
            client,
            'mutation { loginUser(email: "admin@example.com", password: "s3cret!") }',
        )
        token = login["data"]["loginUser"]

        anonymous = await _graphql(client, "{ users { email } }")
        admin = await _graphql(client, "{ users { email } me { role } }", token=token)

        assert anonymous["data"] == {"users": None}
        assert [e["message"] for e in anonymous["errors"]] == ["Unauthorized"]
        assert "errors" not in admin
        assert admin["data"] == {"users": [{"email": "admin@example.com"}], "me": {"role": "ADMIN"}}

    async def test_candidate_cannot_delete_over_http(self, client):
        await _graphql(
            client,
            'mutation { registerUser(username: "c", email: "c@example.com", password: "pw1234") '
            "{ id } }",
        )
        login = await _graphql(
            client, 'mutation { loginUser(email: "c@example.com", password: "pw1234") }'
        )
        added = await _graphql(
            client, 'mutation { addBook(name: "Keep Me", genre: "Drama", authorId: "a") { id } }'
        )
        book_id = added["data"]["addBook"]["id"]

        body = await _graphql(
            client,
            "mutation ($id: ID!) { deleteBook(id: $id) { id } }",
            {"id": book_id},
            token=login["data"]["loginUser"],
        )
        remaining = await _graphql(client, "{ books { id } }")

        assert [e["message"] for e in body["errors"]] == ["Unauthorized"]
        assert remaining["data"]["books"] == [{"id": book_id}]
