"""
Shared pytest fixtures and configuration for all tests.
"""

import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from pathlib import Path
from typing import Any
from uuid import uuid4

import pytest
import pytest_asyncio
from strawberry.types import ExecutionResult

# Add src directory to path so imports work without an editable install
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from libris.auth.context import AuthenticatedIdentity, Role
from libris.auth.tokens import CredentialIssuer
from libris.config import Settings
from libris.store import Catalog

TEST_SECRET = "test-secret-key-for-testing-only"

RunGraphQL = Callable[..., Awaitable[ExecutionResult]]


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, jwt_secret=TEST_SECRET, debug=True)


@pytest_asyncio.fixture(scope="function")
async def database(tmp_path: Path) -> AsyncGenerator[str, None]:
    """Point the shared engine at a fresh SQLite file with all tables created."""
    from libris.database.connection import create_all, dispose_database, init_database

    url = f"sqlite+aiosqlite:///{tmp_path / 'libris-test.db'}"
    init_database(url, force_reinit=True)
    await create_all()

    yield url

    await dispose_database()


@pytest.fixture
def catalog(database: str) -> Catalog:
    _ = database
    return Catalog()


@pytest.fixture
def admin_identity() -> AuthenticatedIdentity:
    return AuthenticatedIdentity(user_id=str(uuid4()), email="admin@example.com", role=Role.ADMIN)


@pytest.fixture
def candidate_identity() -> AuthenticatedIdentity:
    return AuthenticatedIdentity(
        user_id=str(uuid4()), email="candidate@example.com", role=Role.CANDIDATE
    )


@pytest.fixture
def run_graphql(catalog: Catalog, test_settings: Settings) -> RunGraphQL:
    """Execute a document against the schema with a chosen identity (None = anonymous)."""
    from libris.graphql.schema import build_context, schema

    issuer = CredentialIssuer(test_settings)

    async def _run(
        query: str,
        variables: dict[str, Any] | None = None,
        identity: AuthenticatedIdentity | None = None,
    ) -> ExecutionResult:
        return await schema.execute(
            query,
            variable_values=variables,
            context_value=build_context(identity, catalog, issuer),
        )

    return _run


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
