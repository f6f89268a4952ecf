"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from fastapi import Request
from graphql import GraphQLError
from graphql import validate_schema as gql_validate_schema
from strawberry.extensions import MaskErrors
from strawberry.fastapi import GraphQLRouter

from ..auth.context import AuthenticatedIdentity
from ..auth.tokens import CredentialIssuer, IdentityVerifier
from ..config import Settings
from ..config import settings as default_settings
from ..errors import LibrisError
from ..logging import bind_user_id, get_logger
from ..store import Catalog
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Unexpected error."


def should_mask_error(error: GraphQLError) -> bool:
    """Hide internal failures from clients; operation errors and validation pass through."""
    original = error.original_error
    if original is None or isinstance(original, LibrisError):
        return False

    logger.error(
        "Unhandled error while resolving field",
        path=error.path,
        error_type=type(original).__name__,
        error=str(original),
        exc_info=original,
    )
    return True


class MaskInternalErrors(MaskErrors):
    """MaskErrors preset for Libris; Strawberry builds a fresh one per operation."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(should_mask_error=should_mask_error, error_message=INTERNAL_ERROR_MESSAGE)


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    extensions=[MaskInternalErrors],
)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    Raises:
        Exception: If the schema is invalid or has unresolved types
    """
    try:
        graphql_schema = schema._schema

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        # Check that introspection query works (catches most resolution issues)
        from graphql import get_introspection_query, graphql_sync

        result = graphql_sync(graphql_schema, get_introspection_query())
        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


def build_context(
    identity: AuthenticatedIdentity | None,
    catalog: Catalog,
    issuer: CredentialIssuer,
    request: Request | None = None,
) -> dict[str, Any]:
    """Per-request context handed to every resolver."""
    return {
        "request": request,
        "identity": identity,
        "catalog": catalog,
        "issuer": issuer,
    }


def create_graphql_router(
    app_settings: Settings | None = None, catalog: Catalog | None = None
) -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI."""
    app_settings = app_settings or default_settings
    catalog = catalog or Catalog()
    verifier = IdentityVerifier(app_settings)
    issuer = CredentialIssuer(app_settings)

    async def get_context(request: Request) -> dict[str, Any]:
        """Verify the bearer token once and build the context for this request."""
        identity = verifier.verify(request.headers.get("authorization"))
        bind_user_id(identity.user_id if identity else None)
        return build_context(identity, catalog, issuer, request)

    return GraphQLRouter(
        schema,
        path="/graphql",
        graphql_ide="graphiql" if app_settings.debug else None,
        context_getter=get_context,
    )
