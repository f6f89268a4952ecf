"""
Main FastAPI application for Libris backend
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import Settings, settings
from ..database.connection import dispose_database, init_database, test_database_connection
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

configure_logging(debug=settings.debug, level=settings.log_level)
logger = get_logger(__name__)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Libris API...", environment=app_settings.environment)
        init_database()

        ok, error = await test_database_connection()
        if not ok:
            logger.error("Database is not reachable", error=error)
        if not app_settings.jwt_secret:
            logger.warning("LIBRIS_JWT_SECRET is not set; login and bearer tokens are disabled")

        yield

        logger.info("Shutting down Libris API...")
        await dispose_database()

    app = FastAPI(
        title="Libris API",
        description="GraphQL catalog of authors and books",
        version=__version__,
        lifespan=lifespan,
        debug=app_settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    from ..graphql.schema import create_graphql_router, validate_schema

    # Fail fast: the server should not start with a broken schema
    logger.info("Validating GraphQL schema...")
    validate_schema()
    app.include_router(create_graphql_router(app_settings), prefix="")
    logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")

    return app


app = create_app()
