"""FastAPI application entry point."""

import logging
import os

# Configure logging based on ENV environment variable
# ENV=dev: INFO level with detailed format (default)
# ENV=prod/staging: WARNING level, minimal logs
_env = os.getenv("ENV", "dev").lower()
_is_dev = _env == "dev"
_log_level = logging.INFO if _is_dev else logging.WARNING

logging.basicConfig(
    level=_log_level,
    format=(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
        if _is_dev
        else "%(levelname)s | %(message)s"
    ),
    datefmt="%H:%M:%S",
)

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from usergraph.api import health
from usergraph.api.graphql import create_graphql_router
from usergraph.config import Settings, settings
from usergraph.database.mongo import MongoConnection, connection as default_connection
from usergraph.middleware.exception_handlers import (
    http_exception_handler,
    unhandled_exception_handler,
)
from usergraph.middleware.request_logging import RequestLoggingMiddleware
from usergraph.repositories.user import UserRepository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect and build indexes before serving; close the connection on shutdown."""
    connection: MongoConnection = app.state.connection
    try:
        db = await run_in_threadpool(connection.connect)
        await run_in_threadpool(UserRepository(db).ensure_indexes)
    except Exception:
        logger.exception("Error starting server")
        await run_in_threadpool(connection.close)
        raise

    logger.info("GraphQL endpoint ready at /graphql, health check at /health")
    try:
        yield
    finally:
        logger.info("Shutting down...")
        await run_in_threadpool(connection.close)


def create_app(
    connection: Optional[MongoConnection] = None,
    config: Settings = settings,
) -> FastAPI:
    app = FastAPI(
        title=config.APP_NAME,
        description="GraphQL API for managing users stored in MongoDB",
        version=config.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.connection = connection or default_connection

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health.router, tags=["Health"])
    app.include_router(
        create_graphql_router(graphiql=config.is_dev),
        prefix="/graphql",
        tags=["GraphQL"],
    )
    return app


app = create_app()


def run() -> None:
    import uvicorn

    logger.info("Starting server on http://%s:%s/graphql", settings.HOST, settings.PORT)
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level="info" if settings.is_dev else "warning",
        lifespan="on",
    )


if __name__ == "__main__":
    run()
