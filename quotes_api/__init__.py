# Uvicorn application factory <https://www.uvicorn.org/#application-factories>
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quotes_api.logging import logger, setup_logging
from quotes_api.middlewares.correlation_id import CorrelationIDMiddleware
from quotes_api.middlewares.logging_context import LoggingContextMiddleware
from quotes_api.routing import collect_subrouters
from quotes_api.settings import app_settings
from quotes_api.storage.db import engine, wait_and_init_db
from quotes_api.utils.error_handler import register_exception_handlers


async def startup() -> None:
    """
    Application startup handler.

    Waits for the database and creates the author and quote tables.
    """
    logger.info("Application startup initiated")
    await wait_and_init_db()
    logger.info("Initialized database and tables")


async def shutdown() -> None:
    """
    Application shutdown handler.

    Disposes the engine so pooled connections are closed cleanly.
    """
    logger.info("Application shutdown initiated")
    await engine.dispose()
    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    await startup()
    try:
        yield
    finally:
        await shutdown()


def application() -> FastAPI:
    """
    Initializes and configures the FastAPI application.

    This function sets up the FastAPI application with:
    - Logging configured from settings
    - Lifespan handler that initializes the database on startup and
      disposes the engine on shutdown
    - Routers collected by `quotes_api.routing.collect_subrouters()`
    - Exception handlers rendering `{error, message, code}` bodies
    - `LoggingContextMiddleware` and `CorrelationIDMiddleware`
    - `CORSMiddleware` for the origins in CORS_ALLOWED_ORIGINS

    Returns:
        The configured FastAPI application.
    """
    setup_logging()

    # Initialize application
    app = FastAPI(
        title="Quotes catalog",
        description="Authors and quotes with search, pagination and random picks",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Collect routers
    app.include_router(collect_subrouters())

    register_exception_handlers(app)

    # Middlewares (execute in REVERSE order of registration)
    # Execution flow: CORSMiddleware → CorrelationIDMiddleware →
    # LoggingContextMiddleware
    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(CorrelationIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ALLOWED_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    return app


app = application()  # Need for fastapi cli
