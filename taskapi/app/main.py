import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from taskapi.app.config import Settings, get_settings
from taskapi.app.core.errors import StoreBootstrapError
from taskapi.app.core.logging_config import configure_logging
from taskapi.app.core.tracing import install_request_tracing
from taskapi.app.db import prepare_database
from taskapi.app.routers import tasks as tasks_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    app_settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(
            app_settings.log_level, default="ERROR" if app_settings.is_test else "INFO"
        )
        database_url = app_settings.resolved_database_url
        try:
            engine = prepare_database(
                database_url,
                pool_size=app_settings.db_pool_size,
                pool_timeout=app_settings.db_pool_timeout,
                busy_timeout_ms=app_settings.db_busy_timeout_ms,
            )
        except StoreBootstrapError:
            logger.critical("database bootstrap failed url=%s", database_url)
            raise
        app.state.engine = engine
        logger.info("task service ready env=%s", app_settings.app_env)
        try:
            yield
        finally:
            engine.dispose()
            app.state.engine = None
            logger.info("storage handle closed")

    app = FastAPI(
        title="Task Service",
        description="Tasks management API",
        version="1.0.0",
        docs_url="/swagger-ui",
        openapi_url="/api-doc/openapi.json",
        redoc_url=None,
        lifespan=lifespan,
        openapi_tags=[{"name": "task", "description": "Tasks management API"}],
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_allow_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_request_tracing(app)

    @app.exception_handler(Exception)
    async def handle_unexpected_exception(request: Request, exc: Exception):
        logger.exception("unexpected error: %s", exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "An unexpected error occurred"},
        )

    app.include_router(tasks_router.router)

    @app.get("/hello", response_class=PlainTextResponse, include_in_schema=False)
    async def root() -> str:
        return "Hello, World"

    return app


app = create_app()
