from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from numsort.config import AppConfig, load_config
from numsort.db.base import dispose_engine, get_engine
from numsort.db.migrations_runner import apply_migrations
from numsort.http.problem import (
    handle_http_exception,
    handle_operation_error,
    handle_request_validation_error,
    handle_unexpected_error,
)
from numsort.http.request_id import RequestIdMiddleware
from numsort.logging_setup import configure_logging
from numsort.logic.errors import OperationError
from numsort.logic.ordering import OrderingService
from numsort.logic.ports import NumberStore
from numsort.logic.repository_numbers import SqlNumberStore
from numsort.routes import api_router, health_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def create_app(
    config: Optional[AppConfig] = None,
    store: Optional[NumberStore] = None,
    *,
    migrate: Optional[bool] = None,
) -> FastAPI:
    """Build the FastAPI application.

    When no store is injected, a SQL-backed store is built from
    `config.database.dsn` and, if enabled, migrations run at startup and the
    engine is disposed at shutdown. An injected store is used as-is and its
    lifecycle stays with the caller.
    """
    cfg = config or load_config()
    # Configure global logging before app instantiation so all modules emit
    configure_logging(cfg.env)

    engine = None
    if store is None:
        engine = get_engine(cfg.database.dsn, connect_timeout=cfg.http_server.timeout)
        store = SqlNumberStore(engine)
    run_migrations = cfg.database.auto_migrate if migrate is None else migrate

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        if engine is not None:
            if run_migrations:
                applied = apply_migrations(engine)
                logger.info("startup_migrations applied=%s", applied)
            else:
                logger.info("AUTO_APPLY_MIGRATIONS disabled; skipping migrations at startup")
        logger.info("Run: server started env=%s", cfg.env)
        yield
        logger.info("Shutdown")
        if engine is not None:
            dispose_engine()

    app = FastAPI(title="numsort", lifespan=lifespan)
    app.state.config = cfg
    app.state.number_store = store
    app.state.ordering_service = OrderingService(store, logging.getLogger("numsort.ordering"))

    app.add_exception_handler(OperationError, handle_operation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(api_router, prefix=API_PREFIX)
    app.include_router(health_router)

    return app


# Intentionally do not instantiate the app at import time to prevent side effects.
