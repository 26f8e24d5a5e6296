#!/usr/bin/env python3
"""
Gatehouse - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Connects storage and builds the session module
3. Runs the HTTP API

All session logic is in the modules, following black box principles.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from gatehouse import __version__
from gatehouse.config.provider import ConfigProvider, get_config_provider
from gatehouse.logging_config import configure_logging, get_logging_config
from gatehouse.modules.api import CreateSessionRequest, ErrorResponse, SessionResponse
from gatehouse.modules.session import (
    SessionDecodingError,
    SessionEncodingError,
    SessionError,
    SessionExpiredError,
    SessionModule,
    SessionNotFoundError,
    SessionStoreError,
)
from gatehouse.modules.storage import KeyValueStore, StorageModule

logger = logging.getLogger(__name__)

# Kind of failure -> HTTP status; checked in order
ERROR_STATUS = (
    (SessionNotFoundError, 401),
    (SessionExpiredError, 401),
    (SessionEncodingError, 500),
    (SessionDecodingError, 500),
    (SessionStoreError, 503),
)


def status_for_error(exc: SessionError) -> int:
    for error_cls, status in ERROR_STATUS:
        if isinstance(exc, error_cls):
            return status
    return 500


def create_app(
    config_provider: Optional[ConfigProvider] = None,
    store: Optional[KeyValueStore] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config_provider: Configuration source (environment or YAML by default)
        store: Pre-built key-value store; when omitted Redis is connected at startup
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Gatehouse session API...")

        provider = config_provider or get_config_provider()
        storage: Optional[StorageModule] = None

        session_store = store
        if session_store is None:
            storage = StorageModule(provider.get_redis_config())
            session_store = await storage.connect()

        app.state.store = session_store
        app.state.session_module = SessionModule(
            session_store,
            provider.get_session_config(),
            logger=logging.getLogger("gatehouse.sessions"),
        )
        logger.info("Gatehouse session API started successfully")

        yield

        logger.info("Shutting down Gatehouse session API...")
        app.state.session_module = None
        if storage:
            await storage.disconnect()
        logger.info("Gatehouse session API shutdown complete")

    app = FastAPI(
        title="Gatehouse API",
        description="Gatehouse - authentication session service",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.session_module = None

    def get_session_module(request: Request) -> SessionModule:
        session_module = request.app.state.session_module
        if not session_module:
            raise HTTPException(503, "Service not initialized")
        return session_module

    @app.post("/sessions", response_model=SessionResponse, status_code=201)
    async def create_session(body: CreateSessionRequest, request: Request):
        """
        Create a new session for a user.

        Returns:
            201: Session created
            503: Store unavailable
        """
        session_module = get_session_module(request)
        session = await session_module.start_session(body.user_id)
        return SessionResponse.from_session(session)

    @app.get("/sessions/{session_id}", response_model=SessionResponse)
    async def check_session(session_id: str, request: Request):
        """
        Validate a session.

        Returns:
            200: Session is live
            401: Session not found or expired
        """
        session_module = get_session_module(request)
        session = await session_module.check_session(session_id)
        return SessionResponse.from_session(session)

    @app.post("/sessions/{session_id}/extend", response_model=SessionResponse)
    async def extend_session(session_id: str, request: Request):
        """
        Extend a session by the base duration from now.

        Returns:
            200: Session extended
            401: Session not found or expired
        """
        session_module = get_session_module(request)
        await session_module.extend_session(session_id)
        session = await session_module.check_session(session_id)
        return SessionResponse.from_session(session)

    @app.get("/healthz")
    async def healthz():
        """Minimal liveness probe."""
        return {"status": "ok"}

    @app.get("/health")
    async def health_check(request: Request):
        """
        Readiness check including the store.

        Returns:
            200: Service healthy
            503: Store unreachable or module not initialized
        """
        session_module = request.app.state.session_module
        store_ok = bool(session_module) and await request.app.state.store.ping()
        if store_ok:
            return {"status": "healthy", "store": "connected", "version": __version__}
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "store": "disconnected" if session_module else "not initialized"},
        )

    @app.exception_handler(SessionError)
    async def session_error_handler(request: Request, exc: SessionError):
        """Map session failures to HTTP responses."""
        status = status_for_error(exc)
        if status >= 500:
            logger.error(f"Session request failed: {exc}")
        body = ErrorResponse(error=exc.message, session_id=exc.session_id)
        return JSONResponse(status_code=status, content=body.model_dump())

    return app


app = create_app()


def main():
    provider = get_config_provider()
    api_config = provider.get_api_config()
    configure_logging(api_config.log_level)

    uvicorn.run(
        "gatehouse.main:app",
        host=api_config.host,
        port=api_config.port,
        log_level=api_config.log_level.lower(),
        reload=api_config.debug,
        log_config=get_logging_config(api_config.log_level),
    )


if __name__ == "__main__":
    main()
