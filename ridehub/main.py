"""
Main application entry point for the RideHub identity API.

This module builds the FastAPI application: it wires the store, the token
configuration, the routers and the error translation layer.

Usage:
    - Direct: python -m ridehub.main
    - ASGI server: uvicorn ridehub.main:app
"""

import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ridehub.api import register_exception_handlers
from ridehub.bootstrap import ensure_admin
from ridehub.common.auth.jwt import JWTConfig, set_jwt_config
from ridehub.common.auth.password import set_hash_iterations
from ridehub.common.logger import app_logger, configure_logger
from ridehub.config import Settings, settings as default_settings
from ridehub.middleware import RequestLoggingMiddleware
from ridehub.routes.admin import router as admin_router
from ridehub.routes.auth import router as auth_router
from ridehub.routes.profile import router as profile_router
from ridehub.store.base import UserStore
from ridehub.store.memory import InMemoryStore
from ridehub.store.sql import SQLStore

# Setup module logger
logger = app_logger.getChild("main")


def build_store(settings: Settings) -> UserStore:
    """Create the store backend selected by ``STORE_BACKEND``."""
    backend = settings.STORE_BACKEND.lower()
    if backend == "memory":
        return InMemoryStore()
    if backend == "sql":
        store = SQLStore(settings.DATABASE_URL, echo=settings.SQL_ECHO)
        store.create_schema()
        return store
    raise ValueError(f"Unknown STORE_BACKEND: {settings.STORE_BACKEND!r}")


def create_app(settings: Optional[Settings] = None, store: Optional[UserStore] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        settings: Settings to use (defaults to the environment's settings)
        store: Store instance to serve from (defaults to one built from settings)

    Returns:
        The configured application
    """
    settings = settings or default_settings

    configure_logger(
        level=settings.LOG_LEVEL,
        use_json=settings.LOG_JSON,
        log_file=settings.LOG_FILE,
    )
    set_jwt_config(JWTConfig(
        secret_key=settings.JWT_SECRET_KEY,
        refresh_secret_key=settings.JWT_REFRESH_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        access_token_expires=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        refresh_token_expires=settings.REFRESH_TOKEN_EXPIRE_DAYS,
        token_issuer=settings.JWT_ISSUER,
    ))
    set_hash_iterations(settings.PASSWORD_HASH_ITERATIONS)

    if store is None:
        store = build_store(settings)
    ensure_admin(store, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application startup complete")
        yield
        app.state.store.close()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Authentication, profile and admin API for riders and drivers",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(profile_router, prefix="/api/profile", tags=["profile"])
    app.include_router(admin_router, prefix="/api/admin", tags=["admin"])

    @app.get("/health", tags=["health"])
    async def health():
        """Liveness probe."""
        return {"status": "ok"}

    logger.info(f"Application initialized with {len(app.routes)} routes ({type(store).__name__})")
    return app


app = create_app()

# Entry point for running the application directly
if __name__ == "__main__":
    import uvicorn

    reload_enabled = os.environ.get("RELOAD", "false").lower() == "true"

    logger.info(f"Starting server on {default_settings.HOST}:{default_settings.PORT} (reload: {reload_enabled})")

    uvicorn.run(
        "ridehub.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=reload_enabled,
        log_level="info"
    )
