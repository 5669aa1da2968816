from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from k2auth.app import App
from k2auth.config import Config
from k2auth.errors import UserError
from k2auth.web.error_handlers import general_exception_handler, user_error_handler
from k2auth.web.routers import device_router, sessions_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="K2 Session Auth API",
        summary="Device session tokens for K2 SmartObject clients",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.app = app_instance
    app.state.config = config

    # K2 SmartObject calls from arbitrary origins
    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health_check() -> dict[str, str | int]:
        return {"status": "healthy", "active_sessions": app_instance.count_active_sessions()}

    app.include_router(sessions_router)
    app.include_router(device_router)

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    return app
