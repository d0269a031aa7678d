"""
Auth service application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_middleware
from api.routes import router as api_router
from auth.guard import AuthGuard
from auth.routes import router as auth_router
from auth.tokens import TokenIssuer
from config.settings import Settings, config
from database.session import create_tables, engine

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "asyncio"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI app.

    Raises ``ConfigurationError`` if ``JWT_SECRET`` is missing; the process
    should not start without it.
    """
    settings = settings or config
    auth_config = settings.auth_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.create_tables:
            await create_tables()
        logger.info("Application ready to accept requests.")
        yield
        await engine.dispose()

    app = FastAPI(
        title="Auth Service",
        version="1.0.0",
        description="Password registration, login and bearer-token auth.",
        lifespan=lifespan,
    )

    # Issuer and guard must share one secret, so both come from one AuthConfig.
    app.state.token_issuer = TokenIssuer(auth_config)
    app.state.auth_guard = AuthGuard(auth_config)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    register_middleware(app)

    # Routes
    app.include_router(auth_router, prefix="/api/v1/auth")
    app.include_router(api_router, prefix="/api/v1")

    return app


if __name__ == "__main__":
    uvicorn.run(
        create_app(),
        host=config.host,
        port=config.port,
        log_level="debug" if config.debug else "info",
    )
