"""WalletReg API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map RegistryError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan
    - Request-id middleware wraps every route, so every response carries x-request-id

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers (api/error_handlers.py) — never leaks internal details
    - GET / redirects to the liveness probe (301)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from walletreg.api.error_handlers import register_error_handlers
from walletreg.infrastructure.database import init_db, close_db
from walletreg.infrastructure.observability import (
    REQUEST_ID_HEADER, RequestIdMiddleware, setup_logging,
)
from walletreg.config import get_settings
from walletreg.api.routes import health, register

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(f"WalletReg API started on {settings.bind_address}")
    yield
    await close_db()
    logger.info("WalletReg API shutting down")


settings = get_settings()

app = FastAPI(
    title="WalletReg API",
    version=settings.service_version,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "health", "description": "Health check endpoints"},
        {"name": "auth", "description": "Authentication & registration endpoints"},
    ],
)

# CORS — configured from settings, not hardcoded
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=settings.cors_methods,
    allow_headers=settings.cors_headers,
    expose_headers=[REQUEST_ID_HEADER],
)
# Added last so it runs outermost: ids exist before CORS and routing
app.add_middleware(RequestIdMiddleware)

register_error_handlers(app)

# Routes — explicit registration (ExMA: no convention-over-config)
app.include_router(health.router)
app.include_router(register.router)


@app.get("/", include_in_schema=False)
async def root_redirect():
    return RedirectResponse(
        url="/api/v1/health/", status_code=status.HTTP_301_MOVED_PERMANENTLY,
    )
