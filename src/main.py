"""FastAPI application initialization."""

import os
from contextlib import asynccontextmanager

import logfire
import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api import dramas, health, index
from src.config import get_settings
from src.constants import APP_NAME, APP_VERSION
from src.logging_config import setup_logfire
from src.middleware.correlation_id import CorrelationIDMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: observability setup on startup."""
    settings = get_settings()

    setup_logfire(app)

    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            traces_sample_rate=settings.sentry_traces_sample_rate,
            environment=settings.env,
            integrations=[FastApiIntegration()],
        )

    logfire.info(
        "Application startup complete",
        environment=settings.env,
        scraper_timeout_seconds=settings.scraper_timeout_seconds,
    )

    yield

    logfire.info("Application shutdown complete")


# Create FastAPI app
app = FastAPI(
    title=APP_NAME,
    description="Search and browse K-dramas scraped from DramaCool and KissAsian",
    version=APP_VERSION,
    lifespan=lifespan,
)

# Correlation ID middleware (added first so CORS wraps it)
app.add_middleware(
    CorrelationIDMiddleware, header_name=get_settings().correlation_id_header
)

# Permissive CORS: the API is public and read-only
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.middleware("http")
async def allow_any_origin(request: Request, call_next):
    """CORSMiddleware only answers requests that send Origin; tag the rest too."""
    response = await call_next(request)
    response.headers.setdefault("Access-Control-Allow-Origin", "*")
    return response


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Return 405s in the API's error envelope; defer everything else."""
    if exc.status_code != 405:
        return await http_exception_handler(request, exc)
    return JSONResponse(
        status_code=405,
        content={"success": False, "error": "Method not allowed. Use GET."},
        headers=exc.headers,
    )


# Register routers
app.include_router(health.router, tags=["health"])
app.include_router(index.router, prefix="/api", tags=["index"])
app.include_router(dramas.router, prefix="/api", tags=["dramas"])


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": APP_NAME,
        "version": APP_VERSION,
        "documentation": "/api/",
    }


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    uvicorn.run(
        "src.main:app", host="0.0.0.0", port=port, reload=os.getenv("ENV") == "local"
    )
