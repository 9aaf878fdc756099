"""SearchBrief FastAPI application entry point."""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from searchbrief.config import settings
from searchbrief.logging_config import setup_logging

from searchbrief.api.search import router as search_router
from searchbrief.api.summarize import router as summarize_router
from searchbrief.api.settings import classify_api_key, router as settings_router
from searchbrief.observability.metrics import metrics

logger = logging.getLogger("searchbrief")

VERSION = "0.1.0"

# Rate limiter
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])


def _startup_checks() -> None:
    """Log warnings for misconfigured or missing settings."""
    key_status = classify_api_key(settings)
    if key_status.status == "valid":
        logger.info("✓ Tavily API key configured")
    else:
        logger.warning(f"⚠  Tavily API key: {key_status.message} (/api/search will fail)")

    if settings.is_production and not settings.cors_origins_list:
        logger.warning("⚠  APP_ENV=production but CORS_ORIGINS is empty")

    logger.info(
        f"○ Summaries use the first {settings.summary_max_documents} results, "
        f"capped at {settings.summary_max_length} chars ({settings.summary_timezone})"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    setup_logging(settings.log_level)
    _startup_checks()
    logger.info("✦ SearchBrief API started")

    yield

    logger.info("✦ SearchBrief API shutting down")


app = FastAPI(
    title="SearchBrief",
    description="Web search with extractive result summaries",
    version=VERSION,
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request tracing + access log middleware
@app.middleware("http")
async def request_context(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = request_id
    start = time.perf_counter()

    response: Response = await call_next(request)

    duration_ms = round((time.perf_counter() - start) * 1000, 2)
    response.headers["X-Request-ID"] = request_id
    metrics.observe_request(request.url.path, response.status_code, duration_ms)
    logger.info(
        "request completed",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response


# Security headers middleware
@app.middleware("http")
async def security_headers(request: Request, call_next):
    response: Response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    if settings.is_production:
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


# Routers
app.include_router(search_router)
app.include_router(summarize_router)
app.include_router(settings_router)


@app.get("/")
async def root():
    return JSONResponse(
        {
            "service": "searchbrief-api",
            "status": "ok",
            "endpoints": {
                "search": "/api/search",
                "summarize": "/api/summarize",
                "health": "/api/health",
                "docs": "/docs",
            },
        }
    )


@app.get("/api/health")
async def health_check():
    key_status = classify_api_key(settings)
    return {
        "status": "healthy" if key_status.status == "valid" else "degraded",
        "service": "searchbrief",
        "version": VERSION,
        "search_provider_configured": key_status.status == "valid",
    }


@app.get("/api/health/live")
async def liveness_check():
    return {"status": "alive", "service": "searchbrief"}


@app.get("/api/metrics")
async def get_metrics():
    return {
        "service": "searchbrief",
        "version": VERSION,
        "metrics": metrics.snapshot(),
    }


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("searchbrief.main:app", host=settings.host, port=settings.port)
