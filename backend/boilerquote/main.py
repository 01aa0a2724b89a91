"""
Boiler Quote API
FastAPI backend for the intelligent boiler installation quote engine, with an
optional async PostgreSQL pricing catalog and quote store.
"""
import time
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv

# .env must be loaded before config and the DB layer read the environment
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from boilerquote import config
from boilerquote.db import AsyncSessionLocal, database_configured, init_db
from boilerquote.services.catalog_service import SqlCatalogService, StaticCatalogService
from boilerquote.services.logging_config import setup_logging
from boilerquote.services.middleware import RequestTimingMiddleware
from boilerquote.services.perf_monitor import metrics as quote_metrics

setup_logging(level=config.LOG_LEVEL, json_output=config.LOG_JSON)
logger = logging.getLogger("boilerquote-api")

_PROCESS_START = time.monotonic()

if not database_configured():
    logger.warning("MISSING env var: DATABASE_URL — serving the built-in catalog (dev mode)")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if database_configured():
        await init_db()
        app.state.catalog = SqlCatalogService(AsyncSessionLocal)
        logger.info("Pricing catalog: database")
    else:
        app.state.catalog = StaticCatalogService()
        logger.info("Pricing catalog: built-in seed data")
    yield


app = FastAPI(
    title="Boiler Quote API",
    version="1.0.0",
    description="Rule-based boiler sizing and three-tier installation quotes",
    lifespan=lifespan,
)
# Usable before lifespan runs (e.g. TestClient without a context manager)
app.state.catalog = StaticCatalogService()


# ---------------------------------------------------------------------------
# Security Headers Middleware
# ---------------------------------------------------------------------------
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds standard security headers to every response."""
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "X-Requested-With", "X-Request-ID"],
    expose_headers=["X-Request-ID", "X-Process-Time", "X-Catalog-Status"],
)
app.add_middleware(SecurityHeadersMiddleware)
# Request timing + X-Request-ID must be outermost so it wraps all other middleware
app.add_middleware(RequestTimingMiddleware)

# Routers
from boilerquote.api.catalog_routes import router as catalog_router  # noqa: E402
from boilerquote.api.quote_routes import router as quote_router  # noqa: E402

app.include_router(quote_router)
app.include_router(catalog_router)


@app.get("/health")
async def health_check():
    return {
        "status": "active",
        "version": app.version,
        "catalog": type(app.state.catalog).__name__,
        "db_configured": database_configured(),
    }


@app.get("/metrics")
async def metrics():
    """
    Quote throughput, degradation count, topology mix and stage timings,
    sourced from the in-process QuoteMetrics singleton.
    """
    snapshot = quote_metrics.get_metrics()
    return {
        "uptime_seconds": round(time.monotonic() - _PROCESS_START, 1),
        **snapshot,
    }
