"""FastAPI dependency injection — catalog and request context."""
from fastapi import HTTPException, Request, status

from boilerquote.db import database_configured
from boilerquote.services.catalog_service import CatalogService


def get_catalog(request: Request) -> CatalogService:
    return request.app.state.catalog


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "")


def require_database() -> None:
    if not database_configured():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Quote storage is not configured",
        )
