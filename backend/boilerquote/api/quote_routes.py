"""
Quote API routes

POST /api/calculate-intelligent-quote — three-tier quote for a property profile
POST /api/quotes                      — persist an accepted quote
GET  /api/quotes/{quote_id}           — fetch a saved quote

Each route leaves the quote's catalog status on request.state; the timing
middleware echoes it as X-Catalog-Status.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from boilerquote import config
from boilerquote.api.deps import get_catalog, get_request_id, require_database
from boilerquote.db import get_db
from boilerquote.models.orm_models import SavedQuote
from boilerquote.models.quote_schema import PropertyProfile, QuoteResult
from boilerquote.services.catalog_service import CatalogService, CatalogUnavailableError
from boilerquote.services.quote_engine import calculate_intelligent_quote

router = APIRouter(prefix="/api", tags=["Quotes"])
logger = logging.getLogger("boilerquote-quote-routes")


# ── Pydantic Models ─────────────────────────────────────────────────────────

class SaveQuoteRequest(BaseModel):
    profile: PropertyProfile
    selected_tier: str = Field("Standard", description="Standard | Premium | Luxury")
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None


class SavedQuoteResponse(BaseModel):
    id: str
    fingerprint: str
    selected_tier: str
    total_price: int
    catalog_status: str
    result: QuoteResult


def _to_response(row: SavedQuote) -> SavedQuoteResponse:
    return SavedQuoteResponse(
        id=row.id,
        fingerprint=row.fingerprint,
        selected_tier=row.selected_tier,
        total_price=row.total_price,
        catalog_status=row.catalog_status,
        result=QuoteResult.model_validate(row.result_json),
    )


async def _quote_or_503(
    request: Request, profile: PropertyProfile, catalog: CatalogService, request_id: str, strict: bool
) -> QuoteResult:
    """Price the profile and leave its catalog status on the request for the response header."""
    try:
        result = await calculate_intelligent_quote(profile, catalog, request_id=request_id, strict=strict)
    except CatalogUnavailableError as exc:
        request.state.catalog_status = "unavailable"
        logger.error("strict quote refused: %s", exc, extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Pricing catalog unavailable")
    request.state.catalog_status = result.catalog_status
    return result


# ── Routes ───────────────────────────────────────────────────────────────────

@router.post("/calculate-intelligent-quote", response_model=QuoteResult)
async def calculate_quote(
    request: Request,
    profile: PropertyProfile,
    strict: bool = Query(False, description="Fail with 503 instead of quoting on fallback prices"),
    catalog: CatalogService = Depends(get_catalog),
    request_id: str = Depends(get_request_id),
):
    return await _quote_or_503(request, profile, catalog, request_id, strict)


@router.post("/quotes", response_model=SavedQuoteResponse, status_code=201,
             dependencies=[Depends(require_database)])
async def save_quote(
    request: Request,
    body: SaveQuoteRequest,
    catalog: CatalogService = Depends(get_catalog),
    request_id: str = Depends(get_request_id),
    db: AsyncSession = Depends(get_db),
):
    if body.selected_tier not in config.QUOTE_TIERS:
        raise HTTPException(status_code=422, detail=f"Unknown tier: {body.selected_tier}")

    # Priced server-side; client totals are never trusted
    result = await _quote_or_503(request, body.profile, catalog, request_id, strict=True)
    chosen = next(q for q in result.quotes if q.tier == body.selected_tier)

    row = SavedQuote(
        fingerprint=body.profile.fingerprint(),
        postcode=body.profile.postcode or None,
        selected_tier=body.selected_tier,
        total_price=chosen.base_price,
        catalog_status=result.catalog_status,
        profile_json=body.profile.model_dump(mode="json"),
        result_json=result.model_dump(mode="json"),
        customer_name=body.customer_name,
        customer_email=body.customer_email,
        customer_phone=body.customer_phone,
    )
    db.add(row)
    await db.flush()
    logger.info("quote saved", extra={"request_id": request_id, "total_price": chosen.base_price})
    return _to_response(row)


@router.get("/quotes/{quote_id}", response_model=SavedQuoteResponse,
            dependencies=[Depends(require_database)])
async def get_saved_quote(request: Request, quote_id: str, db: AsyncSession = Depends(get_db)):
    row = await db.get(SavedQuote, quote_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Quote not found")
    request.state.catalog_status = row.catalog_status
    return _to_response(row)
