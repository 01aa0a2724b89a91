"""Catalog API routes — read-only listings of the pricing catalog."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from boilerquote.api.deps import get_catalog
from boilerquote.models.catalog_schema import (
    BoilerOffering,
    LabourCost,
    LocationMultiplier,
    SundryCost,
)
from boilerquote.services.catalog_service import CatalogService

router = APIRouter(prefix="/api", tags=["Catalog"])
logger = logging.getLogger("boilerquote-catalog-routes")


@router.get("/boilers", response_model=List[BoilerOffering])
async def list_boilers(
    boiler_type: Optional[str] = Query(None, description="Combi | System | Regular"),
    tier: Optional[str] = Query(None, description="Budget | Mid-Range | Premium"),
    catalog: CatalogService = Depends(get_catalog),
):
    boilers = await catalog.get_boilers()
    if boiler_type:
        boilers = [b for b in boilers if b.boiler_type.lower() == boiler_type.lower()]
    if tier:
        boilers = [b for b in boilers if b.tier.lower() == tier.lower()]
    return boilers


@router.get("/labour-costs", response_model=List[LabourCost])
async def list_labour_costs(catalog: CatalogService = Depends(get_catalog)):
    return await catalog.get_labour_costs()


@router.get("/labour-costs/lookup", response_model=LabourCost)
async def labour_cost_for_job(
    job_type: str = Query(..., description="Job type label"),
    tier: str = Query("Standard", description="Standard | Premium"),
    catalog: CatalogService = Depends(get_catalog),
):
    row = await catalog.get_labour_cost_by_type(job_type, tier)
    if row is None:
        raise HTTPException(status_code=404, detail=f"No {tier} labour cost for {job_type}")
    return row


@router.get("/sundries", response_model=List[SundryCost])
async def list_sundries(catalog: CatalogService = Depends(get_catalog)):
    return await catalog.get_sundries()


@router.get("/locations", response_model=List[LocationMultiplier])
async def list_locations(catalog: CatalogService = Depends(get_catalog)):
    return await catalog.get_locations()


@router.get("/locations/{postcode}", response_model=LocationMultiplier)
async def location_for_postcode(postcode: str, catalog: CatalogService = Depends(get_catalog)):
    location = await catalog.get_location_by_postcode(postcode)
    if location is None:
        raise HTTPException(status_code=404, detail=f"No location multiplier for {postcode}")
    return location
