"""
catalog_service.py — Read-only pricing catalog collaborator.

CatalogService defines the six async lookups the quote engine consumes.
StaticCatalogService serves an in-memory catalog (seed data by default);
SqlCatalogService reads the catalog tables through async SQLAlchemy sessions.

fetch_catalog_snapshot() runs the four list lookups concurrently and joins
them into one immutable CatalogSnapshot for a single quote.
"""
import asyncio
import logging
from typing import Any, Callable, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from boilerquote.models.catalog_schema import (
    BoilerOffering,
    CatalogSnapshot,
    LabourCost,
    LocationMultiplier,
    SundryCost,
    best_location_match,
    find_labour_cost,
)
from boilerquote.models.orm_models import BoilerRow, LabourCostRow, LocationRow, SundryRow

logger = logging.getLogger("boilerquote-catalog")

CATALOG_SOURCES = ("boilers", "labour_costs", "sundries", "locations")


class CatalogUnavailableError(RuntimeError):
    """Every catalog lookup failed; no part of the catalog could be read."""

    def __init__(self, errors: Optional[List[BaseException]] = None):
        self.errors = errors or []
        detail = "; ".join(f"{type(e).__name__}: {e}" for e in self.errors)
        super().__init__(f"pricing catalog unavailable ({detail})" if detail else "pricing catalog unavailable")


class CatalogService:
    """Read-only lookup interface. Implementations never write."""

    async def get_boilers(self) -> List[BoilerOffering]:
        raise NotImplementedError

    async def get_labour_costs(self) -> List[LabourCost]:
        raise NotImplementedError

    async def get_sundries(self) -> List[SundryCost]:
        raise NotImplementedError

    async def get_locations(self) -> List[LocationMultiplier]:
        raise NotImplementedError

    async def get_location_by_postcode(self, postcode: str) -> Optional[LocationMultiplier]:
        return best_location_match(await self.get_locations(), postcode)

    async def get_labour_cost_by_type(self, job_type: str, tier: str) -> Optional[LabourCost]:
        return find_labour_cost(await self.get_labour_costs(), job_type, tier)


class StaticCatalogService(CatalogService):
    """In-memory catalog. Defaults to the seed data."""

    def __init__(
        self,
        boilers: Optional[Iterable[BoilerOffering]] = None,
        labour_costs: Optional[Iterable[LabourCost]] = None,
        sundries: Optional[Iterable[SundryCost]] = None,
        locations: Optional[Iterable[LocationMultiplier]] = None,
    ):
        from boilerquote.db import seed_catalog

        self._boilers = list(seed_catalog.BOILERS if boilers is None else boilers)
        self._labour_costs = list(seed_catalog.LABOUR_COSTS if labour_costs is None else labour_costs)
        self._sundries = list(seed_catalog.SUNDRIES if sundries is None else sundries)
        self._locations = list(seed_catalog.LOCATIONS if locations is None else locations)

    async def get_boilers(self) -> List[BoilerOffering]:
        return list(self._boilers)

    async def get_labour_costs(self) -> List[LabourCost]:
        return list(self._labour_costs)

    async def get_sundries(self) -> List[SundryCost]:
        return list(self._sundries)

    async def get_locations(self) -> List[LocationMultiplier]:
        return list(self._locations)


class SqlCatalogService(CatalogService):
    """
    Catalog backed by the database tables.
    Each lookup opens its own session so the four fetches can run concurrently.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self._session_factory = session_factory

    async def _rows(self, stmt) -> List[Any]:
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def get_boilers(self) -> List[BoilerOffering]:
        rows = await self._rows(
            select(BoilerRow).where(BoilerRow.is_active.is_(True)).order_by(BoilerRow.id)
        )
        return [
            BoilerOffering(
                make=r.make,
                model=r.model,
                boiler_type=r.boiler_type,
                tier=r.tier,
                dhw_kw=float(r.dhw_kw),
                supply_price=r.supply_price,
                warranty_years=r.warranty_years,
                flow_rate_lpm=float(r.flow_rate_lpm) if r.flow_rate_lpm is not None else None,
                efficiency_rating=r.efficiency_rating,
            )
            for r in rows
        ]

    async def get_labour_costs(self) -> List[LabourCost]:
        rows = await self._rows(select(LabourCostRow).order_by(LabourCostRow.id))
        return [LabourCost(job_type=r.job_type, tier=r.tier, price=r.price) for r in rows]

    async def get_sundries(self) -> List[SundryCost]:
        rows = await self._rows(select(SundryRow).order_by(SundryRow.id))
        return [SundryCost(name=r.name, description=r.description or "", price=r.price) for r in rows]

    async def get_locations(self) -> List[LocationMultiplier]:
        rows = await self._rows(select(LocationRow).order_by(LocationRow.id))
        return [
            LocationMultiplier(
                postcode_pattern=r.postcode_pattern,
                area_name=r.area_name or "",
                price_multiplier=float(r.price_multiplier),
            )
            for r in rows
        ]


async def fetch_catalog_snapshot(service: CatalogService, request_id: str = "") -> CatalogSnapshot:
    """
    Fetch boilers, labour costs, sundries and locations concurrently.

    A failed lookup becomes an empty collection and is named in
    ``failed_sources``. Raises CatalogUnavailableError when all four fail.
    """
    results = await asyncio.gather(
        service.get_boilers(),
        service.get_labour_costs(),
        service.get_sundries(),
        service.get_locations(),
        return_exceptions=True,
    )

    collections = {}
    failed: List[str] = []
    errors: List[BaseException] = []
    for source, result in zip(CATALOG_SOURCES, results):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            failed.append(source)
            errors.append(result)
            collections[source] = ()
            logger.warning(
                "catalog lookup %s failed: %s",
                source,
                result,
                extra={"request_id": request_id, "stage": "catalog"},
            )
        else:
            collections[source] = tuple(result)

    if len(failed) == len(CATALOG_SOURCES):
        raise CatalogUnavailableError(errors)

    snapshot = CatalogSnapshot(failed_sources=tuple(failed), **collections)
    logger.debug(
        "catalog snapshot: %d boilers, %d labour rows, %d locations",
        len(snapshot.boilers),
        len(snapshot.labour_costs),
        len(snapshot.locations),
        extra={"request_id": request_id, "stage": "catalog", "catalog_status": snapshot.status},
    )
    return snapshot
