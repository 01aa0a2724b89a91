"""
quote_engine.py — Intelligent quote pipeline.

Analyzer -> Topology -> Sizing + Job complexity -> Pricing -> Explanations.

build_quote() is the pure pipeline over (profile, catalog snapshot); the async
entry point calculate_intelligent_quote() fetches the snapshot, applies the
catalog failure policy and records metrics.

Failure policy:
  - some lookups failed  -> priced with per-item defaults, catalog_status "partial"
  - every lookup failed  -> fallback quote on default boilers / labour, multiplier
                            1.0, catalog_status "unavailable"; strict=True raises
"""
import logging
import time
import uuid
from typing import Optional, Tuple

from boilerquote.models.catalog_schema import CatalogSnapshot, empty_snapshot
from boilerquote.models.quote_schema import AnalysisSummary, PropertyProfile, QuoteResult
from boilerquote.services import (
    explanation_engine,
    job_complexity,
    pricing_engine,
    property_analyzer,
    sizing_engine,
    topology_selector,
)
from boilerquote.services.catalog_service import (
    CATALOG_SOURCES,
    CatalogService,
    CatalogUnavailableError,
    fetch_catalog_snapshot,
)
from boilerquote.services.perf_monitor import metrics, stage_timer

logger = logging.getLogger("boilerquote-engine")


def build_quote(
    profile: PropertyProfile,
    snapshot: CatalogSnapshot,
    request_id: str = "",
    catalog_status: Optional[str] = None,
    dhw_tolerance: Optional[Tuple[int, int]] = None,
) -> QuoteResult:
    """Run the full pipeline against an already-fetched catalog snapshot."""
    with stage_timer("analyze"):
        requirement = property_analyzer.analyze(profile, request_id)
    with stage_timer("topology"):
        topology = topology_selector.select_topology(profile, request_id)
    with stage_timer("sizing"):
        sizing = sizing_engine.size(profile, topology, requirement, request_id)
    with stage_timer("complexity"):
        complexity = job_complexity.classify(profile.boiler_class, topology, request_id)
    with stage_timer("pricing"):
        quotes, breakdown = pricing_engine.compose(
            topology,
            sizing.boiler_output_kw,
            sizing.cylinder_capacity_l,
            complexity,
            snapshot,
            profile,
            dhw_tolerance=dhw_tolerance,
            request_id=request_id,
        )
    with stage_timer("explanation"):
        recommendations = explanation_engine.generate(profile, topology, sizing, requirement, complexity)

    analysis = AnalysisSummary(
        recommended_boiler_size=sizing.boiler_output_kw,
        recommended_boiler_type=topology,
        cylinder_capacity=sizing.cylinder_capacity_l,
        heat_load_calculation=requirement.heat_load_kw,
        hot_water_demand=requirement.hot_water_demand_kw,
        simultaneous_usage_score=requirement.simultaneous_usage_score,
        property_complexity=complexity.complexity,
        job_type=complexity.job_type,
        installation_multiplier=complexity.multiplier,
        sizing_source=sizing.source,
        matched_scenario_id=sizing.scenario_id,
    )
    status = catalog_status or snapshot.status
    return QuoteResult(
        quotes=quotes,
        analysis=analysis,
        price_breakdown=breakdown,
        recommendations=recommendations,
        catalog_status=status,
        degraded=status != "ok",
    )


def build_fallback_quote(profile: PropertyProfile, request_id: str = "") -> QuoteResult:
    """Quote priced entirely on built-in defaults, for when no catalog is readable."""
    return build_quote(
        profile,
        empty_snapshot(list(CATALOG_SOURCES)),
        request_id=request_id,
        catalog_status="unavailable",
    )


async def calculate_intelligent_quote(
    profile: PropertyProfile,
    catalog: CatalogService,
    request_id: Optional[str] = None,
    strict: bool = False,
    dhw_tolerance: Optional[Tuple[int, int]] = None,
) -> QuoteResult:
    """
    Produce a three-tier quote for ``profile``.

    Only raises CatalogUnavailableError, and only when ``strict`` is set and
    no catalog lookup succeeded.
    """
    request_id = request_id or str(uuid.uuid4())
    start = time.perf_counter()

    try:
        snapshot = await fetch_catalog_snapshot(catalog, request_id)
    except CatalogUnavailableError as exc:
        if strict:
            raise
        logger.error(
            "catalog unavailable, using fallback quote: %s",
            exc,
            extra={"request_id": request_id, "catalog_status": "unavailable",
                   "failed_sources": list(CATALOG_SOURCES)},
        )
        result = build_fallback_quote(profile, request_id)
    else:
        metrics.record_stage_duration("catalog", round((time.perf_counter() - start) * 1000, 2))
        if snapshot.failed_sources:
            logger.warning(
                "catalog partially unavailable; defaults used for %s",
                ", ".join(snapshot.failed_sources),
                extra={"request_id": request_id, "catalog_status": "partial",
                       "failed_sources": list(snapshot.failed_sources)},
            )
        result = build_quote(profile, snapshot, request_id, dhw_tolerance=dhw_tolerance)

    duration_ms = round((time.perf_counter() - start) * 1000, 2)
    analysis = result.analysis
    metrics.record_quote(analysis.recommended_boiler_type.value, duration_ms, result.catalog_status)
    logger.info(
        "quote calculated",
        extra={
            "request_id": request_id,
            "duration_ms": duration_ms,
            "topology": analysis.recommended_boiler_type.value,
            "boiler_kw": analysis.recommended_boiler_size,
            "cylinder_l": analysis.cylinder_capacity,
            "total_price": result.price_breakdown.total_price,
            "catalog_status": result.catalog_status,
        },
    )
    return result
