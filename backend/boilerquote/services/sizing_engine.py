"""
sizing_engine.py — Boiler output (kW) and cylinder capacity (L).

Resolution is a prioritised chain; each resolver either returns a complete
SizingResult or declines with None:
  1. conversion table  (exact counts + current boiler class)
  2. UK scenario table (closest same-topology installation)
  3. formula           (baseline table widened by heat load; never declines)

Whatever the source, the output is rounded UP onto the standard catalog sizes.
Combi results always carry a zero cylinder. System/Regular output never drops
when a bathroom is added.
"""
import logging
from dataclasses import replace
from typing import Callable, Optional, Sequence, Tuple

from boilerquote import config
from boilerquote.models.quote_schema import (
    BoilerTopology,
    HeatingRequirement,
    PropertyProfile,
    SizingResult,
)
from boilerquote.services import heating_scenarios as scenarios
from boilerquote.services.property_analyzer import calculate_heat_load

logger = logging.getLogger("boilerquote-sizing")

Resolver = Callable[[PropertyProfile, BoilerTopology, HeatingRequirement], Optional[SizingResult]]

# Beyond this many bathrooms no reference row is within matching distance, so
# sizing is formula-only and non-decreasing in bathrooms.
TABLE_BATHROOM_LIMIT: int = (
    max(s.bathrooms for s in scenarios.UK_HEATING_SCENARIOS + scenarios.CONVERSION_SCENARIOS)
    + config.SCENARIO_MAX_DISTANCE
)


# ---------------------------------------------------------------------------
# Catalog rounding
# ---------------------------------------------------------------------------

def _round_up(value: float, sizes: Sequence[int]) -> int:
    for size in sizes:
        if size >= value:
            return size
    return sizes[-1]


def round_up_boiler_size(kw: float) -> int:
    """Smallest standard boiler output >= kw; anything above 50 clamps to 50."""
    return _round_up(kw, config.BOILER_SIZES_KW)


def round_up_cylinder(litres: float) -> int:
    """Smallest standard cylinder >= litres; anything above 400 lands on 500."""
    return _round_up(litres, config.CYLINDER_SIZES_L)


def _finalise(
    topology: BoilerTopology, kw: float, litres: float, source: str, scenario_id: Optional[str] = None
) -> SizingResult:
    cylinder = round_up_cylinder(litres) if topology.needs_cylinder else 0
    return SizingResult(
        boiler_output_kw=round_up_boiler_size(kw),
        cylinder_capacity_l=cylinder,
        source=source,
        scenario_id=scenario_id,
    )


# ---------------------------------------------------------------------------
# Formula sizing
# ---------------------------------------------------------------------------

def _clamp(low: int, high: int, value: float) -> float:
    return max(low, min(high, value))


def formula_boiler_kw(profile: PropertyProfile, topology: BoilerTopology, heat_load_kw: float) -> float:
    bed, bath = profile.bedrooms, profile.bathrooms
    base = scenarios.baseline_boiler_kw(bed, topology)

    if topology is BoilerTopology.COMBI:
        if bed <= 2 and bath <= 1:
            kw = _clamp(24, 27, max(base, heat_load_kw + 6))
        elif bed <= 3 and bath <= 2:
            kw = _clamp(28, 34, max(base, heat_load_kw + 8))
        else:
            kw = _clamp(35, 42, max(base, heat_load_kw + 10))
        if bath >= 2:
            kw = max(kw, 32)
        return kw

    if bed <= 2:
        kw = _clamp(18, 30, max(base, heat_load_kw + 2))
    elif bed <= 3:
        kw = _clamp(24, 35, max(base, heat_load_kw + 3))
    else:
        kw = _clamp(28, 50, max(base, heat_load_kw + 4))
    if bed >= 4:
        kw = max(kw, 28)
    if bed >= 5:
        kw = max(kw, 30)
    return kw


def formula_cylinder_l(profile: PropertyProfile) -> int:
    bed, bath, occ = profile.bedrooms, profile.bathrooms, profile.occupants
    base = scenarios.baseline_cylinder_l(bed)

    if bed <= 1 and bath <= 1:
        litres = _clamp(120, 150, max(base, occ * 45 + bath * 30))
    elif bed <= 2 and bath <= 1:
        litres = _clamp(150, 180, max(base, occ * 42 + bath * 35))
    elif bed <= 3 and bath <= 2:
        litres = _clamp(180, 250, max(base, occ * 40 + bath * 40))
    elif bed <= 4 and bath <= 2:
        litres = _clamp(210, 300, max(base, occ * 38 + bath * 45))
    else:
        litres = max(300, base, occ * 35 + bath * 50)

    # Multi-bathroom and high-occupancy buffers
    if bath >= 2:
        litres += min(bath * 30, 90)
    if occ >= 4:
        litres += min((occ - 3) * 20, 60)
    return int(litres)


# ---------------------------------------------------------------------------
# Resolvers
# ---------------------------------------------------------------------------

def resolve_from_conversion(
    profile: PropertyProfile, topology: BoilerTopology, requirement: HeatingRequirement
) -> Optional[SizingResult]:
    match = scenarios.find_conversion_scenario(
        profile.bedrooms, profile.bathrooms, profile.occupants, profile.boiler_class
    )
    if match is None or match.recommended_system is not topology:
        return None
    return _finalise(topology, match.boiler_kw, match.cylinder_l, "conversion", match.scenario_id)


def resolve_from_scenario(
    profile: PropertyProfile, topology: BoilerTopology, requirement: HeatingRequirement
) -> Optional[SizingResult]:
    match = scenarios.find_best_matching_scenario(
        profile.bedrooms, profile.bathrooms, profile.occupants, profile.property_type, topology
    )
    if match is None:
        return None
    return _finalise(topology, match.boiler_kw, match.cylinder_l, "scenario", match.scenario_id)


def resolve_from_formula(
    profile: PropertyProfile, topology: BoilerTopology, requirement: HeatingRequirement
) -> Optional[SizingResult]:
    kw = formula_boiler_kw(profile, topology, requirement.heat_load_kw)
    litres = formula_cylinder_l(profile) if topology.needs_cylinder else 0
    return _finalise(topology, kw, litres, "formula")


SIZING_CHAIN: Tuple[Resolver, ...] = (
    resolve_from_conversion,
    resolve_from_scenario,
    resolve_from_formula,
)


def resolve(
    profile: PropertyProfile, topology: BoilerTopology, requirement: HeatingRequirement
) -> SizingResult:
    """First definitive answer from SIZING_CHAIN."""
    for resolver in SIZING_CHAIN:
        result = resolver(profile, topology, requirement)
        if result is not None:
            return result
    raise RuntimeError("sizing chain produced no result")


def _fewer_bathrooms_kw(
    profile: PropertyProfile, topology: BoilerTopology, requirement: HeatingRequirement
) -> int:
    """
    Largest output resolved for the same property with fewer bathrooms.

    Only counts up to TABLE_BATHROOM_LIMIT are tried; above it the formula
    output for the property itself is already the largest.
    """
    best = 0
    for bathrooms in range(1, min(profile.bathrooms, TABLE_BATHROOM_LIMIT + 1)):
        variant = profile.model_copy(update={"bathrooms": bathrooms})
        variant_req = replace(requirement, heat_load_kw=calculate_heat_load(variant))
        best = max(best, resolve(variant, topology, variant_req).boiler_output_kw)
    return best


def size(
    profile: PropertyProfile,
    topology: BoilerTopology,
    requirement: HeatingRequirement,
    request_id: str = "",
) -> SizingResult:
    """
    Resolve output and cylinder for the selected topology.

    Stored-water systems are never sized below the same property with fewer
    bathrooms; the reference tables alone do not guarantee that.
    """
    result = resolve(profile, topology, requirement)
    if topology.needs_cylinder and profile.bathrooms > 1:
        floor_kw = _fewer_bathrooms_kw(profile, topology, requirement)
        if floor_kw > result.boiler_output_kw:
            result = replace(result, boiler_output_kw=floor_kw)

    logger.debug(
        "sized %s at %skW / %sL from %s",
        topology.value,
        result.boiler_output_kw,
        result.cylinder_capacity_l,
        result.source,
        extra={
            "request_id": request_id,
            "stage": "sizing",
            "boiler_kw": result.boiler_output_kw,
            "cylinder_l": result.cylinder_capacity_l,
        },
    )
    return result
