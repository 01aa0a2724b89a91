"""
property_analyzer.py — Heating requirement analysis from property attributes.

Derives three heuristic signals calibrated against the UK scenario tables:
  - Heat load (kW) from a radiator-count proxy
  - Hot water demand (kW) from peak simultaneous flow
  - Simultaneous usage score (relative ranking, not a probability)
"""
import logging

from boilerquote import config
from boilerquote.models.quote_schema import HeatingRequirement, PropertyProfile
from boilerquote.services.rounding import round_half_up, to_decimal

logger = logging.getLogger("boilerquote-analyzer")


def estimate_radiator_count(profile: PropertyProfile) -> float:
    """
    One radiator per bedroom and bathroom, plus living-space allowance.

    House: living/kitchen/dining (3) + hallway (1), +1 study at 4+ beds,
    +1 extra reception at 5+ beds. Flat: living/kitchen (2) + half a hallway.
    """
    count = float(profile.bedrooms + profile.bathrooms)
    if profile.is_house:
        count += 3 + 1
        if profile.bedrooms >= 4:
            count += 1
        if profile.bedrooms >= 5:
            count += 1
    else:
        count += 2 + 0.5
    return count


def calculate_heat_load(profile: PropertyProfile) -> int:
    radiators = estimate_radiator_count(profile)
    if profile.is_house:
        heat_load = to_decimal(radiators) * to_decimal(config.HOUSE_KW_PER_RADIATOR)
        # External walls and larger rooms in big houses
        if profile.bedrooms >= 4:
            heat_load += 3
        if profile.bedrooms >= 5:
            heat_load += 5
    else:
        heat_load = to_decimal(radiators) * to_decimal(config.FLAT_KW_PER_RADIATOR)

    floor_kw = config.MIN_HEAT_LOAD_BY_BEDROOMS[min(profile.bedrooms, 5)]
    return round_half_up(max(heat_load, to_decimal(floor_kw)))


def calculate_hot_water_demand(profile: PropertyProfile) -> int:
    peak_lpm = max(
        profile.bathrooms * to_decimal(config.LPM_PER_BATHROOM),
        profile.occupants * to_decimal(config.LPM_PER_OCCUPANT),
    )
    demand = peak_lpm * to_decimal(config.KW_PER_LPM)
    if profile.bathrooms > 1:
        demand += min(profile.bathrooms * 2, 8)
    return round_half_up(demand)


def calculate_simultaneous_usage_score(profile: PropertyProfile) -> int:
    if profile.bathrooms > 1 and profile.occupants > 2:
        return profile.bathrooms * profile.occupants
    return 0


def analyze(profile: PropertyProfile, request_id: str = "") -> HeatingRequirement:
    requirement = HeatingRequirement(
        heat_load_kw=calculate_heat_load(profile),
        hot_water_demand_kw=calculate_hot_water_demand(profile),
        simultaneous_usage_score=calculate_simultaneous_usage_score(profile),
        radiator_count=estimate_radiator_count(profile),
    )
    logger.debug(
        "property analysed: heat_load=%skW dhw=%skW score=%s",
        requirement.heat_load_kw,
        requirement.hot_water_demand_kw,
        requirement.simultaneous_usage_score,
        extra={"request_id": request_id, "stage": "analyze"},
    )
    return requirement
