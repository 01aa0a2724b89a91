"""
pricing_engine.py — Three-tier, VAT-inclusive quote composition.

Covers:
  - Catalog boiler matching by topology and DHW tolerance
  - Tier selection (Standard / Premium / Luxury) with default boilers
  - Labour: catalog base x job multiplier x location multiplier
  - Fixed sundries and conditional add-ons (cylinder, condensate pump,
    thermostat upgrade, flue extension, parking, upper-floor access)
  - VAT and totals, with an itemised component list per tier

Every tier is priced by building its component list first; subtotal is the
sum of the components, so the list always reconciles with the totals.
All amounts are integer pence; rounding is half-up and happens once.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from boilerquote import config
from boilerquote.models.catalog_schema import BoilerOffering, CatalogSnapshot
from boilerquote.models.quote_schema import (
    BoilerTopology,
    JobComplexity,
    PriceBreakdown,
    PriceComponent,
    PropertyProfile,
    QuoteOption,
    parse_count,
)
from boilerquote.services.rounding import multiply_round, round_half_up, to_decimal

logger = logging.getLogger("boilerquote-pricing")

# Catalog tier preference per customer tier; an empty tail means "any match"
_TIER_PREFERENCE: Dict[str, Tuple[str, ...]] = {
    "Standard": ("Budget", "Mid-Range"),
    "Premium": ("Mid-Range", "Premium"),
    "Luxury": ("Premium",),
}

# Standard tier is labour-priced on the Standard row, the rest on Premium
_LABOUR_TIER: Dict[str, str] = {
    "Standard": "Standard",
    "Premium": "Premium",
    "Luxury": "Premium",
}
_DEFAULT_LABOUR: Dict[str, int] = {
    "Standard": config.DEFAULT_STANDARD_LABOUR,
    "Premium": config.DEFAULT_PREMIUM_LABOUR,
}

# (name, description, price), fitted on every tier
_BASIC_SUNDRIES: Tuple[Tuple[str, str, int], ...] = (
    ("Magnetic system filter", "Protects the new boiler's heat exchanger", config.SUNDRY_MAGNETIC_FILTER),
    ("Chemical flush", "System cleanse to BS 7593", config.SUNDRY_CHEMICAL_FLUSH),
    ("Flue kit", "Standard flue components", config.SUNDRY_FLUE_KIT),
    ("Thermostatic radiator valves", "TRVs for room-by-room control", config.SUNDRY_TRVS),
)
_SMART_THERMOSTAT = ("Smart thermostat", "Boiler Plus compliant smart control", config.SUNDRY_SMART_THERMOSTAT)
_SMART_THERMOSTAT_TIERS = ("Luxury",)

# Component key -> PriceBreakdown field it rolls up into
COMPONENT_FIELDS: Dict[str, str] = {
    "boiler": "boiler_price",
    "labour": "labour_price",
    "sundry": "sundry_price",
    "cylinder": "cylinder_price",
    "condensate_pump": "condensate_pump_price",
    "thermostat": "thermostat_price",
    "flue_extension": "flue_extension_price",
    "parking": "parking_fee",
    "access": "access_fee",
}


# ---------------------------------------------------------------------------
# Add-on calculators
# ---------------------------------------------------------------------------

def calculate_flue_extension(extension_metres: Any) -> int:
    """Flue extension charge: whole metres x per-metre rate."""
    return parse_count(extension_metres, 0) * config.FLUE_EXTENSION_PER_METRE


def chargeable_parking_metres(distance_metres: Any) -> int:
    return max(0, parse_count(distance_metres, 0) - config.PARKING_FREE_DISTANCE_M)


def calculate_parking_fee(distance_metres: Any) -> int:
    """Per-metre carry charge beyond the free parking distance."""
    return chargeable_parking_metres(distance_metres) * config.PARKING_FEE_PER_METRE


def calculate_cylinder_price(capacity_l: int) -> int:
    if capacity_l <= 0:
        return 0
    for max_capacity, price in config.CYLINDER_PRICES:
        if capacity_l <= max_capacity:
            return price
    return config.CYLINDER_PRICE_MAX


def chargeable_floors(profile: PropertyProfile) -> int:
    """Floors above the free allowance, for flats known to have no lift."""
    if profile.is_house or profile.has_lift is not False:
        return 0
    return max(0, profile.floor_level - config.ACCESS_FREE_FLOORS)


def calculate_access_fee(profile: PropertyProfile) -> int:
    return chargeable_floors(profile) * config.ACCESS_FEE_PER_FLOOR


def calculate_vat(subtotal: int) -> int:
    return round_half_up(to_decimal(subtotal) * to_decimal(config.VAT_RATE))


# ---------------------------------------------------------------------------
# Boiler matching
# ---------------------------------------------------------------------------

def dhw_tolerance_for(topology: BoilerTopology) -> Tuple[int, int]:
    if topology is BoilerTopology.COMBI:
        return config.COMBI_DHW_TOLERANCE
    return config.STORED_DHW_TOLERANCE


def filter_suitable_boilers(
    boilers: Sequence[BoilerOffering],
    topology: BoilerTopology,
    size_kw: int,
    dhw_tolerance: Optional[Tuple[int, int]] = None,
) -> List[BoilerOffering]:
    """
    Boilers of the exact topology whose DHW output lies in
    [size - below, size + above]. Catalog order is preserved.
    """
    below, above = dhw_tolerance or dhw_tolerance_for(topology)
    low, high = size_kw - below, size_kw + above
    return [
        b for b in boilers
        if b.boiler_type == topology.value and low <= b.dhw_kw <= high
    ]


def select_tier_boilers(suitable: Sequence[BoilerOffering]) -> Dict[str, Optional[BoilerOffering]]:
    by_tier: Dict[str, List[BoilerOffering]] = {}
    for boiler in suitable:
        by_tier.setdefault(boiler.tier, []).append(boiler)

    selected: Dict[str, Optional[BoilerOffering]] = {}
    for quote_tier, preferences in _TIER_PREFERENCE.items():
        choice = None
        for catalog_tier in preferences:
            if by_tier.get(catalog_tier):
                choice = by_tier[catalog_tier][0]
                break
        if choice is None and suitable:
            choice = suitable[0]
        selected[quote_tier] = choice
    return selected


def default_boiler(tier: str, topology: BoilerTopology, size_kw: int) -> BoilerOffering:
    defaults = config.DEFAULT_BOILERS[tier]
    flow_key = "Combi" if topology is BoilerTopology.COMBI else "stored"
    return BoilerOffering(
        make=defaults["make"],
        model=defaults["model"][topology.value],
        boiler_type=topology.value,
        tier=tier,
        dhw_kw=size_kw,
        supply_price=defaults["supply_price"],
        warranty_years=defaults["warranty_years"],
        flow_rate_lpm=defaults["flow_rate_lpm"][flow_key],
    )


def _flow_rate(boiler: BoilerOffering, tier: str, topology: BoilerTopology) -> float:
    if boiler.flow_rate_lpm:
        return boiler.flow_rate_lpm
    flow_key = "Combi" if topology is BoilerTopology.COMBI else "stored"
    return config.DEFAULT_BOILERS[tier]["flow_rate_lpm"][flow_key]


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------

def _line(key: str, name: str, description: str, unit_price: int, quantity: int = 1) -> PriceComponent:
    return PriceComponent(
        key=key,
        name=name,
        description=description,
        quantity=quantity,
        unit_price=unit_price,
        total_price=unit_price * quantity,
    )


def build_addon_components(
    profile: PropertyProfile, cylinder_l: int
) -> List[PriceComponent]:
    """Conditional add-ons shared by every tier; zero-priced lines are omitted."""
    lines: List[PriceComponent] = []

    cylinder_price = calculate_cylinder_price(cylinder_l)
    if cylinder_price:
        lines.append(_line("cylinder", f"{cylinder_l}L unvented cylinder", "Hot water storage cylinder", cylinder_price))

    if profile.drain_nearby == "no":
        lines.append(_line(
            "condensate_pump", "Condensate pump", "No drain near the boiler position",
            config.CONDENSATE_PUMP_PRICE,
        ))

    if profile.thermostat_upgrade:
        lines.append(_line(
            "thermostat", "Thermostat upgrade", "Programmable room thermostat",
            config.THERMOSTAT_UPGRADE_PRICE,
        ))

    flue_metres = profile.flue_extension_m
    if flue_metres > 0:
        lines.append(_line(
            "flue_extension", "Flue extension", f"{flue_metres}m of additional flue",
            config.FLUE_EXTENSION_PER_METRE, quantity=flue_metres,
        ))

    parking_metres = chargeable_parking_metres(profile.parking_distance_m)
    if parking_metres > 0:
        lines.append(_line(
            "parking", "Parking distance", f"{parking_metres}m beyond the free {config.PARKING_FREE_DISTANCE_M}m",
            config.PARKING_FEE_PER_METRE, quantity=parking_metres,
        ))

    floors = chargeable_floors(profile)
    if floors > 0:
        lines.append(_line(
            "access", "Upper floor access", f"Floor {profile.floor_level} with no lift",
            config.ACCESS_FEE_PER_FLOOR, quantity=floors,
        ))
    return lines


def build_tier_components(
    tier: str,
    boiler: BoilerOffering,
    labour_final: int,
    complexity: JobComplexity,
    addons: Sequence[PriceComponent],
) -> List[PriceComponent]:
    lines = [
        _line("boiler", f"{boiler.make} {boiler.model}", f"{boiler.boiler_type} boiler supply", boiler.supply_price),
        _line("labour", "Installation", complexity.job_type, labour_final),
    ]
    sundries = list(_BASIC_SUNDRIES)
    if tier in _SMART_THERMOSTAT_TIERS:
        sundries.append(_SMART_THERMOSTAT)
    lines.extend(_line("sundry", name, desc, price) for name, desc, price in sundries)
    lines.extend(addons)
    return lines


def sum_by_field(components: Sequence[PriceComponent]) -> Dict[str, int]:
    totals = {field: 0 for field in COMPONENT_FIELDS.values()}
    for c in components:
        totals[COMPONENT_FIELDS[c.key]] += c.total_price
    return totals


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------

def resolve_labour_base(catalog: CatalogSnapshot, job_type: str, labour_tier: str) -> int:
    row = catalog.labour_cost_by_type(job_type, labour_tier)
    return row.price if row is not None else _DEFAULT_LABOUR[labour_tier]


def resolve_location_multiplier(catalog: CatalogSnapshot, postcode: str) -> float:
    location = catalog.location_by_postcode(postcode)
    return location.price_multiplier if location is not None else 1.0


def compose(
    topology: BoilerTopology,
    size_kw: int,
    cylinder_l: int,
    complexity: JobComplexity,
    catalog: CatalogSnapshot,
    profile: PropertyProfile,
    dhw_tolerance: Optional[Tuple[int, int]] = None,
    request_id: str = "",
) -> Tuple[Tuple[QuoteOption, ...], PriceBreakdown]:
    """
    Price the three customer tiers.

    Returns (Standard, Premium, Luxury) quote options and the breakdown of the
    recommended Standard tier.
    """
    suitable = filter_suitable_boilers(catalog.boilers, topology, size_kw, dhw_tolerance)
    selected = select_tier_boilers(suitable)
    location_multiplier = resolve_location_multiplier(catalog, profile.postcode)
    addons = build_addon_components(profile, cylinder_l)

    quotes: List[QuoteOption] = []
    breakdown: Optional[PriceBreakdown] = None

    for tier in config.QUOTE_TIERS:
        boiler = selected[tier] or default_boiler(tier, topology, size_kw)
        labour_base = resolve_labour_base(catalog, complexity.job_type, _LABOUR_TIER[tier])
        labour_final = multiply_round(labour_base, complexity.multiplier, location_multiplier)

        components = build_tier_components(tier, boiler, labour_final, complexity, addons)
        subtotal = sum(c.total_price for c in components)
        vat = calculate_vat(subtotal)
        flow_rate = _flow_rate(boiler, tier, topology)
        is_recommended = tier == config.QUOTE_TIERS[0]

        quotes.append(QuoteOption(
            tier=tier,
            boiler_make=boiler.make,
            boiler_model=boiler.model,
            boiler_type=topology,
            warranty=f"{boiler.warranty_years} years",
            base_price=subtotal + vat,
            subtotal=subtotal,
            vat_amount=vat,
            is_recommended=is_recommended,
            kw_output=boiler.dhw_kw,
            flow_rate_lpm=flow_rate,
            efficiency=boiler.efficiency_rating,
        ))

        if is_recommended:
            breakdown = PriceBreakdown(
                tier=tier,
                boiler_model=f"{boiler.make} {boiler.model}",
                location_multiplier=location_multiplier,
                subtotal=subtotal,
                vat_amount=vat,
                total_price=subtotal + vat,
                water_flow_rate=flow_rate,
                components=tuple(components),
                **sum_by_field(components),
            )

        logger.debug(
            "%s tier priced at %s (boiler %s %s, labour %s)",
            tier,
            subtotal + vat,
            boiler.make,
            boiler.model,
            labour_final,
            extra={"request_id": request_id, "stage": "pricing", "total_price": subtotal + vat},
        )

    if not suitable:
        logger.debug(
            "no catalog boiler for %s %skW; default boilers used",
            topology.value,
            size_kw,
            extra={"request_id": request_id, "stage": "pricing"},
        )
    return tuple(quotes), breakdown
