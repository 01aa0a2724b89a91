"""
Seed pricing catalog.

Loaded into the database by init_db() when the catalog tables are empty, and
served directly by StaticCatalogService when no database is configured.
Prices are pence, ex VAT.
"""
from typing import Tuple

from boilerquote.models.catalog_schema import (
    BoilerOffering,
    LabourCost,
    LocationMultiplier,
    SundryCost,
)


def _boiler(make, model, boiler_type, tier, dhw_kw, price, warranty, flow=None):
    return BoilerOffering(
        make=make,
        model=model,
        boiler_type=boiler_type,
        tier=tier,
        dhw_kw=dhw_kw,
        supply_price=price,
        warranty_years=warranty,
        flow_rate_lpm=flow,
    )


BOILERS: Tuple[BoilerOffering, ...] = (
    # ── Combi ──
    _boiler("Baxi", "600 Combi 24kW", "Combi", "Budget", 24, 95_000, 7, 9.8),
    _boiler("Baxi", "600 Combi 30kW", "Combi", "Budget", 30, 105_000, 7, 12.2),
    _boiler("Baxi", "800 Combi 2 36kW", "Combi", "Budget", 36, 135_000, 10, 14.7),
    _boiler("Ideal", "Logic Max Combi2 C24", "Combi", "Mid-Range", 24, 120_000, 10, 9.8),
    _boiler("Ideal", "Logic Max Combi2 C30", "Combi", "Mid-Range", 30, 135_000, 10, 12.3),
    _boiler("Ideal", "Logic Max Combi2 C35", "Combi", "Mid-Range", 35, 150_000, 10, 14.3),
    _boiler("Worcester Bosch", "Greenstar 8000 Life 30kW", "Combi", "Premium", 30, 190_000, 12, 12.3),
    _boiler("Worcester Bosch", "Greenstar 8000 Life 35kW", "Combi", "Premium", 35, 205_000, 12, 14.3),
    _boiler("Vaillant", "ecoTEC exclusive 43kW", "Combi", "Premium", 43, 230_000, 12, 17.6),
    # ── System ──
    _boiler("Baxi", "600 System 24kW", "System", "Budget", 24, 100_000, 7),
    _boiler("Baxi", "800 System 2 30kW", "System", "Budget", 30, 120_000, 10),
    _boiler("Ideal", "Logic Max System S2 24", "System", "Mid-Range", 24, 125_000, 10),
    _boiler("Ideal", "Logic Max System S2 30", "System", "Mid-Range", 30, 140_000, 10),
    _boiler("Worcester Bosch", "Greenstar 4000 System 27kW", "System", "Mid-Range", 27, 145_000, 10),
    _boiler("Vaillant", "ecoTEC plus 630 System", "System", "Premium", 30, 185_000, 12),
    _boiler("Vaillant", "ecoTEC plus 637 System", "System", "Premium", 37, 200_000, 12),
    _boiler("Viessmann", "Vitodens 200-W 45kW System", "System", "Premium", 45, 235_000, 12),
    # ── Regular ──
    _boiler("Baxi", "600 Heat 24kW", "Regular", "Budget", 24, 95_000, 7),
    _boiler("Baxi", "600 Heat 30kW", "Regular", "Budget", 30, 105_000, 7),
    _boiler("Ideal", "Logic Max Heat H30", "Regular", "Mid-Range", 30, 130_000, 10),
    _boiler("Ideal", "Logic Max Heat H35", "Regular", "Mid-Range", 35, 140_000, 10),
    _boiler("Vaillant", "ecoTEC plus 430 Heat", "Regular", "Premium", 30, 175_000, 12),
    _boiler("Worcester Bosch", "Greenstar 8000 Style Heat 40kW", "Regular", "Premium", 40, 215_000, 12),
)


def _labour(job_type, standard, premium):
    return (
        LabourCost(job_type=job_type, tier="Standard", price=standard),
        LabourCost(job_type=job_type, tier="Premium", price=premium),
    )


# "Boiler Replacement (Survey Required)" is priced on the engine defaults
LABOUR_COSTS: Tuple[LabourCost, ...] = (
    *_labour("Combi Boiler Replacement (Like-for-Like)", 120_000, 145_000),
    *_labour("System Boiler Replacement (Like-for-Like)", 135_000, 160_000),
    *_labour("Regular Boiler Replacement (Like-for-Like)", 140_000, 165_000),
    *_labour("Combi to System Boiler Conversion", 180_000, 210_000),
    *_labour("System to Combi Boiler Conversion", 160_000, 190_000),
    *_labour("Regular to Combi Boiler Conversion", 200_000, 235_000),
    *_labour("Regular to System Boiler Conversion", 170_000, 200_000),
)

SUNDRIES: Tuple[SundryCost, ...] = (
    SundryCost(name="Magnetic system filter", description="Protects the heat exchanger", price=15_000),
    SundryCost(name="Chemical flush", description="BS 7593 system cleanse", price=12_000),
    SundryCost(name="Flue kit", description="Standard flue components", price=10_000),
    SundryCost(name="Thermostatic radiator valves", description="Room-by-room control", price=8_000),
    SundryCost(name="Smart thermostat", description="Boiler Plus compliant control", price=20_000),
    SundryCost(name="Condensate pump", description="Where no drain is near the boiler", price=25_000),
)

LOCATIONS: Tuple[LocationMultiplier, ...] = (
    LocationMultiplier(postcode_pattern="SW1A", area_name="Westminster", price_multiplier=1.45),
    LocationMultiplier(postcode_pattern="EC", area_name="City of London", price_multiplier=1.40),
    LocationMultiplier(postcode_pattern="WC", area_name="West Central London", price_multiplier=1.40),
    LocationMultiplier(postcode_pattern="W1", area_name="Mayfair & Marylebone", price_multiplier=1.40),
    LocationMultiplier(postcode_pattern="SW", area_name="South West London", price_multiplier=1.35),
    LocationMultiplier(postcode_pattern="W", area_name="West London", price_multiplier=1.30),
    LocationMultiplier(postcode_pattern="NW", area_name="North West London", price_multiplier=1.25),
    LocationMultiplier(postcode_pattern="N", area_name="North London", price_multiplier=1.20),
    LocationMultiplier(postcode_pattern="E", area_name="East London", price_multiplier=1.20),
    LocationMultiplier(postcode_pattern="SE", area_name="South East London", price_multiplier=1.20),
    LocationMultiplier(postcode_pattern="KT", area_name="Kingston upon Thames", price_multiplier=1.15),
    LocationMultiplier(postcode_pattern="CR", area_name="Croydon", price_multiplier=1.10),
    LocationMultiplier(postcode_pattern="M", area_name="Manchester", price_multiplier=1.05),
    LocationMultiplier(postcode_pattern="B", area_name="Birmingham", price_multiplier=1.00),
)
