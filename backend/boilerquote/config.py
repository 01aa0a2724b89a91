"""
Quote engine configuration — single source of truth for pricing constants,
sizing catalogs and decision thresholds.

Import from here in all engines rather than hardcoding values.
All monetary values are integer pence (minor units).
"""
from __future__ import annotations

import os

# ── Standard equipment sizes ───────────────────────────────────────────────────
BOILER_SIZES_KW: tuple[int, ...] = (24, 28, 30, 32, 35, 40, 42, 50)
CYLINDER_SIZES_L: tuple[int, ...] = (120, 150, 170, 210, 250, 300, 350, 400, 500)

# ── Input defaults (applied when a count is missing or unparseable) ───────────
DEFAULT_BEDROOMS: int = 1
DEFAULT_BATHROOMS: int = 1
DEFAULT_OCCUPANTS: int = 2

# ── Property analysis ─────────────────────────────────────────────────────────
HOUSE_KW_PER_RADIATOR: float = 2.0
FLAT_KW_PER_RADIATOR: float = 1.7
MIN_HEAT_LOAD_BY_BEDROOMS: dict[int, int] = {1: 12, 2: 18, 3: 24, 4: 30, 5: 36}
KW_PER_LPM: float = 2.5               # hot water: 1 L/min ≈ 2.5 kW
LPM_PER_BATHROOM: float = 10.0
LPM_PER_OCCUPANT: float = 2.5

# ── Topology thresholds ───────────────────────────────────────────────────────
MANDATORY_SYSTEM_BATHROOMS: int = 6
MANDATORY_SYSTEM_BEDROOMS: int = 6
MANDATORY_SYSTEM_OCCUPANTS: int = 6

# ── Scenario matching ─────────────────────────────────────────────────────────
SCENARIO_MAX_DISTANCE: int = 2

# ── DHW matching tolerances (kW below, kW above the recommended size) ─────────
COMBI_DHW_TOLERANCE: tuple[int, int] = (0, 6)
STORED_DHW_TOLERANCE: tuple[int, int] = (3, 5)          # System / Regular
LEGACY_STORED_DHW_TOLERANCE: tuple[int, int] = (2, 4)   # web-client fallback path

# ── Pricing ───────────────────────────────────────────────────────────────────
VAT_RATE: str = "0.20"   # kept as str so Decimal arithmetic stays exact

DEFAULT_STANDARD_LABOUR: int = 135_000
DEFAULT_PREMIUM_LABOUR: int = 160_000

SUNDRY_MAGNETIC_FILTER: int = 15_000
SUNDRY_CHEMICAL_FLUSH: int = 12_000
SUNDRY_FLUE_KIT: int = 10_000
SUNDRY_TRVS: int = 8_000
SUNDRY_SMART_THERMOSTAT: int = 20_000

CONDENSATE_PUMP_PRICE: int = 25_000
THERMOSTAT_UPGRADE_PRICE: int = 15_000
FLUE_EXTENSION_PER_METRE: int = 8_000
PARKING_FEE_PER_METRE: int = 500
PARKING_FREE_DISTANCE_M: int = 10
ACCESS_FEE_PER_FLOOR: int = 2_500
ACCESS_FREE_FLOORS: int = 2

# (max capacity L, price); first row whose capacity covers the cylinder wins
CYLINDER_PRICES: tuple[tuple[int, int], ...] = (
    (150, 110_000),
    (180, 140_000),
    (210, 170_000),
    (250, 200_000),
    (300, 230_000),
)
CYLINDER_PRICE_MAX: int = 270_000

# Default boiler per customer tier when no catalog model matches; models keyed by topology
DEFAULT_BOILERS: dict[str, dict] = {
    "Standard": {
        "make": "Baxi",
        "model": {"Combi": "800 Combi 2 24kW", "System": "800 System 2 24kW", "Regular": "800 Heat 24kW"},
        "supply_price": 120_000,
        "warranty_years": 10, "flow_rate_lpm": {"Combi": 12, "stored": 20},
    },
    "Premium": {
        "make": "Ideal",
        "model": {"Combi": "Logic Max Combi2 C28", "System": "Logic Max System S2 24", "Regular": "Logic Max Heat H24"},
        "supply_price": 150_000,
        "warranty_years": 10, "flow_rate_lpm": {"Combi": 14, "stored": 22},
    },
    "Luxury": {
        "make": "Vaillant",
        "model": {"Combi": "EcoTec Pro 32kW", "System": "ecoTEC plus 630 System", "Regular": "ecoTEC plus 430 Heat"},
        "supply_price": 180_000,
        "warranty_years": 12, "flow_rate_lpm": {"Combi": 16, "stored": 24},
    },
}

QUOTE_TIERS: tuple[str, ...] = ("Standard", "Premium", "Luxury")

# ── Environment ───────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON: bool = os.getenv("LOG_FORMAT", "json").lower() != "text"
CORS_ORIGINS: list[str] = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if o.strip()
]
