"""
Quote engine domain schemas.

Input (PropertyProfile) and output (QuoteResult and its parts) are frozen
pydantic models; the intermediate pipeline results are frozen dataclasses.
All monetary values are integer pence.
"""
from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from boilerquote import config


class BoilerTopology(str, Enum):
    COMBI = "Combi"
    SYSTEM = "System"
    REGULAR = "Regular"

    @property
    def needs_cylinder(self) -> bool:
        return self is not BoilerTopology.COMBI


class BoilerClass(str, Enum):
    """Classification of the customer's current boiler (free text)."""
    COMBI = "combi"
    SYSTEM = "system"
    REGULAR = "regular"
    CONVENTIONAL = "conventional"
    UNKNOWN = "unknown"


class ComplexityLevel(str, Enum):
    SIMPLE = "Simple"
    MEDIUM = "Medium"
    COMPLEX = "Complex"


# Ordered: the first matching substring decides the class
_BOILER_CLASS_PATTERNS: Tuple[Tuple[BoilerClass, Tuple[str, ...]], ...] = (
    (BoilerClass.COMBI, ("combi",)),
    (BoilerClass.SYSTEM, ("system",)),
    (BoilerClass.REGULAR, ("regular",)),
    (BoilerClass.CONVENTIONAL, ("conventional", "heat only", "heat-only")),
)

_LEADING_INT = re.compile(r"^\s*(\d+)")


def classify_boiler_type(text: Optional[str]) -> BoilerClass:
    """Classify free-text boiler description by ordered substring match."""
    lowered = (text or "").lower()
    for boiler_class, needles in _BOILER_CLASS_PATTERNS:
        if any(n in lowered for n in needles):
            return boiler_class
    return BoilerClass.UNKNOWN


def parse_count(value: Any, default: int) -> int:
    """
    Parse a form count such as "3", "5+" or 4.

    The "+" suffix means "at least N" and is stripped. Missing, unparseable,
    zero and negative values all resolve to ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        n = int(value)
    else:
        match = _LEADING_INT.match(str(value).replace("+", ""))
        if not match:
            return default
        n = int(match.group(1))
    return n if n > 0 else default


def _parse_yes_no(value: Any) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    text = str(value or "").strip().lower()
    if text in ("yes", "y", "true", "1"):
        return "yes"
    if text in ("no", "n", "false", "0"):
        return "no"
    return "unknown"


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

class PropertyProfile(BaseModel):
    """
    Property attributes collected by the quote wizard.

    Every field is optional; the validators absorb malformed input so that a
    profile can always be built.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    bedrooms: int = Field(config.DEFAULT_BEDROOMS, validation_alias=AliasChoices("bedrooms", "bedroom_count", "bedroomCount"))
    bathrooms: int = Field(config.DEFAULT_BATHROOMS, validation_alias=AliasChoices("bathrooms", "bathroom_count", "bathroomCount"))
    occupants: int = Field(config.DEFAULT_OCCUPANTS, validation_alias=AliasChoices("occupants", "occupant_count", "occupantCount"))
    property_type: str = Field("House", validation_alias=AliasChoices("property_type", "propertyType"))
    current_boiler: str = Field("Unknown", validation_alias=AliasChoices("current_boiler", "currentBoiler"))
    flue_location: Optional[str] = Field(None, validation_alias=AliasChoices("flue_location", "flueLocation"))
    drain_nearby: str = Field("unknown", validation_alias=AliasChoices("drain_nearby", "drainNearby"))
    move_boiler: str = Field("no", validation_alias=AliasChoices("move_boiler", "moveBoiler"))
    postcode: str = ""
    flue_extension_m: int = Field(0, validation_alias=AliasChoices("flue_extension_m", "flueExtension"))
    parking_distance_m: int = Field(0, validation_alias=AliasChoices("parking_distance_m", "parkingDistance"))
    parking_situation: Optional[str] = Field(None, validation_alias=AliasChoices("parking_situation", "parkingSituation"))
    thermostat_upgrade: bool = Field(False, validation_alias=AliasChoices("thermostat_upgrade", "thermostatUpgrade"))
    floor_level: int = Field(0, validation_alias=AliasChoices("floor_level", "floorLevel"))
    has_lift: Optional[bool] = Field(None, validation_alias=AliasChoices("has_lift", "hasLift"))

    @field_validator("bedrooms", mode="before")
    @classmethod
    def _bedrooms(cls, v):
        return parse_count(v, config.DEFAULT_BEDROOMS)

    @field_validator("bathrooms", mode="before")
    @classmethod
    def _bathrooms(cls, v):
        return parse_count(v, config.DEFAULT_BATHROOMS)

    @field_validator("occupants", mode="before")
    @classmethod
    def _occupants(cls, v):
        return parse_count(v, config.DEFAULT_OCCUPANTS)

    @field_validator("flue_extension_m", "parking_distance_m", "floor_level", mode="before")
    @classmethod
    def _metres(cls, v):
        return parse_count(v, 0)

    @field_validator("property_type", mode="before")
    @classmethod
    def _property_type(cls, v):
        text = str(v or "").strip().lower()
        if text in ("flat", "apartment", "maisonette"):
            return "Flat"
        return "House"

    @field_validator("current_boiler", "postcode", mode="before")
    @classmethod
    def _text(cls, v):
        return "" if v is None else str(v).strip()

    @field_validator("drain_nearby", mode="before")
    @classmethod
    def _drain(cls, v):
        return _parse_yes_no(v)

    @field_validator("move_boiler", mode="before")
    @classmethod
    def _move(cls, v):
        return "yes" if _parse_yes_no(v) == "yes" else "no"

    @field_validator("thermostat_upgrade", mode="before")
    @classmethod
    def _thermostat(cls, v):
        return _parse_yes_no(v) == "yes"

    @field_validator("has_lift", mode="before")
    @classmethod
    def _lift(cls, v):
        parsed = _parse_yes_no(v)
        return None if parsed == "unknown" else parsed == "yes"

    @property
    def boiler_class(self) -> BoilerClass:
        return classify_boiler_type(self.current_boiler)

    @property
    def is_house(self) -> bool:
        return self.property_type == "House"

    def fingerprint(self) -> str:
        """Stable SHA-256 of the normalised profile (cache / dedupe key)."""
        return hashlib.sha256(self.model_dump_json().encode("utf-8")).hexdigest()


# ---------------------------------------------------------------------------
# Pipeline intermediates
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HeatingRequirement:
    heat_load_kw: float
    hot_water_demand_kw: float
    simultaneous_usage_score: int
    radiator_count: float = 0.0


@dataclass(frozen=True)
class SizingResult:
    boiler_output_kw: int
    cylinder_capacity_l: int
    source: str = "formula"            # conversion | scenario | formula
    scenario_id: Optional[str] = None


@dataclass(frozen=True)
class JobComplexity:
    complexity: ComplexityLevel
    multiplier: float
    job_type: str


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class QuoteOption(_Frozen):
    tier: str
    boiler_make: str
    boiler_model: str
    boiler_type: BoilerTopology
    warranty: str
    base_price: int            # VAT inclusive
    subtotal: int
    vat_amount: int
    is_recommended: bool
    kw_output: float
    flow_rate_lpm: float
    efficiency: str = "A"


class PriceComponent(_Frozen):
    key: str
    name: str
    description: str
    quantity: int = 1
    unit_price: int
    total_price: int


class PriceBreakdown(_Frozen):
    tier: str = "Standard"
    boiler_model: str
    boiler_price: int
    labour_price: int
    cylinder_price: int = 0
    sundry_price: int
    flue_extension_price: int = 0
    condensate_pump_price: int = 0
    thermostat_price: int = 0
    parking_fee: int = 0
    access_fee: int = 0
    location_multiplier: float = 1.0
    subtotal: int
    vat_amount: int
    total_price: int
    water_flow_rate: float = 0.0
    components: Tuple[PriceComponent, ...] = ()


class AnalysisSummary(_Frozen):
    recommended_boiler_size: int
    recommended_boiler_type: BoilerTopology
    cylinder_capacity: int
    heat_load_calculation: float
    hot_water_demand: float
    simultaneous_usage_score: int
    property_complexity: ComplexityLevel
    job_type: str
    installation_multiplier: float
    sizing_source: str
    matched_scenario_id: Optional[str] = None


class Recommendations(_Frozen):
    system_explanation: str
    why_this_boiler: str
    alternative_options: Tuple[str, ...] = ()
    installation_notes: Tuple[str, ...] = ()


class QuoteResult(_Frozen):
    quotes: Tuple[QuoteOption, ...]
    analysis: AnalysisSummary
    price_breakdown: PriceBreakdown
    recommendations: Recommendations
    catalog_status: str = "ok"        # ok | partial | unavailable
    degraded: bool = False
