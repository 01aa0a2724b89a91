from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class BoilerOffering(BaseModel):
    """
    Boiler model available for quoting.
    dhw_kw is the rated domestic hot water output used for size matching.
    """
    model_config = ConfigDict(frozen=True)

    make: str = Field(..., description="e.g., Worcester Bosch")
    model: str = Field(..., description="e.g., Greenstar 4000 30kW")
    boiler_type: str = Field(..., description="Combi | System | Regular")
    tier: str = Field(..., description="Budget | Mid-Range | Premium")
    dhw_kw: float = Field(..., description="Rated DHW output in kW")
    supply_price: int = Field(..., description="Supply price in pence, ex VAT")
    warranty_years: int = 10
    flow_rate_lpm: Optional[float] = Field(None, description="Hot water flow rate, litres/min")
    efficiency_rating: str = "A"


class LabourCost(BaseModel):
    model_config = ConfigDict(frozen=True)

    job_type: str = Field(..., description="Job type label, e.g. 'Combi to System Boiler Conversion'")
    tier: str = Field(..., description="Standard | Premium")
    price: int = Field(..., description="Base labour price in pence")


class SundryCost(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    price: int


class LocationMultiplier(BaseModel):
    model_config = ConfigDict(frozen=True)

    postcode_pattern: str = Field(..., description="District ('SW1A') or letters-only area ('SW')")
    area_name: str = ""
    price_multiplier: float = 1.0


_OUTWARD = re.compile(r"^([A-Z]{1,2})(\d{1,2})([A-Z]?)$")
_AREA = re.compile(r"^([A-Z]{1,2})")


def outward_code(postcode: str) -> str:
    """
    Return the outward code of a UK postcode ("sw1a 1aa" -> "SW1A").

    Full postcodes without a space lose their 3-character inward code;
    anything shorter than 5 characters is treated as an outward code already.
    """
    text = (postcode or "").upper().strip()
    if " " in text:
        return text.split()[0]
    if len(text) >= 5:
        return text[:-3]
    return text


def district_code(outward: str) -> str:
    """
    Drop the sub-district letter of a London outward code ("W1A" -> "W1").
    Codes without one, or that do not parse, come back unchanged.
    """
    parts = _OUTWARD.match(outward)
    if parts is None:
        return outward
    return parts.group(1) + parts.group(2)


def pattern_matches(pattern: str, postcode: str) -> bool:
    """
    True when the location pattern covers the postcode's outward code.

    A pattern covers an exact outward code ("SW1A"), the district that code
    belongs to ("W1" covers "W1A" but not "W10"), or a letters-only area ("SW").
    """
    pat = pattern.upper().replace(" ", "")
    outward = outward_code(postcode)
    if not pat or not outward:
        return False
    if outward == pat or district_code(outward) == pat:
        return True
    if pat.isalpha():
        area = _AREA.match(outward)
        return bool(area) and area.group(1) == pat
    return False


def best_location_match(
    locations: Iterable[LocationMultiplier], postcode: str
) -> Optional[LocationMultiplier]:
    """Longest matching pattern wins; ties keep catalog order."""
    best: Optional[LocationMultiplier] = None
    for loc in locations:
        if pattern_matches(loc.postcode_pattern, postcode):
            if best is None or len(loc.postcode_pattern) > len(best.postcode_pattern):
                best = loc
    return best


def find_labour_cost(rows: Iterable[LabourCost], job_type: str, tier: str) -> Optional[LabourCost]:
    for row in rows:
        if row.job_type == job_type and row.tier == tier:
            return row
    return None


class CatalogSnapshot(BaseModel):
    """
    Immutable view of the pricing catalog taken once per quote.
    failed_sources lists the lookups that could not be fetched.
    """
    model_config = ConfigDict(frozen=True)

    boilers: Tuple[BoilerOffering, ...] = ()
    labour_costs: Tuple[LabourCost, ...] = ()
    sundries: Tuple[SundryCost, ...] = ()
    locations: Tuple[LocationMultiplier, ...] = ()
    failed_sources: Tuple[str, ...] = ()

    @property
    def status(self) -> str:
        return "partial" if self.failed_sources else "ok"

    def location_by_postcode(self, postcode: str) -> Optional[LocationMultiplier]:
        return best_location_match(self.locations, postcode)

    def labour_cost_by_type(self, job_type: str, tier: str) -> Optional[LabourCost]:
        return find_labour_cost(self.labour_costs, job_type, tier)


def empty_snapshot(failed_sources: List[str]) -> CatalogSnapshot:
    return CatalogSnapshot(failed_sources=tuple(failed_sources))
