"""
heating_scenarios.py — Reference installation tables used for sizing.

Two tables of proven installations back the sizing chain:
  - CONVERSION_SCENARIOS: keyed exactly by (bedrooms, bathrooms, occupants,
    current boiler class). Records what was installed when converting from
    that boiler.
  - UK_HEATING_SCENARIOS: typical UK properties by type and counts with the
    boiler/cylinder that served them well. Matched by closest counts.

Plus the baseline size-recommendation tables the formula fallback starts from.
The figures are calibration data, not thermal models.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from boilerquote import config
from boilerquote.models.quote_schema import BoilerClass, BoilerTopology

C = BoilerTopology.COMBI
S = BoilerTopology.SYSTEM
R = BoilerTopology.REGULAR


@dataclass(frozen=True)
class ConversionScenario:
    scenario_id: str
    bedrooms: int
    bathrooms: int
    occupants: int
    current_class: BoilerClass
    recommended_system: BoilerTopology
    boiler_kw: int
    cylinder_l: int
    reasoning: str


@dataclass(frozen=True)
class HeatingScenario:
    scenario_id: str
    property_description: str
    property_type: str          # House | Flat
    bedrooms: int
    bathrooms: int
    occupants: int
    system_type: BoilerTopology
    boiler_kw: int
    cylinder_l: int = 0

    def distance(self, bedrooms: int, bathrooms: int, occupants: int) -> int:
        return (
            abs(self.bedrooms - bedrooms)
            + abs(self.bathrooms - bathrooms)
            + abs(self.occupants - occupants)
        )


# ---------------------------------------------------------------------------
# Conversion scenarios
# ---------------------------------------------------------------------------
CONVERSION_SCENARIOS: Tuple[ConversionScenario, ...] = (
    ConversionScenario("CONV-01", 1, 1, 1, BoilerClass.REGULAR, C, 24, 0,
                       "Tank and cylinder removed; combi frees the airing cupboard"),
    ConversionScenario("CONV-02", 2, 1, 2, BoilerClass.REGULAR, C, 24, 0,
                       "Single bathroom demand met on demand by a 24kW combi"),
    ConversionScenario("CONV-03", 3, 1, 3, BoilerClass.REGULAR, C, 28, 0,
                       "Loft tanks removed; 28kW combi covers one bathroom for three"),
    ConversionScenario("CONV-04", 3, 2, 4, BoilerClass.REGULAR, S, 28, 210,
                       "Sealed system with 210L unvented cylinder for two bathrooms"),
    ConversionScenario("CONV-05", 4, 2, 4, BoilerClass.COMBI, S, 30, 250,
                       "Combi struggled with two showers; 250L cylinder added"),
    ConversionScenario("CONV-06", 3, 2, 3, BoilerClass.SYSTEM, S, 28, 210,
                       "Like-for-like system swap with cylinder upgrade"),
    ConversionScenario("CONV-07", 2, 1, 2, BoilerClass.SYSTEM, C, 24, 0,
                       "Small household; cylinder removed in favour of a combi"),
    ConversionScenario("CONV-08", 4, 3, 5, BoilerClass.REGULAR, R, 35, 250,
                       "Existing open-vent pipework retained with larger cylinder"),
    ConversionScenario("CONV-09", 5, 3, 6, BoilerClass.REGULAR, R, 40, 300,
                       "Large period property kept on gravity-fed hot water"),
    ConversionScenario("CONV-10", 3, 1, 4, BoilerClass.COMBI, C, 28, 0,
                       "Like-for-like combi uprated for a family of four"),
    ConversionScenario("CONV-11", 2, 1, 2, BoilerClass.COMBI, C, 24, 0,
                       "Like-for-like combi replacement"),
    ConversionScenario("CONV-12", 3, 2, 4, BoilerClass.CONVENTIONAL, S, 28, 210,
                       "Heat-only boiler replaced by a sealed system"),
)


# ---------------------------------------------------------------------------
# UK heating scenarios
# ---------------------------------------------------------------------------
UK_HEATING_SCENARIOS: Tuple[HeatingScenario, ...] = (
    # Combi
    HeatingScenario("UK-C01", "1-bed flat", "Flat", 1, 1, 1, C, 24),
    HeatingScenario("UK-C02", "1-bed flat", "Flat", 1, 1, 2, C, 24),
    HeatingScenario("UK-C03", "2-bed flat", "Flat", 2, 1, 2, C, 24),
    HeatingScenario("UK-C04", "2-bed terraced house", "House", 2, 1, 3, C, 28),
    HeatingScenario("UK-C05", "3-bed semi-detached house", "House", 3, 1, 3, C, 28),
    HeatingScenario("UK-C06", "3-bed semi-detached house", "House", 3, 1, 4, C, 30),
    HeatingScenario("UK-C07", "3-bed house with en-suite", "House", 3, 2, 2, C, 32),
    HeatingScenario("UK-C08", "2-bed flat with en-suite", "Flat", 2, 2, 2, C, 32),
    HeatingScenario("UK-C09", "4-bed detached house", "House", 4, 2, 3, C, 35),
    HeatingScenario("UK-C10", "4-bed detached house with en-suites", "House", 4, 3, 4, C, 40),
    # System
    HeatingScenario("UK-S01", "2-bed flat with en-suite", "Flat", 2, 2, 4, S, 24, 150),
    HeatingScenario("UK-S02", "3-bed semi-detached house", "House", 3, 2, 3, S, 28, 210),
    HeatingScenario("UK-S03", "3-bed semi-detached house", "House", 3, 2, 4, S, 28, 210),
    HeatingScenario("UK-S04", "4-bed detached house", "House", 4, 2, 4, S, 30, 250),
    HeatingScenario("UK-S05", "4-bed detached house", "House", 4, 2, 5, S, 32, 250),
    HeatingScenario("UK-S06", "5-bed detached house", "House", 5, 1, 5, S, 32, 250),
    HeatingScenario("UK-S07", "5-bed detached house", "House", 5, 2, 5, S, 35, 300),
    HeatingScenario("UK-S08", "6-bed country house", "House", 6, 4, 6, S, 40, 350),
    HeatingScenario("UK-S09", "7-bed manor house", "House", 7, 6, 8, S, 50, 500),
    # Regular
    HeatingScenario("UK-R01", "4-bed Victorian house", "House", 4, 2, 4, R, 30, 210),
    HeatingScenario("UK-R02", "5-bed detached house", "House", 5, 3, 5, R, 35, 300),
    HeatingScenario("UK-R03", "5-bed period house", "House", 5, 3, 6, R, 40, 300),
    HeatingScenario("UK-R04", "6-bed detached house", "House", 6, 3, 5, R, 42, 350),
)


# ---------------------------------------------------------------------------
# Baseline size recommendations (formula fallback starting point)
# ---------------------------------------------------------------------------
_STORED_BASELINE_KW: Dict[int, int] = {1: 18, 2: 24, 3: 28, 4: 30, 5: 35}

BASELINE_BOILER_KW: Dict[BoilerTopology, Dict[int, int]] = {
    C: {1: 24, 2: 24, 3: 28, 4: 32, 5: 35},
    S: _STORED_BASELINE_KW,
    R: _STORED_BASELINE_KW,
}

BASELINE_CYLINDER_L: Dict[int, int] = {1: 120, 2: 150, 3: 180, 4: 210, 5: 250}


def baseline_boiler_kw(bedrooms: int, topology: BoilerTopology) -> int:
    return BASELINE_BOILER_KW[topology][min(max(bedrooms, 1), 5)]


def baseline_cylinder_l(bedrooms: int) -> int:
    return BASELINE_CYLINDER_L[min(max(bedrooms, 1), 5)]


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def find_conversion_scenario(
    bedrooms: int, bathrooms: int, occupants: int, current_class: BoilerClass
) -> Optional[ConversionScenario]:
    for scenario in CONVERSION_SCENARIOS:
        if (
            scenario.bedrooms == bedrooms
            and scenario.bathrooms == bathrooms
            and scenario.occupants == occupants
            and scenario.current_class is current_class
        ):
            return scenario
    return None


def find_best_matching_scenario(
    bedrooms: int,
    bathrooms: int,
    occupants: int,
    property_type: str,
    topology: BoilerTopology,
    max_distance: int = config.SCENARIO_MAX_DISTANCE,
) -> Optional[HeatingScenario]:
    """
    Closest scenario of the same topology.

    Ranked by count distance, then exact property type, then table order.
    Returns None when nothing lies within ``max_distance``.
    """
    best: Optional[HeatingScenario] = None
    best_key: Optional[Tuple[int, int]] = None
    for scenario in UK_HEATING_SCENARIOS:
        if scenario.system_type is not topology:
            continue
        dist = scenario.distance(bedrooms, bathrooms, occupants)
        if dist > max_distance:
            continue
        key = (dist, 0 if scenario.property_type == property_type else 1)
        if best_key is None or key < best_key:
            best, best_key = scenario, key
    return best


def scenarios_with_output(boiler_kw: int, topology: BoilerTopology) -> List[HeatingScenario]:
    return [
        s for s in UK_HEATING_SCENARIOS
        if s.boiler_kw == boiler_kw and s.system_type is topology
    ]


def alternative_scenarios(
    bedrooms: int, topology: BoilerTopology, scenarios: Iterable[HeatingScenario] = UK_HEATING_SCENARIOS
) -> List[HeatingScenario]:
    """Scenarios within one bedroom of the property that use a different system."""
    return [
        s for s in scenarios
        if abs(s.bedrooms - bedrooms) <= 1 and s.system_type is not topology
    ]
