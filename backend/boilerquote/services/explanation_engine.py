"""
explanation_engine.py — Customer-facing rationale strings.

Formatting only: every figure comes from earlier pipeline stages or the
reference scenario tables.
"""
from typing import List

from boilerquote.models.quote_schema import (
    BoilerTopology,
    ComplexityLevel,
    HeatingRequirement,
    JobComplexity,
    PropertyProfile,
    Recommendations,
    SizingResult,
)
from boilerquote.services import heating_scenarios as scenarios
from boilerquote.services.rounding import round_half_up, to_decimal

PAID_PARKING_NOTE = (
    "Parking arrangements: this property is in a paid parking area and parking "
    "costs are not included in the quotation. Our engineer will arrange a visitor "
    "permit or agree the required parking time with you; you can supply the ticket "
    "directly or reimburse the engineer."
)


def system_explanation(profile: PropertyProfile, topology: BoilerTopology, sizing: SizingResult) -> str:
    kw, litres = sizing.boiler_output_kw, sizing.cylinder_capacity_l
    match = scenarios.find_best_matching_scenario(
        profile.bedrooms, profile.bathrooms, profile.occupants, profile.property_type, topology
    )
    kind = profile.property_type.lower()

    if topology is BoilerTopology.COMBI:
        text = (
            f"A {kw}kW combi boiler is ideal for your {kind} with {profile.bedrooms} bedroom(s) "
            f"and {profile.bathrooms} bathroom(s). It provides instant hot water without needing "
            f"a separate cylinder, saving space and installation costs."
        )
        suffix = "This specification matches proven installations in similar {} properties across the UK."
    elif topology is BoilerTopology.SYSTEM:
        text = (
            f"A {kw}kW system boiler with {litres}L cylinder is recommended for your property with "
            f"{profile.bathrooms} bathroom(s) and {profile.occupants} occupant(s). This provides "
            f"excellent hot water pressure and flow rates for simultaneous use across multiple outlets."
        )
        suffix = "This configuration matches proven installations in similar {} properties across the UK."
    else:
        text = (
            f"A {kw}kW regular boiler with {litres}L cylinder maintains your existing system "
            f"configuration while providing reliable heating and hot water for your "
            f"{profile.bedrooms} bedroom {kind}."
        )
        suffix = "This specification is based on successful installations in comparable {} properties."

    if match is not None:
        text += " " + suffix.format(match.property_description.lower())
    return text


def boiler_explanation(topology: BoilerTopology, sizing: SizingResult, requirement: HeatingRequirement) -> str:
    kw = sizing.boiler_output_kw
    text = (
        f"This {kw}kW {topology.value.lower()} boiler is sized based on your calculated heat load of "
        f"{requirement.heat_load_kw}kW and hot water demand of {requirement.hot_water_demand_kw}kW. "
        f"The selected output ensures efficient operation while meeting peak demand periods."
    )
    proven = scenarios.scenarios_with_output(kw, topology)
    if proven:
        text += f" This boiler size is proven effective across {len(proven)} similar UK property installations."
    return text


def _average_kw(matches: List[scenarios.HeatingScenario]) -> int:
    total = sum(s.boiler_kw for s in matches)
    return round_half_up(to_decimal(total) / len(matches))


def alternative_options(profile: PropertyProfile, topology: BoilerTopology) -> List[str]:
    alternatives = scenarios.alternative_scenarios(profile.bedrooms, topology)

    if topology is BoilerTopology.COMBI:
        options = [
            "System boiler with cylinder for higher flow rates",
            "Electric shower installation for additional hot water",
        ]
        similar = [s for s in alternatives if s.system_type is BoilerTopology.SYSTEM]
        if similar:
            options.append(f"{_average_kw(similar)}kW system boiler based on similar UK installations")
    elif topology is BoilerTopology.SYSTEM:
        options = [
            "High-output combi boiler for space saving",
            "Larger cylinder for extended hot water storage",
        ]
        similar = [s for s in alternatives if s.system_type is BoilerTopology.COMBI]
        if similar:
            options.append(f"{_average_kw(similar)}kW combi boiler based on similar UK installations")
    else:
        options = [
            "System boiler conversion for improved efficiency",
            "Combi boiler conversion for space saving",
        ]
    return options


def installation_notes(profile: PropertyProfile, complexity: JobComplexity) -> List[str]:
    notes: List[str] = []
    if complexity.complexity is ComplexityLevel.COMPLEX:
        notes.append("Complex installation requiring pipework modifications")
        notes.append("Additional time required for system conversion")
    if profile.drain_nearby == "no":
        notes.append("Condensate pump required due to lack of nearby drain")
    if profile.move_boiler == "yes":
        notes.append("Boiler relocation will require additional pipework and gas supply modifications")
    if profile.parking_situation and "paid" in profile.parking_situation.lower():
        notes.append(PAID_PARKING_NOTE)
    notes.append("All work completed to Gas Safe standards with certification")
    notes.append("System commissioning and performance testing included")
    return notes


def generate(
    profile: PropertyProfile,
    topology: BoilerTopology,
    sizing: SizingResult,
    requirement: HeatingRequirement,
    complexity: JobComplexity,
) -> Recommendations:
    return Recommendations(
        system_explanation=system_explanation(profile, topology, sizing),
        why_this_boiler=boiler_explanation(topology, sizing, requirement),
        alternative_options=tuple(alternative_options(profile, topology)),
        installation_notes=tuple(installation_notes(profile, complexity)),
    )
