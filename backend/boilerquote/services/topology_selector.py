"""
topology_selector.py — Combi / System / Regular decision.

The decision is an ordered list of guarded rules; the first rule whose guard
holds decides the topology. Reordering the list changes quotes.

The tipping point for leaving Combi is simultaneous hot water demand
(bathrooms x likely shower concurrency), not raw bedroom count. A customer
who already has a Combi keeps one where it is workable, bounded by the two
mandatory System rules at the top which no preference can override.
"""
import logging
from typing import Callable, NamedTuple, Tuple

from boilerquote import config
from boilerquote.models.quote_schema import BoilerClass, BoilerTopology, PropertyProfile

logger = logging.getLogger("boilerquote-topology")


class TopologyRule(NamedTuple):
    name: str
    applies: Callable[[PropertyProfile], bool]
    topology: BoilerTopology


def _prefers_combi(p: PropertyProfile) -> bool:
    return p.boiler_class is BoilerClass.COMBI


def _has_legacy_open_vent(p: PropertyProfile) -> bool:
    return p.boiler_class in (BoilerClass.REGULAR, BoilerClass.CONVENTIONAL)


def _two_bath_simultaneous_use(p: PropertyProfile) -> bool:
    return (
        p.occupants >= 4
        or (p.occupants >= 3 and p.bedrooms >= 3)
        or p.bedrooms >= 4
    )


TOPOLOGY_RULES: Tuple[TopologyRule, ...] = (
    TopologyRule(
        "mandatory_system_bathrooms",
        lambda p: p.bathrooms >= config.MANDATORY_SYSTEM_BATHROOMS,
        BoilerTopology.SYSTEM,
    ),
    TopologyRule(
        "mandatory_system_large_household",
        lambda p: p.bedrooms >= config.MANDATORY_SYSTEM_BEDROOMS
        and p.occupants >= config.MANDATORY_SYSTEM_OCCUPANTS,
        BoilerTopology.SYSTEM,
    ),
    TopologyRule(
        "combi_preference_high_output",
        lambda p: _prefers_combi(p) and 3 <= p.bathrooms <= 4,
        BoilerTopology.COMBI,
    ),
    TopologyRule(
        "combi_preference_small_property",
        lambda p: _prefers_combi(p) and p.bedrooms <= 2,
        BoilerTopology.COMBI,
    ),
    TopologyRule(
        "combi_preference_medium_property",
        lambda p: _prefers_combi(p) and p.bedrooms <= 3 and p.bathrooms <= 3,
        BoilerTopology.COMBI,
    ),
    TopologyRule(
        "single_bath_large_household",
        lambda p: p.bathrooms == 1 and p.bedrooms >= 5 and p.occupants >= 5,
        BoilerTopology.SYSTEM,
    ),
    TopologyRule(
        "single_bath",
        lambda p: p.bathrooms == 1,
        BoilerTopology.COMBI,
    ),
    TopologyRule(
        "two_bath_simultaneous_use",
        lambda p: p.bathrooms == 2 and _two_bath_simultaneous_use(p),
        BoilerTopology.SYSTEM,
    ),
    TopologyRule(
        "two_bath_high_power_combi",
        lambda p: p.bathrooms == 2,
        BoilerTopology.COMBI,
    ),
    TopologyRule(
        "keep_existing_regular",
        lambda p: _has_legacy_open_vent(p) and (p.bathrooms >= 2 or p.bedrooms >= 4),
        BoilerTopology.REGULAR,
    ),
    TopologyRule(
        "premium_property_regular",
        lambda p: p.bedrooms >= 5 and p.bathrooms >= 3,
        BoilerTopology.REGULAR,
    ),
    TopologyRule(
        "default_combi",
        lambda p: True,
        BoilerTopology.COMBI,
    ),
)


def select_topology_with_rule(profile: PropertyProfile) -> Tuple[BoilerTopology, str]:
    """Return the topology and the name of the rule that decided it."""
    for rule in TOPOLOGY_RULES:
        if rule.applies(profile):
            return rule.topology, rule.name
    # default_combi always applies; kept for type checkers
    return BoilerTopology.COMBI, "default_combi"


def select_topology(profile: PropertyProfile, request_id: str = "") -> BoilerTopology:
    topology, rule_name = select_topology_with_rule(profile)
    logger.debug(
        "topology %s selected by rule %s",
        topology.value,
        rule_name,
        extra={"request_id": request_id, "stage": "topology", "topology": topology.value},
    )
    return topology
