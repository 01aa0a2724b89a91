"""
test_explanation_engine.py — Customer-facing recommendation text.
"""

import pytest

from boilerquote.models.quote_schema import (
    BoilerTopology,
    ComplexityLevel,
    HeatingRequirement,
    JobComplexity,
    SizingResult,
)
from boilerquote.services import explanation_engine

COMBI = BoilerTopology.COMBI
SYSTEM = BoilerTopology.SYSTEM
REGULAR = BoilerTopology.REGULAR

SIMPLE = JobComplexity(ComplexityLevel.SIMPLE, 1.0, "Combi Boiler Replacement (Like-for-Like)")
COMPLEX = JobComplexity(ComplexityLevel.COMPLEX, 1.7, "Regular to Combi Boiler Conversion")


class TestSystemExplanation:

    def test_combi_with_matching_scenario(self, make_profile):
        text = explanation_engine.system_explanation(make_profile(), COMBI, SizingResult(28, 0))
        assert text.startswith("A 28kW combi boiler is ideal for your house with 3 bedroom(s)")
        assert "3-bed semi-detached house properties" in text

    def test_system_mentions_cylinder(self, make_profile):
        p = make_profile(bathrooms="2", occupants="3")
        text = explanation_engine.system_explanation(p, SYSTEM, SizingResult(28, 210))
        assert "28kW system boiler with 210L cylinder" in text
        assert "2 bathroom(s) and 3 occupant(s)" in text

    def test_regular_keeps_existing_configuration(self, make_profile):
        p = make_profile(bedrooms="5", bathrooms="3", occupants="5", currentBoiler="Regular")
        text = explanation_engine.system_explanation(p, REGULAR, SizingResult(35, 300))
        assert "maintains your existing system configuration" in text
        assert "5-bed detached house properties" in text

    def test_no_scenario_no_suffix(self, make_profile):
        p = make_profile(bedrooms="1", occupants="8")
        text = explanation_engine.system_explanation(p, COMBI, SizingResult(24, 0))
        assert "properties" not in text


class TestBoilerExplanation:

    def test_heat_load_and_proven_count(self):
        req = HeatingRequirement(heat_load_kw=24, hot_water_demand_kw=25, simultaneous_usage_score=0)
        text = explanation_engine.boiler_explanation(COMBI, SizingResult(28, 0), req)
        assert "heat load of 24kW and hot water demand of 25kW" in text
        assert "proven effective across 2 similar UK property installations" in text

    def test_no_scenario_with_that_output(self):
        req = HeatingRequirement(heat_load_kw=36, hot_water_demand_kw=50, simultaneous_usage_score=0)
        text = explanation_engine.boiler_explanation(COMBI, SizingResult(42, 0), req)
        assert "proven effective" not in text


class TestAlternatives:

    def test_combi_suggests_average_system_size(self, make_profile):
        options = explanation_engine.alternative_options(make_profile(), COMBI)
        assert options[:2] == [
            "System boiler with cylinder for higher flow rates",
            "Electric shower installation for additional hot water",
        ]
        # UK-S01..S05: (24 + 28 + 28 + 30 + 32) / 5
        assert options[2] == "28kW system boiler based on similar UK installations"

    def test_system_suggests_average_combi_size(self, make_profile):
        options = explanation_engine.alternative_options(make_profile(), SYSTEM)
        # UK-C03..C10: 249 / 8
        assert options[-1] == "31kW combi boiler based on similar UK installations"

    def test_regular_fixed_options(self, make_profile):
        options = explanation_engine.alternative_options(make_profile(bedrooms="5"), REGULAR)
        assert options == [
            "System boiler conversion for improved efficiency",
            "Combi boiler conversion for space saving",
        ]


class TestInstallationNotes:

    def test_simple_job_standard_notes_only(self, make_profile):
        notes = explanation_engine.installation_notes(make_profile(), SIMPLE)
        assert notes == [
            "All work completed to Gas Safe standards with certification",
            "System commissioning and performance testing included",
        ]

    def test_conditional_notes_in_order(self, make_profile):
        p = make_profile(drainNearby="No", moveBoiler="Yes", parkingSituation="Paid street parking")
        notes = explanation_engine.installation_notes(p, COMPLEX)
        assert notes[:4] == [
            "Complex installation requiring pipework modifications",
            "Additional time required for system conversion",
            "Condensate pump required due to lack of nearby drain",
            "Boiler relocation will require additional pipework and gas supply modifications",
        ]
        assert notes[4] == explanation_engine.PAID_PARKING_NOTE
        assert len(notes) == 7

    @pytest.mark.parametrize("situation", [None, "Driveway", "Free street parking"])
    def test_no_parking_note_unless_paid(self, make_profile, situation):
        p = make_profile(parkingSituation=situation)
        assert explanation_engine.PAID_PARKING_NOTE not in explanation_engine.installation_notes(p, SIMPLE)


class TestGenerate:

    def test_bundles_all_parts(self, make_profile):
        req = HeatingRequirement(heat_load_kw=24, hot_water_demand_kw=25, simultaneous_usage_score=0)
        recs = explanation_engine.generate(make_profile(), COMBI, SizingResult(28, 0), req, SIMPLE)
        assert recs.system_explanation.startswith("A 28kW combi boiler")
        assert "28kW combi boiler is sized" in recs.why_this_boiler
        assert isinstance(recs.alternative_options, tuple)
        assert len(recs.installation_notes) == 2
