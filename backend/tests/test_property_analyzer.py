"""
test_property_analyzer.py — Unit tests for profile parsing and the property analyzer.

Tests cover:
  - Form count parsing ("5+", blanks, zero, garbage) and defaults
  - camelCase / snake_case field names and enum-like normalisation
  - Current boiler classification
  - Radiator proxy, heat load with bedroom floors, hot water demand
  - Simultaneous usage score
"""

import pytest

from boilerquote.models.quote_schema import (
    BoilerClass,
    PropertyProfile,
    classify_boiler_type,
    parse_count,
)
from boilerquote.services import property_analyzer


# ===========================================================================
# Class 1: Input parsing
# ===========================================================================

class TestParseCount:

    @pytest.mark.parametrize("raw,expected", [
        ("3", 3),
        ("5+", 5),
        (" 4 ", 4),
        (2, 2),
        (2.9, 2),
        ("6 bedrooms", 6),
    ])
    def test_valid_values(self, raw, expected):
        assert parse_count(raw, 1) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", "0", 0, -2, "-1", True])
    def test_invalid_values_use_default(self, raw):
        assert parse_count(raw, 7) == 7


class TestPropertyProfile:

    def test_empty_profile_uses_defaults(self):
        p = PropertyProfile()
        assert (p.bedrooms, p.bathrooms, p.occupants) == (1, 1, 2)
        assert p.property_type == "House"
        assert p.boiler_class is BoilerClass.UNKNOWN
        assert p.drain_nearby == "unknown"
        assert p.move_boiler == "no"

    def test_camel_case_form_fields(self):
        p = PropertyProfile.model_validate({
            "bedrooms": "4+", "bathrooms": "2", "occupants": "5",
            "propertyType": "Flat", "currentBoiler": "System boiler",
            "drainNearby": "No", "moveBoiler": "Yes", "flueExtension": "3",
            "parkingDistance": "20", "thermostatUpgrade": "yes",
            "floorLevel": "4", "hasLift": "no",
        })
        assert (p.bedrooms, p.bathrooms, p.occupants) == (4, 2, 5)
        assert p.property_type == "Flat"
        assert p.boiler_class is BoilerClass.SYSTEM
        assert p.drain_nearby == "no"
        assert p.move_boiler == "yes"
        assert p.flue_extension_m == 3
        assert p.parking_distance_m == 20
        assert p.thermostat_upgrade is True
        assert p.floor_level == 4
        assert p.has_lift is False

    def test_snake_case_field_names(self):
        p = PropertyProfile(bedrooms=2, property_type="apartment", current_boiler="combi")
        assert p.bedrooms == 2
        assert p.property_type == "Flat"
        assert p.boiler_class is BoilerClass.COMBI

    def test_unknown_lift_is_none(self):
        assert PropertyProfile(has_lift="not sure").has_lift is None

    def test_profile_is_frozen(self):
        p = PropertyProfile()
        with pytest.raises(Exception):
            p.bedrooms = 4

    def test_fingerprint_stable_across_spellings(self):
        a = PropertyProfile.model_validate({"bedrooms": "3", "propertyType": "house"})
        b = PropertyProfile(bedrooms=3, property_type="House")
        assert a.fingerprint() == b.fingerprint()
        assert len(a.fingerprint()) == 64

    def test_fingerprint_differs_for_different_input(self):
        assert PropertyProfile(bedrooms=3).fingerprint() != PropertyProfile(bedrooms=4).fingerprint()


class TestClassifyBoilerType:

    @pytest.mark.parametrize("text,expected", [
        ("Combi", BoilerClass.COMBI),
        ("Combination boiler", BoilerClass.COMBI),
        ("COMBI boiler", BoilerClass.COMBI),
        ("System", BoilerClass.SYSTEM),
        ("Regular (open vent)", BoilerClass.REGULAR),
        ("Conventional", BoilerClass.CONVENTIONAL),
        ("Heat only", BoilerClass.CONVENTIONAL),
        ("heat-only boiler", BoilerClass.CONVENTIONAL),
        ("Unknown", BoilerClass.UNKNOWN),
        ("", BoilerClass.UNKNOWN),
        (None, BoilerClass.UNKNOWN),
    ])
    def test_classification(self, text, expected):
        assert classify_boiler_type(text) is expected

    def test_first_pattern_wins(self):
        assert classify_boiler_type("combi replacing old system") is BoilerClass.COMBI


# ===========================================================================
# Class 2: Heat load
# ===========================================================================

class TestRadiatorCount:

    def test_house_allowance(self, make_profile):
        # 3 + 1 + living/kitchen/dining 3 + hallway 1
        assert property_analyzer.estimate_radiator_count(make_profile()) == 8

    def test_house_study_and_reception_allowance(self, make_profile):
        assert property_analyzer.estimate_radiator_count(make_profile(bedrooms="4", bathrooms="2")) == 11
        assert property_analyzer.estimate_radiator_count(make_profile(bedrooms="5", bathrooms="2")) == 13

    def test_flat_allowance(self, make_profile):
        p = make_profile(bedrooms="2", propertyType="Flat")
        assert property_analyzer.estimate_radiator_count(p) == 5.5


class TestHeatLoad:

    def test_bedroom_floor_applies(self, make_profile):
        # 8 radiators x 2.0 = 16 kW, floor for 3 bedrooms is 24
        assert property_analyzer.calculate_heat_load(make_profile()) == 24

    def test_large_house_premiums(self, make_profile):
        # 6 + 3 + 6 = 15 radiators -> 30 kW + 3 + 5 = 38, above the 36 floor
        p = make_profile(bedrooms="6", bathrooms="3")
        assert property_analyzer.calculate_heat_load(p) == 38

    def test_five_bed_meets_floor_exactly(self, make_profile):
        p = make_profile(bedrooms="5", bathrooms="3")
        assert property_analyzer.calculate_heat_load(p) == 36

    def test_flat_rounds_to_nearest_kw(self, make_profile):
        # 1 + 7 + 2.5 = 10.5 radiators x 1.7 = 17.85 -> 18
        p = make_profile(bedrooms="1", bathrooms="7", propertyType="Flat")
        assert property_analyzer.calculate_heat_load(p) == 18
        # 1 + 5 + 2.5 = 8.5 x 1.7 = 14.45 -> 14
        p = make_profile(bedrooms="1", bathrooms="5", propertyType="Flat")
        assert property_analyzer.calculate_heat_load(p) == 14

    def test_flat_floor(self, make_profile):
        p = make_profile(bedrooms="2", propertyType="Flat")
        assert property_analyzer.calculate_heat_load(p) == 18


# ===========================================================================
# Class 3: Hot water and simultaneous usage
# ===========================================================================

class TestHotWaterDemand:

    def test_single_bathroom(self, make_profile):
        # max(10, 7.5) L/min x 2.5
        assert property_analyzer.calculate_hot_water_demand(make_profile()) == 25

    def test_occupant_driven_flow_rounds_half_up(self, make_profile):
        # max(10, 15) x 2.5 = 37.5 -> 38
        p = make_profile(occupants="6")
        assert property_analyzer.calculate_hot_water_demand(p) == 38

    def test_multi_bathroom_buffer(self, make_profile):
        # 20 x 2.5 = 50 + min(4, 8)
        p = make_profile(bathrooms="2", occupants="4")
        assert property_analyzer.calculate_hot_water_demand(p) == 54

    def test_buffer_capped_at_8kw(self, make_profile):
        # 50 x 2.5 = 125 + 8
        p = make_profile(bathrooms="5", occupants="2")
        assert property_analyzer.calculate_hot_water_demand(p) == 133


class TestSimultaneousUsageScore:

    @pytest.mark.parametrize("bathrooms,occupants,expected", [
        ("2", "3", 6),
        ("3", "5", 15),
        ("1", "5", 0),
        ("3", "2", 0),
    ])
    def test_score(self, make_profile, bathrooms, occupants, expected):
        p = make_profile(bathrooms=bathrooms, occupants=occupants)
        assert property_analyzer.calculate_simultaneous_usage_score(p) == expected


class TestAnalyze:

    def test_returns_all_signals(self, make_profile):
        req = property_analyzer.analyze(make_profile(bathrooms="2", occupants="4"), request_id="t-1")
        assert req.heat_load_kw == 24
        assert req.hot_water_demand_kw == 54
        assert req.simultaneous_usage_score == 8
        assert req.radiator_count == 9
