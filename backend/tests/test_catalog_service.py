"""
test_catalog_service.py — Catalog lookups and snapshot fetching.

Tests cover:
  - Postcode matching (district vs letters-only area, longest pattern wins)
  - Labour lookup by job type and tier
  - Concurrent snapshot fetch, partial failure and total failure
"""

import asyncio

import pytest

from boilerquote.models.catalog_schema import (
    CatalogSnapshot,
    LabourCost,
    LocationMultiplier,
    best_location_match,
    district_code,
    find_labour_cost,
    outward_code,
    pattern_matches,
)
from boilerquote.services.catalog_service import (
    CatalogUnavailableError,
    StaticCatalogService,
    fetch_catalog_snapshot,
)


class TestPostcodeMatching:

    @pytest.mark.parametrize("postcode,expected", [
        ("SW1A 1AA", "SW1A"),
        ("sw1a1aa", "SW1A"),
        ("M1 1AE", "M1"),
        ("m11ae", "M1"),
        ("EC1", "EC1"),
        ("", ""),
    ])
    def test_outward_code(self, postcode, expected):
        assert outward_code(postcode) == expected

    def test_area_pattern_matches_letters_only(self):
        assert pattern_matches("SW", "SW19 2AB")
        assert pattern_matches("B", "B1 1AA")
        assert not pattern_matches("W", "SW19 2AB")
        assert not pattern_matches("B", "BS1 4DJ")

    @pytest.mark.parametrize("outward,expected", [
        ("W1A", "W1"), ("SW1A", "SW1"), ("EC1V", "EC1"), ("W10", "W10"), ("M1", "M1"), ("ZZZ", "ZZZ"),
    ])
    def test_district_code(self, outward, expected):
        assert district_code(outward) == expected

    def test_district_pattern_covers_sub_districts(self):
        assert pattern_matches("W1", "W1A 0AX")
        assert pattern_matches("W1", "w1a0ax")
        assert pattern_matches("W1", "W1 2AB")
        assert not pattern_matches("W1", "W10 5AA")
        assert not pattern_matches("SW1A", "SW1 1AA")
        assert not pattern_matches("SW1A", "SW1B 1AA")

    def test_sub_district_prices_as_its_district(self, seed_snapshot):
        assert seed_snapshot.location_by_postcode("W1A 1AA").postcode_pattern == "W1"
        assert seed_snapshot.location_by_postcode("W1A 1AA").price_multiplier == 1.40
        assert seed_snapshot.location_by_postcode("W10 5AA").price_multiplier == 1.30

    def test_longest_pattern_wins(self, seed_snapshot):
        assert seed_snapshot.location_by_postcode("SW1A 1AA").price_multiplier == 1.45
        assert seed_snapshot.location_by_postcode("SW19 2AB").price_multiplier == 1.35
        assert seed_snapshot.location_by_postcode("W1 2AB").price_multiplier == 1.40
        assert seed_snapshot.location_by_postcode("W5 3AA").price_multiplier == 1.30

    def test_no_match(self, seed_snapshot):
        assert seed_snapshot.location_by_postcode("ZE1 0AA") is None
        assert seed_snapshot.location_by_postcode("") is None

    def test_service_lookup_agrees_with_snapshot(self, static_catalog):
        loc = asyncio.run(static_catalog.get_location_by_postcode("sw1a1aa"))
        assert loc.postcode_pattern == "SW1A"
        assert loc.area_name == "Westminster"

    @pytest.mark.parametrize("postcode", ["SW1A 1AA", "W1A 1AA", "W10 5AA", "SW19 2AB", "B1 1AA", "ZE1 0AA", ""])
    def test_service_and_snapshot_share_matching(self, static_catalog, seed_snapshot, postcode):
        via_service = asyncio.run(static_catalog.get_location_by_postcode(postcode))
        assert via_service == seed_snapshot.location_by_postcode(postcode)
        assert via_service == best_location_match(seed_snapshot.locations, postcode)


class TestLabourLookup:

    def test_by_type_and_tier(self, static_catalog):
        row = asyncio.run(static_catalog.get_labour_cost_by_type(
            "Regular to Combi Boiler Conversion", "Premium"
        ))
        assert row.price == 235_000

    def test_missing_job_type(self, static_catalog, seed_snapshot):
        job = "Boiler Replacement (Survey Required)"
        assert asyncio.run(static_catalog.get_labour_cost_by_type(job, "Standard")) is None
        assert seed_snapshot.labour_cost_by_type(job, "Standard") is None

    def test_service_and_snapshot_share_lookup(self, static_catalog, seed_snapshot):
        for row in seed_snapshot.labour_costs:
            via_service = asyncio.run(static_catalog.get_labour_cost_by_type(row.job_type, row.tier))
            assert via_service == seed_snapshot.labour_cost_by_type(row.job_type, row.tier) == row

    def test_first_row_wins(self):
        rows = [
            LabourCost(job_type="Boiler Swap", tier="Standard", price=100_000),
            LabourCost(job_type="Boiler Swap", tier="Standard", price=200_000),
        ]
        assert find_labour_cost(rows, "Boiler Swap", "Standard").price == 100_000
        assert find_labour_cost(rows, "Boiler Swap", "Premium") is None


class TestSnapshot:

    def test_seed_snapshot_complete(self, seed_snapshot):
        assert seed_snapshot.status == "ok"
        assert seed_snapshot.failed_sources == ()
        assert len(seed_snapshot.boilers) == 23
        assert len(seed_snapshot.labour_costs) == 14
        assert len(seed_snapshot.sundries) == 6
        assert len(seed_snapshot.locations) == 14

    def test_custom_static_catalog(self):
        service = StaticCatalogService(
            boilers=[], locations=[LocationMultiplier(postcode_pattern="ZZ", price_multiplier=1.5)]
        )
        snapshot = asyncio.run(fetch_catalog_snapshot(service))
        assert snapshot.boilers == ()
        assert snapshot.location_by_postcode("ZZ1 1AA").price_multiplier == 1.5
        assert snapshot.status == "ok"

    def test_partial_failure_keeps_the_rest(self, partial_catalog):
        snapshot = asyncio.run(fetch_catalog_snapshot(partial_catalog, request_id="t-partial"))
        assert snapshot.status == "partial"
        assert snapshot.failed_sources == ("labour_costs", "locations")
        assert snapshot.labour_costs == ()
        assert snapshot.locations == ()
        assert len(snapshot.boilers) == 23

    def test_total_failure_raises(self, dead_catalog):
        with pytest.raises(CatalogUnavailableError) as info:
            asyncio.run(fetch_catalog_snapshot(dead_catalog))
        assert len(info.value.errors) == 4
        assert all(isinstance(e, ConnectionError) for e in info.value.errors)
        assert "unavailable" in str(info.value)

    def test_snapshot_is_frozen(self, seed_snapshot):
        with pytest.raises(Exception):
            seed_snapshot.boilers = ()

    def test_empty_snapshot_status(self):
        assert CatalogSnapshot().status == "ok"
        assert CatalogSnapshot(failed_sources=("boilers",)).status == "partial"
