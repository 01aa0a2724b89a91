"""
conftest.py — Shared pytest fixtures for the boiler quote backend test suite.

No database fixtures are defined here. The engine tests run against the
in-memory seed catalog (StaticCatalogService) or against catalog doubles that
fail some or all lookups.

Import-path bootstrapping:
    The ``backend/`` directory is inserted into sys.path so that all
    ``boilerquote.*`` imports resolve correctly regardless of where pytest is
    invoked.
"""

import asyncio
import os
import sys

import pytest

# ---------------------------------------------------------------------------
# Ensure ``backend/`` is on the import path before any boilerquote imports.
# ---------------------------------------------------------------------------
_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------

@pytest.fixture
def make_profile():
    """
    Factory for PropertyProfile built from web-form style values.

    Defaults describe a 3-bed, 1-bath, 3-occupant house replacing a combi,
    with a drain nearby and no add-ons.
    """
    from boilerquote.models.quote_schema import PropertyProfile

    def _make(**overrides):
        data = {
            "bedrooms": "3",
            "bathrooms": "1",
            "occupants": "3",
            "propertyType": "House",
            "currentBoiler": "Combi",
            "drainNearby": "Yes",
            "moveBoiler": "No",
            "postcode": "B1 1AA",
        }
        data.update(overrides)
        return PropertyProfile.model_validate(data)

    return _make


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def static_catalog():
    """StaticCatalogService over the seed data."""
    from boilerquote.services.catalog_service import StaticCatalogService
    return StaticCatalogService()


@pytest.fixture(scope="session")
def seed_snapshot(static_catalog):
    """CatalogSnapshot of the seed data, fetched once per session."""
    from boilerquote.services.catalog_service import fetch_catalog_snapshot
    return asyncio.run(fetch_catalog_snapshot(static_catalog))


@pytest.fixture(scope="session")
def empty_catalog_snapshot():
    """A snapshot with nothing in it: every price falls back to defaults."""
    from boilerquote.models.catalog_schema import CatalogSnapshot
    return CatalogSnapshot()


class _FailingCatalog:
    """Seed catalog double whose named lookups raise ConnectionError."""

    def __init__(self, failing):
        from boilerquote.services.catalog_service import StaticCatalogService

        self._inner = StaticCatalogService()
        self._failing = set(failing)

    def _lookup(self, name):
        async def _call():
            if name in self._failing:
                raise ConnectionError(f"{name} store unreachable")
            return await getattr(self._inner, f"get_{name}")()
        return _call

    def __getattr__(self, attr):
        if attr.startswith("get_"):
            return self._lookup(attr[len("get_"):])
        raise AttributeError(attr)


@pytest.fixture
def dead_catalog():
    """Catalog whose four lookups all fail."""
    return _FailingCatalog(["boilers", "labour_costs", "sundries", "locations"])


@pytest.fixture
def partial_catalog():
    """Catalog whose labour and location lookups fail."""
    return _FailingCatalog(["labour_costs", "locations"])


@pytest.fixture(autouse=True)
def _reset_metrics():
    """Keep the QuoteMetrics singleton independent between tests."""
    from boilerquote.services.perf_monitor import metrics
    metrics.reset()
    yield
    metrics.reset()
