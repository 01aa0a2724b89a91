"""
test_job_complexity.py — Lookup table tests for installation complexity.
"""

import pytest

from boilerquote.models.quote_schema import BoilerClass, BoilerTopology, ComplexityLevel
from boilerquote.services.job_complexity import classify


class TestLikeForLike:

    @pytest.mark.parametrize("current,topology", [
        (BoilerClass.COMBI, BoilerTopology.COMBI),
        (BoilerClass.SYSTEM, BoilerTopology.SYSTEM),
        (BoilerClass.REGULAR, BoilerTopology.REGULAR),
    ])
    def test_same_type_is_simple(self, current, topology):
        job = classify(current, topology)
        assert job.complexity is ComplexityLevel.SIMPLE
        assert job.multiplier == 1.0
        assert job.job_type == f"{topology.value} Boiler Replacement (Like-for-Like)"


class TestConversions:

    @pytest.mark.parametrize("current,topology,level,multiplier,job_type", [
        (BoilerClass.COMBI, BoilerTopology.SYSTEM, ComplexityLevel.MEDIUM, 1.3,
         "Combi to System Boiler Conversion"),
        (BoilerClass.SYSTEM, BoilerTopology.COMBI, ComplexityLevel.MEDIUM, 1.3,
         "System to Combi Boiler Conversion"),
        (BoilerClass.REGULAR, BoilerTopology.COMBI, ComplexityLevel.COMPLEX, 1.7,
         "Regular to Combi Boiler Conversion"),
        (BoilerClass.REGULAR, BoilerTopology.SYSTEM, ComplexityLevel.MEDIUM, 1.2,
         "Regular to System Boiler Conversion"),
    ])
    def test_conversion_table(self, current, topology, level, multiplier, job_type):
        job = classify(current, topology)
        assert (job.complexity, job.multiplier, job.job_type) == (level, multiplier, job_type)


class TestSurveyRequired:

    @pytest.mark.parametrize("current,topology", [
        (BoilerClass.UNKNOWN, BoilerTopology.COMBI),
        (BoilerClass.UNKNOWN, BoilerTopology.SYSTEM),
        (BoilerClass.CONVENTIONAL, BoilerTopology.REGULAR),
        (BoilerClass.CONVENTIONAL, BoilerTopology.SYSTEM),
        (BoilerClass.COMBI, BoilerTopology.REGULAR),
        (BoilerClass.SYSTEM, BoilerTopology.REGULAR),
    ])
    def test_outside_table_needs_survey(self, current, topology):
        job = classify(current, topology)
        assert job.complexity is ComplexityLevel.MEDIUM
        assert job.multiplier == 1.4
        assert job.job_type == "Boiler Replacement (Survey Required)"

    def test_repeated_lookup_is_identical(self):
        assert classify(BoilerClass.REGULAR, BoilerTopology.COMBI) == classify(
            BoilerClass.REGULAR, BoilerTopology.COMBI
        )
