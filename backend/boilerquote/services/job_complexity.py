"""Installation complexity from (current boiler class, recommended topology)."""
import logging
from typing import Dict, Tuple

from boilerquote.models.quote_schema import (
    BoilerClass,
    BoilerTopology,
    ComplexityLevel,
    JobComplexity,
)

logger = logging.getLogger("boilerquote-complexity")

SURVEY_REQUIRED = JobComplexity(ComplexityLevel.MEDIUM, 1.4, "Boiler Replacement (Survey Required)")

_LIKE_FOR_LIKE: Dict[BoilerClass, BoilerTopology] = {
    BoilerClass.COMBI: BoilerTopology.COMBI,
    BoilerClass.SYSTEM: BoilerTopology.SYSTEM,
    BoilerClass.REGULAR: BoilerTopology.REGULAR,
}

_CONVERSIONS: Dict[Tuple[BoilerClass, BoilerTopology], JobComplexity] = {
    (BoilerClass.COMBI, BoilerTopology.SYSTEM):
        JobComplexity(ComplexityLevel.MEDIUM, 1.3, "Combi to System Boiler Conversion"),
    (BoilerClass.SYSTEM, BoilerTopology.COMBI):
        JobComplexity(ComplexityLevel.MEDIUM, 1.3, "System to Combi Boiler Conversion"),
    (BoilerClass.REGULAR, BoilerTopology.COMBI):
        JobComplexity(ComplexityLevel.COMPLEX, 1.7, "Regular to Combi Boiler Conversion"),
    (BoilerClass.REGULAR, BoilerTopology.SYSTEM):
        JobComplexity(ComplexityLevel.MEDIUM, 1.2, "Regular to System Boiler Conversion"),
}


def classify(current: BoilerClass, recommended: BoilerTopology, request_id: str = "") -> JobComplexity:
    """
    Fixed lookup; anything outside the table (unknown or conventional current
    boiler, combi to regular, system to regular) needs a survey.
    """
    if _LIKE_FOR_LIKE.get(current) is recommended:
        job = JobComplexity(
            ComplexityLevel.SIMPLE, 1.0, f"{recommended.value} Boiler Replacement (Like-for-Like)"
        )
    else:
        job = _CONVERSIONS.get((current, recommended), SURVEY_REQUIRED)

    logger.debug(
        "job classified %s x%s (%s)",
        job.complexity.value,
        job.multiplier,
        job.job_type,
        extra={"request_id": request_id, "stage": "complexity"},
    )
    return job
