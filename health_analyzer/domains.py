"""
Domain registry: binds each analysis type to its prompt, extractor,
storage table and provider specialty.
"""
from dataclasses import dataclass
from typing import Callable, Dict

from health_analyzer.extractors import dental, nutrition, posture, skin, stool
from health_analyzer.models.db_models import (
    DentalAnalysis,
    NutritionAnalysis,
    PostureAnalysis,
    SkinAnalysis,
    StoolAnalysis,
)
from health_analyzer.utils import prompts


@dataclass(frozen=True)
class AnalysisDomain:
    name: str
    noun: str
    prompt: str
    extract: Callable
    record_model: type
    relationship: str
    specialty: str


DOMAINS: Dict[str, AnalysisDomain] = {
    "dental": AnalysisDomain(
        name="dental",
        noun="dental",
        prompt=prompts.DENTAL_CHECK_PROMPT,
        extract=dental.extract,
        record_model=DentalAnalysis,
        relationship="dental",
        specialty="dentist",
    ),
    "skin": AnalysisDomain(
        name="skin",
        noun="skin",
        prompt=prompts.SKIN_TRACKER_PROMPT,
        extract=skin.extract,
        record_model=SkinAnalysis,
        relationship="skin",
        specialty="dermatologist",
    ),
    "posture": AnalysisDomain(
        name="posture",
        noun="posture",
        prompt=prompts.POSTURE_CHECK_PROMPT,
        extract=posture.extract,
        record_model=PostureAnalysis,
        relationship="posture",
        specialty="physiotherapist",
    ),
    "nutrition": AnalysisDomain(
        name="nutrition",
        noun="food",
        prompt=prompts.NUTRI_SNAP_PROMPT,
        extract=nutrition.extract,
        record_model=NutritionAnalysis,
        relationship="nutrition",
        specialty="nutritionist",
    ),
    "stool": AnalysisDomain(
        name="stool",
        noun="stool",
        prompt=prompts.POOP_HEALTH_PROMPT,
        extract=stool.extract,
        record_model=StoolAnalysis,
        relationship="stool",
        specialty="gastroenterologist",
    ),
}


def get_domain(name: str) -> AnalysisDomain:
    try:
        return DOMAINS[name]
    except KeyError:
        raise ValueError(f"Unknown analysis type: {name}") from None
