"""
Dental / oral health field extraction
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from health_analyzer import config
from health_analyzer.extractors.engine import (
    DomainRules,
    extract_findings,
    extract_score,
    recommends_specialist,
    score_pattern,
)
from health_analyzer.utils.result_parser import parse_analysis_results

logger = logging.getLogger(__name__)

DENTAL_RULES = DomainRules(
    name="dental",
    section_headers=("dental issues", "problems", "concerns"),
    keywords=(
        "cavity", "cavities", "decay", "plaque", "tartar", "gingivitis",
        "periodontal", "discoloration", "staining", "misalignment",
        "crooked", "wisdom tooth", "inflamed gums", "receding gums",
    ),
    score_pattern=score_pattern("oral hygiene|hygiene"),
    specialist_keywords=(
        "visit a dentist", "dental professional", "dentist", "dental checkup",
        "dental visit", "professional cleaning", "dental consultation",
        "see a dentist", "dental attention", "dental care needed",
        "professional examination", "dental treatment",
    ),
)


@dataclass
class DentalFields:
    issues: List[str] = field(default_factory=list)
    hygiene_score: Optional[int] = None
    dentist_recommended: bool = False

    def to_response(self) -> dict:
        return {
            "issues": list(self.issues),
            "hygieneScore": self.hygiene_score,
            "dentistRecommended": self.dentist_recommended,
        }

    def to_record(self) -> dict:
        return {
            "dental_issues": list(self.issues),
            "oral_hygiene_score": self.hygiene_score,
            "dentist_recommendation": self.dentist_recommended,
        }


def should_recommend_dentist(analysis_text: str, concerns: List[str]) -> bool:
    if recommends_specialist(analysis_text, concerns, DENTAL_RULES):
        return True
    # Many concerns at once is treated as a reason to see a dentist
    return len(concerns) >= config.DENTIST_CONCERN_THRESHOLD


def extract(analysis_text: str, concerns: Optional[List[str]] = None) -> DentalFields:
    try:
        if concerns is None:
            concerns = parse_analysis_results(analysis_text).concerns
        return DentalFields(
            issues=extract_findings(analysis_text, DENTAL_RULES),
            hygiene_score=extract_score(analysis_text, DENTAL_RULES),
            dentist_recommended=should_recommend_dentist(analysis_text, concerns),
        )
    except Exception as e:
        logger.warning(f"Dental extraction degraded: {e}")
        return DentalFields()
