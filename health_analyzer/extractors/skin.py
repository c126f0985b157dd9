"""
Skin condition field extraction
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from health_analyzer import config
from health_analyzer.extractors.engine import (
    DomainRules,
    extract_findings,
    extract_score,
    mentions_serious,
    recommends_specialist,
    score_pattern,
)
from health_analyzer.utils.result_parser import parse_analysis_results

logger = logging.getLogger(__name__)

SKIN_RULES = DomainRules(
    name="skin",
    section_headers=("skin conditions", "skin issues", "potential conditions"),
    keywords=(
        "acne", "rosacea", "eczema", "psoriasis", "dermatitis",
        "folliculitis", "hives", "rash", "melanoma", "mole",
        "sunburn", "hyperpigmentation", "dryness", "irritation",
    ),
    score_pattern=score_pattern("severity|condition", "score|rating|level"),
    specialist_keywords=(
        "dermatologist", "skin specialist", "medical attention",
        "professional opinion", "medical consultation", "doctor",
        "healthcare provider", "medical professional", "seek treatment",
        "medical advice", "professional evaluation",
    ),
    serious_keywords=(
        "melanoma", "basal cell", "squamous cell", "skin cancer",
        "infection", "severe", "spreading", "worsen", "ulcer",
    ),
)


@dataclass
class SkinFields:
    conditions: List[str] = field(default_factory=list)
    severity_score: Optional[int] = None
    dermatologist_recommended: bool = False

    def to_response(self) -> dict:
        return {
            "conditions": list(self.conditions),
            "severityScore": self.severity_score,
            "dermatologistRecommended": self.dermatologist_recommended,
        }

    def to_record(self) -> dict:
        return {
            "skin_conditions": list(self.conditions),
            "severity_score": self.severity_score,
            "dermatologist_recommendation": self.dermatologist_recommended,
        }


def should_recommend_dermatologist(analysis_text: str, concerns: List[str],
                                   severity_score: Optional[int] = None) -> bool:
    if recommends_specialist(analysis_text, concerns, SKIN_RULES):
        return True
    if mentions_serious(analysis_text, SKIN_RULES):
        return True
    return severity_score is not None and severity_score >= config.DERMATOLOGIST_SEVERITY_THRESHOLD


def extract(analysis_text: str, concerns: Optional[List[str]] = None) -> SkinFields:
    try:
        if concerns is None:
            concerns = parse_analysis_results(analysis_text).concerns
        severity = extract_score(analysis_text, SKIN_RULES)
        return SkinFields(
            conditions=extract_findings(analysis_text, SKIN_RULES),
            severity_score=severity,
            dermatologist_recommended=should_recommend_dermatologist(analysis_text, concerns, severity),
        )
    except Exception as e:
        logger.warning(f"Skin extraction degraded: {e}")
        return SkinFields()
