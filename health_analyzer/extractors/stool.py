"""
Stool health field extraction
Bristol type, visible abnormalities, hydration and referral flag
"""
import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from health_analyzer import config
from health_analyzer.extractors.engine import (
    DomainRules,
    bounded_int,
    extract_findings,
    mentions_serious,
    recommends_specialist,
)
from health_analyzer.utils.result_parser import parse_analysis_results

logger = logging.getLogger(__name__)

BRISTOL_BOUNDS = (1, 7)

STOOL_RULES = DomainRules(
    name="stool",
    section_headers=(
        "abnormalities", "unusual features", "concerning features",
        "notable findings", "issues", "problems",
    ),
    keywords=(
        "blood", "mucus", "pus", "undigested", "parasite", "worm",
        "black", "tarry", "pale", "greasy", "floating", "foul",
        "diarrhea", "constipation", "irregular", "abnormal",
    ),
    score_bounds=BRISTOL_BOUNDS,
    specialist_keywords=(
        "consult", "doctor", "physician", "medical", "healthcare provider",
        "professional", "evaluation", "clinical", "specialist", "gastroenterologist",
        "visit", "appointment", "checkup", "check-up", "attention",
    ),
    serious_keywords=(
        "blood", "bleeding", "black stool", "tarry", "parasite",
        "severe", "extreme", "persistent", "chronic", "continuous",
    ),
)

# "Bristol stool type is 4", "Bristol Stool Scale: Type 6", "stool type: 3"
BRISTOL_PATTERN = re.compile(
    r"(?:\bbristol(?:\s+stool)?(?:\s+(?:scale|type|category|class))?(?:\s+classification)?|\bstool\s+type)"
    r"\s*(?:is|:|-|=|of|appears\s+to\s+be)?\s*(?:\(?type\s+)?(\d+)\b",
    re.IGNORECASE,
)
# "type 4 on the Bristol scale"
BRISTOL_TRAILING_PATTERN = re.compile(
    r"\b(?:type|category|class)\s*(?:is|:|-|appears\s+to\s+be)?\s*(\d+)\b[^.\n]{0,40}?\bbristol",
    re.IGNORECASE,
)

HYDRATION_PATTERN = re.compile(
    r"\b(?:hydration|water\s+intake|fluid\s+intake)"
    r"(?:\s+appears|\s+seems|\s+is|\s+looks|\s+level|\s+status|\s+indicators?)?"
    r"(?:\s+to\s+be)?(?:\s+is)?[\s:]*(\w+)",
    re.IGNORECASE,
)
HYDRATION_LEVELS = (
    ("low", ("low", "inadequate", "poor", "insufficient", "dehydrat")),
    ("normal", ("normal", "adequate", "sufficient", "okay", "ok", "fine")),
    ("good", ("good", "excellent", "great", "optimal", "well", "high")),
)


@dataclass
class StoolFields:
    bristol_type: Optional[int] = None
    abnormalities: List[str] = field(default_factory=list)
    hydration_level: Optional[str] = None
    doctor_recommended: bool = False

    def to_response(self) -> dict:
        return {
            "bristolType": self.bristol_type,
            "abnormalities": list(self.abnormalities),
            "hydrationLevel": self.hydration_level,
            "doctorRecommended": self.doctor_recommended,
        }

    def to_record(self) -> dict:
        return {
            "stool_type": self.bristol_type,
            "abnormalities": list(self.abnormalities),
            "hydration_indicator": self.hydration_level,
            "doctor_recommendation": self.doctor_recommended,
        }


def extract_bristol_type(analysis_text: str) -> Optional[int]:
    match = BRISTOL_PATTERN.search(analysis_text)
    if match:
        bristol_type = bounded_int(match.group(1), BRISTOL_BOUNDS)
        if bristol_type is not None:
            return bristol_type

    match = BRISTOL_TRAILING_PATTERN.search(analysis_text)
    if match:
        return bounded_int(match.group(1), BRISTOL_BOUNDS)
    return None


def extract_hydration_level(analysis_text: str) -> Optional[str]:
    match = HYDRATION_PATTERN.search(analysis_text)
    if match:
        word = match.group(1).lower()
        for level, terms in HYDRATION_LEVELS:
            if any(word.startswith(term) for term in terms):
                return level

    # No usable "hydration is X" wording
    lowered = analysis_text.lower()
    if "dehydrat" in lowered:
        return "low"
    if "well hydrated" in lowered or "well-hydrated" in lowered:
        return "good"
    return None


def should_recommend_doctor(analysis_text: str, concerns: List[str],
                            bristol_type: Optional[int] = None) -> bool:
    if recommends_specialist(analysis_text, concerns, STOOL_RULES):
        return True
    if mentions_serious(analysis_text, STOOL_RULES):
        return True
    return bristol_type in config.EXTREME_BRISTOL_TYPES


def extract(analysis_text: str, concerns: Optional[List[str]] = None) -> StoolFields:
    try:
        if concerns is None:
            concerns = parse_analysis_results(analysis_text).concerns
        bristol_type = extract_bristol_type(analysis_text)
        return StoolFields(
            bristol_type=bristol_type,
            abnormalities=extract_findings(analysis_text, STOOL_RULES),
            hydration_level=extract_hydration_level(analysis_text),
            doctor_recommended=should_recommend_doctor(analysis_text, concerns, bristol_type),
        )
    except Exception as e:
        logger.warning(f"Stool extraction degraded: {e}")
        return StoolFields()
