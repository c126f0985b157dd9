"""
Posture field extraction
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from health_analyzer.extractors.engine import (
    DomainRules,
    extract_findings,
    extract_score,
    score_pattern,
)
from health_analyzer.utils.result_parser import (
    RECOMMENDATION_HEADERS,
    dedupe,
    extract_section_lines,
)

logger = logging.getLogger(__name__)

POSTURE_RULES = DomainRules(
    name="posture",
    section_headers=("posture issues", "problems", "imbalances", "concerns"),
    keywords=(
        "forward head", "rounded shoulders", "kyphosis", "lordosis", "scoliosis",
        "anterior pelvic tilt", "posterior pelvic tilt", "hunched", "slouched",
        "uneven shoulders", "head tilt", "neck strain", "text neck", "uneven hips",
        "flat back", "swayback", "military posture", "misalignment",
    ),
    score_pattern=score_pattern("posture", "score|rating"),
)

EXERCISE_HEADERS = ("exercise recommendations", "recommended exercises", "exercises", "stretches")
EXERCISE_KEYWORDS = (
    "exercise", "stretch", "strengthen", "posture", "workout",
    "yoga", "pilates", "mobility", "flexibility", "core",
    "shoulders", "neck", "back", "spine", "chest",
)


@dataclass
class PostureFields:
    issues: List[str] = field(default_factory=list)
    posture_score: Optional[int] = None
    exercise_recommendations: List[str] = field(default_factory=list)

    def to_response(self) -> dict:
        return {
            "issues": list(self.issues),
            "postureScore": self.posture_score,
            "exerciseRecommendations": list(self.exercise_recommendations),
        }

    def to_record(self) -> dict:
        return {
            "posture_issues": list(self.issues),
            "posture_score": self.posture_score,
            "exercise_recommendations": list(self.exercise_recommendations),
        }


def extract_exercise_recommendations(analysis_text: str) -> List[str]:
    """Exercise section items, else recommendation lines that read like exercises"""
    exercises = extract_section_lines(analysis_text, EXERCISE_HEADERS)
    if not exercises:
        for line in extract_section_lines(analysis_text, RECOMMENDATION_HEADERS):
            lowered = line.lower()
            if any(keyword in lowered for keyword in EXERCISE_KEYWORDS):
                exercises.append(line)
    return dedupe(exercises)


def extract(analysis_text: str, concerns: Optional[List[str]] = None) -> PostureFields:
    # concerns is accepted for a uniform signature; posture has no referral flag
    try:
        return PostureFields(
            issues=extract_findings(analysis_text, POSTURE_RULES),
            posture_score=extract_score(analysis_text, POSTURE_RULES),
            exercise_recommendations=extract_exercise_recommendations(analysis_text),
        )
    except Exception as e:
        logger.warning(f"Posture extraction degraded: {e}")
        return PostureFields()
