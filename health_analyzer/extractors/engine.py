"""
Shared extraction engine.
Each domain is described by a DomainRules record; the functions here apply
the section, keyword, score and specialist heuristics for any domain.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Pattern, Tuple

from health_analyzer.utils.result_parser import (
    contains_any,
    dedupe,
    extract_section_lines,
    find_sentence,
)

logger = logging.getLogger(__name__)

# "<label> score of 6/10", "<label> rating: 7 out of 10"
SCORE_TAIL = r"\s*(?:is|of|:|=)?\s*(\d+)(?:\s*/\s*|\s+out\s+of\s+)(?:10|ten)\b"


def score_pattern(labels: str, nouns: str = "score") -> Pattern:
    return re.compile(rf"\b(?:{labels})\s+(?:{nouns}){SCORE_TAIL}", re.IGNORECASE)


@dataclass(frozen=True)
class DomainRules:
    name: str
    section_headers: Tuple[str, ...]
    keywords: Tuple[str, ...] = ()
    score_pattern: Optional[Pattern] = None
    score_bounds: Tuple[int, int] = (1, 10)
    specialist_keywords: Tuple[str, ...] = ()
    serious_keywords: Tuple[str, ...] = ()


def keyword_findings(text: str, keywords: Iterable[str], found: Optional[List[str]] = None) -> List[str]:
    """
    Add the first sentence mentioning each keyword not already represented in found
    """
    findings = list(found or [])
    lowered = text.lower()
    for keyword in keywords:
        if keyword not in lowered:
            continue
        if any(keyword in item.lower() for item in findings):
            continue
        sentence = find_sentence(text, keyword)
        if sentence:
            findings.append(sentence)
    return findings


def extract_findings(text: str, rules: DomainRules) -> List[str]:
    """Section items, or keyword sentences when the section is missing"""
    findings = extract_section_lines(text, rules.section_headers)
    if not findings:
        findings = keyword_findings(text, rules.keywords)
    return dedupe(findings)


def bounded_int(value: str, bounds: Tuple[int, int]) -> Optional[int]:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    low, high = bounds
    return number if low <= number <= high else None


def extract_score(text: str, rules: DomainRules) -> Optional[int]:
    """First labeled score in the text; out-of-range values yield None"""
    if rules.score_pattern is None:
        return None
    match = rules.score_pattern.search(text)
    if not match:
        return None
    return bounded_int(match.group(1), rules.score_bounds)


def recommends_specialist(text: str, concerns: Iterable[str], rules: DomainRules) -> bool:
    """True when the text or any concern mentions seeing a specialist"""
    return contains_any([text, *concerns], rules.specialist_keywords)


def mentions_serious(text: str, rules: DomainRules) -> bool:
    return contains_any([text], rules.serious_keywords)
