"""
Free-text analysis parsing
Splits a model answer into labeled sections and list items
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)

CONCERN_HEADERS = ("concerns", "potential concerns", "issues", "potential issues")
RECOMMENDATION_HEADERS = ("recommendations", "suggested actions", "advice", "suggestions")

# Section names that end whatever section precedes them, even without a colon
KNOWN_SECTIONS = CONCERN_HEADERS + RECOMMENDATION_HEADERS + (
    "assessment", "analysis", "overview", "summary", "observations", "findings",
    "conditions", "problems", "imbalances", "abnormalities", "exercises", "stretches",
    "food items", "ingredients", "nutrients", "vitamins", "minerals", "micronutrients",
)

BULLET = re.compile(r"^\s*(?:[-•]|\*(?!\*))\s*")
SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
# "## Next steps" / "**Overall Assessment:**" / "Recommendations: floss daily"
NEW_HEADER = re.compile(
    r"^\s*(?:#{1,6}\s*\S"
    r"|(?:\*\*|__)[A-Z][^*_:]{0,60}:?(?:\*\*|__)"
    r"|[A-Z][A-Za-z0-9/&()'-]*(?:\s+[A-Za-z0-9/&()'-]+){0,3}\s*:)"
)

_header_cache: Dict[Sequence[str], re.Pattern] = {}


@dataclass
class ParsedResult:
    analysis: str
    concerns: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "analysis": self.analysis,
            "concerns": list(self.concerns),
            "recommendations": list(self.recommendations),
        }


def _header_pattern(headers: Sequence[str]) -> re.Pattern:
    key = tuple(headers)
    if key not in _header_cache:
        # Longest synonym first so "potential concerns" wins over "concerns"
        names = "|".join(re.escape(h) for h in sorted(key, key=len, reverse=True))
        _header_cache[key] = re.compile(
            r"^\s*(?:#{1,6}\s*)?(?:\d+[.)]\s*)?(?:\*\*|__)?"
            r"(?:[A-Za-z][A-Za-z-]*\s+){0,2}"
            rf"(?:{names})\b(?P<rest>.*)$",
            re.IGNORECASE,
        )
    return _header_cache[key]


def _is_section_header(line: str, pattern: re.Pattern) -> bool:
    match = pattern.match(line)
    if not match:
        return False
    rest = match.group("rest").strip(" \t*_#")
    return rest == "" or ":" in rest


def _inline_item(line: str, pattern: re.Pattern) -> str:
    """Text written on the header line itself, as in "Recommendations: floss daily" """
    rest = pattern.match(line).group("rest")
    if ":" not in rest:
        return ""
    return rest.split(":", 1)[1].strip(" \t*_")


def starts_new_section(line: str) -> bool:
    """True for any header-shaped line that is not a list item"""
    if BULLET.match(line):
        return False
    return bool(NEW_HEADER.match(line)) or _is_section_header(line, _header_pattern(KNOWN_SECTIONS))


def clean_list_line(line: str) -> str:
    """Strip a leading bullet marker and surrounding whitespace"""
    return BULLET.sub("", line, count=1).strip()


def extract_section_lines(text: str, headers: Iterable[str]) -> List[str]:
    """
    Return the list items of the first section whose header matches one of headers.

    The section body is the run of non-blank lines after the header line,
    ending at a blank line, a new header line or the end of the text.
    """
    pattern = _header_pattern(tuple(headers))
    lines = text.splitlines()

    for index, line in enumerate(lines):
        if not _is_section_header(line, pattern):
            continue

        items: List[str] = []
        inline = _inline_item(line, pattern)
        if inline:
            items.append(inline)

        for body_line in lines[index + 1:]:
            if not body_line.strip():
                break
            if starts_new_section(body_line):
                break
            item = clean_list_line(body_line)
            if item:
                items.append(item)
        return items

    return []


def split_sentences(text: str) -> List[str]:
    return [s.strip() for s in SENTENCE_BOUNDARY.split(text) if s.strip()]


def dedupe(items: Iterable[str]) -> List[str]:
    """Drop exact duplicates while keeping first-seen order"""
    return list(dict.fromkeys(items))


def find_sentence(text: str, keyword: str) -> Optional[str]:
    """First sentence containing keyword (case-insensitive)"""
    keyword = keyword.lower()
    for sentence in split_sentences(text):
        if keyword in sentence.lower():
            return sentence
    return None


def contains_any(haystacks: Iterable[str], keywords: Iterable[str]) -> bool:
    lowered = [h.lower() for h in haystacks]
    return any(k in h for k in keywords for h in lowered)


def parse_analysis_results(analysis_text: str) -> ParsedResult:
    """
    Parse concerns and recommendations out of the model's free text.

    Never raises; on any internal error the text is returned unchanged with
    empty lists.
    """
    try:
        return ParsedResult(
            analysis=analysis_text,
            concerns=extract_section_lines(analysis_text, CONCERN_HEADERS),
            recommendations=extract_section_lines(analysis_text, RECOMMENDATION_HEADERS),
        )
    except Exception as e:
        logger.error(f"Error in parse_analysis_results: {e}", exc_info=True)
        return ParsedResult(analysis=analysis_text if analysis_text is not None else "")
