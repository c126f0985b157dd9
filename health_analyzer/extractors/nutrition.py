"""
Nutrition field extraction
Food items, macro estimates and micronutrient ratings from a meal analysis
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from health_analyzer.extractors.engine import DomainRules, extract_score, score_pattern
from health_analyzer.utils.result_parser import (
    clean_list_line,
    dedupe,
    extract_section_lines,
    split_sentences,
)

logger = logging.getLogger(__name__)

NUTRITION_RULES = DomainRules(
    name="nutrition",
    section_headers=("food items", "ingredients", "contents", "meal contains", "dish consists of"),
    score_pattern=score_pattern("health|nutritional|nutrition", "score|rating|value"),
)

ASSESSMENT_HEADERS = ("assessment", "analysis", "overview")
MICRONUTRIENT_HEADERS = ("vitamins", "minerals", "micronutrients")
FOOD_CONNECTORS = (
    "contains", "consists of", "includes", "composed of",
    "made up of", "visible", "appears to be", "appears to have",
)
FOOD_SEPARATOR = re.compile(r",\s*(?:and\s+)?|\s+and\s+|\s*&\s*", re.IGNORECASE)

QUALIFIER = r"(?:approximately|approx\.?|around|about|roughly|estimated\s+at|~)?"
AMOUNT = r"(\d+)(?:\.\d+)?(?:\s*(?:-|–|to)\s*\d+(?:\.\d+)?)?"

CALORIES_PATTERN = re.compile(
    rf"(?:calories|caloric content|energy content|caloric value)[\s:]*{QUALIFIER}\s*{AMOUNT}\s*(?:kcal|calories)\b",
    re.IGNORECASE,
)
MACRO_PATTERNS = {
    "protein": re.compile(rf"\bprotein[\s:]*{QUALIFIER}\s*{AMOUNT}\s*(?:g|grams)\b", re.IGNORECASE),
    "carbs": re.compile(rf"\b(?:carbs|carbohydrates)[\s:]*{QUALIFIER}\s*{AMOUNT}\s*(?:g|grams)\b", re.IGNORECASE),
    "fat": re.compile(rf"\b(?:fat|fats)[\s:]*{QUALIFIER}\s*{AMOUNT}\s*(?:g|grams)\b", re.IGNORECASE),
    "fiber": re.compile(rf"\b(?:fiber|fibre)[\s:]*{QUALIFIER}\s*{AMOUNT}\s*(?:g|grams)\b", re.IGNORECASE),
}

MICRONUTRIENT_LINE = re.compile(
    r"^(vitamin\s+\w+|calcium|iron|zinc|potassium|magnesium|sodium|folate|phosphorus|selenium)"
    r"(?:[:\s-]+|\s*\()(high|medium|low|good|excellent|\d+%)",
    re.IGNORECASE,
)
RATING_SCALE = {"high": 80, "excellent": 80, "medium": 50, "good": 50, "low": 20}


@dataclass
class Nutrients:
    calories: Optional[int] = None
    protein: Optional[int] = None
    carbs: Optional[int] = None
    fat: Optional[int] = None
    fiber: Optional[int] = None
    vitamins: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "fiber": self.fiber,
            "vitamins": dict(self.vitamins),
        }


@dataclass
class NutritionFields:
    food_items: List[str] = field(default_factory=list)
    nutrients: Nutrients = field(default_factory=Nutrients)
    health_score: Optional[int] = None

    def to_response(self) -> dict:
        return {
            "foodItems": list(self.food_items),
            "nutrients": self.nutrients.to_dict(),
            "healthScore": self.health_score,
        }

    def to_record(self) -> dict:
        return {
            "food_items": list(self.food_items),
            "calories": self.nutrients.calories,
            "protein": self.nutrients.protein,
            "carbs": self.nutrients.carbs,
            "fat": self.nutrients.fat,
            "fiber": self.nutrients.fiber,
            "health_score": self.health_score,
            "vitamins": dict(self.nutrients.vitamins),
        }


def _items_after_connector(sentence: str) -> List[str]:
    lowered = sentence.lower()
    for phrase in FOOD_CONNECTORS:
        position = lowered.find(phrase)
        if position == -1:
            continue
        remainder = sentence[position + len(phrase):].strip().rstrip(".!?")
        return [item.strip() for item in FOOD_SEPARATOR.split(remainder) if item.strip()]
    return []


def extract_food_items(analysis_text: str) -> List[str]:
    items = extract_section_lines(analysis_text, NUTRITION_RULES.section_headers)

    if not items:
        # "The meal consists of rice, grilled chicken and broccoli."
        assessment = extract_section_lines(analysis_text, ASSESSMENT_HEADERS)
        for sentence in split_sentences(" ".join(assessment)):
            items.extend(_items_after_connector(sentence))

    return dedupe(items)


def _rating_value(rating: str) -> int:
    rating = rating.lower()
    if rating.endswith("%"):
        return int(rating[:-1])
    return RATING_SCALE.get(rating, 0)


def extract_vitamins(analysis_text: str) -> Dict[str, int]:
    """Ratings from the vitamins section, else from any "Iron: low" style line"""
    lines = extract_section_lines(analysis_text, MICRONUTRIENT_HEADERS)
    if not any(MICRONUTRIENT_LINE.match(line) for line in lines):
        lines = [clean_list_line(line) for line in analysis_text.splitlines()]

    vitamins: Dict[str, int] = {}
    for line in lines:
        match = MICRONUTRIENT_LINE.match(line)
        if match:
            name, rating = match.groups()
            vitamins[" ".join(name.lower().split())] = _rating_value(rating)
    return vitamins


def extract_nutrients(analysis_text: str) -> Nutrients:
    nutrients = Nutrients()

    match = CALORIES_PATTERN.search(analysis_text)
    if match:
        nutrients.calories = int(match.group(1))

    for macro, pattern in MACRO_PATTERNS.items():
        match = pattern.search(analysis_text)
        if match:
            setattr(nutrients, macro, int(match.group(1)))

    nutrients.vitamins = extract_vitamins(analysis_text)
    return nutrients


def extract(analysis_text: str, concerns: Optional[List[str]] = None) -> NutritionFields:
    try:
        return NutritionFields(
            food_items=extract_food_items(analysis_text),
            nutrients=extract_nutrients(analysis_text),
            health_score=extract_score(analysis_text, NUTRITION_RULES),
        )
    except Exception as e:
        logger.warning(f"Nutrition extraction degraded: {e}")
        return NutritionFields()
