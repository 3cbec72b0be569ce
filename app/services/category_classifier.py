"""
Text Category Classifier - keyword fallback for complaint categorization.

Always available. Used alone when the remote vision classifier is disabled
or unavailable.
"""

from typing import NamedTuple, Optional
import re

from app.models.complaint import ComplaintCategory

KEYWORD_MATCH_CONFIDENCE = 0.75
FALLBACK_CONFIDENCE = 0.55

# Checked in order; first vocabulary that matches wins.
CATEGORY_PATTERNS = (
    (ComplaintCategory.GARBAGE, re.compile(r"(garbage|trash|waste|dump|bin)")),
    (ComplaintCategory.ROAD, re.compile(r"(pothole|road|asphalt|traffic|street crack)")),
    (ComplaintCategory.WATER, re.compile(r"(water|pipe|leak|sewage|drain|overflow)")),
    (ComplaintCategory.STREETLIGHT, re.compile(r"(streetlight|street light|lamp|dark street|light pole)")),
)


class Classification(NamedTuple):
    category: ComplaintCategory
    confidence: float


def normalize_category(value: Optional[str]) -> ComplaintCategory:
    """Map free-text category input onto the enum; anything unknown is Other."""
    normalized = (value or "").strip().lower()
    for category in ComplaintCategory:
        if category.value.lower() == normalized:
            return category
    return ComplaintCategory.OTHER


def classify_from_text(description: str, submitted_category: str) -> Classification:
    text = (description or "").lower()
    for category, pattern in CATEGORY_PATTERNS:
        if pattern.search(text):
            return Classification(category, KEYWORD_MATCH_CONFIDENCE)
    return Classification(normalize_category(submitted_category), FALLBACK_CONFIDENCE)
