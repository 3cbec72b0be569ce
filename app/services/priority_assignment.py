"""
Priority Assignment - rule-based complaint priority.

DESIGN PRINCIPLES:
- Priority is SYSTEM-DERIVED, computed once at intake, NOT recalculated
- Pure function of (final category, description)
- High rules are checked before Low rules; first match wins
- No numeric scoring
"""

from typing import Union

from app.models.complaint import ComplaintCategory, Priority

# Configuration: category-specific keywords that escalate to High
HIGH_PRIORITY_KEYWORDS = {
    ComplaintCategory.WATER: ("leak", "burst", "overflow"),
    ComplaintCategory.ROAD: ("accident", "pothole", "big"),
    ComplaintCategory.GARBAGE: ("overflow", "too much"),
}

# Configuration: keywords that demote any category to Low
LOW_PRIORITY_KEYWORDS = ("minor", "small", "request", "info")


def assign_priority(category: Union[ComplaintCategory, str], description: str) -> Priority:
    """
    >>> assign_priority("Water", "major pipe burst near gate")
    <Priority.HIGH: 'High'>
    """
    desc = (description or "").lower()
    category_value = category.value if isinstance(category, ComplaintCategory) else str(category)

    for high_category, keywords in HIGH_PRIORITY_KEYWORDS.items():
        if category_value == high_category.value and any(k in desc for k in keywords):
            return Priority.HIGH

    if any(k in desc for k in LOW_PRIORITY_KEYWORDS):
        return Priority.LOW

    return Priority.MEDIUM
