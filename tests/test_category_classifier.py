import pytest

from app.models.complaint import ComplaintCategory
from app.services.category_classifier import classify_from_text, normalize_category


@pytest.mark.parametrize("description, expected", [
    ("Trash everywhere near the temple", ComplaintCategory.GARBAGE),
    ("Huge pothole on the main road", ComplaintCategory.ROAD),
    ("Sewage overflow in the lane", ComplaintCategory.WATER),
    ("The streetlight outside my house is off", ComplaintCategory.STREETLIGHT),
    ("Lamp near the park broken", ComplaintCategory.STREETLIGHT),
])
def test_keyword_match(description, expected):
    result = classify_from_text(description, "Other")
    assert result.category == expected
    assert result.confidence == 0.75


def test_vocabularies_are_checked_in_order():
    # "garbage" and "water" both match; Garbage is checked first
    assert classify_from_text("Garbage dumped into the water tank", "Water").category == ComplaintCategory.GARBAGE


def test_no_match_falls_back_to_submitted_category():
    result = classify_from_text("Stray dogs chasing children", "sanitation")
    assert result.category == ComplaintCategory.SANITATION
    assert result.confidence == 0.55


@pytest.mark.parametrize("value, expected", [
    ("Water", ComplaintCategory.WATER),
    ("  road ", ComplaintCategory.ROAD),
    ("STREETLIGHT", ComplaintCategory.STREETLIGHT),
    ("Noise", ComplaintCategory.OTHER),
    ("", ComplaintCategory.OTHER),
    (None, ComplaintCategory.OTHER),
])
def test_normalize_category(value, expected):
    assert normalize_category(value) == expected
