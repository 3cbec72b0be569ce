"""
Ephemeral intake models. Built during a single submission and never stored
as their own documents; selected fields are copied onto the complaint.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field

from app.models.complaint import ComplaintCategory


class VisionScan(BaseModel):
    """Result of a successful remote vision classification."""
    is_ai_generated: bool = False
    ai_generated_reason: str = ""
    is_spam: bool = False
    spam_reason: str = ""
    category: ComplaintCategory = ComplaintCategory.OTHER
    confidence: float = Field(0.6, ge=0.0, le=1.0)
    model_name: str = ""


class DuplicateMatch(BaseModel):
    id: str
    status: str


class ModerationResult(BaseModel):
    image_hash: Optional[str] = None
    is_ai_generated: bool = False
    ai_generated_reason: str = ""
    is_spam: bool = False
    spam_reason: str = ""
    is_duplicate: bool = False
    duplicate_against: Optional[DuplicateMatch] = None
    classified_category: ComplaintCategory
    classification_confidence: float = Field(..., ge=0.0, le=1.0)
    model: str = "heuristic"

    def flags(self) -> Dict:
        """Summary stored on the complaint as moderation_flags."""
        return {
            "model": self.model,
            "ai_generated": self.is_ai_generated,
            "spam": self.is_spam,
            "duplicate": self.is_duplicate,
        }


class GeocodeResult(BaseModel):
    area: str = "Unknown"
    city: str = "Unknown"
    state: str = "Unknown"
    full_address: str = "Unknown"
    ward_hint: str = "Unknown"
    provider: str = ""
