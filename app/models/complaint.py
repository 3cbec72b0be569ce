"""
Pydantic models for citizen complaints, officers and admin notifications.
These models handle validation for complaint submission and responses.
"""

import math
from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator


class ComplaintCategory(str, Enum):
    GARBAGE = "Garbage"
    WATER = "Water"
    ROAD = "Road"
    STREETLIGHT = "Streetlight"
    SANITATION = "Sanitation"
    OTHER = "Other"


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ComplaintStatus(str, Enum):
    """
    Complaint lifecycle:
    Submitted → In Progress → Resolved (Pending Admin) → Closed

    "Resolved" is what a worker sends when marking a job done; it is stored
    as "Resolved (Pending Admin)" until an admin approves (Closed) or
    rejects (back to In Progress).
    """
    SUBMITTED = "Submitted"
    IN_PROGRESS = "In Progress"
    RESOLVED_PENDING_ADMIN = "Resolved (Pending Admin)"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


RESOLVED_STATUSES = {
    ComplaintStatus.RESOLVED.value.lower(),
    ComplaintStatus.RESOLVED_PENDING_ADMIN.value.lower(),
    ComplaintStatus.CLOSED.value.lower(),
}


def is_resolved_status(status: Optional[str]) -> bool:
    """True for Resolved, Resolved (Pending Admin) and Closed (case-insensitive)."""
    return (status or "").strip().lower() in RESOLVED_STATUSES


class NotificationType(str, Enum):
    ASSIGNED = "ASSIGNED"
    RESOLVED_PENDING = "RESOLVED_PENDING"
    RESOLVED = "RESOLVED"


class ComplaintCreate(BaseModel):
    """
    Model for creating a new complaint (incoming POST request).
    Category is kept as free text here; the pipeline normalizes it.
    """
    user_id: str = Field(..., min_length=1, max_length=128, description="Submitting citizen identity")
    category: str = Field(..., min_length=1, description="Citizen-selected category; unknown values become Other")
    description: str = Field(..., min_length=1, max_length=2000, description="What the citizen observed")
    photo_url: Optional[str] = Field(None, description="Photo payload, usually a data:image/...;base64 URL")
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    @field_validator("latitude", "longitude")
    @classmethod
    def _finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("coordinates must be finite numbers")
        return value

    @field_validator("user_id", "category", "description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "USR-1a2b3c4d",
                "category": "Water",
                "description": "Major pipe burst flooding the street",
                "photo_url": "data:image/jpeg;base64,/9j/4AAQSkZJRg...",
                "latitude": 20.88,
                "longitude": 77.745,
            }
        }
        extra = "ignore"


class ComplaintResponse(BaseModel):
    """
    Model for complaint responses (what the API returns).
    Includes every field computed by the intake pipeline.
    """
    id: str
    user_id: str
    category: ComplaintCategory
    description: str
    photo_url: str = ""
    latitude: float
    longitude: float
    priority: Priority
    status: ComplaintStatus
    worker_name: Optional[str] = None
    area: str = "Unknown"
    city: str = "Unknown"
    state: str = "Unknown"
    full_address: str = "Unknown"
    ward: str
    division: str
    department: str
    assigned_officer_id: Optional[str] = None
    assigned_officer_name: Optional[str] = None
    image_hash: Optional[str] = None
    moderation_flags: Dict = Field(default_factory=dict)
    ai_generated_flag: bool = False
    spam_flag: bool = False
    duplicate_flag: bool = False
    classified_category: ComplaintCategory
    classification_confidence: float = Field(..., ge=0.0, le=1.0)
    created_at: datetime

    @classmethod
    def from_document(cls, doc_id: str, data: Dict) -> "ComplaintResponse":
        payload = dict(data)
        payload["id"] = doc_id
        return cls(**payload)


class Officer(BaseModel):
    """Static officer directory entry. Read-only during intake."""
    id: str
    name: str
    email: Optional[str] = None
    ward: str
    division: str
    department: str

    class Config:
        frozen = True


class Notification(BaseModel):
    id: str
    complaint_id: str
    type: NotificationType
    message: str
    is_read: bool = False
    created_at: datetime
