"""
Vision classifier plug-in architecture.

Optional remote image moderation. Fails gracefully and never blocks
complaint intake.
"""

from app.services.ai_plugin.base import VisionClassifier
from app.services.ai_plugin.gemini_provider import GeminiVisionProvider
from app.services.ai_plugin.registry import get_vision_classifier

__all__ = [
    "VisionClassifier",
    "GeminiVisionProvider",
    "get_vision_classifier",
]
