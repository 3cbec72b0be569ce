"""
Vision Classifier Registry.

Resolves the configured remote vision classifier, or None when AI is
disabled or no provider is usable. Callers treat None as "unavailable".
"""

from app.services.ai_plugin.base import VisionClassifier
from app.services.ai_plugin.gemini_provider import GeminiVisionProvider
from app.core.settings import settings
from typing import Optional
import logging

logger = logging.getLogger(__name__)


def build_vision_classifier() -> Optional[VisionClassifier]:
    """
    Build the active vision classifier from settings.

    Returns:
        An enabled provider, or None (AI disabled or no API key)
    """
    if not settings.AI_ENABLED:
        logger.info("⚠️ AI is disabled globally (AI_ENABLED=false), moderation uses heuristics only")
        return None

    try:
        provider = GeminiVisionProvider(
            api_key=settings.GEMINI_API_KEY,
            model_name=settings.GEMINI_MODEL,
            timeout_seconds=settings.AI_TIMEOUT_SECONDS,
        )
    except Exception as e:
        logger.warning(f"⚠️ Failed to initialize Gemini provider: {e}")
        return None

    if not provider.is_enabled():
        return None

    logger.info("✅ Gemini Vision Provider registered")
    return provider


# Global classifier instance (singleton)
_classifier: Optional[VisionClassifier] = None
_resolved = False


def get_vision_classifier() -> Optional[VisionClassifier]:
    global _classifier, _resolved
    if not _resolved:
        _classifier = build_vision_classifier()
        _resolved = True
    return _classifier
