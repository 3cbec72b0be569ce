"""
Vision Classifier Base Interface.

Defines the contract for remote image classifiers used during moderation.
All vision providers must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional
import logging

from app.models.moderation import VisionScan

logger = logging.getLogger(__name__)


class VisionClassifier(ABC):
    """
    Abstract base class for remote vision classifiers.

    A classifier looks at the uploaded photo plus the citizen's description
    and returns authenticity, spam and category signals.
    """

    @abstractmethod
    def is_enabled(self) -> bool:
        """
        Check if this provider is configured and ready.

        Returns:
            True if provider can be called, False otherwise
        """
        pass

    @abstractmethod
    def get_model_info(self) -> Dict[str, str]:
        """
        Get model information (name, version).

        Returns:
            Dict with 'name' and 'version' keys
        """
        pass

    @abstractmethod
    def classify(self, image_payload: str, description: str) -> Optional[VisionScan]:
        """
        Classify an uploaded complaint photo.

        This method MUST:
        - Return None when the provider is unavailable (no key, network error,
          timeout, non-2xx, unparseable response)
        - Never raise exceptions
        - Respect get_timeout_seconds()

        Args:
            image_payload: The photo as submitted (data:image/...;base64 URL)
            description: The citizen's description, given as context

        Returns:
            VisionScan on success, None when unavailable
        """
        pass

    @abstractmethod
    def get_timeout_seconds(self) -> float:
        """
        Get timeout for one classification call (in seconds).
        """
        pass
