"""
Gemini Vision Provider - remote image moderation and categorization.

Sends the complaint photo (inline base64) and description to the Gemini
generateContent REST endpoint and asks for strict JSON. Any failure is
reported as "unavailable" (None) so moderation falls back to local
heuristics.
"""

from app.services.ai_plugin.base import VisionClassifier
from app.models.moderation import VisionScan
from app.services.category_classifier import normalize_category
from app.utils.content_hash import parse_image_data_url
from typing import Any, Dict, Optional
import logging
import json
import math
import re

import requests

logger = logging.getLogger(__name__)

_FENCED_JSON_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


def extract_json_object(raw: str) -> str:
    """Strip a ```json fence if the model wrapped its answer in one."""
    trimmed = (raw or "").strip()
    if not trimmed:
        return ""
    fenced = _FENCED_JSON_RE.search(trimmed)
    return fenced.group(1).strip() if fenced else trimmed


class GeminiVisionProvider(VisionClassifier):
    """
    Google Gemini provider for image moderation.

    Requires GEMINI_API_KEY. Disabled (is_enabled() == False) without it.
    """

    MODEL_VERSION = "v1beta"
    API_URL_TEMPLATE = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
    DEFAULT_CONFIDENCE = 0.6

    def __init__(self, api_key: Optional[str], model_name: str = "gemini-2.5-flash", timeout_seconds: float = 10.0):
        self.api_key = (api_key or "").strip()
        self.model_name = model_name
        self.timeout_seconds = timeout_seconds
        self.enabled = bool(self.api_key)

        if self.enabled:
            logger.info(f"✅ Gemini Vision Provider initialized: {self.model_name}")
        else:
            logger.info("⚠️ Gemini Vision Provider disabled: No API key configured")

    def is_enabled(self) -> bool:
        return self.enabled

    def get_model_info(self) -> Dict[str, str]:
        return {
            "name": self.model_name,
            "version": self.MODEL_VERSION,
        }

    def get_timeout_seconds(self) -> float:
        return self.timeout_seconds

    def classify(self, image_payload: str, description: str) -> Optional[VisionScan]:
        if not self.enabled:
            return None

        image = parse_image_data_url(image_payload)
        if image is None or not image.data:
            # Only non-empty inline base64 images can be sent to the model
            return None

        try:
            raw_text = self._call_gemini_api(self._build_prompt(description), image.mime_type, image.data)
            return self._parse_response(raw_text)
        except Exception as e:
            logger.warning(f"⚠️ Gemini image scan failed, falling back to heuristic checks: {e}")
            return None

    def _build_prompt(self, description: str) -> str:
        return f"""You are validating civic complaint image uploads.
Return ONLY strict JSON with this shape:
{{
  "isLikelyAiGenerated": boolean,
  "aiGeneratedReason": string,
  "isSpam": boolean,
  "spamReason": string,
  "problemCategory": "Garbage" | "Road" | "Water" | "Streetlight" | "Other",
  "categoryConfidence": number
}}
Rules:
- Mark isLikelyAiGenerated true only if there are strong synthetic-image artifacts.
- Mark isSpam true if image/content is irrelevant, meme, advertisement, or not a real civic issue.
- problemCategory must be one of the allowed values.
- categoryConfidence must be between 0 and 1.
Description: {description}"""

    def _call_gemini_api(self, prompt: str, mime_type: str, data: str) -> str:
        payload = {
            "contents": [{
                "role": "user",
                "parts": [
                    {"text": prompt},
                    {"inline_data": {"mime_type": mime_type, "data": data}},
                ],
            }],
            "generationConfig": {"responseMimeType": "application/json"},
        }

        response = requests.post(
            self.API_URL_TEMPLATE.format(model=self.model_name),
            params={"key": self.api_key},
            json=payload,
            timeout=self.get_timeout_seconds(),
        )

        if response.status_code != 200:
            raise RuntimeError(f"Gemini API returned status {response.status_code}")

        data_json: Dict[str, Any] = response.json()
        candidates = data_json.get("candidates") or [{}]
        parts = (candidates[0].get("content") or {}).get("parts") or [{}]
        return parts[0].get("text", "")

    def _parse_response(self, raw_text: str) -> VisionScan:
        parsed = json.loads(extract_json_object(raw_text))
        if not isinstance(parsed, dict):
            raise ValueError("Gemini response is not a JSON object")

        try:
            confidence = float(parsed.get("categoryConfidence"))
        except (TypeError, ValueError):
            confidence = self.DEFAULT_CONFIDENCE
        if not math.isfinite(confidence):
            confidence = self.DEFAULT_CONFIDENCE

        return VisionScan(
            is_ai_generated=bool(parsed.get("isLikelyAiGenerated")),
            ai_generated_reason=str(parsed.get("aiGeneratedReason") or ""),
            is_spam=bool(parsed.get("isSpam")),
            spam_reason=str(parsed.get("spamReason") or ""),
            category=normalize_category(str(parsed.get("problemCategory") or "")),
            confidence=max(0.0, min(1.0, confidence)),
            model_name=self.model_name,
        )
