"""
Image payload utilities: data-URL parsing and content fingerprinting.
"""

import base64
import binascii
import hashlib
import logging
import re
from typing import NamedTuple, Optional, Union

logger = logging.getLogger(__name__)

_URLSAFE_TO_STANDARD = str.maketrans("-_", "+/")

_DATA_URL_RE = re.compile(r"^data:(image/[a-zA-Z0-9.+-]+)((?:;[^;,]+)*);base64,(.*)$", re.DOTALL)


class ImagePayload(NamedTuple):
    mime_type: str
    data: str  # standard base64 alphabet, whitespace stripped, padded

    def decoded(self) -> bytes:
        return base64.b64decode(self.data, validate=True)


def _normalize_base64(body: str) -> str:
    compact = re.sub(r"\s+", "", body).translate(_URLSAFE_TO_STANDARD).rstrip("=")
    if not compact:
        return ""
    return compact + "=" * (-len(compact) % 4)


def parse_image_data_url(photo_url: Optional[str]) -> Optional[ImagePayload]:
    """
    Parse a `data:image/<type>[;param=value...];base64,<data>` URL.

    Whitespace anywhere in the body and the URL-safe alphabet are accepted;
    `data` comes back in standard, padded base64. An empty body gives an
    empty `data`. Returns None for anything else (plain URLs, storage
    paths, garbage).
    """
    trimmed = (photo_url or "").strip()
    match = _DATA_URL_RE.match(trimmed)
    if not match:
        return None
    return ImagePayload(mime_type=match.group(1), data=_normalize_base64(match.group(3)))


def compute_image_fingerprint(photo: Union[str, bytes, None]) -> Optional[str]:
    """
    SHA-256 hex digest of the image bytes, or None for an empty payload.

    Data URLs are base64-decoded first so the same picture hashes the same
    whether it arrived wrapped, with mime parameters, URL-safe encoded or as
    raw bytes. A data URL with no image bytes has no fingerprint. Other
    string references are hashed as UTF-8 text.
    """
    if photo is None:
        return None

    if isinstance(photo, (bytes, bytearray)):
        content = bytes(photo)
    else:
        trimmed = photo.strip()
        if not trimmed:
            return None
        payload = parse_image_data_url(trimmed)
        content = trimmed.encode("utf-8")
        if payload is not None:
            try:
                content = payload.decoded()
            except (binascii.Error, ValueError) as e:
                logger.warning(f"Image data URL is not valid base64 ({e}); hashing raw text")

    if not content:
        return None
    return hashlib.sha256(content).hexdigest()
