from __future__ import annotations

import base64
import logging
import os
from typing import Any, Optional

import httpx

logger = logging.getLogger("sitebuilder.images")

IMGBB_UPLOAD_URL = "https://api.imgbb.com/1/upload"
UPLOAD_TIMEOUT = 30.0


class ImageUploadError(Exception):
    pass


def _api_key() -> str:
    key = os.getenv("IMGBB_API_KEY", "").strip()
    if not key:
        raise ImageUploadError("ImgBB API key not configured")
    return key


def upload_base64(encoded: str, client: Optional[httpx.Client] = None) -> dict[str, Any]:
    """Upload base64 image data; returns the host's JSON reply."""
    api_key = _api_key()
    owns_client = client is None
    http = client or httpx.Client(timeout=UPLOAD_TIMEOUT)
    try:
        response = http.post(IMGBB_UPLOAD_URL, params={"key": api_key}, data={"image": encoded})
    except httpx.HTTPError as e:
        raise ImageUploadError(f"ImgBB request failed: {e}") from e
    finally:
        if owns_client:
            http.close()

    if response.status_code >= 400:
        raise ImageUploadError(f"ImgBB API error: {response.status_code} {response.text}")
    try:
        payload = response.json()
    except ValueError as e:
        raise ImageUploadError("ImgBB returned an unexpected response") from e
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict) or not payload["data"].get("url"):
        raise ImageUploadError("ImgBB returned an unexpected response")
    return payload


def upload_image(image_bytes: bytes, client: Optional[httpx.Client] = None) -> dict[str, Any]:
    return upload_base64(base64.b64encode(image_bytes).decode("ascii"), client=client)


def upload_data_url(value: Optional[str], client: Optional[httpx.Client] = None) -> Optional[str]:
    """
    Public URL for an image field.

    data: URLs are uploaded, http(s) URLs and empty values are returned as is.
    """
    if not value or not value.startswith("data:"):
        return value or None
    encoded = value.split(",", 1)[1] if "," in value else ""
    if not encoded:
        raise ImageUploadError("Empty data URL")
    payload = upload_base64(encoded, client=client)
    url = payload["data"]["url"]
    logger.info("Uploaded image to %s", url)
    return url
