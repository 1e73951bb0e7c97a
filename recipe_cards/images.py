"""Image downloading and validation utilities."""

from __future__ import annotations

import logging
from typing import Optional

import requests
from filetype import guess

from .errors import DownloadError

logger = logging.getLogger("recipe_cards")


def detect_image_format(data: bytes) -> Optional[str]:
    """Detect image type using filetype; returns lowercase extension."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        if ext == "jpeg":
            return "jpg"
        return ext
    return None


def download_image(session: requests.Session, url: str, timeout: float) -> bytes:
    """Fetch *url* and return the whole body.

    The body is kept in memory so the upload can be sent with a
    Content-Length header instead of chunked encoding.
    """
    try:
        resp = session.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise DownloadError(f"GET {url}: {exc}") from exc

    try:
        if not 200 <= resp.status_code < 300:
            raise DownloadError(f"Wrong status code: {resp.status_code}")
        data = resp.content
    finally:
        resp.close()

    if detect_image_format(data) is None:
        logger.warning(
            "Payload from %s does not look like an image (Content-Type=%s)",
            url,
            resp.headers.get("Content-Type", ""),
        )
    return data
