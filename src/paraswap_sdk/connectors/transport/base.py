"""Helpers shared by HTTP transports."""

from typing import Any


def extract_error_message(body: Any, fallback: str) -> str:
    """Pick the API's error message out of a decoded error body.

    The API reports failures as ``{"error": ...}`` (pricing) or
    ``{"message": ...}`` (orders); anything else falls back to the raw text.
    """
    if isinstance(body, dict):
        for key in ("error", "message"):
            value = body.get(key)
            if value:
                return value if isinstance(value, str) else str(value)
    if isinstance(body, str) and body:
        return body
    return fallback
