"""Fetcher backed by an ``httpx.AsyncClient``."""

from typing import Any

import httpx

from ...core.exceptions import APIError
from ...core.interfaces import Fetcher
from ...utils.logger import get_logger
from .base import extract_error_message

logger = get_logger(__name__)


class HttpxFetcher(Fetcher):
    """Native async fetcher. Timeouts and retries are the client's concern."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def fetch(
        self,
        url: str,
        method: str = "GET",
        data: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        logger.debug("API request", method=method, url=url)

        try:
            response = await self.client.request(method, url, json=data, headers=headers)
        except httpx.HTTPError as e:
            raise APIError(f"Request failed: {e}") from e

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            message = extract_error_message(body, response.reason_phrase or "Request failed")
            logger.warning(
                "API request rejected",
                method=method,
                url=url,
                status=response.status_code,
                error=message,
            )
            raise APIError(message, status=response.status_code, data=body)

        try:
            return response.json()
        except ValueError as e:
            raise APIError(
                f"Invalid JSON in response: {e}", status=response.status_code
            ) from e
