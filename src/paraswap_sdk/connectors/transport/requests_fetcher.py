"""Fetcher backed by a ``requests.Session``."""

import asyncio
from typing import Any

import requests
from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ...config.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from ...core.exceptions import APIError
from ...core.interfaces import Fetcher
from ...utils.logger import get_logger
from .base import extract_error_message

logger = get_logger(__name__)


class RequestsFetcher(Fetcher):
    """Fetcher running blocking ``requests`` calls off the event loop."""

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        max_attempts: int = 1,
    ):
        """Initialize fetcher.

        Args:
            session: Session to reuse (a new one is created if omitted)
            timeout: Per-request timeout in seconds
            max_attempts: Attempts for connection errors and timeouts.
                The default of 1 never retries; API endpoints are not
                guaranteed idempotent, so retries are strictly opt-in.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.max_attempts = max_attempts

    async def fetch(
        self,
        url: str,
        method: str = "GET",
        data: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        return await asyncio.to_thread(self._fetch_sync, url, method, data, headers)

    def _fetch_sync(
        self,
        url: str,
        method: str,
        data: Any,
        headers: dict[str, str] | None,
    ) -> Any:
        logger.debug("API request", method=method, url=url)

        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
            retry=retry_if_exception_type(
                (requests.exceptions.ConnectionError, requests.exceptions.Timeout)
            ),
        )

        try:
            response = retrying(
                self.session.request,
                method,
                url,
                json=data,
                headers=headers,
                timeout=self.timeout,
            )
        except RetryError as e:
            raise APIError(f"Request failed: {e.last_attempt.exception()}") from e
        except requests.exceptions.RequestException as e:
            raise APIError(f"Request failed: {e}") from e

        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            message = extract_error_message(body, response.reason or "Request failed")
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
