from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from standings_board.config.settings import settings
from standings_board.models.enums import SourceKind
from standings_board.models.standing import TeamStanding
from standings_board.normalization.normalizer import Normalizer

# Define common HTTP status codes that warrant a retry
RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


class ScraperError(Exception):
    """Custom exception for fetch failures (network, non-2xx, exhausted retries)."""

    pass


class RateLimitError(ScraperError):
    """Exception raised for rate limit errors (429)."""

    pass


class RetryableStatusError(ScraperError):
    """Upstream answered with a status worth retrying (5xx, 408)."""

    def __init__(self, status_code: int, label: str):
        self.status_code = status_code
        super().__init__(f"{label} returned {status_code}")


class BaseScraper(ABC):
    """Abstract base class for standings sources."""

    source: SourceKind = SourceKind.CSV
    label: str = "upstream"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        normalizer: Optional[Normalizer] = None,
    ):
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.request_timeout_seconds),
            follow_redirects=True,
            headers={"User-Agent": settings.scrape_user_agent},
        )
        self.normalizer = normalizer or Normalizer(settings.priority_team)

    @abstractmethod
    async def fetch_standings(self) -> List[TeamStanding]:
        """Fetch and normalize the current standings.

        Returns:
            TeamStanding records in source order (not yet ranked).

        Raises:
            ScraperError: The upstream could not be reached or answered non-2xx.
            NormalizationError: The payload could not be turned into standings.
        """
        pass

    @retry(
        stop=stop_after_attempt(4),  # Max 3 retries (4 total attempts)
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(
            (httpx.RequestError, RetryableStatusError, RateLimitError)
        ),
        reraise=True,  # Reraise the exception after max attempts
    )
    async def _make_request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> httpx.Response:
        """Makes an asynchronous HTTP request with retry logic."""
        logger.debug(f"Making {method} request to {url}")
        try:
            response = await self.client.request(
                method, url, headers=headers, params=params, **kwargs
            )
        except httpx.RequestError as e:
            # Network errors, timeouts etc. - these are retryable
            logger.warning(f"Request error for {self.label}, retrying: {e}")
            raise

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            logger.warning(
                f"Rate limit hit (429) for {self.label} at {url}. Retry-After: {retry_after}"
            )
            raise RateLimitError(f"Rate limited by {self.label}")

        if response.status_code in RETRYABLE_STATUS_CODES:
            logger.warning(
                f"Retrying request for {self.label} due to status {response.status_code}"
            )
            raise RetryableStatusError(response.status_code, self.label)

        if not response.is_success:
            logger.error(f"HTTP error during request for {self.label}: {response.status_code}")
            raise ScraperError(f"{self.label} returned {response.status_code}")

        logger.debug(f"Request successful: {response.status_code} for {url}")
        return response

    async def _get(self, url: str, **kwargs) -> httpx.Response:
        """GET with retries; every failure surfaces as ScraperError."""
        try:
            return await self._make_request("GET", url, **kwargs)
        except ScraperError:
            raise
        except httpx.RequestError as e:
            logger.error(f"Max retries exceeded for {self.label} request to {url}: {e}")
            raise ScraperError(f"Failed request to {self.label}: {e}") from e

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.debug(f"Closed HTTP client for {self.label}")
