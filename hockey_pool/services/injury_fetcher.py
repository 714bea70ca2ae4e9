"""
Injury page fetcher - retrieves the ESPN NHL injuries HTML with a fallback host.
"""

import asyncio
import logging
from typing import Dict, Optional

import httpx

from hockey_pool.config import settings
from hockey_pool.services.errors import FetchError, FetchTimeoutError

logger = logging.getLogger(__name__)

# Browser-like headers to avoid bot detection
FETCH_HEADERS: Dict[str, str] = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}


class InjuryPageFetcher:
    """Fetches the raw injuries page, retrying once on the alternate host after a 404."""

    def __init__(
        self,
        url: Optional[str] = None,
        fallback_url: Optional[str] = None,
        timeout: Optional[float] = None,
        min_length: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or settings.ESPN_INJURIES_URL
        self.fallback_url = fallback_url or settings.ESPN_INJURIES_URL_ALT
        self.timeout = timeout if timeout is not None else settings.INJURY_REQUEST_TIMEOUT
        self.min_length = min_length if min_length is not None else settings.INJURY_MIN_HTML_LENGTH
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers=FETCH_HEADERS,
            follow_redirects=True,
            transport=self.transport,
        )

    async def fetch(self) -> str:
        """
        Fetch the injuries page HTML.

        Returns:
            str: Page HTML

        Raises:
            FetchTimeoutError: No response within the timeout (no fallback is attempted)
            FetchError: Network failure, non-success status or an implausibly short body
        """
        try:
            return await asyncio.wait_for(self._fetch(), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.error(f"Timeout fetching injuries page after {self.timeout}s")
            raise FetchTimeoutError(
                f"Request timeout: injuries page took longer than {self.timeout}s to respond"
            ) from e

    async def _fetch(self) -> str:
        async with self._client() as client:
            try:
                logger.info(f"Fetching injuries page: {self.url}")
                response = await client.get(self.url)

                if response.status_code == 404 and self.fallback_url:
                    logger.info(f"Primary injuries URL returned 404, trying {self.fallback_url}...")
                    response = await client.get(self.fallback_url)
            except httpx.TimeoutException:
                raise
            except httpx.RequestError as e:
                logger.error(f"Request error fetching injuries page: {e}")
                raise FetchError(f"Request error: {e}") from e

        if not response.is_success:
            raise FetchError(f"HTTP error! status: {response.status_code}", status_code=response.status_code)

        html = response.text
        if not html or len(html) < self.min_length:
            raise FetchError("Received empty or very short HTML response", status_code=response.status_code)

        logger.debug(f"Fetched {len(html)} characters from {response.url}")
        return html
