"""Client for the external say function"""
import logging
from typing import Any, Optional

import httpx

from lib.errors import UpstreamError
from lib.prometheus_metrics import say_proxy_requests_total

logger = logging.getLogger(__name__)


class SayClient:
    """Forwards a keyword to the say function and relays its JSON body"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def start(self):
        if self.client is None:
            self.client = httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def close(self):
        if self.client:
            await self.client.aclose()
            self.client = None

    async def say(self, keyword: str) -> Any:
        """
        Raises UpstreamError for network failures, timeouts, non-2xx answers
        and bodies that are not JSON alike.
        """
        if self.client is None:
            await self.start()
        try:
            response = await self.client.get(self.base_url, params={"keyword": keyword})
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            say_proxy_requests_total.labels(outcome="error").inc()
            logger.error(f"Error calling say function: {e}")
            raise UpstreamError() from e

        say_proxy_requests_total.labels(outcome="success").inc()
        return data
