"""Provider adapter interface.

A provider knows how to fetch its upstream payload and how to map its records
onto ``UnifiedListing``. Adding a source means adding one subclass; the
aggregator only ever talks to this interface.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

import httpx

from ..exceptions import FetchError
from ..logging_config import get_logger
from ..schemas import UnifiedListing

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = "Job-Aggregator/1.0"


class JobProvider(ABC):
    """Abstract base class for one upstream job source."""

    name: str

    def __init__(
        self,
        url: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent

    def headers(self) -> Dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": "application/json"}

    async def fetch(self, client: httpx.AsyncClient) -> List[Any]:
        """GET the provider endpoint and return its parsed records.

        The whole request is bounded by ``timeout_seconds``; every failure mode
        (network, timeout, HTTP status, body, envelope) surfaces as FetchError.
        """
        logger.debug("Fetching from %s: %s", self.name, self.url)
        try:
            resp = await asyncio.wait_for(
                client.get(self.url, headers=self.headers(), timeout=self.timeout_seconds),
                timeout=self.timeout_seconds,
            )
            resp.raise_for_status()
            payload = resp.json()
        except asyncio.TimeoutError as e:
            raise FetchError(self.name, f"timed out after {self.timeout_seconds}s") from e
        except httpx.HTTPError as e:
            raise FetchError(self.name, f"request failed: {e!s}") from e
        except ValueError as e:
            raise FetchError(self.name, f"response is not JSON: {e!s}") from e
        return self.parse_payload(payload)

    @abstractmethod
    def parse_payload(self, payload: Any) -> List[Any]:
        """Validate the response envelope and return the raw records.

        Raises FetchError when the envelope is not what the provider promises.
        """
        raise NotImplementedError

    @abstractmethod
    def normalize(self, records: Sequence[Any]) -> List[UnifiedListing]:
        """Map raw records to canonical listings. Never raises."""
        raise NotImplementedError
