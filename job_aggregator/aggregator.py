"""Aggregation run: fetch all providers concurrently, merge, write.

``run_aggregation`` is the single entry point for both the scheduler and the
manual trigger. A run lock rejects an invocation that overlaps a run already
in progress.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

import httpx
from sqlalchemy.orm import Session

from .config import Settings
from .exceptions import AggregationError
from .logging_config import get_logger
from .providers.base import JobProvider
from .providers.provider1 import Provider1
from .providers.provider2 import Provider2
from .schemas import UnifiedListing
from .store import JobStore
from .writer import ListingWriter

logger = get_logger(__name__)

Outcome = Union[List[UnifiedListing], BaseException]


@dataclass
class AggregationResult:
    started_at: datetime
    finished_at: Optional[datetime] = None
    fetched: Dict[str, int] = field(default_factory=dict)  # provider -> normalized count
    failed: Dict[str, str] = field(default_factory=dict)  # provider -> error message
    total: int = 0
    stored: int = 0


class JobAggregator:
    def __init__(
        self,
        providers: Sequence[JobProvider],
        session_factory: Callable[[], Session],
        client_factory: Optional[Callable[[], httpx.AsyncClient]] = None,
    ):
        self.providers = list(providers)
        self.session_factory = session_factory
        self.client_factory = client_factory or httpx.AsyncClient
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings, session_factory: Callable[[], Session], **kwargs) -> "JobAggregator":
        provider_kwargs = {
            "timeout_seconds": settings.FETCH_TIMEOUT_SECONDS,
            "user_agent": settings.USER_AGENT,
        }
        providers = [
            Provider1(settings.PROVIDER1_URL, **provider_kwargs),
            Provider2(settings.PROVIDER2_URL, **provider_kwargs),
        ]
        return cls(providers, session_factory, **kwargs)

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    async def run_aggregation(self) -> Optional[AggregationResult]:
        """Run one aggregation; returns None when another run holds the lock.

        Raises AggregationError if merging or writing fails outside the
        per-listing scope. Listings committed before the failure stay stored.
        """
        if not self._lock.acquire(blocking=False):
            logger.warning("Job aggregation already in progress; ignoring trigger")
            return None
        try:
            return await self._run()
        finally:
            self._lock.release()

    def trigger(self) -> Optional[AggregationResult]:
        """Fire-and-forget entry point for threads (scheduler, background tasks)."""
        try:
            return asyncio.run(self.run_aggregation())
        except AggregationError:
            # already logged with traceback in _run
            return None

    async def _run(self) -> AggregationResult:
        result = AggregationResult(started_at=datetime.now(timezone.utc))
        logger.info("Starting job aggregation process...")

        merged: List[UnifiedListing] = []
        async with self.client_factory() as client:
            pending = [self._settle(provider, client) for provider in self.providers]
            # completion order decides the merge order
            for next_done in asyncio.as_completed(pending):
                provider, outcome = await next_done
                if isinstance(outcome, BaseException):
                    result.failed[provider.name] = str(outcome)
                    logger.error("%s failed: %s", provider.name, outcome)
                    continue
                merged.extend(outcome)
                result.fetched[provider.name] = len(outcome)
                logger.info("%s: %d jobs fetched", provider.name, len(outcome))

        result.total = len(merged)
        try:
            result.stored = self._write(merged)
        except Exception as e:
            logger.exception("Critical error during job aggregation: %s", e)
            raise AggregationError(str(e)) from e

        result.finished_at = datetime.now(timezone.utc)
        logger.info(
            "Job aggregation completed. %d new jobs stored out of %d total jobs",
            result.stored,
            result.total,
        )
        return result

    async def _settle(self, provider: JobProvider, client: httpx.AsyncClient) -> Tuple[JobProvider, Outcome]:
        # one provider's failure must never cancel or fail the others
        try:
            records = await provider.fetch(client)
            return provider, provider.normalize(records)
        except Exception as e:
            return provider, e

    def _write(self, listings: List[UnifiedListing]) -> int:
        db = self.session_factory()
        try:
            return ListingWriter(JobStore(db)).store_listings(listings)
        finally:
            db.close()
