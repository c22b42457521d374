from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional, Set

from .exceptions import PersistenceError
from .logging_config import get_logger
from .schemas import UnifiedListing
from .skills import SkillRegistry
from .store import JobStore

logger = get_logger(__name__)


class ListingWriter:
    """Existence-check-then-insert persistence of normalized listings.

    Listings are written strictly one at a time, each in its own unit of work.
    A listing whose external id is already stored is skipped, never updated.
    """

    def __init__(self, store: JobStore, skills: Optional[SkillRegistry] = None):
        self.store = store
        self.skills = skills or SkillRegistry(store)

    def store_listings(self, listings: Iterable[UnifiedListing]) -> int:
        """Store every new listing; return how many were actually stored.

        PersistenceError on one listing is logged and the loop moves on. Other
        errors (e.g. a lost connection) propagate to the caller.
        """
        stored = 0
        for listing in listings:
            try:
                if self._store_one(listing):
                    stored += 1
            except PersistenceError as e:
                self.store.rollback()
                logger.error("Error storing job %s: %s", listing.external_id, e)
        return stored

    def _store_one(self, listing: UnifiedListing) -> bool:
        if self.store.find_by_external_id(listing.external_id) is not None:
            logger.debug("Job %s already exists, skipping", listing.external_id)
            return False

        job = self.store.insert_listing(listing, fetched_date=datetime.now(timezone.utc))
        linked: Set[int] = set()
        for name in listing.skills:
            if not name.strip():
                continue
            skill = self.skills.resolve(name)
            if skill.id in linked:
                continue
            self.store.link_listing_skill(job.id, skill.id)
            linked.add(skill.id)
        self.store.commit()

        logger.debug("Stored job: %s at %s", listing.title, listing.company_name)
        return True
