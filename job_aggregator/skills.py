from __future__ import annotations

from .logging_config import get_logger
from .models import SkillORM
from .store import JobStore

logger = get_logger(__name__)


class SkillRegistry:
    """Resolve skill names to stored skills, creating them on first sight.

    Names are matched exactly after trimming, so "Go" and "GO" stay distinct.
    Resolution is check-then-insert without locking; it is only race-free while
    a single writer runs at a time.
    """

    def __init__(self, store: JobStore):
        self.store = store

    def resolve(self, name: str) -> SkillORM:
        clean = name.strip()
        if not clean:
            raise ValueError("skill name must not be blank")

        skill = self.store.find_skill_by_name(clean)
        if skill is None:
            skill = self.store.insert_skill(clean)
            logger.debug("Created new skill: %s", clean)
        return skill
