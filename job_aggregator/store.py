"""Storage contract used by the writer and the skill registry.

``JobStore`` wraps one SQLAlchemy session. Constraint and data errors raised on
flush/commit are translated to PersistenceError; anything else (connection
loss, misconfiguration) propagates unchanged and aborts the run.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.orm import Session

from .exceptions import PersistenceError
from .models import JobORM, SkillORM, job_skills
from .schemas import UnifiedListing


class JobStore:
    def __init__(self, db: Session):
        self.db = db

    # ---- reads ----
    def find_by_external_id(self, external_id: str) -> Optional[JobORM]:
        return self.db.execute(
            select(JobORM).where(JobORM.external_id == external_id)
        ).scalar_one_or_none()

    def find_skill_by_name(self, name: str) -> Optional[SkillORM]:
        return self.db.execute(select(SkillORM).where(SkillORM.name == name)).scalar_one_or_none()

    # ---- writes ----
    def insert_listing(self, listing: UnifiedListing, fetched_date: datetime) -> JobORM:
        job = JobORM(
            **listing.model_dump(exclude={"skills"}),
            fetched_date=fetched_date,
        )
        self.db.add(job)
        self._flush(f"listing {listing.external_id}")
        return job

    def insert_skill(self, name: str) -> SkillORM:
        skill = SkillORM(name=name)
        self.db.add(skill)
        self._flush(f"skill {name!r}")
        return skill

    def link_listing_skill(self, listing_id: int, skill_id: int) -> None:
        try:
            self.db.execute(insert(job_skills).values(job_offer_id=listing_id, skill_id=skill_id))
        except IntegrityError as e:
            raise PersistenceError(f"link {listing_id}->{skill_id} rejected: {e.orig!s}") from e

    # ---- unit of work ----
    def commit(self) -> None:
        try:
            self.db.commit()
        except (IntegrityError, DataError) as e:
            raise PersistenceError(f"commit rejected: {e.orig!s}") from e

    def rollback(self) -> None:
        self.db.rollback()

    def _flush(self, what: str) -> None:
        try:
            self.db.flush()
        except (IntegrityError, DataError) as e:
            raise PersistenceError(f"{what} rejected: {e.orig!s}") from e
