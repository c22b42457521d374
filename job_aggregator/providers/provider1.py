"""Provider 1: flat job list with free-text location and salary.

Envelope: ``{"metadata": {...}, "jobs": [ {jobId, title, details, company, skills, postedDate} ]}``
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence

from pydantic import ValidationError

from ..exceptions import FetchError
from ..identity import provider1_external_id
from ..logging_config import get_logger
from ..parsing import (
    UNKNOWN_CITY,
    UNKNOWN_COMPANY,
    UNKNOWN_LOCATION,
    UNKNOWN_STATE,
    UNKNOWN_TITLE,
    UNKNOWN_TYPE,
    clean_text,
    is_remote_location,
    is_remote_marker,
    parse_date,
    parse_location,
    parse_salary_range,
    sanitize_skills,
)
from ..schemas import Provider1Company, Provider1Details, Provider1Job, Provider1Response, UnifiedListing
from .base import JobProvider

logger = get_logger(__name__)


class Provider1(JobProvider):
    name = "provider1"

    def parse_payload(self, payload: Any) -> List[Provider1Job]:
        try:
            envelope = Provider1Response.model_validate(payload)
        except ValidationError as e:
            raise FetchError(self.name, f"unexpected response envelope: {e.error_count()} error(s)") from e

        jobs: List[Provider1Job] = []
        for index, raw in enumerate(envelope.jobs):
            try:
                jobs.append(Provider1Job.model_validate(raw))
            except ValidationError as e:
                logger.warning("%s: skipping malformed job at index %d: %s", self.name, index, e)
        return jobs

    def normalize(self, records: Sequence[Provider1Job]) -> List[UnifiedListing]:
        now = datetime.now(timezone.utc)
        return [self._to_listing(job, now) for job in records]

    def _to_listing(self, job: Provider1Job, now: datetime) -> UnifiedListing:
        details = job.details or Provider1Details()
        company = job.company or Provider1Company()

        location_text = clean_text(details.location, "")
        location = parse_location(location_text)
        # a bare remote marker ("Remote", "WFH") is not a place
        city = UNKNOWN_CITY if is_remote_marker(location.city) else location.city
        state = UNKNOWN_STATE if is_remote_marker(location.state) else location.state
        salary = parse_salary_range(details.salaryRange)

        return UnifiedListing(
            external_id=provider1_external_id(self.name, job.jobId),
            title=clean_text(job.title, UNKNOWN_TITLE),
            city=city,
            state=state,
            full_address=location_text or UNKNOWN_LOCATION,
            is_remote=is_remote_location(location_text),
            employment_type=clean_text(details.type, UNKNOWN_TYPE),
            salary_min=salary.minimum,
            salary_max=salary.maximum,
            salary_currency=salary.currency,
            salary_original_range=_original_range(details.salaryRange),
            company_name=clean_text(company.name, UNKNOWN_COMPANY),
            company_industry=clean_text(company.industry),
            # provider 1 carries neither field
            company_website=None,
            experience_years=None,
            skills=sanitize_skills(job.skills),
            posted_date=parse_date(job.postedDate, default=now),
            provider=self.name,
        )


def _original_range(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None
