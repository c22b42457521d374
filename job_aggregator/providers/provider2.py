"""Provider 2: keyed job map with structured location and compensation.

Envelope: ``{"status": "success", "data": {"jobsList": {"<key>": {...}}}}``; a plain
list under ``jobsList`` is read the same way.
Records carry no stable id; see ``identity.provider2_external_id``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Sequence

from pydantic import ValidationError

from ..exceptions import FetchError
from ..identity import provider2_external_id
from ..logging_config import get_logger
from ..parsing import (
    DEFAULT_CURRENCY,
    UNKNOWN_CITY,
    UNKNOWN_COMPANY,
    UNKNOWN_LOCATION,
    UNKNOWN_STATE,
    UNKNOWN_TITLE,
    clean_text,
    parse_date,
    sanitize_skills,
)
from ..schemas import (
    Provider2Employer,
    Provider2Job,
    Provider2Location,
    Provider2Requirements,
    Provider2Response,
    UnifiedListing,
)
from .base import JobProvider

logger = get_logger(__name__)

EMPLOYMENT_TYPE = "Full-time"


class Provider2(JobProvider):
    name = "provider2"

    def parse_payload(self, payload: Any) -> List[Provider2Job]:
        status = payload.get("status") if isinstance(payload, dict) else None
        if status != "success":
            raise FetchError(self.name, f"API returned status: {status!r}")
        try:
            envelope = Provider2Response.model_validate(payload)
        except ValidationError as e:
            raise FetchError(self.name, f"unexpected response envelope: {e.error_count()} error(s)") from e

        jobs_list = envelope.data.jobsList
        entries = jobs_list.items() if isinstance(jobs_list, dict) else enumerate(jobs_list)
        jobs: List[Provider2Job] = []
        for key, raw in entries:
            try:
                jobs.append(Provider2Job.model_validate(raw))
            except ValidationError as e:
                logger.warning("%s: skipping malformed job %r: %s", self.name, key, e)
        return jobs

    def normalize(self, records: Sequence[Provider2Job]) -> List[UnifiedListing]:
        now = datetime.now(timezone.utc)
        return [self._to_listing(job, now) for job in records]

    def _to_listing(self, job: Provider2Job, now: datetime) -> UnifiedListing:
        location = job.location or Provider2Location()
        employer = job.employer or Provider2Employer()
        requirements = job.requirements or Provider2Requirements()
        compensation = job.compensation

        salary_min = salary_max = None
        currency = DEFAULT_CURRENCY
        original_range = None
        if compensation is not None:
            salary_min = _to_decimal(compensation.min)
            salary_max = _to_decimal(compensation.max)
            currency = (clean_text(compensation.currency) or DEFAULT_CURRENCY).upper()
            original_range = (
                f"{_raw(compensation.min)}-{_raw(compensation.max)} {_raw(compensation.currency)}"
            ).strip()

        return UnifiedListing(
            external_id=provider2_external_id(self.name, job.position, employer.companyName, job.datePosted),
            title=clean_text(job.position, UNKNOWN_TITLE),
            city=clean_text(location.city, UNKNOWN_CITY),
            state=clean_text(location.state, UNKNOWN_STATE),
            full_address=format_full_address(job.location),
            is_remote=bool(location.remote),
            employment_type=EMPLOYMENT_TYPE,
            salary_min=salary_min,
            salary_max=salary_max,
            salary_currency=currency,
            salary_original_range=original_range,
            company_name=clean_text(employer.companyName, UNKNOWN_COMPANY),
            # provider 2 carries no industry
            company_industry=None,
            company_website=clean_text(employer.website),
            experience_years=_to_int(requirements.experience),
            skills=sanitize_skills(requirements.technologies),
            posted_date=parse_date(job.datePosted, default=now),
            provider=self.name,
        )


def format_full_address(location: Optional[Provider2Location]) -> str:
    """Render "City, State", "Remote" for remote jobs, or the unknown sentinel."""
    if location is None:
        return UNKNOWN_LOCATION
    if location.remote:
        return "Remote"
    parts = [p for p in (clean_text(location.city), clean_text(location.state)) if p]
    return ", ".join(parts) or UNKNOWN_LOCATION


def _raw(value: Any) -> str:
    return "" if value is None else str(value)


def _to_decimal(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        amount = Decimal(str(value).replace(",", ""))
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    # zero means "not disclosed" upstream
    return amount or None


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None
