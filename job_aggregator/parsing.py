"""Best-effort parsing of free-text job fields.

Every helper here is pure and total: unparseable input yields a documented
default (sentinel strings, ``NO_SALARY``, the current time) instead of an
exception, so normalizers never have to special-case a parsing failure.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, List, NamedTuple, Optional

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_CITY = "Unknown City"
UNKNOWN_STATE = "Unknown State"
UNKNOWN_LOCATION = "Unknown Location"
UNKNOWN_TYPE = "Unknown Type"
UNKNOWN_COMPANY = "Unknown Company"
DEFAULT_CURRENCY = "USD"

MAX_SKILLS = 20
MAX_SKILL_LENGTH = 100


class SalaryRange(NamedTuple):
    minimum: Optional[Decimal]
    maximum: Optional[Decimal]
    currency: str

    @property
    def matched(self) -> bool:
        return self.minimum is not None or self.maximum is not None


NO_SALARY = SalaryRange(None, None, DEFAULT_CURRENCY)


class Location(NamedTuple):
    city: str
    state: str


def clean_text(value: Any, default: Optional[str] = None) -> Optional[str]:
    """Strip a string field; non-strings and blanks become ``default``."""
    if not isinstance(value, str):
        return default
    value = value.strip()
    return value or default


# -----------------------
# Salary
# -----------------------
def _amount(name: str) -> str:
    return rf"(?P<{name}>\d[\d,]*(?:\.\d+)?)\s*(?P<{name}_k>[kK])?"


# "$80k-$120k USD", "80000 - 120000", "80k-120000 eur"
_SALARY_TRAILING_CURRENCY = re.compile(
    rf"^\s*\$?\s*{_amount('min')}\s*[-–]\s*\$?\s*{_amount('max')}\s*(?P<currency>[A-Za-z]{{3}})?\s*$"
)
# "USD 80k-120k", "EUR $80,000 - $95,000"
_SALARY_LEADING_CURRENCY = re.compile(
    rf"^\s*(?P<currency>[A-Za-z]{{3}})\s*\$?\s*{_amount('min')}\s*[-–]\s*\$?\s*{_amount('max')}\s*$"
)
SALARY_PATTERNS = (_SALARY_TRAILING_CURRENCY, _SALARY_LEADING_CURRENCY)


def _to_amount(digits: str, k_suffix: Optional[str]) -> Optional[Decimal]:
    try:
        value = Decimal(digits.replace(",", ""))
    except InvalidOperation:
        return None
    if k_suffix:
        value *= 1000
    # a zero bound carries no salary information
    return value or None


def parse_salary_range(text: Any) -> SalaryRange:
    """Extract min/max/currency from a free-text salary range.

    Each bound scales by 1000 on its own ``k``/``K`` suffix, so "80k-120000"
    yields 80000 and 120000. Returns ``NO_SALARY`` when nothing matches.
    """
    if not isinstance(text, str) or not text.strip():
        return NO_SALARY

    for pattern in SALARY_PATTERNS:
        m = pattern.match(text)
        if not m:
            continue
        currency = (m.group("currency") or DEFAULT_CURRENCY).upper()
        return SalaryRange(
            _to_amount(m.group("min"), m.group("min_k")),
            _to_amount(m.group("max"), m.group("max_k")),
            currency,
        )
    return NO_SALARY


# -----------------------
# Location
# -----------------------
_REMOTE_RE = re.compile(r"remote|anywhere|work from home|wfh", re.IGNORECASE)


def parse_location(text: Any) -> Location:
    """Split "City, State" free text; missing parts become sentinels."""
    text = clean_text(text, "")
    if not text:
        return Location(UNKNOWN_CITY, UNKNOWN_STATE)

    parts = [p.strip() for p in text.split(",")]
    city = parts[0] or UNKNOWN_CITY
    state = (parts[1] or UNKNOWN_STATE) if len(parts) >= 2 else UNKNOWN_STATE
    return Location(city, state)


def is_remote_location(text: Any) -> bool:
    """Heuristic remote detection over a free-text location."""
    if not isinstance(text, str):
        return False
    return bool(_REMOTE_RE.search(text))


def is_remote_marker(text: Any) -> bool:
    """True when the whole token is a remote keyword ("Remote", "WFH"), not a place."""
    if not isinstance(text, str):
        return False
    return bool(_REMOTE_RE.fullmatch(text.strip()))


# -----------------------
# Dates & skills
# -----------------------
def parse_date(text: Any, default: Optional[datetime] = None) -> datetime:
    """Parse an ISO-8601 timestamp; fall back to ``default`` or now (UTC)."""
    fallback = default or datetime.now(timezone.utc)
    if not isinstance(text, str) or not text.strip():
        return fallback
    try:
        parsed = datetime.fromisoformat(text.strip().replace("Z", "+00:00"))
    except ValueError:
        return fallback
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def sanitize_skills(skills: Any) -> List[str]:
    """Keep trimmed, non-empty string skills of at most 100 chars, first 20 only.

    Case and whitespace variants are not merged here.
    """
    if not isinstance(skills, (list, tuple)):
        return []
    cleaned = [s.strip() for s in skills if isinstance(s, str)]
    cleaned = [s for s in cleaned if 0 < len(s) <= MAX_SKILL_LENGTH]
    return cleaned[:MAX_SKILLS]
