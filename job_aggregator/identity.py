"""Deterministic external ids, the dedup key for stored listings.

Changing either derivation re-admits every previously stored listing as new.
"""

from __future__ import annotations

import base64
from typing import Any

PROVIDER2_ID_LENGTH = 16


def _part(value: Any) -> str:
    # unset parts render the way the upstream id was first built
    return "undefined" if value is None else str(value)


def provider1_external_id(provider: str, job_id: Any) -> str:
    return f"{provider}_{_part(job_id)}"


def provider2_external_id(provider: str, position: Any, company_name: Any, date_posted: Any) -> str:
    """Provider 2 has no id field: base64 of "position_company_date", first 16 chars."""
    content = f"{_part(position)}_{_part(company_name)}_{_part(date_posted)}"
    digest = base64.b64encode(content.encode("utf-8")).decode("ascii")
    return f"{provider}_{digest[:PROVIDER2_ID_LENGTH]}"
