"""Error types raised by the ingestion pipeline.

Field-level parsing problems are not errors: the parsing helpers degrade to
sentinel values instead. Only the scopes below are raised.
"""


class FetchError(Exception):
    """A provider could not deliver a usable payload (network, timeout, status, envelope)."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message


class PersistenceError(Exception):
    """Storing one listing (or one of its skills) was rejected by the database."""


class AggregationError(Exception):
    """A run was aborted by an error outside the per-provider and per-listing scopes."""
