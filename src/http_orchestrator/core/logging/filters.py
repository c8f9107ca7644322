"""
Record filters.

The redirect resolver marks the calling thread with the chain's request id
for the duration of send(); CorrelationIdFilter copies it onto records.
"""

import logging
import threading
from typing import Dict, Any, Optional


_chain = threading.local()


def set_correlation_id(correlation_id: str) -> None:
    """Mark the calling thread as running chain ``correlation_id``."""
    _chain.id = correlation_id


def get_correlation_id() -> Optional[str]:
    return getattr(_chain, 'id', None)


def clear_correlation_id() -> None:
    _chain.id = None


class CorrelationIdFilter(logging.Filter):
    """Stamps ``correlation_id`` on records emitted inside a chain; others pass untouched."""

    def filter(self, record: logging.LogRecord) -> bool:
        chain_id = get_correlation_id()
        if chain_id is not None:
            record.correlation_id = chain_id
        return True


class ExtraFieldsFilter(logging.Filter):
    """
    Static fields for every record (service name, environment).

    Per-call fields with the same name take precedence.
    """

    def __init__(self, extra_fields: Dict[str, Any]):
        super().__init__()
        self.extra_fields = dict(extra_fields)

    def filter(self, record: logging.LogRecord) -> bool:
        missing = {k: v for k, v in self.extra_fields.items() if k not in record.__dict__}
        record.__dict__.update(missing)
        return True
