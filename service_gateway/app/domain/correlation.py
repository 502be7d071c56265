"""
Correlation context for a single gateway request.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator

from shared.logging import reset_request_id, set_request_id

# Header carrying the correlation id on every outbound call
REQUEST_ID_HEADER = "requestId"


@dataclass(frozen=True)
class CorrelationContext:
    """Caller-supplied request id, never generated by the gateway."""

    request_id: str

    def outbound_headers(self) -> Dict[str, str]:
        return {REQUEST_ID_HEADER: self.request_id}


@contextmanager
def correlation_scope(request_id: str) -> Iterator[CorrelationContext]:
    """Bind ``request_id`` to the logging context for the enclosed block."""
    token = set_request_id(request_id)
    try:
        yield CorrelationContext(request_id)
    finally:
        reset_request_id(token)
