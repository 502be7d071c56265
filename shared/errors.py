"""
Shared error handling for the image upload gateway.

Every failure a request can hit is a ``GatewayError`` subclass tagged with an
``ErrorKind``. Handlers branch on the kind (or the subclass), never on the
message text.
"""

from enum import Enum
from typing import Dict, Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(str, Enum):
    """Failure classification surfaced to callers."""

    MALFORMED_PAYLOAD = "MalformedPayload"
    TIMEOUT = "Timeout"
    TRANSPORT_FAILURE = "TransportFailure"
    DOWNSTREAM_REJECTED = "DownstreamRejected"


class ErrorResponse(BaseModel):
    """Standard error response format."""

    model_config = ConfigDict(populate_by_name=True)

    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)
    request_id: Optional[str] = Field(default=None, alias="requestId")


class GatewayError(Exception):
    """Base exception for gateway failures."""

    kind: ErrorKind
    status_code: int = 502

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None,
    ):
        self.message = message
        self.details = details or {}
        self.request_id = request_id
        super().__init__(message)

    @property
    def code(self) -> str:
        return self.kind.value

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details,
            request_id=self.request_id,
        )


class MalformedPayload(GatewayError):
    """Inbound body is not valid JSON or does not match the route's shape."""

    kind = ErrorKind.MALFORMED_PAYLOAD
    status_code = 400

    def __init__(
        self,
        message: str = "Malformed payload",
        diagnostic: Any = None,
        request_id: Optional[str] = None,
    ):
        details = {"diagnostic": diagnostic} if diagnostic is not None else {}
        super().__init__(message, details, request_id)
        self.diagnostic = diagnostic


class DownstreamTimeout(GatewayError):
    """Downstream service did not answer within the configured bound."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, service: str, timeout: float, request_id: Optional[str] = None):
        super().__init__(
            f"{service}: no response within {timeout:g}s",
            {"service": service, "timeout_seconds": timeout},
            request_id,
        )
        self.service = service
        self.timeout = timeout


class TransportFailure(GatewayError):
    """Downstream service could not be reached."""

    kind = ErrorKind.TRANSPORT_FAILURE

    def __init__(self, service: str, cause: str, request_id: Optional[str] = None):
        super().__init__(
            f"{service}: {cause}",
            {"service": service, "cause": cause},
            request_id,
        )
        self.service = service
        self.cause = cause


class DownstreamRejected(GatewayError):
    """Downstream service answered with a non-success status."""

    kind = ErrorKind.DOWNSTREAM_REJECTED

    def __init__(
        self,
        service: str,
        status: int,
        body: str = "",
        request_id: Optional[str] = None,
    ):
        super().__init__(
            f"{service}: unexpected status {status}",
            {"service": service, "status": status, "body": body},
            request_id,
        )
        self.service = service
        self.status = status
