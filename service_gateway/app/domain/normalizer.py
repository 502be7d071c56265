"""
Response normalization for gateway operations.

Successful outcomes become the caller-facing reply here. Failures never
reach this module: they propagate as ``GatewayError`` and the service's
exception handler renders them.
"""

from typing import Any, Dict, Optional

from fastapi.responses import HTMLResponse, JSONResponse

from service_gateway.app.adapters.downstream import RawResponse
from service_gateway.app.domain.models import (
    ImagePathRequest,
    ImageUrlRequest,
    ResponseEnvelope,
    UploadMetadata,
)

METADATA_RECEIVED = "Received metadata successfully"
URL_SENT = "URL sent successfully"
PATH_RECEIVED = "Path received successfully"

# Downstream reply fields relayed to the caller when present
RESOLVED_FIELDS = ("url", "path")


def envelope(message: str, request_id: str, **extra: Any) -> JSONResponse:
    body = ResponseEnvelope(message=message, request_id=request_id, **extra)
    return JSONResponse(status_code=200, content=body.model_dump(by_alias=True))


def resolved_fields(raw: Optional[RawResponse]) -> Dict[str, Any]:
    """Pick the resolved location, if any, out of a downstream JSON reply."""
    if raw is None:
        return {}
    data = raw.json()
    if not isinstance(data, dict):
        return {}
    return {name: data[name] for name in RESOLVED_FIELDS if data.get(name) is not None}


def metadata_forwarded(payload: UploadMetadata, raw: Optional[RawResponse]) -> HTMLResponse:
    return HTMLResponse(content=METADATA_RECEIVED, status_code=200)


def url_forwarded(payload: ImageUrlRequest, raw: Optional[RawResponse]) -> JSONResponse:
    return envelope(URL_SENT, payload.request_id, **resolved_fields(raw))


def path_echoed(payload: ImagePathRequest, raw: Optional[RawResponse]) -> JSONResponse:
    return envelope(PATH_RECEIVED, payload.request_id, final_image_path=payload.final_image_path)
