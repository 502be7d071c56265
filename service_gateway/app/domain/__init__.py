"""
Domain layer for the Gateway Service.

Payload models, correlation context, validation, response normalization and
the route table. Only leaf modules are re-exported here so adapters can import
the domain without cycles.
"""

from .correlation import REQUEST_ID_HEADER, CorrelationContext, correlation_scope
from .models import ImagePathRequest, ImageUrlRequest, ResponseEnvelope, UploadMetadata

__all__ = [
    "REQUEST_ID_HEADER",
    "CorrelationContext",
    "correlation_scope",
    "ImagePathRequest",
    "ImageUrlRequest",
    "ResponseEnvelope",
    "UploadMetadata",
]
