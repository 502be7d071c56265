"""
Inbound payload and reply envelope models for the gateway routes.

Wire names (``type``, ``requestId``) are kept as aliases so the Python
attributes stay readable while forwarded bodies match what callers sent.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class GatewayPayload(BaseModel):
    """Common base: every inbound body carries the caller's correlation id."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    request_id: StrictStr = Field(alias="requestId")


class UploadMetadata(GatewayPayload):
    """Metadata describing one uploaded runway image."""

    season: StrictStr
    show_name: StrictStr
    designer: StrictStr
    description: StrictStr
    final_image_key: StrictStr
    label: StrictStr
    type_: StrictStr = Field(alias="type")


class ImageUrlRequest(GatewayPayload):
    """Request to store the image found at ``url``."""

    url: StrictStr


class ImagePathRequest(GatewayPayload):
    """Legacy request naming an already-stored image path."""

    final_image_path: StrictStr


class ResponseEnvelope(BaseModel):
    """JSON reply returned to the caller; extra fields are passed through."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    message: str
    request_id: str = Field(alias="requestId")
