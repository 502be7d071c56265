"""
Payload validation for inbound gateway requests.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import from_json

from shared.errors import MalformedPayload
from shared.logging import get_logger

JSON_MEDIA_TYPE = "application/json"

PayloadT = TypeVar("PayloadT", bound=BaseModel)

logger = get_logger("gateway.validation")


def is_json_content_type(content_type: Optional[str]) -> bool:
    """Accept ``application/json`` with or without parameters."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == JSON_MEDIA_TYPE


def parse_payload(model: Type[PayloadT], raw: bytes, content_type: Optional[str]) -> PayloadT:
    """Deserialize ``raw`` into ``model`` or raise ``MalformedPayload``.

    No downstream call may happen for a request that fails here, so this
    runs before anything else in the pipeline.
    """
    if not is_json_content_type(content_type):
        raise MalformedPayload(
            f"Content-Type must be {JSON_MEDIA_TYPE}",
            diagnostic={"content_type": content_type},
            request_id=_salvage_request_id(raw),
        )

    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        diagnostic = _summarize_errors(exc)
        logger.info("Payload rejected", model=model.__name__, errors=diagnostic)
        raise MalformedPayload(
            f"Invalid {model.__name__} payload",
            diagnostic=diagnostic,
            request_id=_salvage_request_id(raw),
        ) from exc


def _summarize_errors(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {
            "loc": [str(part) for part in error["loc"]],
            "type": error["type"],
            "msg": error["msg"],
        }
        for error in exc.errors()
    ]


def _salvage_request_id(raw: bytes) -> Optional[str]:
    """Best-effort correlation id from a body that failed validation."""
    # from_json enforces a nesting limit and raises ValueError past it
    try:
        data = from_json(raw)
    except ValueError:
        return None
    if isinstance(data, dict) and isinstance(data.get("requestId"), str):
        return data["requestId"]
    return None
