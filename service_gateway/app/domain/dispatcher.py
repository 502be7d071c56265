"""
Route table for the gateway.

Each operation is one (method, path) pair bound to a request model, an
optional downstream call and a response shape. Operations share no mutable
state, so concurrent requests never coordinate.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional, Tuple, Type

from fastapi import FastAPI, Request
from fastapi.responses import Response

from service_gateway.app.adapters.downstream import RawResponse
from service_gateway.app.adapters.save_image_client import SaveImageClient
from service_gateway.app.adapters.storage_client import StorageWriteClient
from service_gateway.app.domain import normalizer
from service_gateway.app.domain.correlation import CorrelationContext, correlation_scope
from service_gateway.app.domain.models import (
    GatewayPayload,
    ImagePathRequest,
    ImageUrlRequest,
    UploadMetadata,
)
from service_gateway.app.domain.validation import parse_payload
from shared.logging import get_logger

Forwarder = Callable[[GatewayPayload, CorrelationContext], Awaitable[RawResponse]]
Responder = Callable[[GatewayPayload, Optional[RawResponse]], Response]


@dataclass(frozen=True)
class Operation:
    """One routable gateway operation."""

    name: str
    method: str
    path: str
    model: Type[GatewayPayload]
    respond: Responder
    forward: Optional[Forwarder] = None
    target_url: Optional[str] = None

    def describe(self) -> Dict[str, Optional[str]]:
        return {
            "name": self.name,
            "method": self.method,
            "path": self.path,
            "target": self.target_url,
        }


class Dispatcher:
    """Registry keyed by (method, path)."""

    def __init__(self):
        self._operations: Dict[Tuple[str, str], Operation] = {}
        self.logger = get_logger("gateway.dispatcher")

    def register(self, operation: Operation) -> None:
        key = (operation.method.upper(), operation.path)
        if key in self._operations:
            raise ValueError(f"Route already registered: {key[0]} {key[1]}")
        self._operations[key] = operation

    def get(self, method: str, path: str) -> Optional[Operation]:
        return self._operations.get((method.upper(), path))

    def operations(self) -> List[Operation]:
        return list(self._operations.values())

    async def dispatch(self, operation: Operation, raw: bytes, content_type: Optional[str]) -> Response:
        """Validate, forward and normalize one request.

        Any ``GatewayError`` raised along the way propagates unchanged; the
        request then ends in the rejected state.
        """
        payload = parse_payload(operation.model, raw, content_type)

        with correlation_scope(payload.request_id) as correlation:
            self.logger.info("Payload validated", operation=operation.name)

            raw_response = None
            if operation.forward is not None:
                raw_response = await operation.forward(payload, correlation)

            return operation.respond(payload, raw_response)

    def mount(self, app: FastAPI) -> None:
        """Attach every registered operation to ``app``."""
        for operation in self.operations():
            app.add_api_route(
                operation.path,
                self._endpoint(operation),
                methods=[operation.method],
                name=operation.name,
                response_model=None,
            )

    def _endpoint(self, operation: Operation):
        async def endpoint(request: Request):
            raw = await request.body()
            return await self.dispatch(operation, raw, request.headers.get("content-type"))

        endpoint.__name__ = operation.name.replace("-", "_")
        return endpoint


def build_dispatcher(storage_client: StorageWriteClient, save_image_client: SaveImageClient) -> Dispatcher:
    """Build the gateway's route table."""
    dispatcher = Dispatcher()

    dispatcher.register(Operation(
        name="dynamo-forward",
        method="POST",
        path="/dynamo",
        model=UploadMetadata,
        forward=storage_client.upload,
        respond=normalizer.metadata_forwarded,
        target_url=storage_client.target_url,
    ))
    dispatcher.register(Operation(
        name="url-forward",
        method="POST",
        path="/url",
        model=ImageUrlRequest,
        forward=save_image_client.save_url,
        respond=normalizer.url_forwarded,
        target_url=save_image_client.target_url,
    ))
    # Legacy: echoes the path, no downstream call
    dispatcher.register(Operation(
        name="path-echo",
        method="POST",
        path="/path",
        model=ImagePathRequest,
        respond=normalizer.path_echoed,
    ))

    return dispatcher
