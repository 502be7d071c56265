"""
API Gateway service for image uploads.
"""

from typing import Any, Dict, Optional

import httpx

from shared.base_service import BaseService
from service_gateway.app.adapters.downstream import DownstreamClient
from service_gateway.app.adapters.save_image_client import SaveImageClient
from service_gateway.app.adapters.storage_client import StorageWriteClient
from service_gateway.app.domain.dispatcher import build_dispatcher

DEFAULT_PORT = 3031


class GatewayService(BaseService):
    """API Gateway service implementation."""

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None, **config_overrides: Any):
        super().__init__("gateway", DEFAULT_PORT, **config_overrides)

        self.downstream = DownstreamClient(
            timeout=self.config.downstream_timeout_seconds,
            limits=httpx.Limits(
                max_connections=self.config.max_connections,
                max_keepalive_connections=self.config.max_keepalive_connections,
            ),
            http_client=http_client,
            metrics=self.metrics,
        )
        self.storage_client = StorageWriteClient(self.config.storage_write_url, self.downstream)
        self.save_image_client = SaveImageClient(self.config.save_image_url, self.downstream)

        self.dispatcher = build_dispatcher(self.storage_client, self.save_image_client)
        self.dispatcher.mount(self.app)

        @self.app.on_event("shutdown")
        async def _shutdown():
            await self.downstream.aclose()

        self._setup_gateway_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.gateway_service = self

    def _setup_gateway_routes(self):
        """Set up gateway-specific informational routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "gateway",
                "message": "Image upload API gateway",
                "version": "1.0.0"
            }

        @self.app.get("/routes")
        async def list_gateway_routes():
            """Return the forwarding route table."""
            routes_payload = [operation.describe() for operation in self.dispatcher.operations()]
            routes_payload.sort(key=lambda item: item["path"])
            return {
                "count": len(routes_payload),
                "routes": routes_payload,
            }

    async def _check_dependencies(self) -> Dict[str, str]:
        """Report the configured downstream targets."""
        return {
            StorageWriteClient.service_name: self.storage_client.target_url,
            SaveImageClient.service_name: self.save_image_client.target_url,
        }


def create_app(http_client: Optional[httpx.AsyncClient] = None, **config_overrides: Any):
    """Create FastAPI application."""
    service = GatewayService(http_client=http_client, **config_overrides)
    return service.app


def main():
    service = GatewayService()
    service.logger.info(
        "Starting gateway",
        host=service.config.host,
        port=service.config.port,
        storage_write_url=service.config.storage_write_url,
        save_image_url=service.config.save_image_url,
    )
    service.run()


if __name__ == "__main__":
    main()
