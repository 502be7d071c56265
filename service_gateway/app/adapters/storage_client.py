"""
Storage-write service client for Gateway.
"""

from service_gateway.app.adapters.downstream import DownstreamClient, RawResponse
from service_gateway.app.domain.correlation import CorrelationContext
from service_gateway.app.domain.models import UploadMetadata


class StorageWriteClient:
    """Client for the service that persists upload metadata."""

    service_name = "storage_write"

    def __init__(self, storage_write_url: str, downstream: DownstreamClient):
        self.base_url = storage_write_url.rstrip('/')
        self.downstream = downstream

    @property
    def target_url(self) -> str:
        return f"{self.base_url}/upload"

    async def upload(self, metadata: UploadMetadata, correlation: CorrelationContext) -> RawResponse:
        """Forward the metadata to ``/upload``."""
        return await self.downstream.forward(
            self.target_url,
            metadata,
            correlation,
            service=self.service_name,
        )
