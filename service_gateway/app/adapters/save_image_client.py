"""
Save-image service client for Gateway.
"""

from service_gateway.app.adapters.downstream import DownstreamClient, RawResponse
from service_gateway.app.domain.correlation import CorrelationContext
from service_gateway.app.domain.models import ImageUrlRequest


class SaveImageClient:
    """Client for the service that fetches and stores images by URL."""

    service_name = "save_image"

    def __init__(self, save_image_url: str, downstream: DownstreamClient):
        self.base_url = save_image_url.rstrip('/')
        self.downstream = downstream

    @property
    def target_url(self) -> str:
        return f"{self.base_url}/url"

    async def save_url(self, request: ImageUrlRequest, correlation: CorrelationContext) -> RawResponse:
        """Forward the URL request to ``/url``; the reply may carry the stored location."""
        return await self.downstream.forward(
            self.target_url,
            request,
            correlation,
            service=self.service_name,
        )
