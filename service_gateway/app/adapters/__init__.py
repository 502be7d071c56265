"""
Adapters package for the Gateway Service.

Contains HTTP client wrappers for the downstream services (storage-write,
save-image). These adapters encapsulate:

- Base URLs and request shapes
- The single-attempt, timeout-bounded outbound call
- Error handling that maps to shared errors

Keep adapters thin and side-effect free outside of explicit calls.
"""

from .downstream import DownstreamClient, RawResponse
from .storage_client import StorageWriteClient
from .save_image_client import SaveImageClient

__all__ = [
    "DownstreamClient",
    "RawResponse",
    "StorageWriteClient",
    "SaveImageClient",
]
