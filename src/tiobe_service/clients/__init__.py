"""HTTP clients for upstream data sources."""

from tiobe_service.clients.base import UpstreamClient
from tiobe_service.clients.tiobe import TiobeClient

__all__ = [
    "TiobeClient",
    "UpstreamClient",
]
