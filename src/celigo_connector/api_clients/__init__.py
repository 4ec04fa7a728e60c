"""Transport and response normalization for the platform API."""

from .base import Transport, TransportResponse
from .celigo import CeligoClient
from .envelope import normalize_response, error_from_exception

__all__ = [
    # Base classes
    "Transport",
    "TransportResponse",

    # Client implementations
    "CeligoClient",

    # Envelope
    "normalize_response",
    "error_from_exception",
]
