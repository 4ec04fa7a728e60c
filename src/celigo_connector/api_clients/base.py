"""Transport interface between the services and the platform API."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..utils.logging import get_logger


@dataclass
class TransportResponse:
    """Raw outcome of one request/response exchange."""

    status: int
    payload: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(ABC):
    """Abstract base class for platform transports.

    A transport owns connections, headers and authentication. It performs a
    single exchange per call: no retries, no batching.
    """

    def __init__(self, **kwargs):
        self.logger = get_logger(self.__class__.__name__)

    @abstractmethod
    async def request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None
    ) -> TransportResponse:
        """Send one request.

        Args:
            method: HTTP method
            path: Path relative to the API base, e.g. "connections/abc"
            payload: JSON body, if any

        Returns:
            Status code and decoded body

        Raises:
            TransportError: If no response could be obtained
        """
        pass

    async def close(self) -> None:
        """Release transport resources."""
        pass
