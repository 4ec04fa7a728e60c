"""aiohttp transport for the integrator.io REST API."""

import asyncio
import json
from typing import Any, Dict, Optional

import aiohttp

from .base import Transport, TransportResponse
from ..config.settings import get_settings
from ..exceptions import ConfigurationError, TransportError


class CeligoClient(Transport):
    """Sends validated payloads to the platform with a bearer token."""

    def __init__(
        self,
        token: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
        **kwargs
    ):
        """Initialize the client.

        Args:
            token: Bearer token; defaults to CELIGO_TOKEN
            api_base: API base URL; defaults to CELIGO_API_BASE
            timeout_seconds: Total per-request timeout; defaults to CELIGO_TIMEOUT_SECONDS
            session: Existing session to reuse; the client will not close it
        """
        super().__init__(**kwargs)
        settings = get_settings().celigo

        self.token = token if token is not None else settings.token
        self.api_base = (api_base or settings.api_base).rstrip('/')
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds or settings.timeout_seconds)

        self.session = session
        self._owns_session = session is None

        if not self.token:
            raise ConfigurationError("No API token configured (set CELIGO_TOKEN)")

        self.logger.info("Celigo client initialized", api_base=self.api_base)

    async def __aenter__(self):
        self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self.session

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    async def request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None
    ) -> TransportResponse:
        session = self._ensure_session()
        url = f"{self.api_base}/{path.lstrip('/')}"

        self.logger.debug("Sending request", method=method, url=url, has_body=payload is not None)

        try:
            async with session.request(
                method,
                url,
                json=payload,
                headers=self._headers(),
                timeout=self.timeout,
            ) as response:
                text = await response.text()
                result = TransportResponse(status=response.status, payload=self._decode(text))
        except asyncio.TimeoutError as e:
            self.logger.error("Request timed out", method=method, url=url)
            raise TransportError(f"{method} {url} timed out") from e
        except aiohttp.ClientError as e:
            self.logger.error("Request failed", method=method, url=url, error=str(e))
            raise TransportError(f"{method} {url} failed: {e}") from e

        self.logger.info("Response received", method=method, url=url, status=result.status)
        return result

    @staticmethod
    def _decode(text: str) -> Any:
        if not text or not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            # Non-JSON bodies (gateway pages, plain text) become a message
            return {"message": text.strip()}

    async def close(self) -> None:
        if self.session and self._owns_session and not self.session.closed:
            await self.session.close()
        self.session = None
