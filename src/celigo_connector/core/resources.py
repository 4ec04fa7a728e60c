"""Concrete services for connections, exports and integrations."""

from typing import Any, Dict, List, Optional

from .service import ResourceService, TaggedResourceService
from ..api_clients.base import Transport
from ..models.responses import ApiResponse, success
from ..schema.registry import CONNECTION_SCHEMAS, EXPORT_SCHEMAS, INTEGRATION_SCHEMA
from ..utils.logging import log_async_execution_time


class ConnectionService(TaggedResourceService):
    """Connections, discriminated by ``type``."""

    def __init__(self, transport: Transport):
        super().__init__(transport, "connections", "connection", CONNECTION_SCHEMAS)


class ExportService(TaggedResourceService):
    """Exports, discriminated by ``adaptorType``."""

    def __init__(self, transport: Transport):
        super().__init__(transport, "exports", "export", EXPORT_SCHEMAS)

    @log_async_execution_time
    async def list(
        self,
        type: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> ApiResponse:
        """List exports reduced to their ID and name."""
        response = await super().list(type=type, limit=limit, offset=offset)
        if not response.success:
            return response

        items = response.get("items")
        if items is None:
            return response

        return success({"items": simplify_exports(items)})


class IntegrationService(ResourceService):
    """Integrations; untagged, so updates need no pinning."""

    def __init__(self, transport: Transport):
        super().__init__(transport, "integrations", "integration", INTEGRATION_SCHEMA)


def simplify_exports(items: List[Any]) -> List[Dict[str, Any]]:
    return [
        {"_id": item.get("_id"), "name": item.get("name")}
        for item in items
        if isinstance(item, dict)
    ]
