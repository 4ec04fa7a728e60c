"""Resource services: validate locally, submit once, normalize the reply."""

from typing import Any, Dict, Optional, Union
from urllib.parse import urlencode

from ..api_clients.base import Transport
from ..api_clients.envelope import error_from_exception, normalize_response
from ..exceptions import ConfigValidationError, TransportError
from ..models.responses import ApiResponse, CeligoError, ErrorCode, failure
from ..models.shared import CeligoModel
from ..schema.composition import VariantSet
from ..schema.descriptors import VariantDescriptor
from ..utils.logging import get_logger, log_async_execution_time


ID_FIELD = "_id"


class ResourceService:
    """Create/update/get/list/delete operations for one platform resource.

    Validation failures and transport failures never escape: both come back
    as the error arm of an ``ApiResponse``.
    """

    def __init__(
        self,
        transport: Transport,
        resource_path: str,
        label: str,
        schemas: Union[VariantSet, VariantDescriptor],
    ):
        """Initialize the service.

        Args:
            transport: Transport used for every request
            resource_path: Collection path, e.g. "connections"
            label: Singular resource name used in log messages
            schemas: Variant set (tagged resources) or single descriptor
        """
        self.transport = transport
        self.resource_path = resource_path.strip('/')
        self.label = label
        self.schemas = schemas
        self.logger = get_logger(self.__class__.__name__)

    @log_async_execution_time
    async def create(self, config: Any) -> ApiResponse:
        """Validate a new resource configuration and POST it."""
        try:
            model = self.validate_create(config)
        except ConfigValidationError as e:
            return self._rejected("create", e)

        return await self._send("POST", self.resource_path, model.to_payload())

    @log_async_execution_time
    async def update(self, resource_id: str, config: Any, current_type: Optional[str] = None) -> ApiResponse:
        """Validate a full replacement configuration and PUT it.

        Args:
            resource_id: ID of the existing resource
            config: Replacement configuration
            current_type: Discriminant of the existing resource, when known
        """
        if not resource_id:
            return self._missing_id()

        try:
            model = await self._validate_for_update(resource_id, config, current_type)
        except ConfigValidationError as e:
            return self._rejected("update", e)
        if not isinstance(model, CeligoModel):
            # Reading the existing resource failed; pass that error arm through
            return model

        return await self._send("PUT", f"{self.resource_path}/{resource_id}", model.to_payload())

    @log_async_execution_time
    async def get(self, resource_id: str) -> ApiResponse:
        if not resource_id:
            return self._missing_id()
        return await self._send("GET", f"{self.resource_path}/{resource_id}")

    @log_async_execution_time
    async def list(
        self,
        type: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> ApiResponse:
        """List resources, optionally filtered by type and paged.

        Args:
            type: Only resources of this type, e.g. "http"
            limit: Maximum number of items to return
            offset: Number of items to skip
        """
        return await self._send("GET", self._list_path(type=type, limit=limit, offset=offset))

    @log_async_execution_time
    async def delete(self, resource_id: str) -> ApiResponse:
        if not resource_id:
            return self._missing_id()
        return await self._send("DELETE", f"{self.resource_path}/{resource_id}")

    def validate_create(self, config: Any) -> CeligoModel:
        """Local validation only; raises ``ConfigValidationError`` subclasses."""
        if isinstance(self.schemas, VariantSet):
            return self.schemas.validate_create(config)
        return self.schemas.validate(config)

    async def _validate_for_update(
        self,
        resource_id: str,
        config: Any,
        current_type: Optional[str],
    ) -> Union[CeligoModel, ApiResponse]:
        return self.validate_create(config)

    async def _send(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> ApiResponse:
        try:
            response = await self.transport.request(method, path, payload)
        except TransportError as e:
            self.logger.error("Transport failure", resource=self.label, method=method, error=str(e))
            return error_from_exception(e)

        return normalize_response(response.status, response.payload)

    def _list_path(self, **query: Any) -> str:
        params = {key: value for key, value in query.items() if value is not None and value != ""}
        if not params:
            return self.resource_path
        return f"{self.resource_path}?{urlencode(params)}"

    def _rejected(self, operation: str, exc: ConfigValidationError) -> ApiResponse:
        self.logger.warning(
            "Configuration rejected",
            resource=self.label,
            operation=operation,
            error_type=type(exc).__name__,
            fields=exc.fields,
        )
        return failure(exc.errors)

    def _missing_id(self) -> ApiResponse:
        return failure([CeligoError.build(
            ID_FIELD, ErrorCode.MISSING_REQUIRED_FIELD, f"{self.label} ID is required",
        )])


class TaggedResourceService(ResourceService):
    """Service for a discriminated resource whose variant is fixed at creation."""

    schemas: VariantSet

    async def _validate_for_update(
        self,
        resource_id: str,
        config: Any,
        current_type: Optional[str],
    ) -> Union[CeligoModel, ApiResponse]:
        if current_type is None:
            existing = await self.get(resource_id)
            if not existing.success:
                return existing

            current_type = existing.get(self.schemas.discriminator)
            if current_type is None:
                self.logger.warning(
                    "Existing resource has no discriminant; selecting variant from payload",
                    resource=self.label,
                    resource_id=resource_id,
                )
                return self.schemas.validate_create(config)

        self.logger.debug(
            "Update pinned to variant",
            resource=self.label,
            resource_id=resource_id,
            variant=current_type,
        )
        return self.schemas.validate_update(current_type, config)
