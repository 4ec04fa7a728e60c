"""Celigo connector: typed configuration models, schema composition and API envelope."""

__version__ = "1.0.0"

from .exceptions import (
    CeligoConnectorError,
    ConfigValidationError,
    ShapeMismatch,
    DiscriminantConflict,
    MissingRequiredField,
    ConditionalConstraintViolation,
    UpstreamError,
    UpstreamProtocolViolation,
)
from .models.responses import ApiResponse, SuccessResponse, ErrorResponse
from .schema.registry import (
    CONNECTION_SCHEMAS,
    EXPORT_SCHEMAS,
    INTEGRATION_SCHEMA,
    OPERATION_DEFINITIONS,
)
from .api_clients import CeligoClient, normalize_response
from .core import ConnectionService, ExportService, IntegrationService

__all__ = [
    "__version__",

    # Errors
    "CeligoConnectorError",
    "ConfigValidationError",
    "ShapeMismatch",
    "DiscriminantConflict",
    "MissingRequiredField",
    "ConditionalConstraintViolation",
    "UpstreamError",
    "UpstreamProtocolViolation",

    # Envelope
    "ApiResponse",
    "SuccessResponse",
    "ErrorResponse",
    "normalize_response",

    # Schemas
    "CONNECTION_SCHEMAS",
    "EXPORT_SCHEMAS",
    "INTEGRATION_SCHEMA",
    "OPERATION_DEFINITIONS",

    # Services
    "CeligoClient",
    "ConnectionService",
    "ExportService",
    "IntegrationService",
]
