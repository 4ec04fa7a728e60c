"""Payload models for connections, exports, integrations and responses."""

from .shared import (
    CeligoModel,
    FilterOperator,
    UNARY_OPERATORS,
    BINARY_OPERATORS,
    LOGICAL_OPERATORS,
    ResponseConfig,
    DeltaConfig,
    TransformConfig,
    FilterConfig,
    MicroServices,
    NetSuiteMicroServices,
    Queue,
)
from .connection import (
    ConnectionType,
    ConnectionConfig,
    HttpConnection,
    FtpConnection,
    SalesforceConnection,
    NetSuiteConnection,
)
from .export import (
    AdaptorType,
    ExportConfig,
    HTTPExport,
    RDBMSExport,
    SalesforceExport,
    NetSuiteExport,
    PagePaging,
    LinkHeaderPaging,
)
from .integration import Integration, FlowGrouping
from .responses import (
    ApiResponse,
    CeligoError,
    CeligoErrorResponse,
    ErrorCode,
    ErrorResponse,
    SuccessResponse,
)

__all__ = [
    # Shared primitives
    "CeligoModel",
    "FilterOperator",
    "UNARY_OPERATORS",
    "BINARY_OPERATORS",
    "LOGICAL_OPERATORS",
    "ResponseConfig",
    "DeltaConfig",
    "TransformConfig",
    "FilterConfig",
    "MicroServices",
    "NetSuiteMicroServices",
    "Queue",

    # Connections
    "ConnectionType",
    "ConnectionConfig",
    "HttpConnection",
    "FtpConnection",
    "SalesforceConnection",
    "NetSuiteConnection",

    # Exports
    "AdaptorType",
    "ExportConfig",
    "HTTPExport",
    "RDBMSExport",
    "SalesforceExport",
    "NetSuiteExport",
    "PagePaging",
    "LinkHeaderPaging",

    # Integrations
    "Integration",
    "FlowGrouping",

    # Responses
    "ApiResponse",
    "CeligoError",
    "CeligoErrorResponse",
    "ErrorCode",
    "ErrorResponse",
    "SuccessResponse",
]
