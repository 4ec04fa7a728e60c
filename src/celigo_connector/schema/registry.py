"""Process-wide schema descriptors and operation definitions.

Built once at import time and never mutated afterwards.
"""

from typing import Any, Dict

from .composition import VariantSet, get_by_id_schema, list_schema, ordered
from .descriptors import VariantDescriptor
from ..models.connection import (
    ConnectionType,
    FtpConnection,
    HttpConnection,
    NetSuiteConnection,
    SalesforceConnection,
    check_http_auth,
    coerce_connection_payload,
)
from ..models.export import (
    AdaptorType,
    HTTPExport,
    NetSuiteExport,
    RDBMSExport,
    SalesforceExport,
    check_criteria_values,
    check_path_to_many,
)
from ..models.integration import Integration


CONNECTION_PAYLOAD_FIELDS = ("http", "ftp", "salesforce", "netsuite")
EXPORT_PAYLOAD_FIELDS = ("http", "rdbms", "salesforce", "netsuite")


def _connection(tag: ConnectionType, model, *constraints) -> VariantDescriptor:
    return VariantDescriptor(
        tag=tag.value,
        model=model,
        discriminator="type",
        payload_field=tag.value,
        sibling_fields=tuple(f for f in CONNECTION_PAYLOAD_FIELDS if f != tag.value),
        constraints=constraints,
    )


def _export(tag: AdaptorType, payload_field: str, model, *constraints) -> VariantDescriptor:
    return VariantDescriptor(
        tag=tag.value,
        model=model,
        discriminator="adaptorType",
        payload_field=payload_field,
        sibling_fields=tuple(f for f in EXPORT_PAYLOAD_FIELDS if f != payload_field),
        constraints=constraints,
    )


# Precedence order is part of the contract: http, ftp, salesforce, netsuite
CONNECTION_SCHEMAS = VariantSet(
    name="connection",
    discriminator="type",
    variants=ordered([
        _connection(ConnectionType.HTTP, HttpConnection, check_http_auth),
        _connection(ConnectionType.FTP, FtpConnection),
        _connection(ConnectionType.SALESFORCE, SalesforceConnection),
        _connection(ConnectionType.NETSUITE, NetSuiteConnection),
    ]),
    tags=ConnectionType,
    preprocess=coerce_connection_payload,
)

# Precedence order is part of the contract: HTTP, RDBMS, Salesforce, NetSuite
EXPORT_SCHEMAS = VariantSet(
    name="export",
    discriminator="adaptorType",
    variants=ordered([
        _export(AdaptorType.HTTP, "http", HTTPExport),
        _export(AdaptorType.RDBMS, "rdbms", RDBMSExport),
        _export(AdaptorType.SALESFORCE, "salesforce", SalesforceExport),
        _export(AdaptorType.NETSUITE, "netsuite", NetSuiteExport, check_path_to_many, check_criteria_values),
    ]),
    tags=AdaptorType,
)

INTEGRATION_SCHEMA = VariantDescriptor(tag=None, model=Integration)


def _integration_update_schema() -> Dict[str, Any]:
    config = INTEGRATION_SCHEMA.json_schema()
    defs = config.pop("$defs", {})
    return {
        "type": "object",
        "properties": {
            "integrationId": {"type": "string", "description": "ID of the integration to update"},
            "config": config,
        },
        "required": ["integrationId", "config"],
        "$defs": defs,
    }


OPERATION_DEFINITIONS: Dict[str, Dict[str, Any]] = {
    "create_connection": {
        "description": "Create a new Celigo connection",
        "schema": CONNECTION_SCHEMAS.create_schema(),
    },
    "update_connection": {
        "description": "Update an existing Celigo connection",
        "schema": CONNECTION_SCHEMAS.update_schema("connectionId"),
    },
    "get_connections": {
        "description": "Get all connections",
        "schema": list_schema("connections"),
    },
    "get_connection_by_id": {
        "description": "Get a specific connection by ID",
        "schema": get_by_id_schema("Connection"),
    },
    "delete_connection": {
        "description": "Delete a connection by ID",
        "schema": get_by_id_schema("Connection"),
    },
    "create_export": {
        "description": "Create a new Celigo export",
        "schema": EXPORT_SCHEMAS.create_schema(),
    },
    "update_export": {
        "description": "Update an existing Celigo export",
        "schema": EXPORT_SCHEMAS.update_schema("exportId"),
    },
    "get_exports": {
        "description": "Get all exports",
        "schema": list_schema("exports"),
    },
    "get_export_by_id": {
        "description": "Get a specific export by ID",
        "schema": get_by_id_schema("Export"),
    },
    "delete_export": {
        "description": "Delete an export by ID",
        "schema": get_by_id_schema("Export"),
    },
    "create_integration": {
        "description": "Create a new Celigo integration",
        "schema": INTEGRATION_SCHEMA.json_schema(),
    },
    "update_integration": {
        "description": "Update an existing Celigo integration",
        "schema": _integration_update_schema(),
    },
    "get_integrations": {
        "description": "Get all integrations",
        "schema": list_schema("integrations"),
    },
    "get_integration_by_id": {
        "description": "Get a specific integration by ID",
        "schema": get_by_id_schema("Integration"),
    },
    "delete_integration": {
        "description": "Delete an integration by ID",
        "schema": get_by_id_schema("Integration"),
    },
}
