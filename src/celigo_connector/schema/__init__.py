"""Schema descriptors and ``oneOf`` composition for create/update operations."""

from .descriptors import VariantDescriptor, translate_validation_error
from .composition import VariantSet, ordered, get_by_id_schema, list_schema
from .registry import (
    CONNECTION_SCHEMAS,
    EXPORT_SCHEMAS,
    INTEGRATION_SCHEMA,
    OPERATION_DEFINITIONS,
)

__all__ = [
    "VariantDescriptor",
    "translate_validation_error",
    "VariantSet",
    "ordered",
    "get_by_id_schema",
    "list_schema",
    "CONNECTION_SCHEMAS",
    "EXPORT_SCHEMAS",
    "INTEGRATION_SCHEMA",
    "OPERATION_DEFINITIONS",
]
