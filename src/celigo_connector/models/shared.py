"""Shared field descriptors reused across connection and export variants."""

from enum import Enum
from typing import Any, Dict, List, Optional, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt
from pydantic.alias_generators import to_camel


class CeligoModel(BaseModel):
    """Base for every platform payload model.

    Python attributes are snake_case; the wire format is camelCase.
    Unknown keys are kept and written back unchanged.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the JSON-shaped payload the platform expects."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class FilterOperator(str, Enum):
    """Operators shared by export filters and NetSuite search criteria."""

    # Logical
    AND = "and"
    OR = "or"
    # Unary
    EMPTY = "empty"
    NOT_EMPTY = "notempty"
    # Binary
    EQUALS = "equals"
    NOT_EQUALS = "notequals"
    GREATER_THAN = "greaterthan"
    GREATER_THAN_OR_EQUALS = "greaterthanorequals"
    LESS_THAN = "lessthan"
    LESS_THAN_OR_EQUALS = "lessthanorequals"
    STARTS_WITH = "startswith"
    ENDS_WITH = "endswith"
    CONTAINS = "contains"
    DOES_NOT_CONTAIN = "doesnotcontain"
    MATCHES = "matches"


LOGICAL_OPERATORS = frozenset({FilterOperator.AND, FilterOperator.OR})
UNARY_OPERATORS = frozenset({FilterOperator.EMPTY, FilterOperator.NOT_EMPTY})
BINARY_OPERATORS = frozenset(set(FilterOperator) - LOGICAL_OPERATORS - UNARY_OPERATORS)


class TwoDArrayConfig(CeligoModel):
    """How two-dimensional array responses are read."""

    do_not_normalize: StrictBool = Field(..., description="Keep the original row structure")
    has_header: StrictBool = Field(..., description="First row holds column names")


class ResponseConfig(CeligoModel):
    """Where records live in a response. Pagination never goes here."""

    model_config = ConfigDict(extra="forbid")

    resource_path: str = Field(..., description="Dot path to the records, e.g. data.items")
    two_d_array: Optional[TwoDArrayConfig] = None


class DeltaConfig(CeligoModel):
    """Incremental extraction settings."""

    date_format: str = Field(..., description="Moment.js format matching the relativeURI dateFormat helper")
    lag_offset: Optional[StrictInt] = Field(None, description="Milliseconds subtracted from lastExportDateTime")


class TransformRule(CeligoModel):
    key: str
    extract: str
    generate: str


class TransformExpression(CeligoModel):
    version: Literal["1"]
    rules: List[List[TransformRule]]


class TransformConfig(CeligoModel):
    """Expression transform; ``rules``/``version`` duplicate ``expression``."""

    type: Literal["expression"]
    expression: TransformExpression
    rules: List[List[TransformRule]]
    version: Literal["1"]


class FilterExpression(CeligoModel):
    rules: List[Any]
    version: Literal["1"]


class FilterConfig(CeligoModel):
    """Expression filter.

    Rule elements are a flat list: an operator, then ``[type, ["extract", path]]``
    casts, then an optional literal for binary operators. They are passed
    through without interpretation.
    """

    type: Literal["expression"]
    expression: FilterExpression
    rules: List[Any]
    version: Literal["1"]


class Queue(CeligoModel):
    name: str
    size: StrictInt = Field(..., ge=0)


class MicroServices(CeligoModel):
    """Microservice toggles shared by http, ftp and salesforce connections."""

    disable_net_suite_web_services: StrictBool
    disable_rdbms: StrictBool
    disable_data_warehouse: StrictBool


class NetSuiteMicroServices(CeligoModel):
    disable_rdbms: StrictBool
