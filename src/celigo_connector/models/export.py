"""Export models: one variant per adaptor, tagged by ``adaptorType``."""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field, StrictBool, StrictInt, field_validator, model_validator

from .shared import (
    CeligoModel,
    DeltaConfig,
    FilterConfig,
    FilterOperator,
    LOGICAL_OPERATORS,
    UNARY_OPERATORS,
    ResponseConfig,
    TransformConfig,
)
from .responses import CeligoError, ErrorCode
from ..utils.logging import get_logger


logger = get_logger(__name__)


class AdaptorType(str, Enum):
    """Export adaptors, in create precedence order."""
    HTTP = "HTTPExport"
    RDBMS = "RDBMSExport"
    SALESFORCE = "SalesforceExport"
    NETSUITE = "NetSuiteExport"


class BaseExport(CeligoModel):
    """Fields every export variant carries."""

    name: str = Field(..., min_length=1, description="Export name")
    connection_id: str = Field(..., alias="_connectionId", description="Connection the export reads through")
    api_identifier: str = Field(..., description="API identifier")
    asynchronous: StrictBool
    one_to_many: StrictBool
    sandbox: StrictBool
    type: Optional[Literal["delta"]] = Field(
        None, description="Use 'delta' for incremental fetching based on lastExportDateTime"
    )
    delta: Optional[DeltaConfig] = None
    transform: Optional[TransformConfig] = None


# HTTP

class PagePaging(CeligoModel):
    method: Literal["page"]
    page: StrictInt = Field(..., description="Used in relativeURI as {{export.http.paging.page}}")


class LinkHeaderPaging(CeligoModel):
    method: Literal["linkheader"]
    last_page_status_code: StrictInt = Field(..., description="Status code returned past the last page, e.g. 404")
    link_header_relation: Optional[str] = Field(None, description="Link relation to follow, e.g. next")


HttpPaging = Annotated[Union[PagePaging, LinkHeaderPaging], Field(discriminator="method")]


class HttpExportSettings(CeligoModel):
    relative_uri: str = Field(..., alias="relativeURI")
    method: Literal["GET", "POST", "PUT", "DELETE"]
    form_type: Literal["http", "graph_ql"]
    parameters: Optional[Dict[str, str]] = None
    body: Optional[str] = None
    is_rest: Optional[StrictBool] = None
    response: Optional[ResponseConfig] = None
    paging: Optional[HttpPaging] = None


class HTTPExport(BaseExport):
    adaptor_type: Literal["HTTPExport"]
    asynchronous: StrictBool = True
    one_to_many: StrictBool = False
    sandbox: StrictBool = False
    http: HttpExportSettings
    filter: Optional[FilterConfig] = None


# RDBMS

class RdbmsSettings(CeligoModel):
    query: str = Field(..., min_length=1, description="SQL query")
    response: Optional[ResponseConfig] = None


class RDBMSExport(BaseExport):
    adaptor_type: Literal["RDBMSExport"]
    rdbms: RdbmsSettings


# Salesforce

class SoqlQuery(CeligoModel):
    query: str = Field(..., min_length=1)


class SalesforceExportSettings(CeligoModel):
    type: Literal["soql"]
    api: Literal["rest"]
    soql: SoqlQuery
    response: Optional[ResponseConfig] = None


class SalesforceExport(BaseExport):
    adaptor_type: Literal["SalesforceExport"]
    salesforce: SalesforceExportSettings


# NetSuite

class NetSuiteCriteria(CeligoModel):
    field: str
    operator: FilterOperator
    search_value: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def drop_unary_search_value(cls, data: Any) -> Any:
        # empty/notempty take no value; one given anyway is ignored, not rejected
        if not isinstance(data, dict):
            return data
        operator = data.get("operator")
        if isinstance(operator, str) and operator in {op.value for op in UNARY_OPERATORS}:
            ignored = [key for key in ("searchValue", "search_value") if key in data]
            if ignored:
                logger.debug("Ignoring searchValue on unary criteria operator",
                             field=data.get("field"), operator=operator)
                data = {k: v for k, v in data.items() if k not in ignored}
        return data

    @field_validator("operator")
    @classmethod
    def reject_logical_operator(cls, v: FilterOperator) -> FilterOperator:
        if v in LOGICAL_OPERATORS:
            raise ValueError(f"'{v.value}' is a logical operator and cannot be used in search criteria")
        return v


class NetSuiteRestlet(CeligoModel):
    record_type: str
    search_id: str
    criteria: Optional[List[NetSuiteCriteria]] = None
    restlet_version: Literal["suiteapp2.0"] = "suiteapp2.0"
    mark_exported_batch_size: StrictInt = Field(100, ge=1)


class NetSuiteExportSettings(CeligoModel):
    type: Literal["restlet"]
    skip_grouping: StrictBool = True
    stats_only: StrictBool = False
    restlet: NetSuiteRestlet


class NetSuiteExport(BaseExport):
    adaptor_type: Literal["NetSuiteExport"]
    asynchronous: StrictBool = True
    one_to_many: StrictBool = False
    sandbox: StrictBool = False
    is_lookup: StrictBool = False
    path_to_many: Optional[str] = Field(None, description="Required when oneToMany is true and isLookup is false")
    netsuite: NetSuiteExportSettings
    filter: Optional[FilterConfig] = None
    input_filter: Optional[FilterConfig] = None


ExportConfig = Union[HTTPExport, RDBMSExport, SalesforceExport, NetSuiteExport]


# Cross-field rules, checked once the shape is accepted

def check_path_to_many(export: NetSuiteExport) -> List[CeligoError]:
    if export.one_to_many and not export.is_lookup and not export.path_to_many:
        return [CeligoError.build(
            "pathToMany",
            ErrorCode.MISSING_REQUIRED_FIELD,
            "pathToMany is required when oneToMany is true and isLookup is false",
        )]
    return []


def check_criteria_values(export: NetSuiteExport) -> List[CeligoError]:
    """Binary operators compare against a value, so one must be given."""
    errors: List[CeligoError] = []
    for index, criteria in enumerate(export.netsuite.restlet.criteria or []):
        if criteria.operator not in UNARY_OPERATORS and criteria.search_value is None:
            errors.append(CeligoError.build(
                f"netsuite.restlet.criteria.{index}.searchValue",
                ErrorCode.MISSING_REQUIRED_FIELD,
                f"searchValue is required for operator '{criteria.operator.value}'",
            ))
    return errors
