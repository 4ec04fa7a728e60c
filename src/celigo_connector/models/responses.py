"""Uniform response envelope returned by every operation.

Example error arm::

    {"success": false,
     "errors": [{"field": "netsuite", "code": "missing_required_field",
                 "message": "netsuite subschema not defined"}]}

Example success arm::

    {"success": true, "type": "netsuite", "name": "NetSuite - Prod", ...}
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, PrivateAttr, model_serializer

from ..exceptions import UpstreamError, UpstreamProtocolViolation


class ErrorCode(str, Enum):
    """Known error codes. The set is open: unknown upstream codes pass through."""

    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_FIELD = "invalid_field"
    ENUM = "enum"
    VALIDATION_FAILED = "validation_failed"
    TRANSPORT_ERROR = "transport_error"


class CeligoError(BaseModel):
    """One error entry as the platform reports it."""

    model_config = ConfigDict(frozen=True)

    field: str
    code: str
    message: str

    @classmethod
    def build(cls, field: str, code: Union[ErrorCode, str], message: str) -> "CeligoError":
        return cls(field=field, code=getattr(code, "value", code), message=message)


class CeligoErrorResponse(BaseModel):
    errors: List[CeligoError]


class SuccessResponse(BaseModel):
    """Success arm: ``success`` plus every field of the upstream payload.

    Payload keys are kept verbatim (``_id`` included) outside the model
    fields and spread beside ``success`` whenever the arm is serialized.
    """

    success: Literal[True] = True

    _payload: Dict[str, Any] = PrivateAttr(default_factory=dict)
    _protocol_violations: List[UpstreamProtocolViolation] = PrivateAttr(default_factory=list)

    @property
    def payload(self) -> Dict[str, Any]:
        return self._payload

    @property
    def protocol_violations(self) -> List[UpstreamProtocolViolation]:
        """Contract breaches noticed while normalizing this response."""
        return self._protocol_violations

    def get(self, key: str, default: Any = None) -> Any:
        """Read a payload field by its wire name."""
        return self._payload.get(key, default)

    @model_serializer
    def serialize_spread(self) -> Dict[str, Any]:
        # model_dump/model_dump_json emit the same spread shape as to_dict
        return {**self._payload, "success": True}

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    def raise_for_errors(self) -> "SuccessResponse":
        return self


class ErrorResponse(CeligoErrorResponse):
    """Error arm: ``success`` is always false and ``errors`` is never empty."""

    success: Literal[False] = False

    @property
    def protocol_violations(self) -> List[UpstreamProtocolViolation]:
        return []

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    def raise_for_errors(self, status: Optional[int] = None) -> "ErrorResponse":
        """Raise the errors as ``UpstreamError``."""
        raise UpstreamError(self.errors, status=status)


ApiResponse = Union[SuccessResponse, ErrorResponse]


def success(payload: Optional[Dict[str, Any]] = None) -> SuccessResponse:
    """Build a success arm from a mapping payload; the envelope flag always wins."""
    response = SuccessResponse()
    response._payload = {key: value for key, value in (payload or {}).items() if key != "success"}
    return response


def failure(errors: List[CeligoError]) -> ErrorResponse:
    return ErrorResponse(errors=list(errors))
