"""Normalize raw platform responses into ``ApiResponse``."""

from typing import Any, List, Optional

from ..exceptions import UpstreamProtocolViolation
from ..models.responses import (
    ApiResponse,
    CeligoError,
    ErrorCode,
    ErrorResponse,
    failure,
    success,
)
from ..utils.logging import get_logger


logger = get_logger(__name__)

PLACEHOLDER_FIELD = "request"

_STATUS_MESSAGES = {
    400: "Invalid request",
    401: "Invalid or expired token. Please check your Celigo credentials.",
    403: "Token does not grant access to this resource.",
    404: "Resource not found. Please verify the requested resource exists.",
}


def normalize_response(status: int, payload: Any) -> ApiResponse:
    """Map an HTTP outcome and decoded body onto the envelope.

    Non-2xx statuses and bodies carrying ``errors`` become the error arm.
    Everything else becomes the success arm with the body's own fields
    spread beside ``success``.
    """
    ok = 200 <= status < 300
    has_errors = isinstance(payload, dict) and "errors" in payload

    if not ok or has_errors:
        errors = _well_formed_errors(payload.get("errors")) if has_errors else None
        if errors is None:
            errors = [_synthesize_error(status, payload)]
        logger.warning(
            "Platform returned errors",
            status=status,
            errors=[f"{e.field}: {e.code}" for e in errors],
        )
        return failure(errors)

    if payload is None:
        return success()

    if isinstance(payload, list):
        return success({"items": payload})

    if not isinstance(payload, dict):
        return success({"value": payload})

    response = success(payload)
    if "success" in payload:
        violation = UpstreamProtocolViolation(
            f"Success payload declared its own success={payload['success']!r}; envelope value kept",
            status=status,
        )
        logger.warning("Upstream protocol violation", status=status, detail=str(violation))
        response.protocol_violations.append(violation)
    return response


def _well_formed_errors(raw: Any) -> Optional[List[CeligoError]]:
    """Return the entries verbatim when every one is a {field, code, message} of strings."""
    if not isinstance(raw, list) or not raw:
        return None
    errors = []
    for entry in raw:
        if not isinstance(entry, dict):
            return None
        if not all(isinstance(entry.get(key), str) for key in ("field", "code", "message")):
            return None
        errors.append(CeligoError(field=entry["field"], code=entry["code"], message=entry["message"]))
    return errors


def _synthesize_error(status: int, payload: Any) -> CeligoError:
    message = None
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        message = payload["message"]
    if not message:
        message = _STATUS_MESSAGES.get(status, f"API error ({status})")
    return CeligoError.build(PLACEHOLDER_FIELD, ErrorCode.VALIDATION_FAILED, message)


def error_from_exception(exc: Exception, code: ErrorCode = ErrorCode.TRANSPORT_ERROR) -> ErrorResponse:
    """Error arm for a failure that never produced a platform response."""
    return failure([CeligoError.build(PLACEHOLDER_FIELD, code, str(exc))])
