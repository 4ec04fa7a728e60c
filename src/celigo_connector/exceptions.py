"""Error taxonomy for configuration validation and platform responses.

Every failure in this package is representable as data: validation
exceptions carry the ``CeligoError`` entries that end up in the error arm
of an ``ApiResponse``.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models.responses import CeligoError


class CeligoConnectorError(Exception):
    """Base exception for all package errors."""
    pass


class ConfigurationError(CeligoConnectorError):
    """Raised when settings or payload files cannot be loaded."""
    pass


class TransportError(CeligoConnectorError):
    """Raised when the platform API cannot be reached."""
    pass


class ConfigValidationError(CeligoConnectorError):
    """Base class for local validation failures.

    Args:
        errors: Normalized error entries, first entry is the primary cause
    """

    def __init__(self, errors: List["CeligoError"]):
        self.errors = list(errors)
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in self.errors))

    @property
    def fields(self) -> List[str]:
        """Field paths named by the error entries, in order."""
        return [e.field for e in self.errors]


class ShapeMismatch(ConfigValidationError):
    """Candidate does not match any known variant, or has a wrongly typed field."""
    pass


class DiscriminantConflict(ConfigValidationError):
    """Discriminant disagrees with the populated nested object, or changed on update."""
    pass


class MissingRequiredField(ConfigValidationError):
    """A field required by the selected variant is absent."""
    pass


class ConditionalConstraintViolation(ConfigValidationError):
    """A cross-field rule failed after the shape was accepted."""
    pass


class UpstreamError(CeligoConnectorError):
    """Platform returned structured errors."""

    def __init__(self, errors: List["CeligoError"], status: Optional[int] = None):
        self.errors = list(errors)
        self.status = status
        details = "; ".join(f"{e.field}: {e.message} ({e.code})" for e in self.errors)
        super().__init__(f"Celigo API error ({status}): {details}" if status else f"Celigo API error: {details}")


class UpstreamProtocolViolation(CeligoConnectorError):
    """Platform response broke the envelope contract.

    Not raised by the normalizer: it is recorded on the normalized response
    and logged so callers can alert on it.
    """

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)
