"""Per-variant schema descriptors with two-phase validation."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type

from pydantic import ValidationError

from ..exceptions import (
    ConditionalConstraintViolation,
    DiscriminantConflict,
    MissingRequiredField,
    ShapeMismatch,
)
from ..models.responses import CeligoError, ErrorCode
from ..models.shared import CeligoModel
from ..utils.logging import get_logger


logger = get_logger(__name__)

ConstraintCheck = Callable[[Any], List[CeligoError]]

ROOT_FIELD = "config"

_ENUM_ERROR_TYPES = {"literal_error", "enum", "union_tag_invalid"}


@dataclass(frozen=True)
class VariantDescriptor:
    """Describes one variant of a payload union.

    Attributes:
        tag: Discriminant value selecting this variant (None for untagged models)
        model: Pydantic model validating the variant shape
        discriminator: Wire name of the discriminant field
        payload_field: Nested object owned exclusively by this variant
        sibling_fields: Nested objects owned by the other variants of the union
        constraints: Cross-field checks run after the shape is accepted
    """

    tag: Optional[str]
    model: Type[CeligoModel]
    discriminator: Optional[str] = None
    payload_field: Optional[str] = None
    sibling_fields: Tuple[str, ...] = ()
    constraints: Tuple[ConstraintCheck, ...] = ()

    @property
    def title(self) -> str:
        return self.model.__name__

    def accepts(self, candidate: Mapping[str, Any]) -> bool:
        """Selection predicate: the discriminant when given, else the nested object."""
        if self.discriminator and self.discriminator in candidate:
            return candidate[self.discriminator] == self.tag
        return self.payload_field is not None and self.payload_field in candidate

    def json_schema(self) -> Dict[str, Any]:
        return self.model.model_json_schema(by_alias=True)

    def validate(self, candidate: Any) -> CeligoModel:
        """Validate a candidate payload against this variant.

        Phase (a) checks shape and discriminants, phase (b) cross-field
        constraints. A phase (a) failure is raised before (b) runs.

        Raises:
            ShapeMismatch, DiscriminantConflict, MissingRequiredField,
            ConditionalConstraintViolation
        """
        if not isinstance(candidate, Mapping):
            raise ShapeMismatch([CeligoError.build(
                ROOT_FIELD, ErrorCode.INVALID_FIELD,
                f"{self.title} must be an object, got {type(candidate).__name__}",
            )])

        self._check_discriminant(candidate)

        try:
            value = self.model.model_validate(dict(candidate))
        except ValidationError as e:
            raise translate_validation_error(e)

        errors: List[CeligoError] = []
        for check in self.constraints:
            errors.extend(check(value))
        if errors:
            raise ConditionalConstraintViolation(errors)

        return value

    def _check_discriminant(self, candidate: Mapping[str, Any]) -> None:
        if self.discriminator:
            if self.discriminator not in candidate:
                raise MissingRequiredField([CeligoError.build(
                    self.discriminator, ErrorCode.MISSING_REQUIRED_FIELD,
                    f"{self.discriminator} is required",
                )])
            if candidate[self.discriminator] != self.tag:
                raise DiscriminantConflict([CeligoError.build(
                    self.discriminator, ErrorCode.INVALID_FIELD,
                    f"{self.discriminator} must be '{self.tag}' for {self.title}, "
                    f"got {candidate[self.discriminator]!r}",
                )])

        foreign = [field for field in self.sibling_fields if field in candidate]
        if foreign:
            raise DiscriminantConflict([
                CeligoError.build(
                    field, ErrorCode.INVALID_FIELD,
                    f"{field} settings cannot be used when {self.discriminator} is '{self.tag}'",
                )
                for field in foreign
            ])

        if self.payload_field and self.payload_field not in candidate:
            raise MissingRequiredField([CeligoError.build(
                self.payload_field, ErrorCode.MISSING_REQUIRED_FIELD,
                f"{self.payload_field} subschema not defined",
            )])


def translate_validation_error(exc: ValidationError):
    """Map pydantic errors onto the package error taxonomy.

    Missing fields sort first and make the whole failure a
    ``MissingRequiredField``; anything else is a ``ShapeMismatch``.
    """
    missing: List[CeligoError] = []
    invalid: List[CeligoError] = []

    for error in exc.errors(include_url=False):
        field = ".".join(str(part) for part in error["loc"]) or ROOT_FIELD
        error_type = error["type"]

        if error_type == "missing":
            missing.append(CeligoError.build(field, ErrorCode.MISSING_REQUIRED_FIELD, f"{field} is required"))
        elif error_type == "union_tag_not_found":
            tag = error.get("ctx", {}).get("discriminator", "").strip("'")
            path = f"{field}.{tag}" if tag else field
            missing.append(CeligoError.build(path, ErrorCode.MISSING_REQUIRED_FIELD, f"{path} is required"))
        elif error_type in _ENUM_ERROR_TYPES:
            invalid.append(CeligoError.build(field, ErrorCode.ENUM, error["msg"]))
        else:
            invalid.append(CeligoError.build(field, ErrorCode.INVALID_FIELD, error["msg"]))

    if missing:
        return MissingRequiredField(missing + invalid)
    return ShapeMismatch(invalid)
