"""``oneOf`` composition over an ordered set of variant descriptors.

Create requests walk the variants in their declared order and the first
one whose predicate accepts the payload wins. Update requests skip the
walk entirely: the existing entity's discriminant pins the descriptor.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Type, Union

from pydantic.json_schema import models_json_schema

from .descriptors import ROOT_FIELD, VariantDescriptor
from ..exceptions import DiscriminantConflict, MissingRequiredField, ShapeMismatch
from ..models.responses import CeligoError, ErrorCode
from ..models.shared import CeligoModel
from ..utils.logging import get_logger


Predicate = Callable[[Mapping[str, Any]], bool]
Preprocessor = Callable[[Mapping[str, Any]], Dict[str, Any]]


class VariantSet:
    """An explicit, ordered list of (predicate, descriptor) pairs for one union."""

    def __init__(
        self,
        name: str,
        discriminator: str,
        variants: Sequence[Tuple[Predicate, VariantDescriptor]],
        tags: Optional[Type[Enum]] = None,
        preprocess: Optional[Preprocessor] = None,
    ):
        """Initialize the variant set.

        Args:
            name: Resource label used in messages (e.g. "connection")
            discriminator: Wire name of the discriminant field
            variants: Precedence-ordered (predicate, descriptor) pairs
            tags: Enum listing every discriminant value; each must have a descriptor
            preprocess: Optional normalization applied to raw payloads first

        Raises:
            ValueError: If ``tags`` and the descriptors do not cover each other
        """
        self.name = name
        self.discriminator = discriminator
        self.variants: Tuple[Tuple[Predicate, VariantDescriptor], ...] = tuple(variants)
        self.preprocess = preprocess
        self.logger = get_logger(self.__class__.__name__)

        self._by_tag: Dict[str, VariantDescriptor] = {d.tag: d for _, d in self.variants}
        if len(self._by_tag) != len(self.variants):
            raise ValueError(f"Duplicate {discriminator} tags in {name} variants")

        if tags is not None:
            declared = {member.value for member in tags}
            if declared != set(self._by_tag):
                raise ValueError(
                    f"{name} variants do not match {tags.__name__}: "
                    f"missing={sorted(declared - set(self._by_tag))}, "
                    f"unknown={sorted(set(self._by_tag) - declared)}"
                )

    @property
    def order(self) -> List[str]:
        """Discriminant values in precedence order."""
        return [descriptor.tag for _, descriptor in self.variants]

    def descriptor_for(self, tag: Union[str, Enum]) -> VariantDescriptor:
        tag = getattr(tag, "value", tag)
        try:
            return self._by_tag[tag]
        except (KeyError, TypeError):
            raise ShapeMismatch([CeligoError.build(
                self.discriminator, ErrorCode.ENUM,
                f"Unknown {self.name} {self.discriminator} {tag!r}; expected one of {', '.join(self.order)}",
            )])

    def resolve(self, candidate: Mapping[str, Any]) -> Optional[VariantDescriptor]:
        """First descriptor, in declared order, whose predicate accepts the candidate."""
        for predicate, descriptor in self.variants:
            if predicate(candidate):
                return descriptor
        return None

    def validate_create(self, candidate: Any) -> CeligoModel:
        """Validate a payload whose variant is not known in advance."""
        candidate = self._prepare(candidate)

        descriptor = self.resolve(candidate)
        if descriptor is None:
            if self.discriminator in candidate:
                # Raises ShapeMismatch for an unknown discriminant value
                self.descriptor_for(candidate[self.discriminator])
            raise MissingRequiredField([CeligoError.build(
                self.discriminator, ErrorCode.MISSING_REQUIRED_FIELD,
                f"{self.discriminator} is required",
            )])

        self.logger.debug("Variant selected", resource=self.name, variant=descriptor.tag)
        return descriptor.validate(candidate)

    def validate_update(self, current_tag: Union[str, Enum], candidate: Any) -> CeligoModel:
        """Validate a replacement payload for an existing entity of ``current_tag``.

        The discriminant is immutable after creation.
        """
        descriptor = self.descriptor_for(current_tag)
        candidate = self._prepare(candidate)

        given = candidate.get(self.discriminator, descriptor.tag)
        if given != descriptor.tag:
            raise DiscriminantConflict([CeligoError.build(
                self.discriminator, ErrorCode.INVALID_FIELD,
                f"{self.discriminator} cannot change from '{descriptor.tag}' to {given!r}",
            )])

        return descriptor.validate(candidate)

    def _prepare(self, candidate: Any) -> Dict[str, Any]:
        if not isinstance(candidate, Mapping):
            raise ShapeMismatch([CeligoError.build(
                ROOT_FIELD, ErrorCode.INVALID_FIELD,
                f"{self.name} config must be an object, got {type(candidate).__name__}",
            )])
        if self.preprocess:
            return self.preprocess(candidate)
        return dict(candidate)

    # Descriptors

    def _one_of(self, descriptors: Sequence[VariantDescriptor]) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        key_map, top = models_json_schema([(d.model, "validation") for d in descriptors], by_alias=True)
        refs = [key_map[(d.model, "validation")] for d in descriptors]
        return refs, top.get("$defs", {})

    def create_schema(self) -> Dict[str, Any]:
        """``oneOf`` over every variant, in precedence order."""
        refs, defs = self._one_of([d for _, d in self.variants])
        return {"type": "object", "oneOf": refs, "$defs": defs}

    def update_schema(self, id_field: str, tag: Union[str, Enum, None] = None) -> Dict[str, Any]:
        """Schema for ``{id_field, config}``; ``tag`` pins the config to one variant."""
        descriptors = [self.descriptor_for(tag)] if tag is not None else [d for _, d in self.variants]
        refs, defs = self._one_of(descriptors)
        return {
            "type": "object",
            "properties": {
                id_field: {"type": "string", "description": f"ID of the {self.name} to update"},
                "config": {"type": "object", "oneOf": refs},
            },
            "required": [id_field, "config"],
            "$defs": defs,
        }


def ordered(descriptors: Sequence[VariantDescriptor]) -> List[Tuple[Predicate, VariantDescriptor]]:
    """Pair each descriptor with its own selection predicate, keeping the order."""
    return [(descriptor.accepts, descriptor) for descriptor in descriptors]


def get_by_id_schema(label: str) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {"_id": {"type": "string", "description": f"{label} ID"}},
        "required": ["_id"],
    }


def list_schema(label: str) -> Dict[str, Any]:
    """Optional filters only; an empty body lists everything."""
    return {
        "type": "object",
        "properties": {
            "type": {"type": "string", "description": f"Only {label} of this type"},
            "limit": {"type": "integer", "minimum": 1, "description": f"Maximum number of {label} to return"},
            "offset": {"type": "integer", "minimum": 0, "description": f"Number of {label} to skip"},
        },
        "required": [],
        "additionalProperties": False,
        "description": f"Get all {label}, optionally filtered by type and paged with limit/offset",
    }
