"""
Schema node types for OAM.

A SchemaNode is the immutable, parsed form of a JSON-Schema-shaped type
description taken from an OpenAPI document. Nodes form a tagged union keyed
by ``kind`` so the mock data generator can dispatch on the variant instead of
on raw ``type`` strings.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class SchemaKind(str, Enum):
    """Enumeration of schema node variants."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    UNCONSTRAINED = "unconstrained"


class _SchemaBase(BaseModel):
    """Fields shared by every schema node.

    ``example`` and ``default`` are only meaningful when present in the source
    document, so presence is tracked through ``model_fields_set`` rather than
    by comparing against None (``null`` is a legal example).
    """

    example: Any = None
    default: Any = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_example(self) -> bool:
        return "example" in self.model_fields_set

    @property
    def has_default(self) -> bool:
        return "default" in self.model_fields_set


class StringSchema(_SchemaBase):
    kind: Literal[SchemaKind.STRING] = SchemaKind.STRING
    format: str | None = None
    enum: tuple[Any, ...] | None = None
    min_length: int | None = None
    max_length: int | None = None


class NumberSchema(_SchemaBase):
    """Numeric node; ``kind`` distinguishes integer from number."""

    kind: Literal[SchemaKind.NUMBER, SchemaKind.INTEGER] = SchemaKind.NUMBER
    minimum: int | float | None = None
    maximum: int | float | None = None

    @property
    def is_integer(self) -> bool:
        return self.kind == SchemaKind.INTEGER


class BooleanSchema(_SchemaBase):
    kind: Literal[SchemaKind.BOOLEAN] = SchemaKind.BOOLEAN


class ObjectSchema(_SchemaBase):
    """Object node with properties in declaration order.

    ``required`` is None when the source document omits the ``required``
    keyword; in that case every declared property is treated as required.
    """

    kind: Literal[SchemaKind.OBJECT] = SchemaKind.OBJECT
    properties: dict[str, SchemaNode | None] = Field(default_factory=dict)
    required: tuple[str, ...] | None = None

    def is_required(self, name: str) -> bool:
        if self.required is None:
            return True
        return name in self.required


class ArraySchema(_SchemaBase):
    kind: Literal[SchemaKind.ARRAY] = SchemaKind.ARRAY
    items: SchemaNode | None = None
    min_items: int | None = None
    max_items: int | None = None


class UnconstrainedSchema(_SchemaBase):
    """Node without a recognised ``type``; only example/default apply."""

    kind: Literal[SchemaKind.UNCONSTRAINED] = SchemaKind.UNCONSTRAINED


SchemaNode = Annotated[
    Union[
        StringSchema,
        NumberSchema,
        BooleanSchema,
        ObjectSchema,
        ArraySchema,
        UnconstrainedSchema,
    ],
    Field(discriminator="kind"),
]

ObjectSchema.model_rebuild()
ArraySchema.model_rebuild()


def _resolve_type(raw_type: Any) -> str | None:
    """Return the effective type name, honouring OpenAPI 3.1 type lists."""
    if isinstance(raw_type, str):
        return raw_type
    if isinstance(raw_type, list):
        for entry in raw_type:
            if isinstance(entry, str) and entry != "null":
                return entry
    return None


def parse_schema(raw: Any) -> SchemaNode | None:
    """Build a SchemaNode from a dereferenced schema mapping.

    Args:
        raw: Schema object from the document. Anything that is not a mapping
            is treated as absent.

    Returns:
        The parsed node, or None if the node is absent or malformed.
    """
    if not isinstance(raw, dict):
        return None

    overrides = {key: raw[key] for key in ("example", "default") if key in raw}
    type_name = _resolve_type(raw.get("type"))

    try:
        if type_name == "string":
            enum = raw.get("enum")
            return StringSchema(
                format=raw.get("format"),
                enum=tuple(enum) if isinstance(enum, list) and enum else None,
                min_length=raw.get("minLength"),
                max_length=raw.get("maxLength"),
                **overrides,
            )
        if type_name in ("number", "integer"):
            return NumberSchema(
                kind=SchemaKind(type_name),
                minimum=raw.get("minimum"),
                maximum=raw.get("maximum"),
                **overrides,
            )
        if type_name == "boolean":
            return BooleanSchema(**overrides)
        if type_name == "object":
            properties = raw.get("properties")
            required = raw.get("required")
            return ObjectSchema(
                properties=(
                    {str(name): parse_schema(prop) for name, prop in properties.items()}
                    if isinstance(properties, dict)
                    else {}
                ),
                required=(
                    tuple(str(name) for name in required) if isinstance(required, list) else None
                ),
                **overrides,
            )
        if type_name == "array":
            return ArraySchema(
                items=parse_schema(raw.get("items")),
                min_items=raw.get("minItems"),
                max_items=raw.get("maxItems"),
                **overrides,
            )
    except ValidationError as e:
        logger.debug("Ignoring malformed %s schema: %s", type_name, e)
        return None

    return UnconstrainedSchema(**overrides)
