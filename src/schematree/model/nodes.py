from __future__ import annotations

from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator

from schematree.model.ids import generate_id

PropertyType = Literal["string", "number", "integer", "boolean", "object", "array", "file"]

PROPERTY_TYPES: tuple[str, ...] = (
    "string",
    "number",
    "integer",
    "boolean",
    "object",
    "array",
    "file",
)


class PropertyBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    # Scalar constraint fields, in wire order. Nested fields (children, items)
    # are handled by the generator and parser directly.
    CONSTRAINTS: ClassVar[tuple[str, ...]] = ()

    id: str = Field(default_factory=generate_id)
    key: str = ""
    required: bool = False
    title: str | None = None
    description: str | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value:
            return None
        return value


class StringProperty(PropertyBase):
    CONSTRAINTS: ClassVar[tuple[str, ...]] = ("min_length", "max_length", "pattern", "enum")

    type: Literal["string"] = "string"
    min_length: int | None = Field(default=None, alias="minLength", ge=0)
    max_length: int | None = Field(default=None, alias="maxLength", ge=0)
    pattern: str | None = None
    enum: tuple[str, ...] | None = None


class _RangeProperty(PropertyBase):
    CONSTRAINTS: ClassVar[tuple[str, ...]] = ("minimum", "maximum")

    minimum: int | float | None = None
    maximum: int | float | None = None


class NumberProperty(_RangeProperty):
    type: Literal["number"] = "number"


class IntegerProperty(_RangeProperty):
    type: Literal["integer"] = "integer"


class BooleanProperty(PropertyBase):
    type: Literal["boolean"] = "boolean"


class ObjectProperty(PropertyBase):
    type: Literal["object"] = "object"
    children: tuple[PropertyNode, ...] = ()


class ArrayProperty(PropertyBase):
    CONSTRAINTS: ClassVar[tuple[str, ...]] = ("min_items", "max_items", "unique_items")

    type: Literal["array"] = "array"
    min_items: int | None = Field(default=None, alias="minItems", ge=0)
    max_items: int | None = Field(default=None, alias="maxItems", ge=0)
    unique_items: bool | None = Field(default=None, alias="uniqueItems")
    items: PropertyNode | None = None

    @field_validator("items")
    @classmethod
    def _anonymous_items(cls, value: PropertyBase | None) -> PropertyBase | None:
        # An item schema has no property name and no required flag.
        if value is not None and (value.key or value.required):
            return value.model_copy(update={"key": "", "required": False})
        return value


class FileProperty(PropertyBase):
    type: Literal["file"] = "file"


def _node_type(value: Any) -> str:
    if isinstance(value, dict):
        return value.get("type", "string")
    return getattr(value, "type", "string")


PropertyNode = Annotated[
    Union[
        Annotated[StringProperty, Tag("string")],
        Annotated[NumberProperty, Tag("number")],
        Annotated[IntegerProperty, Tag("integer")],
        Annotated[BooleanProperty, Tag("boolean")],
        Annotated[ObjectProperty, Tag("object")],
        Annotated[ArrayProperty, Tag("array")],
        Annotated[FileProperty, Tag("file")],
    ],
    Discriminator(_node_type),
]

NODE_CLASSES: dict[str, type[PropertyBase]] = {
    "string": StringProperty,
    "number": NumberProperty,
    "integer": IntegerProperty,
    "boolean": BooleanProperty,
    "object": ObjectProperty,
    "array": ArrayProperty,
    "file": FileProperty,
}

ObjectProperty.model_rebuild()
ArrayProperty.model_rebuild()


class SchemaMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str = ""
    description: str = ""
    version: str = ""


METADATA_FIELDS: tuple[str, ...] = ("title", "description", "version")


def legal_fields(node_type: str) -> frozenset[str]:
    """Field names a node of ``node_type`` may hold, ``type`` excluded."""
    cls = NODE_CLASSES[node_type]
    return frozenset(name for name in cls.model_fields if name != "type")
