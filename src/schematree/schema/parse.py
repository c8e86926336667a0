from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

from schematree.model.ids import IdFactory, generate_id
from schematree.model.nodes import (
    METADATA_FIELDS,
    NODE_CLASSES,
    PROPERTY_TYPES,
    PropertyNode,
    SchemaMetadata,
)
from schematree.schema.generate import FILE_SCHEMA


class ParsedSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    properties: tuple[PropertyNode, ...] = ()
    metadata: SchemaMetadata = SchemaMetadata()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_count(value: Any) -> bool:
    if isinstance(value, float):
        return value.is_integer() and value >= 0
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


# wire name -> (field name, acceptance check), per node type.
_Reader = tuple[str, Callable[[Any], bool]]
_RANGE_READERS: dict[str, _Reader] = {
    "minimum": ("minimum", _is_number),
    "maximum": ("maximum", _is_number),
}
_CONSTRAINT_READERS: dict[str, dict[str, _Reader]] = {
    "string": {
        "minLength": ("min_length", _is_count),
        "maxLength": ("max_length", _is_count),
        "pattern": ("pattern", lambda value: isinstance(value, str)),
        "enum": ("enum", _is_string_list),
    },
    "number": _RANGE_READERS,
    "integer": _RANGE_READERS,
    "array": {
        "minItems": ("min_items", _is_count),
        "maxItems": ("max_items", _is_count),
        "uniqueItems": ("unique_items", lambda value: isinstance(value, bool)),
    },
}


def parse_schema(schema: Any, *, id_factory: IdFactory | None = None) -> ParsedSchema:
    """Lift a JSON Schema object into an ordered tree of property nodes.

    Lenient by contract: anything that is not the expected shape degrades to
    the closest empty or default value instead of raising. Every node gets a
    fresh id, ids are not part of the schema.
    """
    if not isinstance(schema, dict):
        return ParsedSchema()
    new_id = id_factory or generate_id
    metadata = SchemaMetadata(**{field: _text(schema.get(field)) for field in METADATA_FIELDS})
    return ParsedSchema(properties=_parse_properties(schema, new_id), metadata=metadata)


def property_type_of(subschema: Any) -> str:
    if not isinstance(subschema, dict):
        return "string"
    declared = subschema.get("type")
    if declared == FILE_SCHEMA["type"] and subschema.get("format") == FILE_SCHEMA["format"]:
        return "file"
    if isinstance(declared, str) and declared in PROPERTY_TYPES and declared != "file":
        return declared
    return "string"


def _parse_properties(schema: dict[str, Any], new_id: IdFactory) -> tuple[PropertyNode, ...]:
    properties = schema.get("properties")
    if not isinstance(properties, dict):
        return ()
    required_list = schema.get("required")
    required = (
        {name for name in required_list if isinstance(name, str)}
        if isinstance(required_list, list)
        else set()
    )
    return tuple(
        _parse_node(str(key), subschema, key in required, new_id)
        for key, subschema in properties.items()
    )


def _parse_node(key: str, subschema: Any, required: bool, new_id: IdFactory) -> PropertyNode:
    node_type = property_type_of(subschema)
    if not isinstance(subschema, dict):
        subschema = {}

    fields: dict[str, Any] = {"id": new_id(), "key": key, "required": required}
    for name in ("title", "description"):
        value = subschema.get(name)
        if isinstance(value, str) and value:
            fields[name] = value

    for wire_name, (field_name, accepts) in _CONSTRAINT_READERS.get(node_type, {}).items():
        value = subschema.get(wire_name)
        if value is None or not accepts(value):
            continue
        if isinstance(value, list):
            value = tuple(value)
        elif accepts is _is_count:
            value = int(value)
        fields[field_name] = value

    if node_type == "object":
        fields["children"] = _parse_properties(subschema, new_id)
    elif node_type == "array":
        items = subschema.get("items")
        if isinstance(items, dict):
            fields["items"] = _parse_node("", items, False, new_id)
    return NODE_CLASSES[node_type](**fields)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""
