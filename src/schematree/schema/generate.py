from __future__ import annotations

from typing import Any, Sequence

from schematree.model.nodes import (
    METADATA_FIELDS,
    ArrayProperty,
    ObjectProperty,
    PropertyBase,
    SchemaMetadata,
)

# JSON Schema has no file type; files travel as binary strings, the same
# shape OpenAPI uses for uploads. The parser recognizes exactly this form.
FILE_SCHEMA: dict[str, str] = {"type": "string", "format": "binary"}


def generate_schema(
    nodes: Sequence[PropertyBase],
    metadata: SchemaMetadata | None = None,
    include_metadata: bool = True,
) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object"}
    if include_metadata and metadata is not None:
        for field in METADATA_FIELDS:
            value = getattr(metadata, field)
            if value:
                schema[field] = value
    schema.update(_compile_properties(nodes))
    return schema


def _compile_properties(nodes: Sequence[PropertyBase]) -> dict[str, Any]:
    properties: dict[str, Any] = {}
    required_fields: list[str] = []
    for node in nodes:
        properties[node.key] = _compile_node(node)
        if node.required:
            required_fields.append(node.key)
    return {"properties": properties, "required": required_fields}


def _compile_node(node: PropertyBase) -> dict[str, Any]:
    if node.type == "file":
        compiled: dict[str, Any] = dict(FILE_SCHEMA)
    else:
        compiled = {"type": node.type}

    if node.title:
        compiled["title"] = node.title
    if node.description:
        compiled["description"] = node.description

    constraints = node.model_dump(
        mode="json",
        by_alias=True,
        include=set(node.CONSTRAINTS),
        exclude_none=True,
    )
    for name in node.CONSTRAINTS:
        wire_name = type(node).model_fields[name].alias or name
        if wire_name in constraints:
            compiled[wire_name] = constraints[wire_name]

    if isinstance(node, ObjectProperty):
        compiled.update(_compile_properties(node.children))
    elif isinstance(node, ArrayProperty) and node.items is not None:
        compiled["items"] = _compile_node(node.items)
    return compiled
