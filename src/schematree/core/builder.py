from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Callable, Iterator

from schematree.config.model import BuilderConfig
from schematree.core import operations as ops
from schematree.model.ids import IdFactory
from schematree.model.nodes import METADATA_FIELDS, PropertyNode, SchemaMetadata
from schematree.schema.document import load_schema_file, write_schema_file
from schematree.schema.generate import generate_schema
from schematree.schema.normalize import normalize_for_type
from schematree.schema.parse import parse_schema

SchemaCallback = Callable[[dict[str, Any]], None]


class BuilderError(RuntimeError):
    pass


class KeyLockedError(BuilderError):
    pass


class SchemaBuilder:
    """Editing session over one canonical JSON Schema.

    The schema is the source of truth. The property tree is derived from it
    on load and on external changes; every edit builds a new tree, generates
    the schema from it once and reports the result through ``on_change``.
    """

    def __init__(
        self,
        schema: dict[str, Any] | None = None,
        on_change: SchemaCallback | None = None,
        *,
        include_metadata: bool = True,
        key_editable: bool = True,
        id_factory: IdFactory | None = None,
    ):
        self.on_change = on_change
        self.include_metadata = include_metadata
        self.key_editable = key_editable
        self.id_factory = id_factory
        self._schema: dict[str, Any] = {}
        self._properties: tuple[PropertyNode, ...] = ()
        self._metadata = SchemaMetadata()
        self.set_schema(schema)

    @classmethod
    def from_config(
        cls,
        config: BuilderConfig,
        schema: dict[str, Any] | None = None,
        on_change: SchemaCallback | None = None,
        *,
        id_factory: IdFactory | None = None,
    ) -> "SchemaBuilder":
        return cls(
            schema,
            on_change,
            include_metadata=config.include_metadata,
            key_editable=config.key_editable,
            id_factory=id_factory,
        )

    @property
    def schema(self) -> dict[str, Any]:
        return self._schema

    @property
    def properties(self) -> tuple[PropertyNode, ...]:
        return self._properties

    @property
    def metadata(self) -> SchemaMetadata:
        return self._metadata

    def set_schema(self, schema: dict[str, Any] | None) -> None:
        """Adopt a schema changed outside the session and re-derive the tree."""
        parsed = parse_schema(schema, id_factory=self.id_factory)
        if not isinstance(schema, dict):
            schema = generate_schema((), parsed.metadata, self.include_metadata)
        self._schema = copy.deepcopy(schema)
        self._properties = parsed.properties
        self._metadata = parsed.metadata

    def add_property(self) -> PropertyNode:
        return ops.add_property(self.id_factory)

    def update_property(self, node_id: str, updated: PropertyNode) -> None:
        properties = ops.update_property(self._properties, node_id, updated)
        if not self.key_editable:
            # Children count too: a parent update may rename one of them.
            before = dict(_keys_by_id(self._properties))
            for child_id, key in _keys_by_id(properties):
                if child_id in before and before[child_id] != key:
                    raise KeyLockedError(
                        f"Property keys are locked: cannot rename {before[child_id]!r} to {key!r}."
                    )
        self._commit(properties, self._metadata)

    def delete_property(self, node_id: str) -> None:
        self._commit(ops.delete_property(self._properties, node_id), self._metadata)

    def change_type(self, node_id: str, new_type: str) -> PropertyNode:
        current = ops.find_property(self._properties, node_id)
        if current is None:
            raise BuilderError(f"Unknown property id: {node_id}")
        updated = normalize_for_type(current, new_type)
        self._commit(ops.replace_property(self._properties, node_id, updated), self._metadata)
        return updated

    def clear_all(self) -> None:
        self._commit((), SchemaMetadata())

    def update_metadata(self, field: str, value: str) -> None:
        if field not in METADATA_FIELDS:
            raise BuilderError(f"Unknown metadata field: {field}")
        self._commit(self._properties, self._metadata.model_copy(update={field: value}))

    def import_schema(self, path: Path) -> None:
        schema = load_schema_file(path)
        self.set_schema(schema)
        self._notify()

    def export_schema(self, path: Path) -> int:
        return write_schema_file(path, self._schema)

    def _commit(self, properties: tuple[PropertyNode, ...], metadata: SchemaMetadata) -> None:
        self._properties = properties
        self._metadata = metadata
        self._schema = generate_schema(properties, metadata, self.include_metadata)
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self._schema)


def _keys_by_id(nodes: tuple[PropertyNode, ...]) -> Iterator[tuple[str, str]]:
    for node in nodes:
        yield node.id, node.key
        yield from _keys_by_id(getattr(node, "children", ()))
        items = getattr(node, "items", None)
        if items is not None:
            yield from _keys_by_id((items,))
