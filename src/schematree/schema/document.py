from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from ruamel.yaml import YAML

from schematree.model.nodes import PropertyNode, SchemaMetadata

_yaml = YAML(typ="safe")


class SchemaLoadError(RuntimeError):
    pass


class TreeDocumentError(SchemaLoadError):
    pass


class TreeDocument(BaseModel):
    """A property tree as written by hand: metadata plus top-level nodes."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    metadata: SchemaMetadata = Field(default_factory=SchemaMetadata)
    properties: tuple[PropertyNode, ...] = ()


def load_schema_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise SchemaLoadError(f"Schema not found: {path}")
    try:
        parsed = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SchemaLoadError(f"Invalid JSON schema: {path}") from exc
    if not isinstance(parsed, dict):
        raise SchemaLoadError("Schema must be a JSON object.")
    return parsed


def load_tree_document(path: Path) -> TreeDocument:
    if not path.exists():
        raise TreeDocumentError(f"Tree document not found: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix in {".yaml", ".yml"}:
            raw = _yaml.load(path.read_text(encoding="utf-8"))
        else:
            raw = json.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        raise TreeDocumentError(f"Failed to parse tree document: {path}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise TreeDocumentError("Tree document must be a mapping at the top level.")
    try:
        return TreeDocument.model_validate(raw)
    except ValidationError as exc:
        raise TreeDocumentError(str(exc)) from exc


def check_schema(schema: dict[str, Any]) -> None:
    try:
        Draft202012Validator.check_schema(schema)
    except SchemaError as exc:
        raise SchemaLoadError(f"Schema is not valid: {exc.message}") from exc


def write_schema_file(path: Path, schema: dict[str, Any]) -> int:
    text = stable_json_text(schema)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return len(text.encode("utf-8"))


def stable_json_text(data: dict[str, Any]) -> str:
    # Key order is part of the output: properties and required follow the tree.
    payload = json.dumps(data, indent=2, ensure_ascii=False)
    return f"{payload}\n"
