from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from schematree.model.nodes import PROPERTY_TYPES

DEFAULT_TYPE_LABELS: dict[str, str] = {
    "string": "String",
    "number": "Number",
    "integer": "Integer",
    "boolean": "Boolean",
    "object": "Object",
    "array": "Array",
    "file": "File",
}


class BuilderConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    version: str = "v1"
    include_metadata: bool = True
    key_editable: bool = True
    type_labels: dict[str, str] = Field(default_factory=dict)

    @field_validator("type_labels")
    @classmethod
    def _merge_type_labels(cls, value: dict[str, str]) -> dict[str, str]:
        unknown = sorted(set(value) - set(PROPERTY_TYPES))
        if unknown:
            raise ValueError(f"Unknown property types in type_labels: {', '.join(unknown)}")
        return {**DEFAULT_TYPE_LABELS, **value}

    @model_validator(mode="after")
    def _validate_config(self) -> "BuilderConfig":
        if self.version != "v1":
            raise ValueError("Only version v1 is supported.")
        return self

    def label_for(self, node_type: str) -> str:
        return self.type_labels.get(node_type) or DEFAULT_TYPE_LABELS.get(node_type, node_type)
