from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class SchematreeEvent:
    ts: float = field(default_factory=time.perf_counter)
    level: str = "INFO"
    command: str = ""
    type: str = ""

    def to_dict(self) -> dict[str, Any]:
        return _serialize(asdict(self))


@dataclass(frozen=True)
class CommandStarted(SchematreeEvent):
    type: str = "CommandStarted"
    project_dir: Path | None = None
    config_path: Path | None = None
    options: dict[str, Any] | None = None


@dataclass(frozen=True)
class CommandCompleted(SchematreeEvent):
    type: str = "CommandCompleted"
    ok: bool = True
    exit_code: int = 0


@dataclass(frozen=True)
class StageStarted(SchematreeEvent):
    type: str = "StageStarted"
    stage_id: str = ""
    label: str = ""


@dataclass(frozen=True)
class StageCompleted(SchematreeEvent):
    type: str = "StageCompleted"
    stage_id: str = ""
    duration_ms: float = 0.0
    status: str = "success"


@dataclass(frozen=True)
class StageFailed(SchematreeEvent):
    type: str = "StageFailed"
    stage_id: str = ""
    duration_ms: float = 0.0
    error_code: str = ""
    message: str = ""
    hint: str | None = None


@dataclass(frozen=True)
class TreeLoaded(SchematreeEvent):
    type: str = "TreeLoaded"
    path: Path | None = None
    properties: int = 0


@dataclass(frozen=True)
class SchemaGenerated(SchematreeEvent):
    type: str = "SchemaGenerated"
    schema: dict[str, Any] = field(default_factory=dict)
    include_metadata: bool = True


@dataclass(frozen=True)
class SchemaWritten(SchematreeEvent):
    type: str = "SchemaWritten"
    path: Path | None = None
    bytes: int = 0


@dataclass(frozen=True)
class SchemaParsed(SchematreeEvent):
    type: str = "SchemaParsed"
    path: Path | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    properties: list[dict[str, Any]] = field(default_factory=list)
    type_labels: dict[str, str] = field(default_factory=dict)


def _serialize(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {key: _serialize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    return value
