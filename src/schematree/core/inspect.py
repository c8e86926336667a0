from __future__ import annotations

import time
from pathlib import Path
from typing import Iterable

from schematree.config.load import ConfigError, load_config
from schematree.core import events as ev
from schematree.model.nodes import PROPERTY_TYPES
from schematree.schema.document import SchemaLoadError, load_schema_file
from schematree.schema.parse import parse_schema


def inspect_events(
    schema_path: Path,
    *,
    project_dir: Path = Path("."),
    config_path: Path | None = None,
) -> Iterable[ev.SchematreeEvent]:
    project_dir = project_dir.resolve()
    if not schema_path.is_absolute():
        schema_path = project_dir / schema_path

    yield ev.CommandStarted(
        command="inspect",
        project_dir=project_dir,
        config_path=config_path,
        options={"schema": str(schema_path)},
    )

    yield ev.StageStarted(command="inspect", stage_id="load_config", label="Load config")
    started = time.perf_counter()
    try:
        config = load_config(project_dir, config_path)
    except ConfigError as exc:
        yield from _fail("load_config", started, "config_error", str(exc))
        return
    yield _completed("load_config", started)

    yield ev.StageStarted(command="inspect", stage_id="load_schema", label="Load schema")
    started = time.perf_counter()
    try:
        schema = load_schema_file(schema_path)
    except SchemaLoadError as exc:
        yield from _fail("load_schema", started, "schema_error", str(exc))
        return
    yield _completed("load_schema", started)

    yield ev.StageStarted(command="inspect", stage_id="parse_schema", label="Parse schema")
    started = time.perf_counter()
    parsed = parse_schema(schema)
    yield ev.SchemaParsed(
        command="inspect",
        path=schema_path,
        metadata=parsed.metadata.model_dump(),
        properties=[
            node.model_dump(mode="json", by_alias=True, exclude_none=True)
            for node in parsed.properties
        ],
        type_labels={node_type: config.label_for(node_type) for node_type in PROPERTY_TYPES},
    )
    yield _completed("parse_schema", started)

    yield ev.CommandCompleted(command="inspect", ok=True, exit_code=0)


def _completed(stage_id: str, started: float) -> ev.StageCompleted:
    return ev.StageCompleted(
        command="inspect",
        stage_id=stage_id,
        duration_ms=_elapsed_ms(started),
        status="success",
    )


def _fail(stage_id: str, started: float, error_code: str, message: str) -> Iterable[ev.SchematreeEvent]:
    yield ev.StageFailed(
        command="inspect",
        stage_id=stage_id,
        duration_ms=_elapsed_ms(started),
        error_code=error_code,
        message=message,
    )
    yield ev.CommandCompleted(command="inspect", ok=False, exit_code=2)


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000
