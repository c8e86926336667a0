from __future__ import annotations

import time
from pathlib import Path
from typing import Iterable

from schematree.config.load import ConfigError, load_config
from schematree.core import events as ev
from schematree.schema.document import (
    SchemaLoadError,
    TreeDocumentError,
    check_schema,
    load_tree_document,
    write_schema_file,
)
from schematree.schema.generate import generate_schema


def generate_events(
    tree_path: Path,
    *,
    project_dir: Path = Path("."),
    config_path: Path | None = None,
    output: Path | None = None,
    include_metadata: bool | None = None,
) -> Iterable[ev.SchematreeEvent]:
    project_dir = project_dir.resolve()
    if not tree_path.is_absolute():
        tree_path = project_dir / tree_path
    if output is not None and not output.is_absolute():
        output = project_dir / output

    yield ev.CommandStarted(
        command="generate",
        project_dir=project_dir,
        config_path=config_path,
        options={"tree": str(tree_path), "output": str(output) if output else None},
    )

    yield ev.StageStarted(command="generate", stage_id="load_config", label="Load config")
    started = time.perf_counter()
    try:
        config = load_config(project_dir, config_path)
    except ConfigError as exc:
        yield from _fail("load_config", started, "config_error", str(exc))
        return
    yield _completed("load_config", started)

    yield ev.StageStarted(command="generate", stage_id="load_tree", label="Load tree document")
    started = time.perf_counter()
    try:
        document = load_tree_document(tree_path)
    except TreeDocumentError as exc:
        yield from _fail("load_tree", started, "tree_error", str(exc))
        return
    yield ev.TreeLoaded(command="generate", path=tree_path, properties=len(document.properties))
    yield _completed("load_tree", started)

    if include_metadata is None:
        include_metadata = config.include_metadata
    yield ev.StageStarted(command="generate", stage_id="generate_schema", label="Generate schema")
    started = time.perf_counter()
    schema = generate_schema(document.properties, document.metadata, include_metadata)
    yield ev.SchemaGenerated(command="generate", schema=schema, include_metadata=include_metadata)
    yield _completed("generate_schema", started)

    yield ev.StageStarted(command="generate", stage_id="check_schema", label="Check schema")
    started = time.perf_counter()
    try:
        check_schema(schema)
    except SchemaLoadError as exc:
        yield from _fail(
            "check_schema",
            started,
            "schema_invalid",
            str(exc),
            hint="Check pattern and enum values in the tree document.",
        )
        return
    yield _completed("check_schema", started)

    yield ev.StageStarted(command="generate", stage_id="write_schema", label="Write schema")
    started = time.perf_counter()
    if output is None:
        yield _completed("write_schema", started, status="skipped")
        yield ev.CommandCompleted(command="generate", ok=True, exit_code=0)
        return
    try:
        written = write_schema_file(output, schema)
    except OSError as exc:
        yield from _fail("write_schema", started, "write_error", str(exc))
        return
    yield ev.SchemaWritten(command="generate", path=output, bytes=written)
    yield _completed("write_schema", started)

    yield ev.CommandCompleted(command="generate", ok=True, exit_code=0)


def _completed(stage_id: str, started: float, *, status: str = "success") -> ev.StageCompleted:
    return ev.StageCompleted(
        command="generate",
        stage_id=stage_id,
        duration_ms=_elapsed_ms(started),
        status=status,
    )


def _fail(
    stage_id: str,
    started: float,
    error_code: str,
    message: str,
    hint: str | None = None,
) -> Iterable[ev.SchematreeEvent]:
    yield ev.StageFailed(
        command="generate",
        stage_id=stage_id,
        duration_ms=_elapsed_ms(started),
        error_code=error_code,
        message=message,
        hint=hint,
    )
    yield ev.CommandCompleted(command="generate", ok=False, exit_code=2)


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000
