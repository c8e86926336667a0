from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.tree import Tree

from schematree import __version__
from schematree.core import events as ev
from schematree.core.stages import GENERATE_STAGES, INSPECT_STAGES

RULE_WIDTH = 64
RULE_LINE = "-" * RULE_WIDTH
STATUS_GLYPHS = {
    "success": "ok",
    "failed": "FAIL",
    "skipped": "skip",
}

_CONSTRAINT_KEYS = (
    "minLength",
    "maxLength",
    "pattern",
    "enum",
    "minimum",
    "maximum",
    "minItems",
    "maxItems",
    "uniqueItems",
)


def run_events(events: Iterable[ev.SchematreeEvent], renderer: "Renderer") -> int:
    exit_code = 0
    for event in events:
        renderer.handle(event)
        if isinstance(event, ev.CommandCompleted):
            exit_code = event.exit_code
    renderer.close()
    return exit_code


class Renderer:
    def handle(self, event: ev.SchematreeEvent) -> None:  # noqa: D401
        """Handle a single event."""

    def close(self) -> None:
        return None


class StagePlainRenderer(Renderer):
    """Line-per-stage output shared by both commands when not on a terminal."""

    rich_errors = False

    def __init__(self, console: Console, stages: list[tuple[str, str]]):
        self.console = console
        self.stages = stages
        self._failed: ev.StageFailed | None = None

    def handle(self, event: ev.SchematreeEvent) -> None:
        if isinstance(event, ev.CommandStarted):
            _print_header(self.console, event)
            return
        if isinstance(event, ev.StageCompleted):
            self.console.print(_format_stage_line(event.stage_id, event.status, event.duration_ms, self.stages))
            return
        if isinstance(event, ev.StageFailed):
            self._failed = event
            self.console.print(_format_stage_line(event.stage_id, "failed", event.duration_ms, self.stages))
            return
        if isinstance(event, ev.SchemaWritten):
            self.console.print(f"Wrote {event.path} ({event.bytes} bytes)")
            return
        if isinstance(event, ev.CommandCompleted) and not event.ok:
            self._render_error(event)

    def _render_error(self, event: ev.CommandCompleted) -> None:
        if not self._failed:
            self.console.print(f"Error: {event.command} failed")
        elif self.rich_errors:
            self.console.print(_stage_failure_panel(self._failed))
        else:
            self.console.print(f"Error: {self._failed.message}", markup=False)
            if self._failed.hint:
                self.console.print(f"Hint: {self._failed.hint}", markup=False)


class GeneratePlainRenderer(StagePlainRenderer):
    def __init__(self, console: Console):
        super().__init__(console, GENERATE_STAGES)
        self._schema: dict[str, Any] | None = None
        self._written = False

    def handle(self, event: ev.SchematreeEvent) -> None:
        if isinstance(event, ev.SchemaGenerated):
            self._schema = event.schema
        if isinstance(event, ev.SchemaWritten):
            self._written = True
        super().handle(event)
        if isinstance(event, ev.CommandCompleted) and event.ok and not self._written and self._schema:
            self.console.print(RULE_LINE)
            self.console.print(json.dumps(self._schema, indent=2, ensure_ascii=False), markup=False, soft_wrap=True)


class GenerateRichRenderer(GeneratePlainRenderer):
    rich_errors = True


class GenerateJsonRenderer(Renderer):
    def __init__(self, console: Console):
        self.console = console
        self._schema: dict[str, Any] | None = None
        self._written: ev.SchemaWritten | None = None
        self._failed: ev.StageFailed | None = None

    def handle(self, event: ev.SchematreeEvent) -> None:
        if isinstance(event, ev.SchemaGenerated):
            self._schema = event.schema
        if isinstance(event, ev.SchemaWritten):
            self._written = event
        if isinstance(event, ev.StageFailed):
            self._failed = event
        if isinstance(event, ev.CommandCompleted):
            payload = {
                "ok": event.ok,
                "schema": self._schema,
                "written": self._written.to_dict() if self._written else None,
                "error": self._failed.to_dict() if self._failed else None,
            }
            self.console.print(json.dumps(payload, indent=2), markup=False, soft_wrap=True)


class InspectPlainRenderer(StagePlainRenderer):
    def __init__(self, console: Console):
        super().__init__(console, INSPECT_STAGES)
        self._parsed: ev.SchemaParsed | None = None

    def handle(self, event: ev.SchematreeEvent) -> None:
        if isinstance(event, ev.SchemaParsed):
            self._parsed = event
        super().handle(event)
        if isinstance(event, ev.CommandCompleted) and event.ok and self._parsed:
            self._render(self._parsed)

    def _render(self, parsed: ev.SchemaParsed) -> None:
        self.console.print(RULE_LINE)
        for name, value in parsed.metadata.items():
            if value:
                self.console.print(f"{name}: {value}", markup=False, soft_wrap=True)
        for line in _tree_lines(parsed.properties, parsed.type_labels, depth=0):
            self.console.print(line, markup=False, soft_wrap=True)


class InspectRichRenderer(InspectPlainRenderer):
    rich_errors = True

    def _render(self, parsed: ev.SchemaParsed) -> None:
        title = parsed.metadata.get("title") or (parsed.path.name if parsed.path else "schema")
        root = Tree(Text(title, style="bold"))
        _add_branches(root, parsed.properties, parsed.type_labels)
        details = [f"{name}: {value}" for name, value in parsed.metadata.items() if value and name != "title"]
        if details:
            self.console.print(Panel(Text("\n".join(details)), title="Metadata", box=box.ROUNDED, title_align="left"))
        self.console.print(root)


class InspectJsonRenderer(Renderer):
    def __init__(self, console: Console):
        self.console = console
        self._parsed: ev.SchemaParsed | None = None
        self._failed: ev.StageFailed | None = None

    def handle(self, event: ev.SchematreeEvent) -> None:
        if isinstance(event, ev.SchemaParsed):
            self._parsed = event
        if isinstance(event, ev.StageFailed):
            self._failed = event
        if isinstance(event, ev.CommandCompleted):
            payload = {
                "ok": event.ok,
                "metadata": self._parsed.metadata if self._parsed else None,
                "properties": self._parsed.properties if self._parsed else None,
                "error": self._failed.to_dict() if self._failed else None,
            }
            self.console.print(json.dumps(payload, indent=2), markup=False, soft_wrap=True)


def _add_branches(parent: Tree, nodes: list[dict[str, Any]], labels: dict[str, str]) -> None:
    for node in nodes:
        branch = parent.add(_node_text(node, labels))
        _add_branches(branch, node.get("children", []), labels)
        if "items" in node:
            _add_branches(branch, [node["items"]], labels)


def _tree_lines(nodes: list[dict[str, Any]], labels: dict[str, str], *, depth: int) -> list[str]:
    lines: list[str] = []
    for node in nodes:
        lines.append("  " * depth + _node_text(node, labels).plain)
        lines.extend(_tree_lines(node.get("children", []), labels, depth=depth + 1))
        if "items" in node:
            lines.extend(_tree_lines([node["items"]], labels, depth=depth + 1))
    return lines


def _node_text(node: dict[str, Any], labels: dict[str, str]) -> Text:
    key = node.get("key") or "(items)"
    node_type = node.get("type", "string")
    text = Text(key, style="bold")
    text.append(f" {labels.get(node_type, node_type)}", style="cyan")
    if node.get("required"):
        text.append(" required", style="yellow")
    constraints = [f"{name}={node[name]!r}" for name in _CONSTRAINT_KEYS if name in node]
    if constraints:
        text.append(f" [{', '.join(constraints)}]", style="dim")
    if node.get("title"):
        text.append(f" {node['title']}", style="italic")
    return text


def _print_header(console: Console, event: ev.CommandStarted) -> None:
    project = event.project_dir or Path(".")
    console.print(f"schematree v{__version__} | {event.command} | project: {project}\n{RULE_LINE}")


def _format_stage_line(
    stage_id: str,
    status: str,
    elapsed_ms: float | None,
    mapping: list[tuple[str, str]],
) -> str:
    index = _stage_index(stage_id, mapping)
    label = _stage_label(stage_id, mapping)
    glyph = STATUS_GLYPHS.get(status, status)
    padding = "." * max(2, 28 - len(label))
    duration = f"  {_format_duration(elapsed_ms)}" if elapsed_ms is not None else ""
    return f"[{index}/{len(mapping)}] {label} {padding} {glyph}{duration}"


def _format_duration(elapsed_ms: float) -> str:
    if elapsed_ms < 1000:
        return f"{elapsed_ms:.0f}ms"
    return f"{elapsed_ms / 1000:.2f}s"


def _stage_label(stage_id: str, mapping: list[tuple[str, str]]) -> str:
    for key, label in mapping:
        if key == stage_id:
            return label
    return stage_id


def _stage_index(stage_id: str, mapping: list[tuple[str, str]]) -> int:
    for index, (key, _label) in enumerate(mapping, start=1):
        if key == stage_id:
            return index
    return 0


def _stage_failure_panel(event: ev.StageFailed) -> Panel:
    body = "\n".join(
        [
            f"stage: {event.stage_id}",
            f"error: {event.message}",
        ]
    )
    if event.hint:
        body = "\n".join([body, f"hint: {event.hint}"])
    return Panel(Text(body), title=f"{event.command.capitalize()} failed", box=box.ROUNDED, title_align="left")
