"""Detect command: show archetypes and statement kinds per module."""

from pathlib import Path

import typer
from rich.markup import escape

from ...quoted import module_body
from ...style import classify, detect
from ...walker import iter_modules, module_name
from ..app import app, console, get_json_mode
from ..utils import Output
from ._loading import check_format, load_document, resolve_policies

_PREVIEW_WIDTH = 60


def _preview(statement) -> str:
    text = repr(statement)
    if len(text) > _PREVIEW_WIDTH:
        text = text[: _PREVIEW_WIDTH - 3] + "..."
    return text


@app.command("detect")
def detect_command(
    file: Path = typer.Argument(..., help="Quoted-form document (YAML or JSON)"),
    fmt: str | None = typer.Option(
        None, "--format", "-f", help="Input format: yaml or json"
    ),
):
    """Show each module's detected archetype and how its statements classify."""
    out = Output(console=console, json_mode=get_json_mode())

    if not check_format(fmt, out):
        raise typer.Exit(out.finish())

    document = load_document(file, fmt, out)
    if document is None:
        raise typer.Exit(out.finish())

    policies = resolve_policies(None, False, out)
    if policies is None:
        raise typer.Exit(out.finish())

    modules = []
    for module in iter_modules(document.decode()):
        statements = module_body(module) or []
        name = module_name(module)
        detection = detect(statements, policies)
        if detection is None:
            modules.append({"module": name, "archetype": None})
            out.text(f"[bold]{name}[/bold]: [dim]no archetype[/dim]")
            continue

        archetype = detection.policy.sentinel
        rows = []
        for index, statement in enumerate(statements):
            kind = classify(statement, detection.policy, detection.declaration)
            rows.append([str(index), kind.describe(), _preview(statement)])
        modules.append(
            {
                "module": name,
                "archetype": archetype,
                "statements": [
                    dict(zip(["index", "kind", "statement"], row)) for row in rows
                ],
            }
        )
        if not out.json_mode:
            escaped = [[escape(cell) for cell in row] for row in rows]
            out.table(f"{name} ({archetype})", ["#", "Kind", "Statement"], escaped)

    out.set_data("modules", modules)
    if not modules:
        out.text("[dim]No modules found[/dim]")
    raise typer.Exit(out.finish())
