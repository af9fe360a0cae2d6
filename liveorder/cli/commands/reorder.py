"""Reorder command: rewrite module bodies into canonical callback order."""

from pathlib import Path

import typer

from ...style import StyleInvariantError
from ...walker import reorder_document
from ..app import app, console, get_json_mode
from ..utils import ExitCode, Output, display_path
from ._loading import (
    check_format,
    load_document,
    output_format,
    resolve_policies,
)


@app.command("reorder")
def reorder_command(
    file: Path = typer.Argument(..., help="Quoted-form document (YAML or JSON)"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write result here instead of stdout"
    ),
    fmt: str | None = typer.Option(
        None, "--format", "-f", help="Input/output format: yaml or json"
    ),
    style: list[str] | None = typer.Option(
        None, "--style", "-s", help="Only apply these styles (repeatable)"
    ),
    no_moduledoc: bool = typer.Option(
        False, "--no-moduledoc", help="Never add a default @moduledoc false"
    ),
):
    """Reorder LiveView/LiveComponent callbacks in a document.

    Examples:
        liveorder reorder page_live.yaml
        liveorder reorder page_live.json -o page_live.sorted.json
        liveorder reorder card_component.yaml --style live_component
    """
    out = Output(console=console, json_mode=get_json_mode())

    if not check_format(fmt, out):
        raise typer.Exit(out.finish())

    policies = resolve_policies(style, no_moduledoc, out)
    document = load_document(file, fmt, out) if policies is not None else None
    if policies is None or document is None:
        raise typer.Exit(out.finish())

    try:
        result, ctx = reorder_document(document, policies)
    except StyleInvariantError as e:
        out.error(
            f"Internal error while reordering {display_path(file)}: {e}",
            file=str(file),
            exit_code=ExitCode.INTERNAL_ERROR,
        )
        raise typer.Exit(out.finish())

    if output is not None:
        if output_format(output, fmt) == "json":
            result.to_json(output)
        else:
            result.to_yaml(output)
        out.success(
            f"Reordered {ctx.modules_rewritten}/{ctx.modules_seen} modules → "
            f"{display_path(output)}",
            file=str(file),
            output=str(output),
            modules_seen=ctx.modules_seen,
            modules_rewritten=ctx.modules_rewritten,
        )
    elif out.json_mode:
        out.set_data("modules_seen", ctx.modules_seen)
        out.set_data("modules_rewritten", ctx.modules_rewritten)
        out.set_data("document", result.model_dump(mode="json"))
    else:
        typer.echo(result.dumps(output_format(file, fmt)), nl=False)

    raise typer.Exit(out.finish())
