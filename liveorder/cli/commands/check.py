"""Check command: report documents whose modules are out of order."""

from pathlib import Path

import typer

from ...style import StyleInvariantError
from ...walker import reorder_document
from ..app import app, console, get_json_mode
from ..utils import ExitCode, Output, display_path
from ._loading import check_format, load_document, resolve_policies


@app.command("check")
def check_command(
    files: list[Path] = typer.Argument(..., help="Documents to check"),
    fmt: str | None = typer.Option(
        None, "--format", "-f", help="Input format: yaml or json"
    ),
    style: list[str] | None = typer.Option(
        None, "--style", "-s", help="Only apply these styles (repeatable)"
    ),
    no_moduledoc: bool = typer.Option(
        False, "--no-moduledoc", help="Never add a default @moduledoc false"
    ),
):
    """Exit 1 if reordering would change any of the given documents.

    Examples:
        liveorder check lib/**/*.yaml
        liveorder --json check page_live.json
    """
    out = Output(console=console, json_mode=get_json_mode())

    if not check_format(fmt, out):
        raise typer.Exit(out.finish())

    policies = resolve_policies(style, no_moduledoc, out)
    if policies is None:
        raise typer.Exit(out.finish())

    rows: list[list[str]] = []
    needs_changes = 0
    for path in files:
        document = load_document(path, fmt, out)
        if document is None:
            continue
        try:
            _, ctx = reorder_document(document, policies)
        except StyleInvariantError as e:
            out.error(
                f"Internal error while checking {display_path(path)}: {e}",
                file=str(path),
                exit_code=ExitCode.INTERNAL_ERROR,
            )
            continue

        changed = ctx.modules_rewritten > 0
        if changed:
            needs_changes += 1
        rows.append(
            [
                display_path(path),
                str(ctx.modules_seen),
                "needs reordering" if changed else "ok",
            ]
        )

    if rows:
        out.table("Files", ["File", "Modules", "Status"], rows)

    if out.exit_code != ExitCode.SUCCESS:
        raise typer.Exit(out.finish())

    if needs_changes:
        out.fail(ExitCode.CHANGES_NEEDED, "changes_needed")
        out.text(f"[yellow]{needs_changes} file(s) need reordering[/yellow]")
    else:
        out.success("All files in canonical order", checked=len(rows))
    raise typer.Exit(out.finish())
