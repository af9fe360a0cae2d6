"""Shared document loading and policy resolution for commands."""

import json
from dataclasses import replace
from pathlib import Path

import yaml
from pydantic import ValidationError

from ...config import OUTPUT_FORMATS, build_policies, get_config
from ...quoted import CodecError, DocumentFormat, ModuleDocument, detect_format
from ...style import ArchetypePolicy
from ..utils import ExitCode, Output, display_path


DOCUMENT_SUFFIXES = (".json", ".yaml", ".yml")


def check_format(fmt: str | None, out: Output) -> bool:
    """Report an unknown --format value. Returns False on error."""
    if fmt is None or fmt in OUTPUT_FORMATS:
        return True
    out.error(
        f"Unknown format: {fmt}",
        suggestion=f"Use one of: {', '.join(OUTPUT_FORMATS)}",
        exit_code=ExitCode.INVALID_INPUT,
    )
    return False


def output_format(path: Path, fmt: str | None) -> DocumentFormat:
    """Explicit format, else the file suffix, else the configured default."""
    if fmt:
        return fmt  # type: ignore[return-value]
    if path.suffix.lower() in DOCUMENT_SUFFIXES:
        return detect_format(path)
    return get_config().output.format  # type: ignore[return-value]


def load_document(path: Path, fmt: str | None, out: Output) -> ModuleDocument | None:
    """Load a document, reporting failures on ``out``. Returns None on error."""
    if not path.exists():
        out.error(
            f"File not found: {display_path(path)}",
            file=str(path),
            exit_code=ExitCode.FILE_NOT_FOUND,
        )
        return None
    try:
        document = ModuleDocument.from_file(path, fmt)  # type: ignore[arg-type]
        document.decode()
    except (CodecError, ValidationError, yaml.YAMLError, json.JSONDecodeError) as e:
        out.error(
            f"Invalid document {display_path(path)}: {e}",
            file=str(path),
            exit_code=ExitCode.INVALID_INPUT,
        )
        return None
    if not document.source:
        document = document.model_copy(update={"source": str(path)})
    return document


def resolve_policies(
    styles: list[str] | None, no_moduledoc: bool, out: Output
) -> tuple[ArchetypePolicy, ...] | None:
    """Policies from config, narrowed by CLI flags. Returns None on error."""
    config = get_config()
    style_config = config.styles
    if styles:
        style_config = replace(style_config, enabled=list(styles))
    if no_moduledoc:
        style_config = replace(style_config, synthesize_moduledoc=False)
    try:
        return build_policies(replace(config, styles=style_config))
    except ValueError as e:
        out.error(str(e), exit_code=ExitCode.INVALID_INPUT)
        return None
