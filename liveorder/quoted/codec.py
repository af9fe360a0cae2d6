"""YAML/JSON document codec for quoted-form trees.

Encoding:
    Atom            -> ":name"
    str             -> "text"  ({"string": ":text"} when it starts with ":")
    Node            -> {"node": head, "meta": {...}, "args": [...] | null}
                       (heads other than plain names are encoded as terms)
    2-tuple (pair)  -> {"pair": [key, value]}
    list / scalars  -> themselves
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from .nodes import Atom, Node, Term

logger = logging.getLogger(__name__)

DocumentFormat = Literal["yaml", "json"]


class CodecError(ValueError):
    """Raised when a document does not describe a valid tree."""

    def __init__(self, message: str, path: str = "$"):
        super().__init__(f"{path}: {message}")
        self.path = path


# =============================================================================
# Term encoding
# =============================================================================


def encode_term(term: Term) -> Any:
    """Convert a term into plain YAML/JSON-compatible data."""
    if isinstance(term, Atom):
        return f":{term.name}"
    if isinstance(term, Node):
        head = term.head
        if not isinstance(head, str) or head.startswith(":"):
            head = encode_term(head)
        data: dict[str, Any] = {"node": head}
        if term.meta:
            data["meta"] = dict(term.meta)
        data["args"] = (
            None if term.args is None else [encode_term(a) for a in term.args]
        )
        return data
    if isinstance(term, tuple):
        if len(term) != 2:
            raise CodecError(f"only 2-tuples are representable, got {len(term)}")
        return {"pair": [encode_term(term[0]), encode_term(term[1])]}
    if isinstance(term, list):
        return [encode_term(item) for item in term]
    if isinstance(term, str):
        if term.startswith(":"):
            return {"string": term}
        return term
    if term is None or isinstance(term, (bool, int, float)):
        return term
    raise CodecError(f"unsupported term type {type(term).__name__}")


def decode_term(data: Any, path: str = "$") -> Term:
    """Convert plain data back into a term, validating its shape."""
    if isinstance(data, str):
        if data.startswith(":") and len(data) > 1:
            return Atom(data[1:])
        return data
    if data is None or isinstance(data, (bool, int, float)):
        return data
    if isinstance(data, list):
        return [decode_term(item, f"{path}[{i}]") for i, item in enumerate(data)]
    if isinstance(data, dict):
        if "node" in data:
            return _decode_node(data, path)
        if set(data) == {"pair"}:
            pair = data["pair"]
            if not isinstance(pair, list) or len(pair) != 2:
                raise CodecError("pair must be a two-element list", path)
            return (
                decode_term(pair[0], f"{path}.pair[0]"),
                decode_term(pair[1], f"{path}.pair[1]"),
            )
        if set(data) == {"string"}:
            if not isinstance(data["string"], str):
                raise CodecError("string wrapper must hold a string", path)
            return data["string"]
        raise CodecError(f"unrecognized mapping with keys {sorted(data)}", path)
    raise CodecError(f"unsupported value type {type(data).__name__}", path)


def _decode_node(data: dict, path: str) -> Node:
    unknown = set(data) - {"node", "meta", "args"}
    if unknown:
        raise CodecError(f"unexpected node keys {sorted(unknown)}", path)

    head = decode_term(data["node"], f"{path}.node")

    meta = data.get("meta") or {}
    if not isinstance(meta, dict):
        raise CodecError("meta must be a mapping", path)

    raw_args = data.get("args", [])
    if raw_args is None:
        args = None
    elif isinstance(raw_args, list):
        args = tuple(
            decode_term(a, f"{path}.args[{i}]") for i, a in enumerate(raw_args)
        )
    else:
        raise CodecError("args must be a list or null", path)

    return Node(head=head, meta=dict(meta), args=args)


# =============================================================================
# Document envelope
# =============================================================================


def detect_format(path: Path | str) -> DocumentFormat:
    """Pick a document format from the file suffix (defaults to YAML)."""
    return "json" if Path(path).suffix.lower() == ".json" else "yaml"


class ModuleDocument(BaseModel):
    """A serialized source tree, as handed over by the host reader."""

    version: int = 1
    source: str | None = Field(
        default=None, description="Path of the source file the tree came from"
    )
    tree: Any = None

    def decode(self) -> Term:
        """Decode the stored tree into terms."""
        return decode_term(self.tree)

    def with_tree(self, tree: Term) -> "ModuleDocument":
        """Return a copy of this document holding ``tree``."""
        return self.model_copy(update={"tree": encode_term(tree)})

    @classmethod
    def from_term(cls, tree: Term, source: str | None = None) -> "ModuleDocument":
        return cls(source=source, tree=encode_term(tree))

    @classmethod
    def from_yaml(cls, path: Path | str) -> "ModuleDocument":
        """Load a document from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls._from_data(data)

    @classmethod
    def from_json(cls, path: Path | str) -> "ModuleDocument":
        """Load a document from a JSON file."""
        with open(path) as f:
            data = json.load(f)
        return cls._from_data(data)

    @classmethod
    def from_file(
        cls, path: Path | str, fmt: DocumentFormat | None = None
    ) -> "ModuleDocument":
        fmt = fmt or detect_format(path)
        logger.debug("Loading %s document from %s", fmt, path)
        if fmt == "json":
            return cls.from_json(path)
        return cls.from_yaml(path)

    @classmethod
    def _from_data(cls, data: Any) -> "ModuleDocument":
        if data is None:
            raise CodecError("document is empty")
        if isinstance(data, dict) and "tree" in data:
            return cls.model_validate(data)
        # Bare tree without an envelope
        return cls(tree=data)

    def dumps(self, fmt: DocumentFormat = "yaml") -> str:
        data: dict[str, Any] = {"version": self.version}
        if self.source:
            data["source"] = self.source
        data["tree"] = self.tree
        if fmt == "json":
            return json.dumps(data, indent=2)
        return yaml.dump(
            data, default_flow_style=False, sort_keys=False, allow_unicode=True
        )

    def to_yaml(self, path: Path | str) -> None:
        """Save the document to a YAML file."""
        self._write(path, "yaml")

    def to_json(self, path: Path | str) -> None:
        """Save the document to a JSON file."""
        self._write(path, "json")

    def _write(self, path: Path | str, fmt: DocumentFormat) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            f.write(self.dumps(fmt))
