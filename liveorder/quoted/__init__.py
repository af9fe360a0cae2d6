"""Quoted-form tree model, builders and document codec."""

from .nodes import Atom, Node, Term
from .build import (
    atom,
    var,
    call,
    block,
    literal,
    aliases,
    module_attr,
    use,
    directive,
    defn,
    defmodule,
    literal_value,
    keyword_get,
    module_body,
    replace_module_body,
)
from .codec import (
    CodecError,
    DocumentFormat,
    ModuleDocument,
    decode_term,
    detect_format,
    encode_term,
)

__all__ = [
    # Terms
    "Atom",
    "Node",
    "Term",
    # Builders
    "atom",
    "var",
    "call",
    "block",
    "literal",
    "aliases",
    "module_attr",
    "use",
    "directive",
    "defn",
    "defmodule",
    "literal_value",
    "keyword_get",
    "module_body",
    "replace_module_body",
    # Codec
    "CodecError",
    "DocumentFormat",
    "ModuleDocument",
    "decode_term",
    "detect_format",
    "encode_term",
]
