"""Constructors and accessors for common quoted forms.

These mirror what a source reader produces, so tests and programmatic
callers can assemble module trees without going through a document.
"""

from __future__ import annotations

from typing import Any

from .nodes import Atom, Node, Term


def atom(name: str) -> Atom:
    return Atom(name)


def var(name: str, line: int | None = None) -> Node:
    """A bare variable reference."""
    return Node(head=name, meta=_meta(line), args=None)


def call(name: Any, *args: Term, line: int | None = None) -> Node:
    return Node(head=name, meta=_meta(line), args=tuple(args))


def block(*args: Term, line: int | None = None) -> Node:
    return Node(head="__block__", meta=_meta(line), args=tuple(args))


def literal(value: Term, line: int | None = None) -> Node:
    """A literal wrapped in ``__block__``, as readers emit with token metadata."""
    return block(value, line=line)


def aliases(dotted: str, line: int | None = None) -> Node:
    """``Foo.Bar`` as an ``__aliases__`` form."""
    return Node(
        head="__aliases__",
        meta=_meta(line),
        args=tuple(Atom(part) for part in dotted.split(".")),
    )


def module_attr(name: str, value: Term, line: int | None = None) -> Node:
    """``@name value``."""
    return Node(
        head="@",
        meta=_meta(line),
        args=(Node(head=name, meta=_meta(line), args=(value,)),),
    )


def use(module: str, tag: Term, line: int | None = None) -> Node:
    """``use Module, tag`` where tag is an atom, literal block or keyword list."""
    return call("use", aliases(module, line=line), tag, line=line)


def directive(kind: str, module: str, line: int | None = None) -> Node:
    """``import``/``alias``/``require`` of a single module."""
    return call(kind, aliases(module, line=line), line=line)


def defn(
    name: str,
    *params: Term,
    guard: Term | None = None,
    body: Term = None,
    kind: str = "def",
    line: int | None = None,
) -> Node:
    """A function definition clause, optionally guarded with ``when``."""
    head: Node = call(name, *params, line=line)
    if guard is not None:
        head = call("when", head, guard, line=line)
    do_block = [(literal(Atom("do"), line=line), body)]
    return call(kind, head, do_block, line=line)


def defmodule(name: str, *statements: Term, line: int | None = None) -> Node:
    """``defmodule Name do ... end`` with a ``__block__`` body."""
    body = block(*statements, line=line)
    return call(
        "defmodule",
        aliases(name, line=line),
        [(literal(Atom("do"), line=line), body)],
        line=line,
    )


def literal_value(term: Term) -> Term:
    """Unwrap a single-value ``__block__`` literal wrapper."""
    if (
        isinstance(term, Node)
        and term.head == "__block__"
        and term.args is not None
        and len(term.args) == 1
        and not isinstance(term.args[0], list)
    ):
        return term.args[0]
    return term


def is_do_key(term: Term) -> bool:
    return literal_value(term) == Atom("do")


def keyword_get(keywords: Term, key: str) -> Term:
    """Look up ``key`` in a keyword list; None when absent or not a list."""
    if not isinstance(keywords, list):
        return None
    for item in keywords:
        if isinstance(item, tuple) and len(item) == 2:
            if literal_value(item[0]) == Atom(key):
                return item[1]
    return None


def module_body(node: Term) -> list[Term] | None:
    """Statements of a ``defmodule`` whose do-block body is a ``__block__``.

    Returns None for any other shape, including single-statement bodies.
    """
    if not isinstance(node, Node) or node.head != "defmodule":
        return None
    if node.args is None or len(node.args) != 2:
        return None
    do_blocks = node.args[1]
    if not isinstance(do_blocks, list) or len(do_blocks) != 1:
        return None
    item = do_blocks[0]
    if not (isinstance(item, tuple) and len(item) == 2 and is_do_key(item[0])):
        return None
    body = item[1]
    if isinstance(body, Node) and body.head == "__block__" and body.args is not None:
        return list(body.args)
    return None


def replace_module_body(node: Node, statements: list[Term]) -> Node:
    """Rebuild a ``defmodule`` with a new statement list.

    Module name, do-key and all metadata are carried over unchanged.
    """
    name, do_blocks = node.args
    do_key, body = do_blocks[0]
    new_body = body.with_args(tuple(statements))
    return node.with_args((name, [(do_key, new_body)]))


def _meta(line: int | None) -> dict[str, Any]:
    return {"line": line} if line is not None else {}
