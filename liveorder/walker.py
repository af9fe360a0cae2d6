"""Minimal host adapter: apply styles over a quoted tree.

Each style is called at every Node in pre-order and answers with a
directive: CONT to descend into the (possibly replaced) node, SKIP to
leave its subtree alone. Parents are rebuilt only where a child changed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .quoted import ModuleDocument, Node, Term, module_body
from .style import DEFAULT_POLICIES, ArchetypePolicy, reorder_module

logger = logging.getLogger(__name__)


class Directive(str, Enum):
    CONT = "cont"
    SKIP = "skip"


@dataclass
class StyleContext:
    """Per-traversal state threaded through every style call."""

    file: str | None = None
    modules_seen: int = 0
    modules_rewritten: int = 0


class Style:
    """Base class for tree rules."""

    def run(
        self, node: Node, ctx: StyleContext
    ) -> tuple[Directive, Node, StyleContext]:
        return Directive.CONT, node, ctx


class CallbackOrderStyle(Style):
    """Reorders LiveView/LiveComponent module bodies."""

    def __init__(self, policies: Sequence[ArchetypePolicy] = DEFAULT_POLICIES):
        self.policies = tuple(policies)

    def run(
        self, node: Node, ctx: StyleContext
    ) -> tuple[Directive, Node, StyleContext]:
        if module_body(node) is None:
            return Directive.CONT, node, ctx

        ctx.modules_seen += 1
        replaced = reorder_module(node, self.policies)
        if replaced is not node:
            ctx.modules_rewritten += 1
            logger.info("Reordered callbacks in %s", module_name(node))
        return Directive.SKIP, replaced, ctx


def traverse(
    tree: Term,
    styles: Sequence[Style],
    ctx: StyleContext | None = None,
) -> tuple[Term, StyleContext]:
    """Apply ``styles`` over ``tree`` and return the new tree and context."""
    ctx = ctx or StyleContext()
    return _visit(tree, styles, ctx), ctx


def _visit(term: Term, styles: Sequence[Style], ctx: StyleContext) -> Term:
    if isinstance(term, list):
        items = [_visit(item, styles, ctx) for item in term]
        return term if _same(items, term) else items
    if isinstance(term, tuple):
        items = [_visit(item, styles, ctx) for item in term]
        return term if _same(items, term) else tuple(items)
    if not isinstance(term, Node):
        return term

    node = term
    for style in styles:
        directive, node, ctx = style.run(node, ctx)
        if directive is Directive.SKIP:
            return node

    if node.args is None:
        return node
    args = [_visit(arg, styles, ctx) for arg in node.args]
    return node if _same(args, node.args) else node.with_args(tuple(args))


def _same(new: Sequence[Term], old: Sequence[Term]) -> bool:
    return all(a is b for a, b in zip(new, old))


def module_name(node: Node) -> str:
    name = node.args[0] if node.args else None
    if isinstance(name, Node) and name.head == "__aliases__" and name.args:
        return ".".join(getattr(part, "name", str(part)) for part in name.args)
    return "<module>"


def iter_modules(tree: Term):
    """Yield every block-bodied ``defmodule`` node, outermost first."""
    if isinstance(tree, (list, tuple)):
        for item in tree:
            yield from iter_modules(item)
        return
    if not isinstance(tree, Node):
        return
    if module_body(tree) is not None:
        yield tree
    if tree.args is not None:
        for arg in tree.args:
            yield from iter_modules(arg)


def reorder_document(
    document: ModuleDocument,
    policies: Sequence[ArchetypePolicy] = DEFAULT_POLICIES,
) -> tuple[ModuleDocument, StyleContext]:
    """Decode a document, apply the callback ordering style, re-encode."""
    ctx = StyleContext(file=document.source)
    tree, ctx = traverse(document.decode(), [CallbackOrderStyle(policies)], ctx)
    logger.debug(
        "%s: %d modules seen, %d rewritten",
        document.source or "<document>",
        ctx.modules_seen,
        ctx.modules_rewritten,
    )
    return document.with_tree(tree), ctx
