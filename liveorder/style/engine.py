"""Callback reordering for LiveView and LiveComponent modules.

Given the top-level statements of a module body, produce them in canonical
order for the detected archetype:

    LiveView:       @moduledoc, use, import/alias/require, on_mount hooks,
                    callbacks (render at its rank), everything else
    LiveComponent:  @moduledoc, use, import/alias/require, callbacks
                    except render, attr/slot, render, everything else

Statements are moved, never rewritten. The one addition is a
``@moduledoc false`` for components whose body opens with the ``use``
declaration and has no moduledoc of its own. Modules without a recognized
``use`` declaration come back unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from ..quoted import Node, Term, literal, module_attr, module_body, replace_module_body
from .detector import Detection, detect
from .grouping import (
    CallbackGroup,
    attach_markers,
    flatten,
    sort_by_rank,
    sort_callback_groups,
)
from .kinds import Kind, KindTag, classify
from .policy import DEFAULT_POLICIES, DIRECTIVE_ORDER, ArchetypePolicy

logger = logging.getLogger(__name__)

RENDER_CALLBACK = "render"


class StyleInvariantError(RuntimeError):
    """Detection and partitioning disagree about the module's shape."""


@dataclass
class Buckets:
    """Statements of one module body, split by role."""

    declaration: Term
    moduledoc: list[Term] = field(default_factory=list)
    directives: list[Term] = field(default_factory=list)
    hooks: list[Term] = field(default_factory=list)
    callbacks: list[CallbackGroup] = field(default_factory=list)
    macros: list[Term] = field(default_factory=list)
    others: list[Term] = field(default_factory=list)


# =============================================================================
# Partitioning
# =============================================================================


def partition(statements: Sequence[Term], detection: Detection) -> Buckets:
    """Extract buckets in a fixed order, each from what the previous left.

    1. the archetype declaration (by identity)
    2. the first @moduledoc
    3. import/alias/require directives
    4. callbacks with their attached markers
    5. on_mount hooks (when the policy extracts hooks)
    6. attr/slot macros (when the policy extracts macros)
    """
    policy = detection.policy

    declaration_index = next(
        (i for i, s in enumerate(statements) if s is detection.declaration), None
    )
    if declaration_index is None:
        raise StyleInvariantError(
            f"{policy.sentinel} declaration was detected but is not part of the "
            "module body"
        )

    buckets = Buckets(declaration=statements[declaration_index])
    remaining: list[tuple[Term, Kind]] = []
    for index, statement in enumerate(statements):
        if index == declaration_index:
            continue
        kind = classify(statement, policy)
        if kind.is_moduledoc and not buckets.moduledoc:
            buckets.moduledoc.append(statement)
        else:
            remaining.append((statement, kind))

    directives = [(s, k) for s, k in remaining if k.tag is KindTag.DIRECTIVE]
    remaining = [(s, k) for s, k in remaining if k.tag is not KindTag.DIRECTIVE]
    buckets.directives = sort_by_rank(directives, DIRECTIVE_ORDER)

    units, others = attach_markers(remaining)
    buckets.callbacks = sort_callback_groups(units, policy.callback_order)

    for statement, kind in others:
        if kind.tag is KindTag.HOOK_DECLARATION and policy.extract_hooks:
            buckets.hooks.append(statement)
        elif kind.tag is KindTag.DECLARATION_MACRO and policy.extract_macros:
            buckets.macros.append(statement)
        else:
            buckets.others.append(statement)

    logger.debug(
        "Partitioned %s module: %d directives, %d hooks, %d callback groups, "
        "%d macros, %d other",
        policy.sentinel,
        len(buckets.directives),
        len(buckets.hooks),
        len(buckets.callbacks),
        len(buckets.macros),
        len(buckets.others),
    )
    return buckets


# =============================================================================
# Recombination
# =============================================================================


def default_moduledoc(declaration: Term) -> Node:
    """``@moduledoc false`` placed on the declaration's line."""
    line = declaration.meta.get("line") if isinstance(declaration, Node) else None
    return module_attr("moduledoc", literal(False, line=line), line=line)


def recombine(buckets: Buckets, detection: Detection) -> list[Term]:
    """Concatenate buckets in the policy's canonical order."""
    policy = detection.policy

    moduledoc = list(buckets.moduledoc)
    # Keyed on the input position of the declaration. A component whose `use`
    # was not first gets the marker on its next pass, then stays put.
    if not moduledoc and policy.synthesize_moduledoc and detection.index == 0:
        logger.debug("Adding @moduledoc false to %s module", policy.sentinel)
        moduledoc.append(default_moduledoc(buckets.declaration))

    leading = buckets.callbacks
    trailing: list[CallbackGroup] = []
    if policy.render_after_macros:
        leading = [g for g in buckets.callbacks if g.name != RENDER_CALLBACK]
        trailing = [g for g in buckets.callbacks if g.name == RENDER_CALLBACK]

    return [
        *moduledoc,
        buckets.declaration,
        *buckets.directives,
        *buckets.hooks,
        *flatten(leading),
        *buckets.macros,
        *flatten(trailing),
        *buckets.others,
    ]


# =============================================================================
# Entry points
# =============================================================================


def reorder_statements(
    statements: Sequence[Term],
    policies: Sequence[ArchetypePolicy] = DEFAULT_POLICIES,
) -> Sequence[Term]:
    """Return ``statements`` in canonical order for their archetype.

    When no statement declares a known archetype the input is returned
    as-is.
    """
    detection = detect(statements, policies)
    if detection is None:
        return statements
    return recombine(partition(statements, detection), detection)


def reorder_module(
    module: Node,
    policies: Sequence[ArchetypePolicy] = DEFAULT_POLICIES,
) -> Node:
    """Reorder the body of a ``defmodule`` node.

    Only the body statement list is replaced; the module name, do-block and
    every statement are carried over. Returns ``module`` itself when it is
    not a block-bodied module, declares no known archetype, or is already
    in canonical order.
    """
    statements = module_body(module)
    if statements is None:
        return module
    reordered = reorder_statements(statements, policies)
    if len(reordered) == len(statements) and all(
        a is b for a, b in zip(reordered, statements)
    ):
        return module
    return replace_module_body(module, list(reordered))
