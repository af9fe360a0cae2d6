"""Archetype policies: which buckets apply and how callbacks are ranked.

Two archetypes are recognized from the module's ``use`` declaration:
- LIVE_VIEW (``use MyAppWeb, :live_view``): callbacks in rank order with
  ``render`` inline; ``on_mount`` hooks follow the module directives.
- LIVE_COMPONENT (``use MyAppWeb, :live_component``): callbacks in rank
  order, then ``attr``/``slot`` declarations, then ``render`` last.

Policies are immutable values handed to the engine per call. Nothing in
the engine reads module-level tables directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Archetype(str, Enum):
    """Module archetype, valued by its sentinel tag."""

    LIVE_VIEW = "live_view"
    LIVE_COMPONENT = "live_component"


@dataclass(frozen=True)
class PriorityTable:
    """Canonical callback name -> output rank (lower first).

    Names outside the table are not callbacks for this archetype.
    """

    ranks: Mapping[str, int]

    def __post_init__(self) -> None:
        object.__setattr__(self, "ranks", MappingProxyType(dict(self.ranks)))

    def __contains__(self, name: object) -> bool:
        return name in self.ranks

    def rank(self, name: str) -> int:
        return self.ranks[name]

    def names(self) -> list[str]:
        """Known names ordered by rank, declaration order on ties."""
        return sorted(self.ranks, key=self.ranks.__getitem__)


@dataclass(frozen=True)
class ArchetypePolicy:
    """Everything that differs between archetypes."""

    archetype: Archetype
    callback_order: PriorityTable
    extract_hooks: bool = False
    extract_macros: bool = False
    render_after_macros: bool = False
    synthesize_moduledoc: bool = False

    @property
    def sentinel(self) -> str:
        return self.archetype.value


DIRECTIVE_ORDER = PriorityTable({"import": 1, "alias": 2, "require": 3})

LIVE_VIEW_CALLBACK_ORDER = PriorityTable(
    {
        "mount": 1,
        "handle_params": 2,
        "handle_event": 3,
        "handle_info": 4,
        "handle_async": 5,
        "handle_call": 6,
        "handle_cast": 7,
        "update": 8,
        "terminate": 9,
        "render": 10,
    }
)

LIVE_COMPONENT_CALLBACK_ORDER = PriorityTable(
    {
        "mount": 1,
        "update": 2,
        # update_many is an alternative to update
        "update_many": 2,
        "handle_event": 3,
        "handle_async": 4,
        "render": 5,
    }
)

LIVE_VIEW_POLICY = ArchetypePolicy(
    archetype=Archetype.LIVE_VIEW,
    callback_order=LIVE_VIEW_CALLBACK_ORDER,
    extract_hooks=True,
)

LIVE_COMPONENT_POLICY = ArchetypePolicy(
    archetype=Archetype.LIVE_COMPONENT,
    callback_order=LIVE_COMPONENT_CALLBACK_ORDER,
    extract_macros=True,
    render_after_macros=True,
    synthesize_moduledoc=True,
)

DEFAULT_POLICIES: tuple[ArchetypePolicy, ...] = (
    LIVE_VIEW_POLICY,
    LIVE_COMPONENT_POLICY,
)


def policy_for(name: str) -> ArchetypePolicy:
    """Look up a default policy by archetype tag."""
    for policy in DEFAULT_POLICIES:
        if policy.sentinel == name:
            return policy
    valid = ", ".join(p.sentinel for p in DEFAULT_POLICIES)
    raise ValueError(f"Unknown style {name!r}. Valid styles: {valid}")
