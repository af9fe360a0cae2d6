"""Marker attachment and callback group ordering.

Metadata markers (``@impl true``, ``@doc "..."``) that directly precede a
callback travel with it. Markers in front of anything else stay where they
are relative to that statement.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..quoted import Term
from .kinds import Kind
from .policy import PriorityTable


@dataclass
class AttachmentUnit:
    """A callback clause with the markers written directly above it."""

    markers: list[Term]
    payload: Term
    name: str

    def statements(self) -> list[Term]:
        return [*self.markers, self.payload]


@dataclass
class CallbackGroup:
    """All clauses sharing one canonical name, in source order."""

    name: str
    units: list[AttachmentUnit] = field(default_factory=list)

    def statements(self) -> list[Term]:
        result: list[Term] = []
        for unit in self.units:
            result.extend(unit.statements())
        return result


def attach_markers(
    classified: Iterable[tuple[Term, Kind]],
) -> tuple[list[AttachmentUnit], list[tuple[Term, Kind]]]:
    """Split statements into callback units and everything else.

    Single forward pass. Pending markers attach to the next statement only
    if it is a callback; otherwise they are flushed, in order, together
    with that statement. Markers left over at the end are flushed too.
    """
    units: list[AttachmentUnit] = []
    others: list[tuple[Term, Kind]] = []
    pending: list[tuple[Term, Kind]] = []

    for statement, kind in classified:
        if kind.is_marker:
            pending.append((statement, kind))
        elif kind.is_callback:
            markers = [marker for marker, _ in pending]
            units.append(
                AttachmentUnit(markers=markers, payload=statement, name=kind.name)
            )
            pending = []
        else:
            others.extend(pending)
            others.append((statement, kind))
            pending = []

    others.extend(pending)
    return units, others


def group_callbacks(units: Sequence[AttachmentUnit]) -> list[CallbackGroup]:
    """Group units by canonical name, groups in order of first appearance."""
    groups: dict[str, CallbackGroup] = {}
    for unit in units:
        group = groups.get(unit.name)
        if group is None:
            group = groups[unit.name] = CallbackGroup(name=unit.name)
        group.units.append(unit)
    return list(groups.values())


def sort_callback_groups(
    units: Sequence[AttachmentUnit], order: PriorityTable
) -> list[CallbackGroup]:
    """Order callback groups by rank.

    ``sorted`` is stable, so groups sharing a rank keep discovery order
    (e.g. ``update`` and ``update_many`` in components).
    """
    return sorted(group_callbacks(units), key=lambda g: order.rank(g.name))


def sort_by_rank(
    classified: Iterable[tuple[Term, Kind]], order: PriorityTable
) -> list[Term]:
    """Stable sort of statements by the rank of their kind variant."""
    ranked = sorted(classified, key=lambda item: order.rank(item[1].variant))
    return [statement for statement, _ in ranked]


def flatten(groups: Iterable[CallbackGroup]) -> list[Term]:
    result: list[Term] = []
    for group in groups:
        result.extend(group.statements())
    return result
