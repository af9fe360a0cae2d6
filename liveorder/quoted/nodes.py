"""Term types for quoted-form module trees.

A tree is built from a handful of term shapes:
- Atom: symbolic constant (``:live_view``)
- Node: a form with a head, metadata and arguments
- 2-tuples: pairs, used for keyword lists and do-blocks
- lists and scalar literals (str, int, float, bool, None)

Nodes are treated as immutable values. Reordering moves existing Node
objects around; it never copies or edits them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class Atom:
    """A symbolic constant."""

    name: str

    def __repr__(self) -> str:
        return f":{self.name}"


@dataclass(frozen=True, eq=True)
class Node:
    """A quoted form: ``head(args...)`` plus metadata.

    ``args`` is None for bare variable references (``socket``) and a tuple
    for calls, including zero-argument calls.
    """

    head: Any
    meta: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)
    args: tuple | None = ()

    @property
    def name(self) -> str | None:
        """Head name when the head is a plain identifier."""
        return self.head if isinstance(self.head, str) else None

    def with_args(self, args: tuple) -> "Node":
        """Return a copy of this node with new args and the same metadata."""
        return Node(head=self.head, meta=self.meta, args=tuple(args))

    def __repr__(self) -> str:
        if self.args is None:
            return f"{self.head}"
        inner = ", ".join(repr(a) for a in self.args)
        return f"{self.head}({inner})"


Term = Union[Node, Atom, tuple, list, str, int, float, bool, None]
