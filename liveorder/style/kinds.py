"""Statement classification.

Every top-level statement gets exactly one Kind. Shapes are checked in a
fixed precedence order so a statement that looks like two kinds at once
always lands in the same bucket:

    archetype declaration > metadata marker > directive > callback
    > hook declaration > declaration macro > opaque
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..quoted import Atom, Node, Term, keyword_get, literal_value
from .policy import ArchetypePolicy, DIRECTIVE_ORDER

DIRECTIVE_FORMS = frozenset(DIRECTIVE_ORDER.ranks)
MACRO_FORMS = frozenset({"attr", "slot"})
HOOK_FORM = "on_mount"
CALLBACK_FORM = "def"


class KindTag(str, Enum):
    ARCHETYPE_DECLARATION = "archetype_declaration"
    METADATA_MARKER = "metadata_marker"
    DIRECTIVE = "directive"
    CALLBACK = "callback"
    HOOK_DECLARATION = "hook_declaration"
    DECLARATION_MACRO = "declaration_macro"
    OPAQUE = "opaque"


@dataclass(frozen=True)
class Kind:
    """Classification result.

    ``variant`` holds the directive form (import/alias/require), the macro
    form (attr/slot) or the marker name (moduledoc, doc, impl, ...).
    ``name`` and ``guarded`` are set for callbacks only.
    """

    tag: KindTag
    variant: str | None = None
    name: str | None = None
    guarded: bool = False

    @property
    def is_callback(self) -> bool:
        return self.tag is KindTag.CALLBACK

    @property
    def is_marker(self) -> bool:
        return self.tag is KindTag.METADATA_MARKER

    @property
    def is_moduledoc(self) -> bool:
        return self.is_marker and self.variant == "moduledoc"

    def describe(self) -> str:
        """Short human-readable label, used by the detect command."""
        if self.tag is KindTag.CALLBACK:
            suffix = " (guarded)" if self.guarded else ""
            return f"callback {self.name}{suffix}"
        if self.variant:
            return f"{self.tag.value} {self.variant}"
        return self.tag.value


OPAQUE = Kind(KindTag.OPAQUE)


def declared_archetype(statement: Term) -> str | None:
    """Tag named by a ``use Target, tag`` statement, if it is one.

    The tag may be a bare atom (``:live_view``), an atom wrapped in a
    literal block, or a keyword list carrying it under ``do``.
    """
    if not isinstance(statement, Node) or statement.head != "use":
        return None
    if statement.args is None or len(statement.args) != 2:
        return None
    target, options = statement.args
    if not (isinstance(target, Node) and target.head == "__aliases__"):
        return None

    if isinstance(options, list):
        tag = literal_value(keyword_get(options, "do"))
    else:
        tag = literal_value(options)
    if isinstance(tag, Atom):
        return tag.name
    return None


def callback_signature(statement: Term) -> tuple[str, bool] | None:
    """(name, guarded) for a public ``def`` clause, else None."""
    if not isinstance(statement, Node) or statement.head != CALLBACK_FORM:
        return None
    if not statement.args:
        return None
    head = statement.args[0]
    guarded = False
    if isinstance(head, Node) and head.head == "when" and head.args:
        head = head.args[0]
        guarded = True
    if isinstance(head, Node) and isinstance(head.head, str):
        return head.head, guarded
    return None


def marker_name(statement: Term) -> str | None:
    """Name of an ``@name ...`` module attribute."""
    if not isinstance(statement, Node) or statement.head != "@":
        return None
    if not statement.args or len(statement.args) != 1:
        return None
    inner = statement.args[0]
    if isinstance(inner, Node) and isinstance(inner.head, str):
        return inner.head
    return None


def classify(
    statement: Term,
    policy: ArchetypePolicy,
    declaration: Term | None = None,
) -> Kind:
    """Classify one statement under ``policy``.

    ``declaration`` is the statement the detector picked; it is matched by
    identity so that other ``use`` statements stay opaque.
    """
    if declaration is not None and statement is declaration:
        return Kind(KindTag.ARCHETYPE_DECLARATION, variant=policy.sentinel)

    if (name := marker_name(statement)) is not None:
        return Kind(KindTag.METADATA_MARKER, variant=name)

    if not isinstance(statement, Node) or not isinstance(statement.head, str):
        return OPAQUE

    if statement.head in DIRECTIVE_FORMS and statement.args is not None:
        return Kind(KindTag.DIRECTIVE, variant=statement.head)

    signature = callback_signature(statement)
    if signature is not None and signature[0] in policy.callback_order:
        return Kind(KindTag.CALLBACK, name=signature[0], guarded=signature[1])

    if statement.head == HOOK_FORM and statement.args is not None:
        if policy.extract_hooks:
            return Kind(KindTag.HOOK_DECLARATION, variant=HOOK_FORM)
        return OPAQUE

    if statement.head in MACRO_FORMS and statement.args is not None:
        if policy.extract_macros:
            return Kind(KindTag.DECLARATION_MACRO, variant=statement.head)
        return OPAQUE

    return OPAQUE
