"""Callback ordering rule for LiveView and LiveComponent modules.

Pipeline, leaf first:
- kinds: statement classification
- detector: archetype detection from the ``use`` declaration
- grouping: marker attachment and callback group ordering
- engine: bucket partitioning and recombination
"""

from .policy import (
    Archetype,
    ArchetypePolicy,
    PriorityTable,
    DIRECTIVE_ORDER,
    LIVE_VIEW_CALLBACK_ORDER,
    LIVE_COMPONENT_CALLBACK_ORDER,
    LIVE_VIEW_POLICY,
    LIVE_COMPONENT_POLICY,
    DEFAULT_POLICIES,
    policy_for,
)
from .kinds import Kind, KindTag, classify, declared_archetype
from .detector import Detection, detect
from .grouping import AttachmentUnit, CallbackGroup, attach_markers
from .engine import (
    Buckets,
    StyleInvariantError,
    partition,
    recombine,
    reorder_statements,
    reorder_module,
)

__all__ = [
    # Policies
    "Archetype",
    "ArchetypePolicy",
    "PriorityTable",
    "DIRECTIVE_ORDER",
    "LIVE_VIEW_CALLBACK_ORDER",
    "LIVE_COMPONENT_CALLBACK_ORDER",
    "LIVE_VIEW_POLICY",
    "LIVE_COMPONENT_POLICY",
    "DEFAULT_POLICIES",
    "policy_for",
    # Classification
    "Kind",
    "KindTag",
    "classify",
    "declared_archetype",
    "Detection",
    "detect",
    # Grouping
    "AttachmentUnit",
    "CallbackGroup",
    "attach_markers",
    # Engine
    "Buckets",
    "StyleInvariantError",
    "partition",
    "recombine",
    "reorder_statements",
    "reorder_module",
]
