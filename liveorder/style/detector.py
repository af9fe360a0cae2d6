"""Archetype detection over a module's top-level statements."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..quoted import Term
from .kinds import declared_archetype
from .policy import ArchetypePolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Detection:
    """The matched policy and the declaration statement that named it."""

    policy: ArchetypePolicy
    declaration: Term
    index: int


def detect(
    statements: Sequence[Term],
    policies: Sequence[ArchetypePolicy],
) -> Detection | None:
    """Find the first ``use`` declaration whose tag matches a policy sentinel.

    Returns None when no statement names a known archetype. Does not
    modify ``statements``.
    """
    by_sentinel = {policy.sentinel: policy for policy in policies}
    for index, statement in enumerate(statements):
        tag = declared_archetype(statement)
        if tag is None:
            continue
        policy = by_sentinel.get(tag)
        if policy is not None:
            logger.debug("Detected %s archetype at statement %d", tag, index)
            return Detection(policy=policy, declaration=statement, index=index)
        logger.debug("Ignoring use declaration with unknown tag %r", tag)
    return None
