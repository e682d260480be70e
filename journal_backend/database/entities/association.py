"""
Associations
============

Review forms and announcements point at their owner through a generic
``(assoc_type, assoc_id)`` pair. ``AssocType`` closes the set of owner kinds
and ``Association`` carries the pair as one value so call sites resolve the
owner explicitly instead of passing two loose integers around.
"""

from dataclasses import dataclass
from enum import IntEnum


class AssocType(IntEnum):
    """Kinds of parent an associated row can belong to."""
    JOURNAL = 1
    SUBMISSION = 2
    REVIEW_ASSIGNMENT = 3
    ANNOUNCEMENT = 4
    CATEGORY = 5


CONTEXT_ASSOC_TYPE = AssocType.JOURNAL
"""Association kind of the tenant (journal) owning announcements and review forms."""


@dataclass(frozen=True)
class Association:
    """
    Owner reference of an associated entity.

    Attributes
    ----------
    assoc_type : AssocType
        Kind of the owner.
    assoc_id : int
        Primary key of the owner row in the table implied by ``assoc_type``.
    """
    assoc_type: AssocType
    assoc_id: int

    @classmethod
    def of(cls, assoc_type: int, assoc_id: int) -> "Association":
        """Build an association from raw column values, rejecting unknown kinds."""
        return cls(AssocType(int(assoc_type)), int(assoc_id))

    @classmethod
    def journal(cls, journal_id: int) -> "Association":
        return cls(AssocType.JOURNAL, int(journal_id))
