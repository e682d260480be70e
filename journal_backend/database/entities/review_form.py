"""
Review Form Entities
====================

``ReviewForm`` is a questionnaire a journal attaches to peer reviews; each
question is a ``ReviewFormElement``. Both are plain records built by their
DAO (``ReviewFormDao`` / ``ReviewFormElementDao``).

Key features
~~~~~~~~~~~~
- Integer primary key (``id``), ``None`` until inserted
- Owner reference through ``assoc_type`` / ``assoc_id`` (usually a journal)
- Floating point ``sequence`` ordering siblings of the same owner
- Localized ``title`` and ``description`` kept in ``review_form_settings``
- Read-only usage aggregates (``complete_count`` / ``incomplete_count``)
  computed from review assignments when the form is loaded

"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

from journal_backend.database.entities.association import Association, AssocType
from journal_backend.database.entities.localization import LocalizedText


@dataclass
class ReviewForm:
    """
    A review form owned by an associated object.

    Attributes
    ----------
    id : int | None
        Primary key. ``None`` until the form has been inserted.
    assoc_type : AssocType | None
        Kind of the owner (e.g. ``AssocType.JOURNAL``).
    assoc_id : int | None
        Id of the owner.
    sequence : float | None
        Ordering key among the owner's review forms. Stored as 0 when unset.
    active : bool
        Whether reviewers may be assigned this form.
    complete_count : int
        Completed, non-declined review assignments using this form.
    incomplete_count : int
        Open, non-declined review assignments using this form.
    title : dict[str, str]
        Localized title.
    description : dict[str, str]
        Localized description.
    """
    id: Optional[int] = None
    assoc_type: Optional[AssocType] = None
    assoc_id: Optional[int] = None
    sequence: Optional[float] = None
    active: bool = False
    complete_count: int = 0
    incomplete_count: int = 0
    title: LocalizedText = field(default_factory=dict)
    description: LocalizedText = field(default_factory=dict)

    @property
    def association(self) -> Association:
        """Owner of the form as a single value."""
        return Association.of(self.assoc_type, self.assoc_id)

    @association.setter
    def association(self, association: Association) -> None:
        self.assoc_type = association.assoc_type
        self.assoc_id = association.assoc_id

    @property
    def in_use(self) -> bool:
        """True once any non-declined review assignment references the form."""
        return self.complete_count != 0 or self.incomplete_count != 0

    def __str__(self) -> str:
        return (
            f"ReviewForm: id:{self.id}, assoc: {self.assoc_type}/{self.assoc_id}, "
            f"seq: {self.sequence}, active: {self.active}"
        )


class ElementType(IntEnum):
    """Input widget of a review form element."""
    SMALL_TEXT_FIELD = 1
    TEXT_FIELD = 2
    TEXTAREA = 3
    CHECKBOXES = 4
    RADIO_BUTTONS = 5
    DROP_DOWN_BOX = 6


@dataclass
class ReviewFormElement:
    """
    A single question of a review form.

    Attributes
    ----------
    id : int | None
        Primary key. ``None`` until inserted.
    review_form_id : int | None
        The owning review form.
    sequence : float | None
        Ordering key among the form's elements.
    element_type : ElementType | None
        Input widget.
    required : bool
        Whether reviewers must answer.
    included : bool
        Whether the answer is shared with the author.
    question : dict[str, str]
        Localized question text.
    description : dict[str, str]
        Localized help text.
    """
    id: Optional[int] = None
    review_form_id: Optional[int] = None
    sequence: Optional[float] = None
    element_type: Optional[ElementType] = None
    required: bool = False
    included: bool = False
    question: LocalizedText = field(default_factory=dict)
    description: LocalizedText = field(default_factory=dict)

    def __str__(self) -> str:
        return f"ReviewFormElement: id:{self.id}, form: {self.review_form_id}, seq: {self.sequence}"
