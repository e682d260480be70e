"""
Announcement Entities
=====================

Journals publish ``Announcement`` records, optionally classified by an
``AnnouncementType``. Announcements are owned through the generic
``assoc_type`` / ``assoc_id`` pair; announcement types reference their
journal directly through ``context_id``.

Expiry is evaluated in application code (``Announcement.is_expired``) so the
public pages can filter stale announcements after loading them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from journal_backend.database.entities.association import Association, AssocType
from journal_backend.database.entities.localization import LocalizedText


@dataclass
class AnnouncementType:
    """
    A journal-specific announcement category.

    Attributes
    ----------
    id : int | None
        Primary key. ``None`` until inserted.
    context_id : int | None
        Id of the owning journal.
    name : dict[str, str]
        Localized type name.
    """
    id: Optional[int] = None
    context_id: Optional[int] = None
    name: LocalizedText = field(default_factory=dict)

    def __str__(self) -> str:
        return f"AnnouncementType: id:{self.id}, context: {self.context_id}"


@dataclass
class Announcement:
    """
    A news item published by a journal.

    Attributes
    ----------
    id : int | None
        Primary key. ``None`` until inserted.
    assoc_type : AssocType | None
        Kind of the owner, normally ``AssocType.JOURNAL``.
    assoc_id : int | None
        Id of the owner.
    type_id : int | None
        Optional ``AnnouncementType`` id.
    date_expire : datetime | None
        Moment after which the announcement is no longer shown. ``None``
        means it never expires.
    date_posted : datetime | None
        Publication timestamp; set to the current time on insert when empty.
    title : dict[str, str]
        Localized title.
    description_short : dict[str, str]
        Localized summary shown on the listing page.
    description : dict[str, str]
        Localized full text.
    """
    id: Optional[int] = None
    assoc_type: Optional[AssocType] = None
    assoc_id: Optional[int] = None
    type_id: Optional[int] = None
    date_expire: Optional[datetime] = None
    date_posted: Optional[datetime] = None
    title: LocalizedText = field(default_factory=dict)
    description_short: LocalizedText = field(default_factory=dict)
    description: LocalizedText = field(default_factory=dict)

    @property
    def association(self) -> Association:
        return Association.of(self.assoc_type, self.assoc_id)

    @association.setter
    def association(self, association: Association) -> None:
        self.assoc_type = association.assoc_type
        self.assoc_id = association.assoc_id

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """
        Whether the announcement has expired.

        Parameters
        ----------
        now : datetime | None
            Reference time; defaults to the current local time.

        Returns
        -------
        bool
            False when ``date_expire`` is empty or lies after ``now``.
        """
        if self.date_expire is None:
            return False
        return self.date_expire <= (now or datetime.now())

    def belongs_to(self, association: Association) -> bool:
        """True if the announcement is owned by ``association``."""
        return self.assoc_type == association.assoc_type and self.assoc_id == association.assoc_id

    def __str__(self) -> str:
        return (
            f"Announcement: id:{self.id}, assoc: {self.assoc_type}/{self.assoc_id}, "
            f"posted: {self.date_posted}, expires: {self.date_expire}"
        )
