"""
Journal Entity
==============

The ``Journal`` is the tenant every request runs under. Its URL ``path``
identifies it in routes; most page data is scoped by its id.
"""

from dataclasses import dataclass, field
from typing import Optional

from journal_backend.database.entities.association import Association
from journal_backend.database.entities.localization import LocalizedText


@dataclass
class Journal:
    """
    A journal (request context).

    Attributes
    ----------
    id : int | None
        Primary key. ``None`` until inserted.
    path : str
        URL path segment, unique across journals.
    sequence : float
        Ordering key on the site index.
    primary_locale : str
        Locale used when a localized value is missing in the requested one.
    enabled : bool
        Whether the journal is publicly visible.
    enable_announcements : bool
        Whether the public announcement pages are available.
    name : dict[str, str]
        Localized journal name.
    description : dict[str, str]
        Localized description.
    announcements_introduction : dict[str, str]
        Localized text shown above the announcement list.
    """
    id: Optional[int] = None
    path: str = ""
    sequence: float = 0
    primary_locale: str = "en"
    enabled: bool = True
    enable_announcements: bool = False
    name: LocalizedText = field(default_factory=dict)
    description: LocalizedText = field(default_factory=dict)
    announcements_introduction: LocalizedText = field(default_factory=dict)

    @property
    def association(self) -> Association:
        """The journal as the owner of associated rows."""
        return Association.journal(self.id)

    def __str__(self) -> str:
        return f"Journal: id:{self.id}, path: {self.path}, enabled: {self.enabled}"
