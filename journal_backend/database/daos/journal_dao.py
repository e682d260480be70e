"""
Journal DAO

Purpose
-------
Data-access layer for `Journal` entities, the request context of every
page: lookups by id and by URL path, insert/update, and a cascading delete
that removes everything a journal owns.

Design
------
- Localized `name`, `description`, `announcements_introduction` and the
  additional `enable_announcements` flag live in `journal_settings`.
- `deleteById` cascades through the collaborator DAOs obtained from the
  registry: review forms, announcements, announcement types; then the
  journal's settings and row.
"""

import logging
from typing import Mapping, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from journal_backend.database.daos.base_dao import BaseDao
from journal_backend.database.daos.result_factory import DAOResultFactory, RangeInfo
from journal_backend.database.entities.association import AssocType
from journal_backend.database.entities.journal import Journal
from journal_backend.database.entities.tables import journal_settings, journals

logger = logging.getLogger(__name__)


class JournalDao(BaseDao):
    """
    Data Access Object (DAO) for `Journal` entities.
    """

    settings_table = journal_settings
    settings_id_column = "journal_id"

    def newDataObject(self) -> Journal:
        return Journal()

    def _fromRow(self, row: Mapping) -> Journal:
        journal = self.newDataObject()
        journal.id = row["journal_id"]
        journal.path = row["path"]
        journal.sequence = row["seq"]
        journal.primary_locale = row["primary_locale"]
        journal.enabled = bool(row["enabled"])
        return journal

    def getLocaleFieldNames(self):
        return ["name", "description", "announcements_introduction"]

    def getAdditionalFieldNames(self):
        return ["enable_announcements"]

    def fetchById(self, session: Session, journal_id: int) -> Optional[Journal]:
        row = self.retrieve(session, select(journals).where(journals.c.journal_id == int(journal_id))).mappings().first()
        return self.fromRow(session, row) if row else None

    def fetchByPath(self, session: Session, path: str) -> Optional[Journal]:
        """
        Fetch a journal by its URL path.

        Returns
        -------
        Journal | None
            The journal, or None if no journal uses `path`.
        """
        row = self.retrieve(session, select(journals).where(journals.c.path == path)).mappings().first()
        return self.fromRow(session, row) if row else None

    def fetchAll(self, session: Session, enabled_only: bool = False, range_info: Optional[RangeInfo] = None) -> DAOResultFactory:
        statement = select(journals).order_by(journals.c.seq, journals.c.journal_id)
        if enabled_only:
            statement = statement.where(journals.c.enabled == 1)
        return self.resultFactory(session, statement, range_info)

    def insertJournal(self, session: Session, journal: Journal) -> int:
        journal.id = self.insertRow(
            session,
            journals,
            {
                "path": journal.path,
                "seq": float(journal.sequence or 0),
                "primary_locale": journal.primary_locale,
                "enabled": 1 if journal.enabled else 0,
            },
        )
        self.updateLocaleFields(session, journal)
        logger.info(f"Inserted journal #{journal.id} ({journal.path})")
        return journal.id

    def updateJournal(self, session: Session, journal: Journal) -> bool:
        updated = self.execute(
            session,
            update(journals)
            .where(journals.c.journal_id == int(journal.id))
            .values(
                path=journal.path,
                seq=float(journal.sequence or 0),
                primary_locale=journal.primary_locale,
                enabled=1 if journal.enabled else 0,
            ),
        )
        if not updated:
            return False
        self.updateLocaleFields(session, journal)
        return True

    def deleteById(self, session: Session, journal_id: int) -> None:
        """
        Delete a journal and everything it owns.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        journal_id : int
            Id of the journal.
        """
        self.registry.get("ReviewFormDao").deleteByAssoc(session, AssocType.JOURNAL, journal_id)
        self.registry.get("AnnouncementDao").deleteByAssoc(session, AssocType.JOURNAL, journal_id)
        self.registry.get("AnnouncementTypeDao").deleteByContextId(session, journal_id)

        self.deleteSettings(session, int(journal_id))
        self.execute(session, delete(journals).where(journals.c.journal_id == int(journal_id)))
        logger.info(f"Deleted journal #{journal_id}")
