"""
Announcement DAO

Purpose
-------
Data-access layer for `Announcement` entities:
- Fetch by id (optionally scoped to an owner), by owner, by type
- Insert / update / delete, including the localized `announcement_settings`

Design
------
- Requires an active SQLAlchemy `Session` supplied by the caller.
- Queries do NOT filter expired announcements. Callers decide what is
  visible (see `Announcement.is_expired`), so management pages can still
  list expired items.
- Announcements are listed newest first.
"""

import logging
from datetime import datetime
from typing import Mapping, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from journal_backend.database.daos.base_dao import BaseDao
from journal_backend.database.daos.result_factory import DAOResultFactory, RangeInfo
from journal_backend.database.entities.announcement import Announcement
from journal_backend.database.entities.association import AssocType
from journal_backend.database.entities.tables import announcement_settings, announcements

logger = logging.getLogger(__name__)


class AnnouncementDao(BaseDao):
    """
    Data Access Object (DAO) for `Announcement` entities.
    """

    settings_table = announcement_settings
    settings_id_column = "announcement_id"

    def newDataObject(self) -> Announcement:
        return Announcement()

    def _fromRow(self, row: Mapping) -> Announcement:
        announcement = self.newDataObject()
        announcement.id = row["announcement_id"]
        announcement.assoc_type = AssocType(row["assoc_type"]) if row["assoc_type"] is not None else None
        announcement.assoc_id = row["assoc_id"]
        announcement.type_id = row["type_id"]
        announcement.date_expire = row["date_expire"]
        announcement.date_posted = row["date_posted"]
        return announcement

    def getLocaleFieldNames(self):
        return ["title", "description_short", "description"]

    def fetchById(
        self,
        session: Session,
        announcement_id: int,
        assoc_type: Optional[int] = None,
        assoc_id: Optional[int] = None,
    ) -> Optional[Announcement]:
        """
        Fetch an announcement by id.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        announcement_id : int
            Id of the announcement.
        assoc_type, assoc_id : int | None
            Optional owner the announcement must belong to.

        Returns
        -------
        Announcement | None
            The announcement, or None if it does not exist within the given scope.
        """
        statement = select(announcements).where(announcements.c.announcement_id == int(announcement_id))
        if assoc_type is not None:
            statement = statement.where(
                announcements.c.assoc_type == int(assoc_type),
                announcements.c.assoc_id == (int(assoc_id) if assoc_id is not None else None),
            )
        row = self.retrieve(session, statement).mappings().first()
        return self.fromRow(session, row) if row else None

    def fetchByAssocId(
        self,
        session: Session,
        assoc_type: int,
        assoc_id: int,
        range_info: Optional[RangeInfo] = None,
    ) -> DAOResultFactory:
        """Fetch the announcements of an owner, newest first (expired ones included)."""
        statement = (
            select(announcements)
            .where(announcements.c.assoc_type == int(assoc_type), announcements.c.assoc_id == int(assoc_id))
            .order_by(announcements.c.date_posted.desc(), announcements.c.announcement_id.desc())
        )
        return self.resultFactory(session, statement, range_info)

    def fetchByTypeId(self, session: Session, type_id: int, range_info: Optional[RangeInfo] = None) -> DAOResultFactory:
        statement = (
            select(announcements)
            .where(announcements.c.type_id == int(type_id))
            .order_by(announcements.c.date_posted.desc(), announcements.c.announcement_id.desc())
        )
        return self.resultFactory(session, statement, range_info)

    def insertAnnouncement(self, session: Session, announcement: Announcement) -> int:
        """
        Insert a new announcement and its localized fields.

        `date_posted` is set to the current time when empty.

        Returns
        -------
        int
            The id assigned to `announcement`.
        """
        if announcement.date_posted is None:
            announcement.date_posted = datetime.now().replace(microsecond=0)
        announcement.id = self.insertRow(
            session,
            announcements,
            {
                "assoc_type": int(announcement.assoc_type),
                "assoc_id": int(announcement.assoc_id),
                "type_id": announcement.type_id,
                "date_expire": announcement.date_expire,
                "date_posted": announcement.date_posted,
            },
        )
        self.updateLocaleFields(session, announcement)
        logger.info(f"Inserted announcement #{announcement.id}")
        return announcement.id

    def updateAnnouncement(self, session: Session, announcement: Announcement) -> bool:
        updated = self.execute(
            session,
            update(announcements)
            .where(announcements.c.announcement_id == int(announcement.id))
            .values(
                assoc_type=int(announcement.assoc_type),
                assoc_id=int(announcement.assoc_id),
                type_id=announcement.type_id,
                date_expire=announcement.date_expire,
                date_posted=announcement.date_posted,
            ),
        )
        if not updated:
            return False
        self.updateLocaleFields(session, announcement)
        return True

    def deleteAnnouncement(self, session: Session, announcement: Announcement) -> None:
        self.deleteById(session, announcement.id)

    def deleteById(self, session: Session, announcement_id: int) -> None:
        self.deleteSettings(session, int(announcement_id))
        self.execute(session, delete(announcements).where(announcements.c.announcement_id == int(announcement_id)))

    def deleteByTypeId(self, session: Session, type_id: int) -> None:
        """Delete every announcement classified under `type_id`."""
        announcement_ids = self.retrieve(
            session, select(announcements.c.announcement_id).where(announcements.c.type_id == int(type_id))
        ).scalars().all()
        for announcement_id in announcement_ids:
            self.deleteById(session, announcement_id)

    def deleteByAssoc(self, session: Session, assoc_type: int, assoc_id: int) -> None:
        """Delete every announcement of an owner."""
        announcement_ids = self.retrieve(
            session,
            select(announcements.c.announcement_id).where(
                announcements.c.assoc_type == int(assoc_type), announcements.c.assoc_id == int(assoc_id)
            ),
        ).scalars().all()
        for announcement_id in announcement_ids:
            self.deleteById(session, announcement_id)
