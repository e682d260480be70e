"""
Announcement Type DAO

Purpose
-------
Data-access layer for `AnnouncementType` entities. Types belong to a
journal through the typed `context_id` column.

Design
------
- Localized `name` lives in `announcement_type_settings`.
- Deleting a type deletes the announcements classified under it first
  (through `AnnouncementDao`), then the type's settings, then the row.
"""

import logging
from typing import Mapping, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from journal_backend.database.daos.base_dao import BaseDao
from journal_backend.database.daos.result_factory import DAOResultFactory, RangeInfo
from journal_backend.database.entities.announcement import AnnouncementType
from journal_backend.database.entities.tables import announcement_type_settings, announcement_types

logger = logging.getLogger(__name__)


class AnnouncementTypeDao(BaseDao):
    """
    Data Access Object (DAO) for `AnnouncementType` entities.
    """

    settings_table = announcement_type_settings
    settings_id_column = "type_id"

    def newDataObject(self) -> AnnouncementType:
        return AnnouncementType()

    def _fromRow(self, row: Mapping) -> AnnouncementType:
        announcement_type = self.newDataObject()
        announcement_type.id = row["type_id"]
        announcement_type.context_id = row["context_id"]
        return announcement_type

    def getLocaleFieldNames(self):
        return ["name"]

    def fetchById(self, session: Session, type_id: int, context_id: Optional[int] = None) -> Optional[AnnouncementType]:
        """
        Fetch an announcement type, optionally requiring it to belong to `context_id`.
        """
        statement = select(announcement_types).where(announcement_types.c.type_id == int(type_id))
        if context_id is not None:
            statement = statement.where(announcement_types.c.context_id == int(context_id))
        row = self.retrieve(session, statement).mappings().first()
        return self.fromRow(session, row) if row else None

    def fetchByContextId(self, session: Session, context_id: int, range_info: Optional[RangeInfo] = None) -> DAOResultFactory:
        statement = (
            select(announcement_types)
            .where(announcement_types.c.context_id == int(context_id))
            .order_by(announcement_types.c.type_id)
        )
        return self.resultFactory(session, statement, range_info)

    def insertAnnouncementType(self, session: Session, announcement_type: AnnouncementType) -> int:
        announcement_type.id = self.insertRow(
            session, announcement_types, {"context_id": int(announcement_type.context_id)}
        )
        self.updateLocaleFields(session, announcement_type)
        return announcement_type.id

    def updateAnnouncementType(self, session: Session, announcement_type: AnnouncementType) -> bool:
        updated = self.execute(
            session,
            update(announcement_types)
            .where(announcement_types.c.type_id == int(announcement_type.id))
            .values(context_id=int(announcement_type.context_id)),
        )
        if not updated:
            return False
        self.updateLocaleFields(session, announcement_type)
        return True

    def deleteById(self, session: Session, type_id: int) -> None:
        """Delete an announcement type together with its announcements."""
        self.registry.get("AnnouncementDao").deleteByTypeId(session, type_id)
        self.deleteSettings(session, int(type_id))
        self.execute(session, delete(announcement_types).where(announcement_types.c.type_id == int(type_id)))
        logger.info(f"Deleted announcement type #{type_id}")

    def deleteByContextId(self, session: Session, context_id: int) -> None:
        type_ids = self.retrieve(
            session,
            select(announcement_types.c.type_id).where(announcement_types.c.context_id == int(context_id)),
        ).scalars().all()
        for type_id in type_ids:
            self.deleteById(session, type_id)
