"""
Base DAO — shared persistence plumbing
======================================

Purpose
-------
Every concrete DAO derives from `BaseDao`, which provides:
- Statement execution with uniform error logging (`retrieve`, `execute`)
- Primary key capture on insert (`insertRow`)
- The settings-table extension: loading localized/additional fields into an
  entity after its main row was mapped (`fetchDataObjectSettings`) and
  rewriting them on insert/update (`updateDataObjectSettings`)
- Result factory construction for `fetchBy*` queries (`resultFactory`)

Design
------
- Methods take the active SQLAlchemy `Session` from the caller. No commit or
  rollback happens here; the transaction boundary belongs to the service
  layer (`@transactional`).
- Row mapping is split in two steps: `_fromRow(row)` is a pure mapping of a
  column-name → value row to an entity, and `fromRow(session, row)` adds the
  settings merge on top.
- Localized fields (`getLocaleFieldNames`) are stored one row per locale.
  Additional fields (`getAdditionalFieldNames`) are stored with the empty
  locale and a JSON-encoded value.

Error Handling
--------------
- Database errors are logged with the DAO name and re-raised; nothing is
  retried or swallowed.
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import Table, delete, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from journal_backend.database.daos.result_factory import DAOResultFactory, RangeInfo

logger = logging.getLogger(__name__)


class BaseDao:
    """
    Base class of all Data Access Objects.

    Attributes
    ----------
    settings_table : Table | None
        The entity's settings table, if it has one.
    settings_id_column : str | None
        Column of `settings_table` holding the entity id.
    """

    settings_table: Optional[Table] = None
    settings_id_column: Optional[str] = None

    def __init__(self, registry=None):
        """
        Parameters
        ----------
        registry : DAORegistry | None
            Container used to reach collaborator DAOs (e.g. for cascading deletes).
        """
        self.registry = registry

    # ------------------------------------------------------------------
    # Statement execution
    # ------------------------------------------------------------------
    def retrieve(self, session: Session, statement):
        """Run a SELECT and return the SQLAlchemy result."""
        try:
            return session.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"Error in {type(self).__name__}.retrieve. Error Message: {e}")
            raise

    def execute(self, session: Session, statement) -> int:
        """
        Run an INSERT/UPDATE/DELETE.

        Returns
        -------
        int
            Number of affected rows.
        """
        try:
            return session.execute(statement).rowcount
        except SQLAlchemyError as e:
            logger.error(f"Error in {type(self).__name__}.execute. Error Message: {e}")
            raise

    def insertRow(self, session: Session, table: Table, values: Dict[str, Any]) -> int:
        """
        Insert one row and return the storage generated primary key.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        table : Table
            Target table; must have a single-column autoincrement primary key.
        values : dict
            Column values, excluding the primary key.

        Returns
        -------
        int
            The generated primary key.
        """
        try:
            result = session.execute(insert(table).values(**values))
            return int(result.inserted_primary_key[0])
        except SQLAlchemyError as e:
            logger.error(f"Error in {type(self).__name__}.insertRow ({table.name}). Error Message: {e}")
            raise

    # ------------------------------------------------------------------
    # Entity construction
    # ------------------------------------------------------------------
    def newDataObject(self):
        """Construct a new, unsaved entity of the type this DAO manages."""
        raise NotImplementedError

    def _fromRow(self, row: Mapping):
        """Map a main-table row to an entity (no settings)."""
        raise NotImplementedError

    def fromRow(self, session: Session, row: Mapping):
        """
        Map a row to a fully populated entity.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session, used to read the settings table.
        row : Mapping
            Column name → raw value.

        Returns
        -------
        object
            The entity with its settings merged in.
        """
        data_object = self._fromRow(row)
        if self.settings_table is not None:
            self.fetchDataObjectSettings(
                session, self.settings_table, self.settings_id_column, data_object.id, data_object
            )
        return data_object

    def resultFactory(self, session: Session, statement, range_info: Optional[RangeInfo] = None) -> DAOResultFactory:
        """Wrap a SELECT in a lazy factory producing this DAO's entities."""
        return DAOResultFactory(
            session,
            statement,
            lambda row: self.fromRow(session, row),
            range_info,
            executor=lambda query: self.retrieve(session, query),
        )

    # ------------------------------------------------------------------
    # Settings table extension
    # ------------------------------------------------------------------
    def getLocaleFieldNames(self) -> List[str]:
        """Fields stored per locale in the settings table."""
        return []

    def getAdditionalFieldNames(self) -> List[str]:
        """Non-localized fields stored in the settings table."""
        return []

    def fetchDataObjectSettings(self, session: Session, table: Table, id_column: str, id_value: int, data_object):
        """
        Merge the settings rows of one entity into it.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        table : Table
            The settings table.
        id_column : str
            Column of `table` holding the entity id.
        id_value : int
            Id of the entity.
        data_object : object
            Entity receiving the values.

        Returns
        -------
        object
            The same entity.
        """
        localized = set(self.getLocaleFieldNames())
        additional = set(self.getAdditionalFieldNames())
        rows = self.retrieve(
            session,
            select(table.c.locale, table.c.setting_name, table.c.setting_value).where(table.c[id_column] == id_value),
        )
        for row in rows:
            if row.setting_name in localized:
                values = getattr(data_object, row.setting_name) or {}
                values[row.locale] = row.setting_value
                setattr(data_object, row.setting_name, values)
            elif row.setting_name in additional:
                value = json.loads(row.setting_value) if row.setting_value is not None else None
                setattr(data_object, row.setting_name, value)
            else:
                logger.debug(f"{type(self).__name__}: ignoring undeclared setting '{row.setting_name}' of {table.name} {id_value}")
        return data_object

    def updateDataObjectSettings(self, session: Session, table: Table, data_object, id_array: Dict[str, Any]) -> None:
        """
        Replace the settings rows of one entity.

        Every declared field is deleted (all locales) and its current values are
        inserted again; `None` values are not stored.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        table : Table
            The settings table.
        data_object : object
            Entity holding the values.
        id_array : dict
            Key columns identifying the entity, e.g. ``{"review_form_id": 3}``.
        """
        id_conditions = [table.c[column] == value for column, value in id_array.items()]

        for name in self.getLocaleFieldNames():
            self.execute(session, delete(table).where(*id_conditions, table.c.setting_name == name))
            for locale, value in (getattr(data_object, name) or {}).items():
                if value is None:
                    continue
                self.execute(
                    session,
                    insert(table).values(**id_array, locale=locale, setting_name=name, setting_value=value),
                )

        for name in self.getAdditionalFieldNames():
            self.execute(session, delete(table).where(*id_conditions, table.c.setting_name == name))
            value = getattr(data_object, name)
            if value is None:
                continue
            self.execute(
                session,
                insert(table).values(**id_array, locale="", setting_name=name, setting_value=json.dumps(value)),
            )

    def updateLocaleFields(self, session: Session, data_object) -> None:
        """Rewrite the settings rows of an entity in this DAO's settings table."""
        self.updateDataObjectSettings(
            session, self.settings_table, data_object, {self.settings_id_column: data_object.id}
        )

    def deleteSettings(self, session: Session, id_value: int) -> int:
        """Remove every settings row of an entity."""
        table = self.settings_table
        return self.execute(session, delete(table).where(table.c[self.settings_id_column] == id_value))
