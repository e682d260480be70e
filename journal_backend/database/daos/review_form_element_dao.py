"""
Review Form Element DAO

Purpose
-------
Data-access layer for `ReviewFormElement` entities (the questions of a
review form): fetch, insert, update, delete, delete all elements of a form,
and resequence the elements of a form.

Design
------
- Requires an active SQLAlchemy `Session` supplied by the caller.
- Localized `question` / `description` live in `review_form_element_settings`;
  settings rows are always removed before their element row.
"""

import logging
from typing import Mapping, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from journal_backend.database.daos.base_dao import BaseDao
from journal_backend.database.daos.result_factory import DAOResultFactory, RangeInfo
from journal_backend.database.entities.review_form import ElementType, ReviewFormElement
from journal_backend.database.entities.tables import review_form_element_settings, review_form_elements

logger = logging.getLogger(__name__)


class ReviewFormElementDao(BaseDao):
    """
    Data Access Object (DAO) for `ReviewFormElement` entities.
    """

    settings_table = review_form_element_settings
    settings_id_column = "review_form_element_id"

    def newDataObject(self) -> ReviewFormElement:
        return ReviewFormElement()

    def _fromRow(self, row: Mapping) -> ReviewFormElement:
        element = self.newDataObject()
        element.id = row["review_form_element_id"]
        element.review_form_id = row["review_form_id"]
        element.sequence = row["seq"]
        element.element_type = ElementType(row["element_type"]) if row["element_type"] is not None else None
        element.required = bool(row["required"])
        element.included = bool(row["included"])
        return element

    def getLocaleFieldNames(self):
        return ["question", "description"]

    def fetchById(self, session: Session, element_id: int, review_form_id: Optional[int] = None) -> Optional[ReviewFormElement]:
        """
        Fetch an element by id, optionally requiring it to belong to `review_form_id`.
        """
        statement = select(review_form_elements).where(
            review_form_elements.c.review_form_element_id == int(element_id)
        )
        if review_form_id is not None:
            statement = statement.where(review_form_elements.c.review_form_id == int(review_form_id))
        row = self.retrieve(session, statement).mappings().first()
        return self.fromRow(session, row) if row else None

    def fetchByReviewFormId(
        self,
        session: Session,
        review_form_id: int,
        range_info: Optional[RangeInfo] = None,
    ) -> DAOResultFactory:
        """Fetch the elements of a review form in sequence order."""
        statement = (
            select(review_form_elements)
            .where(review_form_elements.c.review_form_id == int(review_form_id))
            .order_by(review_form_elements.c.seq, review_form_elements.c.review_form_element_id)
        )
        return self.resultFactory(session, statement, range_info)

    def insertReviewFormElement(self, session: Session, element: ReviewFormElement) -> int:
        """
        Insert a new element and its localized fields.

        Returns
        -------
        int
            The id assigned to `element`.
        """
        element.id = self.insertRow(
            session,
            review_form_elements,
            {
                "review_form_id": int(element.review_form_id),
                "seq": 0 if element.sequence is None else float(element.sequence),
                "element_type": int(element.element_type) if element.element_type is not None else None,
                "required": 1 if element.required else 0,
                "included": 1 if element.included else 0,
            },
        )
        self.updateLocaleFields(session, element)
        return element.id

    def updateReviewFormElement(self, session: Session, element: ReviewFormElement) -> bool:
        updated = self.execute(
            session,
            update(review_form_elements)
            .where(review_form_elements.c.review_form_element_id == int(element.id))
            .values(
                review_form_id=int(element.review_form_id),
                seq=float(element.sequence or 0),
                element_type=int(element.element_type) if element.element_type is not None else None,
                required=1 if element.required else 0,
                included=1 if element.included else 0,
            ),
        )
        if not updated:
            return False
        self.updateLocaleFields(session, element)
        return True

    def deleteById(self, session: Session, element_id: int) -> None:
        self.deleteSettings(session, int(element_id))
        self.execute(
            session,
            delete(review_form_elements).where(review_form_elements.c.review_form_element_id == int(element_id)),
        )

    def deleteByReviewFormId(self, session: Session, review_form_id: int) -> None:
        """
        Delete every element of a review form, settings first.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        review_form_id : int
            The owning review form.
        """
        element_ids = self.retrieve(
            session,
            select(review_form_elements.c.review_form_element_id).where(
                review_form_elements.c.review_form_id == int(review_form_id)
            ),
        ).scalars().all()
        for element_id in element_ids:
            self.deleteById(session, element_id)
        if element_ids:
            logger.debug(f"Deleted {len(element_ids)} elements of review form #{review_form_id}")

    def resequenceReviewFormElements(self, session: Session, review_form_id: int) -> None:
        """Renumber the elements of a review form 1..N in their current order."""
        element_ids = self.retrieve(
            session,
            select(review_form_elements.c.review_form_element_id)
            .where(review_form_elements.c.review_form_id == int(review_form_id))
            .order_by(review_form_elements.c.seq, review_form_elements.c.review_form_element_id),
        ).scalars().all()

        for sequence, element_id in enumerate(element_ids, start=1):
            self.execute(
                session,
                update(review_form_elements)
                .where(review_form_elements.c.review_form_element_id == element_id)
                .values(seq=sequence),
            )
