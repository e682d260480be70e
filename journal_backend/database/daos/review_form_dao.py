"""
Review Form DAO

Purpose
-------
Data-access layer for `ReviewForm` entities:
- Fetch by id (optionally scoped to an owner), by owner, active forms by owner
- Insert / update / delete, including the localized `review_form_settings`
- Usage checks backed by review assignment aggregates
- Resequencing of the forms of one owner

Design
------
- Requires an active SQLAlchemy `Session` supplied by the caller.
- Every loaded form carries `complete_count` / `incomplete_count`, computed
  with correlated subqueries over `review_assignments` (declined assignments
  are not counted).
- Deleting a form deletes its elements first (through `ReviewFormElementDao`),
  then its settings, then the row.

Usage
-----
.. code-block:: python

    from sqlalchemy.orm import Session
    from journal_backend.database.config.connection_engine import connection_engine
    from journal_backend.database.daos.dao_registry import DAORegistry
    from journal_backend.database.entities.association import Association, AssocType

    registry = DAORegistry()
    dao = registry.get("ReviewFormDao")
    with Session(connection_engine) as session:
        form = dao.newDataObject()
        form.association = Association.journal(5)
        form.title = {"en": "Standard review"}
        dao.insertReviewForm(session, form)
        session.commit()

        forms = dao.fetchByAssocId(session, AssocType.JOURNAL, 5).toList()
"""

import logging
from typing import Mapping, Optional

from sqlalchemy import and_, func, select, update
from sqlalchemy.orm import Session

from journal_backend.database.daos.base_dao import BaseDao
from journal_backend.database.daos.result_factory import DAOResultFactory, RangeInfo
from journal_backend.database.entities.association import AssocType
from journal_backend.database.entities.review_form import ReviewForm
from journal_backend.database.entities.tables import review_assignments, review_form_settings, review_forms

logger = logging.getLogger(__name__)


class ReviewFormDao(BaseDao):
    """
    Data Access Object (DAO) for `ReviewForm` entities.
    """

    settings_table = review_form_settings
    settings_id_column = "review_form_id"

    def _selectReviewForms(self):
        """SELECT of review forms with their usage aggregates."""
        used_by = and_(
            review_assignments.c.declined != 1,
            review_assignments.c.review_form_id == review_forms.c.review_form_id,
        )
        complete_count = (
            select(func.count())
            .select_from(review_assignments)
            .where(used_by, review_assignments.c.date_completed.is_not(None))
            .scalar_subquery()
        )
        incomplete_count = (
            select(func.count())
            .select_from(review_assignments)
            .where(used_by, review_assignments.c.date_completed.is_(None))
            .scalar_subquery()
        )
        return select(
            review_forms,
            complete_count.label("complete_count"),
            incomplete_count.label("incomplete_count"),
        )

    def newDataObject(self) -> ReviewForm:
        return ReviewForm()

    def _fromRow(self, row: Mapping) -> ReviewForm:
        """
        Map a `review_forms` row (with aggregates) to a `ReviewForm`.

        Parameters
        ----------
        row : Mapping
            Column name → raw value.

        Returns
        -------
        ReviewForm
            The form without its localized fields.
        """
        review_form = self.newDataObject()
        review_form.id = row["review_form_id"]
        review_form.assoc_type = AssocType(row["assoc_type"])
        review_form.assoc_id = row["assoc_id"]
        review_form.sequence = row["seq"]
        review_form.active = bool(row["is_active"])
        review_form.complete_count = int(row.get("complete_count") or 0)
        review_form.incomplete_count = int(row.get("incomplete_count") or 0)
        return review_form

    def getLocaleFieldNames(self):
        return ["title", "description"]

    def fetchById(
        self,
        session: Session,
        review_form_id: int,
        assoc_type: Optional[int] = None,
        assoc_id: Optional[int] = None,
    ) -> Optional[ReviewForm]:
        """
        Fetch a review form by id.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        review_form_id : int
            Id of the form.
        assoc_type : int | None
            If given, the form must belong to an owner of this kind...
        assoc_id : int | None
            ...with this id.

        Returns
        -------
        ReviewForm | None
            The form, or None if it does not exist within the given scope.
        """
        statement = self._selectReviewForms().where(review_forms.c.review_form_id == int(review_form_id))
        if assoc_type is not None:
            statement = statement.where(
                review_forms.c.assoc_type == int(assoc_type),
                review_forms.c.assoc_id == (int(assoc_id) if assoc_id is not None else None),
            )
        row = self.retrieve(session, statement).mappings().first()
        return self.fromRow(session, row) if row else None

    def reviewFormExists(self, session: Session, review_form_id: int, assoc_type: int, assoc_id: int) -> bool:
        """Check if a review form with this id exists for the given owner."""
        row_count = self.retrieve(
            session,
            select(func.count()).select_from(review_forms).where(
                review_forms.c.review_form_id == int(review_form_id),
                review_forms.c.assoc_type == int(assoc_type),
                review_forms.c.assoc_id == int(assoc_id),
            ),
        ).scalar_one()
        return row_count == 1

    def unusedReviewFormExists(
        self,
        session: Session,
        review_form_id: int,
        assoc_type: Optional[int] = None,
        assoc_id: Optional[int] = None,
    ) -> bool:
        """
        Check that a review form exists and no review assignment uses it.

        Returns
        -------
        bool
            False if the form is missing (within the given scope) or either
            usage aggregate is non-zero.
        """
        review_form = self.fetchById(session, review_form_id, assoc_type, assoc_id)
        if not review_form:
            return False
        return not review_form.in_use

    def insertReviewForm(self, session: Session, review_form: ReviewForm) -> int:
        """
        Insert a new review form and its localized fields.

        Returns
        -------
        int
            The id assigned to `review_form`.
        """
        review_form.id = self.insertRow(
            session,
            review_forms,
            {
                "assoc_type": int(review_form.assoc_type),
                "assoc_id": int(review_form.assoc_id),
                "seq": 0 if review_form.sequence is None else float(review_form.sequence),
                "is_active": 1 if review_form.active else 0,
            },
        )
        self.updateLocaleFields(session, review_form)
        logger.info(f"Inserted review form #{review_form.id} for {review_form.assoc_type}/{review_form.assoc_id}")
        return review_form.id

    def updateReviewForm(self, session: Session, review_form: ReviewForm) -> bool:
        """
        Rewrite an existing review form and replace its localized fields.

        Returns
        -------
        bool
            True if the row exists and was rewritten.
        """
        updated = self.execute(
            session,
            update(review_forms)
            .where(review_forms.c.review_form_id == int(review_form.id))
            .values(
                assoc_type=int(review_form.assoc_type),
                assoc_id=int(review_form.assoc_id),
                seq=float(review_form.sequence or 0),
                is_active=1 if review_form.active else 0,
            ),
        )
        if not updated:
            return False
        self.updateLocaleFields(session, review_form)
        return True

    def deleteReviewForm(self, session: Session, review_form: ReviewForm) -> None:
        self.deleteById(session, review_form.id)

    def deleteById(self, session: Session, review_form_id: int) -> None:
        """
        Delete a review form, its elements and its settings.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        review_form_id : int
            Id of the form.
        """
        element_dao = self.registry.get("ReviewFormElementDao")
        element_dao.deleteByReviewFormId(session, review_form_id)

        self.deleteSettings(session, int(review_form_id))
        self.execute(session, review_forms.delete().where(review_forms.c.review_form_id == int(review_form_id)))
        logger.info(f"Deleted review form #{review_form_id}")

    def deleteByAssoc(self, session: Session, assoc_type: int, assoc_id: int) -> None:
        """Delete every review form of an owner."""
        review_form_ids = [review_form.id for review_form in self.fetchByAssocId(session, assoc_type, assoc_id)]
        for review_form_id in review_form_ids:
            self.deleteById(session, review_form_id)

    def fetchByAssocId(
        self,
        session: Session,
        assoc_type: int,
        assoc_id: int,
        range_info: Optional[RangeInfo] = None,
    ) -> DAOResultFactory:
        """
        Fetch the review forms of an owner, in sequence order.

        Returns
        -------
        DAOResultFactory
            Lazy result producing `ReviewForm` entities.
        """
        statement = (
            self._selectReviewForms()
            .where(review_forms.c.assoc_type == int(assoc_type), review_forms.c.assoc_id == int(assoc_id))
            .order_by(review_forms.c.seq, review_forms.c.review_form_id)
        )
        return self.resultFactory(session, statement, range_info)

    def fetchActiveByAssocId(
        self,
        session: Session,
        assoc_type: int,
        assoc_id: int,
        range_info: Optional[RangeInfo] = None,
    ) -> DAOResultFactory:
        """Fetch the active review forms of an owner, in sequence order."""
        statement = (
            self._selectReviewForms()
            .where(
                review_forms.c.assoc_type == int(assoc_type),
                review_forms.c.assoc_id == int(assoc_id),
                review_forms.c.is_active == 1,
            )
            .order_by(review_forms.c.seq, review_forms.c.review_form_id)
        )
        return self.resultFactory(session, statement, range_info)

    def resequenceReviewForms(self, session: Session, assoc_type: int, assoc_id: int) -> None:
        """
        Renumber the review forms of an owner 1..N in their current sequence order.
        """
        review_form_ids = self.retrieve(
            session,
            select(review_forms.c.review_form_id)
            .where(review_forms.c.assoc_type == int(assoc_type), review_forms.c.assoc_id == int(assoc_id))
            .order_by(review_forms.c.seq, review_forms.c.review_form_id),
        ).scalars().all()

        for sequence, review_form_id in enumerate(review_form_ids, start=1):
            self.execute(
                session,
                update(review_forms).where(review_forms.c.review_form_id == review_form_id).values(seq=sequence),
            )
