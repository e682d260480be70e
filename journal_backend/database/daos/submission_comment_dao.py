"""
Submission Comment DAO

Purpose
-------
Data-access layer for `SubmissionComment` entities: comments exchanged
about a submission during peer review, editing and production.

Design
------
- Comments have no settings table; every field lives in `submission_comments`.
- Loaded comments carry the author's name and e-mail, resolved with a LEFT
  JOIN on `users` (empty strings when the user row is gone).
- Comments are listed oldest first, the order of the workflow.
- A submission belongs to one journal (`submissions.context_id`);
  `submissionExists` is the check callers scope comment access with.
"""

import logging
from datetime import datetime
from typing import Mapping, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from journal_backend.database.daos.base_dao import BaseDao
from journal_backend.database.daos.result_factory import DAOResultFactory, RangeInfo
from journal_backend.database.entities.submission_comment import CommentType, SubmissionComment
from journal_backend.database.entities.tables import submission_comments, submissions, users

logger = logging.getLogger(__name__)


class SubmissionCommentDao(BaseDao):
    """
    Data Access Object (DAO) for `SubmissionComment` entities.
    """

    def _selectComments(self):
        """SELECT of comments joined with their author."""
        return select(
            submission_comments,
            users.c.given_name.label("author_given_name"),
            users.c.family_name.label("author_family_name"),
            users.c.email.label("author_email"),
        ).select_from(
            submission_comments.outerjoin(users, users.c.user_id == submission_comments.c.author_id)
        )

    def newDataObject(self) -> SubmissionComment:
        return SubmissionComment()

    def _fromRow(self, row: Mapping) -> SubmissionComment:
        comment = self.newDataObject()
        comment.id = row["comment_id"]
        comment.comment_type = CommentType(row["comment_type"]) if row["comment_type"] is not None else None
        comment.role_id = row["role_id"]
        comment.submission_id = row["submission_id"]
        comment.assoc_id = row["assoc_id"]
        comment.author_id = row["author_id"]
        comment.comment_title = row["comment_title"]
        comment.comments = row["comments"]
        comment.date_posted = row["date_posted"]
        comment.date_modified = row["date_modified"]
        comment.viewable = bool(row["viewable"])

        name_parts = [row.get("author_given_name"), row.get("author_family_name")]
        comment.author_name = " ".join(part for part in name_parts if part)
        comment.author_email = row.get("author_email") or ""
        return comment

    def _rowValues(self, comment: SubmissionComment) -> dict:
        return {
            "comment_type": int(comment.comment_type) if comment.comment_type is not None else None,
            "role_id": int(comment.role_id),
            "submission_id": int(comment.submission_id),
            "assoc_id": int(comment.assoc_id),
            "author_id": int(comment.author_id),
            "comment_title": comment.comment_title,
            "comments": comment.comments,
            "date_posted": comment.date_posted,
            "date_modified": comment.date_modified,
            "viewable": 1 if comment.viewable else 0,
        }

    def submissionExists(self, session: Session, submission_id: int, context_id: int) -> bool:
        """True if the submission exists and belongs to the journal `context_id`."""
        statement = select(submissions.c.submission_id).where(
            submissions.c.submission_id == int(submission_id),
            submissions.c.context_id == int(context_id),
        )
        return self.retrieve(session, statement).first() is not None

    def fetchById(self, session: Session, comment_id: int, submission_id: Optional[int] = None) -> Optional[SubmissionComment]:
        """
        Fetch a comment, optionally requiring it to belong to `submission_id`.
        """
        statement = self._selectComments().where(submission_comments.c.comment_id == int(comment_id))
        if submission_id is not None:
            statement = statement.where(submission_comments.c.submission_id == int(submission_id))
        row = self.retrieve(session, statement).mappings().first()
        return self.fromRow(session, row) if row else None

    def fetchBySubmissionId(
        self,
        session: Session,
        submission_id: int,
        comment_type: Optional[int] = None,
        assoc_id: Optional[int] = None,
        range_info: Optional[RangeInfo] = None,
    ) -> DAOResultFactory:
        """
        Fetch the comments of a submission.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        submission_id : int
            The submission.
        comment_type : int | None
            Restrict to one workflow stage.
        assoc_id : int | None
            Restrict to one stage specific owner (e.g. a review assignment).
        range_info : RangeInfo | None
            Optional page.

        Returns
        -------
        DAOResultFactory
            Lazy result producing `SubmissionComment` entities, oldest first.
        """
        statement = self._selectComments().where(submission_comments.c.submission_id == int(submission_id))
        if comment_type is not None:
            statement = statement.where(submission_comments.c.comment_type == int(comment_type))
        if assoc_id is not None:
            statement = statement.where(submission_comments.c.assoc_id == int(assoc_id))
        statement = statement.order_by(submission_comments.c.date_posted, submission_comments.c.comment_id)
        return self.resultFactory(session, statement, range_info)

    def fetchByAuthorId(self, session: Session, author_id: int, range_info: Optional[RangeInfo] = None) -> DAOResultFactory:
        statement = (
            self._selectComments()
            .where(submission_comments.c.author_id == int(author_id))
            .order_by(submission_comments.c.date_posted, submission_comments.c.comment_id)
        )
        return self.resultFactory(session, statement, range_info)

    def insertSubmissionComment(self, session: Session, comment: SubmissionComment) -> int:
        """
        Insert a new comment. `date_posted` is set to the current time when empty.

        Returns
        -------
        int
            The id assigned to `comment`.
        """
        if comment.date_posted is None:
            comment.date_posted = datetime.now().replace(microsecond=0)
        comment.id = self.insertRow(session, submission_comments, self._rowValues(comment))
        logger.debug(f"Inserted comment #{comment.id} on submission #{comment.submission_id}")
        return comment.id

    def updateSubmissionComment(self, session: Session, comment: SubmissionComment) -> bool:
        comment.date_modified = datetime.now().replace(microsecond=0)
        updated = self.execute(
            session,
            update(submission_comments)
            .where(submission_comments.c.comment_id == int(comment.id))
            .values(**self._rowValues(comment)),
        )
        return bool(updated)

    def deleteSubmissionComment(self, session: Session, comment: SubmissionComment) -> None:
        self.deleteById(session, comment.id)

    def deleteById(self, session: Session, comment_id: int) -> None:
        self.execute(session, delete(submission_comments).where(submission_comments.c.comment_id == int(comment_id)))

    def deleteBySubmissionId(self, session: Session, submission_id: int) -> int:
        """
        Delete every comment of a submission.

        Returns
        -------
        int
            Number of deleted comments.
        """
        deleted = self.execute(
            session,
            delete(submission_comments).where(submission_comments.c.submission_id == int(submission_id)),
        )
        logger.info(f"Deleted {deleted} comments of submission #{submission_id}")
        return deleted
