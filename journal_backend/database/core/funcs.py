"""
Service-layer operations for journals, announcements, review forms and
submission comments.

All functions are wrapped with the `@transactional` decorator, which manages
SQLAlchemy sessions and transactions automatically. Each function accepts (and
uses) an injected `session: Session` provided by the decorator, and the
application's `DAORegistry` as the `registry` keyword argument. Call them with
keyword arguments only.

This module orchestrates DAO calls; it holds no SQL of its own.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from journal_backend.database.daos.dao_registry import DAORegistry
from journal_backend.database.entities.announcement import Announcement
from journal_backend.database.entities.association import Association
from journal_backend.database.entities.journal import Journal
from journal_backend.database.entities.review_form import ReviewForm, ReviewFormElement
from journal_backend.database.entities.submission_comment import SubmissionComment
from journal_backend.database.helpers.transactionManagement import transactional

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Journals
# ----------------------------------------------------------------------
@transactional
def get_journal_by_path(session: Session, registry: DAORegistry, path: str) -> Optional[Journal]:
    """
    Resolve the request context from its URL path.

    Returns
    -------
    Journal | None
        The journal, or None if the path is unknown or the journal is disabled.
    """
    journal = registry.get("JournalDao").fetchByPath(session, path)
    if journal is None or not journal.enabled:
        return None
    return journal


@transactional
def create_journal(session: Session, registry: DAORegistry, journal: Journal) -> Journal:
    registry.get("JournalDao").insertJournal(session, journal)
    return journal


# ----------------------------------------------------------------------
# Announcements
# ----------------------------------------------------------------------
@transactional
def get_current_announcements(
    session: Session,
    registry: DAORegistry,
    journal: Journal,
    now: Optional[datetime] = None,
) -> List[Announcement]:
    """
    List the announcements of a journal that have not expired yet.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session (injected by @transactional).
    registry : DAORegistry
        Application DAO registry.
    journal : Journal
        The request context.
    now : datetime | None
        Reference time for the expiry check; defaults to the current time.

    Returns
    -------
    list[Announcement]
        Non-expired announcements, newest first. Expiry is checked in
        application code, so the listing is not paginated.
    """
    now = now or datetime.now()
    result = registry.get("AnnouncementDao").fetchByAssocId(
        session, journal.association.assoc_type, journal.id
    )
    return [announcement for announcement in result if not announcement.is_expired(now)]


@transactional
def get_announcement(session: Session, registry: DAORegistry, announcement_id: int) -> Optional[Announcement]:
    return registry.get("AnnouncementDao").fetchById(session, announcement_id)


@transactional
def get_journal_announcements(session: Session, registry: DAORegistry, journal_id: int) -> List[Announcement]:
    """All announcements of a journal, expired ones included (management view)."""
    association = Association.journal(journal_id)
    return registry.get("AnnouncementDao").fetchByAssocId(session, association.assoc_type, association.assoc_id).toList()


@transactional
def create_announcement(session: Session, registry: DAORegistry, announcement: Announcement) -> Announcement:
    """
    Persist a new announcement.

    Raises
    ------
    ValueError
        If `type_id` names a type that does not belong to the announcement's journal.
    """
    if announcement.type_id is not None:
        announcement_type = registry.get("AnnouncementTypeDao").fetchById(
            session, announcement.type_id, announcement.assoc_id
        )
        if announcement_type is None:
            raise ValueError(f"Unknown announcement type {announcement.type_id} for journal {announcement.assoc_id}")
    registry.get("AnnouncementDao").insertAnnouncement(session, announcement)
    return announcement


@transactional
def delete_announcement(session: Session, registry: DAORegistry, journal_id: int, announcement_id: int) -> bool:
    association = Association.journal(journal_id)
    announcement_dao = registry.get("AnnouncementDao")
    announcement = announcement_dao.fetchById(session, announcement_id, association.assoc_type, association.assoc_id)
    if announcement is None:
        return False
    announcement_dao.deleteAnnouncement(session, announcement)
    return True


# ----------------------------------------------------------------------
# Review forms
# ----------------------------------------------------------------------
@transactional
def get_review_forms(session: Session, registry: DAORegistry, journal_id: int, active_only: bool = False) -> List[ReviewForm]:
    association = Association.journal(journal_id)
    review_form_dao = registry.get("ReviewFormDao")
    if active_only:
        result = review_form_dao.fetchActiveByAssocId(session, association.assoc_type, association.assoc_id)
    else:
        result = review_form_dao.fetchByAssocId(session, association.assoc_type, association.assoc_id)
    return result.toList()


@transactional
def get_review_form(session: Session, registry: DAORegistry, journal_id: int, review_form_id: int) -> Optional[ReviewForm]:
    """
    Fetch a review form of a journal.

    Returns
    -------
    ReviewForm | None
        None if the form does not exist or belongs to another journal.
    """
    association = Association.journal(journal_id)
    return registry.get("ReviewFormDao").fetchById(
        session, review_form_id, association.assoc_type, association.assoc_id
    )


@transactional
def get_review_form_elements(session: Session, registry: DAORegistry, review_form_id: int) -> List[ReviewFormElement]:
    return registry.get("ReviewFormElementDao").fetchByReviewFormId(session, review_form_id).toList()


@transactional
def create_review_form(session: Session, registry: DAORegistry, journal_id: int, review_form: ReviewForm) -> ReviewForm:
    review_form.association = Association.journal(journal_id)
    registry.get("ReviewFormDao").insertReviewForm(session, review_form)
    return review_form


@transactional
def update_review_form(session: Session, registry: DAORegistry, journal_id: int, review_form: ReviewForm) -> bool:
    """
    Rewrite a review form of a journal.

    Returns
    -------
    bool
        False if the form does not exist in the journal.
    """
    review_form_dao = registry.get("ReviewFormDao")
    association = Association.journal(journal_id)
    if not review_form_dao.reviewFormExists(session, review_form.id, association.assoc_type, association.assoc_id):
        return False
    review_form.association = association
    return review_form_dao.updateReviewForm(session, review_form)


@transactional
def delete_unused_review_form(session: Session, registry: DAORegistry, journal_id: int, review_form_id: int) -> bool:
    """
    Delete a review form of a journal, but only if no review assignment uses it.

    Returns
    -------
    bool
        True if the form was deleted; False if it is missing or in use.
    """
    association = Association.journal(journal_id)
    review_form_dao = registry.get("ReviewFormDao")
    if not review_form_dao.unusedReviewFormExists(
        session, review_form_id, association.assoc_type, association.assoc_id
    ):
        logger.info(f"Review form #{review_form_id} of journal #{journal_id} is missing or in use; not deleted")
        return False
    review_form_dao.deleteById(session, review_form_id)
    return True


@transactional
def resequence_review_forms(session: Session, registry: DAORegistry, journal_id: int) -> List[ReviewForm]:
    association = Association.journal(journal_id)
    review_form_dao = registry.get("ReviewFormDao")
    review_form_dao.resequenceReviewForms(session, association.assoc_type, association.assoc_id)
    return review_form_dao.fetchByAssocId(session, association.assoc_type, association.assoc_id).toList()


@transactional
def add_review_form_element(session: Session, registry: DAORegistry, element: ReviewFormElement) -> ReviewFormElement:
    registry.get("ReviewFormElementDao").insertReviewFormElement(session, element)
    return element


# ----------------------------------------------------------------------
# Submission comments
# ----------------------------------------------------------------------
@transactional
def get_submission_comments(
    session: Session,
    registry: DAORegistry,
    journal_id: int,
    submission_id: int,
    comment_type: Optional[int] = None,
    viewable_only: bool = False,
) -> Optional[List[SubmissionComment]]:
    """
    List the comments on a submission of a journal, oldest first.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session (injected by @transactional).
    registry : DAORegistry
        Application DAO registry.
    journal_id : int
        The journal the submission must belong to.
    submission_id : int
        The submission.
    comment_type : int | None
        Restrict to one `CommentType`.
    viewable_only : bool
        Drop the comments hidden from the submission's authors.

    Returns
    -------
    list[SubmissionComment] | None
        None if the submission does not exist in the journal.
    """
    comment_dao = registry.get("SubmissionCommentDao")
    if not comment_dao.submissionExists(session, submission_id, journal_id):
        return None
    comments = comment_dao.fetchBySubmissionId(session, submission_id, comment_type)
    return [comment for comment in comments if comment.viewable or not viewable_only]


@transactional
def create_submission_comment(
    session: Session, registry: DAORegistry, journal_id: int, comment: SubmissionComment
) -> Optional[SubmissionComment]:
    """Persist a comment; None (nothing stored) if its submission is not in the journal."""
    comment_dao = registry.get("SubmissionCommentDao")
    if not comment_dao.submissionExists(session, comment.submission_id, journal_id):
        logger.info(f"Submission #{comment.submission_id} is not in journal #{journal_id}; comment not stored")
        return None
    comment_dao.insertSubmissionComment(session, comment)
    return comment
