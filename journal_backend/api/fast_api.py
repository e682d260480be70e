"""
FastAPI Router — Announcements • Review Forms • Submission Comments
==================================================================

Purpose
-------
Defines the HTTP API of a journal, every route scoped by the journal's URL
path (`/{context}/...`):
- Public announcement pages: index and single announcement view
- Management: review forms (CRUD, usage-gated delete, resequence, elements),
  announcements, submission comments

Key Notes
---------
- `require_context` resolves `{context}` to an enabled journal or answers 404.
- Management routes require the `token` cookie (JWT), else 401.
- Public pages receive data already filtered (expired announcements removed)
  and localized for `?locale=`, falling back to the journal's primary locale.
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse

from journal_backend.api.models import (
    AnnouncementDetail,
    AnnouncementIndex,
    AnnouncementOut,
    AnnouncementSummary,
    NewAnnouncement,
    NewSubmissionComment,
    ReviewFormData,
    ReviewFormElementData,
    ReviewFormElementOut,
    ReviewFormOut,
    SubmissionCommentOut,
)
from journal_backend.api.utils import get_dao_registry, require_context, require_token
from journal_backend.database.config.config import settings
from journal_backend.database.core.funcs import (
    add_review_form_element,
    create_announcement,
    create_review_form,
    create_submission_comment,
    delete_announcement,
    delete_unused_review_form,
    get_announcement,
    get_current_announcements,
    get_journal_announcements,
    get_review_form,
    get_review_form_elements,
    get_review_forms,
    get_submission_comments,
    resequence_review_forms,
    update_review_form,
)
from journal_backend.database.daos.dao_registry import DAORegistry
from journal_backend.database.entities.announcement import Announcement
from journal_backend.database.entities.association import CONTEXT_ASSOC_TYPE, Association
from journal_backend.database.entities.journal import Journal
from journal_backend.database.entities.localization import localize
from journal_backend.database.entities.review_form import ReviewForm, ReviewFormElement
from journal_backend.database.entities.submission_comment import SubmissionComment

logger = logging.getLogger(__name__)

router = APIRouter()
"""Creates the FastAPI router in which we define its routes"""


def _summary(announcement: Announcement, locale: str, fallback_locale: str) -> dict:
    return {
        "id": announcement.id,
        "title": localize(announcement.title, locale, fallback_locale),
        "description_short": localize(announcement.description_short, locale, fallback_locale),
        "date_posted": announcement.date_posted,
        "date_expire": announcement.date_expire,
    }


def _require_announcements_enabled(journal: Journal) -> None:
    if not journal.enable_announcements:
        raise HTTPException(status_code=404, detail="Announcements are not enabled for this journal")


# ----------------------------------------------------------------------
# Public announcement pages
# ----------------------------------------------------------------------
@router.get("/{context}/announcement", response_model=AnnouncementIndex)
async def announcement_index(
    locale: Optional[str] = None,
    journal: Journal = Depends(require_context),
    registry: DAORegistry = Depends(get_dao_registry),
):
    """Show the public announcements of a journal.

    Behavior:
        - 404 if the journal has announcements disabled.
        - Lists the non-expired announcements, newest first, with the
          journal's localized introduction.
    """
    _require_announcements_enabled(journal)
    locale = locale or settings.DEFAULT_LOCALE
    announcements = get_current_announcements(registry=registry, journal=journal)
    return {
        "journal": journal.path,
        "announcements_introduction": localize(journal.announcements_introduction, locale, journal.primary_locale),
        "announcements": [_summary(announcement, locale, journal.primary_locale) for announcement in announcements],
    }


@router.get("/{context}/announcement/view/{announcement_id}", response_model=AnnouncementDetail)
async def announcement_view(
    announcement_id: int,
    locale: Optional[str] = None,
    journal: Journal = Depends(require_context),
    registry: DAORegistry = Depends(get_dao_registry),
):
    """View one announcement.

    Behavior:
        - 404 if the journal has announcements disabled.
        - Redirects to the announcement index when the announcement does not
          exist, belongs to another owner, or has expired.
    """
    _require_announcements_enabled(journal)
    announcement = get_announcement(registry=registry, announcement_id=announcement_id)
    if (
        announcement is None
        or not announcement.belongs_to(Association.of(CONTEXT_ASSOC_TYPE, journal.id))
        or announcement.is_expired(datetime.now())
    ):
        return RedirectResponse(url=router.url_path_for("announcement_index", context=journal.path), status_code=302)

    locale = locale or settings.DEFAULT_LOCALE
    detail = _summary(announcement, locale, journal.primary_locale)
    detail["description"] = localize(announcement.description, locale, journal.primary_locale)
    return detail


# ----------------------------------------------------------------------
# Management: review forms
# ----------------------------------------------------------------------
@router.get("/{context}/management/review-forms", response_model=List[ReviewFormOut])
async def list_review_forms(
    active_only: bool = False,
    journal: Journal = Depends(require_context),
    registry: DAORegistry = Depends(get_dao_registry),
    user: str = Depends(require_token),
):
    """List the review forms of the journal in sequence order."""
    return get_review_forms(registry=registry, journal_id=journal.id, active_only=active_only)


@router.post("/{context}/management/review-forms", response_model=ReviewFormOut, status_code=201)
async def new_review_form(
    data: ReviewFormData,
    journal: Journal = Depends(require_context),
    registry: DAORegistry = Depends(get_dao_registry),
    user: str = Depends(require_token),
):
    """Create a review form owned by the journal."""
    review_form = ReviewForm(
        sequence=data.sequence, active=data.active, title=data.title, description=data.description
    )
    review_form = create_review_form(registry=registry, journal_id=journal.id, review_form=review_form)
    logger.info(f"{user} created review form #{review_form.id} in {journal.path}")
    return review_form


@router.get("/{context}/management/review-forms/{review_form_id}", response_model=ReviewFormOut)
async def review_form_details(
    review_form_id: int,
    journal: Journal = Depends(require_context),
    registry: DAORegistry = Depends(get_dao_registry),
    user: str = Depends(require_token),
):
    review_form = get_review_form(registry=registry, journal_id=journal.id, review_form_id=review_form_id)
    if review_form is None:
        raise HTTPException(status_code=404, detail="Review form not found")
    return review_form


@router.put("/{context}/management/review-forms/{review_form_id}", response_model=ReviewFormOut)
async def edit_review_form(
    review_form_id: int,
    data: ReviewFormData,
    journal: Journal = Depends(require_context),
    registry: DAORegistry = Depends(get_dao_registry),
    user: str = Depends(require_token),
):
    """Rewrite a review form (full replacement of its fields and locales)."""
    review_form = ReviewForm(
        id=review_form_id, sequence=data.sequence, active=data.active, title=data.title, description=data.description
    )
    if not update_review_form(registry=registry, journal_id=journal.id, review_form=review_form):
        raise HTTPException(status_code=404, detail="Review form not found")
    return get_review_form(registry=registry, journal_id=journal.id, review_form_id=review_form_id)


@router.delete("/{context}/management/review-forms/{review_form_id}", status_code=204)
async def remove_review_form(
    review_form_id: int,
    journal: Journal = Depends(require_context),
    registry: DAORegistry = Depends(get_dao_registry),
    user: str = Depends(require_token),
):
    """Delete a review form with its elements.

    Response:
        204 on success, 404 if the form is unknown, 409 if a review
        assignment uses it.
    """
    if get_review_form(registry=registry, journal_id=journal.id, review_form_id=review_form_id) is None:
        raise HTTPException(status_code=404, detail="Review form not found")
    if not delete_unused_review_form(registry=registry, journal_id=journal.id, review_form_id=review_form_id):
        raise HTTPException(status_code=409, detail="Review form is in use")
    logger.info(f"{user} deleted review form #{review_form_id} of {journal.path}")


@router.post("/{context}/management/review-forms/resequence", response_model=List[ReviewFormOut])
async def resequence(
    journal: Journal = Depends(require_context),
    registry: DAORegistry = Depends(get_dao_registry),
    user: str = Depends(require_token),
):
    """Renumber the journal's review forms 1..N in their current order."""
    return resequence_review_forms(registry=registry, journal_id=journal.id)


@router.get("/{context}/management/review-forms/{review_form_id}/elements", response_model=List[ReviewFormElementOut])
async def list_review_form_elements(
    review_form_id: int,
    journal: Journal = Depends(require_context),
    registry: DAORegistry = Depends(get_dao_registry),
    user: str = Depends(require_token),
):
    if get_review_form(registry=registry, journal_id=journal.id, review_form_id=review_form_id) is None:
        raise HTTPException(status_code=404, detail="Review form not found")
    return get_review_form_elements(registry=registry, review_form_id=review_form_id)


@router.post(
    "/{context}/management/review-forms/{review_form_id}/elements",
    response_model=ReviewFormElementOut,
    status_code=201,
)
async def new_review_form_element(
    review_form_id: int,
    data: ReviewFormElementData,
    journal: Journal = Depends(require_context),
    registry: DAORegistry = Depends(get_dao_registry),
    user: str = Depends(require_token),
):
    """Append a question to a review form of the journal."""
    if get_review_form(registry=registry, journal_id=journal.id, review_form_id=review_form_id) is None:
        raise HTTPException(status_code=404, detail="Review form not found")
    element = ReviewFormElement(
        review_form_id=review_form_id,
        sequence=data.sequence,
        element_type=data.element_type,
        required=data.required,
        included=data.included,
        question=data.question,
        description=data.description,
    )
    return add_review_form_element(registry=registry, element=element)


# ----------------------------------------------------------------------
# Management: announcements
# ----------------------------------------------------------------------
@router.get("/{context}/management/announcements", response_model=List[AnnouncementOut])
async def list_announcements(
    journal: Journal = Depends(require_context),
    registry: DAORegistry = Depends(get_dao_registry),
    user: str = Depends(require_token),
):
    """List every announcement of the journal, expired ones included."""
    return get_journal_announcements(registry=registry, journal_id=journal.id)


@router.post("/{context}/management/announcements", response_model=AnnouncementOut, status_code=201)
async def new_announcement(
    data: NewAnnouncement,
    journal: Journal = Depends(require_context),
    registry: DAORegistry = Depends(get_dao_registry),
    user: str = Depends(require_token),
):
    """Publish an announcement in the journal; 422 if `type_id` is not one of its types."""
    announcement = Announcement(
        type_id=data.type_id,
        date_expire=data.date_expire,
        title=data.title,
        description_short=data.description_short,
        description=data.description,
    )
    announcement.association = journal.association
    try:
        return create_announcement(registry=registry, announcement=announcement)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.delete("/{context}/management/announcements/{announcement_id}", status_code=204)
async def remove_announcement(
    announcement_id: int,
    journal: Journal = Depends(require_context),
    registry: DAORegistry = Depends(get_dao_registry),
    user: str = Depends(require_token),
):
    if not delete_announcement(registry=registry, journal_id=journal.id, announcement_id=announcement_id):
        raise HTTPException(status_code=404, detail="Announcement not found")


# ----------------------------------------------------------------------
# Management: submission comments
# ----------------------------------------------------------------------
@router.get("/{context}/management/submissions/{submission_id}/comments", response_model=List[SubmissionCommentOut])
async def list_submission_comments(
    submission_id: int,
    comment_type: Optional[int] = None,
    viewable_only: bool = False,
    journal: Journal = Depends(require_context),
    registry: DAORegistry = Depends(get_dao_registry),
    user: str = Depends(require_token),
):
    """List the comments on a submission of the journal, oldest first; 404 for a foreign submission."""
    comments = get_submission_comments(
        registry=registry,
        journal_id=journal.id,
        submission_id=submission_id,
        comment_type=comment_type,
        viewable_only=viewable_only,
    )
    if comments is None:
        raise HTTPException(status_code=404, detail="Submission not found")
    return comments


@router.post(
    "/{context}/management/submissions/{submission_id}/comments",
    response_model=SubmissionCommentOut,
    status_code=201,
)
async def new_submission_comment(
    submission_id: int,
    data: NewSubmissionComment,
    journal: Journal = Depends(require_context),
    registry: DAORegistry = Depends(get_dao_registry),
    user: str = Depends(require_token),
):
    comment = SubmissionComment(submission_id=submission_id, **data.model_dump())
    comment = create_submission_comment(registry=registry, journal_id=journal.id, comment=comment)
    if comment is None:
        raise HTTPException(status_code=404, detail="Submission not found")
    return comment
