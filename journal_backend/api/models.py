"""
Pydantic models used for request/response validation and API data contracts.

Request models carry localized fields as ``{locale: text}`` mappings. Public
response models carry text already resolved for the requested locale; the
management models expose the full mappings.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from journal_backend.database.entities.review_form import ElementType
from journal_backend.database.entities.submission_comment import CommentType


class AnnouncementSummary(BaseModel):
    """One entry of the public announcement list, localized."""
    id: int
    title: Optional[str] = None
    description_short: Optional[str] = None
    date_posted: Optional[datetime] = None
    date_expire: Optional[datetime] = None


class AnnouncementIndex(BaseModel):
    """The public announcement page of a journal."""
    journal: str
    """Path of the journal."""
    announcements_introduction: Optional[str] = None
    announcements: List[AnnouncementSummary] = []


class AnnouncementDetail(AnnouncementSummary):
    """A single announcement, localized."""
    description: Optional[str] = None


class NewAnnouncement(BaseModel):
    """
    Details needed to publish an announcement in the current journal.
    """
    title: Dict[str, str] = Field(..., description="Localized title.", examples=[{"en": "Call for papers"}])
    description_short: Dict[str, str] = {}
    description: Dict[str, str] = {}
    type_id: Optional[int] = None
    date_expire: Optional[datetime] = Field(None, description="Hidden from the public pages from this moment on.")


class AnnouncementOut(BaseModel):
    """An announcement with every locale (management view)."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    assoc_type: int
    assoc_id: int
    type_id: Optional[int] = None
    date_expire: Optional[datetime] = None
    date_posted: Optional[datetime] = None
    title: Dict[str, str] = {}
    description_short: Dict[str, str] = {}
    description: Dict[str, str] = {}


class ReviewFormData(BaseModel):
    """
    Details used to create or rewrite a review form.
    """
    title: Dict[str, str] = Field(..., description="Localized title.", examples=[{"en": "Standard review"}])
    description: Dict[str, str] = {}
    sequence: Optional[float] = None
    active: bool = False


class ReviewFormOut(BaseModel):
    """A review form with its usage counts."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    assoc_type: int
    assoc_id: int
    sequence: Optional[float] = None
    active: bool
    complete_count: int
    incomplete_count: int
    title: Dict[str, str] = {}
    description: Dict[str, str] = {}


class ReviewFormElementData(BaseModel):
    """A question to add to a review form."""
    question: Dict[str, str]
    description: Dict[str, str] = {}
    element_type: ElementType
    sequence: Optional[float] = None
    required: bool = False
    included: bool = True


class ReviewFormElementOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    review_form_id: int
    sequence: Optional[float] = None
    element_type: Optional[int] = None
    required: bool
    included: bool
    question: Dict[str, str] = {}
    description: Dict[str, str] = {}


class NewSubmissionComment(BaseModel):
    """A comment to post on a submission."""
    comment_type: CommentType
    role_id: int
    assoc_id: int
    author_id: int
    comment_title: Optional[str] = None
    comments: str
    viewable: bool = False


class SubmissionCommentOut(BaseModel):
    """A submission comment with its resolved author."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    comment_type: Optional[int] = None
    role_id: int
    submission_id: int
    assoc_id: int
    author_id: int
    author_name: str = ""
    author_email: str = ""
    comment_title: Optional[str] = None
    comments: Optional[str] = None
    date_posted: Optional[datetime] = None
    date_modified: Optional[datetime] = None
    viewable: bool
