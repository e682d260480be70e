"""
SubmissionComment Entity
========================

A comment exchanged between editors, reviewers and authors about a
submission (peer review notes, decision letters, copyediting remarks...).
The comment stores only the author's id; ``SubmissionCommentDao`` resolves
the author's name and e-mail when loading it.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Optional


class CommentType(IntEnum):
    """Workflow stage a submission comment belongs to."""
    PEER_REVIEW = 1
    EDITOR_DECISION = 2
    COPYEDIT = 3
    LAYOUT = 4
    PROOFREAD = 5


@dataclass
class SubmissionComment:
    """
    A comment on a submission.

    Attributes
    ----------
    id : int | None
        Primary key. ``None`` until inserted.
    comment_type : CommentType | None
        Workflow stage.
    role_id : int | None
        Role the author acted in.
    submission_id : int | None
        The submission commented on.
    assoc_id : int | None
        Stage specific owner, e.g. the review assignment for peer review comments.
    author_id : int | None
        User who wrote the comment.
    comment_title : str | None
    comments : str | None
        Comment body.
    date_posted : datetime | None
    date_modified : datetime | None
    viewable : bool
        Whether the author of the submission may read it.
    author_name : str
        Full name of the author, resolved on load; empty when unknown.
    author_email : str
        E-mail of the author, resolved on load; empty when unknown.
    """
    id: Optional[int] = None
    comment_type: Optional[CommentType] = None
    role_id: Optional[int] = None
    submission_id: Optional[int] = None
    assoc_id: Optional[int] = None
    author_id: Optional[int] = None
    comment_title: Optional[str] = None
    comments: Optional[str] = None
    date_posted: Optional[datetime] = None
    date_modified: Optional[datetime] = None
    viewable: bool = False
    author_name: str = ""
    author_email: str = ""

    def __str__(self) -> str:
        return (
            f"SubmissionComment: id:{self.id}, submission: {self.submission_id}, "
            f"type: {self.comment_type}, author: {self.author_id}"
        )
