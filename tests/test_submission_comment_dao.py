"""
Tests for SubmissionCommentDao.
"""

from datetime import datetime

import pytest
from sqlalchemy import insert

from journal_backend.database.entities.submission_comment import CommentType, SubmissionComment
from journal_backend.database.entities.tables import submissions, users


@pytest.fixture
def dao(registry):
    return registry.get("SubmissionCommentDao")


@pytest.fixture
def author_id(session):
    result = session.execute(
        insert(users).values(username="rev1", email="rev1@example.org", given_name="Rita", family_name="Viewer")
    )
    return result.inserted_primary_key[0]


def make_comment(author_id: int, **kwargs) -> SubmissionComment:
    defaults = {
        "comment_type": CommentType.PEER_REVIEW,
        "role_id": 4096,
        "submission_id": 10,
        "assoc_id": 1,
        "author_id": author_id,
        "comment_title": "Round 1",
        "comments": "Please clarify the sampling method.",
        "viewable": True,
    }
    defaults.update(kwargs)
    return SubmissionComment(**defaults)


class TestSubmissionCommentDao:
    def test_round_trip_with_author(self, session, dao, author_id):
        comment = make_comment(author_id)
        dao.insertSubmissionComment(session, comment)

        fetched = dao.fetchById(session, comment.id)

        assert fetched.comment_type == CommentType.PEER_REVIEW
        assert fetched.comments == "Please clarify the sampling method."
        assert fetched.viewable is True
        assert fetched.date_posted is not None
        assert fetched.author_name == "Rita Viewer"
        assert fetched.author_email == "rev1@example.org"

    def test_unknown_author(self, session, dao):
        comment = make_comment(999)
        dao.insertSubmissionComment(session, comment)

        fetched = dao.fetchById(session, comment.id)

        assert fetched.author_name == ""
        assert fetched.author_email == ""

    def test_scoped_fetch(self, session, dao, author_id):
        comment = make_comment(author_id)
        dao.insertSubmissionComment(session, comment)

        assert dao.fetchById(session, comment.id, 10) is not None
        assert dao.fetchById(session, comment.id, 11) is None

    def test_fetch_by_submission(self, session, dao, author_id):
        first = make_comment(author_id, date_posted=datetime(2024, 1, 1))
        second = make_comment(author_id, date_posted=datetime(2024, 2, 1))
        decision = make_comment(author_id, comment_type=CommentType.EDITOR_DECISION, date_posted=datetime(2024, 3, 1))
        for comment in (second, decision, first):
            dao.insertSubmissionComment(session, comment)
        dao.insertSubmissionComment(session, make_comment(author_id, submission_id=11))

        all_comments = dao.fetchBySubmissionId(session, 10)
        reviews = dao.fetchBySubmissionId(session, 10, CommentType.PEER_REVIEW)

        assert [c.id for c in all_comments] == [first.id, second.id, decision.id]
        assert [c.id for c in reviews] == [first.id, second.id]
        assert dao.fetchBySubmissionId(session, 10, assoc_id=2).wasEmpty()

    def test_update_sets_date_modified(self, session, dao, author_id):
        comment = make_comment(author_id)
        dao.insertSubmissionComment(session, comment)

        comment.comments = "Thanks, resolved."
        assert dao.updateSubmissionComment(session, comment) is True

        fetched = dao.fetchById(session, comment.id)
        assert fetched.comments == "Thanks, resolved."
        assert fetched.date_modified is not None

    def test_delete_by_submission(self, session, dao, author_id):
        for _ in range(2):
            dao.insertSubmissionComment(session, make_comment(author_id))
        kept = make_comment(author_id, submission_id=11)
        dao.insertSubmissionComment(session, kept)

        assert dao.deleteBySubmissionId(session, 10) == 2
        assert dao.fetchBySubmissionId(session, 10).count == 0
        assert dao.fetchById(session, kept.id) is not None

    def test_submission_exists_in_its_journal_only(self, session, dao, journal):
        submission_id = session.execute(insert(submissions).values(context_id=journal.id)).inserted_primary_key[0]

        assert dao.submissionExists(session, submission_id, journal.id) is True
        assert dao.submissionExists(session, submission_id, journal.id + 1) is False
        assert dao.submissionExists(session, submission_id + 1, journal.id) is False
