"""
Tests for JournalDao, including the cascading delete of a journal.
"""

import pytest

from journal_backend.database.entities.announcement import Announcement, AnnouncementType
from journal_backend.database.entities.association import AssocType
from journal_backend.database.entities.journal import Journal

from conftest import make_review_form


@pytest.fixture
def dao(registry):
    return registry.get("JournalDao")


class TestJournalDao:
    def test_round_trip(self, session, dao, journal):
        fetched = dao.fetchById(session, journal.id)

        assert fetched.path == "jtest"
        assert fetched.enabled is True
        assert fetched.name == {"en": "Journal of Tests", "fr": "Revue des tests"}
        assert fetched.announcements_introduction == {"en": "News from the editors"}

    def test_additional_field_keeps_type(self, session, dao, journal):
        """Test that non-localized settings come back as booleans, not strings."""
        assert dao.fetchById(session, journal.id).enable_announcements is True

        journal.enable_announcements = False
        dao.updateJournal(session, journal)

        assert dao.fetchById(session, journal.id).enable_announcements is False

    def test_fetch_by_path(self, session, dao, journal):
        assert dao.fetchByPath(session, "jtest").id == journal.id
        assert dao.fetchByPath(session, "missing") is None

    def test_fetch_all_enabled_only(self, session, dao, journal):
        hidden = Journal(path="hidden", enabled=False)
        dao.insertJournal(session, hidden)

        assert [j.path for j in dao.fetchAll(session)] == ["jtest", "hidden"]
        assert [j.path for j in dao.fetchAll(session, enabled_only=True)] == ["jtest"]

    def test_update_missing(self, session, dao):
        assert dao.updateJournal(session, Journal(id=999, path="ghost")) is False

    def test_delete_cascades(self, session, registry, dao, journal):
        """Test that a journal takes its forms, announcements and types with it."""
        review_form_dao = registry.get("ReviewFormDao")
        announcement_dao = registry.get("AnnouncementDao")
        type_dao = registry.get("AnnouncementTypeDao")

        review_form = make_review_form(assoc_id=journal.id)
        review_form_dao.insertReviewForm(session, review_form)
        announcement_type = AnnouncementType(context_id=journal.id, name={"en": "News"})
        type_dao.insertAnnouncementType(session, announcement_type)
        announcement = Announcement(type_id=announcement_type.id, title={"en": "Hello"})
        announcement.association = journal.association
        announcement_dao.insertAnnouncement(session, announcement)

        dao.deleteById(session, journal.id)

        assert dao.fetchById(session, journal.id) is None
        assert review_form_dao.fetchByAssocId(session, AssocType.JOURNAL, journal.id).wasEmpty()
        assert announcement_dao.fetchById(session, announcement.id) is None
        assert type_dao.fetchById(session, announcement_type.id) is None
