"""
Tests for the HTTP API: public announcement pages and management routes.
"""

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import insert

from journal_backend.api.utils import create_access_token, verify_token
from journal_backend.database.config.connection_engine import connection_engine, metadata
from journal_backend.database.core.funcs import create_announcement, create_journal, create_review_form
from journal_backend.database.entities import tables
from journal_backend.database.entities.announcement import Announcement
from journal_backend.database.entities.association import Association
from journal_backend.database.entities.journal import Journal
from journal_backend.database.entities.review_form import ReviewForm
from journal_backend.main import app


@pytest.fixture
def client():
    with TestClient(app) as client:
        metadata.drop_all(connection_engine)
        metadata.create_all(connection_engine)
        yield client


@pytest.fixture
def registry(client):
    return app.state.dao_registry


@pytest.fixture
def journal(registry):
    return create_journal(
        registry=registry,
        journal=Journal(
            path="jtest",
            primary_locale="en",
            enable_announcements=True,
            announcements_introduction={"en": "News from the editors", "fr": "Nouvelles"},
        ),
    )


@pytest.fixture
def auth(client):
    client.cookies.set("token", create_access_token({"sub": "editor"}))
    return client


def publish(registry, journal_id: int, title: str, **kwargs) -> Announcement:
    announcement = Announcement(title={"en": title}, description={"en": f"{title} in full"}, **kwargs)
    announcement.association = Association.journal(journal_id)
    return create_announcement(registry=registry, announcement=announcement)


class TestTokens:
    def test_round_trip(self):
        assert verify_token(create_access_token({"sub": "editor"})) == "editor"

    def test_garbage(self):
        assert verify_token("not-a-token") is None


class TestAnnouncementIndex:
    def test_unknown_journal(self, client):
        assert client.get("/nowhere/announcement").status_code == 404

    def test_disabled(self, client, registry):
        create_journal(registry=registry, journal=Journal(path="quiet", enable_announcements=False))

        assert client.get("/quiet/announcement").status_code == 404

    def test_lists_current_announcements(self, client, registry, journal):
        """Test that expired announcements are filtered out, newest first."""
        publish(registry, journal.id, "Old", date_posted=datetime(2020, 1, 1))
        publish(registry, journal.id, "New", date_posted=datetime(2024, 1, 1))
        publish(registry, journal.id, "Expired", date_expire=datetime.now() - timedelta(days=1))

        response = client.get("/jtest/announcement")

        assert response.status_code == 200
        body = response.json()
        assert body["journal"] == "jtest"
        assert body["announcements_introduction"] == "News from the editors"
        assert [a["title"] for a in body["announcements"]] == ["New", "Old"]

    def test_lists_past_many_expired(self, client, registry, journal):
        """Test that current announcements are listed however many newer ones have expired."""
        publish(registry, journal.id, "Still current", date_posted=datetime(2020, 1, 1))
        for day in range(1, 31):
            publish(registry, journal.id, f"Expired {day}", date_posted=datetime(2024, 1, day), date_expire=datetime(2024, 2, 1))

        body = client.get("/jtest/announcement").json()

        assert [a["title"] for a in body["announcements"]] == ["Still current"]

    def test_localized(self, client, journal):
        response = client.get("/jtest/announcement", params={"locale": "fr"})

        assert response.json()["announcements_introduction"] == "Nouvelles"


class TestAnnouncementView:
    def test_view(self, client, registry, journal):
        announcement = publish(registry, journal.id, "Call for papers")

        response = client.get(f"/jtest/announcement/view/{announcement.id}")

        assert response.status_code == 200
        assert response.json()["title"] == "Call for papers"
        assert response.json()["description"] == "Call for papers in full"

    def test_expired_redirects(self, client, registry, journal):
        announcement = publish(registry, journal.id, "Gone", date_expire=datetime.now() - timedelta(hours=1))

        response = client.get(f"/jtest/announcement/view/{announcement.id}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/jtest/announcement"

    def test_other_journal_redirects(self, client, registry, journal):
        other = create_journal(registry=registry, journal=Journal(path="other", enable_announcements=True))
        announcement = publish(registry, other.id, "Not yours")

        response = client.get(f"/jtest/announcement/view/{announcement.id}", follow_redirects=False)

        assert response.status_code == 302

    def test_missing_redirects(self, client, journal):
        response = client.get("/jtest/announcement/view/999", follow_redirects=False)

        assert response.status_code == 302


class TestReviewFormManagement:
    def test_requires_token(self, client, journal):
        assert client.get("/jtest/management/review-forms").status_code == 401

    def test_rejects_bad_token(self, client, journal):
        client.cookies.set("token", "forged")

        assert client.get("/jtest/management/review-forms").status_code == 401

    def test_create_and_list(self, auth, journal):
        response = auth.post("/jtest/management/review-forms", json={"title": {"en": "Standard review"}})

        assert response.status_code == 201
        created = response.json()
        assert created["assoc_id"] == journal.id
        assert created["sequence"] == 0
        assert created["active"] is False
        assert created["complete_count"] == 0

        listed = auth.get("/jtest/management/review-forms").json()
        assert [form["id"] for form in listed] == [created["id"]]

    def test_invalid_payload(self, auth, journal):
        response = auth.post("/jtest/management/review-forms", json={"active": True})

        assert response.status_code == 422

    def test_update(self, auth, journal):
        created = auth.post("/jtest/management/review-forms", json={"title": {"en": "Draft"}}).json()

        response = auth.put(
            f"/jtest/management/review-forms/{created['id']}",
            json={"title": {"en": "Final"}, "active": True, "sequence": 4},
        )

        assert response.status_code == 200
        assert response.json()["title"] == {"en": "Final"}
        assert response.json()["active"] is True

    def test_foreign_form_not_found(self, auth, registry, journal):
        review_form = create_review_form(registry=registry, journal_id=journal.id + 1, review_form=ReviewForm(title={"en": "X"}))

        assert auth.get(f"/jtest/management/review-forms/{review_form.id}").status_code == 404
        assert auth.delete(f"/jtest/management/review-forms/{review_form.id}").status_code == 404

    def test_delete(self, auth, journal):
        created = auth.post("/jtest/management/review-forms", json={"title": {"en": "Temp"}}).json()
        auth.post(
            f"/jtest/management/review-forms/{created['id']}/elements",
            json={"question": {"en": "Comments?"}, "element_type": 3},
        )

        assert auth.delete(f"/jtest/management/review-forms/{created['id']}").status_code == 204
        assert auth.get(f"/jtest/management/review-forms/{created['id']}").status_code == 404

    def test_delete_in_use_conflicts(self, auth, journal):
        created = auth.post("/jtest/management/review-forms", json={"title": {"en": "Used"}}).json()
        with connection_engine.begin() as connection:
            connection.execute(
                insert(tables.review_assignments).values(submission_id=1, reviewer_id=2, review_form_id=created["id"])
            )

        assert auth.delete(f"/jtest/management/review-forms/{created['id']}").status_code == 409
        assert auth.get(f"/jtest/management/review-forms/{created['id']}").json()["incomplete_count"] == 1

    def test_resequence(self, auth, journal):
        for sequence in (9, 3):
            auth.post("/jtest/management/review-forms", json={"title": {"en": f"Form {sequence}"}, "sequence": sequence})

        forms = auth.post("/jtest/management/review-forms/resequence").json()

        assert [form["title"]["en"] for form in forms] == ["Form 3", "Form 9"]
        assert [form["sequence"] for form in forms] == [1, 2]

    def test_elements(self, auth, journal):
        created = auth.post("/jtest/management/review-forms", json={"title": {"en": "Form"}}).json()

        response = auth.post(
            f"/jtest/management/review-forms/{created['id']}/elements",
            json={"question": {"en": "Is it novel?"}, "element_type": 5, "required": True},
        )
        assert response.status_code == 201

        elements = auth.get(f"/jtest/management/review-forms/{created['id']}/elements").json()
        assert [element["question"] for element in elements] == [{"en": "Is it novel?"}]
        assert elements[0]["required"] is True


class TestAnnouncementManagement:
    def test_create_and_list(self, auth, journal):
        response = auth.post(
            "/jtest/management/announcements",
            json={"title": {"en": "Hello"}, "date_expire": "2000-01-01T00:00:00"},
        )
        assert response.status_code == 201
        assert response.json()["assoc_id"] == journal.id

        listed = auth.get("/jtest/management/announcements").json()
        assert [a["title"] for a in listed] == [{"en": "Hello"}]

    def test_unknown_type(self, auth, journal):
        response = auth.post("/jtest/management/announcements", json={"title": {"en": "Typed"}, "type_id": 42})

        assert response.status_code == 422
        assert auth.get("/jtest/management/announcements").json() == []

    def test_delete(self, auth, registry, journal):
        announcement = publish(registry, journal.id, "Bye")

        assert auth.delete(f"/jtest/management/announcements/{announcement.id}").status_code == 204
        assert auth.delete(f"/jtest/management/announcements/{announcement.id}").status_code == 404


class TestSubmissionComments:
    @pytest.fixture
    def submission_id(self, journal):
        with connection_engine.begin() as connection:
            return connection.execute(insert(tables.submissions).values(context_id=journal.id)).inserted_primary_key[0]

    @pytest.fixture
    def payload(self, client):
        with connection_engine.begin() as connection:
            author_id = connection.execute(
                insert(tables.users).values(username="ed", email="ed@example.org", given_name="Edith", family_name="Tor")
            ).inserted_primary_key[0]
        return {"comment_type": 2, "role_id": 16, "assoc_id": 1, "author_id": author_id, "comments": "Accept."}

    def test_create_and_list(self, auth, submission_id, payload):
        url = f"/jtest/management/submissions/{submission_id}/comments"

        response = auth.post(url, json=payload)
        assert response.status_code == 201
        auth.post(url, json={**payload, "viewable": True, "comments": "Minor edits."})

        comments = auth.get(url).json()
        visible = auth.get(url, params={"viewable_only": True}).json()

        assert [c["comments"] for c in comments] == ["Accept.", "Minor edits."]
        assert comments[0]["author_name"] == "Edith Tor"
        assert [c["comments"] for c in visible] == ["Minor edits."]

    def test_unknown_submission(self, auth, journal, payload):
        assert auth.get("/jtest/management/submissions/999/comments").status_code == 404
        assert auth.post("/jtest/management/submissions/999/comments", json=payload).status_code == 404

    def test_other_journal_cannot_read_or_post(self, auth, registry, submission_id, payload):
        """Test that a submission's comments are only reachable through its own journal."""
        create_journal(registry=registry, journal=Journal(path="other", enable_announcements=True))
        auth.post(f"/jtest/management/submissions/{submission_id}/comments", json=payload)

        read = auth.get(f"/other/management/submissions/{submission_id}/comments")
        posted = auth.post(f"/other/management/submissions/{submission_id}/comments", json={**payload, "comments": "Sneaky."})

        assert read.status_code == 404
        assert posted.status_code == 404
        comments = auth.get(f"/jtest/management/submissions/{submission_id}/comments").json()
        assert [c["comments"] for c in comments] == ["Accept."]
