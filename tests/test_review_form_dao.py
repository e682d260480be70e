"""
Tests for ReviewFormDao and ReviewFormElementDao.
"""

import pytest
from sqlalchemy import func, select

from journal_backend.database.daos.result_factory import RangeInfo
from journal_backend.database.entities import tables
from journal_backend.database.entities.association import AssocType
from journal_backend.database.entities.review_form import ElementType, ReviewFormElement

from conftest import add_review_assignment, make_review_form


@pytest.fixture
def dao(registry):
    return registry.get("ReviewFormDao")


@pytest.fixture
def element_dao(registry):
    return registry.get("ReviewFormElementDao")


def count_rows(session, table, **filters) -> int:
    statement = select(func.count()).select_from(table)
    for column, value in filters.items():
        statement = statement.where(table.c[column] == value)
    return session.execute(statement).scalar_one()


def add_element(element_dao, session, review_form_id: int, sequence: float = 0) -> ReviewFormElement:
    element = ReviewFormElement(
        review_form_id=review_form_id,
        sequence=sequence,
        element_type=ElementType.TEXTAREA,
        required=True,
        included=True,
        question={"en": "Is the method sound?", "fr": "La méthode est-elle solide ?"},
    )
    element_dao.insertReviewFormElement(session, element)
    return element


class TestCRUD:
    """Test insert, fetch, update and delete of review forms."""

    def test_insert_assigns_id(self, session, dao):
        """Test that insert assigns the generated key to the entity."""
        review_form = make_review_form()
        assert review_form.id is None

        new_id = dao.insertReviewForm(session, review_form)

        assert new_id is not None
        assert review_form.id == new_id

    def test_round_trip_with_locales(self, session, dao):
        """Test that every field and every locale survive insert + fetch."""
        review_form = make_review_form(sequence=3, active=True)
        dao.insertReviewForm(session, review_form)

        fetched = dao.fetchById(session, review_form.id)

        assert fetched.assoc_type == AssocType.JOURNAL
        assert fetched.assoc_id == 5
        assert fetched.sequence == 3
        assert fetched.active is True
        assert fetched.title == {"en": "Standard review", "fr": "Évaluation standard"}
        assert fetched.description == {"en": "Default questions"}

    def test_defaults(self, session, dao):
        """Test an unsequenced, inactive form: sequence 0, no usage, clean delete."""
        review_form = make_review_form(assoc_id=5)
        review_form.sequence = None
        review_form.active = False
        dao.insertReviewForm(session, review_form)

        fetched = dao.fetchById(session, review_form.id)
        assert fetched.sequence == 0
        assert fetched.active is False
        assert fetched.complete_count == 0
        assert fetched.incomplete_count == 0

        dao.deleteById(session, review_form.id)

        assert dao.fetchById(session, review_form.id) is None
        assert count_rows(session, tables.review_form_settings, review_form_id=review_form.id) == 0

    def test_fetch_not_found(self, session, dao):
        assert dao.fetchById(session, 999) is None

    def test_scoped_fetch(self, session, dao):
        """Test that scoping keys must all match."""
        review_form = make_review_form(assoc_id=5)
        dao.insertReviewForm(session, review_form)

        assert dao.fetchById(session, review_form.id, AssocType.JOURNAL, 5) is not None
        assert dao.fetchById(session, review_form.id, AssocType.JOURNAL, 6) is None
        assert dao.fetchById(session, review_form.id, AssocType.SUBMISSION, 5) is None

    def test_review_form_exists(self, session, dao):
        review_form = make_review_form(assoc_id=5)
        dao.insertReviewForm(session, review_form)

        assert dao.reviewFormExists(session, review_form.id, AssocType.JOURNAL, 5)
        assert not dao.reviewFormExists(session, review_form.id, AssocType.JOURNAL, 7)

    def test_update_replaces_locales(self, session, dao):
        """Test that update rewrites the row and drops locales no longer present."""
        review_form = make_review_form()
        dao.insertReviewForm(session, review_form)

        review_form.title = {"en": "Short review"}
        review_form.active = True
        review_form.sequence = 2
        assert dao.updateReviewForm(session, review_form) is True

        fetched = dao.fetchById(session, review_form.id)
        assert fetched.title == {"en": "Short review"}
        assert fetched.active is True
        assert fetched.sequence == 2

    def test_update_missing(self, session, dao):
        review_form = make_review_form()
        review_form.id = 999

        assert dao.updateReviewForm(session, review_form) is False
        assert count_rows(session, tables.review_form_settings, review_form_id=999) == 0

    def test_delete_cascades_to_elements(self, session, dao, element_dao):
        """Test that deleting a form removes its elements and their settings."""
        review_form = make_review_form()
        dao.insertReviewForm(session, review_form)
        first = add_element(element_dao, session, review_form.id, 1)
        add_element(element_dao, session, review_form.id, 2)

        dao.deleteReviewForm(session, review_form)

        assert element_dao.fetchByReviewFormId(session, review_form.id).toList() == []
        assert element_dao.fetchById(session, first.id) is None
        assert count_rows(session, tables.review_form_elements) == 0
        assert count_rows(session, tables.review_form_element_settings) == 0
        assert count_rows(session, tables.review_form_settings) == 0

    def test_delete_by_assoc(self, session, dao):
        kept = make_review_form(assoc_id=6)
        dao.insertReviewForm(session, kept)
        for _ in range(2):
            dao.insertReviewForm(session, make_review_form(assoc_id=5))

        dao.deleteByAssoc(session, AssocType.JOURNAL, 5)

        assert dao.fetchByAssocId(session, AssocType.JOURNAL, 5).count == 0
        assert dao.fetchById(session, kept.id) is not None


class TestUsage:
    """Test the review assignment aggregates and the unused check."""

    def test_unused_flips_when_assigned(self, session, dao):
        review_form = make_review_form()
        dao.insertReviewForm(session, review_form)
        assert dao.unusedReviewFormExists(session, review_form.id) is True

        add_review_assignment(session, review_form.id)

        assert dao.unusedReviewFormExists(session, review_form.id) is False

    def test_unused_missing_form(self, session, dao):
        assert dao.unusedReviewFormExists(session, 999) is False

    def test_unused_scoped(self, session, dao):
        review_form = make_review_form(assoc_id=5)
        dao.insertReviewForm(session, review_form)

        assert dao.unusedReviewFormExists(session, review_form.id, AssocType.JOURNAL, 5) is True
        assert dao.unusedReviewFormExists(session, review_form.id, AssocType.JOURNAL, 6) is False

    def test_counts(self, session, dao):
        """Test complete/incomplete counts; declined assignments are ignored."""
        review_form = make_review_form()
        dao.insertReviewForm(session, review_form)
        add_review_assignment(session, review_form.id, completed=True)
        add_review_assignment(session, review_form.id, completed=True)
        add_review_assignment(session, review_form.id)
        add_review_assignment(session, review_form.id, declined=True)

        fetched = dao.fetchById(session, review_form.id)

        assert fetched.complete_count == 2
        assert fetched.incomplete_count == 1
        assert fetched.in_use

    def test_declined_only_is_unused(self, session, dao):
        review_form = make_review_form()
        dao.insertReviewForm(session, review_form)
        add_review_assignment(session, review_form.id, declined=True)

        assert dao.unusedReviewFormExists(session, review_form.id) is True


class TestQueries:
    """Test owner-scoped queries, ordering and resequencing."""

    def test_fetch_by_assoc_in_sequence_order(self, session, dao):
        ids = {}
        for sequence in (5, 2.5, 9):
            review_form = make_review_form(sequence=sequence)
            dao.insertReviewForm(session, review_form)
            ids[sequence] = review_form.id
        dao.insertReviewForm(session, make_review_form(assoc_id=6))

        forms = dao.fetchByAssocId(session, AssocType.JOURNAL, 5).toList()

        assert [form.id for form in forms] == [ids[2.5], ids[5], ids[9]]

    def test_fetch_active_only(self, session, dao):
        active = make_review_form(active=True)
        dao.insertReviewForm(session, active)
        dao.insertReviewForm(session, make_review_form(active=False))

        forms = dao.fetchActiveByAssocId(session, AssocType.JOURNAL, 5).toList()

        assert [form.id for form in forms] == [active.id]

    def test_pagination(self, session, dao):
        for sequence in range(1, 4):
            dao.insertReviewForm(session, make_review_form(sequence=sequence))

        result = dao.fetchByAssocId(session, AssocType.JOURNAL, 5, RangeInfo(page=2, count=2))

        assert [form.sequence for form in result.toList()] == [3]
        assert result.count == 3
        assert result.pageCount == 2

    def test_resequence(self, session, dao):
        """Test that resequencing yields 1..N and keeps the relative order."""
        for sequence in (7, 0.5, 3, 3.25):
            dao.insertReviewForm(session, make_review_form(sequence=sequence))
        before = [form.id for form in dao.fetchByAssocId(session, AssocType.JOURNAL, 5)]

        dao.resequenceReviewForms(session, AssocType.JOURNAL, 5)

        after = dao.fetchByAssocId(session, AssocType.JOURNAL, 5).toList()
        assert [form.id for form in after] == before
        assert [form.sequence for form in after] == [1, 2, 3, 4]

    def test_resequence_elements(self, session, dao, element_dao):
        review_form = make_review_form()
        dao.insertReviewForm(session, review_form)
        for sequence in (10, 4, 6):
            add_element(element_dao, session, review_form.id, sequence)
        before = [element.id for element in element_dao.fetchByReviewFormId(session, review_form.id)]

        element_dao.resequenceReviewFormElements(session, review_form.id)

        after = element_dao.fetchByReviewFormId(session, review_form.id).toList()
        assert [element.id for element in after] == before
        assert [element.sequence for element in after] == [1, 2, 3]


class TestElements:
    """Test review form element persistence."""

    def test_round_trip(self, session, dao, element_dao):
        review_form = make_review_form()
        dao.insertReviewForm(session, review_form)
        element = add_element(element_dao, session, review_form.id, 1)

        fetched = element_dao.fetchById(session, element.id)

        assert fetched.review_form_id == review_form.id
        assert fetched.element_type == ElementType.TEXTAREA
        assert fetched.required is True
        assert fetched.question == {"en": "Is the method sound?", "fr": "La méthode est-elle solide ?"}

    def test_scoped_fetch(self, session, dao, element_dao):
        review_form = make_review_form()
        dao.insertReviewForm(session, review_form)
        element = add_element(element_dao, session, review_form.id)

        assert element_dao.fetchById(session, element.id, review_form.id) is not None
        assert element_dao.fetchById(session, element.id, review_form.id + 1) is None

    def test_update(self, session, dao, element_dao):
        review_form = make_review_form()
        dao.insertReviewForm(session, review_form)
        element = add_element(element_dao, session, review_form.id)

        element.required = False
        element.question = {"en": "Is the method reproducible?"}
        assert element_dao.updateReviewFormElement(session, element) is True

        fetched = element_dao.fetchById(session, element.id)
        assert fetched.required is False
        assert fetched.question == {"en": "Is the method reproducible?"}
