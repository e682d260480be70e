"""
Tests for entity helpers: associations and localized values.
"""

import pytest

from journal_backend.database.entities.association import Association, AssocType
from journal_backend.database.entities.localization import localize
from journal_backend.database.entities.review_form import ReviewForm


class TestAssociation:
    def test_of_converts_raw_values(self):
        association = Association.of(1, "5")

        assert association == Association(AssocType.JOURNAL, 5)
        assert association.assoc_type is AssocType.JOURNAL

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            Association.of(99, 1)

    def test_entity_association(self):
        review_form = ReviewForm()
        review_form.association = Association.journal(7)

        assert review_form.assoc_type == AssocType.JOURNAL
        assert review_form.assoc_id == 7
        assert review_form.association == Association.journal(7)


class TestLocalize:
    def test_requested_locale(self):
        assert localize({"en": "News", "fr": "Nouvelles"}, "fr") == "Nouvelles"

    def test_fallback_locale(self):
        assert localize({"en": "News", "de": "Neuigkeiten"}, "fr", "de") == "Neuigkeiten"

    def test_any_locale(self):
        assert localize({"fr": "", "de": "Neuigkeiten"}, "fr", "en") == "Neuigkeiten"

    def test_empty(self):
        assert localize({}, "en") is None
        assert localize(None, "en") is None
