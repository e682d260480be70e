"""
Shared fixtures: an in-memory database per test and a DAO registry bound to it.

Settings are read from the environment when `journal_backend` is first
imported, so the test environment is set up before any project import.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DB_DRIVER_NAME"] = "sqlite"
os.environ["DB_DATABASE_NAME"] = ":memory:"
os.environ["INIT_MODE"] = "runtime"

from datetime import datetime

import pytest
from sqlalchemy import create_engine, insert
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from journal_backend.database.config.connection_engine import metadata
from journal_backend.database.daos.dao_registry import DAORegistry
from journal_backend.database.entities import tables
from journal_backend.database.entities.association import Association
from journal_backend.database.entities.journal import Journal
from journal_backend.database.entities.review_form import ReviewForm


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database with the full schema."""
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def registry():
    return DAORegistry()


@pytest.fixture
def journal(session, registry):
    """An enabled journal with announcements turned on."""
    journal = Journal(
        path="jtest",
        name={"en": "Journal of Tests", "fr": "Revue des tests"},
        enable_announcements=True,
        announcements_introduction={"en": "News from the editors"},
    )
    registry.get("JournalDao").insertJournal(session, journal)
    return journal


def make_review_form(assoc_id: int = 5, **kwargs) -> ReviewForm:
    """Helper to create unsaved review forms owned by a journal."""
    defaults = {
        "title": {"en": "Standard review", "fr": "Évaluation standard"},
        "description": {"en": "Default questions"},
    }
    defaults.update(kwargs)
    review_form = ReviewForm(**defaults)
    review_form.association = Association.journal(assoc_id)
    return review_form


def add_review_assignment(session, review_form_id: int, completed: bool = False, declined: bool = False) -> None:
    """Insert a review assignment using `review_form_id`."""
    session.execute(
        insert(tables.review_assignments).values(
            submission_id=1,
            reviewer_id=1,
            review_form_id=review_form_id,
            date_completed=datetime(2024, 1, 1) if completed else None,
            declined=1 if declined else 0,
        )
    )
