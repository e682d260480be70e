"""
Schema — SQLAlchemy Core Tables
===============================

Every entity is stored in a primary table plus, where it owns localized or
variable fields, a ``<entity>_settings`` table keyed by
(entity id, locale, setting name). All tables are registered on the shared
``metadata`` from ``connection_engine`` so ``metadata.create_all`` builds the
whole schema.

Settings tables
~~~~~~~~~~~~~~~
- ``locale`` is ``''`` for non-localized (additional) settings.
- ``setting_value`` is free text; DAOs decide how to encode non-string values.

Associations
~~~~~~~~~~~~
``review_forms`` and ``announcements`` reference their parent through the
generic ``assoc_type`` / ``assoc_id`` pair. ``announcement_types`` and
``categories`` and ``submissions`` use typed ``context_id`` foreign keys.
"""

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Table,
    TEXT,
    UniqueConstraint,
)

from journal_backend.database.config.connection_engine import metadata


def settings_table(name: str, id_column: str, parent: str) -> Table:
    """
    Build a settings table for an entity.

    Parameters
    ----------
    name : str
        Table name, conventionally ``<entity>_settings``.
    id_column : str
        Column holding the owning entity's id.
    parent : str
        ``table.column`` the id column references.

    Returns
    -------
    Table
        The registered table.
    """
    return Table(
        name,
        metadata,
        Column(id_column, Integer, ForeignKey(parent), nullable=False),
        Column("locale", String(14), nullable=False, default=""),
        Column("setting_name", String(255), nullable=False),
        Column("setting_value", TEXT, nullable=True),
        UniqueConstraint(id_column, "locale", "setting_name", name=f"{name}_pkey"),
        Index(f"{name}_{id_column}", id_column),
    )


# --------------------------------------------------------------------
# Journals (the tenant / context)
# --------------------------------------------------------------------
journals = Table(
    "journals",
    metadata,
    Column("journal_id", Integer, primary_key=True, autoincrement=True),
    Column("path", String(32), nullable=False, unique=True),
    Column("seq", Float, nullable=False, default=0),
    Column("primary_locale", String(14), nullable=False),
    Column("enabled", SmallInteger, nullable=False, default=1),
)

journal_settings = settings_table("journal_settings", "journal_id", "journals.journal_id")

# --------------------------------------------------------------------
# Users (only what submission comments need to resolve author details)
# --------------------------------------------------------------------
users = Table(
    "users",
    metadata,
    Column("user_id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(32), nullable=False, unique=True),
    Column("email", String(255), nullable=False),
    Column("given_name", String(255), nullable=True),
    Column("family_name", String(255), nullable=True),
)

# --------------------------------------------------------------------
# Review forms and their elements
# --------------------------------------------------------------------
review_forms = Table(
    "review_forms",
    metadata,
    Column("review_form_id", Integer, primary_key=True, autoincrement=True),
    Column("assoc_type", Integer, nullable=False),
    Column("assoc_id", Integer, nullable=False),
    Column("seq", Float, nullable=True),
    Column("is_active", SmallInteger, nullable=True),
    Index("review_forms_assoc", "assoc_type", "assoc_id"),
)

review_form_settings = settings_table(
    "review_form_settings", "review_form_id", "review_forms.review_form_id"
)

review_form_elements = Table(
    "review_form_elements",
    metadata,
    Column("review_form_element_id", Integer, primary_key=True, autoincrement=True),
    Column("review_form_id", Integer, ForeignKey("review_forms.review_form_id"), nullable=False),
    Column("seq", Float, nullable=True),
    Column("element_type", Integer, nullable=True),
    Column("required", SmallInteger, nullable=True),
    Column("included", SmallInteger, nullable=True),
    Index("review_form_elements_review_form_id", "review_form_id"),
)

review_form_element_settings = settings_table(
    "review_form_element_settings",
    "review_form_element_id",
    "review_form_elements.review_form_element_id",
)

# Review assignments only matter here as the dependents counted by the
# review form usage aggregates.
review_assignments = Table(
    "review_assignments",
    metadata,
    Column("review_id", Integer, primary_key=True, autoincrement=True),
    Column("submission_id", Integer, nullable=False),
    Column("reviewer_id", Integer, nullable=False),
    Column("review_form_id", Integer, nullable=True),
    Column("date_completed", DateTime, nullable=True),
    Column("declined", SmallInteger, nullable=False, default=0),
    Index("review_assignments_form_id", "review_form_id"),
)

# --------------------------------------------------------------------
# Announcements
# --------------------------------------------------------------------
announcement_types = Table(
    "announcement_types",
    metadata,
    Column("type_id", Integer, primary_key=True, autoincrement=True),
    Column("context_id", Integer, ForeignKey("journals.journal_id"), nullable=False),
    Index("announcement_types_context_id", "context_id"),
)

announcement_type_settings = settings_table(
    "announcement_type_settings", "type_id", "announcement_types.type_id"
)

announcements = Table(
    "announcements",
    metadata,
    Column("announcement_id", Integer, primary_key=True, autoincrement=True),
    Column("assoc_type", SmallInteger, nullable=True),
    Column("assoc_id", Integer, nullable=False),
    Column("type_id", Integer, ForeignKey("announcement_types.type_id"), nullable=True),
    Column("date_expire", DateTime, nullable=True),
    Column("date_posted", DateTime, nullable=False),
    Index("announcements_assoc", "assoc_type", "assoc_id"),
)

announcement_settings = settings_table(
    "announcement_settings", "announcement_id", "announcements.announcement_id"
)

# --------------------------------------------------------------------
# Submissions (only the owning journal) and their comments
# --------------------------------------------------------------------
submissions = Table(
    "submissions",
    metadata,
    Column("submission_id", Integer, primary_key=True, autoincrement=True),
    Column("context_id", Integer, ForeignKey("journals.journal_id"), nullable=False),
    Index("submissions_context_id", "context_id"),
)

submission_comments = Table(
    "submission_comments",
    metadata,
    Column("comment_id", Integer, primary_key=True, autoincrement=True),
    Column("comment_type", Integer, nullable=True),
    Column("role_id", Integer, nullable=False),
    Column("submission_id", Integer, nullable=False),
    Column("assoc_id", Integer, nullable=False),
    Column("author_id", Integer, nullable=False),
    Column("comment_title", TEXT, nullable=True),
    Column("comments", TEXT, nullable=True),
    Column("date_posted", DateTime, nullable=True),
    Column("date_modified", DateTime, nullable=True),
    Column("viewable", SmallInteger, nullable=True),
    Index("submission_comments_submission_id", "submission_id"),
)

# --------------------------------------------------------------------
# Categories and publications (touched by the foreign key cleanup migration)
# --------------------------------------------------------------------
categories = Table(
    "categories",
    metadata,
    Column("category_id", Integer, primary_key=True, autoincrement=True),
    Column("context_id", Integer, ForeignKey("journals.journal_id"), nullable=False),
    Column("parent_id", Integer, ForeignKey("categories.category_id"), nullable=True),
    Column("seq", Float, nullable=True),
    Column("path", String(255), nullable=False),
)

category_settings = settings_table("category_settings", "category_id", "categories.category_id")

publications = Table(
    "publications",
    metadata,
    Column("publication_id", Integer, primary_key=True, autoincrement=True),
    Column("submission_id", Integer, nullable=False),
)

publication_categories = Table(
    "publication_categories",
    metadata,
    Column("publication_category_id", Integer, primary_key=True, autoincrement=True),
    Column("publication_id", Integer, ForeignKey("publications.publication_id"), nullable=False),
    Column("category_id", Integer, ForeignKey("categories.category_id"), nullable=False),
    UniqueConstraint("publication_id", "category_id", name="publication_categories_id"),
)
