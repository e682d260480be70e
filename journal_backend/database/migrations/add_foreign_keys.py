"""
Add Foreign Keys: data cleanup
==============================

Relationships that used to be enforced only by application code get real
foreign key constraints. Before the constraints can be created the existing
data must satisfy them:

- `categories.parent_id` used 0 for "no parent"; it becomes NULL.
- Settings rows of announcement types and announcements whose owner row
  is gone are deleted.
- Announcements pointing at an unknown announcement type are deleted,
  together with their settings.
- Category settings and publication/category links pointing at missing
  categories or publications are deleted.

The deleted rows cannot be restored, so `down` raises
`IrreversibleMigrationError`.
"""

import logging

from sqlalchemy import and_, delete, select, update
from sqlalchemy.engine import Connection

from journal_backend.database.entities.tables import (
    announcement_settings,
    announcement_type_settings,
    announcement_types,
    announcements,
    categories,
    category_settings,
    publication_categories,
    publications,
)
from journal_backend.database.migrations.base import IrreversibleMigrationError, Migration

logger = logging.getLogger(__name__)


class AddForeignKeysCleanup(Migration):
    """Normalize sentinel ids and remove orphans ahead of foreign key constraints."""

    name = "add_foreign_keys_cleanup"

    def up(self, connection: Connection) -> None:
        updated = connection.execute(
            update(categories).where(categories.c.parent_id == 0).values(parent_id=None)
        ).rowcount
        logger.info(f"Cleared sentinel parent_id of {updated} categories")

        known_types = select(announcement_types.c.type_id)
        self._deleteOrphans(
            connection,
            delete(announcement_type_settings).where(announcement_type_settings.c.type_id.not_in(known_types)),
            "announcement type settings",
        )

        # announcements with a type that no longer exists, then any settings left without an announcement
        self._deleteOrphans(
            connection,
            delete(announcements).where(
                and_(announcements.c.type_id.is_not(None), announcements.c.type_id.not_in(known_types))
            ),
            "announcements",
        )
        self._deleteOrphans(
            connection,
            delete(announcement_settings).where(
                announcement_settings.c.announcement_id.not_in(select(announcements.c.announcement_id))
            ),
            "announcement settings",
        )

        known_categories = select(categories.c.category_id)
        self._deleteOrphans(
            connection,
            delete(category_settings).where(category_settings.c.category_id.not_in(known_categories)),
            "category settings",
        )
        self._deleteOrphans(
            connection,
            delete(publication_categories).where(
                (publication_categories.c.category_id.not_in(known_categories))
                | (publication_categories.c.publication_id.not_in(select(publications.c.publication_id)))
            ),
            "publication categories",
        )

    def _deleteOrphans(self, connection: Connection, statement, label: str) -> int:
        deleted = connection.execute(statement).rowcount
        if deleted:
            logger.warning(f"Deleted {deleted} orphaned {label}")
        return deleted

    def down(self, connection: Connection) -> None:
        raise IrreversibleMigrationError("Downgrade unsupported due to removed data!")
