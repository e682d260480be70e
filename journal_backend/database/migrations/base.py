"""
Migration base
==============

A migration transforms existing data with `up(connection)`; `down(connection)`
reverses it where possible. Migrations that destroy data raise
`IrreversibleMigrationError` from `down` instead of silently doing nothing.

`run_migrations` executes a list of migrations in order, each inside its own
transaction: a failing migration is rolled back and the error propagates,
leaving the migrations before it committed.
"""

import logging
from typing import Iterable

from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)


class IrreversibleMigrationError(Exception):
    """Raised by `Migration.down` when the changes of `up` cannot be undone."""
    pass


class Migration:
    """
    Base class of data migrations.

    Subclasses implement `up` and, when the change can be reverted, `down`.
    """

    name: str = ""

    def __str__(self) -> str:
        return self.name or type(self).__name__

    def up(self, connection: Connection) -> None:
        raise NotImplementedError

    def down(self, connection: Connection) -> None:
        raise IrreversibleMigrationError(f"Downgrade of {self} is not supported.")


def run_migrations(engine: Engine, migrations: Iterable[Migration], downgrade: bool = False) -> None:
    """
    Apply (or revert) migrations in order, one transaction each.

    Parameters
    ----------
    engine : Engine
        Target database.
    migrations : Iterable[Migration]
        Migrations to run; when `downgrade` is True they are reverted in the
        order given.
    downgrade : bool
        Run `down` instead of `up`.

    Raises
    ------
    IrreversibleMigrationError
        If a migration cannot be reverted.
    """
    for migration in migrations:
        direction = "down" if downgrade else "up"
        logger.info(f"Running migration {migration} ({direction})")
        try:
            with engine.begin() as connection:
                if downgrade:
                    migration.down(connection)
                else:
                    migration.up(connection)
        except Exception as e:
            logger.error(f"Migration {migration} ({direction}) failed. Error Message: {e}")
            raise
        logger.info(f"Migration {migration} ({direction}) complete")
