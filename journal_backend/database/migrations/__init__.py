"""
Migrations Package
==================

Forward-only data migrations run against the shared schema.

Contents
--------
- base
    ``Migration`` base class, ``IrreversibleMigrationError`` and the
    ``run_migrations`` runner (one transaction per migration).
- add_foreign_keys
    ``AddForeignKeysCleanup``: the data cleanup that must precede the
    introduction of foreign key constraints. Irreversible.
"""
