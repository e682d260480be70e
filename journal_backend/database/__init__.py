"""
The `database` package is responsible for all interactions with the journal's database.
It provides configuration, the relational schema, entity definitions, DAOs, service
functions and data migrations.

Contents:
    - config:
        Environment-backed settings, the SQLAlchemy engine, shared MetaData
        and the session factory.

    - entities:
        Dataclass entities (journals, announcements, review forms, submission
        comments) and the SQLAlchemy Core tables they are stored in.

    - daos:
        Data Access Objects mapping entities to rows and settings tables,
        the lazy result factory, and the DAO registry.

    - core:
        Service functions that connect the API routers with the DAOs and
        own the transaction boundary.

    - helpers:
        The ``@transactional`` decorator and its session context.

    - migrations:
        Forward-only data migrations and their runner.
"""
