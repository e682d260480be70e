"""
Connection Engine (SQLAlchemy)

Purpose
-------
Centralizes database initialization for the application:
- Builds a SQLAlchemy connection URL from environment-backed settings.
- Creates the Engine (connection pool + SQL execution entry point).
- Defines shared MetaData holding every table of the schema.
- Exposes the session factory used by the transaction helpers.

Notes
-----
- Uses `URL.create(...)` to avoid hardcoding credentials and to keep configuration
  environment-driven (e.g., via `.env`, container secrets, or deployment vars).
- An in-memory SQLite database lives inside a single connection, so it is
  served through a `StaticPool` shared by every session.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import URL
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.schema import MetaData

from journal_backend.database.config.config import settings

# --------------------------------------------------------------------
# Construct the SQLAlchemy connection URL using values from Settings.
# --------------------------------------------------------------------
connection_url = URL.create(
    drivername=settings.DB_DRIVER_NAME,   # e.g., "postgresql+psycopg2", "sqlite"
    username=settings.DB_USERNAME,        # Database username
    password=settings.DB_PASSWORD,        # Database password
    host=settings.DB_HOST,                # Hostname or IP of the DB server
    port=settings.DB_PORT,                # Port of the DB server
    database=settings.DB_DATABASE_NAME    # Name of the database
)
"""Constructs the SQLAlchemy connection URL using values from Settings."""


def _engine_options(url: URL) -> dict:
    """
    Dialect specific keyword arguments for `create_engine`.

    Parameters
    ----------
    url : URL
        The connection URL the engine will be built for.

    Returns
    -------
    dict
        Extra options; empty for server databases.
    """
    if url.get_backend_name() != "sqlite":
        return {}
    options = {"connect_args": {"check_same_thread": False}}
    if url.database in (None, "", ":memory:"):
        options["poolclass"] = StaticPool
    return options


# --------------------------------------------------------------------
# Engine object: core interface to the database.
# --------------------------------------------------------------------
connection_engine = create_engine(connection_url, echo=settings.DB_ECHO, **_engine_options(connection_url))
"""Engine object: Core interface to the database.
Responsible for managing connections, executing SQL, and pooling.
"""

# --------------------------------------------------------------------
# Metadata object: stores schema-level information about tables,
# constraints, indexes, etc. Shared across all table definitions.
# --------------------------------------------------------------------
metadata = MetaData()
"""
Metadata object: Stores schema-level information about tables, constraints, indexes, etc.
"""

# --------------------------------------------------------------------
# Session factory: every request/service call opens its own session.
# --------------------------------------------------------------------
SessionLocal = sessionmaker(bind=connection_engine, expire_on_commit=False)
"""Session factory bound to `connection_engine`."""
