"""
Database Transaction Management
===============================

Utilities for managing SQLAlchemy sessions with a context variable and a
decorator-based transaction wrapper.

A session is propagated implicitly across nested calls: the outermost
``@transactional`` function opens it, commits or rolls it back, and closes
it; inner decorated functions reuse it. DAOs never commit.

Key features
~~~~~~~~~~~~
- Context variable storing the active session
- Implicit reuse of an existing session by nested calls
- Commit on success, rollback on failure, close in every case
"""

import contextvars
import logging
from functools import wraps

from journal_backend.database.config.connection_engine import SessionLocal

logger = logging.getLogger(__name__)

db_session_context = contextvars.ContextVar("db_session_context", default=None)
"""Context variable storing the active SQLAlchemy session."""


def transactional(func):
    """
    Decorator running a function inside a managed SQLAlchemy transaction.

    Ensures that:
    - If a session already exists in context, it is reused.
    - Otherwise, a new session is created, committed, and closed.
    - On errors, the session is rolled back and closed, and the error re-raised.

    Parameters
    ----------
    func : callable
        The function to wrap. It must accept a `session` keyword argument;
        its other arguments are passed by keyword.

    Returns
    -------
    callable
        The wrapped function, executed within a database transaction.

    Example
    -------
    >>> @transactional
    ... def rename_journal(session=None, registry=None, journal_id=None, name=None):
    ...     dao = registry.get("JournalDao")
    ...     journal = dao.fetchById(session, journal_id)
    ...     journal.name = {"en": name}
    ...     return dao.updateJournal(session, journal)
    ...
    >>> rename_journal(registry=registry, journal_id=1, name="Journal of Tests")
    """
    @wraps(func)
    def wrap_func(*args, **kwargs):
        session = db_session_context.get()
        if session is not None:
            return func(*args, session=session, **kwargs)

        session = SessionLocal()
        token = db_session_context.set(session)

        try:
            result = func(*args, session=session, **kwargs)
            session.flush()
            session.commit()
        except Exception as e:
            logger.warning(f"Rolling back transaction of {func.__name__}: {e}")
            session.rollback()
            raise
        finally:
            session.close()
            db_session_context.reset(token)

        return result

    return wrap_func
