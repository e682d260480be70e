"""
DAO Registry
============

Purpose
-------
Keeps exactly one instance of every DAO class per registry. The application
builds one registry at startup (`app.state.dao_registry`) and passes it down
to the service layer; DAOs receive it too so they can reach collaborators.

Behavior
--------
- `get(name)` returns the cached DAO, importing and constructing it on first
  use from the name → dotted path map.
- `register(name, dao)` replaces an entry and returns the previous instance
  (or None), e.g. to swap in a test double.
- An unknown name is a configuration error: `DAOConfigurationError` is raised
  immediately and never retried.
"""

import logging
from importlib import import_module
from typing import Dict, Optional

logger = logging.getLogger(__name__)


DAO_CLASSES: Dict[str, str] = {
    "JournalDao": "journal_backend.database.daos.journal_dao.JournalDao",
    "ReviewFormDao": "journal_backend.database.daos.review_form_dao.ReviewFormDao",
    "ReviewFormElementDao": "journal_backend.database.daos.review_form_element_dao.ReviewFormElementDao",
    "AnnouncementDao": "journal_backend.database.daos.announcement_dao.AnnouncementDao",
    "AnnouncementTypeDao": "journal_backend.database.daos.announcement_type_dao.AnnouncementTypeDao",
    "SubmissionCommentDao": "journal_backend.database.daos.submission_comment_dao.SubmissionCommentDao",
}
"""Default mapping of DAO names to their implementing classes."""


class DAOConfigurationError(RuntimeError):
    """Raised when a DAO name cannot be resolved to an implementing class."""
    pass


class DAORegistry:
    """
    Container of DAO singletons.

    Parameters
    ----------
    dao_classes : dict[str, str] | None
        Name → ``module.ClassName`` map; defaults to `DAO_CLASSES`.
    """

    def __init__(self, dao_classes: Optional[Dict[str, str]] = None):
        self._dao_classes = dict(DAO_CLASSES if dao_classes is None else dao_classes)
        self._daos: Dict[str, object] = {}

    def _resolve(self, name: str):
        qualified_name = self._dao_classes.get(name)
        if not qualified_name:
            raise DAOConfigurationError(f"Unrecognized DAO {name}!")
        module_name, _, class_name = qualified_name.rpartition(".")
        try:
            return getattr(import_module(module_name), class_name)
        except (ImportError, AttributeError) as e:
            raise DAOConfigurationError(f"DAO {name} maps to {qualified_name}, which cannot be loaded: {e}") from e

    def get(self, name: str):
        """
        Return the DAO registered under `name`, constructing it on first use.

        Raises
        ------
        DAOConfigurationError
            If `name` has no known implementing class.
        """
        if name not in self._daos:
            dao_class = self._resolve(name)
            self._daos[name] = dao_class(self)
            logger.debug(f"Instantiated {name} ({dao_class.__module__})")
        return self._daos[name]

    def register(self, name: str, dao):
        """
        Register `dao` under `name`.

        Returns
        -------
        object | None
            The previously registered DAO, if any.
        """
        previous = self._daos.get(name)
        self._daos[name] = dao
        return previous

    def registered(self) -> Dict[str, object]:
        """Snapshot of the DAOs instantiated or registered so far."""
        return dict(self._daos)
