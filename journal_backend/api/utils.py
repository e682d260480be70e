"""
Request utilities: JWT access tokens and FastAPI dependencies.

Functions
---------
create_access_token(data: dict) -> str
    Creates a signed JWT access token with an expiration (`exp`) claim.
verify_token(token: str) -> str | None
    Verify a JWT's signature & expiration and return the subject (`sub`) if valid.
get_dao_registry(request) -> DAORegistry
    The registry built at startup (`app.state.dao_registry`).
require_context(context, registry) -> Journal
    Resolves the journal named by the `{context}` path segment, else 404.
require_token(token) -> str
    Requires a valid `token` cookie, else 401.

Environment contract (from `settings`)
--------------------------------------
SECRET_KEY : str
    HMAC signing key for JWTs.
ALGORITHM : str
    JWT signing algorithm (e.g., "HS256").
ACCESS_TOKEN_EXPIRE_MINUTES : int
    Token lifetime window in minutes.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import Cookie, Depends, HTTPException, Request
from jose import JWTError, jwt

from journal_backend.database.config.config import settings
from journal_backend.database.core.funcs import get_journal_by_path
from journal_backend.database.daos.dao_registry import DAORegistry
from journal_backend.database.entities.journal import Journal

logger = logging.getLogger(__name__)


def create_access_token(data: dict) -> str:
    """
    Create a signed JWT access token.

    Parameters
    ----------
    data : dict
        Claims to embed in the token; `sub` is returned by `verify_token`.

    Returns
    -------
    str
        Encoded JWT string.

    Notes
    ----------
    - Adds an `exp` (expiration) claim calculated from ACCESS_TOKEN_EXPIRE_MINUTES.
    - Uses `settings.SECRET_KEY` and `settings.ALGORITHM` for signing.
    """
    expiration_time = settings.ACCESS_TOKEN_EXPIRE_MINUTES
    encoding = data.copy()
    # exp is a NumericDate (seconds since epoch)
    expires = int(datetime.now().timestamp()) + (int(expiration_time) * 60)
    encoding.update({"exp": expires})
    return jwt.encode(encoding, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> Optional[str]:
    """
    Verify a JWT and return its subject.

    Parameters
    ----------
    token : str
        Encoded JWT string from the client.

    Returns
    ----------
    str | None
        The `sub` claim (subject) if the token is valid, otherwise None.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return payload.get("sub")
    except JWTError as e:
        logger.info(f"Rejected access token: {e}")
        return None


def get_dao_registry(request: Request) -> DAORegistry:
    return request.app.state.dao_registry


def require_context(context: str, registry: DAORegistry = Depends(get_dao_registry)) -> Journal:
    """
    Resolve the `{context}` path segment to an enabled journal.

    Raises
    ------
    HTTPException
        404 if no enabled journal uses that path.
    """
    journal = get_journal_by_path(registry=registry, path=context)
    if journal is None:
        raise HTTPException(status_code=404, detail=f"Unknown journal '{context}'")
    return journal


def require_token(token: str = Cookie(None)) -> str:
    """Return the subject of the `token` cookie; 401 when it is missing or invalid."""
    if not token:
        raise HTTPException(status_code=401, detail="Missing Token")
    subject = verify_token(token)
    if not subject:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return subject
