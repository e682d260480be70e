"""
API Package — FastAPI Router • Models • Request Utils
=====================================================

Mission
-------
This package defines the journal's HTTP interface: public announcement pages
and the management endpoints for review forms, announcements and submission
comments. Handlers stay thin: they check the request (journal context,
access token), call the service functions of `database.core.funcs`, and
return already filtered and localized data.

Contents
--------
- fast_api
    FastAPI router with endpoints for:
      • Public announcements: index, single announcement view (redirects to
        the index for foreign or expired announcements)
      • Review forms: list, create, read, rewrite, delete (409 while in use),
        resequence, elements
      • Announcements: list, create, delete
      • Submission comments: list, create

- models
    Pydantic data contracts for request/response validation.

- utils
    JWT helpers and the FastAPI dependencies `require_context`,
    `require_token` and `get_dao_registry`.
"""
