"""
Entities Package — Domain Records and Schema
============================================

The `entities` package defines the records the persistence layer produces and
consumes, and the SQLAlchemy Core tables they are stored in. Entities are
plain dataclasses with typed fields; they carry no database state, so they
can be handed to the API layer after the session that loaded them is closed.

Conventions
-----------
- `id` is `None` until the DAO inserts the record and assigns the generated key
- Localized fields are `dict[locale, str]` and live in `<entity>_settings`
- Owners are referenced through `Association` (closed `AssocType` + id) or
  through typed `context_id` columns

Contents
--------
- tables
    Core `Table` definitions registered on the shared `metadata`.

- association
    `AssocType` enumeration and the `Association` value object.

- localization
    `localize(...)` helper resolving a localized field for a locale.

- journal
    `Journal`, the request context / tenant.

- review_form
    `ReviewForm`, `ReviewFormElement` and `ElementType`.

- announcement
    `Announcement` and `AnnouncementType`.

- submission_comment
    `SubmissionComment` and `CommentType`.
"""
