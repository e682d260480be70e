"""
DAOs Package — Data Access Objects
==================================

Mission
-------
One DAO per entity type, all built on `base_dao.BaseDao`: statement
execution with uniform error logging, two-step row mapping (main row, then
the settings table), and lazy `fetchBy*` results through
`result_factory.DAOResultFactory`.

Contents
--------
- base_dao: shared plumbing and the settings-table extension
- result_factory: `DAOResultFactory`, `RangeInfo`
- dao_registry: `DAORegistry`, `DAOConfigurationError`
- journal_dao, review_form_dao, review_form_element_dao,
  announcement_dao, announcement_type_dao, submission_comment_dao

Conventions
-----------
- Every method takes the active `Session` first; DAOs never commit.
- `fetchById` returns None when the row is missing or out of scope.
- Deletes remove children first, then settings, then the row.
"""
