"""
Helpers Package
===============

Session and transaction utilities shared by the service layer.

Contents
--------
- transactionManagement
    ``db_session_context`` and the ``@transactional`` decorator.
"""
