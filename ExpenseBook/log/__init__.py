"""
Logging subsystem: handlers and views for application logging.

Modules:

- :mod:`ExpenseBook.log.log` – Log handler integrating with Python logging.
- :mod:`ExpenseBook.log.view` – Dialog for browsing the in-memory log tank.
"""
