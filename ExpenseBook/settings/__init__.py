"""
Settings package: configuration schema, persistence and locale formatting.

Modules:

- :mod:`ExpenseBook.settings.lib` – Settings schema validation, config paths and the :class:`SettingsAPI`.
- :mod:`ExpenseBook.settings.locale` – Babel backed currency, date and month formatting helpers.
"""
