"""
UI package: application signals, main application setup, theming, and widgets.

This package provides:

- :mod:`ExpenseBook.ui.actions` – Application-wide Qt signals.
- :mod:`ExpenseBook.ui.app` – QApplication subclass and setup functions for high-DPI support.
- :mod:`ExpenseBook.ui.main` – Main window composition and UI components.
- :mod:`ExpenseBook.ui.ui` – Styling constants for sizes, colors and category badges.
- :mod:`ExpenseBook.ui.filterbar` – Search, category and month filter widgets.
- :mod:`ExpenseBook.ui.dialog` – The add-expense dialog.
"""
