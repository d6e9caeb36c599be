"""
ExpenseBook data package: expense store, derived state, models, and views.

This package provides:

- :mod:`ExpenseBook.data.store` – The session-scoped expense store and the expense record types.
- :mod:`ExpenseBook.data.data` – Filtering, summary statistics and the per-category breakdown (:func:`ExpenseBook.data.data.filter_expenses`, :func:`ExpenseBook.data.data.get_statistics`, :func:`ExpenseBook.data.data.get_category_breakdown`).
- :mod:`ExpenseBook.data.model` – Qt table models (:class:`ExpenseBook.data.model.expense.ExpenseModel`, :class:`ExpenseBook.data.model.category.CategoryModel`) over the derived state.
- :mod:`ExpenseBook.data.view` – Qt views and delegates for the expense table, category breakdown and summary cards.
"""
