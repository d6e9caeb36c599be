"""Application-wide Qt signals for ExpenseBook.

This module provides:
    - Signals: custom Qt signals for configuration changes, expense store mutations,
      filter changes and UI actions (showLogs, addExpenseRequested, notify).
"""
import logging

from PySide6 import QtCore


class Signals(QtCore.QObject):
    """Centralized Qt signals for application config, expense and UI events."""
    initializationRequested = QtCore.Signal()

    configSectionChanged = QtCore.Signal(str)
    metadataChanged = QtCore.Signal(str, object)

    expenseAdded = QtCore.Signal(str)
    expenseRemoved = QtCore.Signal(str)
    expensesChanged = QtCore.Signal()
    expenseDeleteRequested = QtCore.Signal(str)

    searchTermChanged = QtCore.Signal(str)
    categoryFilterChanged = QtCore.Signal(str)
    monthFilterChanged = QtCore.Signal(str)

    addExpenseRequested = QtCore.Signal()
    showLogs = QtCore.Signal()

    notify = QtCore.Signal(str)
    error = QtCore.Signal(str)

    def __init__(self):
        super().__init__()
        self._connect_signals()

    def _connect_signals(self):
        @QtCore.Slot(str)
        def delete_requested(expense_id: str) -> None:
            from ..data.store import store
            store.remove(expense_id)

        self.expenseDeleteRequested.connect(delete_requested)

        @QtCore.Slot(str, object)
        def metadata_changed(key: str, value: object) -> None:
            if key != 'theme':
                return

            try:
                from . import ui
                ui.apply_theme()
            except (RuntimeError, FileNotFoundError) as ex:
                logging.debug(f'Error applying theme: {ex}')

        self.metadataChanged.connect(metadata_changed)


signals = Signals()
