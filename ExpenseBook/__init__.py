"""
ExpenseBook: desktop application for recording and reviewing personal expenses.

This package provides:

- :mod:`ExpenseBook.data` – The in-memory expense store (:mod:`ExpenseBook.data.store`), the derived-state API (:func:`ExpenseBook.data.data.filter_expenses`, :func:`ExpenseBook.data.data.get_statistics`, :func:`ExpenseBook.data.data.get_category_breakdown`) and Qt models and views.
- :mod:`ExpenseBook.ui` – A PySide6-based UI with the main window, add-expense dialog and filter bar.
- :mod:`ExpenseBook.settings` – Settings management, schema validation and locale formatting.
- :mod:`ExpenseBook.status` – Status codes and exceptions.
- :mod:`ExpenseBook.log` – In-app logging with a log viewer.

Use :func:`ExpenseBook.exec_` to launch the application.
"""

import sys

from PySide6 import QtCore

# Fail on Python < 3.11
if not (sys.version_info.major == 3 and sys.version_info.minor >= 11):
    raise RuntimeError('ExpenseBook requires Python 3.11 or higher.')

__version__ = '0.1.0'
__license__ = 'GPL-3.0'
__description__ = 'ExpenseBook: desktop application for recording and reviewing personal expenses.'

from .log import log

log.setup_logging()


def exec_() -> None:
    """Launch the ExpenseBook GUI application and enter its event loop.

    Initializes the QApplication, shows the main window, and starts the Qt event loop.
    """
    from .ui import app
    from .ui import main
    from .ui.actions import signals
    application = app.Application(sys.argv)
    main.show()

    # Ask components to load their data
    QtCore.QTimer.singleShot(100, signals.initializationRequested.emit)

    sys.exit(application.exec())


if __name__ == '__main__':
    exec_()
