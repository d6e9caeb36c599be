"""Main window composition and UI entry points for ExpenseBook.

This module defines:
    - show(): initialize and display the main window
    - HeaderWidget: application name, description and the add-expense button
    - MainWindow: the dashboard with summary cards, category breakdown, filters and the expense table
"""
from typing import Optional

from PySide6 import QtWidgets, QtCore, QtGui

from . import ui
from .actions import signals
from .dialog import AddExpenseDialog
from .filterbar import FilterBar
from ..data.view.category import CategoryView
from ..data.view.expense import ExpenseView
from ..data.view.summary import SummaryWidget
from ..log.view import LogDialog
from ..settings import lib

widget = None

ADDED_MESSAGE: str = 'Expense added successfully!'
REMOVED_MESSAGE: str = 'Expense deleted successfully!'


def show():
    global widget

    if widget is None:
        widget = MainWindow()

    widget.show()


class HeaderWidget(QtWidgets.QWidget):
    """Shows the application name and description next to the add-expense button."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self.setObjectName('ExpenseBookHeader')

        self.title_label = None
        self.description_label = None
        self.add_button = None

        self.setSizePolicy(
            QtWidgets.QSizePolicy.MinimumExpanding,
            QtWidgets.QSizePolicy.Fixed
        )

        self._create_ui()
        self._connect_signals()
        self.update_title()

    def _create_ui(self) -> None:
        QtWidgets.QHBoxLayout(self)
        self.layout().setContentsMargins(0, 0, 0, 0)
        self.layout().setSpacing(ui.Size.Indicator(2.0))

        text_layout = QtWidgets.QVBoxLayout()
        text_layout.setSpacing(0)

        self.title_label = QtWidgets.QLabel(parent=self)
        self.title_label.setProperty('title', True)
        text_layout.addWidget(self.title_label)

        self.description_label = QtWidgets.QLabel(parent=self)
        self.description_label.setProperty('secondary', True)
        text_layout.addWidget(self.description_label)

        self.layout().addLayout(text_layout, 1)

        self.add_button = QtWidgets.QPushButton('+ Add Expense', parent=self)
        self.add_button.setToolTip('Add a new expense (Ctrl+N)')
        self.layout().addWidget(self.add_button, 0, QtCore.Qt.AlignVCenter)

    def _connect_signals(self) -> None:
        self.add_button.clicked.connect(signals.addExpenseRequested)

        @QtCore.Slot(str, object)
        def metadata_changed(key: str, value: object) -> None:
            if key in ('name', 'description'):
                self.update_title()

        signals.metadataChanged.connect(metadata_changed)

    @QtCore.Slot()
    def update_title(self) -> None:
        self.title_label.setText(lib.settings['name'] or lib.app_name)
        self.description_label.setText(lib.settings['description'] or '')


class MainWindow(QtWidgets.QMainWindow):
    """The ExpenseBook dashboard."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self.setObjectName('ExpenseBookMainWindow')
        self.setWindowTitle(lib.settings['name'] or lib.app_name)

        self.header = None
        self.summary_widget = None
        self.category_view = None
        self.filter_bar = None
        self.expense_view = None

        self.add_dialog = None
        self.log_dialog = None

        self._create_ui()
        self._init_actions()
        self._connect_signals()

    def _create_ui(self) -> None:
        central = QtWidgets.QWidget(parent=self)
        QtWidgets.QVBoxLayout(central)
        o = ui.Size.Margin(1.0)
        central.layout().setContentsMargins(o, o, o, o)
        central.layout().setSpacing(o)
        self.setCentralWidget(central)

        self.header = HeaderWidget(parent=central)
        central.layout().addWidget(self.header, 0)

        self.summary_widget = SummaryWidget(parent=central)
        central.layout().addWidget(self.summary_widget, 0)

        label = QtWidgets.QLabel('Spending by Category', parent=central)
        label.setProperty('secondary', True)
        central.layout().addWidget(label, 0)

        self.category_view = CategoryView(parent=central)
        central.layout().addWidget(self.category_view, 0)

        self.filter_bar = FilterBar(parent=central)
        central.layout().addWidget(self.filter_bar, 0)

        self.expense_view = ExpenseView(parent=central)
        central.layout().addWidget(self.expense_view, 1)

        self.setStatusBar(QtWidgets.QStatusBar(parent=self))

    def _init_actions(self) -> None:
        menu = self.menuBar().addMenu('&Expenses')

        action = QtGui.QAction('Add Expense...', self)
        action.setShortcut('Ctrl+N')
        action.setShortcutContext(QtCore.Qt.ApplicationShortcut)
        action.triggered.connect(signals.addExpenseRequested)
        menu.addAction(action)

        menu.addSeparator()

        action = QtGui.QAction('Reset to Sample Data', self)
        action.triggered.connect(self.reset_expenses)
        menu.addAction(action)

        action = QtGui.QAction('Clear All Expenses', self)
        action.triggered.connect(self.clear_expenses)
        menu.addAction(action)

        menu.addSeparator()

        action = QtGui.QAction('Quit', self)
        action.setShortcut(QtGui.QKeySequence.Quit)
        action.triggered.connect(self.close)
        menu.addAction(action)

        menu = self.menuBar().addMenu('&View')

        action = QtGui.QAction('Show Logs...', self)
        action.setShortcut('Ctrl+L')
        action.setShortcutContext(QtCore.Qt.ApplicationShortcut)
        action.triggered.connect(signals.showLogs)
        menu.addAction(action)

    def _connect_signals(self) -> None:
        signals.addExpenseRequested.connect(self.show_add_dialog)
        signals.showLogs.connect(self.show_logs)

        signals.expenseAdded.connect(lambda _: signals.notify.emit(ADDED_MESSAGE))
        signals.expenseRemoved.connect(lambda _: signals.notify.emit(REMOVED_MESSAGE))

        signals.notify.connect(self.show_message)
        signals.error.connect(self.show_message)

        @QtCore.Slot(str, object)
        def metadata_changed(key: str, value: object) -> None:
            if key == 'name':
                self.setWindowTitle(value or lib.app_name)

        signals.metadataChanged.connect(metadata_changed)

    def sizeHint(self) -> QtCore.QSize:
        return QtCore.QSize(
            ui.Size.DefaultWidth(1.6),
            ui.Size.DefaultHeight(1.8)
        )

    @QtCore.Slot(str)
    def show_message(self, message: str) -> None:
        """Show a transient notice in the status bar."""
        timeout = lib.settings['notification_timeout'] or 3000
        self.statusBar().showMessage(message, timeout)

    @QtCore.Slot()
    def show_add_dialog(self) -> None:
        if self.add_dialog is None:
            self.add_dialog = AddExpenseDialog(parent=self)
        self.add_dialog.open()

    @QtCore.Slot()
    def show_logs(self) -> None:
        if self.log_dialog is None:
            self.log_dialog = LogDialog(parent=self)
        self.log_dialog.show()
        self.log_dialog.raise_()
        self.log_dialog.activateWindow()

    @QtCore.Slot()
    def reset_expenses(self) -> None:
        from ..data.store import store
        store.reset(seed=True)

    @QtCore.Slot()
    def clear_expenses(self) -> None:
        from ..data.store import store
        store.clear()
