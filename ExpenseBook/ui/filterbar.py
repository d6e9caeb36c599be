"""
FilterBar Module.

Provides the search field and the category and month selectors that narrow the
expense listing. The selected month is kept as a "YYYY-MM" formatted string, or
``lib.ALL``.

Classes:
    SearchEdit: Line edit emitting the search term as it is typed.
    CategoryFilterCombo: Combo box for choosing a category or all categories.
    MonthFilterCombo: Combo box for choosing the current, previous or all months.
    FilterBar: Row of the three filter widgets.

"""
import logging

from PySide6 import QtCore, QtWidgets

from . import ui
from .actions import signals
from ..data import data
from ..settings import lib
from ..settings import locale


class SearchEdit(QtWidgets.QLineEdit):
    """
    Line edit for the free-text search.

    Signals:
        searchTermChanged(str): Emitted on every edit.
    """

    def __init__(self, parent=None):
        super().__init__(parent=parent)
        self.setPlaceholderText('Search expenses...')
        self.setClearButtonEnabled(True)
        self.setSizePolicy(
            QtWidgets.QSizePolicy.Expanding,
            QtWidgets.QSizePolicy.Fixed
        )
        self.textChanged.connect(signals.searchTermChanged)


class CategoryFilterCombo(QtWidgets.QComboBox):
    """
    Combo box listing "All Categories" followed by every category.

    The item data holds the filter value passed to ``signals.categoryFilterChanged``.
    """

    def __init__(self, parent=None):
        super().__init__(parent=parent)
        self.setMinimumWidth(ui.Size.DefaultWidth(0.3))

        self._init_data()
        self._connect_signals()

    def _init_data(self):
        self.blockSignals(True)
        self.clear()
        self.addItem('All Categories', userData=lib.ALL)
        for category in lib.CATEGORIES:
            self.addItem(category, userData=category)
        self.setCurrentIndex(0)
        self.blockSignals(False)

    def _connect_signals(self):
        self.currentIndexChanged.connect(self.emit_category_changed)

    @QtCore.Slot(int)
    def emit_category_changed(self, idx):
        value = self.itemData(idx) or lib.ALL
        logging.debug(f'Category filter changed: {value}')
        signals.categoryFilterChanged.emit(value)

    def get_value(self):
        return self.currentData() or lib.ALL


class MonthFilterCombo(QtWidgets.QComboBox):
    """
    Combo box offering exactly "All Months", the current month and the previous month.

    Month items are labelled with the localized month name and hold their
    "YYYY-MM" key as item data.
    """

    def __init__(self, parent=None):
        super().__init__(parent=parent)
        self.setMinimumWidth(ui.Size.DefaultWidth(0.3))

        self._init_data()
        self._connect_signals()

    def _init_data(self):
        """Rebuild the items, keeping the selected month when it is still offered."""
        selected = self.currentData() or lib.ALL
        _locale = lib.settings['locale'] or locale.DEFAULT_LOCALE

        this_month = data.current_month()
        last_month = data.previous_month()

        self.blockSignals(True)
        self.clear()
        self.addItem('All Months', userData=lib.ALL)
        self.addItem(locale.format_month(this_month, _locale), userData=this_month)
        self.addItem(locale.format_month(last_month, _locale), userData=last_month)

        idx = self.findData(selected)
        self.setCurrentIndex(idx if idx >= 0 else 0)
        self.blockSignals(False)

        if idx < 0 and selected != lib.ALL:
            self.emit_month_changed(0)

    def _connect_signals(self):
        self.currentIndexChanged.connect(self.emit_month_changed)
        signals.initializationRequested.connect(self._init_data)

        @QtCore.Slot(str, object)
        def _on_metadata_changed(key, value):
            if key != 'locale':
                return
            self._init_data()

        signals.metadataChanged.connect(_on_metadata_changed)

    @QtCore.Slot(int)
    def emit_month_changed(self, idx):
        value = self.itemData(idx) or lib.ALL
        logging.debug(f'Month filter changed: {value}')
        signals.monthFilterChanged.emit(value)

    def get_value(self):
        return self.currentData() or lib.ALL


class FilterBar(QtWidgets.QWidget):
    """Row holding the search field and the category and month selectors."""

    def __init__(self, parent=None):
        super().__init__(parent=parent)
        self.setObjectName('ExpenseBookFilterBar')

        self.search_edit = None
        self.category_combo = None
        self.month_combo = None

        self.setSizePolicy(
            QtWidgets.QSizePolicy.Expanding,
            QtWidgets.QSizePolicy.Maximum
        )

        self._create_ui()

    def _create_ui(self):
        QtWidgets.QHBoxLayout(self)
        self.layout().setContentsMargins(0, 0, 0, 0)
        self.layout().setSpacing(ui.Size.Indicator(2.0))

        self.search_edit = SearchEdit(self)
        self.layout().addWidget(self.search_edit, 1)

        self.category_combo = CategoryFilterCombo(self)
        self.layout().addWidget(self.category_combo, 0)

        self.month_combo = MonthFilterCombo(self)
        self.layout().addWidget(self.month_combo, 0)
