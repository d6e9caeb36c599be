import enum
import logging
from typing import Any, Optional

import pandas as pd
from PySide6 import QtCore, QtGui

from .. import data
from ...settings import lib
from ...settings import locale
from ...ui import ui
from ...ui.actions import signals

IdRole = QtCore.Qt.UserRole + 1
AmountRole = QtCore.Qt.UserRole + 2
CategoryRole = QtCore.Qt.UserRole + 3
DescriptionRole = QtCore.Qt.UserRole + 4
TitleRole = QtCore.Qt.UserRole + 5


class Columns(enum.IntEnum):
    Title = 0
    Category = 1
    Date = 2
    Amount = 3
    Actions = 4


class ExpenseModel(QtCore.QAbstractTableModel):
    """
    ExpenseModel lists the expenses that pass the current search, category and
    month filters, most recent first.

    The filter values are session state held by the model. Any store mutation or
    filter change re-derives the rows.
    """
    header = ['Title', 'Category', 'Date', 'Amount', 'Actions']

    def __init__(self, parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent=parent)
        self.setObjectName('ExpenseBookExpenseModel')

        self._df: pd.DataFrame = pd.DataFrame(columns=lib.EXPENSE_DATA_COLUMNS)

        self._search_term: str = ''
        self._category: str = lib.ALL
        self._month: str = lib.ALL

        self._connect_signals()
        self.init_data()

    def _connect_signals(self) -> None:
        signals.initializationRequested.connect(self.init_data)
        signals.expensesChanged.connect(self.init_data)

        signals.searchTermChanged.connect(self.set_search_term)
        signals.categoryFilterChanged.connect(self.set_category)
        signals.monthFilterChanged.connect(self.set_month)

        signals.configSectionChanged.connect(self.refresh)
        signals.metadataChanged.connect(self.refresh)

    @property
    def search_term(self) -> str:
        return self._search_term

    @property
    def category(self) -> str:
        return self._category

    @property
    def month(self) -> str:
        return self._month

    @QtCore.Slot(str)
    def set_search_term(self, value: str) -> None:
        self._search_term = value
        self.init_data()

    @QtCore.Slot(str)
    def set_category(self, value: str) -> None:
        self._category = value or lib.ALL
        self.init_data()

    @QtCore.Slot(str)
    def set_month(self, value: str) -> None:
        self._month = value or lib.ALL
        self.init_data()

    def rowCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._df)

    def columnCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self.header)

    def data(self, index: QtCore.QModelIndex, role: int = QtCore.Qt.DisplayRole) -> Any:
        if not index.isValid():
            return None
        row = index.row()
        col = index.column()
        if row < 0 or row >= self.rowCount():
            return None

        record = self._df.iloc[row]
        description = record['description']
        if pd.isna(description):
            description = None

        if role == IdRole:
            return record['id']
        if role == AmountRole:
            return record['amount']
        if role == CategoryRole:
            return record['category']
        if role == DescriptionRole:
            return description
        if role == TitleRole:
            return record['title']

        _locale = lib.settings['locale'] or locale.DEFAULT_LOCALE

        if col == Columns.Title:
            if role == QtCore.Qt.DisplayRole:
                if description:
                    return f'{record["title"]}\n{description}'
                return record['title']
            if role in (QtCore.Qt.ToolTipRole, QtCore.Qt.StatusTipRole):
                return description or record['title']
            if role == QtCore.Qt.FontRole:
                font = QtGui.QFont()
                font.setPixelSize(ui.Size.MediumText(1.0))
                return font

        elif col == Columns.Category:
            if role in (QtCore.Qt.DisplayRole, QtCore.Qt.ToolTipRole, QtCore.Qt.StatusTipRole):
                return record['category']

        elif col == Columns.Date:
            if role == QtCore.Qt.DisplayRole:
                return locale.format_date_value(record['date'], _locale)
            if role in (QtCore.Qt.ToolTipRole, QtCore.Qt.StatusTipRole):
                return record['date']
            if role == QtCore.Qt.ForegroundRole:
                return ui.Color.SecondaryText()

        elif col == Columns.Amount:
            if role in (QtCore.Qt.DisplayRole, QtCore.Qt.ToolTipRole, QtCore.Qt.StatusTipRole):
                return locale.format_currency_value(record['amount'], _locale)
            if role == QtCore.Qt.FontRole:
                font = QtGui.QFont()
                font.setPixelSize(ui.Size.MediumText(1.0))
                font.setBold(True)
                return font
            if role == QtCore.Qt.TextAlignmentRole:
                return QtCore.Qt.AlignRight | QtCore.Qt.AlignVCenter

        elif col == Columns.Actions:
            if role == QtCore.Qt.DisplayRole:
                return 'Delete'
            if role in (QtCore.Qt.ToolTipRole, QtCore.Qt.StatusTipRole):
                return f'Delete "{record["title"]}"'
            if role == QtCore.Qt.TextAlignmentRole:
                return QtCore.Qt.AlignRight | QtCore.Qt.AlignVCenter

        return None

    def headerData(self, section: int, orientation: QtCore.Qt.Orientation,
                   role: int = QtCore.Qt.DisplayRole) -> Any:
        if orientation != QtCore.Qt.Horizontal:
            return None
        if role == QtCore.Qt.DisplayRole:
            return self.header[section]
        if role == QtCore.Qt.TextAlignmentRole:
            if section in (Columns.Amount, Columns.Actions):
                return QtCore.Qt.AlignRight | QtCore.Qt.AlignVCenter
            return QtCore.Qt.AlignLeft | QtCore.Qt.AlignVCenter
        return None

    def expense_id(self, row: int) -> Optional[str]:
        """Return the id of the expense shown in ``row``."""
        if row < 0 or row >= self.rowCount():
            return None
        return self._df.iloc[row]['id']

    @QtCore.Slot()
    def init_data(self) -> None:
        from ..store import store

        self.beginResetModel()
        try:
            self._df = data.filter_expenses(
                store.records(),
                search_term=self._search_term,
                category=self._category,
                month=self._month,
            )
        except Exception as ex:
            logging.error(f'Failed to filter expenses: {ex}')
            self._df = pd.DataFrame(columns=lib.EXPENSE_DATA_COLUMNS)
            raise
        finally:
            self.endResetModel()

    @QtCore.Slot()
    def refresh(self, *args) -> None:
        """Repaint every cell, e.g. after a locale or category style change."""
        if not self.rowCount():
            return
        self.dataChanged.emit(
            self.index(0, 0),
            self.index(self.rowCount() - 1, self.columnCount() - 1),
        )
