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

TotalRole = QtCore.Qt.UserRole + 1
WeightRole = QtCore.Qt.UserRole + 2
CategoryRole = QtCore.Qt.UserRole + 3


class Columns(enum.IntEnum):
    Category = 0
    Weight = 1
    Amount = 2


class CategoryModel(QtCore.QAbstractTableModel):
    """Per-category spending totals of the whole store, largest first."""
    header = ['Category', '', 'Amount']

    def __init__(self, parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent=parent)
        self.setObjectName('ExpenseBookCategoryModel')

        self._df: pd.DataFrame = pd.DataFrame(columns=lib.BREAKDOWN_DATA_COLUMNS)

        self._connect_signals()
        self.init_data()

    def _connect_signals(self) -> None:
        signals.initializationRequested.connect(self.init_data)
        signals.expensesChanged.connect(self.init_data)
        signals.configSectionChanged.connect(self.init_data)

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

        if role == CategoryRole:
            return record['category']
        if role == TotalRole:
            return record['total']
        if role == WeightRole:
            return float(record['weight'])

        if role in (QtCore.Qt.ToolTipRole, QtCore.Qt.StatusTipRole):
            return f'{record["category"]}: {record["weight"]:.0%} of all spending'

        if col == Columns.Category:
            if role == QtCore.Qt.DisplayRole:
                return record['category']

        elif col == Columns.Amount:
            if role == QtCore.Qt.DisplayRole:
                return locale.format_currency_value(record['total'], lib.settings['locale'])
            if role == QtCore.Qt.FontRole:
                font = QtGui.QFont()
                font.setPixelSize(ui.Size.MediumText(1.0))
                font.setBold(True)
                return font
            if role == QtCore.Qt.TextAlignmentRole:
                return QtCore.Qt.AlignRight | QtCore.Qt.AlignVCenter

        return None

    def headerData(self, section: int, orientation: QtCore.Qt.Orientation,
                   role: int = QtCore.Qt.DisplayRole) -> Any:
        if role == QtCore.Qt.DisplayRole and orientation == QtCore.Qt.Horizontal:
            return self.header[section]
        return None

    @QtCore.Slot()
    def init_data(self, *args) -> None:
        from ..store import store

        logging.debug('Initializing category breakdown')
        self.beginResetModel()
        try:
            self._df = data.get_category_breakdown(store.records())
        except Exception as ex:
            logging.error(f'Failed to compute the category breakdown: {ex}')
            self._df = pd.DataFrame(columns=lib.BREAKDOWN_DATA_COLUMNS)
            raise
        finally:
            self.endResetModel()
