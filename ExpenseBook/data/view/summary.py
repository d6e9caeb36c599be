"""Summary cards for the headline expense statistics.

The cards always reflect the full store, never the current filters.
"""
import logging
from typing import Optional

from PySide6 import QtWidgets, QtCore

from .. import data
from ...settings import lib
from ...settings import locale
from ...ui import ui
from ...ui.actions import signals


class StatCard(QtWidgets.QFrame):
    """A card with a caption, a large value and a secondary line."""

    def __init__(self, caption: str, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self.setProperty('card', True)

        self.caption_label: Optional[QtWidgets.QLabel] = None
        self.value_label: Optional[QtWidgets.QLabel] = None
        self.detail_label: Optional[QtWidgets.QLabel] = None

        self._create_ui(caption)

    def _create_ui(self, caption: str) -> None:
        QtWidgets.QVBoxLayout(self)
        o = ui.Size.Margin(1.0)
        self.layout().setContentsMargins(o, o, o, o)
        self.layout().setSpacing(ui.Size.Indicator(1.0))

        self.caption_label = QtWidgets.QLabel(caption, parent=self)
        self.caption_label.setProperty('secondary', True)
        self.layout().addWidget(self.caption_label)

        self.value_label = QtWidgets.QLabel(parent=self)
        self.value_label.setProperty('value', True)
        self.value_label.setTextInteractionFlags(QtCore.Qt.TextSelectableByMouse)
        self.layout().addWidget(self.value_label)

        self.detail_label = QtWidgets.QLabel(parent=self)
        self.detail_label.setProperty('secondary', True)
        self.layout().addWidget(self.detail_label)

    def set_caption(self, text: str) -> None:
        self.caption_label.setText(text)

    def set_value(self, text: str, color: Optional[ui.Color] = None) -> None:
        self.value_label.setText(text)
        if color is None:
            self.value_label.setStyleSheet('')
        else:
            self.value_label.setStyleSheet(f'color: {color(qss=True)};')

    def set_detail(self, text: str) -> None:
        self.detail_label.setText(text)


class SummaryWidget(QtWidgets.QWidget):
    """Row of cards showing all-time spending, this month's spending and the change
    against last month.
    """

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self.setObjectName('ExpenseBookSummaryWidget')

        self.total_card: Optional[StatCard] = None
        self.month_card: Optional[StatCard] = None
        self.change_card: Optional[StatCard] = None

        self._statistics: Optional[data.Statistics] = None

        self._create_ui()
        self._connect_signals()
        self.init_data()

    def _create_ui(self) -> None:
        QtWidgets.QHBoxLayout(self)
        self.layout().setContentsMargins(0, 0, 0, 0)
        self.layout().setSpacing(ui.Size.Margin(1.0))

        self.total_card = StatCard('Total Expenses', parent=self)
        self.layout().addWidget(self.total_card, 1)

        self.month_card = StatCard('This Month', parent=self)
        self.layout().addWidget(self.month_card, 1)

        self.change_card = StatCard('Monthly Change', parent=self)
        self.layout().addWidget(self.change_card, 1)

    def _connect_signals(self) -> None:
        signals.initializationRequested.connect(self.init_data)
        signals.expensesChanged.connect(self.init_data)

        @QtCore.Slot(str, object)
        def _on_metadata_changed(key: str, value: object) -> None:
            if key not in ('locale', 'theme'):
                return
            self.update_labels()

        signals.metadataChanged.connect(_on_metadata_changed)

    @property
    def statistics(self) -> Optional[data.Statistics]:
        return self._statistics

    @QtCore.Slot()
    def init_data(self) -> None:
        from ..store import store

        self._statistics = data.get_statistics(store.records())
        logging.debug(
            f'Statistics: total={self._statistics.total}, this month={self._statistics.this_month}, '
            f'last month={self._statistics.last_month}'
        )
        self.update_labels()

    def update_labels(self) -> None:
        stats = self._statistics
        if stats is None:
            return

        _locale = lib.settings['locale'] or locale.DEFAULT_LOCALE

        self.total_card.set_value(locale.format_currency_value(stats.total, _locale))
        self.total_card.set_detail('All time expenses')

        self.month_card.set_value(locale.format_currency_value(stats.this_month, _locale))
        self.month_card.set_detail(locale.format_month(stats.current_month, _locale))

        # Spending going up is bad news
        color = ui.Color.Red if stats.trend == data.Trend.Up else ui.Color.Green
        arrow = '↑' if stats.trend == data.Trend.Up else '↓'
        self.change_card.set_value(
            f'{arrow} {locale.format_signed_currency_value(stats.change, _locale)}',
            color=color
        )
        self.change_card.set_detail('vs last month')
