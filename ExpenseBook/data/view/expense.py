"""Expense table view and delegates.

This module provides:
    - TitleDelegate: paints the title with the description as a secondary line
    - BadgeDelegate: paints the category as a colored badge
    - DeleteButtonDelegate: paints a delete button and requests deletion on click
    - ExpenseView: the filtered expense table with row actions
"""
import logging
from typing import Optional

from PySide6 import QtWidgets, QtGui, QtCore

from ..model.expense import ExpenseModel, Columns, IdRole, TitleRole, DescriptionRole, CategoryRole
from ...ui import ui
from ...ui.actions import signals

EMPTY_MESSAGE: str = 'No expenses found'


class TitleDelegate(ui.RoundedRowDelegate):
    """Draws the expense title, and its description below it in the secondary color."""

    def paint(self, painter: QtGui.QPainter, option: QtWidgets.QStyleOptionViewItem,
              index: QtCore.QModelIndex) -> None:
        self.paint_background(painter, option, index)

        rect = QtCore.QRect(option.rect).adjusted(ui.Size.Indicator(2.0), 0, -ui.Size.Indicator(1.0), 0)
        title = index.data(TitleRole) or ''
        description = index.data(DescriptionRole)

        painter.save()
        font = QtGui.QFont(option.font)
        font.setPixelSize(ui.Size.MediumText(1.0))
        font.setBold(True)
        metrics = QtGui.QFontMetrics(font)
        painter.setFont(font)
        painter.setPen(ui.Color.Text())

        if not description:
            text = metrics.elidedText(title, QtCore.Qt.ElideRight, rect.width())
            painter.drawText(rect, QtCore.Qt.AlignLeft | QtCore.Qt.AlignVCenter, text)
            painter.restore()
            return

        top = QtCore.QRect(rect)
        top.setBottom(rect.center().y())
        text = metrics.elidedText(title, QtCore.Qt.ElideRight, rect.width())
        painter.drawText(top, QtCore.Qt.AlignLeft | QtCore.Qt.AlignBottom, text)

        font = QtGui.QFont(option.font)
        font.setPixelSize(ui.Size.SmallText(1.0))
        metrics = QtGui.QFontMetrics(font)
        painter.setFont(font)
        painter.setPen(ui.Color.SecondaryText())

        bottom = QtCore.QRect(rect)
        bottom.setTop(rect.center().y() + ui.Size.Separator(2.0))
        text = metrics.elidedText(description, QtCore.Qt.ElideRight, rect.width())
        painter.drawText(bottom, QtCore.Qt.AlignLeft | QtCore.Qt.AlignTop, text)
        painter.restore()


class BadgeDelegate(ui.RoundedRowDelegate):
    """Draws the category of a row as a badge."""

    def paint(self, painter: QtGui.QPainter, option: QtWidgets.QStyleOptionViewItem,
              index: QtCore.QModelIndex) -> None:
        self.paint_background(painter, option, index)

        category = index.data(CategoryRole)
        if not category:
            return
        rect = QtCore.QRect(option.rect).adjusted(ui.Size.Indicator(1.0), 0, -ui.Size.Indicator(1.0), 0)
        ui.paint_badge(painter, rect, category)


class DeleteButtonDelegate(ui.RoundedRowDelegate):
    """Draws a delete button and emits ``signals.expenseDeleteRequested`` when clicked."""

    def button_rect(self, rect: QtCore.QRect) -> QtCore.QRect:
        font = QtGui.QFont()
        font.setPixelSize(ui.Size.SmallText(1.0))
        metrics = QtGui.QFontMetrics(font)

        width = metrics.horizontalAdvance('Delete') + ui.Size.Indicator(4.0)
        height = metrics.height() + ui.Size.Indicator(1.5)

        button = QtCore.QRect(0, 0, width, height)
        button.moveCenter(rect.center())
        button.moveRight(rect.right() - ui.Size.Indicator(2.0))
        return button

    def paint(self, painter: QtGui.QPainter, option: QtWidgets.QStyleOptionViewItem,
              index: QtCore.QModelIndex) -> None:
        self.paint_background(painter, option, index)

        hover = option.state & QtWidgets.QStyle.State_MouseOver
        button = self.button_rect(option.rect)

        painter.save()
        painter.setRenderHint(QtGui.QPainter.Antialiasing, True)

        color = ui.Color.Red()
        if hover:
            background = QtGui.QColor(color)
            background.setAlpha(40)
            painter.setBrush(background)
        else:
            painter.setBrush(QtCore.Qt.NoBrush)
        painter.setPen(QtGui.QPen(color, ui.Size.Separator(1.0)))
        o = ui.Size.Indicator(1.0)
        painter.drawRoundedRect(button, o, o)

        font = QtGui.QFont(option.font)
        font.setPixelSize(ui.Size.SmallText(1.0))
        painter.setFont(font)
        painter.drawText(button, QtCore.Qt.AlignCenter, 'Delete')
        painter.restore()

    def editorEvent(self, event: QtCore.QEvent, model: QtCore.QAbstractItemModel,
                    option: QtWidgets.QStyleOptionViewItem, index: QtCore.QModelIndex) -> bool:
        if event.type() != QtCore.QEvent.MouseButtonRelease:
            return super().editorEvent(event, model, option, index)
        if event.button() != QtCore.Qt.LeftButton:
            return False
        if not self.button_rect(option.rect).contains(event.position().toPoint()):
            return False

        expense_id = index.data(IdRole)
        if expense_id:
            logging.debug(f'Delete requested for expense {expense_id}')
            signals.expenseDeleteRequested.emit(expense_id)
        return True


class ExpenseView(QtWidgets.QTableView):
    """Table of the expenses that pass the current filters."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self.setObjectName('ExpenseBookExpenseView')
        self.verticalHeader().hide()

        self.setSizePolicy(
            QtWidgets.QSizePolicy.Expanding,
            QtWidgets.QSizePolicy.Expanding
        )

        self.setSelectionMode(QtWidgets.QAbstractItemView.SingleSelection)
        self.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectRows)
        self.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        self.setShowGrid(False)
        self.setAlternatingRowColors(False)
        self.setWordWrap(False)
        self.setTextElideMode(QtCore.Qt.ElideRight)
        self.setMouseTracking(True)

        self.setContextMenuPolicy(QtCore.Qt.ActionsContextMenu)

        self._init_model()
        self._init_delegates()
        self._init_actions()
        self._init_section_sizing()
        self._connect_signals()

    def _init_model(self) -> None:
        model = ExpenseModel(parent=self)
        self.setModel(model)

    def _init_delegates(self) -> None:
        last = -1
        self.setItemDelegate(ui.RoundedRowDelegate(Columns.Title.value, last, self))
        self.setItemDelegateForColumn(Columns.Title.value, TitleDelegate(Columns.Title.value, last, self))
        self.setItemDelegateForColumn(Columns.Category.value, BadgeDelegate(Columns.Title.value, last, self))
        self.setItemDelegateForColumn(Columns.Actions.value, DeleteButtonDelegate(Columns.Title.value, last, self))

    def _init_actions(self) -> None:
        action = QtGui.QAction('Add Expense...', self)
        action.setShortcutContext(QtCore.Qt.WidgetWithChildrenShortcut)
        action.triggered.connect(signals.addExpenseRequested)
        self.addAction(action)

        action = QtGui.QAction('Delete Expense', self)
        action.setShortcuts(['delete', 'backspace'])
        action.setShortcutContext(QtCore.Qt.WidgetWithChildrenShortcut)
        action.triggered.connect(self.delete_current)
        self.addAction(action)

    def _connect_signals(self) -> None:
        self.model().modelReset.connect(self.viewport().update)

        @QtCore.Slot(str, object)
        def _on_metadata_changed(key: str, value: object) -> None:
            if key != 'locale':
                return
            self.resizeColumnToContents(Columns.Amount.value)
            self.viewport().update()

        signals.metadataChanged.connect(_on_metadata_changed)
        signals.configSectionChanged.connect(self.viewport().update)

    def _init_section_sizing(self) -> None:
        header = self.horizontalHeader()
        header.setHighlightSections(False)
        header.setSectionResizeMode(Columns.Title.value, QtWidgets.QHeaderView.Stretch)
        header.setSectionResizeMode(Columns.Category.value, QtWidgets.QHeaderView.Interactive)
        header.setSectionResizeMode(Columns.Date.value, QtWidgets.QHeaderView.Interactive)
        header.setSectionResizeMode(Columns.Amount.value, QtWidgets.QHeaderView.Interactive)
        header.setSectionResizeMode(Columns.Actions.value, QtWidgets.QHeaderView.Fixed)
        header.resizeSection(Columns.Category.value, ui.Size.DefaultWidth(0.22))
        header.resizeSection(Columns.Date.value, ui.Size.DefaultWidth(0.16))
        header.resizeSection(Columns.Amount.value, ui.Size.DefaultWidth(0.16))
        header.resizeSection(Columns.Actions.value, ui.Size.DefaultWidth(0.14))

        header = self.verticalHeader()
        header.setSectionResizeMode(QtWidgets.QHeaderView.Fixed)
        header.setDefaultSectionSize(ui.Size.RowHeight(1.6))

    @QtCore.Slot()
    def delete_current(self) -> None:
        """Request deletion of the selected expense."""
        index = self.selectionModel().currentIndex()
        if not index.isValid():
            logging.debug('No valid index')
            return

        expense_id = index.data(IdRole)
        if not expense_id:
            return
        signals.expenseDeleteRequested.emit(expense_id)

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:
        super().paintEvent(event)
        if self.model() and self.model().rowCount():
            return

        painter = QtGui.QPainter(self.viewport())
        font = QtGui.QFont(self.font())
        font.setPixelSize(ui.Size.MediumText(1.0))
        painter.setFont(font)
        painter.setPen(ui.Color.SecondaryText())
        painter.drawText(self.viewport().rect(), QtCore.Qt.AlignCenter, EMPTY_MESSAGE)
        painter.end()
