"""Category breakdown view.

This module provides:
    - CategoryBadgeDelegate and WeightColumnDelegate for custom cell rendering
    - CategoryView for displaying the per-category totals as a table
"""
from typing import Optional

from PySide6 import QtWidgets, QtGui, QtCore

from ..model.category import CategoryModel, Columns, CategoryRole, WeightRole
from ...ui import ui
from ...ui.actions import signals


class CategoryBadgeDelegate(QtWidgets.QStyledItemDelegate):
    """Delegate to draw the category name as a badge."""

    def paint(self, painter: QtGui.QPainter, option: QtWidgets.QStyleOptionViewItem,
              index: QtCore.QModelIndex) -> None:
        category = index.data(CategoryRole)
        if not category:
            return
        ui.paint_badge(painter, option.rect, category)


class WeightColumnDelegate(QtWidgets.QStyledItemDelegate):
    """Delegate to draw a bar showing the category's share of all spending."""

    def paint(self, painter: QtGui.QPainter, option: QtWidgets.QStyleOptionViewItem,
              index: QtCore.QModelIndex) -> None:
        weight = index.data(WeightRole) or 0.0
        category = index.data(CategoryRole)

        painter.save()
        painter.setRenderHint(QtGui.QPainter.Antialiasing)

        rect = QtCore.QRectF(option.rect)
        offset = ui.Size.Indicator(2.0)
        rect = rect.adjusted(offset, 0, -offset, 0)
        center = rect.center()
        rect.setHeight(ui.Size.Indicator(2.0))
        rect.moveCenter(center)

        o = rect.height() / 2.0
        painter.setPen(QtCore.Qt.NoPen)
        painter.setBrush(ui.Color.DarkBackground())
        painter.drawRoundedRect(rect, o, o)

        width = float(rect.width()) * weight
        width = max(width, ui.Size.Separator(1.0)) if weight > 0.0 else width
        rect.setWidth(width)

        color, _ = ui.get_category_colors(category)
        painter.setBrush(color)
        painter.drawRoundedRect(rect, o, o)
        painter.restore()


class CategoryView(QtWidgets.QTableView):
    """Table view for the category breakdown of all expenses."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self.setObjectName('ExpenseBookCategoryView')
        self.horizontalHeader().hide()
        self.verticalHeader().hide()

        self.setSizePolicy(
            QtWidgets.QSizePolicy.Expanding,
            QtWidgets.QSizePolicy.Minimum
        )

        self.setSelectionMode(QtWidgets.QAbstractItemView.NoSelection)
        self.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        self.setFocusPolicy(QtCore.Qt.NoFocus)
        self.setShowGrid(False)
        self.setWordWrap(False)

        self._init_model()
        self._init_delegates()
        self._init_section_sizing()
        self._connect_signals()

    def _init_model(self) -> None:
        model = CategoryModel(parent=self)
        self.setModel(model)

    def _init_delegates(self) -> None:
        self.setItemDelegateForColumn(Columns.Category.value, CategoryBadgeDelegate(self))
        self.setItemDelegateForColumn(Columns.Weight.value, WeightColumnDelegate(self))

    def _init_section_sizing(self) -> None:
        header = self.horizontalHeader()
        header.setSectionResizeMode(Columns.Category.value, QtWidgets.QHeaderView.Interactive)
        header.setSectionResizeMode(Columns.Weight.value, QtWidgets.QHeaderView.Stretch)
        header.setSectionResizeMode(Columns.Amount.value, QtWidgets.QHeaderView.ResizeToContents)
        header.resizeSection(Columns.Category.value, ui.Size.DefaultWidth(0.25))

        header = self.verticalHeader()
        header.setSectionResizeMode(QtWidgets.QHeaderView.Fixed)
        header.setDefaultSectionSize(ui.Size.RowHeight(1.0))

    def _connect_signals(self) -> None:
        self.model().modelReset.connect(self.updateGeometry)

        @QtCore.Slot(str, object)
        def _on_metadata_changed(key: str, value: object) -> None:
            if key != 'locale':
                return
            self.resizeColumnToContents(Columns.Amount.value)
            self.viewport().update()

        signals.metadataChanged.connect(_on_metadata_changed)

    def sizeHint(self) -> QtCore.QSize:
        rows = max(self.model().rowCount(), 1)
        height = rows * self.verticalHeader().defaultSectionSize() + self.frameWidth() * 2
        return QtCore.QSize(ui.Size.DefaultWidth(1.0), height)
