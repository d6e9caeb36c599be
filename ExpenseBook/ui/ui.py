"""UI styling utilities for ExpenseBook.

This module provides:
    - Theme: supported UI themes (light, dark)
    - Size: standardized size constants and scaling logic
    - Color: standardized color palette for widgets and themes
    - Stylesheet loading and theme application
    - Category badge colors and painting helpers
"""
import enum
import logging
import math
import os
import re
from typing import Optional, Tuple

from PySide6 import QtWidgets, QtGui, QtCore


class Theme(enum.StrEnum):
    Light = 'light'
    Dark = 'dark'


class Size(enum.Enum):
    """Enumeration of size values used for UI scaling."""
    SmallText = 11.0
    MediumText = 12.0
    LargeText = 16.0
    Indicator = 4.0
    Separator = 1.0
    Margin = 18.0
    RowHeight = 34.0
    DefaultWidth = 640.0
    DefaultHeight = 480.0

    def __new__(cls, value):
        obj = object.__new__(cls)
        obj._value_ = float(value)
        return obj

    def __call__(self, multiplier=1.0, apply_scale=True):
        """
        Returns the scaled size value.

        Args:
            multiplier (float): A multiplier to apply to the size.
            apply_scale (bool): If True, applies UI scaling factors.

        Returns:
            int: The scaled size.
        """
        if apply_scale:
            return round(self.value * float(multiplier))
        return round(self._value_ * float(multiplier))

    @property
    def value(self):
        """float: The scaled size value."""
        return self.size(self._value_)

    @classmethod
    def size(cls, value, ui_scale_factor=1.0, dpi=72.0):
        """Scale a value by DPI and UI scale factor."""
        return math.ceil(float(value) * (float(dpi) / 72.0)) * float(ui_scale_factor)


class Color(enum.Enum):
    """Enumeration of colours used across the UI."""

    Transparent = {
        Theme.Light.value: (0, 0, 0, 0),
        Theme.Dark.value: (0, 0, 0, 0),
    }
    VeryDarkBackground = {
        Theme.Light.value: (249, 250, 251),
        Theme.Dark.value: (30, 30, 30),
    }
    Panel = {
        Theme.Light.value: (255, 255, 255),
        Theme.Dark.value: (40, 40, 40),
    }
    DarkBackground = {
        Theme.Light.value: (229, 231, 235),
        Theme.Dark.value: (55, 55, 55),
    }
    Background = {
        Theme.Light.value: (209, 213, 219),
        Theme.Dark.value: (75, 75, 75),
    }
    DisabledText = {
        Theme.Light.value: (156, 163, 175),
        Theme.Dark.value: (135, 135, 135),
    }
    SecondaryText = {
        Theme.Light.value: (75, 85, 99),
        Theme.Dark.value: (185, 185, 185),
    }
    Text = {
        Theme.Light.value: (17, 24, 39),
        Theme.Dark.value: (225, 225, 225),
    }
    SelectedText = {
        Theme.Light.value: (0, 0, 0),
        Theme.Dark.value: (255, 255, 255),
    }
    Red = {
        Theme.Light.value: (239, 68, 68),
        Theme.Dark.value: (229, 114, 114),
    }
    Green = {
        Theme.Light.value: (34, 197, 94),
        Theme.Dark.value: (90, 200, 155),
    }

    @classmethod
    def _get_theme(cls):
        from ..settings import lib
        theme = lib.settings['theme']
        if theme not in [f.value for f in Theme]:
            theme = Theme.Light.value
        return theme

    def __new__(cls, v):
        if not isinstance(v, dict):
            raise ValueError(f'Invalid color value: {v}. Must be a dictionary, got {type(v)}: {v}')
        obj = object.__new__(cls)
        obj._value_ = v
        return obj

    def __call__(self, qss=False):
        """
        Returns a QColor or CSS rgba string.

        Args:
            qss (bool): If True, returns a CSS rgba string suitable for QSS.

        Returns:
            QColor or str: A QColor instance if qss=False, otherwise a CSS rgba string.
        """
        theme = self._get_theme()
        if theme not in self._value_:
            theme = Theme.Light.value

        color = QtGui.QColor(*self._value_[theme])
        if not qss:
            return color

        return self.rgb(color)

    @staticmethod
    def rgb(color):
        """Returns the CSS rgba string for a QColor."""
        rgb = [str(f) for f in color.getRgb()]
        return f'rgba({",".join(rgb)})'


def init_stylesheet():
    """Loads and expands the custom style sheet used by the app.

    The style sheet template is stored in the ``config/stylesheet.qss`` file. Tokens are
    written as ``<ColorName>`` or ``<SizeName@multiplier>``.

    Returns:
        str: The style sheet.

    """
    if not QtWidgets.QApplication.instance():
        raise RuntimeError('init_stylesheet() must be called after a QApplication is initiated.')

    from ..settings import lib
    if not os.path.isfile(lib.settings.stylesheet_path):
        raise FileNotFoundError(f'Style sheet file not found: {lib.settings.stylesheet_path}')

    with open(lib.settings.stylesheet_path, 'r', encoding='utf-8') as f:
        qss = f.read()

    kwargs = {}

    for enum_ in Color:
        kwargs[enum_.name] = Color.rgb(enum_())

    for enum_ in Size:
        for i in [float(f) / 10.0 for f in range(1, 101)]:
            key = f'{enum_.name}@{i:.1f}'
            if key in kwargs:
                raise KeyError(f'Key {key} already set!')
            kwargs[key] = round(enum_() * i)

    for match in re.finditer(r'<(.*?)>', qss):
        key = match.group(1)
        if key not in kwargs:
            raise KeyError(f'Key {key} not found in kwargs!')

        qss = qss.replace(f'<{key}>', str(kwargs[key]))

    if re.search(r'<(.*?)>', qss):
        raise RuntimeError('Not all tokens were replaced!')

    return qss


def apply_theme() -> None:
    """Set the style sheet for the entire app.

    This function should be called after the QApplication is created.

    """
    if not QtWidgets.QApplication.instance():
        raise RuntimeError('apply_theme() must be called after a QApplication is initiated.')

    if os.environ.get('EXPENSEBOOK_DISABLE_STYLESHEET', '').lower() in ['1', 'true', 'yes']:
        logging.warning('Stylesheet disabled by environment variable.')
        return

    qss = init_stylesheet()
    QtWidgets.QApplication.instance().setStyleSheet(qss)


def get_category_colors(category: str) -> Tuple[QtGui.QColor, QtGui.QColor]:
    """Return the (text, background) badge colors of a category.

    Unknown categories use the fallback category's colors.
    """
    from ..settings import lib
    style = lib.settings.get_category_style(category)
    return QtGui.QColor(style['color']), QtGui.QColor(style['background'])


def paint_badge(painter: QtGui.QPainter, rect: QtCore.QRect, category: str,
                alignment: QtCore.Qt.AlignmentFlag = QtCore.Qt.AlignLeft) -> QtCore.QRect:
    """Paint a rounded category badge inside ``rect``.

    Returns:
        QtCore.QRect: The rectangle the badge was painted in.
    """
    color, background = get_category_colors(category)

    font = QtGui.QFont(painter.font())
    font.setPixelSize(Size.SmallText(1.0))
    font.setBold(True)
    metrics = QtGui.QFontMetrics(font)

    padding = Size.Indicator(2.0)
    width = metrics.horizontalAdvance(category) + padding * 2
    height = metrics.height() + Size.Indicator(1.0)

    badge = QtCore.QRect(0, 0, min(width, rect.width()), height)
    badge.moveCenter(rect.center())
    if alignment & QtCore.Qt.AlignLeft:
        badge.moveLeft(rect.left())

    painter.save()
    painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
    painter.setPen(QtCore.Qt.NoPen)
    painter.setBrush(background)
    o = height / 2.0
    painter.drawRoundedRect(badge, o, o)

    painter.setFont(font)
    painter.setPen(color)
    text = metrics.elidedText(category, QtCore.Qt.ElideRight, badge.width() - padding)
    painter.drawText(badge, QtCore.Qt.AlignCenter, text)
    painter.restore()

    return badge


class RoundedRowDelegate(QtWidgets.QStyledItemDelegate):
    """Delegate that draws rounded-corner backgrounds for selected row cells."""

    def __init__(self, first_column: int = 0, last_column: int = -1,
                 parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)

        self._first_column = first_column
        self._last_column = last_column

    def paint(self, painter: QtGui.QPainter, option: QtWidgets.QStyleOptionViewItem,
              index: QtCore.QModelIndex) -> None:
        """Paint the item with rounded corners if selected."""
        self.paint_background(painter, option, index)
        super().paint(painter, option, index)

    def paint_background(self, painter: QtGui.QPainter, option: QtWidgets.QStyleOptionViewItem,
                         index: QtCore.QModelIndex) -> None:
        selected = option.state & QtWidgets.QStyle.State_Selected
        column = index.column()

        painter.save()
        painter.setPen(QtCore.Qt.NoPen)
        color = Color.DarkBackground() if selected else Color.Transparent()
        painter.setBrush(color)

        last_column = index.model().columnCount() + self._last_column

        o = Size.Indicator(1.5)
        rect1 = QtCore.QRect(option.rect)
        rect2 = QtCore.QRect(option.rect)
        half = option.rect.width() // 2

        if column == self._first_column:
            rect1 = rect1.adjusted(0, 0, -half + o, 0)
            painter.drawRoundedRect(rect1, o, o)
            rect2 = rect2.adjusted(half, 0, 0, 0)
            painter.fillRect(rect2, color)
        elif column == last_column:
            rect1 = rect1.adjusted(half, 0, 0, 0)
            painter.drawRoundedRect(rect1, o, o)
            rect2 = rect2.adjusted(0, 0, -half + o, 0)
            painter.fillRect(rect2, color)
        else:
            painter.fillRect(option.rect, color)
        painter.restore()
