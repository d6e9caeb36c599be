"""Dialog for browsing the in-memory log tank.

This module defines:
    - LogDialog: read-only viewer with a minimum-level filter over TankHandler records.
"""
import logging
from typing import Optional

from PySide6 import QtWidgets, QtCore, QtGui

from . import log
from ..ui import ui

LEVEL_NAMES = {
    logging.DEBUG: 'Debug',
    logging.INFO: 'Info',
    logging.WARNING: 'Warning',
    logging.ERROR: 'Error',
    logging.CRITICAL: 'Critical',
}


class LogDialog(QtWidgets.QDialog):
    """Shows the messages collected by the TankHandler."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self.setWindowTitle('Logs')
        self.setMinimumSize(ui.Size.DefaultWidth(1.0), ui.Size.DefaultHeight(0.75))

        self.level_combo = None
        self.text_edit = None

        self._create_ui()
        self._connect_signals()

        self.refresh()

    def _create_ui(self) -> None:
        QtWidgets.QVBoxLayout(self)
        o = ui.Size.Margin(1.0)
        self.layout().setContentsMargins(o, o, o, o)

        row = QtWidgets.QHBoxLayout()
        row.addWidget(QtWidgets.QLabel('Minimum level', parent=self))

        self.level_combo = QtWidgets.QComboBox(parent=self)
        for level, name in LEVEL_NAMES.items():
            self.level_combo.addItem(name, userData=level)
        row.addWidget(self.level_combo, 1)

        clear_button = QtWidgets.QPushButton('Clear', parent=self)
        clear_button.clicked.connect(self.clear)
        row.addWidget(clear_button)
        self.layout().addLayout(row)

        self.text_edit = QtWidgets.QPlainTextEdit(parent=self)
        self.text_edit.setReadOnly(True)
        self.text_edit.setLineWrapMode(QtWidgets.QPlainTextEdit.NoWrap)
        self.text_edit.setFont(QtGui.QFontDatabase.systemFont(QtGui.QFontDatabase.FixedFont))
        self.layout().addWidget(self.text_edit, 1)

    def _connect_signals(self) -> None:
        self.level_combo.currentIndexChanged.connect(self.refresh)

    @QtCore.Slot()
    def refresh(self) -> None:
        handler = log.get_tank_handler()
        if handler is None:
            self.text_edit.setPlainText('')
            return

        level = self.level_combo.currentData() or logging.NOTSET
        self.text_edit.setPlainText('\n'.join(handler.get_logs(level)))
        self.text_edit.moveCursor(QtGui.QTextCursor.End)

    @QtCore.Slot()
    def clear(self) -> None:
        handler = log.get_tank_handler()
        if handler is not None:
            handler.clear_logs()
        self.refresh()

    def showEvent(self, event: QtGui.QShowEvent) -> None:
        self.refresh()
        super().showEvent(event)
