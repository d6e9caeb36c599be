"""Test package for ExpenseBook.

The settings singleton is created when ``ExpenseBook.settings.lib`` is first
imported, so the standard paths are switched to their test locations and Qt is
made headless before any ExpenseBook module is loaded.

Run with:
    python -m unittest discover -s tests -t .
"""
import os

from PySide6 import QtCore

os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

QtCore.QStandardPaths.setTestModeEnabled(True)
