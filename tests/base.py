"""Unittest base class for creating a clean test environment."""
import logging
import os
import shutil
import unittest
from contextlib import contextmanager
from pathlib import Path
from typing import List

from PySide6 import QtWidgets, QtCore

from ExpenseBook.data import store
from ExpenseBook.settings import lib


@contextmanager
def mute_ui_signals():
    from ExpenseBook.ui.actions import signals
    blocker = QtCore.QSignalBlocker(signals)  # blocks every signal in `signals`
    try:
        yield
    finally:
        del blocker


class SignalRecorder:
    """Collects the arguments of every emission of a signal."""

    def __init__(self, signal) -> None:
        self.signal = signal
        self.calls: List[tuple] = []
        self.signal.connect(self._record)

    def _record(self, *args) -> None:
        self.calls.append(args)

    def disconnect(self) -> None:
        self.signal.disconnect(self._record)

    def __len__(self) -> int:
        return len(self.calls)


class BaseTestCase(unittest.TestCase):
    """Base test case that runs against a fresh config directory and a fresh store."""

    config_paths: lib.ConfigPaths

    def setUp(self) -> None:
        """Set up a clean config directory and reinitialize all singletons."""
        # Ensure headless Qt
        if 'QT_QPA_PLATFORM' not in os.environ:
            os.environ['QT_QPA_PLATFORM'] = 'offscreen'
            logging.debug('QT_QPA_PLATFORM set to offscreen for headless testing.')

        # Ensure a QApplication is available
        if not QtWidgets.QApplication.instance():
            QtWidgets.QApplication([])  # type: ignore
            logging.debug('QtWidgets.QApplication initialized for tests.')

        # The standard paths are in test mode, the config directory is disposable
        config_dir: Path = lib.settings.config_dir
        if config_dir.exists():
            shutil.rmtree(config_dir)
            logging.debug(f'Removed test config directory {config_dir}')

        self.config_paths = lib.ConfigPaths()

        # Reinitialize settings API
        lib.settings = lib.SettingsAPI()
        logging.debug('SettingsAPI reinitialized.')

        # Reinitialize the expense store with the sample data
        store.store = store.ExpenseStore(seed=True)
        logging.debug('ExpenseStore reinitialized.')

    def tearDown(self) -> None:
        config_dir: Path = self.config_paths.config_dir
        if config_dir.exists():
            shutil.rmtree(config_dir)
            logging.debug(f'Removed test config directory {config_dir}')
