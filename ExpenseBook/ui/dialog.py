"""Add-expense dialog.

The dialog collects the form values into an
:class:`ExpenseBook.data.store.ExpenseDraft`. Drafts that do not validate keep
the dialog open with the offending fields highlighted; valid drafts are handed
to the store, which mints the id and notifies the application.
"""
import logging
from typing import Dict, Optional

from PySide6 import QtCore, QtGui, QtWidgets

from . import ui
from ..data.store import ExpenseDraft, Expense, MAX_AMOUNT
from ..settings import lib
from ..status import status


class AddExpenseDialog(QtWidgets.QDialog):
    """Modal form for recording a new expense."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self.setWindowTitle('Add New Expense')
        self.setModal(True)

        self.title_edit: Optional[QtWidgets.QLineEdit] = None
        self.amount_edit: Optional[QtWidgets.QLineEdit] = None
        self.category_combo: Optional[QtWidgets.QComboBox] = None
        self.date_edit: Optional[QtWidgets.QDateEdit] = None
        self.description_edit: Optional[QtWidgets.QPlainTextEdit] = None
        self.message_label: Optional[QtWidgets.QLabel] = None
        self.submit_button: Optional[QtWidgets.QPushButton] = None
        self.cancel_button: Optional[QtWidgets.QPushButton] = None

        self._expense: Optional[Expense] = None

        self._create_ui()
        self._connect_signals()
        self.reset_fields()

    def _create_ui(self) -> None:
        QtWidgets.QVBoxLayout(self)
        o = ui.Size.Margin(1.0)
        self.layout().setContentsMargins(o, o, o, o)
        self.layout().setSpacing(ui.Size.Indicator(2.0))

        label = QtWidgets.QLabel('Add New Expense', parent=self)
        label.setProperty('title', True)
        self.layout().addWidget(label)

        form = QtWidgets.QFormLayout()
        form.setLabelAlignment(QtCore.Qt.AlignLeft | QtCore.Qt.AlignVCenter)
        form.setSpacing(ui.Size.Indicator(2.0))
        self.layout().addLayout(form, 1)

        self.title_edit = QtWidgets.QLineEdit(parent=self)
        self.title_edit.setPlaceholderText('e.g. Grocery Shopping')
        form.addRow('Title *', self.title_edit)

        self.amount_edit = QtWidgets.QLineEdit(parent=self)
        self.amount_edit.setPlaceholderText('0.00')
        validator = QtGui.QDoubleValidator(0.0, float(MAX_AMOUNT), 2, parent=self.amount_edit)
        validator.setNotation(QtGui.QDoubleValidator.StandardNotation)
        c_locale = QtCore.QLocale.c()
        c_locale.setNumberOptions(QtCore.QLocale.RejectGroupSeparator)
        validator.setLocale(c_locale)
        self.amount_edit.setValidator(validator)
        form.addRow('Amount *', self.amount_edit)

        self.category_combo = QtWidgets.QComboBox(parent=self)
        self.category_combo.addItem('Select a category', userData='')
        for category in lib.CATEGORIES:
            self.category_combo.addItem(category, userData=category)
        form.addRow('Category *', self.category_combo)

        self.date_edit = QtWidgets.QDateEdit(parent=self)
        self.date_edit.setCalendarPopup(True)
        self.date_edit.setDisplayFormat('yyyy-MM-dd')
        form.addRow('Date *', self.date_edit)

        self.description_edit = QtWidgets.QPlainTextEdit(parent=self)
        self.description_edit.setPlaceholderText('Optional details')
        self.description_edit.setTabChangesFocus(True)
        self.description_edit.setMaximumHeight(ui.Size.RowHeight(2.5))
        form.addRow('Description', self.description_edit)

        self.message_label = QtWidgets.QLabel(parent=self)
        self.message_label.setWordWrap(True)
        self.message_label.setStyleSheet(f'color: {ui.Color.Red(qss=True)};')
        self.message_label.hide()
        self.layout().addWidget(self.message_label)

        button_layout = QtWidgets.QHBoxLayout()
        self.layout().addLayout(button_layout)

        button_layout.addStretch(1)
        self.cancel_button = QtWidgets.QPushButton('Cancel', parent=self)
        button_layout.addWidget(self.cancel_button)

        self.submit_button = QtWidgets.QPushButton('Add Expense', parent=self)
        self.submit_button.setDefault(True)
        button_layout.addWidget(self.submit_button)

    def _connect_signals(self) -> None:
        self.submit_button.clicked.connect(self.submit)
        self.cancel_button.clicked.connect(self.reject)

        self.title_edit.textChanged.connect(lambda: self.set_invalid('title', False))
        self.amount_edit.textChanged.connect(lambda: self.set_invalid('amount', False))
        self.category_combo.currentIndexChanged.connect(lambda: self.set_invalid('category', False))
        self.date_edit.dateChanged.connect(lambda: self.set_invalid('date', False))

    def _field_widgets(self) -> Dict[str, QtWidgets.QWidget]:
        return {
            'title': self.title_edit,
            'amount': self.amount_edit,
            'category': self.category_combo,
            'date': self.date_edit,
        }

    def sizeHint(self) -> QtCore.QSize:
        return QtCore.QSize(
            ui.Size.DefaultWidth(0.8),
            ui.Size.DefaultHeight(0.9)
        )

    @property
    def expense(self) -> Optional[Expense]:
        """The expense created by the last successful submission."""
        return self._expense

    def reset_fields(self) -> None:
        """Clear the form and default the date to today."""
        self.title_edit.clear()
        self.amount_edit.clear()
        self.category_combo.setCurrentIndex(0)
        self.date_edit.setDate(QtCore.QDate.currentDate())
        self.description_edit.clear()
        self.message_label.clear()
        self.message_label.hide()
        for field in self._field_widgets():
            self.set_invalid(field, False)
        self._expense = None

    def draft(self) -> ExpenseDraft:
        """Return the current form values."""
        return ExpenseDraft(
            title=self.title_edit.text(),
            amount=self.amount_edit.text(),
            category=self.category_combo.currentData() or '',
            date=self.date_edit.date().toString(QtCore.Qt.ISODate),
            description=self.description_edit.toPlainText(),
        )

    def set_invalid(self, field: str, value: bool) -> None:
        """Toggle the highlight of a form field."""
        widget = self._field_widgets().get(field)
        if widget is None:
            return
        if bool(widget.property('invalid')) == value:
            return
        widget.setProperty('invalid', value)
        widget.style().unpolish(widget)
        widget.style().polish(widget)

    @QtCore.Slot()
    def submit(self) -> None:
        """Validate the form and add the expense to the store.

        Invalid forms are left open with the failing fields highlighted.
        """
        draft = self.draft()
        result = draft.validate()

        if result != status.Status.Okay:
            invalid = draft.invalid_fields()
            logging.debug(f'Expense form rejected ({result}): {invalid}')
            for field in self._field_widgets():
                self.set_invalid(field, field in invalid)
            self.message_label.setText(status.get_message(result))
            self.message_label.show()
            return

        from ..data.store import store
        expense = store.submit(draft)
        if expense is None:
            self.message_label.setText(status.get_message(status.Status.UnknownStatus))
            self.message_label.show()
            return

        self._expense = expense
        self.accept()

    def open(self) -> None:
        self.reset_fields()
        super().open()
