"""
Tests for the UI components of ExpenseBook.
Verifies each widget can be instantiated, the add-expense form validates its input,
and the filter, summary and table widgets stay in step with the expense store.
"""
import datetime
from decimal import Decimal

from PySide6 import QtCore, QtGui, QtWidgets

from ExpenseBook.data import store as store_module
from ExpenseBook.data.store import Expense
from ExpenseBook.settings import lib
from ExpenseBook.status import status
from ExpenseBook.ui import ui
from ExpenseBook.ui.actions import signals
from tests.base import BaseTestCase, SignalRecorder


class UIBaseTestCase(BaseTestCase):
    def setUp(self):
        super().setUp()

        if not QtWidgets.QApplication.instance():
            self.app = QtWidgets.QApplication([])
        ui.apply_theme()


class TestTheme(UIBaseTestCase):
    def test_stylesheet_tokens_are_replaced(self):
        qss = ui.init_stylesheet()
        self.assertNotIn('<', qss)
        self.assertIn('QFrame[card="true"]', qss)

    def test_category_colors(self):
        color, background = ui.get_category_colors('Travel')
        self.assertEqual(color.name().upper(), '#155E75')
        self.assertEqual(background.name().upper(), '#CFFAFE')

        color, _ = ui.get_category_colors('Groceries')
        self.assertEqual(color.name().upper(), '#1F2937')

    def test_paint_badge(self):
        image = QtGui.QImage(200, 40, QtGui.QImage.Format_ARGB32)
        image.fill(QtCore.Qt.transparent)
        painter = QtGui.QPainter(image)
        try:
            rect = ui.paint_badge(painter, QtCore.QRect(0, 0, 200, 40), 'Food & Dining')
        finally:
            painter.end()
        self.assertEqual(rect.left(), 0)
        self.assertLessEqual(rect.width(), 200)


class TestAddExpenseDialog(UIBaseTestCase):
    def setUp(self):
        super().setUp()
        from ExpenseBook.ui.dialog import AddExpenseDialog
        self.dialog = AddExpenseDialog()

    def tearDown(self):
        del self.dialog
        super().tearDown()

    def fill(self, title='Train Ticket', amount='12.40', category='Transportation'):
        self.dialog.title_edit.setText(title)
        self.dialog.amount_edit.setText(amount)
        self.dialog.category_combo.setCurrentIndex(self.dialog.category_combo.findData(category))
        self.dialog.date_edit.setDate(QtCore.QDate(2024, 2, 3))

    def test_defaults(self):
        self.assertEqual(self.dialog.category_combo.currentData(), '')
        self.assertEqual(self.dialog.category_combo.count(), len(lib.CATEGORIES) + 1)
        self.assertEqual(self.dialog.date_edit.date(), QtCore.QDate.currentDate())

    def test_draft(self):
        self.fill()
        self.dialog.description_edit.setPlainText('Return trip')
        draft = self.dialog.draft()
        self.assertEqual(draft.title, 'Train Ticket')
        self.assertEqual(draft.amount, '12.40')
        self.assertEqual(draft.category, 'Transportation')
        self.assertEqual(draft.date, '2024-02-03')
        self.assertEqual(draft.description, 'Return trip')

    def test_submit_empty_form_is_rejected(self):
        self.dialog.submit()
        self.assertEqual(len(store_module.store), 10)
        self.assertEqual(self.dialog.result(), 0)
        self.assertTrue(self.dialog.title_edit.property('invalid'))
        self.assertTrue(self.dialog.amount_edit.property('invalid'))
        self.assertTrue(self.dialog.category_combo.property('invalid'))
        self.assertFalse(self.dialog.date_edit.property('invalid'))
        self.assertEqual(
            self.dialog.message_label.text(),
            status.get_message(status.Status.ExpenseIncomplete)
        )

    def test_submit_without_category_is_rejected(self):
        self.fill(category='')
        self.dialog.submit()
        self.assertEqual(len(store_module.store), 10)
        self.assertTrue(self.dialog.category_combo.property('invalid'))
        self.assertFalse(self.dialog.title_edit.property('invalid'))

    def test_editing_clears_highlight(self):
        self.dialog.submit()
        self.assertTrue(self.dialog.title_edit.property('invalid'))
        self.dialog.title_edit.setText('Coffee')
        self.assertFalse(self.dialog.title_edit.property('invalid'))

    def test_submit_valid_form(self):
        added = SignalRecorder(signals.expenseAdded)
        try:
            self.fill()
            self.dialog.submit()
        finally:
            added.disconnect()

        self.assertEqual(len(store_module.store), 11)
        expense = store_module.store.records()[0]
        self.assertIs(self.dialog.expense, expense)
        self.assertEqual(expense.amount, Decimal('12.40'))
        self.assertIsNone(expense.description)
        self.assertEqual(added.calls, [(expense.id,)])
        self.assertEqual(self.dialog.result(), QtWidgets.QDialog.Accepted)

    def test_reset_fields(self):
        self.fill()
        self.dialog.reset_fields()
        self.assertEqual(self.dialog.title_edit.text(), '')
        self.assertEqual(self.dialog.category_combo.currentIndex(), 0)


class TestFilterBar(UIBaseTestCase):
    def setUp(self):
        super().setUp()
        from ExpenseBook.ui.filterbar import FilterBar
        self.bar = FilterBar()

    def tearDown(self):
        del self.bar
        super().tearDown()

    def test_category_items(self):
        combo = self.bar.category_combo
        self.assertEqual(combo.itemText(0), 'All Categories')
        self.assertEqual(combo.itemData(0), lib.ALL)
        self.assertEqual([combo.itemData(i) for i in range(1, combo.count())], lib.CATEGORIES)

    def test_month_items(self):
        from ExpenseBook.data import data
        combo = self.bar.month_combo
        self.assertEqual(combo.count(), 3)
        self.assertEqual(combo.itemText(0), 'All Months')
        self.assertEqual(
            [combo.itemData(i) for i in range(combo.count())],
            [lib.ALL, data.current_month(), data.previous_month()]
        )
        self.assertEqual(combo.itemText(1), datetime.date.today().strftime('%B %Y'))

    def test_emits_filter_signals(self):
        search = SignalRecorder(signals.searchTermChanged)
        category = SignalRecorder(signals.categoryFilterChanged)
        month = SignalRecorder(signals.monthFilterChanged)
        try:
            self.bar.search_edit.setText('coffee')
            self.bar.category_combo.setCurrentIndex(1)
            self.bar.month_combo.setCurrentIndex(2)
            self.bar.category_combo.setCurrentIndex(0)
        finally:
            search.disconnect()
            category.disconnect()
            month.disconnect()

        self.assertEqual(search.calls, [('coffee',)])
        self.assertEqual(category.calls, [(lib.CATEGORIES[0],), (lib.ALL,)])
        self.assertEqual(month.calls, [(self.bar.month_combo.itemData(2),)])

        signals.searchTermChanged.emit('')
        signals.monthFilterChanged.emit(lib.ALL)


class TestSummaryWidget(UIBaseTestCase):
    def setUp(self):
        super().setUp()
        from ExpenseBook.data.view.summary import SummaryWidget
        self.widget = SummaryWidget()

    def tearDown(self):
        del self.widget
        super().tearDown()

    def test_total(self):
        self.assertEqual(self.widget.total_card.value_label.text(), '$484.44')
        self.assertEqual(self.widget.total_card.detail_label.text(), 'All time expenses')
        self.assertEqual(self.widget.change_card.detail_label.text(), 'vs last month')

    def test_follows_store_mutations(self):
        today = datetime.date.today()
        store_module.store.add(Expense('now', 'Lunch', Decimal('15.56'), 'Food & Dining', today.isoformat()))

        self.assertEqual(self.widget.statistics.total, Decimal('500.00'))
        self.assertEqual(self.widget.total_card.value_label.text(), '$500.00')
        self.assertGreaterEqual(self.widget.statistics.this_month, Decimal('15.56'))
        self.assertTrue(self.widget.change_card.value_label.text().startswith('↑ +$'))

    def test_month_label(self):
        self.assertEqual(
            self.widget.month_card.detail_label.text(),
            datetime.date.today().strftime('%B %Y')
        )


class TestExpenseView(UIBaseTestCase):
    def setUp(self):
        super().setUp()
        from ExpenseBook.data.view.expense import ExpenseView
        self.view = ExpenseView()

    def tearDown(self):
        del self.view
        super().tearDown()

    def test_delete_current(self):
        index = self.view.model().index(2, 0)
        self.view.selectionModel().setCurrentIndex(
            index, QtCore.QItemSelectionModel.ClearAndSelect | QtCore.QItemSelectionModel.Rows
        )
        self.view.delete_current()
        self.assertNotIn('3', store_module.store)
        self.assertEqual(self.view.model().rowCount(), 9)

    def test_delete_button_click(self):
        from ExpenseBook.data.model.expense import Columns

        model = self.view.model()
        index = model.index(0, Columns.Actions.value)
        delegate = self.view.itemDelegateForColumn(Columns.Actions.value)

        option = QtWidgets.QStyleOptionViewItem()
        option.rect = QtCore.QRect(0, 0, 300, 40)
        center = QtCore.QPointF(delegate.button_rect(option.rect).center())

        def release(pos, button=QtCore.Qt.LeftButton):
            return QtGui.QMouseEvent(
                QtCore.QEvent.MouseButtonRelease, pos, pos,
                button, QtCore.Qt.NoButton, QtCore.Qt.NoModifier
            )

        requested = SignalRecorder(signals.expenseDeleteRequested)
        try:
            self.assertFalse(delegate.editorEvent(release(QtCore.QPointF(1, 1)), model, option, index))
            self.assertFalse(delegate.editorEvent(release(center, QtCore.Qt.RightButton), model, option, index))
            self.assertEqual(requested.calls, [])

            self.assertTrue(delegate.editorEvent(release(center), model, option, index))
        finally:
            requested.disconnect()

        self.assertEqual(requested.calls, [('1',)])
        self.assertNotIn('1', store_module.store)
        self.assertEqual(model.rowCount(), 9)

    def test_delete_without_selection(self):
        self.view.delete_current()
        self.assertEqual(len(store_module.store), 10)

    def test_actions(self):
        texts = [a.text() for a in self.view.actions()]
        self.assertIn('Delete Expense', texts)
        self.assertIn('Add Expense...', texts)

    def test_empty_state_renders(self):
        store_module.store.clear()
        self.view.resize(400, 300)
        pixmap = self.view.grab()
        self.assertFalse(pixmap.isNull())


class TestCategoryView(UIBaseTestCase):
    def test_init(self):
        from ExpenseBook.data.view.category import CategoryView
        view = CategoryView()
        self.assertEqual(view.model().rowCount(), 6)
        self.assertFalse(view.grab().isNull())


class TestMainUI(UIBaseTestCase):
    def setUp(self):
        super().setUp()
        from ExpenseBook.ui.main import MainWindow
        self.window = MainWindow()

    def tearDown(self):
        del self.window
        super().tearDown()

    def test_header(self):
        self.assertEqual(self.window.header.title_label.text(), 'Expense Tracker')
        self.assertEqual(self.window.header.description_label.text(), 'Manage and track your expenses')

    def test_notifications(self):
        store_module.store.remove('1')
        self.assertEqual(self.window.statusBar().currentMessage(), 'Expense deleted successfully!')

        store_module.store.add(Expense('new', 'Bus', Decimal('2'), 'Transportation', '2024-02-01'))
        self.assertEqual(self.window.statusBar().currentMessage(), 'Expense added successfully!')

    def test_menu_actions(self):
        actions = {}
        for menu_action in self.window.menuBar().actions():
            for action in menu_action.menu().actions():
                actions[action.text()] = action

        actions['Clear All Expenses'].trigger()
        self.assertEqual(len(store_module.store), 0)
        self.assertEqual(self.window.expense_view.model().rowCount(), 0)

        actions['Reset to Sample Data'].trigger()
        self.assertEqual(len(store_module.store), 10)
        self.assertEqual(self.window.category_view.model().rowCount(), 6)

    def test_metadata_change_updates_header(self):
        lib.settings['name'] = 'Household'
        self.assertEqual(self.window.header.title_label.text(), 'Household')
        self.assertEqual(self.window.windowTitle(), 'Household')
