"""
Unit tests for ExpenseBook.data.store
(covers the expense records, draft validation and the ExpenseStore mutations).

Run with:
    python -m unittest tests.test_store
"""
import unittest
from decimal import Decimal

from ExpenseBook.data import store as store_module
from ExpenseBook.data.store import Expense, ExpenseDraft, ExpenseStore, SEED_EXPENSES, make_id
from ExpenseBook.status import status
from ExpenseBook.ui.actions import signals
from tests.base import BaseTestCase, SignalRecorder


def valid_draft(**kwargs) -> ExpenseDraft:
    values = {
        'title': 'Train Ticket',
        'amount': '12.40',
        'category': 'Transportation',
        'date': '2024-02-03',
        'description': '',
    }
    values.update(kwargs)
    return ExpenseDraft(**values)


class ExpenseRecordTests(unittest.TestCase):
    def test_make_id_is_unique(self):
        ids = {make_id() for _ in range(1000)}
        self.assertEqual(len(ids), 1000)

    def test_missing_fields(self):
        e = Expense('x', '', Decimal('1'), 'Other', '2024-01-01')
        self.assertEqual(e.missing_fields(), ['title'])

        e = Expense('x', 'Title', None, '', '  ')  # type: ignore[arg-type]
        self.assertEqual(e.missing_fields(), ['amount', 'category', 'date'])

    def test_zero_amount_is_present(self):
        e = Expense('x', 'Free sample', Decimal('0'), 'Other', '2024-01-01')
        self.assertEqual(e.missing_fields(), [])

    def test_seed_data(self):
        self.assertEqual(len(SEED_EXPENSES), 10)
        self.assertEqual([e.id for e in SEED_EXPENSES], [str(i) for i in range(1, 11)])
        self.assertEqual(sum((e.amount for e in SEED_EXPENSES), Decimal('0')), Decimal('484.44'))


class ExpenseDraftTests(unittest.TestCase):
    def test_valid(self):
        self.assertEqual(valid_draft().validate(), status.Status.Okay)
        self.assertEqual(valid_draft().invalid_fields(), [])

    def test_missing_fields(self):
        draft = valid_draft(title='   ', category='')
        self.assertEqual(draft.validate(), status.Status.ExpenseIncomplete)
        self.assertEqual(draft.invalid_fields(), ['title', 'category'])

    def test_invalid_amount(self):
        for amount in ('abc', '-1', 'NaN', 'Infinity', '1,5'):
            draft = valid_draft(amount=amount)
            self.assertEqual(draft.validate(), status.Status.AmountInvalid, amount)
            self.assertEqual(draft.invalid_fields(), ['amount'])

        self.assertIn('non-negative', status.get_message(status.Status.AmountInvalid))

    def test_unknown_category(self):
        draft = valid_draft(category='Groceries')
        self.assertEqual(draft.validate(), status.Status.CategoryUnknown)
        self.assertEqual(draft.invalid_fields(), ['category'])

    def test_invalid_date(self):
        draft = valid_draft(date='2024-02-30')
        self.assertEqual(draft.validate(), status.Status.DateInvalid)
        self.assertEqual(draft.invalid_fields(), ['date'])

    def test_amount_above_limit(self):
        for amount in ('1e30', '1000000000000.01'):
            draft = valid_draft(amount=amount)
            self.assertEqual(draft.validate(), status.Status.AmountInvalid, amount)
            self.assertEqual(draft.invalid_fields(), ['amount'])

        self.assertEqual(valid_draft(amount='1000000000000').validate(), status.Status.Okay)

    def test_non_calendar_date_forms(self):
        for date in ('20240115', '2024-W03-1', '2024-01-15T10:00'):
            draft = valid_draft(date=date)
            self.assertEqual(draft.validate(), status.Status.DateInvalid, date)
            self.assertEqual(draft.invalid_fields(), ['date'])
            self.assertIsNone(draft.parse_date())

    def test_date_is_stripped(self):
        expense = valid_draft(date=' 2024-02-03 ').to_expense()
        self.assertEqual(expense.date, '2024-02-03')

    def test_to_expense(self):
        expense = valid_draft(title=' Train Ticket ', description='  ').to_expense()
        self.assertEqual(expense.title, 'Train Ticket')
        self.assertEqual(expense.amount, Decimal('12.40'))
        self.assertIsNone(expense.description)
        self.assertTrue(expense.id)

        expense = valid_draft(description='Return trip').to_expense()
        self.assertEqual(expense.description, 'Return trip')

    def test_to_expense_rejects_invalid(self):
        with self.assertRaises(ValueError):
            valid_draft(amount='').to_expense()


class ExpenseStoreTests(BaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.store: ExpenseStore = store_module.store

    def test_initial_state(self):
        self.assertEqual(len(self.store), 10)
        self.assertEqual(self.store.records(), SEED_EXPENSES)
        self.assertEqual(len(ExpenseStore(seed=False)), 0)

    def test_records_is_a_copy(self):
        records = self.store.records()
        records.clear()
        self.assertEqual(len(self.store), 10)

    def test_get_and_contains(self):
        self.assertIn('3', self.store)
        self.assertNotIn('missing', self.store)
        self.assertEqual(self.store.get('3').title, 'Netflix Subscription')
        self.assertIsNone(self.store.get('missing'))

    def test_add_inserts_at_head(self):
        expense = Expense('new', 'Bus', Decimal('2.50'), 'Transportation', '2024-02-01')
        added = SignalRecorder(signals.expenseAdded)
        changed = SignalRecorder(signals.expensesChanged)
        try:
            self.assertTrue(self.store.add(expense))
        finally:
            added.disconnect()
            changed.disconnect()

        self.assertEqual(len(self.store), 11)
        self.assertEqual(self.store.records()[0], expense)
        self.assertEqual(added.calls, [('new',)])
        self.assertEqual(len(changed), 1)

    def test_add_rejects_incomplete(self):
        changed = SignalRecorder(signals.expensesChanged)
        try:
            expense = Expense('new', '', Decimal('2.50'), 'Transportation', '2024-02-01')
            self.assertFalse(self.store.add(expense))
        finally:
            changed.disconnect()

        self.assertEqual(len(self.store), 10)
        self.assertEqual(len(changed), 0)

    def test_add_rejects_duplicate_id(self):
        expense = Expense('1', 'Bus', Decimal('2.50'), 'Transportation', '2024-02-01')
        self.assertFalse(self.store.add(expense))
        self.assertEqual(len(self.store), 10)

    def test_submit(self):
        expense = self.store.submit(valid_draft())
        self.assertIsNotNone(expense)
        self.assertEqual(self.store.records()[0], expense)
        self.assertEqual(len(self.store), 11)

    def test_submit_rejects_incomplete(self):
        for field in ('title', 'amount', 'category', 'date'):
            self.assertIsNone(self.store.submit(valid_draft(**{field: ''})), field)
        self.assertEqual(len(self.store), 10)

    def test_submit_rejects_non_calendar_dates(self):
        for date in ('20240115', '2024-W03-1'):
            self.assertIsNone(self.store.submit(valid_draft(date=date)), date)
        self.assertEqual(len(self.store), 10)

    def test_submit_rejects_oversized_amount(self):
        self.assertIsNone(self.store.submit(valid_draft(amount='1e30')))
        self.assertEqual(len(self.store), 10)

    def test_submit_twice_mints_distinct_ids(self):
        a = self.store.submit(valid_draft())
        b = self.store.submit(valid_draft())
        self.assertNotEqual(a.id, b.id)
        self.assertEqual(len(self.store), 12)

    def test_remove(self):
        removed = SignalRecorder(signals.expenseRemoved)
        try:
            self.assertTrue(self.store.remove('5'))
        finally:
            removed.disconnect()

        self.assertEqual(len(self.store), 9)
        self.assertNotIn('5', self.store)
        self.assertEqual(removed.calls, [('5',)])
        # the relative order of the remaining records is kept
        self.assertEqual([e.id for e in self.store], ['1', '2', '3', '4', '6', '7', '8', '9', '10'])

    def test_remove_unknown_id_is_a_noop(self):
        changed = SignalRecorder(signals.expensesChanged)
        try:
            self.assertFalse(self.store.remove('missing'))
        finally:
            changed.disconnect()
        self.assertEqual(len(self.store), 10)
        self.assertEqual(len(changed), 0)

    def test_delete_requested_signal_removes(self):
        signals.expenseDeleteRequested.emit('2')
        self.assertNotIn('2', self.store)

    def test_clear_and_reset(self):
        self.store.clear()
        self.assertEqual(len(self.store), 0)

        self.store.reset()
        self.assertEqual(self.store.records(), SEED_EXPENSES)

        self.store.reset(seed=False)
        self.assertEqual(len(self.store), 0)


if __name__ == '__main__':
    unittest.main()
