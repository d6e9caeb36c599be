"""In-memory expense store.

This module provides:
    - Expense: an immutable expense record
    - ExpenseDraft: raw add-expense form values with validation
    - make_id: opaque identifier factory for new records
    - SEED_EXPENSES: the sample records the store starts with
    - ExpenseStore: the ordered, session-scoped collection of expenses
    - store: the application-wide store instance

The store keeps the most recent record first. Mutations emit the application
signals synchronously so models and views re-derive their state.
"""
import dataclasses
import datetime
import logging
import uuid
from decimal import Decimal, InvalidOperation
from typing import Iterator, List, Optional

from ..settings import lib
from ..status.status import Status
from ..ui.actions import signals

REQUIRED_FIELDS: List[str] = ['title', 'amount', 'category', 'date']
MAX_AMOUNT: Decimal = Decimal('1e12')


def make_id() -> str:
    """Return a new opaque, unique expense identifier."""
    return uuid.uuid4().hex


@dataclasses.dataclass(frozen=True)
class Expense:
    id: str
    title: str
    amount: Decimal
    category: str
    date: str
    description: Optional[str] = None

    def missing_fields(self) -> List[str]:
        """Return the required fields that are missing or empty."""
        missing = []
        for field in REQUIRED_FIELDS:
            value = getattr(self, field)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(field)
        return missing


@dataclasses.dataclass
class ExpenseDraft:
    """The values entered in the add-expense form, as text."""
    title: str = ''
    amount: str = ''
    category: str = ''
    date: str = ''
    description: str = ''

    def missing_fields(self) -> List[str]:
        """Return the required fields left empty."""
        return [f for f in REQUIRED_FIELDS if not getattr(self, f).strip()]

    def parse_amount(self) -> Optional[Decimal]:
        """Return the amount as a finite Decimal between 0 and ``MAX_AMOUNT``, or None."""
        try:
            amount = Decimal(self.amount.strip())
        except InvalidOperation:
            return None
        if not amount.is_finite() or amount < 0 or amount > MAX_AMOUNT:
            return None
        return amount

    def parse_date(self) -> Optional[datetime.date]:
        """Return the date if it is written as ``YYYY-MM-DD``, otherwise None.

        Other ISO 8601 spellings, such as ``20240115`` or ``2024-W03-1``, are
        rejected as the month bucket is read from the text prefix.
        """
        value = self.date.strip()
        try:
            date = datetime.date.fromisoformat(value)
        except ValueError:
            return None
        if date.isoformat() != value:
            return None
        return date

    def validate(self) -> Status:
        """Validate the draft.

        Returns:
            Status: ``Status.Okay`` if the draft can become an expense, otherwise the
            first problem found.
        """
        if self.missing_fields():
            return Status.ExpenseIncomplete
        if self.parse_amount() is None:
            return Status.AmountInvalid
        if self.category not in lib.CATEGORIES:
            return Status.CategoryUnknown
        if self.parse_date() is None:
            return Status.DateInvalid
        return Status.Okay

    def invalid_fields(self) -> List[str]:
        """Return every field that keeps the draft from validating."""
        fields = self.missing_fields()
        if 'amount' not in fields and self.parse_amount() is None:
            fields.append('amount')
        if 'category' not in fields and self.category not in lib.CATEGORIES:
            fields.append('category')
        if 'date' not in fields and self.parse_date() is None:
            fields.append('date')
        return fields

    def to_expense(self) -> Expense:
        """Build an expense with a freshly minted id.

        Raises:
            ValueError: If the draft does not validate.
        """
        result = self.validate()
        if result != Status.Okay:
            raise ValueError(f'Cannot create an expense from an invalid draft: {result}')

        description = self.description.strip()
        return Expense(
            id=make_id(),
            title=self.title.strip(),
            amount=self.parse_amount(),
            category=self.category,
            date=self.parse_date().isoformat(),
            description=description or None,
        )


SEED_EXPENSES: List[Expense] = [
    Expense('1', 'Grocery Shopping', Decimal('85.50'), 'Food & Dining', '2024-01-15',
            'Weekly groceries from supermarket'),
    Expense('2', 'Gas Station', Decimal('45.00'), 'Transportation', '2024-01-14', 'Fuel for car'),
    Expense('3', 'Netflix Subscription', Decimal('15.99'), 'Entertainment', '2024-01-13',
            'Monthly streaming subscription'),
    Expense('4', 'Coffee Shop', Decimal('12.50'), 'Food & Dining', '2024-01-12', 'Morning coffee and pastry'),
    Expense('5', 'Electricity Bill', Decimal('120.00'), 'Bills & Utilities', '2024-01-10',
            'Monthly electricity bill'),
    Expense('6', 'Lunch at Restaurant', Decimal('28.75'), 'Food & Dining', '2024-01-09', 'Business lunch meeting'),
    Expense('7', 'Uber Ride', Decimal('18.50'), 'Transportation', '2024-01-08', 'Ride to airport'),
    Expense('8', 'Movie Tickets', Decimal('24.00'), 'Entertainment', '2024-01-07', 'Weekend movie with friends'),
    Expense('9', 'Pharmacy', Decimal('35.20'), 'Healthcare', '2024-01-06', 'Prescription medication'),
    Expense('10', 'Online Course', Decimal('99.00'), 'Education', '2024-01-05', 'Web development course'),
]


class ExpenseStore:
    """Ordered collection of expenses, most recent first.

    Args:
        seed (bool): Start with the sample records.
    """

    def __init__(self, seed: bool = True) -> None:
        self._expenses: List[Expense] = list(SEED_EXPENSES) if seed else []

    def __len__(self) -> int:
        return len(self._expenses)

    def __iter__(self) -> Iterator[Expense]:
        return iter(list(self._expenses))

    def __contains__(self, expense_id: str) -> bool:
        return any(e.id == expense_id for e in self._expenses)

    def records(self) -> List[Expense]:
        """Return a copy of all expenses in store order."""
        return list(self._expenses)

    def get(self, expense_id: str) -> Optional[Expense]:
        for expense in self._expenses:
            if expense.id == expense_id:
                return expense
        return None

    def add(self, expense: Expense) -> bool:
        """Insert an expense at the head of the store.

        Incomplete records and duplicate ids are ignored without raising.

        Returns:
            bool: True if the expense was inserted.
        """
        missing = expense.missing_fields()
        if missing:
            logging.debug(f'Ignoring incomplete expense, missing: {missing}')
            return False
        if expense.id in self:
            logging.debug(f'Ignoring expense with duplicate id "{expense.id}"')
            return False

        self._expenses.insert(0, expense)
        logging.info(f'Added expense "{expense.title}" ({expense.id})')

        signals.expenseAdded.emit(expense.id)
        signals.expensesChanged.emit()
        return True

    def submit(self, draft: ExpenseDraft) -> Optional[Expense]:
        """Create and add an expense from the add-expense form values.

        Returns:
            Expense: The new expense, or None if the draft was rejected.
        """
        result = draft.validate()
        if result != Status.Okay:
            logging.debug(f'Ignoring expense draft: {result}')
            return None

        expense = draft.to_expense()
        if not self.add(expense):
            return None
        return expense

    def remove(self, expense_id: str) -> bool:
        """Delete the expense with the given id, if present.

        Returns:
            bool: True if an expense was removed.
        """
        for idx, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                break
        else:
            logging.debug(f'No expense with id "{expense_id}" to remove')
            return False

        del self._expenses[idx]
        logging.info(f'Removed expense "{expense.title}" ({expense_id})')

        signals.expenseRemoved.emit(expense_id)
        signals.expensesChanged.emit()
        return True

    def clear(self) -> None:
        """Remove every expense."""
        self._expenses = []
        logging.info('Cleared all expenses')
        signals.expensesChanged.emit()

    def reset(self, seed: bool = True) -> None:
        """Restore the store to its initial state."""
        self._expenses = list(SEED_EXPENSES) if seed else []
        logging.info(f'Reset expenses (seed={seed})')
        signals.expensesChanged.emit()


store: ExpenseStore = ExpenseStore(seed=bool(lib.settings['seed_data']))
