"""Derived expense state: filtering, statistics and the category breakdown.

Every function here is a pure re-derivation over a list of
:class:`ExpenseBook.data.store.Expense` records. Month buckets are the
``YYYY-MM`` prefix of a record's date string and are matched by prefix, not by
calendar range.
"""
import dataclasses
import datetime
import enum
import logging
from decimal import Decimal
from typing import Iterable, Optional

import pandas as pd
from dateutil.relativedelta import relativedelta

from .store import Expense
from ..settings import lib


class Trend(enum.StrEnum):
    Up = 'up'
    Down = 'down'


@dataclasses.dataclass(frozen=True)
class Statistics:
    total: Decimal
    this_month: Decimal
    last_month: Decimal
    current_month: str
    previous_month: str

    @property
    def change(self) -> Decimal:
        return self.this_month - self.last_month

    @property
    def trend(self) -> Trend:
        return Trend.Up if self.change >= 0 else Trend.Down


def month_key(d: datetime.date) -> str:
    """Truncate a date to its 'YYYY-MM' month bucket."""
    return d.strftime('%Y-%m')


def current_month(today: Optional[datetime.date] = None) -> str:
    today = today or datetime.date.today()
    return month_key(today)


def previous_month(today: Optional[datetime.date] = None) -> str:
    """Return the month bucket one calendar month before ``today``.

    January rolls over to December of the previous year.
    """
    today = today or datetime.date.today()
    return month_key(today - relativedelta(months=1))


def to_dataframe(records: Iterable[Expense]) -> pd.DataFrame:
    """Convert expense records to a DataFrame with ``lib.EXPENSE_DATA_COLUMNS``.

    Amounts stay Decimal (object dtype) and the store order is kept as the index.
    """
    rows = [dataclasses.astuple(r) for r in records]
    df = pd.DataFrame(rows, columns=lib.EXPENSE_DATA_COLUMNS, dtype=object)
    return df.reset_index(drop=True)


def _sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, Decimal('0'))


def _search_mask(df: pd.DataFrame, search_term: str) -> pd.Series:
    term = search_term.lower()
    in_title = df['title'].str.lower().str.contains(term, regex=False, na=False)
    in_description = df['description'].str.lower().str.contains(term, regex=False, na=False)
    return (in_title | in_description).astype(bool)


def matches(expense: Expense, search_term: str = '', category: str = lib.ALL, month: str = lib.ALL) -> bool:
    """Return whether a single expense passes the search, category and month filters."""
    term = search_term.lower()
    matches_search = term in expense.title.lower() or (
            expense.description is not None and term in expense.description.lower()
    )
    matches_category = category == lib.ALL or expense.category == category
    matches_month = month == lib.ALL or expense.date.startswith(month)
    return matches_search and matches_category and matches_month


def filter_expenses(
        records: Iterable[Expense],
        search_term: str = '',
        category: str = lib.ALL,
        month: str = lib.ALL,
) -> pd.DataFrame:
    """Return the expenses visible under the given filters.

    The three conditions are AND-combined:

    - search: case-insensitive substring of the title, or of the description when present
    - category: ``lib.ALL`` or exact equality
    - month: ``lib.ALL`` or a 'YYYY-MM' prefix of the date

    Args:
        records: Expenses in store order.
        search_term (str): Free text, empty matches everything.
        category (str): Category name or ``lib.ALL``.
        month (str): 'YYYY-MM' month bucket or ``lib.ALL``.

    Returns:
        pd.DataFrame: Matching rows in store order, re-indexed from zero.
    """
    df = to_dataframe(records)
    if df.empty:
        return df

    mask = pd.Series(True, index=df.index)
    if search_term:
        mask &= _search_mask(df, search_term)
    if category != lib.ALL:
        mask &= df['category'] == category
    if month != lib.ALL:
        mask &= df['date'].astype(str).str.startswith(month)

    df = df[mask].reset_index(drop=True)
    logging.debug(
        f'Filtered expenses: {len(df)} rows (search="{search_term}", category="{category}", month="{month}")'
    )
    return df


def get_statistics(records: Iterable[Expense], today: Optional[datetime.date] = None) -> Statistics:
    """Compute the summary statistics over the full, unfiltered store.

    Args:
        records: All expenses.
        today (datetime.date, optional): The reference date. Defaults to today.

    Returns:
        Statistics: Totals for all time, this month and last month.
    """
    today = today or datetime.date.today()
    this_key = current_month(today)
    last_key = previous_month(today)

    df = to_dataframe(records)
    dates = df['date'].astype(str)

    return Statistics(
        total=_sum(df['amount']),
        this_month=_sum(df.loc[dates.str.startswith(this_key), 'amount']),
        last_month=_sum(df.loc[dates.str.startswith(last_key), 'amount']),
        current_month=this_key,
        previous_month=last_key,
    )


def get_category_breakdown(records: Iterable[Expense]) -> pd.DataFrame:
    """Sum the amounts of the full store per category.

    Args:
        records: All expenses.

    Returns:
        pd.DataFrame: Columns ``lib.BREAKDOWN_DATA_COLUMNS``, sorted by descending total.
            Ties keep the order in which the categories first appear. ``weight`` is the
            category's share of the grand total.
    """
    df = to_dataframe(records)
    if df.empty:
        return pd.DataFrame(columns=lib.BREAKDOWN_DATA_COLUMNS)

    df = (
        df.groupby('category', sort=False)['amount']
        .agg(_sum)
        .rename('total')
        .reset_index()
    )
    df = df.sort_values('total', ascending=False, kind='stable').reset_index(drop=True)

    overall = _sum(df['total'])
    if overall:
        df['weight'] = [float(v / overall) for v in df['total']]
    else:
        df['weight'] = 0.0

    return df[lib.BREAKDOWN_DATA_COLUMNS]
