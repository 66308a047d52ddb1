"""Monthly, yearly and per-category financial reports."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from datetime import date, datetime, timezone
from typing import Any

from kakeboor.categories import Category
from kakeboor.transactions import Transaction
from kakeboor.types import TransactionType, _as_utc

UNKNOWN_CATEGORY = "Unknown"


@dataclass(frozen=True)
class CategorySummary:
    """Totals for one category within a report."""

    category_id: int
    category_name: str
    total_amount: int
    transaction_count: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MonthlyReport:
    """Income and expense for one month, broken down by category."""

    year: int
    month: int
    total_income: int
    total_expense: int
    net_balance: int
    income_by_category: list[CategorySummary]
    expense_by_category: list[CategorySummary]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MonthlySummary:
    """One month's totals within a yearly report."""

    month: int
    total_income: int
    total_expense: int
    net_balance: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class YearlyReport:
    """Income and expense for one year with a summary for every month."""

    year: int
    total_income: int
    total_expense: int
    net_balance: int
    monthly_summary: list[MonthlySummary]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CategoryReport:
    """Per-category totals over an optional date range."""

    start_date: str | None
    end_date: str | None
    categories: list[CategorySummary]
    total_income: int
    total_expense: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _names(categories: Iterable[Category]) -> dict[int, str]:
    return {c.id: c.name for c in categories if c.id is not None}


def _totals(transactions: Iterable[Transaction]) -> tuple[int, int]:
    income = expense = 0
    for t in transactions:
        if t.resolved_type() is TransactionType.INCOME:
            income += t.amount
        else:
            expense += t.amount
    return income, expense


def _by_category(
    transactions: Iterable[Transaction], names: Mapping[int, str]
) -> list[CategorySummary]:
    grouped: dict[int, tuple[int, int]] = {}
    for t in transactions:
        amount, count = grouped.get(t.category_id, (0, 0))
        grouped[t.category_id] = (amount + t.amount, count + 1)
    return [
        CategorySummary(
            category_id=category_id,
            category_name=names.get(category_id, UNKNOWN_CATEGORY),
            total_amount=amount,
            transaction_count=count,
        )
        for category_id, (amount, count) in grouped.items()
    ]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def monthly_report(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    year: int | None = None,
    month: int | None = None,
) -> MonthlyReport:
    """Report one month; year and month default to the current UTC date."""
    now = _utc_now()
    year = now.year if year is None else year
    month = now.month if month is None else month
    names = _names(categories)

    selected = [
        t
        for t in transactions
        if (moment := _as_utc(t.transaction_date)).year == year and moment.month == month
    ]
    income_items = [t for t in selected if t.resolved_type() is TransactionType.INCOME]
    expense_items = [t for t in selected if t.resolved_type() is TransactionType.EXPENSE]
    income, expense = _totals(selected)
    return MonthlyReport(
        year=year,
        month=month,
        total_income=income,
        total_expense=expense,
        net_balance=income - expense,
        income_by_category=_by_category(income_items, names),
        expense_by_category=_by_category(expense_items, names),
    )


def yearly_report(transactions: Iterable[Transaction], year: int | None = None) -> YearlyReport:
    """Report one year; the year defaults to the current UTC year."""
    year = _utc_now().year if year is None else year
    selected = [t for t in transactions if _as_utc(t.transaction_date).year == year]

    months = {month: [0, 0] for month in range(1, 13)}
    for t in selected:
        slot = 0 if t.resolved_type() is TransactionType.INCOME else 1
        months[_as_utc(t.transaction_date).month][slot] += t.amount

    income, expense = _totals(selected)
    return YearlyReport(
        year=year,
        total_income=income,
        total_expense=expense,
        net_balance=income - expense,
        monthly_summary=[
            MonthlySummary(
                month=month,
                total_income=month_income,
                total_expense=month_expense,
                net_balance=month_income - month_expense,
            )
            for month, (month_income, month_expense) in months.items()
        ],
    )


def _parse_day(text: str | None) -> date | None:
    if text is None:
        return None
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        return None


def category_report(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    start_date: str | None = None,
    end_date: str | None = None,
) -> CategoryReport:
    """Report totals per category; unparsable bounds are ignored."""
    names = _names(categories)
    start = _parse_day(start_date)
    end = _parse_day(end_date)

    def in_range(t: Transaction) -> bool:
        day = _as_utc(t.transaction_date).date()
        return (start is None or day >= start) and (end is None or day <= end)

    selected = [t for t in transactions if in_range(t)]
    income, expense = _totals(selected)
    return CategoryReport(
        start_date=start_date,
        end_date=end_date,
        categories=_by_category(selected, names),
        total_income=income,
        total_expense=expense,
    )