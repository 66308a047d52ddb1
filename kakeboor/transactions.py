"""Transaction model and its request, response and summary shapes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from kakeboor.types import (
    TransactionType,
    ValidationError,
    _as_utc,
    _enum,
    _int,
    _mapping,
    _opt_int,
    _opt_str,
    _present,
    _rfc3339,
    _str,
)

AMOUNT_MESSAGE = "Amount must be positive"
DESCRIPTION_MESSAGE = "Description must be at most 500 characters"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _datetime(data: Mapping[str, Any], key: str) -> datetime:
    value = _present(data, key)
    if not isinstance(value, str):
        raise ValidationError(f"field `{key}` must be a string", {key: "Expected a date-time"})
    try:
        moment = datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(
            f"field `{key}` is not an ISO 8601 date-time: {value}", {key: "Invalid date-time"}
        ) from None
    if moment.tzinfo is None:
        raise ValidationError(
            f"field `{key}` has no UTC offset: {value}", {key: "Missing UTC offset"}
        )
    return moment.astimezone(timezone.utc)


def _opt_datetime(data: Mapping[str, Any], key: str) -> datetime | None:
    return None if data.get(key) is None else _datetime(data, key)


def _check(amount: int | None, description: str | None) -> None:
    errors: dict[str, str] = {}
    if amount is not None and amount < 1:
        errors["amount"] = AMOUNT_MESSAGE
    if description is not None and len(description) > 500:
        errors["description"] = DESCRIPTION_MESSAGE
    if errors:
        raise ValidationError(
            "; ".join(f"{key}: {message}" for key, message in errors.items()), errors
        )


@dataclass(kw_only=True)
class Transaction:
    """A stored income or expense record; amounts are in yen."""

    id: int | None = None
    amount: int
    category_id: int
    description: str
    transaction_date: datetime
    transaction_type: str
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def resolved_type(self) -> TransactionType:
        """The transaction type as an enum, falling back to expense."""
        try:
            return TransactionType.parse(self.transaction_type)
        except ValidationError:
            return TransactionType.EXPENSE


@dataclass
class CreateTransactionRequest:
    """Payload for recording a transaction."""

    amount: int
    category_id: int
    description: str
    transaction_date: datetime
    transaction_type: TransactionType

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CreateTransactionRequest:
        data = _mapping(data)
        return cls(
            amount=_int(data, "amount"),
            category_id=_int(data, "category_id"),
            description=_str(data, "description"),
            transaction_date=_datetime(data, "transaction_date"),
            transaction_type=_enum(data, "transaction_type", TransactionType),
        )

    def validate(self) -> CreateTransactionRequest:
        """Check the amount and description; raise ValidationError on failure."""
        _check(self.amount, self.description)
        return self


@dataclass
class UpdateTransactionRequest:
    """Payload for changing a transaction; absent fields are left alone."""

    amount: int | None = None
    category_id: int | None = None
    description: str | None = None
    transaction_date: datetime | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UpdateTransactionRequest:
        data = _mapping(data)
        return cls(
            amount=_opt_int(data, "amount"),
            category_id=_opt_int(data, "category_id"),
            description=_opt_str(data, "description"),
            transaction_date=_opt_datetime(data, "transaction_date"),
        )

    def validate(self) -> UpdateTransactionRequest:
        """Check the amount and description; raise ValidationError on failure."""
        _check(self.amount, self.description)
        return self

    def apply(self, transaction: Transaction, now: datetime) -> Transaction:
        """Return a copy with the given fields replaced and updated_at set to now."""
        changes: dict[str, Any] = {
            key: value
            for key, value in (
                ("amount", self.amount),
                ("category_id", self.category_id),
                ("description", self.description),
                ("transaction_date", self.transaction_date),
            )
            if value is not None
        }
        return replace(transaction, **changes, updated_at=now)


@dataclass(frozen=True)
class TransactionResponse:
    """A transaction as returned by the API."""

    id: int
    amount: int
    category_id: int
    description: str
    transaction_date: str
    transaction_type: TransactionType
    created_at: str
    updated_at: str

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> TransactionResponse:
        return cls(
            id=transaction.id if transaction.id is not None else 0,
            amount=transaction.amount,
            category_id=transaction.category_id,
            description=transaction.description,
            transaction_date=_as_utc(transaction.transaction_date).strftime("%Y-%m-%d"),
            transaction_type=transaction.resolved_type(),
            created_at=_rfc3339(transaction.created_at),
            updated_at=_rfc3339(transaction.updated_at),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "amount": self.amount,
            "category_id": self.category_id,
            "description": self.description,
            "transaction_date": self.transaction_date,
            "transaction_type": self.transaction_type.value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class TransactionListResponse:
    """A counted list of transaction responses."""

    count: int
    results: list[TransactionResponse]

    @classmethod
    def from_transactions(cls, transactions: Iterable[Transaction]) -> TransactionListResponse:
        results = [TransactionResponse.from_transaction(item) for item in transactions]
        return cls(count=len(results), results=results)

    def to_dict(self) -> dict[str, Any]:
        return {"count": self.count, "results": [item.to_dict() for item in self.results]}


@dataclass(frozen=True)
class TransactionSummary:
    """Income and expense totals over a set of transactions."""

    total_income: int
    total_expense: int
    balance: int
    transaction_count: int

    @classmethod
    def from_transactions(cls, transactions: Iterable[Transaction]) -> TransactionSummary:
        items = list(transactions)
        income = sum(t.amount for t in items if t.resolved_type() is TransactionType.INCOME)
        expense = sum(t.amount for t in items if t.resolved_type() is TransactionType.EXPENSE)
        return cls(
            total_income=income,
            total_expense=expense,
            balance=income - expense,
            transaction_count=len(items),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_income": self.total_income,
            "total_expense": self.total_expense,
            "balance": self.balance,
            "transaction_count": self.transaction_count,
        }