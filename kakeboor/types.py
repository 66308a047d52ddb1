"""Types shared by the web client and the server, plus validation helpers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, TypeVar

_E = TypeVar("_E", bound=StrEnum)


class ValidationError(ValueError):
    """Raised when input data is malformed or breaks a field rule."""

    def __init__(self, message: str, errors: Mapping[str, str] | None = None) -> None:
        super().__init__(message)
        self.errors: dict[str, str] = dict(errors or {})


class CategoryType(StrEnum):
    """Whether a category groups income or expenses."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def parse(cls, value: str) -> CategoryType:
        """Parse a category type, ignoring case."""
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValidationError(f"Invalid category type: {value}") from None


class TransactionType(StrEnum):
    """Whether a transaction is income or an expense."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def parse(cls, value: str) -> TransactionType:
        """Parse a transaction type, ignoring case."""
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValidationError(f"Invalid transaction type: {value}") from None


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _rfc3339(moment: datetime) -> str:
    moment = _as_utc(moment)
    if moment.microsecond == 0:
        spec = "seconds"
    elif moment.microsecond % 1000 == 0:
        spec = "milliseconds"
    else:
        spec = "microseconds"
    return moment.isoformat(timespec=spec)


def _mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValidationError(f"expected an object, got {type(data).__name__}")
    return data


def _present(data: Mapping[str, Any], key: str) -> Any:
    value = data.get(key)
    if value is None:
        raise ValidationError(f"missing field `{key}`", {key: "This field is required"})
    return value


def _int(data: Mapping[str, Any], key: str) -> int:
    value = _present(data, key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"field `{key}` must be an integer", {key: "Expected an integer"})
    return value


def _opt_int(data: Mapping[str, Any], key: str) -> int | None:
    return None if data.get(key) is None else _int(data, key)


def _uint(data: Mapping[str, Any], key: str) -> int:
    value = _int(data, key)
    if value < 0:
        raise ValidationError(
            f"field `{key}` must not be negative", {key: "Expected a non-negative integer"}
        )
    return value


def _str(data: Mapping[str, Any], key: str) -> str:
    value = _present(data, key)
    if not isinstance(value, str):
        raise ValidationError(f"field `{key}` must be a string", {key: "Expected a string"})
    return value


def _opt_str(data: Mapping[str, Any], key: str) -> str | None:
    return None if data.get(key) is None else _str(data, key)


def _enum(data: Mapping[str, Any], key: str, enum_cls: type[_E]) -> _E:
    value = _present(data, key)
    allowed = [member.value for member in enum_cls]
    if not isinstance(value, str) or value not in allowed:
        expected = " or ".join(f"`{name}`" for name in allowed)
        raise ValidationError(
            f"unknown variant `{value}` for `{key}`, expected {expected}",
            {key: f"Expected {expected}"},
        )
    return enum_cls(value)


def _list(data: Mapping[str, Any], key: str) -> list[Any]:
    value = _present(data, key)
    if not isinstance(value, list):
        raise ValidationError(f"field `{key}` must be a list", {key: "Expected a list"})
    return value


@dataclass(frozen=True)
class CategoryInfo:
    """A category as shown to the user."""

    id: int
    name: str
    category_type: CategoryType
    icon: str | None = None
    color: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CategoryInfo:
        data = _mapping(data)
        return cls(
            id=_int(data, "id"),
            name=_str(data, "name"),
            category_type=_enum(data, "category_type", CategoryType),
            icon=_opt_str(data, "icon"),
            color=_opt_str(data, "color"),
        )


@dataclass(frozen=True)
class TransactionInfo:
    """A transaction as shown to the user."""

    id: int
    amount: int
    category_id: int
    description: str
    transaction_date: str
    transaction_type: TransactionType

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TransactionInfo:
        data = _mapping(data)
        return cls(
            id=_int(data, "id"),
            amount=_int(data, "amount"),
            category_id=_int(data, "category_id"),
            description=_str(data, "description"),
            transaction_date=_str(data, "transaction_date"),
            transaction_type=_enum(data, "transaction_type", TransactionType),
        )


@dataclass(frozen=True)
class CategoryListResponse:
    """A counted list of categories."""

    count: int
    results: list[CategoryInfo]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CategoryListResponse:
        data = _mapping(data)
        return cls(
            count=_uint(data, "count"),
            results=[CategoryInfo.from_dict(item) for item in _list(data, "results")],
        )


@dataclass(frozen=True)
class TransactionListResponse:
    """A counted list of transactions."""

    count: int
    results: list[TransactionInfo]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TransactionListResponse:
        data = _mapping(data)
        return cls(
            count=_uint(data, "count"),
            results=[TransactionInfo.from_dict(item) for item in _list(data, "results")],
        )


@dataclass(frozen=True)
class MonthlyReportInfo:
    """Totals for one month."""

    year: int
    month: int
    total_income: int
    total_expense: int
    net_balance: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MonthlyReportInfo:
        data = _mapping(data)
        return cls(
            year=_int(data, "year"),
            month=_uint(data, "month"),
            total_income=_int(data, "total_income"),
            total_expense=_int(data, "total_expense"),
            net_balance=_int(data, "net_balance"),
        )


@dataclass(frozen=True)
class CategorySummaryInfo:
    """Totals for one category within a report."""

    category_id: int
    category_name: str
    total_amount: int
    transaction_count: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CategorySummaryInfo:
        data = _mapping(data)
        return cls(
            category_id=_int(data, "category_id"),
            category_name=_str(data, "category_name"),
            total_amount=_int(data, "total_amount"),
            transaction_count=_int(data, "transaction_count"),
        )