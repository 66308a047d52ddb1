from datetime import datetime, timedelta, timezone

import pytest

from kakeboor.transactions import (
    CreateTransactionRequest,
    Transaction,
    TransactionListResponse,
    TransactionResponse,
    TransactionSummary,
    UpdateTransactionRequest,
)
from kakeboor.types import TransactionType, ValidationError

MOMENT = datetime(2026, 1, 15, 10, 30, tzinfo=timezone.utc)


def make_transaction(**overrides):
    values = {
        "id": 1,
        "amount": 1200,
        "category_id": 2,
        "description": "Lunch",
        "transaction_date": MOMENT,
        "transaction_type": "expense",
        "created_at": MOMENT,
        "updated_at": MOMENT,
    }
    values.update(overrides)
    return Transaction(**values)


def create_payload(**overrides):
    payload = {
        "amount": 1200,
        "category_id": 2,
        "description": "Lunch",
        "transaction_date": "2026-01-15T10:30:00Z",
        "transaction_type": "expense",
    }
    payload.update(overrides)
    return payload


def test_resolved_type():
    assert make_transaction(transaction_type="INCOME").resolved_type() is TransactionType.INCOME
    assert make_transaction(transaction_type="other").resolved_type() is TransactionType.EXPENSE


def test_create_request_parses_date_as_utc():
    request = CreateTransactionRequest.from_dict(create_payload())
    assert request.transaction_date == MOMENT
    assert request.transaction_date.utcoffset() == timedelta(0)
    assert request.transaction_type is TransactionType.EXPENSE


def test_create_request_requires_offset():
    with pytest.raises(ValidationError) as excinfo:
        CreateTransactionRequest.from_dict(create_payload(transaction_date="2026-01-15T10:30:00"))
    assert "transaction_date" in excinfo.value.errors


def test_create_request_rejects_garbage_date():
    with pytest.raises(ValidationError):
        CreateTransactionRequest.from_dict(create_payload(transaction_date="yesterday"))


def test_create_request_rejects_capitalised_type():
    with pytest.raises(ValidationError):
        CreateTransactionRequest.from_dict(create_payload(transaction_type="Income"))


def test_create_request_amount_must_be_positive():
    with pytest.raises(ValidationError) as excinfo:
        CreateTransactionRequest.from_dict(create_payload(amount=0)).validate()
    assert excinfo.value.errors == {"amount": "Amount must be positive"}
    request = CreateTransactionRequest.from_dict(create_payload(amount=1))
    assert request.validate().amount == 1


def test_create_request_description_limit():
    ok = CreateTransactionRequest.from_dict(create_payload(description="d" * 500))
    assert ok.validate().description == "d" * 500
    with pytest.raises(ValidationError) as excinfo:
        CreateTransactionRequest.from_dict(create_payload(description="d" * 501)).validate()
    assert excinfo.value.errors == {"description": "Description must be at most 500 characters"}


def test_update_request_validate():
    assert UpdateTransactionRequest().validate().amount is None
    with pytest.raises(ValidationError):
        UpdateTransactionRequest(amount=-5).validate()


def test_update_apply_sets_fields_and_timestamp():
    original = make_transaction()
    later = MOMENT + timedelta(days=1)
    request = UpdateTransactionRequest.from_dict({"amount": 1500, "description": "Dinner"})
    updated = request.apply(original, later)
    assert updated.amount == 1500
    assert updated.description == "Dinner"
    assert updated.category_id == original.category_id
    assert updated.transaction_date == original.transaction_date
    assert updated.updated_at == later
    assert updated.created_at == original.created_at
    assert original.amount == 1200


def test_response_formats_date_only():
    response = TransactionResponse.from_transaction(make_transaction())
    assert response.transaction_date == "2026-01-15"
    assert datetime.fromisoformat(response.created_at) == MOMENT


def test_response_date_uses_utc():
    local = datetime(2026, 1, 15, 5, 0, tzinfo=timezone(timedelta(hours=9)))
    response = TransactionResponse.from_transaction(make_transaction(transaction_date=local))
    assert response.transaction_date == "2026-01-14"


def test_response_missing_id_and_to_dict():
    data = TransactionResponse.from_transaction(make_transaction(id=None)).to_dict()
    assert data["id"] == 0
    assert data["transaction_type"] == "expense"
    assert data["description"] == "Lunch"


def test_list_response_count():
    listing = TransactionListResponse.from_transactions(
        [make_transaction(id=1), make_transaction(id=2), make_transaction(id=3)]
    )
    assert listing.count == len(listing.results) == 3
    assert [item["id"] for item in listing.to_dict()["results"]] == [1, 2, 3]


def test_summary_totals():
    summary = TransactionSummary.from_transactions(
        [
            make_transaction(amount=300000, transaction_type="income"),
            make_transaction(amount=1200, transaction_type="expense"),
        ]
    )
    assert summary.total_income == 300000
    assert summary.total_expense == 1200
    assert summary.balance == summary.total_income - summary.total_expense
    assert summary.transaction_count == 2


def test_summary_unknown_type_counts_as_expense():
    summary = TransactionSummary.from_transactions([make_transaction(amount=50, transaction_type="gift")])
    assert summary.total_expense == 50
    assert summary.total_income == 0


def test_summary_empty():
    data = TransactionSummary.from_transactions([]).to_dict()
    assert data == {"total_income": 0, "total_expense": 0, "balance": 0, "transaction_count": 0}