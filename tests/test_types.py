import pytest

from kakeboor.types import (
    CategoryInfo,
    CategoryListResponse,
    CategorySummaryInfo,
    CategoryType,
    MonthlyReportInfo,
    TransactionInfo,
    TransactionListResponse,
    TransactionType,
    ValidationError,
)


def test_category_type_parse_ignores_case():
    assert CategoryType.parse("INCOME") is CategoryType.INCOME
    assert CategoryType.parse("expense") is CategoryType.EXPENSE


def test_category_type_parse_rejects_unknown():
    with pytest.raises(ValidationError, match="Invalid category type: food"):
        CategoryType.parse("food")


def test_transaction_type_parse_and_reject():
    assert TransactionType.parse("Expense") is TransactionType.EXPENSE
    with pytest.raises(ValidationError, match="Invalid transaction type: gift"):
        TransactionType.parse("gift")


def test_enum_string_value():
    assert str(CategoryType.parse("Income")) == "income"
    assert f"{TransactionType.parse('EXPENSE')}" == "expense"
    for member in CategoryType:
        assert CategoryType.parse(str(member)) is member
    for member in TransactionType:
        assert TransactionType.parse(str(member)) is member


def test_category_info_from_dict():
    info = CategoryInfo.from_dict(
        {"id": 3, "name": "Food", "category_type": "expense", "icon": "cart", "color": "#FF5733"}
    )
    assert info.id == 3
    assert info.name == "Food"
    assert info.category_type is CategoryType.EXPENSE
    assert info.icon == "cart"
    assert info.color == "#FF5733"


def test_category_info_optional_fields_default_to_none():
    info = CategoryInfo.from_dict({"id": 1, "name": "Salary", "category_type": "income"})
    assert info.icon is None
    assert info.color is None


def test_category_info_type_is_case_sensitive():
    with pytest.raises(ValidationError) as excinfo:
        CategoryInfo.from_dict({"id": 1, "name": "Salary", "category_type": "Income"})
    assert "category_type" in excinfo.value.errors


def test_missing_field_reported():
    with pytest.raises(ValidationError) as excinfo:
        TransactionInfo.from_dict({"id": 1, "amount": 5})
    assert "category_id" in excinfo.value.errors


def test_bool_is_not_an_integer():
    with pytest.raises(ValidationError):
        CategorySummaryInfo.from_dict(
            {"category_id": True, "category_name": "Food", "total_amount": 1, "transaction_count": 1}
        )


def test_non_mapping_rejected():
    with pytest.raises(ValidationError):
        MonthlyReportInfo.from_dict([1, 2, 3])


def test_negative_month_rejected():
    with pytest.raises(ValidationError):
        MonthlyReportInfo.from_dict(
            {"year": 2026, "month": -1, "total_income": 0, "total_expense": 0, "net_balance": 0}
        )


def test_monthly_report_from_dict():
    report = MonthlyReportInfo.from_dict(
        {"year": 2026, "month": 1, "total_income": 300, "total_expense": 120, "net_balance": 180}
    )
    assert (report.year, report.month) == (2026, 1)
    assert report.net_balance == 180


def test_transaction_list_response_from_dict():
    payload = {
        "count": 1,
        "results": [
            {
                "id": 7,
                "amount": 1200,
                "category_id": 2,
                "description": "Lunch",
                "transaction_date": "2026-01-15",
                "transaction_type": "expense",
            }
        ],
    }
    response = TransactionListResponse.from_dict(payload)
    assert response.count == 1
    assert response.results[0].transaction_type is TransactionType.EXPENSE
    assert response.results[0].transaction_date == "2026-01-15"


def test_category_list_response_nested_error():
    with pytest.raises(ValidationError):
        CategoryListResponse.from_dict({"count": 1, "results": [{"id": 1}]})


def test_category_summary_from_dict():
    summary = CategorySummaryInfo.from_dict(
        {"category_id": 4, "category_name": "Unknown", "total_amount": 900, "transaction_count": 2}
    )
    assert summary.category_name == "Unknown"
    assert summary.transaction_count == 2