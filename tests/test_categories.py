from datetime import datetime, timedelta, timezone

import pytest

from kakeboor.categories import (
    Category,
    CategoryListResponse,
    CategoryResponse,
    CreateCategoryRequest,
    UpdateCategoryRequest,
)
from kakeboor.types import CategoryType, ValidationError

MOMENT = datetime(2026, 1, 15, 10, 30, tzinfo=timezone.utc)


def make_category(**overrides):
    values = {
        "id": 1,
        "name": "Food",
        "category_type": "expense",
        "icon": "cart",
        "color": "#FF5733",
        "created_at": MOMENT,
    }
    values.update(overrides)
    return Category(**values)


def test_resolved_type_parses_case_insensitively():
    assert make_category(category_type="Income").resolved_type() is CategoryType.INCOME


def test_resolved_type_falls_back_to_expense():
    assert make_category(category_type="mystery").resolved_type() is CategoryType.EXPENSE


def test_create_request_from_dict_and_validate():
    request = CreateCategoryRequest.from_dict({"name": "Salary", "category_type": "income"})
    assert request.validate() is request
    assert request.category_type is CategoryType.INCOME
    assert request.icon is None


def test_create_request_rejects_unknown_type():
    with pytest.raises(ValidationError):
        CreateCategoryRequest.from_dict({"name": "Salary", "category_type": "bonus"})


def test_create_request_empty_name():
    request = CreateCategoryRequest(name="", category_type=CategoryType.EXPENSE)
    with pytest.raises(ValidationError) as excinfo:
        request.validate()
    assert excinfo.value.errors == {"name": "Name must be between 1 and 100 characters"}


def test_create_request_name_length_limits():
    assert CreateCategoryRequest(name="x" * 100, category_type=CategoryType.EXPENSE).validate().name == "x" * 100
    with pytest.raises(ValidationError):
        CreateCategoryRequest(name="x" * 101, category_type=CategoryType.EXPENSE).validate()


def test_create_request_counts_characters_not_bytes():
    name = "食" * 100
    assert CreateCategoryRequest(name=name, category_type=CategoryType.EXPENSE).validate().name == name


def test_create_request_collects_all_errors():
    request = CreateCategoryRequest(
        name="Food", category_type=CategoryType.EXPENSE, icon="i" * 51, color="#FF57330"
    )
    with pytest.raises(ValidationError) as excinfo:
        request.validate()
    assert excinfo.value.errors == {
        "icon": "Icon must be at most 50 characters",
        "color": "Color must be at most 7 characters",
    }


def test_update_request_validate_optional_name():
    assert UpdateCategoryRequest().validate().name is None
    with pytest.raises(ValidationError):
        UpdateCategoryRequest(name="").validate()


def test_update_apply_only_changes_given_fields():
    original = make_category()
    updated = UpdateCategoryRequest.from_dict({"color": "#000000"}).apply(original)
    assert updated.color == "#000000"
    assert updated.name == original.name
    assert updated.icon == original.icon
    assert updated.category_type == original.category_type
    assert original.color == "#FF5733"


def test_response_from_category_missing_id_is_zero():
    response = CategoryResponse.from_category(make_category(id=None))
    assert response.id == 0


def test_response_created_at_rfc3339():
    response = CategoryResponse.from_category(make_category())
    assert response.created_at == "2026-01-15T10:30:00+00:00"


def test_response_created_at_round_trip_other_zone():
    moment = datetime(2026, 3, 1, 9, 0, 0, 123000, tzinfo=timezone(timedelta(hours=9)))
    response = CategoryResponse.from_category(make_category(created_at=moment))
    assert datetime.fromisoformat(response.created_at) == moment
    assert response.created_at.endswith("+00:00")


def test_response_to_dict():
    data = CategoryResponse.from_category(make_category(category_type="INCOME")).to_dict()
    assert data["category_type"] == "income"
    assert data["name"] == "Food"
    assert data["icon"] == "cart"


def test_list_response_count_matches_results():
    categories = [make_category(id=1), make_category(id=2, name="Rent")]
    listing = CategoryListResponse.from_categories(categories)
    assert listing.count == len(listing.results) == 2
    data = listing.to_dict()
    assert [item["id"] for item in data["results"]] == [1, 2]
    assert data["count"] == 2