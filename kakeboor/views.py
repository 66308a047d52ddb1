"""HTTP API for categories, transactions and reports."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from flask import Blueprint, Flask, jsonify, request

from kakeboor.categories import (
    Category,
    CategoryListResponse,
    CategoryResponse,
    CreateCategoryRequest,
    UpdateCategoryRequest,
)
from kakeboor.database import Database, NotFoundError
from kakeboor.reports import category_report, monthly_report, yearly_report
from kakeboor.transactions import (
    CreateTransactionRequest,
    Transaction,
    TransactionListResponse,
    TransactionResponse,
    UpdateTransactionRequest,
)
from kakeboor.types import ValidationError


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _json_body() -> Any:
    data = request.get_json(force=True, silent=True)
    if data is None:
        raise ValidationError("request body must be a JSON document")
    return data


def _query_int(name: str, *, unsigned: bool = False) -> int | None:
    raw = request.args.get(name)
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(
            f"query parameter `{name}` must be an integer", {name: "Expected an integer"}
        ) from None
    if unsigned and value < 0:
        raise ValidationError(
            f"query parameter `{name}` must not be negative",
            {name: "Expected a non-negative integer"},
        )
    return value


def _not_found(kind: str, identifier: int) -> tuple[Any, int]:
    return jsonify({"error": f"{kind} with id {identifier} not found"}), 404


def _categories(database: Database) -> Blueprint:
    bp = Blueprint("categories", __name__)

    @bp.get("/", endpoint="categories_list")
    def list_categories() -> Any:
        response = CategoryListResponse.from_categories(database.list_categories())
        return jsonify(response.to_dict())

    @bp.get("/<int(signed=True):category_id>/", endpoint="categories_get")
    def get_category(category_id: int) -> Any:
        category = database.get_category(category_id)
        if category is None:
            return _not_found("Category", category_id)
        return jsonify(CategoryResponse.from_category(category).to_dict())

    @bp.post("/", endpoint="categories_create")
    def create_category() -> Any:
        payload = CreateCategoryRequest.from_dict(_json_body()).validate()
        category = Category(
            name=payload.name,
            category_type=payload.category_type.value,
            icon=payload.icon,
            color=payload.color,
            created_at=_now(),
        )
        created = database.create_category(category)
        return jsonify(CategoryResponse.from_category(created).to_dict()), 201

    @bp.put("/<int(signed=True):category_id>/", endpoint="categories_update")
    def update_category(category_id: int) -> Any:
        payload = UpdateCategoryRequest.from_dict(_json_body()).validate()
        category = database.get_category(category_id)
        if category is None:
            return _not_found("Category", category_id)
        updated = database.update_category(payload.apply(category))
        return jsonify(CategoryResponse.from_category(updated).to_dict())

    @bp.delete("/<int(signed=True):category_id>/", endpoint="categories_delete")
    def delete_category(category_id: int) -> Any:
        try:
            database.delete_category(category_id)
        except NotFoundError:
            return _not_found("Category", category_id)
        return "", 204

    return bp


def _transactions(database: Database) -> Blueprint:
    bp = Blueprint("transactions", __name__)

    @bp.get("/", endpoint="transactions_list")
    def list_transactions() -> Any:
        response = TransactionListResponse.from_transactions(database.list_transactions())
        return jsonify(response.to_dict())

    @bp.get("/<int(signed=True):transaction_id>/", endpoint="transactions_get")
    def get_transaction(transaction_id: int) -> Any:
        transaction = database.get_transaction(transaction_id)
        if transaction is None:
            return _not_found("Transaction", transaction_id)
        return jsonify(TransactionResponse.from_transaction(transaction).to_dict())

    @bp.post("/", endpoint="transactions_create")
    def create_transaction() -> Any:
        payload = CreateTransactionRequest.from_dict(_json_body()).validate()
        now = _now()
        transaction = Transaction(
            amount=payload.amount,
            category_id=payload.category_id,
            description=payload.description,
            transaction_date=payload.transaction_date,
            transaction_type=payload.transaction_type.value,
            created_at=now,
            updated_at=now,
        )
        created = database.create_transaction(transaction)
        return jsonify(TransactionResponse.from_transaction(created).to_dict()), 201

    @bp.put("/<int(signed=True):transaction_id>/", endpoint="transactions_update")
    def update_transaction(transaction_id: int) -> Any:
        payload = UpdateTransactionRequest.from_dict(_json_body()).validate()
        transaction = database.get_transaction(transaction_id)
        if transaction is None:
            return _not_found("Transaction", transaction_id)
        updated = database.update_transaction(payload.apply(transaction, _now()))
        return jsonify(TransactionResponse.from_transaction(updated).to_dict())

    @bp.delete("/<int(signed=True):transaction_id>/", endpoint="transactions_delete")
    def delete_transaction(transaction_id: int) -> Any:
        try:
            database.delete_transaction(transaction_id)
        except NotFoundError:
            return _not_found("Transaction", transaction_id)
        return "", 204

    return bp


def _reports(database: Database) -> Blueprint:
    bp = Blueprint("reports", __name__)

    @bp.get("/monthly/", endpoint="reports_monthly")
    def monthly() -> Any:
        year = _query_int("year")
        month = _query_int("month", unsigned=True)
        report = monthly_report(
            database.list_transactions(), database.list_categories(), year, month
        )
        return jsonify(report.to_dict())

    @bp.get("/yearly/", endpoint="reports_yearly")
    def yearly() -> Any:
        report = yearly_report(database.list_transactions(), _query_int("year"))
        return jsonify(report.to_dict())

    @bp.get("/by-category/", endpoint="reports_by_category")
    def by_category() -> Any:
        report = category_report(
            database.list_transactions(),
            database.list_categories(),
            request.args.get("start_date"),
            request.args.get("end_date"),
        )
        return jsonify(report.to_dict())

    return bp


def create_app(database: Database) -> Flask:
    """Build the web application serving the API under /api/."""
    app = Flask(__name__)
    app.json.sort_keys = False

    app.register_blueprint(_categories(database), url_prefix="/api/categories")
    app.register_blueprint(_transactions(database), url_prefix="/api/transactions")
    app.register_blueprint(_reports(database), url_prefix="/api/reports")

    @app.errorhandler(ValidationError)
    def _invalid(exc: ValidationError) -> Any:
        return jsonify({"error": str(exc), "errors": exc.errors}), 400

    @app.errorhandler(NotFoundError)
    def _missing(exc: NotFoundError) -> Any:
        return jsonify({"error": str(exc)}), 404

    return app