# kakeboor

A household budget book served as a small JSON REST API. Record income and
expense categories, log transactions against them, and ask for monthly,
yearly or per-category summaries. A Python client for the API is included.

## Running the server

The server needs a settings file that provides a `secret_key` (see
[Settings](#settings)); without one it prints an error and exits with
status 1. A minimal `settings/base.toml` in the working directory:

```toml
secret_key = "secret"
```

Then start the development server:

```
kakeboor-runserver
```

It opens (creating if needed) the SQLite file `db.sqlite3`, makes sure the
`categories` and `transactions` tables exist, prints `Database tables ready.`,
and listens on `http://127.0.0.1:8000/`. Stop it with CONTROL-C.

Options:

- `--host` – address to listen on (default `127.0.0.1`)
- `--port` – port to listen on (default `8000`)
- `--database` – SQLite file to use (default `db.sqlite3`)

If the database cannot be opened, a warning is printed and the server keeps
running on an in-memory database.

## Endpoints

All bodies are JSON.

| Method | Path                                               | Purpose                     |
|--------|----------------------------------------------------|-----------------------------|
| GET    | `/api/categories/`                                 | list categories             |
| GET    | `/api/categories/{id}/`                            | one category                |
| POST   | `/api/categories/`                                 | create a category           |
| PUT    | `/api/categories/{id}/`                            | update name, icon or colour |
| DELETE | `/api/categories/{id}/`                            | delete a category           |
| GET    | `/api/transactions/`                               | list transactions           |
| GET    | `/api/transactions/{id}/`                          | one transaction             |
| POST   | `/api/transactions/`                               | record a transaction        |
| PUT    | `/api/transactions/{id}/`                          | update a transaction        |
| DELETE | `/api/transactions/{id}/`                          | delete a transaction        |
| GET    | `/api/reports/monthly/?year=&month=`               | totals for one month        |
| GET    | `/api/reports/yearly/?year=`                       | totals per month of a year  |
| GET    | `/api/reports/by-category/?start_date=&end_date=`  | totals per category         |

Lists come back as `{"count": n, "results": [...]}`. Category and transaction
types are `"income"` or `"expense"`. Amounts are whole yen and must be at
least 1.

Creating a category:

```json
{"name": "Food", "category_type": "expense", "icon": "cart", "color": "#FF5733"}
```

Recording a transaction (`transaction_date` is an ISO 8601 date-time and must
carry a UTC offset):

```json
{
  "amount": 1200,
  "category_id": 1,
  "description": "Lunch",
  "transaction_date": "2026-01-15T12:00:00Z",
  "transaction_type": "expense"
}
```

In responses `transaction_date` is given as `YYYY-MM-DD`, and `created_at` /
`updated_at` as RFC 3339 timestamps in UTC.

An update changes only the fields it carries: `name`, `icon` and `color` for
a category; `amount`, `category_id`, `description` and `transaction_date` for
a transaction (whose type cannot be changed).

Names are 1 to 100 characters, icons at most 50, colours at most 7, and
descriptions at most 500. A malformed or invalid body answers 400 with
`{"error": ..., "errors": {field: message}}`. A missing record answers 404
with an `{"error": ...}` body; a successful delete answers 204 with no body.

### Reports

- `monthly` and `yearly` default to the current UTC month and year.
  The monthly report splits its totals into `income_by_category` and
  `expense_by_category`; the yearly report always lists all twelve months in
  `monthly_summary`.
- `by-category` takes optional `start_date` and `end_date` as `YYYY-MM-DD`
  (both inclusive). A bound that cannot be parsed is ignored.

Transactions whose category does not exist are reported under the name
`"Unknown"`.

## Settings

`kakeboor.settings.get_settings(base_dir=None, environ=None)` builds a
`Settings` value in layers, later ones winning:

1. built-in defaults (`debug = false`, `language_code = "en-us"`,
   `time_zone = "UTC"`, `use_i18n`, `use_tz` and `append_slash` true,
   `default_auto_field = "BigAutoField"`);
2. environment variables starting with `REINHARDT_`, with the prefix removed
   and the rest lower-cased (so `REINHARDT_SECRET_KEY` sets `secret_key`);
3. `settings/base.toml` under the base directory (the current directory by
   default);
4. `settings/<profile>.toml`, where the profile comes from `REINHARDT_ENV`
   and defaults to `local`.

Missing files are skipped. `secret_key` must end up set, otherwise
`ValueError` is raised. Keys the `Settings` class does not know are kept in
its `extra` mapping.

## Using the API from Python

`kakeboor.client.ApiClient` talks to a running server:

```python
from kakeboor.client import ApiClient, format_amount

with ApiClient(base_url="http://127.0.0.1:8000") as api:
    for category in api.get_categories():
        print(category.id, category.name, category.category_type)

    created = api.create_transaction(
        1200, 1, "Lunch", "2026-01-15T12:00:00Z", "expense"
    )
    report = api.get_monthly_report(2026, 1)
    print("balance", format_amount(report.net_balance))
    api.delete_transaction(created.id)
```

`get_monthly_report()` without arguments asks for the current UTC month.
Failed requests and unreadable responses raise `kakeboor.client.ApiError`,
whose `status` holds the HTTP status when there was one. `format_amount`
inserts thousands separators and keeps the sign: `format_amount(-1234567)`
gives `"-1,234,567"`.

## Working without a server

- `kakeboor.database.Database` is the SQLite store the server uses; it is a
  context manager with `create_tables()` and list/get/create/update/delete
  methods for categories and transactions. Updating or deleting a missing
  record raises `NotFoundError`.
- `kakeboor.reports` has `monthly_report`, `yearly_report` and
  `category_report`, which work on plain lists of `Transaction` and
  `Category` objects and return `MonthlyReport`, `YearlyReport` and
  `CategoryReport`, each with a `to_dict()` for JSON output.
- `kakeboor.transactions.TransactionSummary.from_transactions` totals income,
  expense and balance over any set of transactions.
- `kakeboor.views.create_app(database)` returns the Flask application, for
  use under another WSGI server.

## What it does not do

- There are no web pages: the package serves the JSON API only, with no
  dashboard or transaction screens for a browser.
- There is no authentication or user separation; anyone who can reach the
  server can read and change every record.
- There are no schema migrations: tables are created if absent and never
  altered.
- The server is Flask's built-in development server, not meant for
  production use.

## Tests

Install the `test` extra and run `pytest` from the project directory.