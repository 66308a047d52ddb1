"""Household budget book: categories, transactions and reports over a JSON API, with a client."""

__version__ = "0.1.0"