"""
Shared search, sort and pagination helpers for list endpoints.

Sort keys are restricted to an allow-list per endpoint. An unknown key never
reaches the database: the endpoint's fallback ordering is used instead and
the requested direction is ignored.
"""
from sqlalchemy import asc, desc, or_
from sqlalchemy.orm import Query


def order_clause(sort_by: str | None, descending: bool, allowed: dict, fallback):
    """Return the ORDER BY expression for ``sort_by`` or ``fallback``."""
    column = allowed.get(sort_by) if sort_by else None
    if column is None:
        return fallback
    return desc(column) if descending else asc(column)


def apply_search(query: Query, search: str | None, columns: list) -> Query:
    """Case-insensitive substring match on any of ``columns``."""
    if not search or not search.strip():
        return query
    pattern = f"%{search.strip()}%"
    return query.filter(or_(*[column.ilike(pattern) for column in columns]))


def paginate(query: Query, skip: int, limit: int) -> list:
    return query.offset(skip).limit(limit).all()
