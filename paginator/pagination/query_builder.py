"""
Query building utilities for deferred pagination.

Builds the two statements a page needs, a count over the caller's query and
an ordered OFFSET/LIMIT window, so that both run inside the database.
"""

from typing import Any

from sqlalchemy import ColumnElement, Select
from sqlmodel import func, select


def build_count_query(query: Select[Any]) -> Select[Any]:
    """
    Wrap ``query`` in a ``SELECT count(*)`` subquery.

    Ordering is stripped from the inner query since it cannot change the
    count.

    Example:
        >>> build_count_query(select(Author).where(Author.name == "x"))
        # SELECT count(*) FROM (SELECT ... FROM author WHERE ...) AS anon_1
    """
    return select(func.count()).select_from(query.order_by(None).subquery())


def build_page_query(
    query: Select[Any],
    offset: int,
    limit: int,
    order_clause: ColumnElement[Any] | None = None,
) -> Select[Any]:
    """
    Apply ordering and the page window to ``query``.

    Args:
        query: The caller's query, with any filters already applied.
        offset: Number of rows to skip.
        limit: Maximum number of rows to return.
        order_clause: Replaces any ordering on ``query`` when given. When
            None, the query's own ordering (if any) is kept.

    Returns:
        The windowed query.
    """
    if order_clause is not None:
        query = query.order_by(None).order_by(order_clause)

    return query.offset(offset).limit(limit)
