"""
Pagination strategies for in-memory sequences and database queries.

Both strategies share one algorithm (validate, resolve the sort accessor,
count, order, window, assemble) and differ only in where the work happens.

Example:
    Using the facade functions:
    ```python
    from paginator import PageRequest, create_page, create_page_async

    page = create_page(authors, PageRequest(sort_field="name"))

    page = await create_page_async(
        QuerySource.for_model(session, Author),
        PageRequest(page_number=2, sort_field="name", ascending=True),
    )
    ```

    Using strategies directly:
    ```python
    from paginator.pagination import QueryPaginationStrategy, QuerySource
    from sqlmodel import select

    strategy = QueryPaginationStrategy()
    page = await strategy.paginate(QuerySource(session, select(Author)))
    ```
"""

from paginator.pagination.accessors import (
    AccessorCache,
    FieldAccessor,
    accessor_cache,
)
from paginator.pagination.assembler import assemble_page
from paginator.pagination.factory import select_strategy
from paginator.pagination.in_memory import InMemoryPaginationStrategy
from paginator.pagination.protocol import PaginationStrategy
from paginator.pagination.query import QueryPaginationStrategy, QuerySource
from paginator.pagination.resolver import (
    SortKeyResolver,
    describe_type,
    get_resolver,
    resolve_field,
)

__all__ = [
    "AccessorCache",
    "FieldAccessor",
    "InMemoryPaginationStrategy",
    "PaginationStrategy",
    "QueryPaginationStrategy",
    "QuerySource",
    "SortKeyResolver",
    "accessor_cache",
    "assemble_page",
    "describe_type",
    "get_resolver",
    "resolve_field",
    "select_strategy",
]
