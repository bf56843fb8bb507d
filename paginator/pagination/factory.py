"""
Strategy factory for selecting the appropriate pagination strategy.

Encapsulates the logic for choosing between in-memory and query pagination
based on the kind of source.
"""

from typing import Any

from paginator.pagination.in_memory import InMemoryPaginationStrategy
from paginator.pagination.protocol import PaginationStrategy
from paginator.pagination.query import QueryPaginationStrategy, QuerySource
from paginator.pagination.resolver import SortKeyResolver


def select_strategy(
    source: Any,
    resolver: SortKeyResolver | None = None,
) -> PaginationStrategy[Any]:
    """
    Select appropriate pagination strategy for ``source``.

    Decision logic:
    - QuerySource → QueryPaginationStrategy (pushed to the database)
    - anything else, including None → InMemoryPaginationStrategy

    Args:
        source: The data source to paginate.
        resolver: Resolver handed to the strategy for sort fields.

    Returns:
        Appropriate pagination strategy instance.

    Example:
        ```python
        strategy = select_strategy(QuerySource.for_model(session, Author))
        # Returns QueryPaginationStrategy

        strategy = select_strategy(["b", "c", "a"])
        # Returns InMemoryPaginationStrategy
        ```
    """
    if isinstance(source, QuerySource):
        return QueryPaginationStrategy(resolver)
    return InMemoryPaginationStrategy(resolver)
