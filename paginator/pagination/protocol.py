"""
Protocol definition for pagination strategies.

Uses Python's structural subtyping (Protocol) to define the interface for
pagination strategies without requiring explicit inheritance.
"""

from typing import Any, Protocol, TypeVar

from paginator.pagination.base import SortAccessor
from paginator.schemas.request import PageRequest
from paginator.schemas.response import PageResult

T = TypeVar("T")


class PaginationStrategy(Protocol[T]):
    """
    Protocol for pagination strategies.

    Defines the interface that all pagination implementations must follow.
    Any class implementing the paginate() coroutine is considered compatible.

    Type Parameters:
        T: The type of the paginated items.

    Example:
        ```python
        class ReversedPaginationStrategy:
            async def paginate(
                self,
                source,
                request=None,
                accessor=None,
                cancel_event=None,
            ) -> PageResult[Author]:
                # Custom pagination logic
                ...


        # Type-checks as PaginationStrategy[Author]
        strategy: PaginationStrategy[Author] = ReversedPaginationStrategy()
        ```
    """

    async def paginate(
        self,
        source: Any,
        request: PageRequest | None = None,
        accessor: SortAccessor | None = None,
        cancel_event: Any = None,
    ) -> PageResult[T]:
        """
        Produce one page of ``source``.

        Args:
            source: The data source, or None for an empty page.
            request: Page geometry and ordering. Defaults to PageRequest().
            accessor: Pre-resolved sort accessor; bypasses name resolution.
            cancel_event: Cancellation signal observed while paginating.

        Returns:
            The requested page.

        Raises:
            ArgumentError: If page geometry is invalid.
            FieldNotFoundError: If the sort field cannot be resolved.
            CancellationError: If cancellation was requested.
        """
        ...
