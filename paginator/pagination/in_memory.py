"""
In-memory pagination strategy.

Orders and windows fully materialized sequences. Best for data that is
already loaded (cached lists, API responses, computed collections) where the
whole source has to be traversed anyway to count it.
"""

from collections.abc import Iterable
from typing import Any, Callable, TypeVar

from paginator.logging import logger
from paginator.pagination.assembler import assemble_page
from paginator.pagination.base import (
    CancellationSignal,
    SortAccessor,
    raise_if_cancelled,
    select_accessor,
    validate_page_geometry,
)
from paginator.pagination.resolver import SortKeyResolver
from paginator.schemas.request import PageRequest
from paginator.schemas.response import PageResult

T = TypeVar("T")


def _nulls_first(accessor: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Wrap a sort key so None orders before every other value."""

    def key(item: Any) -> tuple[bool, Any]:
        value = accessor(item)
        return (value is not None, value)

    return key


class InMemoryPaginationStrategy:
    """
    Pagination over an iterable that is materialized in full.

    Ordering uses Python's stable sort, so items with equal sort keys keep
    their relative source order in both directions. None sort keys come first
    ascending and last descending.

    Example:
        ```python
        from paginator.pagination import InMemoryPaginationStrategy
        from paginator.schemas.request import PageRequest

        strategy = InMemoryPaginationStrategy()
        page = strategy.paginate_sync(
            authors, PageRequest(page_number=2, sort_field="name")
        )

        print(f"Page {page.page_number} of {page.page_count}")
        print(f"Total items: {page.total_count}")
        ```
    """

    def __init__(self, resolver: SortKeyResolver | None = None):
        """
        Initialize in-memory pagination strategy.

        Args:
            resolver: Resolver for request sort fields. Defaults to the
                shared resolver for the configured policy.
        """
        self.resolver = resolver

    def paginate_sync(
        self,
        source: Iterable[T] | None,
        request: PageRequest | None = None,
        accessor: SortAccessor | None = None,
        cancel_event: CancellationSignal | None = None,
        *,
        model: type | None = None,
    ) -> PageResult[T]:
        """
        Order and window ``source`` on the calling thread.

        Args:
            source: Items to paginate. None yields an empty page.
            request: Page geometry and ordering. Defaults to PageRequest().
            accessor: Pre-resolved sort accessor; bypasses name resolution.
            cancel_event: Checked on entry, before and after sorting.
            model: Type used to resolve ``request.sort_field``. Defaults to
                the type of the first item.

        Returns:
            The requested page. Pages past the end are empty.

        Raises:
            ArgumentError: If page size or page number is below 1.
            FieldNotFoundError: If the sort field cannot be resolved.
            CancellationError: If ``cancel_event`` is set.
        """
        request = request or PageRequest()
        validate_page_geometry(request)
        raise_if_cancelled(cancel_event)

        if source is None:
            return assemble_page(0, request.page_number, request.page_size, [])

        items = list(source)
        total = len(items)

        sample = items[0] if items else None
        if model is None and items:
            model = type(sample)
        sort_key = select_accessor(
            request, accessor, model, self.resolver, sample
        )

        raise_if_cancelled(cancel_event)
        if sort_key is not None:
            items = sorted(
                items,
                key=_nulls_first(sort_key),
                reverse=not request.ascending,
            )
        raise_if_cancelled(cancel_event)

        offset = request.offset
        window = items[offset : offset + request.page_size]

        logger.debug(
            f"In-memory page {request.page_number} "
            f"(size {request.page_size}): {len(window)} of {total} items",
            extra={
                "strategy": "in_memory",
                "page_number": request.page_number,
                "page_size": request.page_size,
                "total_count": total,
            },
        )
        return assemble_page(
            total, request.page_number, request.page_size, window
        )

    async def paginate(
        self,
        source: Iterable[T] | None,
        request: PageRequest | None = None,
        accessor: SortAccessor | None = None,
        cancel_event: CancellationSignal | None = None,
        *,
        model: type | None = None,
    ) -> PageResult[T]:
        """Coroutine form of paginate_sync(); runs without suspending."""
        return self.paginate_sync(
            source, request, accessor, cancel_event, model=model
        )
