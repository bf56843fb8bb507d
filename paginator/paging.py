import asyncio
from collections.abc import Iterable
from typing import TypeVar

from paginator.pagination.base import CancellationSignal, SortAccessor
from paginator.pagination.in_memory import InMemoryPaginationStrategy
from paginator.pagination.query import QueryPaginationStrategy, QuerySource
from paginator.schemas.request import PageRequest
from paginator.schemas.response import PageResult

T = TypeVar("T")


def create_page(
    source: Iterable[T] | None,
    request: PageRequest | None = None,
    accessor: SortAccessor | None = None,
    cancel_event: CancellationSignal | None = None,
    *,
    model: type | None = None,
) -> PageResult[T]:
    """
    Get one page of an in-memory sequence.

    Args:
        source (Iterable[T] | None): Items to paginate; None yields an empty page.
        request (PageRequest | None, optional): Page geometry and ordering. Defaults to PageRequest().
        accessor (SortAccessor | None, optional): Pre-resolved sort accessor, used instead of request.sort_field.
        cancel_event (CancellationSignal | None, optional): Event checked before and after sorting.
        model (type | None, optional): Type used to resolve request.sort_field. Defaults to the type of the first item.

    Returns:
        PageResult[T]: The requested page with total count and navigation flags.
    """
    return InMemoryPaginationStrategy().paginate_sync(
        source, request, accessor, cancel_event, model=model
    )


async def create_page_async(
    source: QuerySource[T] | None,
    request: PageRequest | None = None,
    accessor: SortAccessor | None = None,
    cancel_event: asyncio.Event | None = None,
) -> PageResult[T]:
    """
    Get one page of a database query, counting and windowing in the database.

    Args:
        source (QuerySource[T] | None): Query bound to its session; None yields an empty page.
        request (PageRequest | None, optional): Page geometry and ordering. Defaults to PageRequest().
        accessor (SortAccessor | None, optional): Pre-resolved accessor or mapped column, used instead of request.sort_field.
        cancel_event (asyncio.Event | None, optional): Setting it aborts the count or fetch in flight.

    Returns:
        PageResult[T]: The requested page with total count and navigation flags.
    """
    return await QueryPaginationStrategy().paginate(
        source, request, accessor, cancel_event
    )
