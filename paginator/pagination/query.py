"""
Query pagination strategy (ordering, counting and windowing in the database).

Implements offset pagination over an SQLModel/SQLAlchemy ``Select``. The
source is never materialized: only the row count and the rows of the
requested page are read from the database.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, Select
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from paginator.exceptions import CancellationError, UntranslatableAccessorError
from paginator.logging import logger
from paginator.pagination.accessors import FieldAccessor
from paginator.pagination.assembler import assemble_page
from paginator.pagination.base import (
    SortAccessor,
    raise_if_cancelled,
    select_accessor,
    validate_page_geometry,
)
from paginator.pagination.query_builder import (
    build_count_query,
    build_page_query,
)
from paginator.pagination.resolver import SortKeyResolver
from paginator.schemas.request import PageRequest
from paginator.schemas.response import PageResult

T = TypeVar("T")


@dataclass(frozen=True)
class QuerySource(Generic[T]):
    """
    A query bound to the session that will execute it.

    Attributes:
        session: SQLModel async session used for the count and the fetch.
        query: Select built with ``sqlmodel.select`` and with any filters
            and eager loading already applied.
        model: Entity type used to resolve sort field names. Defaults to
            the first entity selected by ``query``.
    """

    session: AsyncSession
    query: Select[Any]
    model: type[T] | None = None

    @classmethod
    def for_model(
        cls, session: AsyncSession, model: type[T]
    ) -> "QuerySource[T]":
        """Source over every row of ``model``'s table."""
        return cls(session=session, query=select(model), model=model)

    @property
    def entity(self) -> type | None:
        """The entity type sort fields are resolved against."""
        if self.model is not None:
            return self.model
        descriptions = self.query.column_descriptions
        if not descriptions:
            return None
        entity = descriptions[0].get("entity")
        return entity if isinstance(entity, type) else None


def _order_clause(
    accessor: SortAccessor | None, ascending: bool
) -> ColumnElement[Any] | None:
    if accessor is None:
        return None
    if not isinstance(accessor, FieldAccessor):
        raise UntranslatableAccessorError(
            "Query pagination needs a FieldAccessor or mapped column to "
            f"order by, got {accessor!r}"
        )
    return accessor.order_by_clause(ascending)


async def _run_cancellable(
    operation_factory: Callable[[], Awaitable[T]],
    cancel_event: asyncio.Event | None,
) -> T:
    """
    Run the operation unless ``cancel_event`` fires first.

    Raises:
        CancellationError: If the event is set before or while waiting. The
            pending operation is cancelled.
    """
    raise_if_cancelled(cancel_event)
    if cancel_event is None:
        return await operation_factory()

    operation = asyncio.ensure_future(operation_factory())
    cancelled = asyncio.ensure_future(cancel_event.wait())
    try:
        done, _ = await asyncio.wait(
            {operation, cancelled}, return_when=asyncio.FIRST_COMPLETED
        )
    except asyncio.CancelledError:
        operation.cancel()
        raise
    finally:
        cancelled.cancel()

    if operation not in done:
        operation.cancel()
        # Let the operation unwind before reporting
        await asyncio.gather(operation, return_exceptions=True)
        raise CancellationError("Pagination was cancelled")

    return operation.result()


class QueryPaginationStrategy:
    """
    Offset pagination executed by the database.

    Pros:
    - Only the requested page crosses the database boundary
    - Ordering and counting can use indexes
    - Allows jumping to any page

    Cons:
    - Two round-trips (count, then fetch)
    - Count and fetch are independent reads; concurrent writes between
      them can make ``total_count`` and ``items`` disagree
    - O(n) performance for large offsets

    Example:
        ```python
        from paginator.pagination import QueryPaginationStrategy, QuerySource
        from sqlmodel import select

        async with async_session() as session:
            strategy = QueryPaginationStrategy()
            source = QuerySource(
                session, select(Author).where(Author.name.ilike("%John%"))
            )
            page = await strategy.paginate(
                source, PageRequest(page_number=2, sort_field="name")
            )
        ```
    """

    def __init__(self, resolver: SortKeyResolver | None = None):
        """
        Initialize query pagination strategy.

        Args:
            resolver: Resolver for request sort fields. Defaults to the
                shared resolver for the configured policy.
        """
        self.resolver = resolver

    async def paginate(
        self,
        source: QuerySource[T] | None,
        request: PageRequest | None = None,
        accessor: SortAccessor | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> PageResult[T]:
        """
        Count and fetch one page of ``source`` in the database.

        Args:
            source: Query and session. None yields an empty page.
            request: Page geometry and ordering. Defaults to PageRequest().
            accessor: Pre-resolved sort accessor or mapped column; bypasses
                name resolution. Must be translatable to SQL.
            cancel_event: When set before the count or the fetch completes,
                the pending statement is cancelled and no page is returned.

        Returns:
            The requested page.

        Raises:
            ArgumentError: If page size or page number is below 1.
            FieldNotFoundError: If the sort field cannot be resolved.
            UntranslatableAccessorError: If the accessor is not a column.
            CancellationError: If ``cancel_event`` is set before completion.
            SQLAlchemyError: If a database query fails.
        """
        request = request or PageRequest()
        validate_page_geometry(request)
        raise_if_cancelled(cancel_event)

        if source is None:
            return assemble_page(0, request.page_number, request.page_size, [])

        sort_key = select_accessor(
            request, accessor, source.entity, self.resolver
        )
        order_clause = _order_clause(sort_key, request.ascending)

        count_query = build_count_query(source.query)
        total_result = await _run_cancellable(
            lambda: source.session.exec(count_query), cancel_event
        )
        total = total_result.one()

        data_query = build_page_query(
            source.query, request.offset, request.page_size, order_clause
        )
        results = await _run_cancellable(
            lambda: source.session.exec(data_query), cancel_event
        )
        items = results.all()

        raise_if_cancelled(cancel_event)

        logger.debug(
            f"Query page {request.page_number} "
            f"(size {request.page_size}): {len(items)} of {total} items",
            extra={
                "strategy": "query",
                "page_number": request.page_number,
                "page_size": request.page_size,
                "total_count": total,
            },
        )
        return assemble_page(
            total, request.page_number, request.page_size, items
        )
