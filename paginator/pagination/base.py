"""
Shared paging steps used by the in-memory and query strategies.

Both strategies run the same algorithm: validate the page geometry, check
for cancellation, pick a sort accessor, count, order, window and assemble.
This module holds the steps that do not depend on where the data lives.
"""

from typing import Any, Callable, Protocol, Union

from sqlalchemy.orm import QueryableAttribute

from paginator.constants import FIRST_PAGE, MIN_PAGE_SIZE
from paginator.exceptions import ArgumentError, CancellationError
from paginator.pagination.accessors import FieldAccessor
from paginator.pagination.resolver import SortKeyResolver, get_resolver
from paginator.schemas.request import PageRequest

SortAccessor = Union[
    FieldAccessor, QueryableAttribute[Any], Callable[[Any], Any]
]


class CancellationSignal(Protocol):
    """
    Anything that reports whether cancellation was requested.

    ``threading.Event`` and ``asyncio.Event`` both satisfy this protocol.
    """

    def is_set(self) -> bool: ...


def validate_page_geometry(request: PageRequest) -> None:
    """
    Reject page sizes and page numbers below 1.

    Raises:
        ArgumentError: If the page size or page number is invalid.
    """
    if request.page_size < MIN_PAGE_SIZE:
        raise ArgumentError(
            f"page_size must be >= {MIN_PAGE_SIZE}, got {request.page_size}",
            argument="page_size",
        )
    if request.page_number < FIRST_PAGE:
        raise ArgumentError(
            f"page_number must be >= {FIRST_PAGE}, got {request.page_number}",
            argument="page_number",
        )


def raise_if_cancelled(cancel_event: CancellationSignal | None) -> None:
    """
    Raises:
        CancellationError: If ``cancel_event`` is set.
    """
    if cancel_event is not None and cancel_event.is_set():
        raise CancellationError("Pagination was cancelled")


def select_accessor(
    request: PageRequest,
    accessor: SortAccessor | None,
    model: type | None,
    resolver: SortKeyResolver | None = None,
    sample: Any = None,
) -> SortAccessor | None:
    """
    Pick the sort accessor for a page request.

    An explicit accessor wins and bypasses name resolution. Otherwise the
    request's sort field is resolved against ``model``. Without either, no
    ordering is applied.

    Args:
        request: The page request.
        accessor: Caller-supplied accessor, if any.
        model: Entity type used to resolve ``request.sort_field``. When it is
            None, no name resolution happens.
        resolver: Resolver to use. Defaults to the shared resolver for the
            configured policy.
        sample: An item of the source. Used only when it is an instance of
            ``model``, to find attributes assigned per instance.

    Returns:
        The accessor to order by, or None to keep source order.

    Raises:
        FieldNotFoundError: If the sort field cannot be resolved.
    """
    if accessor is not None:
        if isinstance(accessor, QueryableAttribute):
            return FieldAccessor.from_column(accessor)
        return accessor

    if request.sort_field is None or model is None:
        return None

    if not isinstance(sample, model):
        sample = None
    return (resolver or get_resolver()).resolve(
        model, request.sort_field, sample
    )
