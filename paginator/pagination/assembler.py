import math
from collections.abc import Sequence
from typing import TypeVar

from paginator.schemas.response import PageResult

T = TypeVar("T")


def assemble_page(
    total_count: int,
    page_number: int,
    page_size: int,
    items: Sequence[T],
) -> PageResult[T]:
    """
    Combine a counted total and a materialized window into a PageResult.

    The page count is never below 1, even for an empty source. ``page_size``
    must already have been validated as positive.

    Args:
        total_count: Number of items in the whole source.
        page_number: Requested page number, echoed as-is.
        page_size: Requested page size, echoed as-is.
        items: Items of the requested page, already ordered.

    Returns:
        The immutable page result.
    """
    page_count = max(1, math.ceil(total_count / page_size))

    return PageResult(
        total_count=total_count,
        page_count=page_count,
        page_number=page_number,
        page_size=page_size,
        items=list(items),
    )
