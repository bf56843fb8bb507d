from paginator.constants import SortFieldPolicy
from paginator.exceptions import (
    ArgumentError,
    CancellationError,
    FieldNotFoundError,
    PaginationError,
    UntranslatableAccessorError,
)
from paginator.pagination import (
    FieldAccessor,
    QuerySource,
    SortKeyResolver,
    resolve_field,
)
from paginator.paging import create_page, create_page_async
from paginator.schemas.request import PageRequest
from paginator.schemas.response import PageResult

__all__ = [
    "create_page",
    "create_page_async",
    "resolve_field",
    "PageRequest",
    "PageResult",
    "QuerySource",
    "FieldAccessor",
    "SortKeyResolver",
    "SortFieldPolicy",
    # Exceptions
    "PaginationError",
    "ArgumentError",
    "UntranslatableAccessorError",
    "FieldNotFoundError",
    "CancellationError",
]
