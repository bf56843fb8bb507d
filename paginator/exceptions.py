"""
Custom exception classes for the paginator package.

Every error raised by the paging engines derives from PaginationError so
callers can catch the whole family at once. Errors raised by the database
provider during deferred pagination are not wrapped and propagate unchanged.
"""


class PaginationError(Exception):
    """
    Base class for all pagination errors.
    """

    pass


class ArgumentError(PaginationError, ValueError):
    """
    Invalid pagination argument.

    Raised when page geometry is invalid (page size or page number below 1)
    or when an argument cannot be used by the selected engine.
    """

    def __init__(self, message: str, argument: str | None = None) -> None:
        super().__init__(message)
        self.argument = argument


class UntranslatableAccessorError(ArgumentError):
    """
    Sort accessor cannot be pushed down to the query provider.

    Raised by deferred pagination when the accessor is a plain Python
    callable or names an attribute that is not a mapped column.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, argument="accessor")


class FieldNotFoundError(PaginationError, LookupError):
    """
    Sort field does not exist on the entity type.

    Raised when the requested field name matches no public member of the
    type and no fallback field applies.
    """

    def __init__(self, field_name: str, type_name: str) -> None:
        super().__init__(
            f"Property '{field_name}' was not found on type '{type_name}'"
        )
        self.field_name = field_name
        self.type_name = type_name


class CancellationError(PaginationError):
    """
    Pagination was cancelled.

    Raised when the cancellation signal is observed before a page is
    produced. No partial result is returned.
    """

    pass
