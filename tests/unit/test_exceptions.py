"""Tests for the pagination exception hierarchy."""

import pytest

from paginator.exceptions import (
    ArgumentError,
    CancellationError,
    FieldNotFoundError,
    PaginationError,
    UntranslatableAccessorError,
)


class TestArgumentError:
    """Test ArgumentError attributes and bases."""

    def test_carries_argument_name(self):
        ex = ArgumentError("page_size must be >= 1, got 0", "page_size")

        assert ex.argument == "page_size"
        assert str(ex) == "page_size must be >= 1, got 0"

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            raise ArgumentError("bad")

    def test_untranslatable_accessor_names_accessor(self):
        ex = UntranslatableAccessorError("cannot order by lambda")

        assert isinstance(ex, ArgumentError)
        assert ex.argument == "accessor"


class TestFieldNotFoundError:
    """Test FieldNotFoundError message and attributes."""

    def test_message_names_field_and_type(self):
        ex = FieldNotFoundError("Bogus", "Author")

        assert str(ex) == "Property 'Bogus' was not found on type 'Author'"
        assert ex.field_name == "Bogus"
        assert ex.type_name == "Author"

    def test_is_lookup_error(self):
        assert isinstance(FieldNotFoundError("a", "B"), LookupError)


class TestHierarchy:
    """Test that every error is a PaginationError."""

    @pytest.mark.parametrize(
        "ex",
        [
            ArgumentError("bad"),
            UntranslatableAccessorError("bad"),
            FieldNotFoundError("a", "B"),
            CancellationError("Pagination was cancelled"),
        ],
    )
    def test_pagination_error_base(self, ex):
        assert isinstance(ex, PaginationError)

    def test_cancellation_is_not_asyncio_cancellation(self):
        import asyncio

        assert not isinstance(
            CancellationError("cancelled"), asyncio.CancelledError
        )
