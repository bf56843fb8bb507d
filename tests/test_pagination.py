"""
Tests for the create_page and create_page_async entry points.

Walks through the documented paging scenarios for both engines.
"""

import threading

import pytest

from paginator import (
    CancellationError,
    FieldNotFoundError,
    PageRequest,
    QuerySource,
    create_page,
    create_page_async,
    resolve_field,
)
from tests.mocks.entities import Author, Customer, Person, Tag
from tests.mocks.session_mocks import create_mock_session


class TestCreatePage:
    """Scenarios for in-memory pagination."""

    def test_natural_order_without_sort_field(self):
        page = create_page(
            ["b", "c", "a"],
            PageRequest(page_number=1, page_size=2, ascending=True),
        )

        assert page.items == ["b", "c"]
        assert page.total_count == 3
        assert page.page_count == 2
        assert page.has_next_page is True
        assert page.has_previous_page is False

    def test_sort_by_name(self):
        people = [Person(id=1, name="Bob"), Person(id=2, name="Amy")]

        page = create_page(
            people, PageRequest(sort_field="Name", ascending=True, page_size=10)
        )

        assert [p.name for p in page.items] == ["Amy", "Bob"]

    def test_sort_plain_class_by_name(self):
        customers = [Customer(id=1, name="Bob"), Customer(id=2, name="Amy")]

        page = create_page(
            customers,
            PageRequest(sort_field="Name", ascending=True, page_size=10),
        )

        assert [c.name for c in page.items] == ["Amy", "Bob"]

    def test_empty_source(self):
        page = create_page([])

        assert page.total_count == 0
        assert page.page_count == 1
        assert page.items == []

    def test_page_past_the_end(self):
        page = create_page([1, 2, 3], PageRequest(page_number=5))

        assert page.items == []
        assert page.has_next_page is False
        assert page.total_count == 3
        assert page.page_count == 1

    def test_unknown_sort_field(self):
        with pytest.raises(FieldNotFoundError) as exc_info:
            create_page([Tag(label="x")], PageRequest(sort_field="Bogus"))

        assert "Bogus" in str(exc_info.value)
        assert "Tag" in str(exc_info.value)

    def test_with_resolved_accessor(self):
        people = [Person(id=1, name="Bob"), Person(id=2, name="Amy")]
        accessor = resolve_field(Person, "name")

        page = create_page(people, PageRequest(ascending=True), accessor)

        assert [p.id for p in page.items] == [2, 1]

    def test_cancelled(self):
        event = threading.Event()
        event.set()

        with pytest.raises(CancellationError):
            create_page([1, 2], cancel_event=event)


class TestCreatePageAsync:
    """Scenarios for query pagination."""

    @pytest.mark.asyncio
    async def test_returns_page(self):
        authors = [Author(id=1, name="Amy"), Author(id=2, name="Bob")]
        session = create_mock_session(total=3, items=authors)

        page = await create_page_async(
            QuerySource.for_model(session, Author),
            PageRequest(page_size=2, sort_field="name", ascending=True),
        )

        assert page.items == authors
        assert page.total_count == 3
        assert page.page_count == 2
        assert page.has_next_page is True

    @pytest.mark.asyncio
    async def test_none_source(self):
        page = await create_page_async(None)

        assert page.items == []
        assert page.page_count == 1

    @pytest.mark.asyncio
    async def test_unknown_sort_field(self):
        session = create_mock_session(total=0, items=[])

        with pytest.raises(FieldNotFoundError):
            await create_page_async(
                QuerySource.for_model(session, Author),
                PageRequest(sort_field="Bogus"),
            )
