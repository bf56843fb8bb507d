"""
Query pagination against a real (in-memory SQLite) database.

Checks that the database engine produces the same pages as the in-memory
engine for the same request.
"""

from datetime import datetime

import pytest
import pytest_asyncio
from sqlmodel import select

from paginator import (
    PageRequest,
    QuerySource,
    create_page,
    create_page_async,
    resolve_field,
)
from paginator.exceptions import CancellationError
from tests.mocks.entities import Author

RATINGS = [7, None, 3, 9, None, 1, 5, 8, 2, 6, 4, None]


@pytest_asyncio.fixture
async def seeded_session(db_session):
    """Session with a dozen authors, some without a rating."""
    for i, rating in enumerate(RATINGS, start=1):
        db_session.add(
            Author(
                id=i,
                name=f"author-{chr(ord('a') + (i * 7) % 12)}",
                rating=rating,
                date_created=datetime(2024, 1, i),
            )
        )
    await db_session.commit()
    return db_session


async def load_all(session) -> list[Author]:
    result = await session.exec(select(Author).order_by(Author.id))
    return list(result.all())


class TestEngineEquivalence:
    """The database and in-memory engines agree on every page."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("sort_field", ["name", "Rating", "date_created"])
    @pytest.mark.parametrize("ascending", [True, False])
    @pytest.mark.parametrize("page_number", [1, 2, 3, 4])
    async def test_same_pages(
        self, seeded_session, sort_field, ascending, page_number
    ):
        request = PageRequest(
            page_number=page_number,
            page_size=5,
            sort_field=sort_field,
            ascending=ascending,
        )
        everything = await load_all(seeded_session)

        expected = create_page(everything, request)
        actual = await create_page_async(
            QuerySource.for_model(seeded_session, Author), request
        )

        key = resolve_field(Author, sort_field)
        # Unrated authors tie, so compare sort keys rather than identities
        assert [key(a) for a in actual.items] == [
            key(a) for a in expected.items
        ]
        assert actual.total_count == expected.total_count == len(RATINGS)
        assert actual.page_count == expected.page_count == 3
        assert actual.has_next_page == expected.has_next_page
        assert actual.has_previous_page == expected.has_previous_page


class TestDatabasePagination:
    """Query pagination behaviour on a live session."""

    @pytest.mark.asyncio
    async def test_nulls_first_ascending(self, seeded_session):
        page = await create_page_async(
            QuerySource.for_model(seeded_session, Author),
            PageRequest(page_size=4, sort_field="rating", ascending=True),
        )

        assert [a.rating for a in page.items] == [None, None, None, 1]

    @pytest.mark.asyncio
    async def test_nulls_last_descending(self, seeded_session):
        page = await create_page_async(
            QuerySource.for_model(seeded_session, Author),
            PageRequest(
                page_number=3, page_size=4, sort_field="rating", ascending=False
            ),
        )

        assert [a.rating for a in page.items] == [1, None, None, None]

    @pytest.mark.asyncio
    async def test_filtered_query(self, seeded_session):
        query = select(Author).where(Author.rating >= 5)

        page = await create_page_async(
            QuerySource(seeded_session, query),
            PageRequest(page_size=2, sort_field="rating", ascending=True),
        )

        assert page.total_count == 5
        assert page.page_count == 3
        assert [a.rating for a in page.items] == [5, 6]

    @pytest.mark.asyncio
    async def test_page_past_the_end(self, seeded_session):
        page = await create_page_async(
            QuerySource.for_model(seeded_session, Author),
            PageRequest(page_number=10, page_size=5),
        )

        assert page.items == []
        assert page.total_count == 12
        assert page.has_previous_page is True
        assert page.has_next_page is False

    @pytest.mark.asyncio
    async def test_empty_table(self, db_session):
        page = await create_page_async(
            QuerySource.for_model(db_session, Author), PageRequest()
        )

        assert page.items == []
        assert page.total_count == 0
        assert page.page_count == 1

    @pytest.mark.asyncio
    async def test_mapped_column_accessor(self, seeded_session):
        page = await create_page_async(
            QuerySource.for_model(seeded_session, Author),
            PageRequest(page_size=3, ascending=False),
            accessor=Author.date_created,
        )

        assert [a.id for a in page.items] == [12, 11, 10]

    @pytest.mark.asyncio
    async def test_cancelled_before_start(self, seeded_session):
        import asyncio

        event = asyncio.Event()
        event.set()

        with pytest.raises(CancellationError):
            await create_page_async(
                QuerySource.for_model(seeded_session, Author),
                PageRequest(),
                cancel_event=event,
            )
