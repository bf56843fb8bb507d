"""
Examples of paging in-memory collections and database queries.

This module shows how a list endpoint turns a bound PageRequest into a
PageResult with either engine.

Related:
- paginator/paging.py - create_page and create_page_async
- paginator/pagination/resolver.py - Sort field resolution
"""

import asyncio
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import Field, SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from paginator import (
    FieldNotFoundError,
    PageRequest,
    QuerySource,
    SortFieldPolicy,
    create_page,
    create_page_async,
    resolve_field,
)
from paginator.logging import logger, setup_logging


class Book(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    title: str
    year: int | None = None


@dataclass
class Release:
    id: int
    version: str


# Example 1: Page a list with a sort field taken from a query string
def list_releases_example(query_params: dict[str, str]) -> None:
    releases = [Release(1, "1.2.0"), Release(2, "1.10.0"), Release(3, "2.0")]
    request = PageRequest.model_validate(query_params)

    try:
        page = create_page(releases, request)
    except FieldNotFoundError as ex:
        logger.warning(f"Rejected sort field: {ex}")
        return

    logger.info(
        f"Page {page.page_number}/{page.page_count}: "
        f"{[r.version for r in page.items]}"
    )


# Example 2: Tolerate unknown sort fields by ordering by id instead
def tolerant_sort_example() -> None:
    accessor = resolve_field(Release, "released_on", SortFieldPolicy.FALLBACK)
    page = create_page(
        [Release(2, "b"), Release(1, "a")],
        PageRequest(ascending=True),
        accessor,
    )
    logger.info(f"Ordered by {accessor.attribute}: {page.items}")


# Example 3: Push ordering, counting and windowing to the database
async def list_books_example() -> None:
    engine = create_async_engine("sqlite+aiosqlite://")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSession(engine) as session:
        session.add_all(
            [Book(title=f"Book {i}", year=1990 + i) for i in range(30)]
        )
        await session.commit()

        source = QuerySource(session, select(Book).where(Book.year >= 2000))
        page = await create_page_async(
            source,
            PageRequest(pageNumber=2, pageSize=5, sortField="Year"),
        )

        logger.info(
            f"{page.total_count} books, page {page.page_number} of "
            f"{page.page_count}, has next: {page.has_next_page}"
        )

    await engine.dispose()


if __name__ == "__main__":
    setup_logging()
    list_releases_example({"pageSize": "2", "sortField": "version"})
    tolerant_sort_example()
    asyncio.run(list_books_example())
