from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from paginator.constants import FIRST_PAGE
from paginator.settings import app_settings


class PageRequest(BaseModel):  # type: ignore[misc]
    """
    Page geometry and ordering requested by a caller.

    Accepts both snake_case field names and camelCase aliases so the model
    can be bound from query strings or JSON payloads. Range checks on page
    number and page size are performed by the paging engines, not here.

    Example:
        >>> PageRequest(pageNumber=2, pageSize=10, sortField="name")
        PageRequest(page_number=2, page_size=10, ascending=False, sort_field='name')
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    page_number: int = FIRST_PAGE
    page_size: int = Field(
        default_factory=lambda: app_settings.DEFAULT_PAGE_SIZE
    )
    ascending: bool = Field(
        default_factory=lambda: app_settings.DEFAULT_ASCENDING
    )
    sort_field: str | None = None

    @field_validator("sort_field")
    @classmethod
    def blank_sort_field_is_none(cls, v: str | None) -> str | None:
        """Treat empty or whitespace-only field names as no ordering."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def offset(self) -> int:
        """Number of items before the first item of this page."""
        return (self.page_number - 1) * self.page_size
