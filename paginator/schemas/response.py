from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field
from typing_extensions import Annotated

T = TypeVar("T")


class PageResult(BaseModel, Generic[T]):  # type: ignore[misc]
    """
    A single page of items with its page geometry.

    Instances are built by ``paginator.pagination.assembler.assemble_page``;
    the navigation flags are derived from the stored fields.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    total_count: Annotated[int, Field(ge=0)]
    page_count: Annotated[int, Field(ge=1)]
    page_number: int
    page_size: int
    items: list[T]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.page_count
