"""Shared pydantic building blocks for request bodies and query strings."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator

from ..core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from .datetime_utils import to_local_naive
from .pagination import PageRequest
from .serialization import to_camel

LocalDateTime = Annotated[datetime, AfterValidator(to_local_naive)]
PositiveId = Annotated[int, Field(gt=0)]


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    def changes(self) -> dict[str, Any]:
        """Fields the client actually sent (nulls dropped), keyed by Python name."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ListQuery(ApiModel):
    page: int = Field(1, ge=1)
    limit: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    search: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _drop_blank(cls, data: Any) -> Any:
        # `?status=&search=` from HTML forms means "no filter".
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v not in ("", None)}
        return data

    def page_request(self) -> PageRequest:
        return PageRequest(page=self.page, limit=self.limit)
