import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from enums import AccountStatus, EntityKind

ALL_FILTER = "all"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ListQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    status_filter: str | None = Field(default=None, description="Tab status filter")
    search_text: str | None = Field(default=None, description="Free-text search")
    page: int = Field(default=1, description="Page number", ge=1)
    page_size: int = Field(default=10, description="Page size", ge=1)

    def to_params(self, kind: EntityKind) -> dict[str, Any]:
        """Build query string parameters for a list endpoint.

        Args:
            kind: Entity kind being listed.

        Returns:
            Query parameters, without keys whose value is unset.

        """
        if kind not in EntityKind.get_paginated():
            return {}

        params: dict[str, Any] = {"page": self.page, "limit": self.page_size}
        if self.search_text:
            params["search"] = self.search_text

        status = self.status_filter
        if not status or status == ALL_FILTER:
            return params

        if kind in (EntityKind.USERS, EntityKind.BANKS):
            is_active = {
                AccountStatus.ACTIVE: "true",
                AccountStatus.BLOCKED: "false",
            }.get(status)
            if is_active is not None:
                params["isActive"] = is_active
        else:
            params["status"] = status
        return params


class PageResult(BaseModel):
    items: list[dict[str, Any]] = Field(default_factory=list, description="Records")
    total_items: int = Field(default=0, description="Total records", ge=0)
    total_pages: int = Field(default=1, description="Total pages", ge=1)
    page: int = Field(default=1, description="Current page", ge=1)
    page_size: int = Field(default=10, description="Page size", ge=1)

    @classmethod
    def from_envelope(
        cls, data: Any, kind: EntityKind, query: ListQuery
    ) -> "PageResult":
        """Parse the `data` member of a list response.

        Args:
            data: Envelope `data` payload.
            kind: Entity kind, selects the key records are nested under.
            query: Query the page was requested with.

        Returns:
            Parsed page result.

        """
        payload = data if isinstance(data, dict) else {}
        items = [
            item for item in payload.get(kind.items_key) or [] if isinstance(item, dict)
        ]
        pagination = payload.get("pagination")
        if not isinstance(pagination, dict):
            return cls(
                items=items,
                total_items=len(items),
                total_pages=1,
                page=1,
                page_size=max(len(items), 1),
            )

        total_items = int(pagination.get("total") or 0)
        page_size = int(pagination.get("limit") or query.page_size)
        total_pages = pagination.get("totalPages") or pagination.get("pages")
        if not total_pages:
            total_pages = math.ceil(total_items / page_size)
        return cls(
            items=items,
            total_items=total_items,
            total_pages=max(int(total_pages), 1),
            page=int(pagination.get("page") or query.page),
            page_size=page_size,
        )
