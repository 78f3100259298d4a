from typing import Any

from faker import Faker

from enums import EntityKind

fake = Faker("en_US")


def envelope(data: Any) -> dict[str, Any]:
    return {"success": True, "data": data}


def page_envelope(
    kind: EntityKind,
    items: list[dict[str, Any]],
    total: int | None = None,
    page: int = 1,
    limit: int = 10,
    total_pages: int | None = None,
) -> dict[str, Any]:
    pagination: dict[str, Any] = {
        "total": len(items) if total is None else total,
        "page": page,
        "limit": limit,
    }
    if total_pages is not None:
        pagination["totalPages"] = total_pages
    return envelope({kind.items_key: items, "pagination": pagination})
