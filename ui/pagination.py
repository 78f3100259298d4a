from dataclasses import dataclass

from constants import MAX_VISIBLE_PAGES
from schemas import PageResult


def page_window(
    current: int, total_pages: int, max_visible: int = MAX_VISIBLE_PAGES
) -> list[int]:
    """Page numbers shown between the prev and next buttons.

    The window holds at most `max_visible` pages, centred on `current` where
    possible and shifted to stay inside `[1, total_pages]`.

    Args:
        current: Current page (1-based).
        total_pages: Number of pages, at least 1.
        max_visible: Window width.

    Returns:
        Consecutive page numbers.

    """
    total_pages = max(total_pages, 1)
    if total_pages <= max_visible:
        return list(range(1, total_pages + 1))

    current = min(max(current, 1), total_pages)
    start = max(1, current - max_visible // 2)
    end = start + max_visible - 1
    if end > total_pages:
        end = total_pages
        start = end - max_visible + 1
    return list(range(start, end + 1))


@dataclass(frozen=True)
class PaginationView:
    page: int
    total_pages: int
    total_items: int
    page_size: int

    @classmethod
    def from_result(cls, result: PageResult) -> "PaginationView":
        return cls(
            page=result.page,
            total_pages=result.total_pages,
            total_items=result.total_items,
            page_size=result.page_size,
        )

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def pages(self) -> list[int]:
        return page_window(current=self.page, total_pages=self.total_pages)

    @property
    def summary(self) -> str:
        return f"{self.page_size} out of {self.total_items}"
