from math import ceil
from typing import Generic, Iterator, List, TypeVar

T = TypeVar("T")


class PagedList(Generic[T]):
    """One materialized page of results.

    total_count is whatever the query reported, which for the topic listings
    is the page's own item count capped at the amount the caller wants shown.
    """

    def __init__(self, items: List[T], page_index: int, page_size: int, total_count: int):
        self._items = list(items)
        self._page_index = page_index
        self._page_size = page_size
        self._total_count = total_count

    @property
    def items(self) -> List[T]:
        return list(self._items)

    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def total_count(self) -> int:
        return self._total_count

    @property
    def total_pages(self) -> int:
        if self._page_size <= 0:
            return 0
        return ceil(self._total_count / self._page_size)

    @property
    def has_previous_page(self) -> bool:
        return self._page_index > 1

    @property
    def has_next_page(self) -> bool:
        return self._page_index < self.total_pages

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __repr__(self) -> str:
        return (
            f"PagedList(page_index={self._page_index}, page_size={self._page_size}, "
            f"total_count={self._total_count}, items={len(self._items)})"
        )
