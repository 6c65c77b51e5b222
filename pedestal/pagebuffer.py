"""Split a list of ids into fixed-size pages."""

from __future__ import annotations

from typing import Sequence


class PageBuffer:
    """Ids of a query result cut into pages of equal size."""

    def __init__(
        self, user_id: int, query_param: str, page_size: int, ids: Sequence[int]
    ) -> None:
        if page_size <= 0:
            raise ValueError(f"page size must be positive, got {page_size}")
        self.user_id = user_id
        self.query_param = query_param
        self.total = len(ids)
        self.pages = [list(ids[i : i + page_size]) for i in range(0, len(ids), page_size)]

    def get_page_ids(self, page_index: int) -> str:
        """Comma-separated ids of the given page."""
        if page_index < 0 or page_index >= len(self.pages):
            raise IndexError(
                f"page index {page_index} is out of range[0, {len(self.pages)}]"
            )
        page = self.pages[page_index]
        if not page:
            raise IndexError(f"page index {page_index} is empty")
        return ",".join(str(v) for v in page)