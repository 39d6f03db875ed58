"""Page arithmetic: mapping (page, local index) to global position."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


def page_offset(page: int, page_size: int) -> int:
    """Global position of the first record on a 1-based page."""
    return (page - 1) * page_size


def global_position(page: int, page_size: int, local_index: int) -> int:
    """Global position of the record at local_index on a 1-based page."""
    return page_offset(page, page_size) + local_index


def page_positions(page: int, page_size: int, n: int) -> np.ndarray:
    """Global positions of the first n records on a page, in display order."""
    return page_offset(page, page_size) + np.arange(n, dtype=np.int64)


def total_pages(total_records: int, page_size: int) -> int:
    if total_records <= 0:
        return 0
    return math.ceil(total_records / page_size)


def page_window(current_page: int, n_pages: int, count: int = 5) -> list[int]:
    """Up to ``count`` consecutive page numbers centred on ``current_page``.

    The window slides to stay inside 1..n_pages, so the first and last
    pages still show ``count`` links.
    """
    if n_pages <= 0:
        return []
    count = min(count, n_pages)
    start = max(1, min(current_page - count // 2, n_pages - count + 1))
    return list(range(start, start + count))


@dataclass(frozen=True)
class Pagination:
    """Pagination block reported by the server alongside one page of records.

    Mirrors the remote JSON: ``total`` records, ``limit`` records per page,
    ``offset`` of the first record, ``total_pages`` and 1-based ``current_page``.
    """

    total: int
    limit: int
    offset: int
    total_pages: int
    current_page: int

    @classmethod
    def from_dict(cls, data: dict) -> Pagination:
        try:
            return cls(
                total=int(data["total"]),
                limit=int(data["limit"]),
                offset=int(data.get("offset", 0)),
                total_pages=int(data["total_pages"]),
                current_page=int(data["current_page"]),
            )
        except KeyError as e:
            raise ValueError(f"Pagination block is missing {e.args[0]!r}.") from None

    @property
    def page_size(self) -> int:
        return self.limit

    @property
    def first_position(self) -> int:
        """1-based number of the first record shown (0 when empty)."""
        if self.total == 0:
            return 0
        return page_offset(self.current_page, self.limit) + 1

    @property
    def last_position(self) -> int:
        """1-based number of the last record shown."""
        return min(self.current_page * self.limit, self.total)

    def report(self) -> str:
        return (
            f"Showing {self.first_position} to {self.last_position} "
            f"of {self.total} entries"
        )

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
            "total_pages": self.total_pages,
            "current_page": self.current_page,
        }
