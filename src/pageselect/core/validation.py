"""Input validation with clear error messages for selection callers."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

import numpy as np


class InvalidBulkCount(ValueError):
    """A "select first N" count that is not a positive integer."""


def _preview(items: list) -> str:
    return f"{items[:5]}" + (f" (and {len(items) - 5} more)" if len(items) > 5 else "")


def validate_page(page: Any, page_size: Any) -> tuple[int, int]:
    """Validate a 1-based page number and a positive page size."""
    if not isinstance(page, (int, np.integer)) or isinstance(page, bool):
        raise TypeError(f"Page must be an integer, got {type(page).__name__}.")
    if not isinstance(page_size, (int, np.integer)) or isinstance(page_size, bool):
        raise TypeError(f"Page size must be an integer, got {type(page_size).__name__}.")
    if page < 1:
        raise ValueError(f"Pages are numbered from 1, got page {page}.")
    if page_size < 1:
        raise ValueError(f"Page size must be positive, got {page_size}.")
    return int(page), int(page_size)


def validate_page_ids(record_ids: Sequence, page_size: int) -> list:
    """Validate the identifier list of one displayed page.

    Returns the identifiers as a list, in display order.
    """
    ids = list(record_ids)
    if len(ids) > page_size:
        raise ValueError(
            f"A page holds at most {page_size} records, got {len(ids)}."
        )
    if len(set(ids)) != len(ids):
        seen: set = set()
        dupes = [x for x in ids if x in seen or seen.add(x)]
        raise ValueError(f"Record IDs on a page must be unique. Found duplicates: {_preview(dupes)}")
    return ids


def validate_checked_ids(checked_ids: Iterable, record_ids: Sequence) -> frozenset:
    """Validate that every checked identifier is displayed on the page."""
    checked = frozenset(checked_ids)
    unknown = checked.difference(record_ids)
    if unknown:
        raise ValueError(
            "Checked IDs must belong to the displayed page. "
            f"Not on this page: {_preview(sorted(unknown, key=repr))}"
        )
    return checked


def validate_bulk_count(count: Any) -> int:
    """Validate a "select first N" count."""
    if not isinstance(count, (int, np.integer)) or isinstance(count, bool):
        raise InvalidBulkCount(
            f"Bulk selection count must be an integer, got {type(count).__name__}."
        )
    if count < 1:
        raise InvalidBulkCount(
            f"Bulk selection count must be positive, got {count}."
        )
    return int(count)


def clamp_bulk_count(count: int, total_records: int) -> tuple[int, bool]:
    """Clamp a requested bulk count to the known collection size.

    Returns ``(count, clamped)`` where ``clamped`` tells whether the
    request exceeded ``total_records``.
    """
    count = validate_bulk_count(count)
    if total_records < 0:
        raise ValueError(f"Total records cannot be negative, got {total_records}.")
    if count > total_records:
        return int(total_records), True
    return count, False
