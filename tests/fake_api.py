"""Deterministic fake of the paginated artworks API used across tests."""

import math

PAGE_SIZE = 12
TOTAL_RECORDS = 120


def record_id(position: int) -> int:
    """Record ID for a global position (IDs are deliberately not positions)."""
    return 50_000 + 7 * position


def page_ids(page: int, page_size: int = PAGE_SIZE, total: int = TOTAL_RECORDS) -> list[int]:
    """Record IDs shown on a 1-based page."""
    start = (page - 1) * page_size
    end = min(start + page_size, total)
    return [record_id(p) for p in range(start, end)]


def make_payload(page: int, limit: int = PAGE_SIZE, total: int = TOTAL_RECORDS) -> dict:
    """Artworks API response body for one page."""
    data = [
        {
            "id": rid,
            "title": f"Artwork {rid}",
            "place_of_origin": "France" if rid % 2 else None,
            "artist_display": f"Artist {rid % 5}",
            "inscriptions": None,
            "date_start": 1800 + rid % 100,
            "date_end": 1810 + rid % 100,
        }
        for rid in page_ids(page, limit, total)
    ]
    return {
        "pagination": {
            "total": total,
            "limit": limit,
            "offset": (page - 1) * limit,
            "total_pages": math.ceil(total / limit),
            "current_page": page,
        },
        "data": data,
    }
