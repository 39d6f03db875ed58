"""ArtworkService: fetches one page of artworks from the Art Institute of Chicago API.

Every call goes to the network. Pages are never cached or prefetched;
callers hold at most the page they are displaying.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any

import httpx
import pandas as pd

from ..core.pagination import Pagination

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.artic.edu/api/v1/artworks"
REQUEST_TIMEOUT = 15.0


class FetchError(Exception):
    """A page could not be fetched (transport, HTTP status or payload)."""

    def __init__(
        self,
        message: str,
        *,
        page: int | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.page = page
        self.status_code = status_code


@dataclass(frozen=True)
class Artwork:
    """One row of the table. Only ``id`` is used for selection."""

    id: int
    title: str
    place_of_origin: str | None = None
    artist_display: str | None = None
    inscriptions: str | None = None
    date_start: int | None = None
    date_end: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Artwork:
        if "id" not in data:
            raise ValueError("Artwork record has no 'id'.")
        return cls(
            id=int(data["id"]),
            title=data.get("title") or "",
            place_of_origin=data.get("place_of_origin"),
            artist_display=data.get("artist_display"),
            inscriptions=data.get("inscriptions"),
            date_start=data.get("date_start"),
            date_end=data.get("date_end"),
        )


ARTWORK_FIELDS = tuple(f.name for f in fields(Artwork))


@dataclass(frozen=True)
class PageResult:
    """One fetched page: records in display order plus server pagination."""

    records: tuple[Artwork, ...]
    pagination: Pagination

    @property
    def record_ids(self) -> list[int]:
        return [r.id for r in self.records]

    def to_frame(self) -> pd.DataFrame:
        """Records as a DataFrame, one row per record, in display order."""
        return pd.DataFrame(
            [
                {name: getattr(record, name) for name in ARTWORK_FIELDS}
                for record in self.records
            ],
            columns=list(ARTWORK_FIELDS),
        )


def parse_page(payload: Any) -> PageResult:
    """Parse an API response body into a PageResult."""
    if not isinstance(payload, dict):
        raise ValueError(f"Expected a JSON object, got {type(payload).__name__}.")
    if "pagination" not in payload or "data" not in payload:
        raise ValueError("Response must contain 'pagination' and 'data'.")
    pagination = Pagination.from_dict(payload["pagination"])
    records = tuple(Artwork.from_dict(item) for item in payload["data"])
    return PageResult(records=records, pagination=pagination)


class ArtworkService:
    """Async client for the paginated artworks endpoint.

    Usage::

        async with ArtworkService(limit=12) as service:
            result = await service.fetch_page(3)
            result.record_ids

    If *client* is None, a temporary AsyncClient is created per request.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        limit: int = 12,
        timeout: float = REQUEST_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url
        self.limit = limit
        self.timeout = timeout
        self._client = client

    async def __aenter__(self) -> ArtworkService:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _params(self, page: int) -> dict[str, Any]:
        return {
            "page": page,
            "limit": self.limit,
            "fields": ",".join(ARTWORK_FIELDS),
        }

    async def fetch_page(self, page: int) -> PageResult:
        """Fetch a single 1-based page.

        Raises FetchError on network failure, a non-2xx status or a
        malformed body. Never retries.
        """
        try:
            if self._client is not None:
                response = await self._client.get(
                    self.base_url, params=self._params(page), timeout=self.timeout,
                )
            else:
                async with httpx.AsyncClient() as tmp_client:
                    response = await tmp_client.get(
                        self.base_url, params=self._params(page), timeout=self.timeout,
                    )
        except httpx.HTTPError as e:
            logger.warning("Failed to fetch artworks page %d", page, exc_info=True)
            raise FetchError(
                f"Network error while loading page {page}: {e}", page=page,
            ) from e

        if not response.is_success:
            logger.warning(
                "Artworks API returned %d for page %d", response.status_code, page,
            )
            raise FetchError(
                f"HTTP error! status: {response.status_code}",
                page=page,
                status_code=response.status_code,
            )

        try:
            result = parse_page(response.json())
        except (ValueError, TypeError) as e:
            logger.warning("Malformed artworks payload for page %d", page, exc_info=True)
            raise FetchError(
                f"Malformed response for page {page}: {e}",
                page=page,
                status_code=response.status_code,
            ) from e

        logger.debug(
            "Fetched page %d: %d records of %d",
            page, len(result.records), result.pagination.total,
        )
        return result
